"""
Registry of common datasets used in demos and docs.

Each dataset name maps to a remote URL; data is never downloaded here, the URL is handed
to the grammar engine as ``data.url``.

Examples:
    >>> from tucan.datasets import dataset
    >>> dataset("cars")
    'https://vega.github.io/editor/data/cars.json'
"""

from __future__ import annotations

from typing import Final

from .core.errors import DatasetError

__all__ = ["DATASETS", "dataset", "list_datasets"]

DATASETS: Final[dict[str, str]] = {
    "iris": (
        "https://gist.githubusercontent.com/curran/a08a1080b88344b0c8a7/raw/"
        "0e7a9b0a5d22642a06d3d5b9bcbad9890c8ee534/iris.csv"
    ),
    "corruption": (
        "https://raw.githubusercontent.com/holtzy/The-Python-Graph-Gallery/master/"
        "static/data/corruption.csv"
    ),
    "cars": "https://vega.github.io/editor/data/cars.json",
    "gapminder": "https://vega.github.io/vega-datasets/data/gapminder-health-income.csv",
    "weather": "https://vega.github.io/editor/data/weather.csv",
    "stocks": "https://vega.github.io/editor/data/stocks.csv",
    "titanic": "https://raw.githubusercontent.com/datasciencedojo/datasets/master/titanic.csv",
    "penguins": "https://raw.githubusercontent.com/vega/vega-datasets/next/data/penguins.json",
    "flights": "https://raw.githubusercontent.com/mwaskom/seaborn-data/master/flights.csv",
    "tips": "https://raw.githubusercontent.com/mwaskom/seaborn-data/master/tips.csv",
    "ohlc": "https://vega.github.io/vega-datasets/data/ohlc.json",
}


def dataset(name: str) -> str:
    """
    Resolve a dataset name to its URL.

    Raises:
        DatasetError: If `name` is not a known dataset.
    """
    try:
        return DATASETS[name]
    except KeyError:
        raise DatasetError(
            f"invalid dataset {name!r}, supported: {sorted(DATASETS)}"
        ) from None


def list_datasets() -> list[str]:
    return sorted(DATASETS)
