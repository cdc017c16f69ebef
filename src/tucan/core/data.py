"""
Column type inference and conversion of tabular inputs to inline values.

Accepted tabular inputs
- Row-oriented: a sequence of mappings (``[{"x": 1, "y": 2}, ...]``).
- Column-oriented: a mapping of column name to a sized iterable of values (list, tuple,
  range, polars.Series, ...). All columns must have the same length.
- A ``polars.DataFrame``.

Inference rules (first non-None sample per column decides):
- date / datetime (naive or aware)      -> "temporal"
- time                                  -> "time"
- ISO-8601 date or date-time string     -> "temporal"
- ISO-8601 time string                  -> "time"
- bool                                  -> "nominal"
- number                                -> "quantitative"
- other string, Enum member             -> "nominal"
- anything else (lists, dicts, ...)     -> None

Notes:
    - Empty input (no rows, or only empty columns), or a first row without fields,
      yields None for the whole mapping.
    - Row data uses only the fields of the first row. Fields that appear only in later
      rows are not inferred.
    - Inference never raises for unknown kinds.

Examples:
    >>> import datetime as dt
    >>> from tucan.core.data import infer_column_types
    >>> infer_column_types([{"date": dt.date(2020, 1, 1), "n": 3}])
    {'date': 'temporal', 'n': 'quantitative'}
    >>> infer_column_types([{}]) is None
    True
"""

from __future__ import annotations

import datetime as dt
import re
from collections.abc import Mapping, Sequence
from enum import Enum
from numbers import Number
from typing import Any

import polars as pl

from .typing import ColumnType, ColumnTypes

__all__ = [
    "infer_column_types",
    "infer_value_type",
    "is_column",
    "is_tabular",
    "to_values",
]

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_DATETIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}[T ]\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?(?:Z|[+-]\d{2}:?\d{2})?$"
)
_TIME_RE = re.compile(r"^\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?$")


def infer_value_type(value: Any) -> ColumnType | None:
    """Classify a single sample value."""
    if isinstance(value, (dt.date, dt.datetime)):
        return "temporal"
    if isinstance(value, dt.time):
        return "time"
    if isinstance(value, bool):
        return "nominal"
    if isinstance(value, Number):
        return "quantitative"
    if isinstance(value, str):
        if _DATE_RE.match(value) or _DATETIME_RE.match(value):
            return "temporal"
        if _TIME_RE.match(value):
            return "time"
        return "nominal"
    if isinstance(value, Enum):
        return "nominal"
    return None


def _first_not_none(values: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return None


def is_column(value: Any) -> bool:
    """True for a sized iterable of values (list, range, polars.Series, array, ...)."""
    if isinstance(value, (str, bytes, Mapping)):
        return False
    return hasattr(value, "__len__") and hasattr(value, "__iter__")


def _infer_polars(df: pl.DataFrame) -> ColumnTypes | None:
    if df.width == 0 or df.height == 0:
        return None

    types: ColumnTypes = {}
    for name, dtype in df.schema.items():
        if dtype == pl.Time:
            types[name] = "time"
        elif dtype in (pl.Date, pl.Datetime):
            types[name] = "temporal"
        elif dtype == pl.Boolean:
            types[name] = "nominal"
        elif dtype.is_numeric():
            types[name] = "quantitative"
        elif dtype in (pl.Categorical, pl.Enum):
            types[name] = "nominal"
        elif dtype == pl.String:
            types[name] = infer_value_type(_first_not_none(df.get_column(name).drop_nulls()))
        else:
            types[name] = None
    return types


def infer_column_types(data: Any) -> ColumnTypes | None:
    """
    Infer a semantic type per column of a tabular input.

    Args:
        data: Row-oriented sequence of mappings, column-oriented mapping, or a
            polars.DataFrame.

    Returns:
        dict[str, ColumnType | None] | None: Per-column tags, or None for empty data.
    """
    if isinstance(data, pl.DataFrame):
        return _infer_polars(data)

    if isinstance(data, Mapping):
        if not data or all(is_column(v) and len(v) == 0 for v in data.values()):
            return None
        return {
            str(name): infer_value_type(_first_not_none(values))
            for name, values in data.items()
        }

    if isinstance(data, Sequence) and not isinstance(data, (str, bytes)):
        if not data or not isinstance(data[0], Mapping) or not data[0]:
            return None
        fields = list(data[0].keys())
        return {
            str(name): infer_value_type(_first_not_none(row.get(name) for row in data))
            for name in fields
        }

    return None


def is_tabular(data: Any) -> bool:
    """True for inputs accepted by infer_column_types / to_values."""
    if isinstance(data, (pl.DataFrame, Mapping)):
        return True
    return isinstance(data, Sequence) and not isinstance(data, (str, bytes))


def to_values(data: Any) -> list[dict[str, Any]]:
    """
    Convert any accepted tabular input to a list of row dicts for inline ``data.values``.

    Column-oriented data is zipped row by row.

    Raises:
        ValueError: If the columns of column-oriented data differ in length.
    """
    if isinstance(data, pl.DataFrame):
        return data.to_dicts()
    if isinstance(data, Mapping):
        names = [str(k) for k in data.keys()]
        try:
            return [dict(zip(names, row)) for row in zip(*data.values(), strict=True)]
        except ValueError:
            lengths = {name: len(values) for name, values in zip(names, data.values())}
            raise ValueError(f"columns must have the same length, got {lengths}") from None
    return [dict(row) for row in data]
