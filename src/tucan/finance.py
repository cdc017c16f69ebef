"""
Financial plots.
"""

from __future__ import annotations

from typing import Any

from .base import PlotData, layers, maybe_zoomable
from .core.naming import to_vl
from .core.options import GENERAL_MARK_OPTS, GLOBAL_OPTS
from .plots import base, documented, mark_props, schema, validate

__all__ = ["candlestick"]

_CANDLESTICK, _CANDLESTICK_SCHEMA = schema(
    [GLOBAL_OPTS, GENERAL_MARK_OPTS],
    {
        "color_gain": {
            "type": str,
            "default": "#06982d",
            "doc": "The color of the bars where the close price is higher than the open price.",
            "section": "style",
        },
        "color_loss": {
            "type": str,
            "default": "#ae1325",
            "doc": "The color of the bars where the close price is lower than the open price.",
            "section": "style",
        },
    },
)


@documented(_CANDLESTICK)
def candlestick(
    plotdata: PlotData,
    timestamp: str,
    open: str,  # noqa: A002
    high: str,
    low: str,
    close: str,
    **opts: Any,
) -> dict[str, Any]:
    """
    Returns the specification of a candlestick chart.

    A rule spans the low and high price of each period and a bar the open and close
    price, colored by whether the price went up or down.
    """
    opts = validate("candlestick", _CANDLESTICK_SCHEMA, opts)
    props = to_vl(mark_props(opts, _CANDLESTICK))

    x = {"field": timestamp, "type": "temporal"}

    rule = {
        "mark": {"type": "rule", **props},
        "encoding": {
            "x": x,
            "y": {"field": low, "type": "quantitative", "scale": {"zero": False}},
            "y2": {"field": high},
        },
    }
    bar = {
        "mark": {"type": "bar", **props},
        "encoding": {
            "x": x,
            "y": {"field": open, "type": "quantitative"},
            "y2": {"field": close},
            "color": {
                "condition": {
                    "test": f"datum.{open} < datum.{close}",
                    "value": opts["color_gain"],
                },
                "value": opts["color_loss"],
            },
        },
    }

    spec = base(plotdata, opts, _CANDLESTICK)
    spec = layers(spec, [rule, bar])
    return maybe_zoomable(spec, opts["zoomable"])

