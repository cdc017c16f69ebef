"""
Lightweight typing aliases used across the core and the plot builders.

This module contains no runtime logic and is zero-IO.

Notes:
    - A specification node is a plain dict; no wrapper class is involved.
    - Channels and option keys may be given in snake_case; they are converted to the
      Vega-Lite camelCase wire keys by `tucan.core.naming`.

Examples:
    >>> from tucan.core.typing import Spec, ColumnType
    >>> def width_of(spec: Spec) -> int | None:
    ...     return spec.get("width")
    >>> width_of({"width": 100})
    100
"""

from __future__ import annotations

from typing import Any, Literal

__all__ = [
    "Spec",
    "ColumnType",
    "ColumnTypes",
    "Point",
    "Destination",
]

# One node of a Vega-Lite specification tree.
Spec = dict[str, Any]

ColumnType = Literal["nominal", "quantitative", "temporal", "time"]
ColumnTypes = dict[str, ColumnType | None]

# A cartesian point (x, y).
Point = tuple[float, float]

Destination = Literal["mark", "spec", "encoding"]
