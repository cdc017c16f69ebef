"""
Reserved specification keys and library-wide defaults.

This module is zero-IO and uses only the Python standard library.

Notes:
    - MULTI_VIEW_ONLY_KEYS is ordered; shape validators scan keys in this order so the
      reported offending key is deterministic.
    - METADATA_KEY is a private namespace on the root spec. It is stripped by the
      serializer (`tucan.export.to_spec`) and never reaches the grammar engine.
"""

from __future__ import annotations

from typing import Final

__all__ = [
    "MULTI_VIEW_ONLY_KEYS",
    "LAYER_FIELDS",
    "METADATA_KEY",
    "SCHEMA_KEY",
    "DEFAULT_FILL_OPACITY",
    "SHAPES",
]

MULTI_VIEW_ONLY_KEYS: Final[tuple[str, ...]] = (
    "layer",
    "hconcat",
    "vconcat",
    "concat",
    "repeat",
    "facet",
    "spec",
)

# Keys moved into the first layer when a single view gets promoted to a layered one.
LAYER_FIELDS: Final[tuple[str, ...]] = ("encoding", "mark")

METADATA_KEY: Final[str] = "__tucan__"

SCHEMA_KEY: Final[str] = "$schema"

DEFAULT_FILL_OPACITY: Final[float] = 0.5

# Point mark shapes supported by Vega-Lite.
SHAPES: Final[tuple[str, ...]] = (
    "circle",
    "square",
    "cross",
    "diamond",
    "triangle-up",
    "triangle-down",
    "triangle-right",
    "triangle-left",
)
