"""
Conversion of Python-style option names to Vega-Lite wire keys.

Option names are written in lower_snake (``fill_opacity``, ``grid_color``) and the
grammar engine expects camelCase (``fillOpacity``, ``gridColor``). The conversion is
order-preserving and applies to mapping keys only; values are never renamed.

Notes:
    - Only keys that look like lower_snake identifiers are converted. Keys already in
      camelCase, private keys (``__tucan__``), ``$schema`` and dashed style names
      (``guide-label``) pass through unchanged.
    - Enum members are replaced by their ``.value``; tuples become lists.

Examples:
    >>> from tucan.core.naming import to_vl, to_vl_key
    >>> to_vl_key("stroke_dash")
    'strokeDash'
    >>> to_vl({"axis": {"grid_color": "red", "label_angle": 0}})
    {'axis': {'gridColor': 'red', 'labelAngle': 0}}
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from enum import Enum
from typing import Any

__all__ = [
    "to_vl_key",
    "to_vl",
    "snake_to_camel",
]

_SNAKE_RE = re.compile(r"^[a-z][a-z0-9]*(?:_[a-z0-9]+)+$")


def snake_to_camel(name: str) -> str:
    """Convert ``a_b_c`` to ``aBC``-style camelCase (first part lowercased)."""
    first, *rest = name.split("_")
    return first.lower() + "".join(part.capitalize() for part in rest)


def to_vl_key(key: str | Enum) -> str:
    """
    Convert a single option/channel name to its Vega-Lite key.

    Args:
        key (str | Enum): Option name; enum members are converted through their value.

    Returns:
        str: camelCase key for lower_snake names, the unchanged key otherwise.
    """
    if isinstance(key, Enum):
        key = str(key.value)
    if _SNAKE_RE.match(key):
        return snake_to_camel(key)
    return key


def to_vl(value: Any) -> Any:
    """
    Recursively convert mapping keys of an options value to Vega-Lite keys.

    Args:
        value (Any): Scalar, mapping or sequence of option values.

    Returns:
        Any: A new structure with converted keys. Inputs are not mutated.
    """
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Mapping):
        return {to_vl_key(k): to_vl(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_vl(v) for v in value]
    return value
