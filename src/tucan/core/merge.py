"""
Deep merge of nested option trees and small keyword-style helpers.

Merge semantics:
- When both sides hold a mapping for the same key, the mappings are merged recursively.
- In every other case the right-hand value wins outright. This includes lists (never
  merged element-wise), scalars, None and a mapping replaced by a scalar or vice versa.

Inputs are never mutated. Untouched subtrees of the left operand may be shared with the
result.

Examples:
    >>> from tucan.core.merge import deep_merge
    >>> deep_merge({"axis": {"title": "T"}}, {"axis": {"grid": False}})
    {'axis': {'title': 'T', 'grid': False}}
    >>> deep_merge({"scale": {"domain": [0, 1]}}, {"scale": {"domain": [5]}})
    {'scale': {'domain': [5]}}
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

__all__ = [
    "deep_merge",
    "put_new_conditionally",
    "merge_conditionally",
    "put_not_none",
]


def deep_merge(left: Mapping[str, Any] | None, right: Mapping[str, Any] | None) -> dict[str, Any]:
    """
    Recursively merge `right` into `left`, returning a new dict.

    Args:
        left (Mapping | None): Existing options; None is treated as empty.
        right (Mapping | None): Incoming partial options; None is treated as empty.

    Returns:
        dict[str, Any]: Merged options where `right` wins on every non-mapping conflict.
    """
    out: dict[str, Any] = dict(left or {})
    for key, value in (right or {}).items():
        current = out.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            out[key] = deep_merge(current, value)
        else:
            out[key] = value
    return out


def put_new_conditionally(
    opts: Mapping[str, Any], key: str, value: Any, predicate: Callable[[], bool]
) -> dict[str, Any]:
    """Set `key` to `value` unless already present, and only if `predicate()` holds."""
    out = dict(opts)
    if key in out:
        return out
    if predicate():
        out[key] = value
    return out


def merge_conditionally(
    left: Mapping[str, Any], right: Mapping[str, Any], predicate: Callable[[], bool]
) -> dict[str, Any]:
    """Shallow-merge `right` over `left` when `predicate()` holds."""
    if not predicate():
        return dict(left)
    return {**left, **right}


def put_not_none(opts: Mapping[str, Any], key: str, value: Any) -> dict[str, Any]:
    """Set `key` only when `value` is not None."""
    out = dict(opts)
    if value is not None:
        out[key] = value
    return out
