"""
Specification tree model: view shapes, predicates and shape validators.

A specification node is a plain dict. Its shape is decided by the reserved
multi-view-only keys it carries:

- SINGLE: none of ``layer, hconcat, vconcat, concat, repeat, facet, spec``.
- LAYERED: carries ``layer`` (and no other multi-view-only key).
- MULTI: carries one of ``hconcat, vconcat, concat, repeat, facet, spec``.

Validators scan keys in the fixed order of MULTI_VIEW_ONLY_KEYS so the reported offending
key is deterministic, and raise SpecShapeError.

Examples:
    >>> from tucan.core.view import view_shape, ViewShape
    >>> view_shape({"mark": "point"}) is ViewShape.SINGLE
    True
    >>> view_shape({"layer": []}) is ViewShape.LAYERED
    True
    >>> view_shape({"vconcat": []}) is ViewShape.MULTI
    True
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from enum import Enum
from typing import Any

from .constants import MULTI_VIEW_ONLY_KEYS
from .errors import SpecShapeError

__all__ = [
    "ViewShape",
    "view_shape",
    "is_single_view",
    "is_layered_view",
    "is_multi_view",
    "validate_single_view",
    "validate_single_or_layered_view",
    "validate_layered_view",
    "CONCAT_KEYS",
]

# Keys holding a list of sub-views that grouping helpers may recurse into.
CONCAT_KEYS: tuple[str, ...] = ("hconcat", "vconcat", "concat")


class ViewShape(str, Enum):
    """Shape of a specification node."""

    SINGLE = "single"
    LAYERED = "layered"
    MULTI = "multi"


def view_shape(spec: Mapping[str, Any]) -> ViewShape:
    """
    Classify a specification node.

    Raises:
        SpecShapeError: If the node carries more than one multi-view-only key.
    """
    present = [key for key in MULTI_VIEW_ONLY_KEYS if key in spec]
    if not present:
        return ViewShape.SINGLE
    if len(present) > 1:
        raise SpecShapeError(
            f"a spec must define at most one of {list(MULTI_VIEW_ONLY_KEYS)}, got: {present}"
        )
    if present[0] == "layer":
        return ViewShape.LAYERED
    return ViewShape.MULTI


def is_single_view(spec: Mapping[str, Any]) -> bool:
    """True if none of the multi-view-only keys is defined."""
    return not any(key in spec for key in MULTI_VIEW_ONLY_KEYS)


def is_layered_view(spec: Mapping[str, Any]) -> bool:
    return "layer" in spec


def is_multi_view(spec: Mapping[str, Any]) -> bool:
    """True if any multi-view-only key (``layer`` included) is defined."""
    return not is_single_view(spec)


def validate_single_view(
    spec: Mapping[str, Any],
    caller: str,
    forbidden: Iterable[str] = MULTI_VIEW_ONLY_KEYS,
) -> None:
    """
    Ensure `spec` defines none of the `forbidden` keys.

    Args:
        spec (Mapping): Specification node.
        caller (str): Label of the calling operation, used as the error prefix.
        forbidden (Iterable[str]): Keys to reject, scanned in order.

    Raises:
        SpecShapeError: Naming the first forbidden key found.
    """
    for key in forbidden:
        if key in spec:
            raise SpecShapeError(
                f"{caller} expects a single view spec, multi view detected: {key} key is defined"
            )


def validate_single_or_layered_view(spec: Mapping[str, Any], caller: str) -> None:
    """Same as validate_single_view but permits ``layer``."""
    validate_single_view(
        spec, caller, tuple(key for key in MULTI_VIEW_ONLY_KEYS if key != "layer")
    )


def validate_layered_view(spec: Mapping[str, Any], caller: str) -> None:
    """
    Ensure `spec` is a layered view.

    Raises:
        SpecShapeError: "<caller> expected a layered view" (no prefix for an empty caller).
    """
    if "layer" not in spec:
        prefix = f"{caller} " if caller else ""
        raise SpecShapeError(f"{prefix}expected a layered view")
