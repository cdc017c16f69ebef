"""
Multi-view composition.

The given plots are placed side by side (hconcat), stacked (vconcat) or wrapped in a
grid (concat). An optional base node carries properties shared by every sub-plot, for
example the data: sub-plots without data inherit it.

Examples:
    >>> from tucan.concat import hconcat
    >>> spec = hconcat([{"mark": {"type": "bar"}}, {"mark": {"type": "point"}}], base={"data": {"url": "a.csv"}})
    >>> spec["data"], len(spec["hconcat"])
    ({'url': 'a.csv'}, 2)
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from .core.layers import bare_layer
from .core.naming import to_vl
from .core.typing import Spec
from .core.view import validate_single_view

__all__ = ["hconcat", "vconcat", "concat"]


def _concat(
    key: Literal["hconcat", "vconcat", "concat"],
    plots: Sequence[Mapping[str, Any]],
    base: Mapping[str, Any] | None,
    opts: Mapping[str, Any],
) -> Spec:
    base = dict(base or {})
    validate_single_view(base, key)
    for name in ("mark", "encoding"):
        if name in base:
            raise ValueError(f"{key} expects a base spec without {name}, got: {base[name]!r}")

    out = {**base, **{k: v for k, v in to_vl(dict(opts)).items() if v is not None}}
    out[key] = [bare_layer(plot) for plot in plots]
    return out


def hconcat(
    plots: Sequence[Mapping[str, Any]], *, base: Mapping[str, Any] | None = None, **opts: Any
) -> Spec:
    """
    Concatenate plots horizontally.

    Args:
        plots: The sub-plots, left to right.
        base: Node holding the shared properties (e.g. data), without mark or encoding.
        **opts: Top-level properties of the concatenated view (e.g. spacing, title).

    Raises:
        SpecShapeError: If `base` is not a single view.
        ValueError: If `base` defines a mark or an encoding.
    """
    return _concat("hconcat", plots, base, opts)


def vconcat(
    plots: Sequence[Mapping[str, Any]], *, base: Mapping[str, Any] | None = None, **opts: Any
) -> Spec:
    """Concatenate plots vertically. See `hconcat`."""
    return _concat("vconcat", plots, base, opts)


def concat(
    plots: Sequence[Mapping[str, Any]],
    *,
    base: Mapping[str, Any] | None = None,
    columns: int | None = None,
    **opts: Any,
) -> Spec:
    """
    Concatenate plots in a grid, wrapping after `columns` plots.

    If `columns` is None the plots are placed in a single row.
    """
    return _concat("concat", plots, base, {**opts, "columns": columns})
