"""
Grid lines configuration helpers.

Grid lines are axis properties, so every helper writes into the ``axis`` object of the x
or y channel. Except for `set_enabled` without a channel, they raise
ChannelNotFoundError if the channel is not encoded.
"""

from __future__ import annotations

from numbers import Number

from .core.encoding import put_encoding_options
from .core.typing import Spec

__all__ = ["set_enabled", "set_color", "set_opacity", "set_width", "set_dash_style"]


def _put_axis(spec: Spec, channel: str, **opts: object) -> Spec:
    return put_encoding_options(spec, channel, {"axis": opts}, strict=True)


def _check_positive_int(value: object, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{name} must be a positive integer, got: {value!r}")


def set_enabled(spec: Spec, enabled: bool, channel: str | None = None) -> Spec:
    """
    Enables or disables the grid lines.

    If `channel` is None the grid of both the x and y axes (those encoded) is set,
    otherwise only the grid of `channel`, which must be encoded.
    """
    if channel is not None:
        return _put_axis(spec, channel, grid=enabled)
    for axis in ("x", "y"):
        spec = put_encoding_options(spec, axis, {"axis": {"grid": enabled}})
    return spec


def set_color(spec: Spec, channel: str, color: str) -> Spec:
    return _put_axis(spec, channel, grid_color=color)


def set_opacity(spec: Spec, channel: str, opacity: float) -> Spec:
    """
    Sets the opacity of the grid lines, a number between 0 and 1.

    Raises:
        ValueError: If `opacity` is out of range.
    """
    if isinstance(opacity, bool) or not isinstance(opacity, Number) or not 0 <= opacity <= 1:
        raise ValueError(f"opacity must be a number between 0 and 1, got: {opacity!r}")
    return _put_axis(spec, channel, grid_opacity=opacity)


def set_width(spec: Spec, channel: str, width: int) -> Spec:
    """Sets the width of the grid lines in pixels (defaults to 1 if not set)."""
    _check_positive_int(width, "width")
    return _put_axis(spec, channel, grid_width=width)


def set_dash_style(spec: Spec, channel: str, stroke: int, space: int) -> Spec:
    """
    Sets the dash style of the grid.

    `stroke` and `space` are the alternating lengths in pixels of the dashes and the gaps.
    """
    _check_positive_int(stroke, "stroke")
    _check_positive_int(space, "space")
    return _put_axis(spec, channel, grid_dash=[stroke, space])
