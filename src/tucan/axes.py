"""
Axis configuration helpers.

Options are deep merged into the ``axis`` object of the channel encoding. Every helper
raises ChannelNotFoundError if the channel is not encoded.

Examples:
    >>> from tucan.axes import set_xy_titles
    >>> spec = {"encoding": {"x": {"field": "a"}, "y": {"field": "b"}}}
    >>> set_xy_titles(spec, "A", "B")["encoding"]["y"]
    {'field': 'b', 'axis': {'title': 'B'}}
"""

from __future__ import annotations

from typing import Any, Literal

from .core.encoding import put_encoding_options
from .core.errors import OptionsError
from .core.typing import Spec

__all__ = [
    "put_options",
    "set_title",
    "set_x_title",
    "set_y_title",
    "set_xy_titles",
    "set_enabled",
    "set_orientation",
]

Axis = Literal["x", "y"]

_ORIENTATIONS = {"x": ("top", "bottom"), "y": ("left", "right")}


def put_options(spec: Spec, channel: str, **options: Any) -> Spec:
    """
    Deep merge arbitrary options into the axis of `channel`.

    No validation of the options is performed.

    Raises:
        ChannelNotFoundError: If `channel` is not encoded.
    """
    return put_encoding_options(spec, channel, {"axis": options}, strict=True)


def set_title(spec: Spec, axis: Axis, title: str | None) -> Spec:
    return put_options(spec, axis, title=title)


def set_x_title(spec: Spec, title: str | None) -> Spec:
    return set_title(spec, "x", title)


def set_y_title(spec: Spec, title: str | None) -> Spec:
    return set_title(spec, "y", title)


def set_xy_titles(spec: Spec, x_title: str | None, y_title: str | None) -> Spec:
    """Sets the x and y axis titles at once."""
    return set_y_title(set_x_title(spec, x_title), y_title)


def set_enabled(spec: Spec, axis: Axis, enabled: bool) -> Spec:
    """Enables or disables the axis of the given channel."""
    if enabled:
        return put_encoding_options(spec, axis, {}, strict=True)
    return put_encoding_options(spec, axis, {"axis": None}, strict=True)


def set_orientation(spec: Spec, axis: Axis, orient: str) -> Spec:
    """
    Sets the orientation of an axis: "top"/"bottom" for x, "left"/"right" for y.

    Raises:
        OptionsError: On an invalid axis or orientation.
    """
    if axis not in _ORIENTATIONS:
        raise OptionsError(f"invalid axis {axis!r}, allowed: {list(_ORIENTATIONS)}")
    allowed = _ORIENTATIONS[axis]
    if orient not in allowed:
        raise OptionsError(
            f"invalid orientation for the {axis} axis, allowed: {list(allowed)}, got: {orient!r}"
        )
    return put_options(spec, axis, orient=orient)
