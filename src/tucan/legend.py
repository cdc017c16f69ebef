"""
Legend configuration helpers.

Legends exist for the color, size and shape channels. Options are deep merged into the
``legend`` object of the channel encoding.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from .core.encoding import put_encoding_options
from .core.errors import OptionsError
from .core.typing import Spec

__all__ = [
    "LEGEND_CHANNELS",
    "LEGEND_ORIENTATIONS",
    "put_options",
    "set_title",
    "set_orientation",
    "set_enabled",
    "set_offset",
]

LEGEND_CHANNELS = ("color", "size", "shape")

LEGEND_ORIENTATIONS = (
    "left",
    "right",
    "top",
    "bottom",
    "top-left",
    "top-right",
    "bottom-left",
    "bottom-right",
    "none",
)


def _validate_inclusion(value: Any, allowed: Iterable[str], message: str) -> None:
    allowed = list(allowed)
    if value not in allowed:
        raise OptionsError(f"{message}, allowed: {allowed}, got: {value!r}")


def _put_legend_options(spec: Spec, channel: str, opts: dict[str, Any], caller: str) -> Spec:
    _validate_inclusion(channel, LEGEND_CHANNELS, f"{caller}: invalid legend channel")
    return put_encoding_options(spec, channel, {"legend": opts}, strict=True)


def put_options(spec: Spec, channel: str, **opts: Any) -> Spec:
    """
    Deep merge arbitrary options into the legend of `channel`.

    Examples:
        >>> from tucan.legend import put_options
        >>> spec = {"encoding": {"color": {"field": "a"}}}
        >>> put_options(spec, "color", label_font_size=14)["encoding"]["color"]["legend"]
        {'labelFontSize': 14}
    """
    return _put_legend_options(spec, channel, opts, "put_options")


def set_title(spec: Spec, channel: str, title: str | None, **opts: Any) -> Spec:
    """Sets the legend title; extra options style it (e.g. title_color)."""
    return _put_legend_options(spec, channel, {**opts, "title": title}, "set_title")


def set_orientation(spec: Spec, channel: str, orientation: str) -> Spec:
    """
    Sets the legend orientation with respect to the scene.

    Raises:
        OptionsError: On an invalid channel or orientation.
    """
    _validate_inclusion(orientation, LEGEND_ORIENTATIONS, "invalid legend orientation")
    return _put_legend_options(spec, channel, {"orient": orientation}, "set_orientation")


def set_enabled(spec: Spec, channel: str, enabled: bool) -> Spec:
    """Enables or disables the legend of `channel`."""
    _validate_inclusion(channel, LEGEND_CHANNELS, "set_enabled: invalid legend channel")
    if enabled:
        return put_encoding_options(spec, channel, {}, strict=True)
    return put_encoding_options(spec, channel, {"legend": None}, strict=True)


def set_offset(spec: Spec, channel: str, offset: int) -> Spec:
    """Sets the offset in pixels between the legend and the data rectangle."""
    return _put_legend_options(spec, channel, {"offset": offset}, "set_offset")
