"""
Scale configuration helpers.

Scales map a domain of data values to a range of visual values (pixels, colors, sizes).
Options are deep merged into the ``scale`` object of the channel encoding; every helper
raises ChannelNotFoundError if the channel is not encoded.

Color schemes
- Any of the Vega color schemes, grouped below by kind, e.g. ``"viridis"``.
- A list of colors, used as the color range.

Scale types
- quantitative channels: linear, pow, sqrt, symlog, log
- temporal channels: time, utc

Examples:
    >>> from tucan.scale import set_color_scheme
    >>> spec = {"encoding": {"color": {"field": "a"}}}
    >>> set_color_scheme(spec, "viridis", reverse=True)["encoding"]["color"]["scale"]
    {'scheme': 'viridis', 'reverse': True}
"""

from __future__ import annotations

from collections.abc import Sequence
from numbers import Number
from typing import Any, Final

from .core.encoding import encoding_options, put_encoding_options
from .core.errors import OptionsError
from .core.typing import Spec

__all__ = [
    "VALID_SCHEMES",
    "CONTINUOUS_SCALES",
    "TIME_SCALES",
    "put_options",
    "set_color_scheme",
    "set_scale",
    "set_x_scale",
    "set_y_scale",
    "set_domain",
    "set_x_domain",
    "set_y_domain",
    "set_xy_domain",
]

CATEGORICAL_SCHEMES: Final = (
    "accent",
    "category10",
    "category20",
    "category20b",
    "category20c",
    "dark2",
    "paired",
    "pastel1",
    "pastel2",
    "set1",
    "set2",
    "set3",
    "tableau10",
    "tableau20",
)

SEQUENTIAL_SINGLE_HUE_SCHEMES: Final = (
    "blues",
    "tealblues",
    "teals",
    "greens",
    "browns",
    "oranges",
    "reds",
    "purples",
    "warmgreys",
    "greys",
)

SEQUENTIAL_MULTI_HUE_SCHEMES: Final = (
    "viridis",
    "magma",
    "inferno",
    "plasma",
    "cividis",
    "turbo",
    "bluegreen",
    "bluepurple",
    "goldgreen",
    "goldorange",
    "goldred",
    "greenblue",
    "orangered",
    "purplebluegreen",
    "purpleblue",
    "purplered",
    "redpurple",
    "yellowgreenblue",
    "yellowgreen",
    "yelloworangebrown",
    "yelloworangered",
)

DARK_SCHEMES: Final = ("darkblue", "darkgold", "darkgreen", "darkmulti", "darkred")

LIGHT_SCHEMES: Final = (
    "lightgreyred",
    "lightgreyteal",
    "lightmulti",
    "lightorange",
    "lighttealblue",
)

DIVERGING_SCHEMES: Final = (
    "blueorange",
    "brownbluegreen",
    "purplegreen",
    "pinkyellowgreen",
    "purpleorange",
    "redblue",
    "redgrey",
    "redyellowblue",
    "redyellowgreen",
    "spectral",
)

CYCLICAL_SCHEMES: Final = ("rainbow", "sinebow")

VALID_SCHEMES: Final[tuple[str, ...]] = (
    *CATEGORICAL_SCHEMES,
    *SEQUENTIAL_SINGLE_HUE_SCHEMES,
    *SEQUENTIAL_MULTI_HUE_SCHEMES,
    *DARK_SCHEMES,
    *LIGHT_SCHEMES,
    *DIVERGING_SCHEMES,
    *CYCLICAL_SCHEMES,
)

CONTINUOUS_SCALES: Final = ("linear", "pow", "sqrt", "symlog", "log")
TIME_SCALES: Final = ("time", "utc")

# Extra options accepted per scale type.
_SCALE_OPTIONS: Final[dict[str, tuple[str, ...]]] = {
    "pow": ("exponent",),
    "log": ("base",),
    "symlog": ("constant",),
}


def put_options(spec: Spec, channel: str, **options: Any) -> Spec:
    """
    Deep merge arbitrary options into the scale of `channel`.

    Raises:
        ChannelNotFoundError: If `channel` is not encoded.
    """
    return put_encoding_options(spec, channel, {"scale": options}, strict=True)


def set_color_scheme(spec: Spec, scheme: str | Sequence[str], *, reverse: bool = False) -> Spec:
    """
    Sets the color scheme of the color encoding.

    Args:
        scheme: A Vega color scheme name, or a list of colors used as the range.
        reverse: Reverse the scheme. Ignored when a list of colors is given.

    Raises:
        OptionsError: If `scheme` is not a supported scheme name.
        ChannelNotFoundError: If there is no color encoding.
    """
    if isinstance(scheme, str):
        if scheme not in VALID_SCHEMES:
            raise OptionsError(
                f"invalid scheme {scheme!r}, check the tucan.scale docs for supported "
                "color schemes"
            )
        opts: dict[str, Any] = {"scheme": scheme}
        if reverse:
            opts["reverse"] = True
        return put_options(spec, "color", **opts)
    return put_options(spec, "color", range=list(scheme))


def set_scale(spec: Spec, channel: str, scale: str, **opts: Any) -> Spec:
    """
    Sets the scale type of a continuous channel.

    Quantitative channels accept linear, pow (``exponent``), sqrt, symlog (``constant``)
    and log (``base``); temporal channels accept time and utc.

    Raises:
        OptionsError: On an unsupported scale or options, or a scale not applicable to
            the channel type.
        ChannelNotFoundError: If `channel` is not encoded.
    """
    valid = (*CONTINUOUS_SCALES, *TIME_SCALES)
    if scale not in valid:
        raise OptionsError(f"scale can be one of {list(valid)}, got: {scale!r}")

    allowed = _SCALE_OPTIONS.get(scale, ())
    unknown = sorted(set(opts) - set(allowed))
    if unknown:
        raise OptionsError(
            f"unknown options {unknown} for the {scale} scale, allowed: {list(allowed)}"
        )

    channel_type = (encoding_options(spec, channel, strict=True) or {}).get("type")
    if channel_type not in ("quantitative", "temporal"):
        raise OptionsError(
            "a scale can be applied only on a quantitative or temporal encoding, "
            f"{channel} is defined as {channel_type!r}"
        )
    if channel_type == "temporal" and scale not in TIME_SCALES:
        raise OptionsError(
            f"{scale} cannot be applied on a temporal encoding, valid scales: {list(TIME_SCALES)}"
        )
    if channel_type == "quantitative" and scale not in CONTINUOUS_SCALES:
        raise OptionsError(
            f"{scale} cannot be applied on a quantitative encoding, "
            f"valid scales: {list(CONTINUOUS_SCALES)}"
        )
    return put_options(spec, channel, type=scale, **opts)


def set_x_scale(spec: Spec, scale: str, **opts: Any) -> Spec:
    return set_scale(spec, "x", scale, **opts)


def set_y_scale(spec: Spec, scale: str, **opts: Any) -> Spec:
    return set_scale(spec, "y", scale, **opts)


def set_domain(spec: Spec, channel: str, domain: Any) -> Spec:
    """Sets the scale domain of `channel`; any Vega-Lite domain value is accepted."""
    return put_options(spec, channel, domain=domain)


def _continuous_domain(spec: Spec, channel: str, min: float, max: float) -> Spec:  # noqa: A002
    for value in (min, max):
        if isinstance(value, bool) or not isinstance(value, Number):
            raise ValueError(f"a domain expects numbers, got: {value!r}")
    if min >= max:
        raise ValueError(
            f"a domain min value cannot be greater than the max value, got [{min}, {max}]"
        )
    return set_domain(spec, channel, [min, max])


def set_x_domain(spec: Spec, min: float, max: float) -> Spec:  # noqa: A002
    """Sets the x axis domain. Applicable on continuous scales."""
    return _continuous_domain(spec, "x", min, max)


def set_y_domain(spec: Spec, min: float, max: float) -> Spec:  # noqa: A002
    """Sets the y axis domain. Applicable on continuous scales."""
    return _continuous_domain(spec, "y", min, max)


def set_xy_domain(spec: Spec, min: float, max: float) -> Spec:  # noqa: A002
    """Sets the same domain on both the x and y axes."""
    return set_y_domain(set_x_domain(spec, min, max), min, max)
