"""
Encoding option merger and raw encoding helpers.

All functions take a specification node (plain dict) and return a new node; inputs are
never mutated. Channel names and option keys are converted to Vega-Lite wire keys with
`tucan.core.naming.to_vl`.

Strict vs lenient:
- put_encoding_options(..., strict=False) silently skips nodes that do not encode the
  channel. With strict=True a ChannelNotFoundError is raised when no node touched by the
  operation encodes the channel.
- encoding_options(..., strict=True) raises instead of returning None.

Metadata:
- The root node may carry a private namespace (METADATA_KEY) holding inferred column
  types under "types". encode_field consults it to upgrade a default quantitative type
  to temporal. Metadata values are stored verbatim (no key conversion) since they are
  keyed by data column names.

Examples:
    >>> from tucan.core.encoding import encode_field_raw, put_encoding_options
    >>> spec = encode_field_raw({}, "x", "a", axis={"title": "T"})
    >>> put_encoding_options(spec, "x", {"axis": {"grid": False}})["encoding"]["x"]
    {'field': 'a', 'axis': {'title': 'T', 'grid': False}}
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from .constants import METADATA_KEY
from .errors import ChannelNotFoundError
from .merge import deep_merge
from .naming import to_vl, to_vl_key
from .view import (
    CONCAT_KEYS,
    validate_single_or_layered_view,
    validate_single_view,
)

__all__ = [
    "has_encoding",
    "encoding_options",
    "put_encoding_options",
    "encode_raw",
    "encode_field_raw",
    "encode_field",
    "encode",
    "encode_recursive",
    "drop_encoding_channels",
    "put_in_spec",
    "put_in_spec_new",
    "put_metadata",
    "get_metadata",
    "column_type",
]


def has_encoding(spec: Mapping[str, Any], channel: str) -> bool:
    """
    True if the single view `spec` encodes `channel`.

    Raises:
        SpecShapeError: If `spec` is not a single view.
    """
    validate_single_view(spec, "has_encoding")
    return to_vl_key(channel) in (spec.get("encoding") or {})


def encoding_options(
    spec: Mapping[str, Any], channel: str, *, strict: bool = False
) -> dict[str, Any] | None:
    """
    Return the configured options of `channel`, or None if it is not encoded.

    Args:
        spec (Mapping): Single view specification.
        channel (str): Encoding channel.
        strict (bool): Raise ChannelNotFoundError instead of returning None.
    """
    validate_single_view(spec, "encoding_options")
    opts = (spec.get("encoding") or {}).get(to_vl_key(channel))
    if opts is None and strict:
        raise ChannelNotFoundError(f"encoding for channel {channel} not found in the spec")
    return opts


def _put_single_layer(
    spec: dict[str, Any], channel: str, partial: dict[str, Any]
) -> tuple[dict[str, Any], bool]:
    validate_single_view(spec, "put_encoding_options")
    encoding = spec.get("encoding") or {}
    key = to_vl_key(channel)
    if key not in encoding:
        return spec, False
    new_encoding = dict(encoding)
    new_encoding[key] = deep_merge(encoding[key], partial)
    return {**spec, "encoding": new_encoding}, True


def put_encoding_options(
    spec: Mapping[str, Any],
    channel: str,
    opts: Mapping[str, Any],
    *,
    strict: bool = False,
) -> dict[str, Any]:
    """
    Deep-merge `opts` into the options of `channel`.

    The input must be a single view or a layered view. For a layered view the options are
    applied to every layer encoding `channel` and to the shared top-level encoding if it
    encodes `channel`.

    Args:
        spec (Mapping): Single or layered specification.
        channel (str): Encoding channel, e.g. "x" or "stroke_dash".
        opts (Mapping): Partial channel options (snake_case keys accepted).
        strict (bool): Raise if no node encodes `channel`.

    Returns:
        dict: A new specification.

    Raises:
        SpecShapeError: If `spec` is a multi view (or a layer is not a single view).
        ChannelNotFoundError: In strict mode, when the channel is nowhere encoded.
    """
    validate_single_or_layered_view(spec, "put_encoding_options")
    partial = to_vl(dict(opts))

    if "layer" not in spec:
        out, touched = _put_single_layer(dict(spec), channel, partial)
    else:
        touched = False
        layers = []
        for layer in spec["layer"]:
            new_layer, hit = _put_single_layer(layer, channel, partial)
            layers.append(new_layer)
            touched = touched or hit

        top = {k: v for k, v in spec.items() if k != "layer"}
        top, hit = _put_single_layer(top, channel, partial)
        touched = touched or hit
        out = {**top, "layer": layers}

    if strict and not touched:
        raise ChannelNotFoundError(f"encoding for channel {channel} not found in the spec")
    return out


def encode_raw(spec: Mapping[str, Any], channel: str, opts: Mapping[str, Any]) -> dict[str, Any]:
    """Set (replace) the options of `channel` on a single view."""
    validate_single_view(spec, "encode_raw")
    encoding = dict(spec.get("encoding") or {})
    encoding[to_vl_key(channel)] = to_vl(dict(opts))
    return {**spec, "encoding": encoding}


def encode_field_raw(
    spec: Mapping[str, Any], channel: str, field: str, **opts: Any
) -> dict[str, Any]:
    """Encode `field` on `channel` with the given options, replacing existing options."""
    validate_single_view(spec, "encode_field_raw")
    return encode_raw(spec, channel, {"field": field, **opts})


def column_type(spec: Mapping[str, Any], field: str) -> str | None:
    """Inferred type of `field` from the metadata namespace, if any."""
    types = get_metadata(spec, "types") or {}
    return types.get(field)


def encode_field(
    spec: Mapping[str, Any],
    channel: str,
    field: str,
    opts: Mapping[str, Any],
    **extra: Any,
) -> dict[str, Any]:
    """
    Encode `field` on `channel` merging builder defaults with user overrides.

    User overrides are taken from ``opts[channel]`` and deep-merged over `extra`, so they
    always win. When the field was inferred as temporal (or time) and the builder default
    type is quantitative, the default is upgraded to temporal; an explicit user type is
    never overridden.

    Args:
        spec (Mapping): Single view specification.
        channel (str): Encoding channel.
        field (str): Data field.
        opts (Mapping): Validated plot options, possibly holding per-channel overrides.
        **extra: Builder defaults for this channel (e.g. type="quantitative").
    """
    overrides = opts.get(channel) or {}

    if column_type(spec, field) in ("temporal", "time") and extra.get("type") == "quantitative":
        extra = {**extra, "type": "temporal"}

    merged = deep_merge(to_vl(extra), to_vl(dict(overrides)))
    return encode_field_raw(spec, channel, field, **merged)


def encode(
    spec: Mapping[str, Any], channel: str, opts: Mapping[str, Any], **extra: Any
) -> dict[str, Any]:
    """Encode `channel` without a field (e.g. a count aggregate or a condition)."""
    overrides = opts.get(channel) or {}
    merged = deep_merge(to_vl(extra), to_vl(dict(overrides)))
    return encode_raw(spec, channel, merged)


def encode_recursive(
    spec: Mapping[str, Any], channel: str, field: str, **opts: Any
) -> dict[str, Any]:
    """
    Encode `field` on `channel` on every single view leaf of a concatenated tree.

    Concatenation keys (hconcat, vconcat, concat) are traversed at any depth; every other
    node is encoded directly.
    """
    for key in CONCAT_KEYS:
        if key in spec:
            return {
                **spec,
                key: [encode_recursive(sub, channel, field, **opts) for sub in spec[key]],
            }
    return encode_field_raw(spec, channel, field, **opts)


def drop_encoding_channels(spec: Mapping[str, Any], channels: str | Iterable[str]) -> dict[str, Any]:
    """Drop one or more channels; the encoding key is removed once empty."""
    validate_single_view(spec, "drop_encoding_channels")
    if isinstance(channels, str):
        channels = [channels]
    dropped = {to_vl_key(c) for c in channels}

    encoding = {k: v for k, v in (spec.get("encoding") or {}).items() if k not in dropped}
    out = {k: v for k, v in spec.items() if k != "encoding"}
    if encoding:
        out["encoding"] = encoding
    return out


def put_in_spec(spec: Mapping[str, Any], key: str, value: Any) -> dict[str, Any]:
    """Set `key` on the node, replacing any existing value."""
    return {**spec, to_vl_key(key): to_vl(value)}


def put_in_spec_new(spec: Mapping[str, Any], key: str, value: Any) -> dict[str, Any]:
    """Set `key` on the node only if it is not already defined."""
    vl_key = to_vl_key(key)
    if vl_key in spec:
        return dict(spec)
    return {**spec, vl_key: to_vl(value)}


def put_metadata(spec: Mapping[str, Any], key: str, value: Any) -> dict[str, Any]:
    """Store `value` under `key` in the private metadata namespace (overwrites)."""
    metadata = dict(spec.get(METADATA_KEY) or {})
    metadata[key] = value
    return {**spec, METADATA_KEY: metadata}


def get_metadata(spec: Mapping[str, Any], key: str, default: Any = None) -> Any:
    return (spec.get(METADATA_KEY) or {}).get(key, default)
