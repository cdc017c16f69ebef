"""
Base specification constructors and generic plot helpers.

Plot data
- a URL or file path (contains ``://`` or ``/``, or has an extension)
  -> ``{"data": {"url": <string>}}``
- any other string is a dataset name from `tucan.datasets`
  -> ``{"data": {"url": <dataset url>}}``; unknown names raise DatasetError
- a specification dict -> used as is
- tabular data (rows, columns or a polars.DataFrame) -> inline ``data.values``, with the
  inferred column types cached in the metadata namespace

A mapping is treated as column-oriented data only if every value is a sized iterable
(list, range, polars.Series, ...) and none of its keys is a structural specification key;
every other mapping is a spec.

Examples:
    >>> from tucan.base import new, set_title
    >>> new("cars")["data"]
    {'url': 'https://vega.github.io/editor/data/cars.json'}
    >>> new([{"a": 1}])["__tucan__"]
    {'types': {'a': 'quantitative'}}
    >>> set_title({}, "A title", color="red")["title"]
    {'text': 'A title', 'color': 'red'}
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import PurePosixPath
from typing import Any

import polars as pl

from .config import get_settings
from .core.constants import METADATA_KEY, MULTI_VIEW_ONLY_KEYS, SCHEMA_KEY
from .core.data import infer_column_types, is_column, to_values
from .core.encoding import encode_field_raw, encode_recursive, put_in_spec, put_metadata
from .core.layers import append_layers
from .core.naming import to_vl
from .core.typing import Spec
from .core.view import validate_single_or_layered_view
from .datasets import dataset

__all__ = [
    "PlotData",
    "is_spec",
    "new",
    "data",
    "to_plot",
    "child_spec",
    "layers",
    "color_by",
    "shape_by",
    "fill_by",
    "size_by",
    "stroke_dash_by",
    "set_width",
    "set_height",
    "set_size",
    "set_title",
    "flip_axes",
    "maybe_zoomable",
]

logger = logging.getLogger(__name__)

PlotData = str | Mapping[str, Any] | Sequence[Mapping[str, Any]] | pl.DataFrame | None

_SPEC_KEYS = frozenset(
    {
        "data",
        "mark",
        "encoding",
        "transform",
        "params",
        "config",
        SCHEMA_KEY,
        METADATA_KEY,
        *MULTI_VIEW_ONLY_KEYS,
    }
)

_FLIPPED = {"x": "y", "y": "x", "x2": "y2", "y2": "x2", "xOffset": "yOffset", "yOffset": "xOffset"}


def is_spec(value: Any) -> bool:
    """True if `value` is a specification dict rather than column-oriented data."""
    if not isinstance(value, Mapping):
        return False
    if not value or any(key in _SPEC_KEYS for key in value):
        return True
    return not all(is_column(v) for v in value.values())


def _resolve_url(name: str) -> str:
    """Strings that look like a URL or a file path are used as is, others name a dataset."""
    if "://" in name or "/" in name or PurePosixPath(name).suffix:
        return name
    return dataset(name)


def data(spec: Spec, plotdata: PlotData) -> Spec:
    """
    Set the data source of `spec`.

    Tabular data is inlined; its inferred column types are stored in the metadata
    namespace unless type inference is disabled in the settings.
    """
    if plotdata is None:
        return dict(spec)
    if isinstance(plotdata, str):
        return {**spec, "data": {"url": _resolve_url(plotdata)}}

    values = to_values(plotdata)
    logger.debug("inlining %d data rows", len(values))
    out = {**spec, "data": {"values": values}}
    if get_settings().infer_types:
        types = infer_column_types(plotdata)
        if types is not None:
            out = put_metadata(out, "types", types)
    return out


def new(plotdata: PlotData = None, **opts: Any) -> Spec:
    """
    Create a new specification from `plotdata`.

    Args:
        plotdata: Dataset name, URL, tabular data, an existing spec, or None.
        **opts: Top-level properties (e.g. width, height, title); None values are skipped.
            A ``tucan`` mapping is stored verbatim as metadata.
    """
    metadata = opts.pop("tucan", None)

    spec = dict(plotdata) if is_spec(plotdata) else data({}, plotdata)

    settings = get_settings()
    if settings.default_width is not None:
        opts.setdefault("width", settings.default_width)
    if settings.default_height is not None:
        opts.setdefault("height", settings.default_height)

    for key, value in opts.items():
        if value is not None:
            spec = put_in_spec(spec, key, value)

    for key, value in (metadata or {}).items():
        spec = put_metadata(spec, key, value)
    return spec


def to_plot(plotdata: PlotData) -> Spec:
    """Return `plotdata` if it is already a spec, otherwise a new spec holding it."""
    if is_spec(plotdata):
        return dict(plotdata)  # type: ignore[arg-type]
    return new(plotdata)


def child_spec(spec: Spec) -> Spec:
    """A new empty node sharing the metadata (inferred column types) of `spec`."""
    if METADATA_KEY in spec:
        return {METADATA_KEY: spec[METADATA_KEY]}
    return {}


def layers(spec: Spec, new_layers: Spec | Sequence[Spec]) -> Spec:
    """Append one or more layers (see `tucan.core.layers.append_layers`)."""
    return append_layers(spec, new_layers)


## Grouping


def _encode_by(spec: Spec, channel: str, field: str, recursive: bool, opts: dict) -> Spec:
    if recursive:
        return encode_recursive(spec, channel, field, **opts)
    return encode_field_raw(spec, channel, field, **opts)


def color_by(spec: Spec, field: str, *, recursive: bool = False, **opts: Any) -> Spec:
    """
    Encode `field` on the color channel.

    With recursive=True the encoding is applied to every sub-view of a concatenated
    plot.
    """
    return _encode_by(spec, "color", field, recursive, opts)


def shape_by(spec: Spec, field: str, *, recursive: bool = False, **opts: Any) -> Spec:
    """Encode `field` on the shape channel."""
    return _encode_by(spec, "shape", field, recursive, opts)


def fill_by(spec: Spec, field: str, *, recursive: bool = False, **opts: Any) -> Spec:
    """Encode `field` on the fill channel."""
    return _encode_by(spec, "fill", field, recursive, opts)


def size_by(spec: Spec, field: str, *, recursive: bool = False, **opts: Any) -> Spec:
    """Encode `field` on the size channel."""
    return _encode_by(spec, "size", field, recursive, opts)


def stroke_dash_by(spec: Spec, field: str, *, recursive: bool = False, **opts: Any) -> Spec:
    """Encode `field` on the stroke dash channel."""
    return _encode_by(spec, "stroke_dash", field, recursive, opts)


## Layout


def set_width(spec: Spec, width: int) -> Spec:
    return put_in_spec(spec, "width", width)


def set_height(spec: Spec, height: int) -> Spec:
    return put_in_spec(spec, "height", height)


def set_size(spec: Spec, width: int, height: int) -> Spec:
    """Set both width and height."""
    return set_height(set_width(spec, width), height)


def set_title(spec: Spec, title: str, **opts: Any) -> Spec:
    """Set the plot title; extra keyword options style it (e.g. color, font_size)."""
    return put_in_spec(spec, "title", {"text": title, **to_vl(opts)})


def _flip_encoding(node: Mapping[str, Any]) -> dict[str, Any]:
    if "encoding" not in node:
        return dict(node)
    encoding = {_FLIPPED.get(k, k): v for k, v in node["encoding"].items()}
    return {**node, "encoding": encoding}


def flip_axes(spec: Spec) -> Spec:
    """
    Swap the x and y (x2/y2, x_offset/y_offset) encodings.

    Applies to a single view or to every layer (and the shared encoding) of a layered view.
    """
    validate_single_or_layered_view(spec, "flip_axes")
    out = _flip_encoding(spec)
    if "layer" in out:
        out["layer"] = [_flip_encoding(layer) for layer in out["layer"]]
    return out


def maybe_zoomable(spec: Spec, enabled: bool) -> Spec:
    """Add an interval selection bound to the scales, making the plot zoomable."""
    if not enabled:
        return spec
    param = {"name": "_grid", "select": "interval", "bind": "scales"}
    return {**spec, "params": [*spec.get("params", []), param]}
