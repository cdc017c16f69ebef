"""
Layer composer: promotion of single views to layered views and layer insertion.

Operations
- to_layered(spec): strict single view only. Moves non-empty ``encoding``/``mark`` into a
  new first layer, leaving ``data`` and every other top-level key untouched.
- enlayer(spec): implicit promotion used before inserting peer layers. A layered spec is
  returned as is; otherwise ``encoding``/``mark`` (if any) become ``layer[0]``, or an
  empty ``layer`` list is created.
- append_layers / prepend_layers: accept one node or a sequence of nodes. Incoming layers
  are reduced to their bare form (``$schema`` and the metadata namespace dropped) and
  inserted after / before the existing layers. The order of the given layers is kept.

Examples:
    >>> from tucan.core.layers import append_layers, prepend_layers
    >>> base = {"layer": [{"mark": "a"}, {"mark": "b"}]}
    >>> [l["mark"] for l in append_layers(base, [{"mark": "c"}, {"mark": "d"}])["layer"]]
    ['a', 'b', 'c', 'd']
    >>> [l["mark"] for l in prepend_layers(base, [{"mark": "c"}, {"mark": "d"}])["layer"]]
    ['c', 'd', 'a', 'b']
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any, Literal

from .constants import LAYER_FIELDS, METADATA_KEY, SCHEMA_KEY
from .view import validate_single_or_layered_view, validate_single_view

__all__ = [
    "to_layered",
    "enlayer",
    "append_layers",
    "prepend_layers",
    "bare_layer",
]


def _split_layer_fields(spec: Mapping[str, Any]) -> tuple[dict[str, Any], dict[str, Any]]:
    layer = {k: spec[k] for k in LAYER_FIELDS if spec.get(k)}
    rest = {k: v for k, v in spec.items() if k not in LAYER_FIELDS}
    return layer, rest


def to_layered(spec: Mapping[str, Any]) -> dict[str, Any]:
    """
    Convert a single view into a layered view.

    Raises:
        SpecShapeError: If `spec` is already layered or a multi view.
    """
    validate_single_view(spec, "to_layered")
    layer, rest = _split_layer_fields(spec)
    return {**rest, "layer": [layer] if layer else []}


def enlayer(spec: Mapping[str, Any]) -> dict[str, Any]:
    """Promote `spec` to a layered view unless it already is one."""
    if "layer" in spec:
        return dict(spec)
    layer, rest = _split_layer_fields(spec)
    return {**rest, "layer": [layer] if layer else []}


def bare_layer(spec: Mapping[str, Any]) -> dict[str, Any]:
    """Drop root-only keys (``$schema`` and the metadata namespace) from a layer."""
    return {k: v for k, v in spec.items() if k not in (SCHEMA_KEY, METADATA_KEY)}


def _add_layers(
    spec: Mapping[str, Any],
    layers: Mapping[str, Any] | Sequence[Mapping[str, Any]],
    mode: Literal["append", "prepend"],
    caller: str,
) -> dict[str, Any]:
    validate_single_or_layered_view(spec, caller)

    if isinstance(layers, Mapping):
        layers = [layers]
    new_layers = [bare_layer(layer) for layer in layers]

    out = enlayer(spec)
    if mode == "append":
        out["layer"] = [*out["layer"], *new_layers]
    else:
        out["layer"] = [*new_layers, *out["layer"]]
    return out


def append_layers(
    spec: Mapping[str, Any], layers: Mapping[str, Any] | Sequence[Mapping[str, Any]]
) -> dict[str, Any]:
    """
    Append one or more layers to a single or layered view.

    Raises:
        SpecShapeError: If `spec` is a multi view.
    """
    return _add_layers(spec, layers, "append", "append_layers")


def prepend_layers(
    spec: Mapping[str, Any], layers: Mapping[str, Any] | Sequence[Mapping[str, Any]]
) -> dict[str, Any]:
    """
    Prepend one or more layers to a single or layered view.

    Raises:
        SpecShapeError: If `spec` is a multi view.
    """
    return _add_layers(spec, layers, "prepend", "prepend_layers")
