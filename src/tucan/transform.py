"""
Data transformation helpers.

Transforms are appended, in call order, to the ``transform`` list of the root node.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from .core import options
from .core.naming import to_vl
from .core.typing import Spec
from .core.view import validate_single_or_layered_view

__all__ = ["add_transform", "aggregate", "calculate", "filter"]

_AGGREGATE_OPTS = options.take(
    [],
    extra={
        "operation": {
            "type": Literal[options.AGGREGATES],  # type: ignore[valid-type]
            "required": True,
            "doc": "The aggregation operation to apply.",
        },
        "field": {"type": str, "required": True, "doc": "The data field to aggregate."},
        "as_": {"type": str, "required": True, "doc": "The output field name."},
        "groupby": {
            "type": list[str],
            "doc": "The data fields to group by. If not set all rows form a single group.",
        },
    },
)
_AGGREGATE_SCHEMA = options.to_validation_schema(_AGGREGATE_OPTS)


def add_transform(spec: Spec, transform: Mapping[str, Any]) -> Spec:
    """Append a raw transform (keys converted to Vega-Lite keys)."""
    validate_single_or_layered_view(spec, "add_transform")
    return {**spec, "transform": [*spec.get("transform", []), to_vl(dict(transform))]}


def aggregate(
    spec: Spec,
    operation: str,
    field: str,
    as_: str,
    groupby: list[str] | None = None,
) -> Spec:
    """
    Append an aggregate transform.

    Args:
        operation: One of `tucan.core.options.AGGREGATES`.
        field: Field to aggregate.
        as_: Output field name.
        groupby: Optional grouping fields.

    Raises:
        OptionsError: On an invalid operation or missing field.

    Examples:
        >>> from tucan.transform import aggregate
        >>> aggregate({}, "mean", "price", "mean_price", groupby=["date"])["transform"]
        [{'aggregate': [{'op': 'mean', 'field': 'price', 'as': 'mean_price'}], 'groupby': ['date']}]
    """
    opts = {"operation": operation, "field": field, "as_": as_}
    if groupby is not None:
        opts["groupby"] = list(groupby)
    opts = _AGGREGATE_SCHEMA.validate(opts)

    transform: dict[str, Any] = {
        "aggregate": [{"op": opts["operation"], "field": opts["field"], "as": opts["as_"]}]
    }
    if "groupby" in opts:
        transform["groupby"] = opts["groupby"]
    return add_transform(spec, transform)


def calculate(spec: Spec, expr: str, as_: str) -> Spec:
    """Append a calculate transform evaluating the expression `expr` into `as_`."""
    return add_transform(spec, {"calculate": expr, "as": as_})


def filter(spec: Spec, predicate: str | Mapping[str, Any]) -> Spec:  # noqa: A001
    """Append a filter transform (an expression string or a predicate mapping)."""
    return add_transform(spec, {"filter": predicate})
