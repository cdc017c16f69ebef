from __future__ import annotations

import pytest

from tucan.core.errors import OptionsError, SpecShapeError
from tucan.transform import add_transform, aggregate, calculate, filter


def test_transforms_are_appended_in_order() -> None:
    spec = calculate({}, "datum.a * 2", "double_a")
    spec = filter(spec, "datum.double_a > 3")
    spec = aggregate(spec, "mean", "double_a", "mean_a", groupby=["b"])

    assert spec["transform"] == [
        {"calculate": "datum.a * 2", "as": "double_a"},
        {"filter": "datum.double_a > 3"},
        {"aggregate": [{"op": "mean", "field": "double_a", "as": "mean_a"}], "groupby": ["b"]},
    ]


def test_aggregate_without_groupby() -> None:
    assert aggregate({}, "count", "a", "n")["transform"] == [
        {"aggregate": [{"op": "count", "field": "a", "as": "n"}]}
    ]


def test_aggregate_invalid_operation() -> None:
    with pytest.raises(OptionsError, match="'operation'"):
        aggregate({}, "mode", "a", "n")


def test_add_transform_converts_keys() -> None:
    spec = add_transform({}, {"joinaggregate": [{"op": "sum", "field": "a", "as": "t"}], "group_by": ["g"]})
    assert spec["transform"][0]["groupBy"] == ["g"]


def test_filter_predicate_mapping() -> None:
    spec = filter({}, {"field": "a", "one_of": [1, 2]})
    assert spec["transform"] == [{"filter": {"field": "a", "oneOf": [1, 2]}}]


def test_transform_rejects_concat() -> None:
    with pytest.raises(SpecShapeError):
        calculate({"hconcat": []}, "1", "a")
