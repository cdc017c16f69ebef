from __future__ import annotations

import copy

from tucan.core.merge import deep_merge, merge_conditionally, put_new_conditionally, put_not_none


def test_deep_merge_recurses_into_mappings() -> None:
    left = {"axis": {"title": "T", "grid": True}, "type": "quantitative"}
    right = {"axis": {"grid": False}}
    assert deep_merge(left, right) == {
        "axis": {"title": "T", "grid": False},
        "type": "quantitative",
    }


def test_deep_merge_right_wins_on_non_mappings() -> None:
    left = {"scale": {"domain": [0, 1]}, "legend": {"title": "a"}, "stack": True}
    right = {"scale": {"domain": [5]}, "legend": None, "stack": {"offset": "zero"}}
    assert deep_merge(left, right) == {
        "scale": {"domain": [5]},
        "legend": None,
        "stack": {"offset": "zero"},
    }


def test_deep_merge_is_non_destructive() -> None:
    left = {"axis": {"title": "T"}}
    right = {"axis": {"grid": False}}
    left_copy, right_copy = copy.deepcopy(left), copy.deepcopy(right)

    deep_merge(left, right)

    assert left == left_copy
    assert right == right_copy


def test_deep_merge_disjoint_partials_are_associative() -> None:
    base = {"axis": {"title": "T"}}
    p1 = {"axis": {"grid": False}}
    p2 = {"scale": {"zero": False}}
    assert deep_merge(deep_merge(base, p1), p2) == deep_merge(base, deep_merge(p1, p2))


def test_deep_merge_none_is_empty() -> None:
    assert deep_merge(None, {"a": 1}) == {"a": 1}
    assert deep_merge({"a": 1}, None) == {"a": 1}


def test_keyword_helpers() -> None:
    assert put_new_conditionally({"a": 1}, "a", 2, lambda: True) == {"a": 1}
    assert put_new_conditionally({}, "a", 2, lambda: False) == {}
    assert put_new_conditionally({}, "a", 2, lambda: True) == {"a": 2}
    assert merge_conditionally({"a": 1}, {"a": 2}, lambda: True) == {"a": 2}
    assert merge_conditionally({"a": 1}, {"a": 2}, lambda: False) == {"a": 1}
    assert put_not_none({}, "a", None) == {}
    assert put_not_none({}, "a", 0) == {"a": 0}
