from __future__ import annotations

import pytest

from tucan.concat import concat, hconcat, vconcat
from tucan.core.errors import SpecShapeError

A = {"mark": {"type": "bar"}}
B = {"mark": {"type": "point"}, "$schema": "s", "__tucan__": {"types": {}}}


def test_hconcat_with_base_and_options() -> None:
    spec = hconcat([A, B], base={"data": {"url": "a.csv"}}, spacing=10, title=None)

    assert spec == {
        "data": {"url": "a.csv"},
        "spacing": 10,
        "hconcat": [{"mark": {"type": "bar"}}, {"mark": {"type": "point"}}],
    }


def test_vconcat_without_base() -> None:
    assert vconcat([A]) == {"vconcat": [A]}


def test_concat_columns() -> None:
    assert concat([A, A, A], columns=2)["columns"] == 2
    assert "columns" not in concat([A])


def test_concat_converts_option_keys() -> None:
    assert hconcat([A], center=True, auto_size="fit")["autoSize"] == "fit"


def test_base_with_mark_rejected() -> None:
    with pytest.raises(ValueError, match="without mark"):
        hconcat([A], base={"mark": "bar"})


def test_base_multi_view_rejected() -> None:
    with pytest.raises(SpecShapeError, match="layer key is defined"):
        vconcat([A], base={"layer": []})


def test_nested_concat() -> None:
    spec = vconcat([hconcat([A, A]), A])
    assert spec["vconcat"][0] == {"hconcat": [A, A]}
