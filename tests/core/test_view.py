from __future__ import annotations

import pytest

from tucan.core.errors import SpecShapeError
from tucan.core.view import (
    ViewShape,
    is_layered_view,
    is_multi_view,
    is_single_view,
    validate_layered_view,
    validate_single_or_layered_view,
    validate_single_view,
    view_shape,
)


def test_view_shapes() -> None:
    assert view_shape({"mark": {"type": "point"}}) is ViewShape.SINGLE
    assert view_shape({"layer": []}) is ViewShape.LAYERED
    assert view_shape({"hconcat": []}) is ViewShape.MULTI


def test_view_shape_rejects_several_multi_view_keys() -> None:
    with pytest.raises(SpecShapeError):
        view_shape({"layer": [], "hconcat": []})


def test_predicates() -> None:
    assert is_single_view({})
    assert not is_single_view({"layer": []})
    assert is_layered_view({"layer": []})
    assert is_multi_view({"layer": []})
    assert is_multi_view({"concat": []})


def test_validate_single_view_names_offending_key() -> None:
    with pytest.raises(SpecShapeError) as exc:
        validate_single_view({"hconcat": []}, "scatter")
    assert str(exc.value) == (
        "scatter expects a single view spec, multi view detected: hconcat key is defined"
    )


def test_validate_single_view_scans_in_fixed_order() -> None:
    with pytest.raises(SpecShapeError, match="layer key is defined"):
        validate_single_view({"vconcat": [], "layer": []}, "op")


def test_validate_single_view_custom_forbidden_keys() -> None:
    validate_single_view({"layer": []}, "op", forbidden=["hconcat"])


def test_validate_single_or_layered_view() -> None:
    validate_single_or_layered_view({"layer": []}, "op")
    with pytest.raises(SpecShapeError, match="vconcat key is defined"):
        validate_single_or_layered_view({"vconcat": []}, "op")


def test_validate_layered_view() -> None:
    validate_layered_view({"layer": []}, "op")
    with pytest.raises(SpecShapeError, match="^op expected a layered view$"):
        validate_layered_view({}, "op")
    with pytest.raises(SpecShapeError, match="^expected a layered view$"):
        validate_layered_view({}, "")
