from __future__ import annotations

import pytest

from tucan import axes, grid, legend, scale, view
from tucan.core.errors import ChannelNotFoundError, OptionsError


@pytest.fixture
def spec():
    return {
        "mark": {"type": "point"},
        "encoding": {
            "x": {"field": "a", "type": "quantitative"},
            "y": {"field": "b", "type": "temporal"},
            "color": {"field": "c", "type": "nominal"},
        },
    }


## Axes


def test_axes_titles(spec) -> None:
    out = axes.set_xy_titles(spec, "A", "B")

    assert out["encoding"]["x"]["axis"] == {"title": "A"}
    assert out["encoding"]["y"]["axis"] == {"title": "B"}
    assert "axis" not in spec["encoding"]["x"]


def test_axes_put_options_converts_keys(spec) -> None:
    out = axes.put_options(spec, "x", label_angle=45, tick_count=5)
    assert out["encoding"]["x"]["axis"] == {"labelAngle": 45, "tickCount": 5}


def test_axes_strict(spec) -> None:
    with pytest.raises(ChannelNotFoundError, match="encoding for channel size not found"):
        axes.put_options(spec, "size", title="T")


def test_axes_set_enabled(spec) -> None:
    assert axes.set_enabled(spec, "x", False)["encoding"]["x"]["axis"] is None
    assert axes.set_enabled(spec, "x", True) == spec


def test_axes_set_orientation(spec) -> None:
    assert axes.set_orientation(spec, "x", "top")["encoding"]["x"]["axis"] == {"orient": "top"}
    with pytest.raises(OptionsError, match="invalid orientation for the y axis"):
        axes.set_orientation(spec, "y", "top")
    with pytest.raises(OptionsError, match="invalid axis"):
        axes.set_orientation(spec, "color", "left")


def test_axes_on_layered_spec() -> None:
    layered = {"layer": [{"encoding": {"x": {"field": "a"}}}, {"mark": "rule"}]}
    out = axes.set_x_title(layered, "A")
    assert out["layer"][0]["encoding"]["x"]["axis"] == {"title": "A"}
    assert out["layer"][1] == {"mark": "rule"}


## Scale


def test_color_scheme(spec) -> None:
    out = scale.set_color_scheme(spec, "viridis")
    assert out["encoding"]["color"]["scale"] == {"scheme": "viridis"}

    out = scale.set_color_scheme(spec, ["red", "blue"])
    assert out["encoding"]["color"]["scale"] == {"range": ["red", "blue"]}


def test_color_scheme_invalid(spec) -> None:
    with pytest.raises(OptionsError, match="invalid scheme 'nope'"):
        scale.set_color_scheme(spec, "nope")
    with pytest.raises(ChannelNotFoundError):
        scale.set_color_scheme({"encoding": {"x": {"field": "a"}}}, "blues")


def test_set_scale(spec) -> None:
    out = scale.set_x_scale(spec, "log", base=2)
    assert out["encoding"]["x"]["scale"] == {"type": "log", "base": 2}

    out = scale.set_y_scale(spec, "utc")
    assert out["encoding"]["y"]["scale"] == {"type": "utc"}


def test_set_scale_errors(spec) -> None:
    with pytest.raises(OptionsError, match="scale can be one of"):
        scale.set_x_scale(spec, "band")
    with pytest.raises(OptionsError, match="unknown options \\['base'\\] for the pow scale"):
        scale.set_x_scale(spec, "pow", base=2)
    with pytest.raises(OptionsError, match="cannot be applied on a temporal encoding"):
        scale.set_y_scale(spec, "log")
    with pytest.raises(OptionsError, match="cannot be applied on a quantitative encoding"):
        scale.set_x_scale(spec, "time")
    with pytest.raises(OptionsError, match="color is defined as 'nominal'"):
        scale.set_scale(spec, "color", "linear")


def test_domains(spec) -> None:
    out = scale.set_xy_domain(spec, 0, 10)
    assert out["encoding"]["x"]["scale"] == {"domain": [0, 10]}
    assert out["encoding"]["y"]["scale"] == {"domain": [0, 10]}

    out = scale.set_domain(spec, "color", ["a", "b"])
    assert out["encoding"]["color"]["scale"] == {"domain": ["a", "b"]}

    with pytest.raises(ValueError, match="cannot be greater than the max value, got \\[5, 1\\]"):
        scale.set_x_domain(spec, 5, 1)


## Legend


def test_legend_helpers(spec) -> None:
    out = legend.set_title(spec, "color", "Species", title_color="red")
    assert out["encoding"]["color"]["legend"] == {"titleColor": "red", "title": "Species"}

    out = legend.set_orientation(out, "color", "bottom-left")
    assert out["encoding"]["color"]["legend"]["orient"] == "bottom-left"

    assert legend.set_offset(spec, "color", 5)["encoding"]["color"]["legend"] == {"offset": 5}
    assert legend.set_enabled(spec, "color", False)["encoding"]["color"]["legend"] is None
    assert legend.set_enabled(spec, "color", True) == spec


def test_legend_set_enabled_checks_channel(spec) -> None:
    with pytest.raises(ChannelNotFoundError):
        legend.set_enabled(spec, "size", True)
    with pytest.raises(OptionsError, match="set_enabled: invalid legend channel"):
        legend.set_enabled(spec, "x", True)


def test_legend_errors(spec) -> None:
    with pytest.raises(OptionsError, match="invalid legend orientation"):
        legend.set_orientation(spec, "color", "middle")
    with pytest.raises(OptionsError, match="invalid legend channel"):
        legend.set_title(spec, "x", "X")
    with pytest.raises(ChannelNotFoundError):
        legend.set_title(spec, "size", "S")


## Grid


def test_grid_enabled(spec) -> None:
    out = grid.set_enabled(spec, False)
    assert out["encoding"]["x"]["axis"] == {"grid": False}
    assert out["encoding"]["y"]["axis"] == {"grid": False}

    only_x = {"encoding": {"x": {"field": "a"}}}
    assert grid.set_enabled(only_x, True) == {"encoding": {"x": {"field": "a", "axis": {"grid": True}}}}

    with pytest.raises(ChannelNotFoundError):
        grid.set_enabled(only_x, True, channel="y")


def test_grid_style(spec) -> None:
    out = grid.set_color(spec, "x", "red")
    out = grid.set_opacity(out, "x", 0.3)
    out = grid.set_width(out, "x", 2)
    out = grid.set_dash_style(out, "x", 4, 2)

    assert out["encoding"]["x"]["axis"] == {
        "gridColor": "red",
        "gridOpacity": 0.3,
        "gridWidth": 2,
        "gridDash": [4, 2],
    }


def test_grid_invalid_values(spec) -> None:
    with pytest.raises(ValueError, match="opacity must be a number between 0 and 1"):
        grid.set_opacity(spec, "x", 2)
    with pytest.raises(ValueError, match="width must be a positive integer"):
        grid.set_width(spec, "x", 0)
    with pytest.raises(ValueError, match="space must be a positive integer"):
        grid.set_dash_style(spec, "x", 4, 1.5)


## View


def test_view_backgrounds(spec) -> None:
    assert view.set_background(spec, "white")["background"] == "white"

    out = view.set_view_background({**spec, "config": {"view": {"stroke": None}}}, "#eee")
    assert out["config"] == {"view": {"stroke": None, "fill": "#eee"}}
