from __future__ import annotations

import datetime as dt

import pytest

import tucan
from tucan.core.errors import OptionsError
from tucan.datasets import DATASETS

ROWS = [
    {"cat": "a", "value": 1.0, "group": "g1", "other": 3},
    {"cat": "b", "value": 2.5, "group": "g2", "other": 4},
]


def _layer_marks(spec):
    return [layer["mark"]["type"] for layer in spec["layer"]]


## Point plots


def test_scatter_full_spec() -> None:
    spec = tucan.scatter("iris", "petal_width", "petal_length", color_by="species", width=400)

    assert spec == {
        "data": {"url": DATASETS["iris"]},
        "width": 400,
        "mark": {"type": "point"},
        "encoding": {
            "x": {"field": "petal_width", "type": "quantitative", "scale": {"zero": False}},
            "y": {"field": "petal_length", "type": "quantitative", "scale": {"zero": False}},
            "color": {"field": "species", "type": "nominal"},
        },
    }


def test_scatter_upgrades_inferred_temporal_fields() -> None:
    rows = [{"date": dt.date(2024, 1, 1), "value": 1}]
    spec = tucan.scatter(rows, "date", "value")

    assert spec["encoding"]["x"]["type"] == "temporal"
    assert spec["encoding"]["y"]["type"] == "quantitative"


def test_scatter_encoding_overrides_win() -> None:
    spec = tucan.scatter("iris", "a", "b", x={"type": "ordinal", "axis": {"title": "X"}})

    assert spec["encoding"]["x"] == {
        "field": "a",
        "type": "ordinal",
        "scale": {"zero": False},
        "axis": {"title": "X"},
    }


def test_scatter_mark_and_grouping_options() -> None:
    spec = tucan.scatter(
        "iris",
        "a",
        "b",
        tooltip="data",
        filled=True,
        point_shape="square",
        point_size=30,
        shape_by="s",
        size_by="z",
        zoomable=True,
    )

    assert spec["mark"] == {
        "type": "point",
        "tooltip": {"content": "data"},
        "filled": True,
        "shape": "square",
        "size": 30,
    }
    assert spec["encoding"]["shape"] == {"field": "s", "type": "nominal"}
    assert spec["encoding"]["size"] == {"field": "z", "type": "quantitative"}
    assert spec["params"] == [{"name": "_grid", "select": "interval", "bind": "scales"}]


def test_invalid_options_raise_before_building() -> None:
    with pytest.raises(OptionsError, match="unknown option 'group_by'"):
        tucan.scatter("iris", "a", "b", group_by="x")
    with pytest.raises(OptionsError, match="'point_shape'"):
        tucan.scatter("iris", "a", "b", point_shape="star")
    with pytest.raises(OptionsError, match="'width'"):
        tucan.scatter("iris", "a", "b", width="wide")


def test_builder_docs_list_options() -> None:
    assert "## Options" in tucan.scatter.__doc__
    assert "* `color_by` (`str`)" in tucan.scatter.__doc__
    assert "### Global Options" in tucan.histogram.__doc__


def test_bubble_and_punchcard() -> None:
    bubble = tucan.bubble(ROWS, "value", "other", "other", color_by="group")
    assert bubble["mark"] == {"type": "circle", "fillOpacity": 0.5}
    assert bubble["encoding"]["size"] == {"field": "other", "type": "quantitative"}

    punchcard = tucan.punchcard(ROWS, "cat", "group", "value", aggregate="mean")
    assert punchcard["encoding"]["x"] == {"field": "cat", "type": "nominal"}
    assert punchcard["encoding"]["size"] == {
        "field": "value",
        "type": "quantitative",
        "aggregate": "mean",
    }


## Line plots


def test_lineplot() -> None:
    spec = tucan.lineplot("stocks", "date", "price", group_by="symbol", line_color="red")

    assert spec["mark"] == {"type": "line", "color": "red"}
    assert spec["encoding"]["color"] == {"field": "symbol", "type": "nominal"}


def test_lineplot_points() -> None:
    assert tucan.lineplot("stocks", "a", "b", points=True)["mark"] == {
        "type": "line",
        "point": True,
    }
    assert tucan.lineplot("stocks", "a", "b", points=True, filled=False)["mark"] == {
        "type": "line",
        "point": {"filled": False},
    }


def test_step() -> None:
    assert tucan.step("stocks", "a", "b")["mark"] == {"type": "line", "interpolate": "step"}
    assert tucan.step("stocks", "a", "b", mode="step-after")["mark"]["interpolate"] == (
        "step-after"
    )


def test_area_modes() -> None:
    spec = tucan.area("stocks", "date", "price", color_by="symbol")
    assert spec["mark"] == {"type": "area", "fillOpacity": 0.5}
    assert spec["encoding"]["y"]["stack"] == "zero"

    assert tucan.area("stocks", "a", "b", mode="normalize")["encoding"]["y"]["stack"] == (
        "normalize"
    )
    assert tucan.area("stocks", "a", "b", mode="no_stack")["encoding"]["y"]["stack"] is None

    spec = tucan.area("stocks", "a", "b", line=True, points=True)
    assert spec["mark"] == {"type": "area", "fillOpacity": 0.5, "line": True, "point": True}


def test_streamgraph() -> None:
    spec = tucan.streamgraph("stocks", "date", "price", "symbol")

    assert spec["encoding"]["y"]["stack"] == "center"
    assert spec["encoding"]["color"] == {"field": "symbol", "type": "nominal"}


## Bar plots


def test_bar_grouped() -> None:
    spec = tucan.bar(ROWS, "cat", "value", color_by="group", stacked=False)

    assert spec["mark"] == {"type": "bar", "fillOpacity": 0.5}
    assert spec["encoding"] == {
        "x": {"field": "cat", "type": "nominal"},
        "y": {"field": "value", "type": "quantitative"},
        "color": {"field": "group", "type": "nominal"},
        "xOffset": {"field": "group"},
    }


def test_bar_vertical_orient_and_aggregate() -> None:
    spec = tucan.bar(ROWS, "cat", "value", orient="vertical", aggregate="sum")

    assert spec["encoding"]["y"] == {"field": "cat", "type": "nominal"}
    assert spec["encoding"]["x"] == {"field": "value", "type": "quantitative", "aggregate": "sum"}


def test_bar_temporal_value() -> None:
    rows = [{"cat": "a", "when": dt.datetime(2024, 1, 1, 12)}]
    assert tucan.bar(rows, "cat", "when")["encoding"]["y"]["type"] == "temporal"


def test_countplot() -> None:
    spec = tucan.countplot("titanic", "Pclass", color_by="Survived", stacked=False)

    assert spec["encoding"] == {
        "x": {"field": "Pclass", "type": "nominal"},
        "y": {"field": "Pclass", "aggregate": "count"},
        "color": {"field": "Survived"},
        "xOffset": {"field": "Survived"},
    }


def test_range_bar() -> None:
    spec = tucan.range_bar(ROWS, "cat", "value", "other")

    assert spec["encoding"] == {
        "y": {"field": "cat", "type": "nominal"},
        "x": {"field": "value", "type": "quantitative"},
        "x2": {"field": "other"},
    }
    assert "y2" in tucan.range_bar(ROWS, "cat", "value", "other", orient="vertical")["encoding"]


## Distribution plots


def test_histogram() -> None:
    spec = tucan.histogram("iris", "petal_width")

    assert spec["transform"] == [
        {"bin": True, "field": "petal_width", "as": "bin_petal_width"},
        {
            "aggregate": [{"op": "count", "as": "count_petal_width"}],
            "groupby": ["bin_petal_width", "bin_petal_width_end"],
        },
    ]
    assert spec["mark"] == {"type": "bar", "fillOpacity": 0.5}
    assert spec["encoding"] == {
        "x": {"field": "bin_petal_width", "bin": {"binned": True}, "title": "petal_width"},
        "x2": {"field": "bin_petal_width_end"},
        "y": {"field": "count_petal_width", "type": "quantitative"},
    }


def test_histogram_relative_grouped() -> None:
    spec = tucan.histogram(
        "iris", "w", relative=True, color_by="species", maxbins=20, orient="vertical"
    )

    assert spec["transform"][0] == {"bin": {"maxbins": 20}, "field": "w", "as": "bin_w"}
    assert spec["transform"][1]["groupby"] == ["bin_w", "bin_w_end", "species"]
    assert spec["transform"][2] == {
        "joinaggregate": [{"op": "sum", "field": "count_w", "as": "total_count_w"}],
        "groupby": ["species"],
    }
    assert spec["transform"][3] == {
        "calculate": "datum.count_w/datum.total_count_w",
        "as": "percent_w",
    }
    assert spec["encoding"]["y"]["field"] == "bin_w"
    assert spec["encoding"]["x"] == {
        "field": "percent_w",
        "type": "quantitative",
        "title": "Relative Frequency",
        "axis": {"format": ".1~%"},
        "stack": None,
    }
    assert spec["encoding"]["color"] == {"field": "species"}


def test_histogram_stacked() -> None:
    spec = tucan.histogram("iris", "w", color_by="species", stacked=True)
    assert spec["encoding"]["y"]["stack"] is True


def test_histogram_invalid_extent() -> None:
    with pytest.raises(OptionsError, match="'extent'"):
        tucan.histogram("iris", "w", extent=[5, 1])


def test_density() -> None:
    spec = tucan.density("iris", "petal_width", color_by="species", bandwidth=0.5)

    assert spec["transform"] == [
        {
            "density": "petal_width",
            "counts": False,
            "cumulative": False,
            "maxsteps": 200,
            "minsteps": 25,
            "groupby": ["species"],
            "bandwidth": 0.5,
        }
    ]
    assert spec["mark"] == {"type": "area", "fillOpacity": 0.5}
    assert spec["encoding"] == {
        "y": {"field": "density", "type": "quantitative"},
        "x": {"field": "value", "type": "quantitative", "scale": {"zero": False}},
        "color": {"field": "species"},
    }


def test_density_alias_and_orient() -> None:
    spec = tucan.density("iris", "w", alias="kde", orient="vertical", cumulative=True)

    assert spec["transform"][0]["as"] == ["kde_value", "kde_density"]
    assert spec["transform"][0]["cumulative"] is True
    assert spec["mark"]["orient"] == "horizontal"
    assert spec["encoding"]["y"]["field"] == "kde_value"
    assert spec["encoding"]["x"]["field"] == "kde_density"


def test_density_heatmap() -> None:
    spec = tucan.density_heatmap("iris", "a", "b")
    assert spec["mark"] == {"type": "rect", "fillOpacity": 0.5}
    assert spec["encoding"]["x"] == {"field": "a", "type": "quantitative", "bin": True}
    assert spec["encoding"]["color"] == {"type": "quantitative", "aggregate": "count"}

    spec = tucan.density_heatmap("iris", "a", "b", z="c")
    assert spec["encoding"]["color"] == {"field": "c", "type": "quantitative", "aggregate": "sum"}


def test_stripplot_styles() -> None:
    tick = tucan.stripplot("tips", "total_bill", group="day")
    assert tick["mark"] == {"type": "tick"}
    assert tick["encoding"] == {
        "x": {"field": "total_bill", "type": "quantitative"},
        "y": {"field": "day", "type": "nominal"},
    }

    point = tucan.stripplot("tips", "total_bill", style="point")
    assert point["mark"] == {"type": "point", "size": 16}

    jitter = tucan.stripplot("tips", "total_bill", style="jitter", point_size=8)
    assert jitter["mark"] == {"type": "point", "size": 8}
    assert jitter["transform"][0]["as"] == "jitter"
    assert jitter["encoding"]["yOffset"] == {
        "field": "jitter",
        "type": "quantitative",
        "axis": None,
    }


def test_boxplot() -> None:
    spec = tucan.boxplot("iris", "petal_width", group="species", color_by="species")
    assert spec["mark"] == {"type": "boxplot", "extent": 1.5}
    assert spec["encoding"]["y"] == {"field": "species", "type": "nominal"}

    spec = tucan.boxplot("iris", "w", mode="min-max", outliers=False)
    assert spec["mark"] == {"type": "boxplot", "extent": "min-max", "outliers": False}


def test_errorbar() -> None:
    spec = tucan.errorbar("iris", "w", extent="ci", ticks=True, stroke_width=2.0)
    assert spec["mark"] == {"type": "errorbar", "extent": "ci", "ticks": True, "thickness": 2.0}

    with pytest.raises(OptionsError, match="'extent'"):
        tucan.errorbar("iris", "w", extent="range")


## Heatmaps


def test_heatmap() -> None:
    spec = tucan.heatmap(ROWS, "cat", "group", "value", color_scheme="blues")

    assert spec["mark"] == {"type": "rect", "fillOpacity": 1.0}
    assert spec["encoding"]["color"] == {
        "field": "value",
        "type": "quantitative",
        "scale": {"scheme": "blues"},
    }


def test_heatmap_annotated() -> None:
    spec = tucan.heatmap(ROWS, "cat", "group", "value", annotate=True, text_color="white")

    assert "mark" not in spec
    assert spec["encoding"]["x"] == {"field": "cat", "type": "nominal"}
    assert _layer_marks(spec) == ["rect", "text"]
    assert spec["layer"][1]["mark"] == {"type": "text", "color": "white"}
    assert spec["layer"][1]["encoding"]["text"] == {"field": "value", "type": "quantitative"}
    assert all("__tucan__" not in layer for layer in spec["layer"])


## Pie charts


def test_pie_and_donut() -> None:
    pie = tucan.pie(ROWS, "value", "cat", aggregate="sum")
    assert pie["mark"] == {"type": "arc", "fillOpacity": 0.5}
    assert pie["encoding"] == {
        "theta": {"field": "value", "type": "quantitative", "aggregate": "sum"},
        "color": {"field": "cat"},
    }

    donut = tucan.donut(ROWS, "value", "cat", inner_radius=80)
    assert donut["mark"] == {"type": "arc", "fillOpacity": 0.5, "innerRadius": 80}
    assert tucan.donut(ROWS, "value", "cat")["mark"]["innerRadius"] == 50


## Rulers


def test_ruler_constant() -> None:
    spec = tucan.hruler(tucan.scatter(ROWS, "value", "other"), 3)

    assert _layer_marks(spec) == ["point", "rule"]
    assert spec["layer"][1] == {
        "mark": {"type": "rule", "color": "black", "strokeWidth": 1},
        "encoding": {"y": {"datum": 3}},
    }


def test_ruler_field() -> None:
    spec = tucan.vruler(
        tucan.scatter("iris", "a", "b"), "a", aggregate="mean", line_color="red", group_by="g"
    )

    assert spec["layer"][1]["mark"]["color"] == "red"
    assert spec["layer"][1]["encoding"] == {
        "x": {"field": "a", "type": "quantitative", "aggregate": "mean"},
        "color": {"field": "g", "type": "nominal"},
    }


def test_ruler_invalid_arguments() -> None:
    with pytest.raises(ValueError, match="expected axis"):
        tucan.ruler({}, "z", 1)
    with pytest.raises(ValueError, match="expected a field name or a number"):
        tucan.ruler({}, "x", True)


def test_scatter_inline_rows() -> None:
    spec = tucan.scatter([{"x": 1, "y": 2}, {"x": 2, "y": 3}], "x", "y")

    assert spec["mark"]["type"] == "point"
    for channel in ("x", "y"):
        encoding = spec["encoding"][channel]
        assert (encoding["field"], encoding["type"]) == (channel, "quantitative")
    assert spec["data"] == {"values": [{"x": 1, "y": 2}, {"x": 2, "y": 3}]}
