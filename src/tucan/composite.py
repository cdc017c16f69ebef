"""
Composite plots built from several views or layers.

- errorband, lollipop: layered views sharing the data of the root node.
- jointplot, pairplot: concatenated views. The data is set once on the root node and
  the sub-views inherit it.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Literal

from .base import PlotData, child_spec, maybe_zoomable, new
from .core.encoding import encode_field, put_encoding_options
from .core.layers import bare_layer
from .core.options import GLOBAL_OPTS
from .core.typing import Spec
from .plots import (
    ERROR_EXTENTS,
    base,
    documented,
    group,
    orient_axes,
    put_mark,
    schema,
    validate,
)
from .plots import density as density_plot
from .plots import density_heatmap, histogram, scatter

__all__ = ["errorband", "lollipop", "jointplot", "pairplot"]

_ERRORBAND, _ERRORBAND_SCHEMA = schema(
    [
        GLOBAL_OPTS,
        "clip",
        "opacity",
        "interpolate",
        "fill_color",
        "line_color",
        "group_by",
        "extent",
        "x",
        "y",
        "color",
    ],
    {
        "extent": {
            "type": Literal[ERROR_EXTENTS],
            "default": "stderr",
            "validator": None,
            "doc": "The extent of the band: one of `'stderr'`, `'stdev'`, `'ci'`, `'iqr'`.",
        },
        "borders": {
            "type": bool,
            "default": False,
            "doc": "Whether the borders of the band will be drawn.",
            "section": "style",
        },
        "line": {
            "type": bool,
            "default": True,
            "doc": "Whether a line of the mean of `y` will be drawn over the band.",
            "section": "style",
        },
    },
)


@documented(_ERRORBAND)
def errorband(plotdata: PlotData, x: str, y: str, **opts: Any) -> Spec:
    """
    Returns the specification of an error band plot.

    For every value of `x` a band summarizing the distribution of `y` is drawn. By default
    a line of the mean of `y` is layered over the band.
    """
    opts = validate("errorband", _ERRORBAND_SCHEMA, opts)

    spec = base(plotdata, opts, _ERRORBAND)

    band = put_mark(
        child_spec(spec),
        "errorband",
        opts,
        _ERRORBAND,
        extent=opts["extent"],
        borders=opts["borders"] or None,
        color=opts.get("fill_color"),
    )
    band = encode_field(band, "x", x, opts, type="quantitative")
    band = encode_field(band, "y", y, opts, type="quantitative", scale={"zero": False})
    band = group(band, opts, {"group_by": "nominal"})

    if not opts["line"]:
        spec = {**spec, **bare_layer(band)}
        return maybe_zoomable(spec, opts["zoomable"])

    line = {"mark": {"type": "line"}}
    if "line_color" in opts:
        line["mark"]["color"] = opts["line_color"]
    if "interpolate" in opts:
        line["mark"]["interpolate"] = opts["interpolate"]
    line = encode_field({**child_spec(spec), **line}, "x", x, opts, type="quantitative")
    line = encode_field(line, "y", y, opts, type="quantitative", aggregate="mean")
    line = group(line, opts, {"group_by": "nominal"})

    spec = {**spec, "layer": [bare_layer(band), bare_layer(line)]}
    return maybe_zoomable(spec, opts["zoomable"])


_LOLLIPOP, _LOLLIPOP_SCHEMA = schema(
    [
        GLOBAL_OPTS,
        "tooltip",
        "orient",
        "line_color",
        "stroke_width",
        "point_size",
        "point_color",
        "point_shape",
        "color_by",
        "x",
        "y",
        "color",
    ],
    {"point_size": {"default": 60}, "stroke_width": {"default": 2}},
)


@documented(_LOLLIPOP)
def lollipop(plotdata: PlotData, field: str, value: str, **opts: Any) -> Spec:
    """
    Returns the specification of a lollipop chart.

    A lollipop chart is a bar chart where each bar is drawn as a rule topped by a point.
    """
    opts = validate("lollipop", _LOLLIPOP_SCHEMA, opts)
    cat_axis, value_axis = orient_axes(opts)

    tooltip = {"tooltip": opts["tooltip"]} if "tooltip" in opts else {}

    rule_mark = {"type": "rule", "strokeWidth": opts["stroke_width"], **tooltip}
    if "line_color" in opts:
        rule_mark["color"] = opts["line_color"]

    point_mark = {"type": "point", "filled": True, "size": opts["point_size"], **tooltip}
    for key in ("point_color", "point_shape"):
        if key in opts:
            point_mark[key.removeprefix("point_")] = opts[key]

    spec = base(plotdata, opts, _LOLLIPOP)
    spec = encode_field(spec, cat_axis, field, opts, type="nominal")
    spec = encode_field(spec, value_axis, value, opts, type="quantitative")
    spec = group(spec, opts, {"color_by": "nominal"})
    spec = {**spec, "layer": [{"mark": rule_mark}, {"mark": point_mark}]}
    return maybe_zoomable(spec, opts["zoomable"])


def _hide_axis_title(spec: Spec, channel: str) -> Spec:
    return put_encoding_options(spec, channel, {"axis": {"title": None}})


def _ratio(value: Any) -> Any:
    if 0 < value <= 1:
        return value
    raise ValueError(f"expected a number in (0, 1], got: {value!r}")


_JOINTPLOT, _JOINTPLOT_SCHEMA = schema(
    ["title", "fill_opacity", "color_by"],
    {
        "width": {
            "type": int,
            "default": 300,
            "doc": "The width (and height) of the joint plot in pixels.",
            "section": "global",
        },
        "ratio": {
            "type": float,
            "default": 0.3,
            "doc": "The ratio of the marginal plots' height to the joint plot's height.",
            "validator": _ratio,
        },
        "joint": {
            "type": Literal["scatter", "density_heatmap"],
            "default": "scatter",
            "doc": "The type of the joint plot.",
        },
        "marginal": {
            "type": Literal["histogram", "density"],
            "default": "histogram",
            "doc": "The type of the marginal distribution plots.",
        },
        "spacing": {
            "type": int,
            "default": 15,
            "doc": "The spacing between the joint and the marginal plots in pixels.",
            "section": "style",
        },
    },
)


def _marginal(
    root: Spec, field: str, kind: str, orient: str, size: tuple[int, int], opts: dict[str, Any]
) -> Spec:
    width, height = size
    sub_opts: dict[str, Any] = {"width": width, "height": height, "orient": orient}
    if "color_by" in opts:
        sub_opts["color_by"] = opts["color_by"]
    sub_opts["fill_opacity"] = opts["fill_opacity"]

    builder = histogram if kind == "histogram" else density_plot
    marginal = builder(child_spec(root), field, **sub_opts)

    value_axis, count_axis = ("x", "y") if orient == "horizontal" else ("y", "x")
    marginal = put_encoding_options(
        marginal, value_axis, {"axis": {"title": None, "labels": False, "ticks": False}}
    )
    marginal = put_encoding_options(marginal, count_axis, {"axis": {"title": None}})
    return bare_layer(marginal)


@documented(_JOINTPLOT)
def jointplot(plotdata: PlotData, x: str, y: str, **opts: Any) -> Spec:
    """
    Returns the specification of a joint plot.

    A joint plot is a bivariate plot of `x` and `y` with the marginal distributions of
    each field drawn along its axis.
    """
    opts = validate("jointplot", _JOINTPLOT_SCHEMA, opts)
    size = opts["width"]
    marginal_size = round(size * opts["ratio"])

    root = new(plotdata, title=opts.get("title"))

    joint_opts: dict[str, Any] = {"width": size, "height": size}
    if opts["joint"] == "scatter":
        if "color_by" in opts:
            joint_opts["color_by"] = opts["color_by"]
        joint = scatter(child_spec(root), x, y, **joint_opts)
    else:
        joint = density_heatmap(child_spec(root), x, y, **joint_opts)

    x_marginal = _marginal(root, x, opts["marginal"], "horizontal", (size, marginal_size), opts)
    y_marginal = _marginal(root, y, opts["marginal"], "vertical", (marginal_size, size), opts)

    spacing = opts["spacing"]
    return {
        **root,
        "bounds": "flush",
        "spacing": spacing,
        "vconcat": [
            x_marginal,
            {"bounds": "flush", "spacing": spacing, "hconcat": [bare_layer(joint), y_marginal]},
        ],
    }


_PAIRPLOT, _PAIRPLOT_SCHEMA = schema(
    ["title", "color_by"],
    {
        "width": {
            "type": int,
            "default": 150,
            "doc": "The width of each sub-plot in pixels.",
            "section": "global",
        },
        "height": {
            "type": int,
            "default": 150,
            "doc": "The height of each sub-plot in pixels.",
            "section": "global",
        },
        "diagonal": {
            "type": Literal["scatter", "density", "histogram"],
            "default": "scatter",
            "doc": "The type of the plots on the diagonal.",
        },
    },
)


@documented(_PAIRPLOT)
def pairplot(plotdata: PlotData, fields: Sequence[str], **opts: Any) -> Spec:
    """
    Returns the specification of a pair plot.

    A grid of scatter plots of every pair of `fields`. Axis titles are shown only on the
    outer sub-plots.

    Raises:
        ValueError: If `fields` is empty.
    """
    if not fields:
        raise ValueError("pairplot expects at least one field")
    opts = validate("pairplot", _PAIRPLOT_SCHEMA, opts)

    root = new(plotdata, title=opts.get("title"))
    sub_opts: dict[str, Any] = {"width": opts["width"], "height": opts["height"]}
    if "color_by" in opts:
        sub_opts["color_by"] = opts["color_by"]

    last = len(fields) - 1
    cells = []
    for row, y in enumerate(fields):
        for col, x in enumerate(fields):
            if row == col and opts["diagonal"] == "histogram":
                cell = histogram(child_spec(root), x, **sub_opts)
            elif row == col and opts["diagonal"] == "density":
                cell = density_plot(child_spec(root), x, **sub_opts)
            else:
                cell = scatter(child_spec(root), x, y, **sub_opts)

            if row != last:
                cell = _hide_axis_title(cell, "x")
            if col != 0:
                cell = _hide_axis_title(cell, "y")
            cells.append(bare_layer(cell))

    return {**root, "columns": len(fields), "concat": cells}
