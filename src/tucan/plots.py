"""
Plot builders.

Every builder follows the same steps:

1. Validate the keyword options against the plot's option set (`tucan.core.options`).
   Invalid options raise OptionsError before anything is built.
2. Build the base node from the plot data (`tucan.base.new`) applying the options whose
   destination is the top-level spec (width, height, title).
3. Set the mark with the options whose destination is the mark.
4. Encode the channels with `tucan.core.encoding.encode_field`; per-channel user
   overrides (``x={...}``, ``color={...}``) are deep merged over the defaults.
5. Apply the grouping options (color_by, shape_by, size_by, ...).

Each builder's docstring ends with the rendered documentation of its options.

Examples:
    >>> from tucan.plots import scatter
    >>> spec = scatter("iris", "petal_width", "petal_length", color_by="species")
    >>> spec["mark"], spec["encoding"]["color"]
    ({'type': 'point'}, {'field': 'species', 'type': 'nominal'})
"""

from __future__ import annotations

import inspect
import logging
from collections.abc import Callable, Mapping, Sequence
from typing import Any, Literal

from .base import PlotData, child_spec, maybe_zoomable, new
from .core import options
from .core.encoding import encode, encode_field, put_in_spec
from .core.layers import append_layers, bare_layer
from .core.options import GENERAL_MARK_OPTS, GLOBAL_OPTS, OptionDescriptor, OptionsSchema
from .core.typing import Spec
from .transform import add_transform

__all__ = [
    "scatter",
    "bubble",
    "lineplot",
    "step",
    "area",
    "streamgraph",
    "bar",
    "countplot",
    "range_bar",
    "histogram",
    "density",
    "density_heatmap",
    "heatmap",
    "punchcard",
    "stripplot",
    "boxplot",
    "errorbar",
    "pie",
    "donut",
    "ruler",
    "hruler",
    "vruler",
]

logger = logging.getLogger(__name__)

OptionSet = dict[str, OptionDescriptor]

_JITTER_EXPR = "sqrt(-2*log(random()))*cos(2*PI*random())"


## Builder helpers


def schema(names: Sequence[Any], extra: Mapping[str, Any] | None = None) -> tuple[OptionSet, OptionsSchema]:
    """Compose an option set and its validation schema."""
    option_set = options.take(names, extra)
    return option_set, options.to_validation_schema(option_set)


def documented(option_set: OptionSet) -> Callable[[Callable], Callable]:
    """Append the rendered options documentation to the decorated builder's docstring."""

    def decorator(func: Callable) -> Callable:
        doc = inspect.cleandoc(func.__doc__ or "")
        func.__doc__ = f"{doc}\n\n## Options\n\n{options.docs(option_set)}\n"
        return func

    return decorator


def validate(plot: str, opts_schema: OptionsSchema, opts: Mapping[str, Any]) -> dict[str, Any]:
    validated = opts_schema.validate(opts)
    logger.debug("building %s with options %s", plot, sorted(validated))
    return validated


def base(plotdata: PlotData, opts: Mapping[str, Any], option_set: OptionSet) -> Spec:
    return new(plotdata, **options.take_by_destination(opts, option_set, "spec"))


def mark_props(opts: Mapping[str, Any], option_set: OptionSet, **extra: Any) -> dict[str, Any]:
    """Mark-destined options plus builder mark properties (None values skipped)."""
    props = options.take_by_destination(opts, option_set, "mark")
    props.update({k: v for k, v in extra.items() if v is not None})
    return props


def put_mark(spec: Spec, mark: str, opts: Mapping[str, Any], option_set: OptionSet, **extra: Any) -> Spec:
    return put_in_spec(spec, "mark", {"type": mark, **mark_props(opts, option_set, **extra)})


def group(spec: Spec, opts: Mapping[str, Any], groupings: Mapping[str, str | None]) -> Spec:
    """
    Encode the grouping options present in `opts`.

    `groupings` maps a grouping option (e.g. "color_by") to the default type of its
    field; None encodes the field without a type.
    """
    for name, kind in groupings.items():
        field = opts.get(name)
        if field is None:
            continue
        channel = "color" if name == "group_by" else name.removesuffix("_by")
        extra = {"type": kind} if kind else {}
        spec = encode_field(spec, channel, field, opts, **extra)
    return spec


def orient_axes(opts: Mapping[str, Any], flipped: bool = False) -> tuple[str, str]:
    """The (primary, secondary) axes for the plot orientation."""
    horizontal = opts.get("orient", "horizontal") == "horizontal"
    if horizontal != flipped:
        return "x", "y"
    return "y", "x"


def point_props(opts: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "shape": opts.get("point_shape"),
        "size": opts.get("point_size"),
        "color": opts.get("point_color"),
    }


## Point plots

_SCATTER, _SCATTER_SCHEMA = schema(
    [
        GLOBAL_OPTS,
        "tooltip",
        "clip",
        "opacity",
        "filled",
        "point_shape",
        "point_size",
        "point_color",
        "color_by",
        "shape_by",
        "size_by",
        "x",
        "y",
        "color",
        "shape",
        "size",
    ]
)


@documented(_SCATTER)
def scatter(plotdata: PlotData, x: str, y: str, **opts: Any) -> Spec:
    """
    Returns the specification of a scatter plot with the given data.

    Both fields are encoded as quantitative (temporal if inferred so) and the scales do
    not include zero. The grouping fields can be used to color, shape or size the points.
    """
    opts = validate("scatter", _SCATTER_SCHEMA, opts)

    spec = base(plotdata, opts, _SCATTER)
    spec = put_mark(spec, "point", opts, _SCATTER, **point_props(opts))
    spec = encode_field(spec, "x", x, opts, type="quantitative", scale={"zero": False})
    spec = encode_field(spec, "y", y, opts, type="quantitative", scale={"zero": False})
    spec = group(
        spec, opts, {"color_by": "nominal", "shape_by": "nominal", "size_by": "quantitative"}
    )
    return maybe_zoomable(spec, opts["zoomable"])


_BUBBLE, _BUBBLE_SCHEMA = schema(
    [GLOBAL_OPTS, GENERAL_MARK_OPTS, "opacity", "color_by", "x", "y", "color", "size"]
)


@documented(_BUBBLE)
def bubble(plotdata: PlotData, x: str, y: str, size: str, **opts: Any) -> Spec:
    """
    Returns the specification of a bubble plot.

    A bubble plot is a scatter plot with a third quantitative field mapped to the size of
    the circles.
    """
    opts = validate("bubble", _BUBBLE_SCHEMA, opts)

    spec = base(plotdata, opts, _BUBBLE)
    spec = put_mark(spec, "circle", opts, _BUBBLE)
    spec = encode_field(spec, "x", x, opts, type="quantitative", scale={"zero": False})
    spec = encode_field(spec, "y", y, opts, type="quantitative", scale={"zero": False})
    spec = encode_field(spec, "size", size, opts, type="quantitative")
    spec = group(spec, opts, {"color_by": "nominal"})
    return maybe_zoomable(spec, opts["zoomable"])


_PUNCHCARD, _PUNCHCARD_SCHEMA = schema(
    [GLOBAL_OPTS, GENERAL_MARK_OPTS, "aggregate", "color_by", "x", "y", "size", "color"]
)


@documented(_PUNCHCARD)
def punchcard(plotdata: PlotData, x: str, y: str, size: str, **opts: Any) -> Spec:
    """
    Returns the specification of a punch card plot.

    Circles are placed on a grid of two categorical fields and sized by a quantitative
    field, aggregated if `aggregate` is set.
    """
    opts = validate("punchcard", _PUNCHCARD_SCHEMA, opts)

    size_extra = {"aggregate": opts["aggregate"]} if "aggregate" in opts else {}

    spec = base(plotdata, opts, _PUNCHCARD)
    spec = put_mark(spec, "circle", opts, _PUNCHCARD)
    spec = encode_field(spec, "x", x, opts, type="nominal")
    spec = encode_field(spec, "y", y, opts, type="nominal")
    spec = encode_field(spec, "size", size, opts, type="quantitative", **size_extra)
    spec = group(spec, opts, {"color_by": "nominal"})
    return maybe_zoomable(spec, opts["zoomable"])


## Line plots

_LINE_NAMES = [
    GLOBAL_OPTS,
    "tooltip",
    "clip",
    "opacity",
    "line_color",
    "stroke_width",
    "stroke_dash",
    "filled",
    "group_by",
    "x",
    "y",
    "color",
]
_LINE_EXTRA: dict[str, Any] = {
    "points": {
        "type": bool,
        "default": False,
        "doc": "Whether points will be included in the line plot.",
        "section": "style",
    },
    "filled": {"dest": None, "doc": "Whether the points (if enabled) will be filled."},
}

_LINEPLOT, _LINEPLOT_SCHEMA = schema([*_LINE_NAMES, "interpolate"], _LINE_EXTRA)


def _line(plotdata: PlotData, x: str, y: str, opts: dict[str, Any], option_set: OptionSet) -> Spec:
    point = None
    if opts["points"]:
        point = {"filled": opts["filled"]} if "filled" in opts else True

    spec = base(plotdata, opts, option_set)
    spec = put_mark(spec, "line", opts, option_set, color=opts.get("line_color"), point=point)
    spec = encode_field(spec, "x", x, opts, type="quantitative")
    spec = encode_field(spec, "y", y, opts, type="quantitative")
    spec = group(spec, opts, {"group_by": "nominal"})
    return maybe_zoomable(spec, opts["zoomable"])


@documented(_LINEPLOT)
def lineplot(plotdata: PlotData, x: str, y: str, **opts: Any) -> Spec:
    """
    Returns the specification of a line plot.

    Use `group_by` to draw a separate line (of a different color) per group.
    """
    opts = validate("lineplot", _LINEPLOT_SCHEMA, opts)
    return _line(plotdata, x, y, opts, _LINEPLOT)


_STEP, _STEP_SCHEMA = schema(
    _LINE_NAMES,
    {
        **_LINE_EXTRA,
        "mode": {
            "type": Literal["step", "step-before", "step-after"],
            "default": "step",
            "doc": "Where the step changes value relative to the data point.",
            "section": "style",
        },
    },
)


@documented(_STEP)
def step(plotdata: PlotData, x: str, y: str, **opts: Any) -> Spec:
    """Returns the specification of a step chart."""
    opts = validate("step", _STEP_SCHEMA, opts)
    opts["interpolate"] = opts.pop("mode")
    return _line(plotdata, x, y, opts, {**_STEP, "interpolate": options.OPTIONS["interpolate"]})


_AREA_STACKS: dict[str, Any] = {
    "stacked": "zero",
    "normalize": "normalize",
    "streamgraph": "center",
    "no_stack": None,
}

_AREA, _AREA_SCHEMA = schema(
    [GLOBAL_OPTS, GENERAL_MARK_OPTS, "interpolate", "color_by", "x", "y", "color"],
    {
        "mode": {
            "type": Literal["stacked", "normalize", "streamgraph", "no_stack"],
            "default": "stacked",
            "doc": (
                "How the areas of the groups are stacked: `'stacked'`, `'normalize'` "
                "(percentage of the total), `'streamgraph'` (centered) or `'no_stack'`."
            ),
            "section": "grouping",
        },
        "line": {
            "type": bool,
            "default": False,
            "doc": "Whether the line of each area will be drawn.",
            "section": "style",
        },
        "points": {
            "type": bool,
            "default": False,
            "doc": "Whether points will be drawn on the area borders.",
            "section": "style",
        },
    },
)


@documented(_AREA)
def area(plotdata: PlotData, x: str, y: str, **opts: Any) -> Spec:
    """
    Returns the specification of an area plot.

    When `color_by` is set an area per group is drawn, stacked according to `mode`.
    """
    opts = validate("area", _AREA_SCHEMA, opts)

    spec = base(plotdata, opts, _AREA)
    spec = put_mark(
        spec,
        "area",
        opts,
        _AREA,
        line=opts["line"] or None,
        point=opts["points"] or None,
    )
    spec = encode_field(spec, "x", x, opts, type="quantitative")
    spec = encode_field(spec, "y", y, opts, type="quantitative", stack=_AREA_STACKS[opts["mode"]])
    spec = group(spec, opts, {"color_by": "nominal"})
    return maybe_zoomable(spec, opts["zoomable"])


def streamgraph(plotdata: PlotData, x: str, y: str, group: str, **opts: Any) -> Spec:
    """
    Returns the specification of a streamgraph.

    A streamgraph is an area plot of `group` stacked around a central axis. Accepts the
    options of `area`; `mode` and `color_by` are set by the plot.
    """
    opts = {**opts, "color_by": group, "mode": "streamgraph"}
    return area(plotdata, x, y, **opts)


## Bar plots

_BAR, _BAR_SCHEMA = schema(
    [
        GLOBAL_OPTS,
        GENERAL_MARK_OPTS,
        "orient",
        "stacked",
        "color_by",
        "aggregate",
        "x",
        "y",
        "x_offset",
        "y_offset",
        "color",
    ]
)


@documented(_BAR)
def bar(plotdata: PlotData, field: str, value: str, **opts: Any) -> Spec:
    """
    Returns the specification of a bar chart.

    `field` is the categorical field and `value` the height of each bar. With the default
    horizontal orientation the categories are placed on the x axis. If `color_by` is set
    and `stacked` is False, the bars of each category are grouped side by side.
    """
    opts = validate("bar", _BAR_SCHEMA, opts)
    cat_axis, value_axis = orient_axes(opts)
    value_extra = {"aggregate": opts["aggregate"]} if "aggregate" in opts else {}

    spec = base(plotdata, opts, _BAR)
    spec = put_mark(spec, "bar", opts, _BAR)
    spec = encode_field(spec, cat_axis, field, opts, type="nominal")
    spec = encode_field(spec, value_axis, value, opts, type="quantitative", **value_extra)
    spec = group(spec, opts, {"color_by": "nominal"})
    if "color_by" in opts and not opts["stacked"]:
        spec = encode_field(spec, f"{cat_axis}_offset", opts["color_by"], opts)
    return maybe_zoomable(spec, opts["zoomable"])


_COUNTPLOT, _COUNTPLOT_SCHEMA = schema(
    [
        GLOBAL_OPTS,
        GENERAL_MARK_OPTS,
        "orient",
        "stacked",
        "color_by",
        "x",
        "y",
        "x_offset",
        "y_offset",
        "color",
    ]
)


@documented(_COUNTPLOT)
def countplot(plotdata: PlotData, field: str, **opts: Any) -> Spec:
    """
    Returns the specification of a count plot.

    A count plot is a bar chart of the number of records per category of `field`.
    """
    opts = validate("countplot", _COUNTPLOT_SCHEMA, opts)
    cat_axis, count_axis = orient_axes(opts)

    spec = base(plotdata, opts, _COUNTPLOT)
    spec = put_mark(spec, "bar", opts, _COUNTPLOT)
    spec = encode_field(spec, cat_axis, field, opts, type="nominal")
    spec = encode_field(spec, count_axis, field, opts, aggregate="count")
    spec = group(spec, opts, {"color_by": None})
    if "color_by" in opts and not opts["stacked"]:
        spec = encode_field(spec, f"{cat_axis}_offset", opts["color_by"], opts)
    return maybe_zoomable(spec, opts["zoomable"])


_RANGE_BAR, _RANGE_BAR_SCHEMA = schema(
    [GLOBAL_OPTS, GENERAL_MARK_OPTS, "orient", "color_by", "x", "y", "x2", "y2", "color"]
)


@documented(_RANGE_BAR)
def range_bar(plotdata: PlotData, field: str, min: str, max: str, **opts: Any) -> Spec:  # noqa: A002
    """
    Returns the specification of a range bar chart.

    Each category of `field` gets a bar spanning from `min` to `max`. Horizontal bars (the
    default) place the categories on the y axis.
    """
    opts = validate("range_bar", _RANGE_BAR_SCHEMA, opts)
    cat_axis, value_axis = orient_axes(opts, flipped=True)

    spec = base(plotdata, opts, _RANGE_BAR)
    spec = put_mark(spec, "bar", opts, _RANGE_BAR)
    spec = encode_field(spec, cat_axis, field, opts, type="nominal")
    spec = encode_field(spec, value_axis, min, opts, type="quantitative")
    spec = encode_field(spec, f"{value_axis}2", max, opts)
    spec = group(spec, opts, {"color_by": "nominal"})
    return maybe_zoomable(spec, opts["zoomable"])


## Distribution plots

_HISTOGRAM, _HISTOGRAM_SCHEMA = schema(
    [
        GLOBAL_OPTS,
        GENERAL_MARK_OPTS,
        "orient",
        "stacked",
        "color_by",
        "extent",
        "x",
        "y",
        "x2",
        "y2",
        "color",
    ],
    {
        "stacked": {"default": False},
        "extent": {"doc": "A two-element `[min, max]` array indicating the range of the bins."},
        "relative": {
            "type": bool,
            "default": False,
            "doc": "If set a relative frequency histogram is generated.",
        },
        "maxbins": {
            "type": int,
            "doc": "The maximum number of bins.",
            "validator": options.positive_number,
        },
        "step": {
            "type": float,
            "doc": "An exact step size to use between bins. Overrides `maxbins`.",
            "validator": options.positive_number,
        },
    },
)


@documented(_HISTOGRAM)
def histogram(plotdata: PlotData, field: str, **opts: Any) -> Spec:
    """
    Returns the specification of a histogram of `field`.

    The data are binned and counted with transforms, so the bins are pre-computed
    (``bin: {"binned": True}``). With `relative` the counts are divided by the total
    count of each group and the axis shows percentages.
    """
    opts = validate("histogram", _HISTOGRAM_SCHEMA, opts)
    bin_axis, count_axis = orient_axes(opts)
    color_by = opts.get("color_by")

    bin_field = f"bin_{field}"
    count_field = f"count_{field}"

    bin_opts = {k: opts[k] for k in ("extent", "maxbins", "step") if k in opts}
    groupby = [bin_field, f"{bin_field}_end", *([color_by] if color_by else [])]

    spec = base(plotdata, opts, _HISTOGRAM)
    spec = add_transform(spec, {"bin": bin_opts or True, "field": field, "as": bin_field})
    spec = add_transform(
        spec, {"aggregate": [{"op": "count", "as": count_field}], "groupby": groupby}
    )

    y_field = count_field
    y_extra: dict[str, Any] = {}
    if opts["relative"]:
        total_field = f"total_count_{field}"
        y_field = f"percent_{field}"
        spec = add_transform(
            spec,
            {
                "joinaggregate": [{"op": "sum", "field": count_field, "as": total_field}],
                "groupby": [color_by] if color_by else [],
            },
        )
        spec = add_transform(
            spec, {"calculate": f"datum.{count_field}/datum.{total_field}", "as": y_field}
        )
        y_extra = {"title": "Relative Frequency", "axis": {"format": ".1~%"}}

    if color_by:
        y_extra["stack"] = True if opts["stacked"] else None

    spec = put_mark(spec, "bar", opts, _HISTOGRAM)
    spec = encode_field(spec, bin_axis, bin_field, opts, bin={"binned": True}, title=field)
    spec = encode_field(spec, f"{bin_axis}2", f"{bin_field}_end", opts)
    spec = encode_field(spec, count_axis, y_field, opts, type="quantitative", **y_extra)
    spec = group(spec, opts, {"color_by": None})
    return maybe_zoomable(spec, opts["zoomable"])


_DENSITY, _DENSITY_SCHEMA = schema(
    [GLOBAL_OPTS, GENERAL_MARK_OPTS, "orient", "color_by", "extent", "x", "y", "color"],
    {
        "extent": {
            "doc": (
                "A `[min, max]` domain from which to sample the distribution. If unset the "
                "extent of the input values is used."
            )
        },
        "groupby": {
            "type": list[str],
            "doc": (
                "The data fields to group by. If not set the `color_by` field (if any) is "
                "used."
            ),
            "section": "grouping",
        },
        "cumulative": {
            "type": bool,
            "default": False,
            "doc": "If set the cumulative distribution function is estimated.",
        },
        "counts": {
            "type": bool,
            "default": False,
            "doc": "If set the densities are scaled by the number of data points.",
        },
        "bandwidth": {
            "type": float,
            "doc": "The bandwidth of the Gaussian kernel. Estimated from the data if unset.",
            "validator": options.positive_number,
        },
        "maxsteps": {
            "type": int,
            "default": 200,
            "doc": "The maximum number of samples to take along the extent domain.",
        },
        "minsteps": {
            "type": int,
            "default": 25,
            "doc": "The minimum number of samples to take along the extent domain.",
        },
        "steps": {
            "type": int,
            "doc": "The exact number of samples to take. Overrides `minsteps` and `maxsteps`.",
        },
        "alias": {
            "type": str,
            "doc": (
                "Prefix of the output fields; they are named `<alias>_value` and "
                "`<alias>_density` instead of `value` and `density`."
            ),
            "validator": options.density_alias,
        },
    },
)


@documented(_DENSITY)
def density(plotdata: PlotData, field: str, **opts: Any) -> Spec:
    """
    Returns the specification of a kernel density estimation plot of `field`.

    The densities are computed with a density transform.
    """
    opts = validate("density", _DENSITY_SCHEMA, opts)
    value_axis, density_axis = orient_axes(opts)
    color_by = opts.get("color_by")

    transform: dict[str, Any] = {
        "density": field,
        "counts": opts["counts"],
        "cumulative": opts["cumulative"],
        "maxsteps": opts["maxsteps"],
        "minsteps": opts["minsteps"],
    }
    groupby = opts.get("groupby") or ([color_by] if color_by else None)
    if groupby:
        transform["groupby"] = groupby
    for key in ("bandwidth", "extent", "steps"):
        if key in opts:
            transform[key] = opts[key]
    if "alias" in opts:
        transform["as"] = opts["alias"]

    value_field, density_field = opts.get("alias", ["value", "density"])

    spec = base(plotdata, opts, _DENSITY)
    spec = add_transform(spec, transform)
    spec = put_mark(spec, "area", opts, _DENSITY, orient="horizontal" if value_axis == "y" else None)
    spec = encode_field(spec, density_axis, density_field, opts, type="quantitative")
    spec = encode_field(
        spec, value_axis, value_field, opts, type="quantitative", scale={"zero": False}
    )
    spec = group(spec, opts, {"color_by": None})
    return maybe_zoomable(spec, opts["zoomable"])


_DENSITY_HEATMAP, _DENSITY_HEATMAP_SCHEMA = schema(
    [GLOBAL_OPTS, GENERAL_MARK_OPTS, "aggregate", "x", "y", "color"],
    {
        "z": {
            "type": str,
            "doc": (
                "A field to aggregate per bin and use as the color. If not set the color "
                "is the number of records per bin."
            ),
        },
        "aggregate": {
            "doc": "The statistic applied on `z`. Defaults to `'sum'` if `z` is set.",
        },
    },
)


@documented(_DENSITY_HEATMAP)
def density_heatmap(plotdata: PlotData, x: str, y: str, **opts: Any) -> Spec:
    """
    Returns the specification of a density heatmap.

    The data are binned in two dimensions and each bin is colored by the count of
    records, or by the aggregate of the `z` field.
    """
    opts = validate("density_heatmap", _DENSITY_HEATMAP_SCHEMA, opts)

    spec = base(plotdata, opts, _DENSITY_HEATMAP)
    spec = put_mark(spec, "rect", opts, _DENSITY_HEATMAP)
    spec = encode_field(spec, "x", x, opts, type="quantitative", bin=True)
    spec = encode_field(spec, "y", y, opts, type="quantitative", bin=True)

    if "z" in opts:
        aggregate = opts.get("aggregate", "sum")
        spec = encode_field(
            spec, "color", opts["z"], opts, type="quantitative", aggregate=aggregate
        )
    else:
        aggregate = opts.get("aggregate", "count")
        spec = encode(spec, "color", opts, type="quantitative", aggregate=aggregate)
    return maybe_zoomable(spec, opts["zoomable"])


_STRIPPLOT, _STRIPPLOT_SCHEMA = schema(
    [
        GLOBAL_OPTS,
        "tooltip",
        "clip",
        "orient",
        "point_size",
        "color_by",
        "x",
        "y",
        "x_offset",
        "y_offset",
        "color",
    ],
    {
        "group": {
            "type": str,
            "doc": "A field used for splitting the strips in groups.",
            "section": "grouping",
        },
        "style": {
            "type": Literal["tick", "point", "jitter"],
            "default": "tick",
            "doc": (
                "The style of the plot: `'tick'` draws a tick per value, `'point'` a point "
                "and `'jitter'` points with a random offset."
            ),
            "section": "style",
        },
    },
)


@documented(_STRIPPLOT)
def stripplot(plotdata: PlotData, field: str, **opts: Any) -> Spec:
    """
    Returns the specification of a strip plot (a univariate scatter plot) of `field`.
    """
    opts = validate("stripplot", _STRIPPLOT_SCHEMA, opts)
    value_axis, group_axis = orient_axes(opts)
    style = opts["style"]

    spec = base(plotdata, opts, _STRIPPLOT)
    if style == "tick":
        spec = put_mark(spec, "tick", opts, _STRIPPLOT)
    else:
        spec = put_mark(spec, "point", opts, _STRIPPLOT, size=opts.get("point_size", 16))

    spec = encode_field(spec, value_axis, field, opts, type="quantitative")
    if "group" in opts:
        spec = encode_field(spec, group_axis, opts["group"], opts, type="nominal")

    if style == "jitter":
        spec = add_transform(spec, {"calculate": _JITTER_EXPR, "as": "jitter"})
        spec = encode_field(
            spec, f"{group_axis}_offset", "jitter", opts, type="quantitative", axis=None
        )

    spec = group(spec, opts, {"color_by": "nominal"})
    return maybe_zoomable(spec, opts["zoomable"])


_BOXPLOT, _BOXPLOT_SCHEMA = schema(
    [GLOBAL_OPTS, "tooltip", "clip", "opacity", "orient", "color_by", "x", "y", "color"],
    {
        "group": {
            "type": str,
            "doc": "A field used for drawing a box per group.",
            "section": "grouping",
        },
        "mode": {
            "type": Literal["tukey", "min-max"],
            "default": "tukey",
            "doc": (
                "`'tukey'` extends the whiskers to `k` times the interquartile range, "
                "`'min-max'` to the minimum and maximum values."
            ),
        },
        "k": {
            "type": float,
            "default": 1.5,
            "doc": "The interquartile range multiplier of the `'tukey'` mode.",
            "validator": options.positive_number,
        },
        "outliers": {
            "type": bool,
            "default": True,
            "doc": "Whether the outliers will be drawn. Applies to the `'tukey'` mode.",
            "section": "style",
        },
    },
)


@documented(_BOXPLOT)
def boxplot(plotdata: PlotData, field: str, **opts: Any) -> Spec:
    """
    Returns the specification of a box plot of `field`.

    The box spans the interquartile range with a line at the median.
    """
    opts = validate("boxplot", _BOXPLOT_SCHEMA, opts)
    value_axis, group_axis = orient_axes(opts)

    extent = opts["k"] if opts["mode"] == "tukey" else "min-max"
    outliers = False if not opts["outliers"] else None

    spec = base(plotdata, opts, _BOXPLOT)
    spec = put_mark(spec, "boxplot", opts, _BOXPLOT, extent=extent, outliers=outliers)
    spec = encode_field(spec, value_axis, field, opts, type="quantitative", scale={"zero": False})
    if "group" in opts:
        spec = encode_field(spec, group_axis, opts["group"], opts, type="nominal")
    spec = group(spec, opts, {"color_by": "nominal"})
    return maybe_zoomable(spec, opts["zoomable"])


ERROR_EXTENTS = ("stderr", "stdev", "ci", "iqr")

_ERRORBAR, _ERRORBAR_SCHEMA = schema(
    [GLOBAL_OPTS, "clip", "opacity", "line_color", "stroke_width", "orient", "extent", "x", "y"],
    {
        "extent": {
            "type": Literal[ERROR_EXTENTS],
            "default": "stderr",
            "validator": None,
            "doc": (
                "The extent of the error bars: the standard error, the standard deviation, "
                "the 95% confidence interval or the interquartile range."
            ),
        },
        "stroke_width": {"dest": None, "doc": "The thickness of the error bars in pixels."},
        "group": {
            "type": str,
            "doc": "A field used for drawing an error bar per group.",
            "section": "grouping",
        },
        "ticks": {
            "type": bool,
            "default": False,
            "doc": "Whether ticks will be drawn at the ends of the error bars.",
            "section": "style",
        },
    },
)


@documented(_ERRORBAR)
def errorbar(plotdata: PlotData, field: str, **opts: Any) -> Spec:
    """
    Returns the specification of an error bar plot summarizing `field`.
    """
    opts = validate("errorbar", _ERRORBAR_SCHEMA, opts)
    value_axis, group_axis = orient_axes(opts)

    spec = base(plotdata, opts, _ERRORBAR)
    spec = put_mark(
        spec,
        "errorbar",
        opts,
        _ERRORBAR,
        extent=opts["extent"],
        ticks=opts["ticks"],
        color=opts.get("line_color"),
        thickness=opts.get("stroke_width"),
    )
    spec = encode_field(spec, value_axis, field, opts, type="quantitative", scale={"zero": False})
    if "group" in opts:
        spec = encode_field(spec, group_axis, opts["group"], opts, type="nominal")
    return maybe_zoomable(spec, opts["zoomable"])


## Heatmaps

_HEATMAP, _HEATMAP_SCHEMA = schema(
    [GLOBAL_OPTS, GENERAL_MARK_OPTS, "aggregate", "x", "y", "color", "text"],
    {
        "fill_opacity": {"default": 1.0},
        "annotate": {
            "type": bool,
            "default": False,
            "doc": "If set the value of each cell is printed on it.",
            "section": "style",
        },
        "text_color": {
            "type": str,
            "doc": "The color of the annotations.",
            "section": "style",
        },
        "color_scheme": {
            "type": str,
            "doc": "The color scheme of the cells, e.g. `'blues'`.",
            "section": "style",
        },
    },
)


@documented(_HEATMAP)
def heatmap(plotdata: PlotData, x: str, y: str, color: str, **opts: Any) -> Spec:
    """
    Returns the specification of a heatmap.

    Cells are placed on a grid of two categorical fields and colored by a quantitative
    field, aggregated if `aggregate` is set.
    """
    opts = validate("heatmap", _HEATMAP_SCHEMA, opts)

    value_extra: dict[str, Any] = {"type": "quantitative"}
    if "aggregate" in opts:
        value_extra["aggregate"] = opts["aggregate"]
    color_extra = dict(value_extra)
    if "color_scheme" in opts:
        color_extra["scale"] = {"scheme": opts["color_scheme"]}

    spec = base(plotdata, opts, _HEATMAP)
    spec = encode_field(spec, "x", x, opts, type="nominal")
    spec = encode_field(spec, "y", y, opts, type="nominal")

    if not opts["annotate"]:
        spec = put_mark(spec, "rect", opts, _HEATMAP)
        spec = encode_field(spec, "color", color, opts, **color_extra)
        return maybe_zoomable(spec, opts["zoomable"])

    rect = put_mark(child_spec(spec), "rect", opts, _HEATMAP)
    rect = encode_field(rect, "color", color, opts, **color_extra)

    text_mark = {"type": "text"}
    if "text_color" in opts:
        text_mark["color"] = opts["text_color"]
    text = put_in_spec(child_spec(spec), "mark", text_mark)
    text = encode_field(text, "text", color, opts, **value_extra)

    spec = {**spec, "layer": [bare_layer(rect), bare_layer(text)]}
    return maybe_zoomable(spec, opts["zoomable"])


## Pie charts

_PIE_NAMES = [GLOBAL_OPTS, GENERAL_MARK_OPTS, "aggregate", "theta", "color"]
_PIE, _PIE_SCHEMA = schema(_PIE_NAMES)
_DONUT, _DONUT_SCHEMA = schema(
    _PIE_NAMES,
    {
        "inner_radius": {
            "type": int,
            "default": 50,
            "doc": "The inner radius in pixels.",
            "section": "style",
            "dest": "mark",
            "validator": options.positive_number,
        }
    },
)


def _pie(plotdata: PlotData, field: str, category: str, opts: dict[str, Any], option_set: OptionSet) -> Spec:
    theta_extra = {"aggregate": opts["aggregate"]} if "aggregate" in opts else {}

    spec = base(plotdata, opts, option_set)
    spec = put_mark(spec, "arc", opts, option_set)
    spec = encode_field(spec, "theta", field, opts, type="quantitative", **theta_extra)
    spec = encode_field(spec, "color", category, opts)
    return maybe_zoomable(spec, opts["zoomable"])


@documented(_PIE)
def pie(plotdata: PlotData, field: str, category: str, **opts: Any) -> Spec:
    """
    Returns the specification of a pie chart.

    `field` is the quantitative field giving the size of each slice and `category` the
    field the slices are colored by.
    """
    opts = validate("pie", _PIE_SCHEMA, opts)
    return _pie(plotdata, field, category, opts, _PIE)


@documented(_DONUT)
def donut(plotdata: PlotData, field: str, category: str, **opts: Any) -> Spec:
    """Returns the specification of a donut chart, a pie chart with a hole."""
    opts = validate("donut", _DONUT_SCHEMA, opts)
    return _pie(plotdata, field, category, opts, _DONUT)


## Rulers

_RULER, _RULER_SCHEMA = schema(
    ["opacity", "line_color", "stroke_width", "stroke_dash", "group_by", "aggregate", "x", "y", "color"],
    {
        "line_color": {"default": "black"},
        "stroke_width": {"default": 1},
    },
)


@documented(_RULER)
def ruler(spec: Spec, axis: Literal["x", "y"], value: str | float, **opts: Any) -> Spec:
    """
    Adds a ruler layer to the plot.

    `value` is either a constant or a data field. A field is aggregated with `aggregate`
    if set, otherwise a rule is drawn per data point.

    Raises:
        ValueError: If `axis` is not "x" or "y" or `value` is neither a string nor a number.
    """
    if axis not in ("x", "y"):
        raise ValueError(f"expected axis to be one of 'x', 'y', got: {axis!r}")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise ValueError(f"expected a field name or a number, got: {value!r}")
    opts = validate("ruler", _RULER_SCHEMA, opts)

    layer = put_mark(
        child_spec(spec), "rule", opts, _RULER, color=opts["line_color"]
    )
    if isinstance(value, str):
        extra = {"aggregate": opts["aggregate"]} if "aggregate" in opts else {}
        layer = encode_field(layer, axis, value, opts, type="quantitative", **extra)
    else:
        layer = encode(layer, axis, opts, datum=value)
    layer = group(layer, opts, {"group_by": "nominal"})

    return append_layers(spec, layer)


def hruler(spec: Spec, value: str | float, **opts: Any) -> Spec:
    """Adds a horizontal ruler at `value` of the y axis. See `ruler`."""
    return ruler(spec, "y", value, **opts)


def vruler(spec: Spec, value: str | float, **opts: Any) -> Spec:
    """Adds a vertical ruler at `value` of the x axis. See `ruler`."""
    return ruler(spec, "x", value, **opts)

