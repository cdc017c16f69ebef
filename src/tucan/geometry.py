"""
Geometric shapes drawn as layers on top of a plot.

Every shape is a line mark over a small dataset of its own (a sequence of angles for
circles and ellipses, inline vertices for polylines), ordered so that the line follows
the shape's outline. Shapes are appended as new layers of the given specification.

Examples:
    >>> from tucan.geometry import rectangle
    >>> spec = rectangle({}, (0, 0), (2, 1))
    >>> [(v["x"], v["y"]) for v in spec["layer"][0]["data"]["values"]]
    [(0, 0), (0, 1), (2, 1), (2, 0), (0, 0)]
"""

from __future__ import annotations

from collections.abc import Sequence
from numbers import Number
from typing import Any

from .core.layers import append_layers
from .core.options import OptionDescriptor
from .core.typing import Point, Spec
from .plots import documented, put_mark, schema, validate

__all__ = ["circle", "ellipse", "polyline", "rectangle"]

_NAMES = [
    "line_color",
    "fill_color",
    "stroke_width",
    "stroke_dash",
    "stroke_opacity",
    "opacity",
    "fill_opacity",
]
_EXTRA: dict[str, Any] = {"stroke_width": {"default": 1}}

_SHAPE, _SHAPE_SCHEMA = schema(_NAMES, _EXTRA)
_POLYLINE, _POLYLINE_SCHEMA = schema(
    _NAMES,
    {
        **_EXTRA,
        "closed": OptionDescriptor(
            "closed",
            bool,
            default=False,
            doc="Whether the first vertex is appended to the end to close the polyline.",
        ),
    },
)

_ANGLES = {"sequence": {"start": 0, "stop": 361, "step": 0.1, "as": "theta"}}
_RAD = "datum.theta*PI/180"


def _check_point(point: Any, name: str) -> tuple[float, float]:
    if (
        isinstance(point, Sequence)
        and len(point) == 2
        and all(isinstance(v, Number) and not isinstance(v, bool) for v in point)
    ):
        return point[0], point[1]
    raise ValueError(f"expected {name} to be an (x, y) pair of numbers, got: {point!r}")


def _check_positive(value: Any, name: str) -> None:
    if isinstance(value, bool) or not isinstance(value, Number) or value <= 0:
        raise ValueError(f"{name} must be a positive number, got: {value!r}")


def _shape_layer(
    data: dict[str, Any],
    transform: list[dict[str, Any]],
    order: str,
    opts: dict[str, Any],
    option_set: dict[str, OptionDescriptor],
) -> Spec:
    layer: Spec = {"data": data}
    if transform:
        layer["transform"] = transform
    layer = put_mark(
        layer,
        "line",
        opts,
        option_set,
        color=opts.get("line_color"),
        fill=opts.get("fill_color"),
    )
    layer["encoding"] = {
        "x": {"field": "x", "type": "quantitative"},
        "y": {"field": "y", "type": "quantitative"},
        "order": {"field": order},
    }
    return layer


@documented(_SHAPE)
def circle(spec: Spec, center: Point, radius: float, **opts: Any) -> Spec:
    """
    Draws a circle of the given `center` and `radius`.

    Raises:
        ValueError: If the center is not a pair of numbers or the radius is not positive.
    """
    x, y = _check_point(center, "center")
    _check_positive(radius, "radius")
    opts = validate("circle", _SHAPE_SCHEMA, opts)

    transform = [
        {"calculate": f"{x} + cos({_RAD}) * {radius}", "as": "x"},
        {"calculate": f"{y} + sin({_RAD}) * {radius}", "as": "y"},
    ]
    return append_layers(spec, _shape_layer(_ANGLES, transform, "theta", opts, _SHAPE))


@documented(_SHAPE)
def ellipse(spec: Spec, center: Point, a: float, b: float, angle: float = 0, **opts: Any) -> Spec:
    """
    Draws an ellipse of the given `center` and semi-axes `a` (along x) and `b` (along y),
    rotated counter-clockwise by `angle` degrees.

    Raises:
        ValueError: If the center is not a pair of numbers or a semi-axis is not positive.
    """
    x, y = _check_point(center, "center")
    _check_positive(a, "a")
    _check_positive(b, "b")
    opts = validate("ellipse", _SHAPE_SCHEMA, opts)

    rotation = f"{angle}*PI/180"
    transform = [
        {
            "calculate": (
                f"{x} + {a} * cos({_RAD}) * cos({rotation}) "
                f"- {b} * sin({_RAD}) * sin({rotation})"
            ),
            "as": "x",
        },
        {
            "calculate": (
                f"{y} + {a} * cos({_RAD}) * sin({rotation}) "
                f"+ {b} * sin({_RAD}) * cos({rotation})"
            ),
            "as": "y",
        },
    ]
    return append_layers(spec, _shape_layer(_ANGLES, transform, "theta", opts, _SHAPE))


def _polyline(spec: Spec, vertices: Sequence[Point], opts: dict[str, Any], option_set: dict) -> Spec:
    points = [_check_point(v, "vertex") for v in vertices]
    if len(points) < 2:
        raise ValueError(f"a polyline expects at least 2 vertices, got: {len(points)}")
    if opts.get("closed"):
        points.append(points[0])

    values = [{"x": x, "y": y, "order": i} for i, (x, y) in enumerate(points)]
    return append_layers(spec, _shape_layer({"values": values}, [], "order", opts, option_set))


@documented(_POLYLINE)
def polyline(spec: Spec, vertices: Sequence[Point], **opts: Any) -> Spec:
    """
    Draws a polyline through the given vertices, in order.

    Raises:
        ValueError: If a vertex is not a pair of numbers or fewer than 2 are given.
    """
    opts = validate("polyline", _POLYLINE_SCHEMA, opts)
    return _polyline(spec, vertices, opts, _POLYLINE)


@documented(_SHAPE)
def rectangle(spec: Spec, p1: Point, p2: Point, **opts: Any) -> Spec:
    """
    Draws a rectangle defined by two opposite corners.

    Raises:
        ValueError: If the two points share an x or a y coordinate.
    """
    x1, y1 = _check_point(p1, "p1")
    x2, y2 = _check_point(p2, "p2")
    if x1 == x2:
        raise ValueError("the two points must have different x coordinates")
    if y1 == y2:
        raise ValueError("the two points must have different y coordinates")
    opts = validate("rectangle", _SHAPE_SCHEMA, opts)

    left, right = sorted((x1, x2))
    bottom, top = sorted((y1, y2))
    vertices = [(left, bottom), (left, top), (right, top), (right, bottom), (left, bottom)]
    return _polyline(spec, vertices, opts, _SHAPE)
