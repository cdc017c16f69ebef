"""
Options schema registry: reusable named plot options and per-plot validation schemas.

Every option is described once by an OptionDescriptor in the global registry. Plot
builders compose the options they support with `take`, build a validation schema with
`to_validation_schema` and route validated values to the right part of the specification
with `take_by_destination`.

Descriptor fields
- name, type (annotation validated by pydantic), default, doc
- section: documentation grouping (see SECTIONS)
- dest: "mark" | "spec" | "encoding" | None (None means handled by the builder)
- required: fail validation when missing
- validator: optional callable normalizing the value, raising ValueError on failure

Notes:
    - The registry is a plain dict built at import time; `take` operates over it at call
      time and never mutates it.
    - Validation uses a pydantic model with extra="forbid" and strict=True. pydantic
      ValidationError is translated into OptionsError (chained).
    - Only keys that were provided or that have a default are present in validated
      options.

Examples:
    >>> from tucan.core import options
    >>> opts = options.take(["width", "fill_opacity"])
    >>> schema = options.to_validation_schema(opts)
    >>> schema.validate({"width": 100})
    {'width': 100, 'fill_opacity': 0.5}
    >>> options.take_by_destination(schema.validate({"width": 10}), opts, "spec")
    {'width': 10}
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, replace
from numbers import Number
from typing import Annotated, Any, Literal, get_args, get_origin

from pydantic import AfterValidator, ConfigDict, ValidationError, create_model

from .constants import SHAPES
from .errors import OptionsError
from .typing import Destination

__all__ = [
    "NO_DEFAULT",
    "OptionDescriptor",
    "Section",
    "SECTIONS",
    "OPTIONS",
    "OptionsSchema",
    "take",
    "to_validation_schema",
    "take_by_destination",
    "section_options",
    "docs",
    "tooltip",
    "extent",
    "density_alias",
    "number_between",
    "positive_number",
    "GLOBAL_OPTS",
    "GENERAL_MARK_OPTS",
    "AGGREGATES",
]


class _NoDefault:
    def __repr__(self) -> str:
        return "NO_DEFAULT"


NO_DEFAULT: Any = _NoDefault()


@dataclass(frozen=True)
class OptionDescriptor:
    """Static registration record of a single plot option."""

    name: str
    type: Any = Any
    default: Any = NO_DEFAULT
    doc: str = ""
    section: str | None = None
    dest: Destination | None = None
    required: bool = False
    validator: Callable[[Any], Any] | None = None

    @property
    def has_default(self) -> bool:
        return self.default is not NO_DEFAULT


@dataclass(frozen=True)
class Section:
    """Documentation section; sections render sorted by `order`."""

    order: int
    header: str | None = None
    doc: str | None = None


SECTIONS: dict[str, Section] = {
    "unknown": Section(order=-1),
    "encodings": Section(
        order=1,
        header="Encodings Custom Options",
        doc=(
            "Every encoding channel of a plot accepts a mapping of Vega-Lite channel "
            "properties. It is deep merged with the plot defaults and takes precedence."
        ),
    ),
    "style": Section(order=3, header="Styling Options"),
    "grouping": Section(order=5, header="Grouping Options"),
    "general_mark": Section(order=7, header="Interactivity Options"),
    "global": Section(order=10, header="Global Options"),
}

AGGREGATES: tuple[str, ...] = (
    "count",
    "valid",
    "values",
    "missing",
    "distinct",
    "sum",
    "product",
    "mean",
    "average",
    "variance",
    "variancep",
    "stdev",
    "stdevp",
    "stderr",
    "median",
    "q1",
    "q3",
    "ci0",
    "ci1",
    "min",
    "max",
    "argmin",
    "argmax",
)


## Custom validators


def tooltip(value: Any) -> Any:
    """Normalize a tooltip option: bool, "encoding" (-> True) or "data"."""
    if isinstance(value, bool):
        return value
    if value == "encoding":
        return True
    if value == "data":
        return {"content": "data"}
    raise ValueError(f"expected a boolean, 'encoding' or 'data', got: {value!r}")


def extent(value: Any) -> list[float]:
    """Validate a ``[min, max]`` pair of numbers with min < max."""
    if (
        isinstance(value, (list, tuple))
        and len(value) == 2
        and all(isinstance(v, Number) and not isinstance(v, bool) for v in value)
    ):
        lo, hi = value
        if lo < hi:
            return [lo, hi]
        raise ValueError(f"expected [min, max] where max > min, got: {list(value)!r}")
    raise ValueError(
        f"expected [min, max] where min, max numbers and max > min, got: {value!r}"
    )


def density_alias(value: Any) -> list[str]:
    """Expand a density alias to the ``[<alias>_value, <alias>_density]`` output fields."""
    if isinstance(value, str):
        return [f"{value}_value", f"{value}_density"]
    raise ValueError(f"expected a string, got: {value!r}")


def number_between(low: float, high: float) -> Callable[[Any], Any]:
    """Build a validator accepting numbers in the closed range [low, high]."""

    def _validate(value: Any) -> Any:
        if isinstance(value, Number) and not isinstance(value, bool) and low <= value <= high:
            return value
        raise ValueError(f"expected a number between {low} and {high}, got: {value!r}")

    return _validate


def positive_number(value: Any) -> Any:
    if isinstance(value, Number) and not isinstance(value, bool) and value > 0:
        return value
    raise ValueError(f"expected a positive number, got: {value!r}")


## Registry

_CHANNEL_DOC = "Extra Vega-Lite options for the `{}` encoding channel."

_ENCODING_CHANNELS = (
    "x",
    "y",
    "x2",
    "y2",
    "x_offset",
    "y_offset",
    "color",
    "fill",
    "shape",
    "size",
    "theta",
    "text",
    "detail",
)

_DESCRIPTORS: list[OptionDescriptor] = [
    # Global
    OptionDescriptor("width", int, doc="Width of the image", section="global", dest="spec"),
    OptionDescriptor("height", int, doc="Height of the image", section="global", dest="spec"),
    OptionDescriptor("title", str, doc="The title of the graph", section="global", dest="spec"),
    # Interactivity
    OptionDescriptor(
        "tooltip",
        Any,
        doc=(
            "The tooltip to show upon mouse hover. `True` or `'encoding'` uses all encoded "
            "fields, `'data'` uses all fields of the highlighted data point, `False` "
            "disables it."
        ),
        section="general_mark",
        dest="mark",
        validator=tooltip,
    ),
    OptionDescriptor(
        "zoomable",
        bool,
        default=False,
        doc="Whether the plot will be zoomable and pannable.",
        section="general_mark",
    ),
    # Mark (uncategorized)
    OptionDescriptor(
        "clip",
        bool,
        doc="Whether a mark will be clipped to the enclosing group's width and height.",
        dest="mark",
    ),
    OptionDescriptor(
        "fill_opacity",
        float,
        default=0.5,
        doc="The fill opacity of the plotted elements.",
        dest="mark",
        validator=number_between(0, 1),
    ),
    OptionDescriptor(
        "opacity",
        float,
        doc="The overall opacity of the mark.",
        section="style",
        dest="mark",
        validator=number_between(0, 1),
    ),
    OptionDescriptor(
        "stroke_opacity",
        float,
        doc="The stroke opacity of the mark.",
        section="style",
        dest="mark",
        validator=number_between(0, 1),
    ),
    OptionDescriptor(
        "stroke_width",
        float,
        doc="The stroke width in pixels.",
        section="style",
        dest="mark",
        validator=positive_number,
    ),
    OptionDescriptor(
        "stroke_dash",
        list[float],
        doc="An array of alternating stroke and space lengths for dashed lines.",
        section="style",
        dest="mark",
    ),
    OptionDescriptor(
        "line_color",
        str,
        doc="The color of the line (stroke) of the mark.",
        section="style",
    ),
    OptionDescriptor(
        "fill_color",
        str,
        doc="The fill color of the mark. If not set the mark is not filled.",
        section="style",
    ),
    OptionDescriptor(
        "point_shape",
        Literal[SHAPES],  # type: ignore[valid-type]
        doc="Shape of the point marks.",
        section="style",
    ),
    OptionDescriptor(
        "point_size",
        int,
        doc="The pixel area of the point marks.",
        section="style",
        validator=positive_number,
    ),
    OptionDescriptor("point_color", str, doc="The color of the point marks.", section="style"),
    OptionDescriptor(
        "filled",
        bool,
        doc="Whether the point marks will be filled or not.",
        section="style",
        dest="mark",
    ),
    OptionDescriptor(
        "interpolate",
        Literal[
            "linear",
            "linear-closed",
            "step",
            "step-before",
            "step-after",
            "basis",
            "cardinal",
            "monotone",
        ],
        doc="The line interpolation method.",
        section="style",
        dest="mark",
    ),
    OptionDescriptor(
        "orient",
        Literal["horizontal", "vertical"],
        default="horizontal",
        doc="The plot's orientation, can be either `'horizontal'` or `'vertical'`.",
    ),
    # Grouping
    OptionDescriptor(
        "stacked",
        bool,
        default=True,
        doc="Whether the bars will be stacked. Applied only if a grouping has been defined.",
        section="grouping",
    ),
    OptionDescriptor(
        "color_by",
        str,
        doc="A data field used for coloring the data. Considered nominal by default.",
        section="grouping",
    ),
    OptionDescriptor(
        "shape_by",
        str,
        doc="A data field used for the shape of the data points. Nominal by default.",
        section="grouping",
    ),
    OptionDescriptor(
        "size_by",
        str,
        doc="A data field used for the size of the data points. Quantitative by default.",
        section="grouping",
    ),
    OptionDescriptor(
        "fill_by",
        str,
        doc="A data field used for the fill color of the marks.",
        section="grouping",
    ),
    OptionDescriptor(
        "group_by",
        str,
        doc="A data field used for grouping the data into separate lines.",
        section="grouping",
    ),
    OptionDescriptor(
        "aggregate",
        Literal[AGGREGATES],  # type: ignore[valid-type]
        doc="The statistic to apply on the quantitative field.",
    ),
    OptionDescriptor(
        "extent",
        Any,
        doc="A `[min, max]` domain to use.",
        validator=extent,
    ),
    *(
        OptionDescriptor(
            channel,
            dict[str, Any],
            doc=_CHANNEL_DOC.format(channel),
            section="encodings",
            dest="encoding",
        )
        for channel in _ENCODING_CHANNELS
    ),
]

OPTIONS: dict[str, OptionDescriptor] = {d.name: d for d in _DESCRIPTORS}

GLOBAL_OPTS: list[str] = ["width", "height", "title", "zoomable"]
GENERAL_MARK_OPTS: list[str] = ["clip", "fill_opacity", "tooltip"]


def _flatten(names: Iterable[Any]) -> list[str]:
    out: list[str] = []
    for name in names:
        if isinstance(name, str):
            out.append(name)
        else:
            out.extend(_flatten(name))
    return out


def take(
    names: Iterable[str | Iterable[str]],
    extra: Mapping[str, OptionDescriptor | Mapping[str, Any]] | None = None,
) -> dict[str, OptionDescriptor]:
    """
    Select registered options by name and merge ad hoc `extra` definitions.

    Args:
        names: Option names; nested lists are flattened.
        extra: Per-name overrides. For a registered (or taken) name, a mapping of
            descriptor fields partially overrides it (e.g. ``{"default": 1}``). For a new
            name, either a full OptionDescriptor or a mapping of its fields.

    Returns:
        dict[str, OptionDescriptor]: Ordered option set.

    Raises:
        OptionsError: On duplicated or unregistered names.
    """
    flat = _flatten(names)

    seen: set[str] = set()
    duplicates: list[str] = []
    for name in flat:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    if duplicates:
        raise OptionsError(f"the following options were defined more than once: {duplicates}")

    unknown = [name for name in flat if name not in OPTIONS]
    if unknown:
        raise OptionsError(f"unknown options: {unknown}")

    option_set = {name: OPTIONS[name] for name in flat}

    for name, spec in (extra or {}).items():
        if isinstance(spec, OptionDescriptor):
            option_set[name] = replace(spec, name=name)
        elif name in option_set:
            option_set[name] = replace(option_set[name], **dict(spec))
        elif name in OPTIONS:
            option_set[name] = replace(OPTIONS[name], **dict(spec))
        else:
            option_set[name] = OptionDescriptor(name=name, **dict(spec))
    return option_set


class OptionsSchema:
    """
    Validation-only view of an option set.

    Holds a pydantic model (authoring metadata such as section and dest stripped) and
    the descriptors it was built from.
    """

    def __init__(self, model: type, descriptors: Mapping[str, OptionDescriptor]) -> None:
        self.model = model
        self.descriptors = dict(descriptors)

    @property
    def names(self) -> list[str]:
        return list(self.descriptors)

    def validate(self, opts: Mapping[str, Any] | None = None) -> dict[str, Any]:
        """
        Validate user options, applying defaults and custom validators.

        Raises:
            OptionsError: Naming the offending option and the constraint.
        """
        opts = dict(opts or {})
        try:
            instance = self.model(**opts)
        except ValidationError as exc:
            raise OptionsError(_format_errors(exc)) from exc

        return {
            name: getattr(instance, name)
            for name, descriptor in self.descriptors.items()
            if name in instance.model_fields_set or descriptor.has_default
        }

    def __repr__(self) -> str:
        return f"OptionsSchema({self.names})"


def _format_errors(exc: ValidationError) -> str:
    messages = []
    for err in exc.errors():
        name = ".".join(str(part) for part in err.get("loc", ())) or "options"
        kind = err.get("type")
        if kind == "extra_forbidden":
            messages.append(f"unknown option {name!r}")
        elif kind == "missing":
            messages.append(f"required option {name!r} not found")
        else:
            msg = str(err.get("msg", "")).removeprefix("Value error, ")
            messages.append(f"invalid value for {name!r} option: {msg}")
    return "; ".join(messages)


def to_validation_schema(option_set: Mapping[str, OptionDescriptor]) -> OptionsSchema:
    """Build an OptionsSchema (pydantic model) from an option set."""
    fields: dict[str, Any] = {}
    for name, descriptor in option_set.items():
        annotation = descriptor.type
        if descriptor.validator is not None:
            annotation = Annotated[annotation, AfterValidator(descriptor.validator)]

        if descriptor.required:
            fields[name] = (annotation, ...)
        elif descriptor.has_default:
            fields[name] = (annotation, descriptor.default)
        else:
            # defaults are not validated; None marks an unset optional option
            fields[name] = (annotation, None)

    model = create_model(
        "PlotOptions",
        __config__=ConfigDict(extra="forbid", strict=True),
        **fields,
    )
    return OptionsSchema(model, option_set)


def take_by_destination(
    validated: Mapping[str, Any],
    option_set: Mapping[str, OptionDescriptor],
    dest: Destination,
) -> dict[str, Any]:
    """Filter validated options down to those whose descriptor targets `dest`."""
    return {
        name: value
        for name, value in validated.items()
        if name in option_set and option_set[name].dest == dest
    }


def section_options(section: str) -> list[str]:
    """
    Names of the registered options of `section`.

    Raises:
        OptionsError: If no option is defined for `section`.
    """
    names = [name for name, d in OPTIONS.items() if d.section == section]
    if not names:
        raise OptionsError(f"no option defined for section: {section}")
    return names


## Documentation


def _type_name(annotation: Any) -> str:
    if annotation is Any:
        return "any"
    if get_origin(annotation) is Literal:
        return " | ".join(repr(a) for a in get_args(annotation))
    if isinstance(annotation, type) and not get_args(annotation):
        return annotation.__name__
    return str(annotation).replace("typing.", "")


def _option_doc(descriptor: OptionDescriptor) -> str:
    line = f"* `{descriptor.name}` (`{_type_name(descriptor.type)}`) - "
    if descriptor.required:
        line += "Required. "
    line += " ".join(descriptor.doc.split())
    if descriptor.has_default:
        line += f" The default value is `{descriptor.default!r}`."
    return line


def docs(
    option_set: Mapping[str, OptionDescriptor],
    sections: Mapping[str, Section] | None = None,
) -> str:
    """
    Render markdown documentation of an option set grouped by section.

    Sections are sorted by their order; options inside a section by name. The
    "unknown" section (options without a section) has no header.

    Raises:
        OptionsError: If an option refers to a section not in `sections`.
    """
    sections = SECTIONS if sections is None else sections

    grouped: dict[str, list[OptionDescriptor]] = {}
    for descriptor in option_set.values():
        grouped.setdefault(descriptor.section or "unknown", []).append(descriptor)

    missing = [name for name in grouped if name not in sections]
    if missing:
        raise OptionsError(f"undefined documentation sections: {missing}")

    blocks = []
    for name in sorted(grouped, key=lambda s: sections[s].order):
        section = sections[name]
        parts = []
        if name != "unknown" and section.header:
            parts.append(f"### {section.header}")
        if section.doc:
            parts.append(section.doc)
        parts.append(
            "\n".join(_option_doc(d) for d in sorted(grouped[name], key=lambda d: d.name))
        )
        blocks.append("\n\n".join(parts))
    return "\n\n".join(blocks)
