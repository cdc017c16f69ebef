"""
tucan: a plotting library building Vega-Lite specifications.

## Responsibilities
- Turn tabular data plus a few semantic parameters into complete Vega-Lite
  specifications (plain dicts) ready to be rendered by an external engine.
- Provide composable helpers to restyle, regroup, layer and concatenate plots.
- Nothing is rendered here; see tucan.export for the serialization boundary.

## Public API
- Plot builders: scatter, bubble, lineplot, step, area, streamgraph, bar, countplot,
  range_bar, histogram, density, density_heatmap, heatmap, punchcard, stripplot,
  boxplot, errorbar, errorband, lollipop, pie, donut, jointplot, pairplot, candlestick.
- Layers and rulers: layers, ruler, hruler, vruler.
- Composition: hconcat, vconcat, concat.
- Grouping: color_by, shape_by, fill_by, size_by, stroke_dash_by.
- Layout: new, data, set_width, set_height, set_size, set_title, set_theme, flip_axes.
- Styling modules: tucan.axes, tucan.scale, tucan.legend, tucan.grid, tucan.view,
  tucan.geometry, tucan.transform.

## Import DAG discipline
- tucan.core depends only on stdlib, pydantic and polars and never imports the higher
  layers (plots, composite, styling modules, export).

## Examples
```python
import tucan
from tucan.export import to_json

spec = tucan.scatter("iris", "petal_width", "petal_length", color_by="species", width=400)
spec = tucan.set_title(spec, "Iris petals")
to_json(spec)  # doctest: +SKIP
```
"""

from __future__ import annotations

from .base import (
    color_by,
    data,
    fill_by,
    flip_axes,
    layers,
    new,
    set_height,
    set_size,
    set_title,
    set_width,
    shape_by,
    size_by,
    stroke_dash_by,
)
from .composite import errorband, jointplot, lollipop, pairplot
from .concat import concat, hconcat, vconcat
from .finance import candlestick
from .plots import (
    area,
    bar,
    boxplot,
    bubble,
    countplot,
    density,
    density_heatmap,
    donut,
    errorbar,
    heatmap,
    histogram,
    hruler,
    lineplot,
    pie,
    punchcard,
    range_bar,
    ruler,
    scatter,
    step,
    streamgraph,
    stripplot,
    vruler,
)
from .themes import set_theme

__version__ = "0.4.0"

__all__ = [
    # plots
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
    "errorband",
    "lollipop",
    "pie",
    "donut",
    "jointplot",
    "pairplot",
    "candlestick",
    # layers
    "layers",
    "ruler",
    "hruler",
    "vruler",
    # composition
    "hconcat",
    "vconcat",
    "concat",
    # grouping
    "color_by",
    "shape_by",
    "fill_by",
    "size_by",
    "stroke_dash_by",
    # layout
    "new",
    "data",
    "set_width",
    "set_height",
    "set_size",
    "set_title",
    "set_theme",
    "flip_axes",
]
