"""
Core package aggregator for tucan specification contracts (shapes, merge, layers, options).

## Contracts (single source of truth)
- View: the specification tree model (shapes, predicates, shape validators).
- Encoding: the encoding option merger and raw encoding helpers.
- Layers: promotion of single views and layer insertion.
- Data: column type inference for inline tabular data.
- Options: the options registry used by every plot builder.
- Naming/Merge: snake_case to camelCase key conversion and deep merge.

## Notes
- Zero-IO policy: stdlib + pydantic (+ polars for dataframe inference); no file/network IO.
- Specification nodes are plain dicts. Every operation returns a new dict and never
  mutates its inputs.
- Naming policy: option names are lower_snake; Vega-Lite keys are camelCase on the wire.

## Downstream usage
- tucan.plots / tucan.composite: validate options, build base nodes, encode channels.
- tucan.axes / tucan.scale / tucan.legend / tucan.grid: strict channel styling via
  `put_encoding_options`.
- tucan.export: strips the metadata namespace (`METADATA_KEY`) at the serialization boundary.

## Examples
```python
from tucan.core.encoding import encode_field_raw, put_encoding_options
from tucan.core.layers import append_layers

spec = encode_field_raw({"mark": {"type": "point"}}, "x", "a", type="quantitative")
spec = put_encoding_options(spec, "x", {"axis": {"grid": False}}, strict=True)
append_layers(spec, {"mark": {"type": "rule"}})["layer"][1]  # {'mark': {'type': 'rule'}}
```
"""

from __future__ import annotations
