"""
Serializer boundary: turn a tucan specification into wire-format Vega-Lite.

Responsibilities
- to_spec: bare Vega-Lite dict (``$schema`` added, metadata namespace stripped, dates as
  ISO-8601 strings, configured theme applied).
- to_json / to_html: text renditions; the HTML page uses altair's embedding template and
  the Vega / Vega-Lite / vega-embed versions pinned by the installed altair.
- save: write ``.json`` or ``.html`` files.

Notes
- Nothing is rendered here; image formats are not supported.
- The schema URL and embed versions come from altair so that the emitted spec always
  matches the grammar version altair validates against.

Examples:
    >>> from tucan.export import to_spec
    >>> spec = to_spec({"mark": {"type": "point"}, "__tucan__": {"types": {}}})
    >>> "__tucan__" in spec, spec["$schema"].startswith("https://vega.github.io/schema/vega-lite/")
    (False, True)
"""

from __future__ import annotations

import datetime as dt
import json
import logging
import os
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any, Literal

import altair as alt
from altair.utils.html import spec_to_html

from .config import TucanSettings, get_settings
from .core.constants import METADATA_KEY, SCHEMA_KEY
from .themes import set_theme

__all__ = ["to_spec", "to_json", "to_html", "save"]

logger = logging.getLogger(__name__)

ExportFormat = Literal["json", "html"]


def _clean(value: Any) -> Any:
    if isinstance(value, Mapping):
        return {k: _clean(v) for k, v in value.items() if k != METADATA_KEY}
    if isinstance(value, (list, tuple)):
        return [_clean(v) for v in value]
    if isinstance(value, (dt.date, dt.datetime, dt.time)):
        return value.isoformat()
    if isinstance(value, Enum):
        return value.value
    return value


def to_spec(spec: Mapping[str, Any], *, settings: TucanSettings | None = None) -> dict[str, Any]:
    """
    Return the wire-format Vega-Lite specification.

    Args:
        spec (Mapping): tucan specification.
        settings (TucanSettings | None): Defaults to the process-wide settings.
    """
    settings = settings or get_settings()

    out = _clean(spec)
    if settings.theme:
        out = set_theme(out, settings.theme)
    if settings.include_schema:
        out = {SCHEMA_KEY: alt.SCHEMA_URL, **{k: v for k, v in out.items() if k != SCHEMA_KEY}}
    return out


def to_json(
    spec: Mapping[str, Any], *, indent: int | None = 2, settings: TucanSettings | None = None
) -> str:
    """Serialize the specification as JSON text."""
    return json.dumps(to_spec(spec, settings=settings), indent=indent)


def to_html(spec: Mapping[str, Any], *, settings: TucanSettings | None = None) -> str:
    """Build a standalone HTML page embedding the specification with vega-embed."""
    return spec_to_html(
        to_spec(spec, settings=settings),
        mode="vega-lite",
        vega_version=alt.VEGA_VERSION,
        vegaembed_version=alt.VEGAEMBED_VERSION,
        vegalite_version=alt.VEGALITE_VERSION,
    )


def save(
    spec: Mapping[str, Any],
    path: str | os.PathLike[str],
    *,
    format: ExportFormat | None = None,
    settings: TucanSettings | None = None,
) -> Path:
    """
    Save the specification to `path`.

    Args:
        spec (Mapping): tucan specification.
        path: Target file.
        format: "json" or "html"; inferred from the file extension when None.

    Returns:
        Path: The written file.

    Raises:
        ValueError: On an unsupported format.
    """
    target = Path(path)
    fmt = format or target.suffix.lstrip(".").lower()

    if fmt == "json":
        content = to_json(spec, settings=settings)
    elif fmt == "html":
        content = to_html(spec, settings=settings)
    else:
        raise ValueError(f"unsupported export format {fmt!r}, expected one of: json, html")

    target.write_text(content, encoding="utf-8")
    logger.debug("saved %s spec to %s", fmt, target)
    return target
