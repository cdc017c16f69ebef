"""
Theme registry.

A theme is a JSON file shipped in this package with the following shape::

    {
        "name": "dark",               # unique name
        "theme": {...},               # Vega-Lite config object (camelCase keys)
        "doc": "A dark theme",        # optional description
        "source": "https://..."       # optional attribution URL
    }

Themes are loaded lazily on first use and validated with a pydantic model. Files that
cannot be parsed or do not validate are skipped with a logged warning.

The bundled themes are borrowed from the Vega Themes project.

Examples:
    >>> from tucan.themes import theme, set_theme
    >>> theme("dark")["background"]
    '#333'
    >>> set_theme({"mark": {"type": "point"}}, "dark")["config"]["background"]
    '#333'
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from ..core.errors import ThemeError
from ..core.merge import deep_merge

__all__ = [
    "ThemeDefinition",
    "load_themes",
    "themes",
    "theme",
    "set_theme",
    "list_themes",
]

logger = logging.getLogger(__name__)


class ThemeDefinition(BaseModel):
    """Validated theme file contents."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    name: str
    theme: dict[str, Any]
    doc: str = ""
    source: str | None = None


def _load_theme(name: str, text: str) -> ThemeDefinition | None:
    try:
        return ThemeDefinition.model_validate(json.loads(text))
    except json.JSONDecodeError:
        logger.warning("failed to load theme from %s", name)
    except ValidationError as exc:
        logger.warning("invalid theme definition in %s: %s", name, exc.errors())
    return None


def load_themes(paths: Iterable[str | Path] | None = None) -> dict[str, ThemeDefinition]:
    """
    Load and validate theme files.

    Args:
        paths: Explicit theme files. If None, the JSON files bundled with this package
            are loaded.

    Returns:
        dict[str, ThemeDefinition]: Valid themes keyed by name, sorted by name.
    """
    loaded: dict[str, ThemeDefinition] = {}

    if paths is None:
        entries = [
            (entry.name, entry.read_text(encoding="utf-8"))
            for entry in resources.files(__name__).iterdir()
            if entry.name.endswith(".json")
        ]
    else:
        entries = [(str(p), Path(p).read_text(encoding="utf-8")) for p in paths]

    for name, text in entries:
        definition = _load_theme(name, text)
        if definition is not None:
            loaded[definition.name] = definition

    return dict(sorted(loaded.items()))


@lru_cache(maxsize=1)
def themes() -> dict[str, ThemeDefinition]:
    """Bundled themes, loaded once."""
    return load_themes()


def list_themes() -> list[str]:
    return list(themes())


def theme(name: str) -> dict[str, Any]:
    """
    Return the Vega-Lite config object of the theme `name`.

    Raises:
        ThemeError: If the theme does not exist.
    """
    available = themes()
    if name not in available:
        raise ThemeError(f"invalid theme {name!r}, supported: {list(available)}")
    return dict(available[name].theme)


def set_theme(spec: Mapping[str, Any], name: str) -> dict[str, Any]:
    """Deep-merge the theme configuration under the ``config`` key of the root node."""
    return {**spec, "config": deep_merge(spec.get("config"), theme(name))}
