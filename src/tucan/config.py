"""
Configuration for tucan.

Defines TucanSettings, a frozen dataclass carrying library-wide defaults used when
building and exporting plots.

Precedence
- environment (TUCAN_*) > TOML > defaults

TOML search order (when no explicit path is given)
1) ./tucan.toml (either a [tucan] table or top-level keys)
2) ./pyproject.toml under [tool.tucan]

Notes
- Settings are read lazily by `get_settings()` and cached; call `reset_settings()` after
  changing the environment or the TOML files.
- Invalid values are ignored and the previous (lower precedence) value is kept.
"""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any

__all__ = ["TucanSettings", "get_settings", "reset_settings"]

logger = logging.getLogger(__name__)

_TRUE = {"1", "true", "t", "yes", "y", "on"}


def _bool(v: Any) -> bool:
    if isinstance(v, bool):
        return v
    if isinstance(v, (int, float)):
        return bool(v)
    if isinstance(v, str):
        return v.strip().lower() in _TRUE
    return False


def _positive_int(v: Any) -> int | None:
    try:
        n = int(v)
    except (TypeError, ValueError):
        return None
    return n if n > 0 else None


@dataclass(frozen=True)
class TucanSettings:
    """
    Library-wide settings.

    Attributes:
        infer_types (bool): Run column type inference for inline data.
        include_schema (bool): Add the ``$schema`` URL when exporting.
        default_width (int | None): Width applied by `tucan.new` when not given.
        default_height (int | None): Height applied by `tucan.new` when not given.
        theme (str | None): Theme applied by `tucan.export.to_spec` when set.

    Examples:
        >>> from tucan.config import TucanSettings
        >>> TucanSettings(default_width=400).default_width
        400
    """

    infer_types: bool = True
    include_schema: bool = True
    default_width: int | None = None
    default_height: int | None = None
    theme: str | None = None

    @classmethod
    def _apply_mapping(cls, base: TucanSettings, cfg: dict[str, Any] | None) -> TucanSettings:
        """Apply a loose config mapping onto TucanSettings, returning a new instance."""
        if not isinstance(cfg, dict):
            return base

        s = base

        if "infer_types" in cfg:
            s = replace(s, infer_types=_bool(cfg["infer_types"]))

        if "include_schema" in cfg:
            s = replace(s, include_schema=_bool(cfg["include_schema"]))

        for key in ("default_width", "default_height"):
            if key in cfg:
                value = _positive_int(cfg[key])
                if value is not None:
                    s = replace(s, **{key: value})

        if "theme" in cfg and isinstance(cfg["theme"], str):
            theme = cfg["theme"].strip()
            s = replace(s, theme=theme or None)

        return s

    @classmethod
    def from_env(cls, base: TucanSettings | None = None, prefix: str = "TUCAN_") -> TucanSettings:
        """
        Build TucanSettings from environment variables. Precedence is env > base > defaults.

        Recognized variables:
            - TUCAN_INFER_TYPES (1/0/true/false/yes/no/on/off)
            - TUCAN_INCLUDE_SCHEMA
            - TUCAN_DEFAULT_WIDTH
            - TUCAN_DEFAULT_HEIGHT
            - TUCAN_THEME
        """
        s = base or cls()

        mapping: dict[str, Any] = {}
        for key in ("infer_types", "include_schema", "default_width", "default_height", "theme"):
            v = os.getenv(prefix + key.upper())
            if v:
                mapping[key] = v

        if mapping:
            logger.debug("tucan settings from environment: %s", sorted(mapping))
        return cls._apply_mapping(s, mapping)

    @classmethod
    def from_toml(cls, path: str | os.PathLike[str] | None = None) -> TucanSettings:
        """
        Build TucanSettings from a TOML file.

        Returns defaults if no file is present or it cannot be parsed.
        """
        s = cls()

        cand: list[Path] = []
        if path is not None:
            cand.append(Path(path))
        else:
            cand.append(Path.cwd() / "tucan.toml")
            cand.append(Path.cwd() / "pyproject.toml")

        cfg: dict[str, Any] | None = None
        for p in cand:
            if not p.exists():
                continue
            try:
                with p.open("rb") as fh:
                    data = tomllib.load(fh)
            except (OSError, tomllib.TOMLDecodeError):
                logger.warning("failed to read tucan settings from %s", p)
                continue

            if p.name == "pyproject.toml":
                tool = data.get("tool", {})
                cfg = tool.get("tucan") if isinstance(tool, dict) else None
            elif isinstance(data.get("tucan"), dict):
                cfg = data["tucan"]
            else:
                cfg = data

            if cfg:
                logger.debug("tucan settings loaded from %s", p)
                break

        return cls._apply_mapping(s, cfg)

    @classmethod
    def load(cls, path: str | os.PathLike[str] | None = None) -> TucanSettings:
        """Load TucanSettings applying precedence: environment > TOML > defaults."""
        s = cls.from_toml(path)
        s = cls.from_env(base=s)
        return s


@lru_cache(maxsize=1)
def get_settings() -> TucanSettings:
    """Process-wide settings, loaded once on first use."""
    return TucanSettings.load()


def reset_settings() -> None:
    """Drop the cached settings so that the next `get_settings()` reloads them."""
    get_settings.cache_clear()
