from __future__ import annotations

import json
from pathlib import Path

import pytest

from tucan.core.errors import ThemeError
from tucan.themes import ThemeDefinition, list_themes, load_themes, set_theme, theme


def test_bundled_themes() -> None:
    names = list_themes()

    assert names == sorted(names)
    assert {"dark", "excel", "ggplot2", "latimes", "vox"} <= set(names)


def test_theme_lookup() -> None:
    assert theme("dark")["background"] == "#333"
    with pytest.raises(ThemeError, match="invalid theme 'nope'"):
        theme("nope")


def test_set_theme_merges_config() -> None:
    spec = {"mark": "point", "config": {"view": {"fill": "#fff"}, "custom": 1}}
    out = set_theme(spec, "dark")

    assert out["config"]["background"] == "#333"
    assert out["config"]["view"] == {"fill": "#fff", "stroke": "#888"}
    assert out["config"]["custom"] == 1
    assert spec["config"] == {"view": {"fill": "#fff"}, "custom": 1}


def test_load_themes_skips_invalid_files(tmp_path: Path, caplog) -> None:
    good = tmp_path / "good.json"
    good.write_text(json.dumps({"name": "mine", "theme": {"background": "red"}}))
    broken = tmp_path / "broken.json"
    broken.write_text("{")
    invalid = tmp_path / "invalid.json"
    invalid.write_text(json.dumps({"name": "x", "theme": {}, "extra": True}))

    with caplog.at_level("WARNING", logger="tucan.themes"):
        loaded = load_themes([good, broken, invalid])

    assert list(loaded) == ["mine"]
    assert isinstance(loaded["mine"], ThemeDefinition)
    assert loaded["mine"].doc == ""
    assert len(caplog.records) == 2
