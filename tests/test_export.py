from __future__ import annotations

import datetime as dt
import json
from pathlib import Path

import altair as alt
import pytest

import tucan
from tucan.config import TucanSettings, reset_settings
from tucan.export import save, to_html, to_json, to_spec


@pytest.fixture
def spec():
    return tucan.scatter([{"date": dt.date(2024, 1, 2), "value": 1}], "date", "value")


def test_to_spec_strips_metadata_and_adds_schema(spec) -> None:
    out = to_spec(spec)

    assert "__tucan__" not in out
    assert list(out)[0] == "$schema"
    assert out["$schema"] == alt.SCHEMA_URL
    assert out["data"] == {"values": [{"date": "2024-01-02", "value": 1}]}
    assert "__tucan__" in spec


def test_to_spec_strips_nested_metadata() -> None:
    spec = {"hconcat": [{"mark": "bar", "__tucan__": {"types": {}}}]}
    assert to_spec(spec, settings=TucanSettings(include_schema=False)) == {
        "hconcat": [{"mark": "bar"}]
    }


def test_to_spec_applies_configured_theme(monkeypatch) -> None:
    monkeypatch.setenv("TUCAN_THEME", "dark")
    reset_settings()

    assert to_spec({"mark": "bar"})["config"]["background"] == "#333"


def test_to_json(spec) -> None:
    parsed = json.loads(to_json(spec, settings=TucanSettings(include_schema=False)))
    assert parsed["mark"] == {"type": "point"}
    assert "$schema" not in parsed


def test_to_html(spec) -> None:
    html = to_html(spec)
    assert "vega-embed" in html
    assert '"2024-01-02"' in html


def test_save(spec, tmp_path: Path) -> None:
    json_path = save(spec, tmp_path / "plot.json")
    assert json.loads(json_path.read_text())["encoding"]["x"]["type"] == "temporal"

    html_path = save(spec, tmp_path / "plot.out", format="html")
    assert "<html" in html_path.read_text().lower()

    with pytest.raises(ValueError, match="unsupported export format 'png'"):
        save(spec, tmp_path / "plot.png")
