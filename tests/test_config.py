from __future__ import annotations

from pathlib import Path

from tucan.config import TucanSettings, get_settings, reset_settings


def _write_tucan_toml(tmp: Path, content: str) -> Path:
    p = tmp / "tucan.toml"
    p.write_text(content)
    return p


def test_settings_defaults(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.chdir(tmp_path)

    s = TucanSettings.load()

    assert s == TucanSettings()
    assert s.infer_types is True
    assert s.include_schema is True
    assert s.default_width is None
    assert s.theme is None


def test_settings_precedence_env_over_toml(tmp_path: Path, monkeypatch) -> None:
    # Arrange TOML
    _write_tucan_toml(
        tmp_path,
        """
        [tucan]
        default_width = 300
        default_height = 200
        theme = "vox"
        """.strip(),
    )
    monkeypatch.chdir(tmp_path)
    # Arrange ENV that should override TOML
    monkeypatch.setenv("TUCAN_DEFAULT_WIDTH", "500")
    monkeypatch.setenv("TUCAN_THEME", "dark")

    s = TucanSettings.load()

    assert s.default_width == 500  # env override
    assert s.default_height == 200  # from TOML
    assert s.theme == "dark"  # env override


def test_settings_from_top_level_toml_keys(tmp_path: Path, monkeypatch) -> None:
    _write_tucan_toml(tmp_path, "infer_types = false\ninclude_schema = false\n")
    monkeypatch.chdir(tmp_path)

    s = TucanSettings.load()

    assert s.infer_types is False
    assert s.include_schema is False


def test_settings_from_pyproject(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.tucan]\ntheme = "ggplot2"\n')
    monkeypatch.chdir(tmp_path)

    assert TucanSettings.load().theme == "ggplot2"


def test_tucan_toml_wins_over_pyproject(tmp_path: Path, monkeypatch) -> None:
    (tmp_path / "pyproject.toml").write_text('[tool.tucan]\ntheme = "ggplot2"\n')
    _write_tucan_toml(tmp_path, '[tucan]\ntheme = "quartz"\n')
    monkeypatch.chdir(tmp_path)

    assert TucanSettings.load().theme == "quartz"


def test_settings_explicit_path(tmp_path: Path) -> None:
    p = tmp_path / "custom.toml"
    p.write_text("[tucan]\ndefault_height = 120\n")

    assert TucanSettings.from_toml(p).default_height == 120


def test_invalid_values_are_ignored(tmp_path: Path, monkeypatch) -> None:
    _write_tucan_toml(tmp_path, "[tucan]\ndefault_width = 300\n")
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TUCAN_DEFAULT_WIDTH", "wide")
    monkeypatch.setenv("TUCAN_DEFAULT_HEIGHT", "-5")

    s = TucanSettings.load()

    assert s.default_width == 300
    assert s.default_height is None


def test_broken_toml_falls_back_to_defaults(tmp_path: Path, monkeypatch) -> None:
    _write_tucan_toml(tmp_path, "[tucan\ndefault_width = ")
    monkeypatch.chdir(tmp_path)

    assert TucanSettings.load() == TucanSettings()


def test_env_booleans(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TUCAN_INFER_TYPES", "off")
    monkeypatch.setenv("TUCAN_INCLUDE_SCHEMA", "Yes")

    s = TucanSettings.load()

    assert s.infer_types is False
    assert s.include_schema is True


def test_get_settings_is_cached_until_reset(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    first = get_settings()
    monkeypatch.setenv("TUCAN_DEFAULT_WIDTH", "640")

    assert get_settings() is first

    reset_settings()
    assert get_settings().default_width == 640
