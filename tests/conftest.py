from __future__ import annotations

import pytest

from tucan.config import reset_settings

_ENV_KEYS = [
    "TUCAN_INFER_TYPES",
    "TUCAN_INCLUDE_SCHEMA",
    "TUCAN_DEFAULT_WIDTH",
    "TUCAN_DEFAULT_HEIGHT",
    "TUCAN_THEME",
]


@pytest.fixture(autouse=True)
def clean_settings(monkeypatch):
    """Run every test with default settings (no TUCAN_* env, no cached settings)."""
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    reset_settings()
    yield
    reset_settings()
