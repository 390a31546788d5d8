"""Shared fixtures: isolate tests from LINEAGE_VIZ_* environment overrides."""

from __future__ import annotations

import os

import pytest

from lineage_viz.config import LayoutSettings, default_settings, load_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path):
    for key in list(os.environ):
        if key.upper().startswith("LINEAGE_VIZ_"):
            monkeypatch.delenv(key)
    # No stray .env file from the working directory.
    monkeypatch.chdir(tmp_path)
    default_settings.cache_clear()
    yield
    default_settings.cache_clear()


@pytest.fixture
def settings() -> LayoutSettings:
    return load_settings()
