"""Tests for environment-driven settings."""

from __future__ import annotations

from pathlib import Path

from bastion.config import Settings, get_settings


def test_defaults():
    settings = Settings()
    assert settings.storage_backend == "json"
    assert settings.default_seed == 0
    assert settings.data_dir == Path("games")


def test_environment_overrides(monkeypatch, tmp_path):
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("DEFAULT_SEED", "17")
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "worlds"))

    settings = Settings()

    assert settings.storage_backend == "sqlite"
    assert settings.default_seed == 17
    assert settings.data_dir == tmp_path / "worlds"


def test_get_settings_is_cached_and_creates_data_dir(monkeypatch, tmp_path):
    monkeypatch.setenv("DATA_DIR", str(tmp_path / "cached"))
    get_settings.cache_clear()
    try:
        first = get_settings()
        assert first is get_settings()
        assert (tmp_path / "cached").is_dir()
    finally:
        get_settings.cache_clear()
