"""Tests for environment driven settings."""

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from boxupdater.config import BoxUpdaterSettings, create_settings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    """Isolate settings from the developer's environment and .env file."""
    for key in list(os.environ):
        if key.startswith("BOXUPDATER_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = BoxUpdaterSettings()

    assert settings.api_base_url == "https://api.github.com"
    assert settings.user_agent == "boxupdater"
    assert settings.cache_ttl_seconds == 300.0
    assert settings.request_timeout == 30.0
    assert settings.download_chunk_size == 8192
    assert settings.nuke_image_path is None
    assert settings.repositories_file is None
    assert settings.log_level == "WARNING"
    assert settings.flash.disconnect_max_polls == 20
    assert settings.flash.disconnect_poll_interval == 0.5
    assert settings.flash.reconnect_max_attempts == 100
    assert settings.flash.absent_max_polls is None


def test_environment_overrides(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("BOXUPDATER_API_BASE_URL", "https://ghe.example.com/api/v3/")
    monkeypatch.setenv("BOXUPDATER_CACHE_TTL_SECONDS", "60")
    monkeypatch.setenv("BOXUPDATER_LOG_LEVEL", "debug")
    monkeypatch.setenv("BOXUPDATER_FLASH__DISCONNECT_MAX_POLLS", "40")

    settings = create_settings()

    assert settings.api_base_url == "https://ghe.example.com/api/v3"
    assert settings.cache_ttl_seconds == 60.0
    assert settings.log_level == "DEBUG"
    assert settings.flash.disconnect_max_polls == 40


def test_paths_expand_user(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    monkeypatch.setenv("HOME", str(tmp_path))
    monkeypatch.setenv("BOXUPDATER_NUKE_IMAGE_PATH", "~/flash_nuke.uf2")

    settings = create_settings()

    assert settings.nuke_image_path == tmp_path / "flash_nuke.uf2"


def test_dotenv_file(tmp_path: Path):
    (tmp_path / ".env").write_text("BOXUPDATER_USER_AGENT=custom-agent\n")

    assert create_settings().user_agent == "custom-agent"


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        create_settings(log_level="LOUD")


def test_invalid_ttl():
    with pytest.raises(ValidationError):
        create_settings(cache_ttl_seconds=0)
