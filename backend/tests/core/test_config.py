"""Configuration — tests for settings resolution and the local data directory.

Tests cover:
    - plain sqlite:// URLs are rewritten to the aiosqlite driver
    - the default database lives under the local app data directory
    - local_app_data_dir honours XDG_DATA_HOME and is idempotent
"""

import pytest

from event_pulse.config import ConfigError, Settings, local_app_data_dir


def test_sqlite_url_gets_async_driver():
    settings = Settings(database_url="sqlite:///events.db")
    assert settings.database_url == "sqlite+aiosqlite:///events.db"


def test_async_url_is_left_alone():
    url = "sqlite+aiosqlite:///:memory:"
    assert Settings(database_url=url).resolved_database_url() == url


def test_default_database_in_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    monkeypatch.delenv("EVENT_PULSE_DATABASE_URL", raising=False)
    settings = Settings(database_url=None)
    expected = tmp_path / "event_pulse" / "event_pulse.db"
    assert settings.resolved_database_url() == f"sqlite+aiosqlite:///{expected}"


def test_local_app_data_dir_creates_once(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
    first = local_app_data_dir("pulse")
    second = local_app_data_dir("pulse")
    assert first == second == tmp_path / "pulse"
    assert first.is_dir()


def test_local_app_data_dir_failure_raises_config_error(tmp_path, monkeypatch):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    monkeypatch.setenv("XDG_DATA_HOME", str(blocker))
    with pytest.raises(ConfigError):
        local_app_data_dir("pulse")
