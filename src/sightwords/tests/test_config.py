"""Tests for configuration settings."""
import pytest

from sightwords import config
from sightwords.config import (
    BOX_INTERVALS,
    MASTERY_CONSECUTIVE_CORRECT,
    MASTERY_MAX_AVG_RESPONSE_MS,
    MASTERY_MIN_SESSIONS,
    MAX_BOX,
    MonitoringSettings,
    SessionSettings,
    Settings,
    StorageSettings,
    default_database_url,
    settings,
)


def test_settings_defaults():
    """Test default settings values."""
    assert settings.session.max_new_words == 3
    assert settings.session.max_session_words == 15
    assert settings.session.timeout_minutes == 10
    assert settings.session.timeout_check_seconds == 10
    assert settings.storage.progress_key == "felicity-sight-words-progress"


def test_leitner_constants():
    """Test the fixed scheduling constants."""
    assert BOX_INTERVALS == {1: 1, 2: 2, 3: 4, 4: 8}
    assert MAX_BOX == 4
    assert MASTERY_CONSECUTIVE_CORRECT == 2
    assert MASTERY_MIN_SESSIONS == 2
    assert MASTERY_MAX_AVG_RESPONSE_MS == 3000


@pytest.mark.parametrize(
    "overrides",
    [
        {"session": SessionSettings(max_new_words=-1)},
        {"session": SessionSettings(max_session_words=-1)},
        {"session": SessionSettings(timeout_minutes=0)},
        {"session": SessionSettings(timeout_check_seconds=0)},
        {"storage": StorageSettings(progress_key="")},
        {"monitoring": MonitoringSettings(metrics_port=-1)},
    ],
)
def test_validate_rejects_invalid_settings(overrides):
    """Test that invalid settings raise ValueError."""
    with pytest.raises(ValueError):
        Settings(**overrides).validate()


def test_validate_accepts_defaults():
    Settings().validate()


def test_default_database_lives_in_data_directory(monkeypatch, tmp_path):
    data_dir = tmp_path / "data"
    monkeypatch.setattr(config, "DATA_DIR", data_dir)

    assert default_database_url() == f"sqlite:///{data_dir / 'sightwords.db'}"
    config.ensure_directories()
    assert data_dir.is_dir()


if __name__ == "__main__":
    pytest.main([__file__])
