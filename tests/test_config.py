"""Tests for environment configuration."""
import pytest
from contrib_stats.config import Settings, load_settings
from contrib_stats.domain.errors import InputError


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("BASE_URL", "TIMEOUT", "CHUNK_DAYS", "MAX_CONNECTIONS", "LOG_LEVEL"):
        monkeypatch.delenv(f"CONTRIB_STATS_{name}", raising=False)


def test_defaults():
    """Test settings without any environment variable."""
    settings = load_settings()

    assert settings == Settings()
    assert settings.chunk_days == 31
    assert settings.commit_history_url_template == "https://github.com/{project}/commits?author={username}"


def test_environment_overrides(monkeypatch):
    """Test values read from the environment."""
    monkeypatch.setenv("CONTRIB_STATS_BASE_URL", "https://ghe.example.com/")
    monkeypatch.setenv("CONTRIB_STATS_TIMEOUT", "2.5")
    monkeypatch.setenv("CONTRIB_STATS_CHUNK_DAYS", "7")
    monkeypatch.setenv("CONTRIB_STATS_LOG_LEVEL", "debug")

    settings = load_settings()

    assert settings.timeout == 2.5
    assert settings.chunk_days == 7
    assert settings.log_level == "DEBUG"
    assert settings.commit_history_url_template.startswith("https://ghe.example.com/{project}")


@pytest.mark.parametrize("value", ["soon", "0", "-3"])
def test_invalid_numbers_are_input_errors(monkeypatch, value):
    """Test that unusable numbers are rejected."""
    monkeypatch.setenv("CONTRIB_STATS_CHUNK_DAYS", value)

    with pytest.raises(InputError):
        load_settings()
