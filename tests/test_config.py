"""Tests for sqlitecollections.config."""

import os

import pytest

from sqlitecollections.config import StoreConfig, load_config


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Remove all config-related env vars before each test."""
    for key in list(os.environ):
        if key.startswith("SQLITECOLLECTIONS_"):
            monkeypatch.delenv(key, raising=False)
    for key in ("LOG_LEVEL", "LOG_FORMAT"):
        monkeypatch.delenv(key, raising=False)
    # Prevent .env file from re-setting variables during tests
    monkeypatch.setattr("sqlitecollections.config.load_dotenv", lambda *a, **kw: None)


def test_load_config_defaults():
    """With no environment, every field takes its default."""
    config = load_config()

    assert config.file_extension == ".db"
    assert config.busy_timeout_seconds == 5.0
    assert config.journal_mode == "WAL"
    assert config.synchronous == "FULL"
    assert config.log_level == "INFO"
    assert config.log_format == "json"
    assert config == StoreConfig()


def test_load_config_reads_environment(monkeypatch):
    monkeypatch.setenv("SQLITECOLLECTIONS_FILE_EXTENSION", ".sqlite")
    monkeypatch.setenv("SQLITECOLLECTIONS_BUSY_TIMEOUT", "0.5")
    monkeypatch.setenv("SQLITECOLLECTIONS_JOURNAL_MODE", "delete")
    monkeypatch.setenv("SQLITECOLLECTIONS_SYNCHRONOUS", "NORMAL")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    monkeypatch.setenv("LOG_FORMAT", "text")

    config = load_config()

    assert config.file_extension == ".sqlite"
    assert config.busy_timeout_seconds == 0.5
    assert config.journal_mode == "delete"
    assert config.synchronous == "NORMAL"
    assert config.log_level == "DEBUG"
    assert config.log_format == "text"


def test_non_numeric_busy_timeout_raises(monkeypatch):
    monkeypatch.setenv("SQLITECOLLECTIONS_BUSY_TIMEOUT", "soon")
    with pytest.raises(ValueError, match="SQLITECOLLECTIONS_BUSY_TIMEOUT"):
        load_config()


def test_invalid_values_listed_together(monkeypatch):
    """Error message names every invalid field."""
    monkeypatch.setenv("SQLITECOLLECTIONS_JOURNAL_MODE", "sideways")
    monkeypatch.setenv("SQLITECOLLECTIONS_SYNCHRONOUS", "sometimes")
    with pytest.raises(ValueError, match="Invalid store configuration") as exc_info:
        load_config()
    msg = str(exc_info.value)
    assert "journal_mode" in msg
    assert "synchronous" in msg


@pytest.mark.parametrize(
    "overrides",
    [
        {"file_extension": "db"},
        {"file_extension": "."},
        {"busy_timeout_seconds": -1},
        {"log_format": "xml"},
    ],
)
def test_store_config_validates_on_construction(overrides):
    with pytest.raises(ValueError):
        StoreConfig(**overrides)


def test_config_is_frozen():
    """Config is immutable after creation."""
    config = load_config()

    with pytest.raises(AttributeError):
        config.journal_mode = "OFF"
