from pathlib import Path

import pytest
from pydantic import ValidationError

from openiban.utils.config import Settings, get_settings, reload_settings

pytestmark = pytest.mark.unit


@pytest.fixture(autouse=True)
def _isolated(clean_defaults, monkeypatch):
    for name in ("OPENIBAN_LOG_LEVEL", "OPENIBAN_JSON_LOGS", "OPENIBAN_DEV_MODE"):
        monkeypatch.delenv(name, raising=False)
    yield


def test_settings_defaults():
    """Defaults use the built-in table and a cap that fits partitioned IBANs."""
    settings = Settings()

    assert settings.max_input_length == 64
    assert settings.registry_file is None
    assert settings.log_level == "WARNING"
    assert settings.json_logs is False


def test_settings_env_override(monkeypatch, tmp_path):
    """Environment variables with the OPENIBAN_ prefix override defaults."""
    monkeypatch.setenv("OPENIBAN_MAX_INPUT_LENGTH", "40")
    monkeypatch.setenv("OPENIBAN_REGISTRY_FILE", str(tmp_path / "countries.yaml"))
    monkeypatch.setenv("OPENIBAN_LOG_LEVEL", "debug")

    settings = reload_settings()

    assert settings.max_input_length == 40
    assert settings.registry_file == Path(tmp_path / "countries.yaml")
    assert settings.log_level == "DEBUG"


def test_get_settings_is_cached():
    assert get_settings() is get_settings()


def test_reload_settings_replaces_instance():
    first = get_settings()

    assert reload_settings() is not first


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_input_length": 4},
        {"max_input_length": 5000},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_settings(kwargs):
    with pytest.raises(ValidationError):
        Settings(**kwargs)
