import json
import logging
from pathlib import Path

import pytest
import voluptuous as vol

from irrigation_engine.config import Settings, configure_logging, load_settings
from irrigation_engine.weather import DEFAULT_CITY, DEFAULT_TIMEOUT


def test_defaults():
    settings = load_settings(environ={})
    assert settings == Settings(
        weather_api_key=None,
        weather_city=DEFAULT_CITY,
        weather_timeout=DEFAULT_TIMEOUT,
        log_level="WARNING",
    )


def test_file_values(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("weather_api_key: abc\nweather_city: Manila,PH\nlog_level: debug\n")
    settings = load_settings(path, environ={})
    assert settings.weather_api_key == "abc"
    assert settings.weather_city == "Manila,PH"
    assert settings.log_level == "DEBUG"


def test_config_env_points_to_file(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"weather_timeout": 3}))
    settings = load_settings(environ={"IRRIGATION_CONFIG": str(path)})
    assert settings.weather_timeout == 3.0


def test_environment_overrides_file(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("weather_city: Manila,PH\nweather_timeout: 5\n")
    env = {
        "IRRIGATION_WEATHER_CITY": "Iloilo,PH",
        "IRRIGATION_WEATHER_TIMEOUT": "2.5",
        "IRRIGATION_WEATHER_API_KEY": "",
    }
    settings = load_settings(path, environ=env)
    assert settings.weather_city == "Iloilo,PH"
    assert settings.weather_timeout == 2.5
    assert settings.weather_api_key is None


def test_blank_key_in_file_is_none(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("weather_api_key: '  '\n")
    assert load_settings(path, environ={}).weather_api_key is None


@pytest.mark.parametrize(
    "env",
    [
        {"IRRIGATION_WEATHER_TIMEOUT": "0"},
        {"IRRIGATION_WEATHER_TIMEOUT": "soon"},
        {"IRRIGATION_LOG_LEVEL": "chatty"},
    ],
)
def test_invalid_values(env):
    with pytest.raises(vol.Invalid):
        load_settings(environ=env)


def test_unknown_key_rejected(tmp_path: Path):
    path = tmp_path / "settings.yaml"
    path.write_text("colour: blue\n")
    with pytest.raises(vol.Invalid):
        load_settings(path, environ={})


def test_non_mapping_file_rejected(tmp_path: Path):
    path = tmp_path / "settings.json"
    path.write_text("[1, 2]")
    with pytest.raises(vol.Invalid):
        load_settings(path, environ={})


def test_missing_file(tmp_path: Path):
    with pytest.raises(FileNotFoundError):
        load_settings(tmp_path / "absent.yaml", environ={})


def test_as_dict_redacts_key():
    settings = load_settings(environ={"IRRIGATION_WEATHER_API_KEY": "secret"})
    assert settings.as_dict()["weather_api_key"] == "***"
    assert settings.as_dict(redact=False)["weather_api_key"] == "secret"


def test_configure_logging(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kw: calls.update(kw))
    configure_logging(load_settings(environ={"IRRIGATION_LOG_LEVEL": "info"}))
    assert calls["level"] == logging.INFO
