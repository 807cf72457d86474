"""Runtime settings for the command line tools and forecast lookup."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, Mapping

import voluptuous as vol

from .utils import load_data
from .weather import DEFAULT_CITY, DEFAULT_TIMEOUT

CONFIG_ENV = "IRRIGATION_CONFIG"

# Setting name -> environment variable overriding it.
ENV_VARS: Dict[str, str] = {
    "weather_api_key": "IRRIGATION_WEATHER_API_KEY",
    "weather_city": "IRRIGATION_WEATHER_CITY",
    "weather_timeout": "IRRIGATION_WEATHER_TIMEOUT",
    "log_level": "IRRIGATION_LOG_LEVEL",
}

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional("weather_api_key", default=None): vol.Any(None, vol.All(str, vol.Strip)),
        vol.Optional("weather_city", default=DEFAULT_CITY): vol.All(str, vol.Length(min=1)),
        vol.Optional("weather_timeout", default=DEFAULT_TIMEOUT): vol.All(
            vol.Coerce(float), vol.Range(min=0, min_included=False)
        ),
        vol.Optional("log_level", default="WARNING"): vol.All(
            str, vol.Upper, vol.In(LOG_LEVELS)
        ),
    }
)

__all__ = ["Settings", "SETTINGS_SCHEMA", "load_settings", "configure_logging"]


@dataclass(frozen=True)
class Settings:
    weather_api_key: str | None
    weather_city: str
    weather_timeout: float
    log_level: str

    def as_dict(self, redact: bool = True) -> Dict[str, Any]:
        data = asdict(self)
        if redact and data["weather_api_key"]:
            data["weather_api_key"] = "***"
        return data


def _env_values(environ: Mapping[str, str]) -> Dict[str, str]:
    return {
        name: environ[var]
        for name, var in ENV_VARS.items()
        if environ.get(var) not in (None, "")
    }


def load_settings(
    path: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """Return validated :class:`Settings`.

    Values come from the YAML or JSON file at ``path`` (or the file named by
    ``IRRIGATION_CONFIG``) and are overridden by ``IRRIGATION_*`` environment
    variables. :class:`voluptuous.Invalid` is raised for bad values.
    """

    env = os.environ if environ is None else environ
    config_path = path or env.get(CONFIG_ENV)

    raw: Dict[str, Any] = {}
    if config_path:
        data = load_data(Path(config_path).expanduser())
        if not isinstance(data, Mapping):
            raise vol.Invalid(f"settings file {config_path} must contain a mapping")
        raw.update(data)
    raw.update(_env_values(env))

    validated = SETTINGS_SCHEMA(raw)
    if validated["weather_api_key"] == "":
        validated["weather_api_key"] = None
    return Settings(**validated)


def configure_logging(settings: Settings) -> None:
    """Apply ``settings.log_level`` to the root logger."""
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
