#!/usr/bin/env python3
"""Recommend an irrigation level and water volume for a planting."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict

# Ensure project root on path when executed directly
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))
from scripts import ensure_repo_root_on_path

ROOT = ensure_repo_root_on_path()

import voluptuous as vol

from irrigation_engine.config import configure_logging, load_settings
from irrigation_engine.irrigation import evaluate_planting
from irrigation_engine.utils import load_data
from irrigation_engine.weather import FALLBACK_RAIN_CHANCE, ForecastResult, fetch_rain_forecast

_LOGGER = logging.getLogger(__name__)

_PCT = vol.All(vol.Coerce(float), vol.Range(min=0, max=100), msg="expected a percentage")

SCENARIO_SCHEMA = vol.Schema(
    {
        vol.Required("crop_type"): vol.All(str, vol.Length(min=1)),
        vol.Required("soil"): _PCT,
        vol.Optional("humidity"): _PCT,
        vol.Optional("temperature"): vol.Coerce(float),
        vol.Optional("forecast", default=FALLBACK_RAIN_CHANCE): _PCT,
        vol.Optional("days_since_planting", default=30): vol.All(
            vol.Coerce(int), vol.Range(min=0)
        ),
        vol.Optional("irrigation_history", default=[0, 0, 0]): vol.All(
            [_PCT], vol.Length(max=3)
        ),
    }
)


def _parse_history(value: str) -> list[float]:
    try:
        return [float(v) for v in value.split(",") if v.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"invalid history {value!r}") from exc


def _build_scenario(args: argparse.Namespace) -> Dict[str, Any]:
    scenario: Dict[str, Any] = {}
    if args.scenario:
        data = load_data(args.scenario)
        if not isinstance(data, dict):
            raise vol.Invalid("scenario file must contain a mapping")
        scenario.update(data)
    flags = {
        "crop_type": args.crop,
        "soil": args.soil,
        "humidity": args.humidity,
        "temperature": args.temperature,
        "forecast": args.forecast,
        "days_since_planting": args.days,
        "irrigation_history": args.history,
    }
    scenario.update({k: v for k, v in flags.items() if v is not None})
    return scenario


def _apply_forecast(scenario: Dict[str, Any], forecast: ForecastResult) -> None:
    scenario["forecast"] = forecast.rain_chance
    if forecast.weather is not None:
        scenario.setdefault("temperature", forecast.weather.temperature)
        scenario.setdefault("humidity", forecast.weather.humidity)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Recommend irrigation intensity and water volume"
    )
    parser.add_argument("--scenario", type=Path, help="YAML or JSON file with readings")
    parser.add_argument("--crop", help="Crop identifier (lettuce, okra, tomato)")
    parser.add_argument("--soil", type=float, help="Soil moisture percent")
    parser.add_argument("--humidity", type=float, help="Relative humidity percent")
    parser.add_argument("--temperature", type=float, help="Air temperature in °C")
    parser.add_argument("--forecast", type=float, help="Rain probability percent")
    parser.add_argument("--days", type=int, help="Days since planting")
    parser.add_argument(
        "--history",
        type=_parse_history,
        help="Comma separated irrigation percentages: today,yesterday,2 days ago",
    )
    parser.add_argument(
        "--fetch-weather",
        action="store_true",
        help="Look up the rain probability from OpenWeatherMap",
    )
    parser.add_argument("--config", type=Path, help="Optional settings file")
    parser.add_argument("--output", type=Path, help="Optional output file path")
    args = parser.parse_args(argv)

    try:
        settings = load_settings(args.config)
        scenario = _build_scenario(args)
    except (vol.Invalid, FileNotFoundError, ValueError) as err:
        parser.error(str(err))
    configure_logging(settings)

    forecast = None
    if args.fetch_weather:
        forecast = asyncio.run(
            fetch_rain_forecast(
                settings.weather_api_key,
                settings.weather_city,
                timeout=settings.weather_timeout,
            )
        )
        _apply_forecast(scenario, forecast)

    try:
        scenario = SCENARIO_SCHEMA(scenario)
    except vol.Invalid as err:
        parser.error(f"invalid scenario: {err}")
    for key in ("humidity", "temperature"):
        if key not in scenario:
            parser.error(f"missing reading: {key}")

    report = evaluate_planting(
        soil=scenario["soil"],
        humidity=scenario["humidity"],
        temperature=scenario["temperature"],
        forecast=scenario["forecast"],
        irrigation_history=scenario["irrigation_history"],
        crop_type=scenario["crop_type"],
        days_since_planting=scenario["days_since_planting"],
    )

    result = {"inputs": scenario, **report.as_dict()}
    if forecast is not None:
        result["weather"] = forecast.as_dict()
        if forecast.is_fallback:
            result["weather_notice"] = (
                "Weather data could not be refreshed; default values are in use"
            )

    text = json.dumps(result, indent=2)
    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(text)
        _LOGGER.info("Irrigation report written to %s", args.output)
    else:
        print(text)


if __name__ == "__main__":  # pragma: no cover
    main()
