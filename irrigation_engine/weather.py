"""Rain probability lookup backed by the OpenWeatherMap current weather API."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, asdict
from typing import Any, Dict, Mapping

import aiohttp

_LOGGER = logging.getLogger(__name__)

BASE_URL = "https://api.openweathermap.org/data/2.5/weather"
DEFAULT_CITY = "Leon,Iloilo,PH"
DEFAULT_TIMEOUT = 10.0

# Used whenever the forecast cannot be fetched or interpreted.
FALLBACK_RAIN_CHANCE = 30.0
DEFAULT_TEMPERATURE_C = 25.0
DEFAULT_HUMIDITY_PCT = 60.0

__all__ = [
    "WeatherError",
    "WeatherSnapshot",
    "ForecastResult",
    "interpret_weather",
    "ForecastClient",
    "fetch_rain_forecast",
]


class WeatherError(Exception): ...


@dataclass(frozen=True)
class WeatherSnapshot:
    """Ambient conditions reported alongside the rain estimate."""

    main: str
    description: str
    rain_mm: float
    cloudiness: float
    temperature: float
    humidity: float


@dataclass(frozen=True)
class ForecastResult:
    rain_chance: float
    weather: WeatherSnapshot | None = None

    @property
    def is_fallback(self) -> bool:
        return self.weather is None

    def as_dict(self) -> Dict[str, Any]:
        return {
            "rain_chance": self.rain_chance,
            "weather": asdict(self.weather) if self.weather else None,
        }


FALLBACK_RESULT = ForecastResult(rain_chance=FALLBACK_RAIN_CHANCE)


def _number(value: Any, default: float) -> float:
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def interpret_weather(payload: Mapping[str, Any]) -> ForecastResult:
    """Return a rain estimate from a current weather ``payload``.

    Ongoing rain maps to 100 %, drizzle or light rain to 80 %, overcast
    skies (70 %+ cloud) to 60 %, partly cloudy (40 %+) to 40 % and clear
    skies to 10 %. :class:`WeatherError` is raised when the payload has no
    weather condition.
    """

    conditions = payload.get("weather") if isinstance(payload, Mapping) else None
    if not isinstance(conditions, list) or not conditions or not isinstance(conditions[0], Mapping):
        raise WeatherError("invalid weather data received")

    main = str(conditions[0].get("main", "")).lower()
    description = str(conditions[0].get("description", "")).lower()
    rain = payload.get("rain") or {}
    rain_mm = _number(rain.get("1h") if isinstance(rain, Mapping) else None, 0.0)
    clouds = payload.get("clouds") or {}
    cloudiness = _number(clouds.get("all") if isinstance(clouds, Mapping) else None, 0.0)
    readings = payload.get("main") or {}
    if not isinstance(readings, Mapping):
        readings = {}

    if rain_mm > 0 or "rain" in main:
        chance = 100.0
    elif "drizzle" in main or "light rain" in description:
        chance = 80.0
    elif cloudiness >= 70:
        chance = 60.0
    elif cloudiness >= 40:
        chance = 40.0
    else:
        chance = 10.0

    return ForecastResult(
        rain_chance=chance,
        weather=WeatherSnapshot(
            main=main,
            description=description,
            rain_mm=rain_mm,
            cloudiness=cloudiness,
            temperature=_number(readings.get("temp"), DEFAULT_TEMPERATURE_C),
            humidity=_number(readings.get("humidity"), DEFAULT_HUMIDITY_PCT),
        ),
    )


class ForecastClient:
    """Fetch rain estimates using a shared :class:`aiohttp.ClientSession`."""

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str | None,
        city: str = DEFAULT_CITY,
        timeout: float = DEFAULT_TIMEOUT,
    ) -> None:
        self._s = session
        self._api_key = api_key
        self._city = city
        self._timeout = aiohttp.ClientTimeout(total=timeout)

    async def _get(self) -> Mapping[str, Any]:
        if not self._api_key:
            raise WeatherError("weather API key not configured")
        params = {"q": self._city, "appid": self._api_key, "units": "metric"}
        try:
            async with self._s.get(BASE_URL, params=params, timeout=self._timeout) as r:
                if r.status != 200:
                    raise WeatherError(f"weather API error: {r.status}")
                try:
                    return await r.json()
                except (aiohttp.ContentTypeError, ValueError) as err:
                    raise WeatherError("invalid response") from err
        except (asyncio.TimeoutError, aiohttp.ClientError) as err:
            raise WeatherError(str(err) or err.__class__.__name__) from err

    async def rain_forecast(self) -> ForecastResult:
        """Return the rain estimate, or the 30 % fallback on any failure."""
        try:
            return interpret_weather(await self._get())
        except WeatherError as err:
            _LOGGER.warning("Weather lookup for %s failed, using defaults: %s", self._city, err)
            return FALLBACK_RESULT


async def fetch_rain_forecast(
    api_key: str | None,
    city: str = DEFAULT_CITY,
    *,
    session: aiohttp.ClientSession | None = None,
    timeout: float = DEFAULT_TIMEOUT,
) -> ForecastResult:
    """Return the rain estimate for ``city``.

    A temporary session is opened when ``session`` is not supplied. Without
    an API key no request is made and the fallback result is returned.
    """

    if not api_key:
        _LOGGER.warning("Weather API key not configured, using default rain chance")
        return FALLBACK_RESULT
    if session is not None:
        return await ForecastClient(session, api_key, city, timeout).rain_forecast()
    async with aiohttp.ClientSession() as own_session:
        return await ForecastClient(own_session, api_key, city, timeout).rain_forecast()
