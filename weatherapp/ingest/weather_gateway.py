"""Weather gateway: normalizes OpenWeatherMap responses into domain records.

Every failure, whatever its cause, reaches the caller as a
``WeatherLookupError`` whose message is the generic "City not found". The
``reason`` attribute keeps the distinction for logs and tests.
"""

import json
import logging
from collections.abc import Awaitable, Callable, Sequence
from enum import StrEnum

import httpx
from pydantic import ValidationError

from weatherapp.ingest.openweather_client import OpenWeatherClient
from weatherapp.models.common import UnitSystem
from weatherapp.models.openweather import (
    CurrentWeatherResponse,
    ForecastEntry,
    ForecastResponse,
)
from weatherapp.models.weather import ForecastDay, WeatherSnapshot

logger = logging.getLogger(__name__)

CITY_NOT_FOUND_MESSAGE = "City not found"

# The forecast feed is spaced 3 hours apart, so every 8th entry is ~24h later.
FORECAST_STEP = 8


class FailureReason(StrEnum):
    NOT_FOUND = "not_found"
    NETWORK = "network"
    MALFORMED = "malformed"


class WeatherLookupError(Exception):
    """Raised when current weather or forecast cannot be produced for a city."""

    def __init__(
        self,
        city: str,
        reason: FailureReason,
        message: str = CITY_NOT_FOUND_MESSAGE,
    ):
        super().__init__(message)
        self.city = city
        self.reason = reason
        self.message = message


class WeatherGateway:
    def __init__(self, client: OpenWeatherClient):
        self.client = client

    async def fetch_current(self, city: str, units: UnitSystem) -> WeatherSnapshot:
        raw = await self._call(self.client.get_current_weather, city, units)
        try:
            parsed = CurrentWeatherResponse.model_validate(raw)
        except ValidationError as e:
            logger.warning("Malformed current weather for %s: %s", city, e)
            raise WeatherLookupError(city, FailureReason.MALFORMED) from e

        return WeatherSnapshot(
            city_name=parsed.name,
            temperature=parsed.main.temp,
            description=parsed.weather[0].description,
            humidity_percent=parsed.main.humidity,
        )

    async def fetch_forecast(self, city: str, units: UnitSystem) -> list[ForecastDay]:
        raw = await self._call(self.client.get_forecast, city, units)
        try:
            parsed = ForecastResponse.model_validate(raw)
        except ValidationError as e:
            logger.warning("Malformed forecast for %s: %s", city, e)
            raise WeatherLookupError(city, FailureReason.MALFORMED) from e

        return downsample_forecast(parsed.entries)

    async def _call(
        self,
        fetch: Callable[[str, UnitSystem], Awaitable[dict]],
        city: str,
        units: UnitSystem,
    ) -> dict:
        try:
            return await fetch(city, units)
        except httpx.HTTPStatusError as e:
            logger.warning(
                "Lookup for %s returned HTTP %d", city, e.response.status_code
            )
            raise WeatherLookupError(city, FailureReason.NOT_FOUND) from e
        except httpx.RequestError as e:
            logger.warning("Lookup for %s failed: %s", city, e)
            raise WeatherLookupError(city, FailureReason.NETWORK) from e
        except json.JSONDecodeError as e:
            logger.warning("Lookup for %s returned a non-JSON body", city)
            raise WeatherLookupError(city, FailureReason.MALFORMED) from e


def downsample_forecast(
    entries: Sequence[ForecastEntry], step: int = FORECAST_STEP
) -> list[ForecastDay]:
    """Keep entries 0, step, 2*step, ... as one reading per day.

    This is a plain positional pick, not a search for a particular hour of
    the day. A full 40-entry feed yields 5 days.
    """
    return [
        ForecastDay(
            date=entry.dt_txt.split(" ")[0],
            temperature=entry.main.temp,
            description=entry.weather[0].description,
        )
        for entry in entries[::step]
    ]
