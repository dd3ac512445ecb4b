"""Async OpenWeatherMap 2.5 client for current conditions and 5-day forecast."""

import logging

import httpx

from weatherapp.config.defaults import DEFAULT_BASE_URL
from weatherapp.models.common import UnitSystem

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "weatherapp/0.1.0"


class OpenWeatherClient:
    """Issues one GET per call and returns the decoded JSON body.

    Non-2xx responses raise ``httpx.HTTPStatusError`` and transport failures
    raise ``httpx.RequestError``; mapping those to user-facing failures is
    left to the gateway. There is no retry.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = 30.0,
        user_agent: str = DEFAULT_USER_AGENT,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.user_agent = user_agent
        self._http = http_client

    async def get_current_weather(self, city: str, units: UnitSystem) -> dict:
        return await self._get("weather", city, units)

    async def get_forecast(self, city: str, units: UnitSystem) -> dict:
        """5-day forecast at 3-hour spacing (up to 40 entries under ``list``)."""
        return await self._get("forecast", city, units)

    async def _get(self, endpoint: str, city: str, units: UnitSystem) -> dict:
        url = f"{self.base_url}/{endpoint}"
        params = {"q": city, "appid": self.api_key, "units": units.value}
        headers = {"User-Agent": self.user_agent}

        logger.debug("GET %s q=%s units=%s", url, city, units.value)
        if self._http is not None:
            resp = await self._http.get(
                url, params=params, headers=headers, timeout=self.timeout
            )
        else:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                resp = await client.get(url, params=params, headers=headers)

        resp.raise_for_status()
        return resp.json()
