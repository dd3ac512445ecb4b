"""View state controller: search, favorites table and unit toggle.

All state lives on one controller instance and is only mutated by coroutines
running on a single event loop, so no locking is needed. Weather and forecast
for a search are two independent tasks that each update their own slice; a
failure in one leaves the other alone.

Superseded requests are not cancelled. If the user toggles units twice in
quick succession, the responses are applied in whatever order they arrive.
"""

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum

from weatherapp.favorites.refresher import FavoritesRefresher
from weatherapp.favorites.store import FavoritesStore
from weatherapp.ingest.weather_gateway import WeatherGateway, WeatherLookupError
from weatherapp.models.common import UnitSystem
from weatherapp.models.weather import ForecastDay, WeatherSnapshot
from weatherapp.storage.persistence import KeyValueStore, load_last_city, save_last_city

logger = logging.getLogger(__name__)

USER_INPUT_ERROR_MESSAGE = "Please enter a city name."


class SearchStatus(StrEnum):
    IDLE = "idle"
    SEARCHING = "searching"
    RESULT = "result"
    ERROR = "error"


@dataclass(frozen=True)
class ViewState:
    """Read-only copy of the controller state for renderers."""

    units: UnitSystem
    city: str
    status: SearchStatus
    weather: WeatherSnapshot | None
    forecast: tuple[ForecastDay, ...]
    error: str
    favorites: tuple[str, ...]
    favorite_weather: tuple[WeatherSnapshot, ...]
    edit_index: int | None
    edit_text: str

    def favorite_weather_at(self, index: int) -> WeatherSnapshot | None:
        """Weather for the favorite at ``index``, or None while absent."""
        if 0 <= index < len(self.favorite_weather):
            return self.favorite_weather[index]
        return None


class ViewStateController:
    def __init__(
        self,
        gateway: WeatherGateway,
        store: FavoritesStore,
        refresher: FavoritesRefresher,
        persistence: KeyValueStore,
        units: UnitSystem = UnitSystem.METRIC,
    ):
        self.gateway = gateway
        self.store = store
        self.refresher = refresher
        self.persistence = persistence
        self.units = units

        self.city = ""
        self.status = SearchStatus.IDLE
        self.weather: WeatherSnapshot | None = None
        self.forecast: list[ForecastDay] = []
        self.input_error = ""
        self.weather_error = ""
        self.forecast_error = ""

        self.favorite_weather: list[WeatherSnapshot] = []
        self.edit_index: int | None = None
        self.edit_text = ""

        self._initialized = False

    @property
    def favorites(self) -> list[str]:
        return self.store.cities

    @property
    def error(self) -> str:
        return self.input_error or self.weather_error or self.forecast_error

    async def initialize(self) -> None:
        """Load saved state and fetch whatever it refers to. Runs once."""
        if self._initialized:
            return
        self._initialized = True

        favorites = self.store.load()
        last_city = load_last_city(self.persistence)
        if last_city:
            self.city = last_city

        jobs = []
        if last_city:
            jobs.append(self.search(last_city))
        if favorites:
            jobs.append(self.refresh_favorites())
        if jobs:
            await asyncio.gather(*jobs)

    # --- Search ---

    def set_city(self, text: str) -> None:
        self.city = text

    async def search(self, city: str | None = None) -> None:
        if city is None:
            city = self.city
        else:
            self.city = city
        query = city.strip()

        if not query:
            self.status = SearchStatus.ERROR
            self.input_error = USER_INPUT_ERROR_MESSAGE
            self.weather_error = ""
            self.forecast_error = ""
            self.weather = None
            self.forecast = []
            return

        self.input_error = ""
        self.status = SearchStatus.SEARCHING
        units = self.units
        await asyncio.gather(
            self._load_weather(query, units),
            self._load_forecast(query, units),
        )
        self.status = (
            SearchStatus.RESULT if self.weather is not None else SearchStatus.ERROR
        )

    async def _load_weather(self, city: str, units: UnitSystem) -> None:
        try:
            snapshot = await self.gateway.fetch_current(city, units)
        except WeatherLookupError as e:
            self.weather = None
            self.weather_error = e.message
            return
        self.weather = snapshot
        self.weather_error = ""
        save_last_city(self.persistence, city)

    async def _load_forecast(self, city: str, units: UnitSystem) -> None:
        try:
            days = await self.gateway.fetch_forecast(city, units)
        except WeatherLookupError as e:
            self.forecast = []
            self.forecast_error = e.message
            return
        self.forecast = days
        self.forecast_error = ""

    # --- Units ---

    async def toggle_units(self) -> None:
        self.units = self.units.toggled()
        logger.info("Units switched to %s", self.units)

        jobs = []
        if self.city:
            jobs.append(self.search())
        jobs.append(self.refresh_favorites())
        await asyncio.gather(*jobs)

    # --- Favorites ---

    async def refresh_favorites(self) -> None:
        self.favorite_weather = await self.refresher.refresh(
            self.store.cities, self.units
        )

    async def add_favorite(self) -> bool:
        """Add the city in the search box. Returns False when nothing was added."""
        city = self.city.strip()
        before = len(self.store)
        self.store.add(city)
        if len(self.store) == before:
            return False
        self.city = ""
        await self.refresh_favorites()
        return True

    async def delete_favorite(self, index: int) -> None:
        self.store.remove(index)
        # Row positions shift after a delete, so any open edit is dropped.
        self.cancel_edit()
        await self.refresh_favorites()

    def start_edit(self, index: int) -> None:
        cities = self.store.cities
        if not 0 <= index < len(cities):
            raise IndexError(
                f"Favorite index {index} out of range (have {len(cities)})"
            )
        self.edit_index = index
        self.edit_text = cities[index]

    def update_edit(self, text: str) -> None:
        if self.edit_index is not None:
            self.edit_text = text

    async def save_edit(self) -> None:
        if self.edit_index is None:
            return
        index, text = self.edit_index, self.edit_text
        self.store.rename(index, text)
        self.cancel_edit()
        await self.refresh_favorites()

    def cancel_edit(self) -> None:
        self.edit_index = None
        self.edit_text = ""

    def snapshot(self) -> ViewState:
        return ViewState(
            units=self.units,
            city=self.city,
            status=self.status,
            weather=self.weather,
            forecast=tuple(self.forecast),
            error=self.error,
            favorites=tuple(self.store.cities),
            favorite_weather=tuple(self.favorite_weather),
            edit_index=self.edit_index,
            edit_text=self.edit_text,
        )
