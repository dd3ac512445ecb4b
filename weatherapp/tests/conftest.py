"""Shared test fixtures."""

import json
from pathlib import Path

import pytest
import yaml

from weatherapp.ingest.weather_gateway import FailureReason, WeatherLookupError
from weatherapp.models.common import UnitSystem
from weatherapp.models.weather import ForecastDay, WeatherSnapshot
from weatherapp.storage.persistence import MemoryKeyValueStore

TEST_BASE_URL = "https://test-owm.example.com/data/2.5"


class StubGateway:
    """Gateway double that records every call and fails for chosen cities."""

    def __init__(self) -> None:
        self.failing_current: set[str] = set()
        self.failing_forecast: set[str] = set()
        self.current_calls: list[tuple[str, UnitSystem]] = []
        self.forecast_calls: list[tuple[str, UnitSystem]] = []

    async def fetch_current(self, city: str, units: UnitSystem) -> WeatherSnapshot:
        self.current_calls.append((city, units))
        if city in self.failing_current:
            raise WeatherLookupError(city, FailureReason.NOT_FOUND)
        return WeatherSnapshot(
            city_name=city,
            temperature=20.0 if units == UnitSystem.METRIC else 68.0,
            description=f"clear over {city}",
            humidity_percent=50,
        )

    async def fetch_forecast(self, city: str, units: UnitSystem) -> list[ForecastDay]:
        self.forecast_calls.append((city, units))
        if city in self.failing_forecast:
            raise WeatherLookupError(city, FailureReason.NOT_FOUND)
        return [
            ForecastDay(date=f"2026-10-{20 + i}", temperature=15.0 + i, description="sunny")
            for i in range(5)
        ]

    def current_count(self, city: str) -> int:
        return sum(1 for c, _ in self.current_calls if c == city)

    def forecast_count(self, city: str) -> int:
        return sum(1 for c, _ in self.forecast_calls if c == city)


@pytest.fixture
def stub_gateway() -> StubGateway:
    return StubGateway()


@pytest.fixture
def memory_store() -> MemoryKeyValueStore:
    return MemoryKeyValueStore()


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def current_payload(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "owm_current_london.json") as f:
        return json.load(f)


@pytest.fixture
def forecast_payload(fixtures_dir: Path) -> dict:
    with open(fixtures_dir / "owm_forecast_london.json") as f:
        return json.load(f)


@pytest.fixture
def config_yaml_path(tmp_path: Path) -> Path:
    """Write a minimal valid config YAML pointing at the test API host."""
    data = {
        "api": {"base_url": TEST_BASE_URL, "api_key": "test-key"},
        "storage": {"db_path": str(tmp_path / "widget.db")},
    }
    path = tmp_path / "test_config.yaml"
    with open(path, "w") as f:
        yaml.dump(data, f)
    return path
