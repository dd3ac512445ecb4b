"""Normalized weather records handed to the controller and renderers."""

from dataclasses import dataclass


@dataclass(frozen=True)
class WeatherSnapshot:
    city_name: str
    temperature: float
    description: str
    humidity_percent: int  # 0-100


@dataclass(frozen=True)
class ForecastDay:
    date: str  # YYYY-MM-DD
    temperature: float
    description: str
