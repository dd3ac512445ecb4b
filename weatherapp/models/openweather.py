"""Pydantic models for the subset of OpenWeatherMap 2.5 payloads we read.

Only the fields the widget displays are declared; everything else in the
response is ignored. A payload missing any declared field fails validation.
"""

from pydantic import BaseModel, Field


class Condition(BaseModel):
    description: str


class CurrentMain(BaseModel):
    temp: float
    humidity: int = Field(ge=0, le=100)


class CurrentWeatherResponse(BaseModel):
    name: str
    main: CurrentMain
    weather: list[Condition] = Field(min_length=1)


class ForecastMain(BaseModel):
    temp: float


class ForecastEntry(BaseModel):
    dt_txt: str  # "YYYY-MM-DD HH:MM:SS"
    main: ForecastMain
    weather: list[Condition] = Field(min_length=1)


class ForecastResponse(BaseModel):
    entries: list[ForecastEntry] = Field(alias="list")
