"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

from weatherapp.config.defaults import DEFAULT_BASE_URL, DEFAULT_DB_PATH
from weatherapp.models.common import UnitSystem


class ApiConfig(BaseModel):
    model_config = {"extra": "forbid"}

    base_url: str = DEFAULT_BASE_URL
    api_key: str = ""
    timeout_seconds: float = Field(default=30.0, gt=0.0)


class StorageConfig(BaseModel):
    model_config = {"extra": "forbid"}

    db_path: str = DEFAULT_DB_PATH


class DisplayConfig(BaseModel):
    model_config = {"extra": "forbid"}

    default_units: UnitSystem = UnitSystem.METRIC


class LoggingConfig(BaseModel):
    model_config = {"extra": "forbid"}

    level: str = Field(default="WARNING", pattern=r"^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")


class AppConfig(BaseModel):
    model_config = {"extra": "forbid"}

    api: ApiConfig = ApiConfig()
    storage: StorageConfig = StorageConfig()
    display: DisplayConfig = DisplayConfig()
    logging: LoggingConfig = LoggingConfig()
