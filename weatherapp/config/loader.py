"""YAML config loader with environment overrides and dotted-key lookup."""

import os
from pathlib import Path
from typing import Any

import yaml

from weatherapp.config.defaults import API_KEY_ENV_VAR
from weatherapp.config.schema import AppConfig


def load_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate config from a YAML file.

    A missing file is treated as empty. If no API key is given in the YAML,
    it is taken from the OPENWEATHER_API_KEY environment variable. A missing
    key is not an error here; the upstream API rejects the request instead.
    """
    raw: dict = {}
    if path is not None:
        path = Path(path)
        if path.exists():
            with open(path) as f:
                raw = yaml.safe_load(f) or {}

    api = raw.setdefault("api", {}) or {}
    raw["api"] = api
    if not api.get("api_key"):
        api["api_key"] = os.environ.get(API_KEY_ENV_VAR, "")

    return AppConfig(**raw)


def get_config_value(config: AppConfig, dotted_key: str) -> Any:
    """Get a config value by dotted key path. E.g. 'api.timeout_seconds'."""
    obj: Any = config
    for part in dotted_key.split("."):
        if hasattr(obj, part):
            obj = getattr(obj, part)
        elif isinstance(obj, dict):
            obj = obj[part]
        else:
            raise KeyError(f"Config key not found: {dotted_key}")
    return obj


def redacted(config: AppConfig) -> AppConfig:
    """Copy of the config with the API key masked, safe to print."""
    data = config.model_copy(deep=True)
    if data.api.api_key:
        data.api.api_key = "***"
    return data


def redacted_dump(config: AppConfig) -> str:
    return redacted(config).model_dump_json(indent=2)
