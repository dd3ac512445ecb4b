"""Default endpoint, storage location and persistence keys."""

DEFAULT_BASE_URL = "https://api.openweathermap.org/data/2.5"
DEFAULT_DB_PATH = "data/weatherapp.db"
DEFAULT_CONFIG_PATH = "weatherapp.yaml"

API_KEY_ENV_VAR = "OPENWEATHER_API_KEY"

# Key names kept compatible with the browser widget's localStorage entries.
LAST_CITY_KEY = "lastCitySearched"
FAVORITES_KEY = "favorites"
