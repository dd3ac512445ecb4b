"""Output formatters for the widget view."""

import json
from dataclasses import asdict

from weatherapp.controller.view_state import SearchStatus, ViewState
from weatherapp.models.weather import WeatherSnapshot

LOADING_PLACEHOLDER = "Loading..."


def _temp(value: float, state: ViewState) -> str:
    return f"{value}°{state.units.symbol}"


def _snapshot_lines(w: WeatherSnapshot, state: ViewState, indent: str) -> list[str]:
    return [
        f"{indent}Temperature: {_temp(w.temperature, state)}",
        f"{indent}Description: {w.description}",
        f"{indent}Humidity: {w.humidity_percent}%",
    ]


def format_view_text(state: ViewState) -> str:
    """Plain text rendering of the whole widget."""
    other = state.units.toggled().label
    lines = [
        "=== City Weather ===",
        f"Units: {state.units.label} (switch to {other})",
    ]
    if state.city:
        lines.append(f"City: {state.city}")
    if state.status == SearchStatus.SEARCHING:
        lines.append(LOADING_PLACEHOLDER)
    if state.error:
        lines.append(f"Error: {state.error}")

    if state.weather is not None:
        lines.append("")
        lines.append(f"Weather in {state.weather.city_name}")
        lines.extend(_snapshot_lines(state.weather, state, "  "))

    if state.forecast:
        lines.append("")
        lines.append("5-Day Forecast")
        for day in state.forecast:
            lines.append(
                f"  {day.date} ----- Temp: {_temp(day.temperature, state)}"
                f" ----- {day.description}"
            )

    if state.favorites:
        lines.append("")
        lines.append("Favorite Cities")
        for i, fav in enumerate(state.favorites):
            name = fav
            if state.edit_index == i:
                name = f"{state.edit_text} (editing)"
            lines.append(f"  [{i}] {name}")
            w = state.favorite_weather_at(i)
            if w is None:
                lines.append(f"      {LOADING_PLACEHOLDER}")
            else:
                lines.extend(_snapshot_lines(w, state, "      "))

    return "\n".join(lines)


def _as_dict(w: WeatherSnapshot | None) -> dict | None:
    return asdict(w) if w is not None else None


def format_view_json(state: ViewState) -> str:
    """JSON rendering for programmatic consumption."""
    data = {
        "units": state.units.value,
        "unit_symbol": state.units.symbol,
        "city": state.city,
        "status": state.status.value,
        "error": state.error,
        "weather": _as_dict(state.weather),
        "forecast": [asdict(d) for d in state.forecast],
        "favorites": [
            {
                "city": fav,
                "weather": _as_dict(state.favorite_weather_at(i)),
            }
            for i, fav in enumerate(state.favorites)
        ],
        "edit_index": state.edit_index,
        "edit_text": state.edit_text,
    }
    return json.dumps(data, indent=2, ensure_ascii=False)
