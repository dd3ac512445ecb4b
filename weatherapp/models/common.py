"""Common types shared across models."""

from enum import StrEnum


class UnitSystem(StrEnum):
    METRIC = "metric"
    IMPERIAL = "imperial"

    @property
    def symbol(self) -> str:
        """Temperature unit letter shown after the degree sign."""
        return "C" if self is UnitSystem.METRIC else "F"

    @property
    def label(self) -> str:
        return "Celsius" if self is UnitSystem.METRIC else "Fahrenheit"

    def toggled(self) -> "UnitSystem":
        if self is UnitSystem.METRIC:
            return UnitSystem.IMPERIAL
        return UnitSystem.METRIC
