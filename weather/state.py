"""Authoritative weather values and the heuristic classifiers built on them."""

from __future__ import annotations

from dataclasses import dataclass

from fields.precipitation import MIXED, RAIN, SNOW

SUNNY = "sunny"


def classify_precipitation_kind(temperature: float) -> str:
    """Below -2 snows, above 2 rains; -2..2 inclusive is mixed."""
    if temperature < -2:
        return SNOW
    if temperature > 2:
        return RAIN
    return MIXED


def classify_condition(temperature: float, intensity: float) -> str:
    """Display condition for the icon.

    Only "sunny" looks at intensity; the other bands mirror the precipitation
    kind but are evaluated independently.
    """
    if temperature > 20 and intensity == 0:
        return SUNNY
    if temperature > 2:
        return RAIN
    if temperature < -2:
        return SNOW
    return MIXED


def wind_direction_label(speed: float) -> str:
    """Fixed bucket lookup, not a compass mapping."""
    if speed == 0:
        return "Calm"
    if 0 < speed <= 2:
        return "E"
    if 2 < speed <= 4:
        return "NE"
    if speed > 4:
        return "N"
    if -2 <= speed < 0:
        return "W"
    if -4 <= speed < -2:
        return "NW"
    if speed < -4:
        return "S"
    return "Variable"


@dataclass
class WeatherState:
    """Current control values. Defaults match the sliders on load."""

    temperature: int = 0       # degrees C, any sign
    intensity: int = 50        # 0-100, particle count
    wind_speed: float = 0.0    # m/s, signed
    cloudiness: int = 50       # 0-100, cloud count

    def set_from_controls(self, temperature: int, intensity: int, wind_speed: float) -> None:
        self.temperature = temperature
        self.intensity = intensity
        self.wind_speed = wind_speed

    def set_cloudiness(self, cloudiness: int) -> None:
        self.cloudiness = cloudiness

    def classify_precipitation_kind(self) -> str:
        return classify_precipitation_kind(self.temperature)

    def classify_condition(self) -> str:
        return classify_condition(self.temperature, self.intensity)

    def wind_direction_label(self) -> str:
        return wind_direction_label(self.wind_speed)

    @property
    def fog_enabled(self) -> bool:
        return self.temperature <= 0

    def as_dict(self) -> dict:
        return {
            "temperature": self.temperature,
            "intensity": self.intensity,
            "wind_speed": self.wind_speed,
            "cloudiness": self.cloudiness,
        }
