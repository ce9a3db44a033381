"""Display outputs derived from WeatherState: icon, text lines, background."""

from __future__ import annotations

import math

from weather.state import MIXED, RAIN, SNOW, SUNNY, WeatherState

ICONS: dict[str, str] = {
    RAIN: "fa-cloud-showers-heavy",
    SNOW: "fa-snowflake",
    MIXED: "fa-cloud-sun-rain",
    SUNNY: "fa-sun",
}


def celsius_to_fahrenheit(celsius: float) -> int:
    """Round half up, like the browser's Math.round."""
    return math.floor(celsius * 9 / 5 + 32 + 0.5)


def _num(value: float) -> str:
    """Render 3.0 as "3" and 2.5 as "2.5"."""
    value = float(value)
    return str(int(value)) if value.is_integer() else str(value)


def format_temperature(temperature: int) -> str:
    return f"Temperature: {temperature}°C / {celsius_to_fahrenheit(temperature)}°F"


def format_precipitation(intensity: int) -> str:
    return f"Precipitation: {intensity}%"


def format_wind(speed: float, direction: str) -> str:
    if speed == 0:
        return "Wind: Calm"
    return f"Wind: {_num(abs(speed))} m/s ({direction})"


def format_cloudiness(cloudiness: int) -> str:
    return f"{cloudiness}%"


def background_gradient(temperature: float, intensity: float) -> tuple[str, str]:
    """Top and bottom gradient stops. Bands are checked in order; first match wins."""
    if temperature > 20 and intensity == 0:
        return ("#87ceeb", "#f0e68c")  # clear and hot
    elif 10 < temperature <= 20:
        return ("#6ab3f1", "#c2d8ef")  # mild
    elif 0 < temperature <= 10:
        return ("#8ecae6", "#219ebc")  # cool
    elif temperature <= 0 and intensity > 50:
        return ("#d6e6f2", "#a9c9d9")  # heavy snow
    elif temperature <= 0:
        return ("#b3d4e0", "#609dbb")  # freezing
    elif intensity > 50:
        return ("#4a90e2", "#1e1e2f")  # stormy
    else:
        return ("#6b8e23", "#556b2f")


def build_readout(state: WeatherState) -> dict:
    """Everything the page shows besides the canvas itself."""
    condition = state.classify_condition()
    top, bottom = background_gradient(state.temperature, state.intensity)
    return {
        "condition": condition,
        "icon": ICONS[condition],
        "precipitation_kind": state.classify_precipitation_kind(),
        "fog": state.fog_enabled,
        "temperature_text": format_temperature(state.temperature),
        "precipitation_text": format_precipitation(state.intensity),
        "wind_text": format_wind(state.wind_speed, state.wind_direction_label()),
        "cloudiness_text": format_cloudiness(state.cloudiness),
        "background": {
            "top": top,
            "bottom": bottom,
            "css": f"linear-gradient(to bottom, {top}, {bottom})",
        },
    }
