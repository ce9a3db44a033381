"""Control input -> WeatherState mutation -> field re-population."""

from __future__ import annotations

import math

from fields.base import Viewport
from fields.clouds import CloudField
from fields.precipitation import ParticleField
from weather.readout import build_readout
from weather.state import WeatherState


class ParameterBinding:
    """Applies slider changes to the shared state and rebuilds the fields.

    Every precipitation-relevant change (temperature, intensity, wind) goes
    through one update path that re-syncs drift and then rebuilds the whole
    particle population. Cloudiness only touches the cloud field.
    """

    # Slider descriptors: list of {name, label, min, max, step, default}
    parameters = [
        {
            "name": "temperature", "label": "Temperature (°C)",
            "min": -20, "max": 40, "step": 1, "default": 0,
            "effects": [
                "→ Precipitation: < -2 snow, -2..2 mixed, > 2 rain",
                "→ Fog: shown at or below 0°C",
                "→ Background gradient and condition icon",
            ],
        },
        {
            "name": "intensity", "label": "Precipitation (%)",
            "min": 0, "max": 100, "step": 1, "default": 50,
            "effects": [
                "→ Particle count: one particle per percent",
            ],
        },
        {
            "name": "wind_speed", "label": "Wind Speed (m/s)",
            "min": -10, "max": 10, "step": 0.5, "default": 0.0,
            "effects": [
                "→ Horizontal drift of every particle (px/frame)",
                "→ Direction label: E/NE/N for positive, W/NW/S for negative",
            ],
        },
        {
            "name": "cloudiness", "label": "Cloudiness (%)",
            "min": 0, "max": 100, "step": 1, "default": 50,
            "effects": [
                "→ Cloud count: one cloud per percent",
            ],
        },
    ]

    # Slider value coercion: integer sliders truncate like parseInt
    _coerce = {
        "temperature": int,
        "intensity": int,
        "wind_speed": float,
        "cloudiness": int,
    }

    _limits = {p["name"]: (p["min"], p["max"]) for p in parameters}

    def __init__(self, state: WeatherState, particles: ParticleField,
                 clouds: CloudField, viewport: Viewport) -> None:
        self.state = state
        self.particles = particles
        self.clouds = clouds
        self.viewport = viewport

    def update_weather(self, temperature: int, intensity: int, wind_speed: float) -> dict:
        self.state.set_from_controls(temperature, intensity, wind_speed)
        self.particles.sync_wind(wind_speed)
        self._rebuild_particles()
        return self.readout()

    def update_cloudiness(self, cloudiness: int) -> dict:
        self.state.set_cloudiness(cloudiness)
        self.clouds.reinitialize(cloudiness)
        return self.readout()

    def resize(self, width: int, height: int) -> bool:
        """Adopt a new canvas size and rebuild both fields at it."""
        if not self.viewport.resize(width, height):
            return False
        self._rebuild_particles()
        self.clouds.reinitialize(self.state.cloudiness)
        return True

    def set_param(self, name: str, value: float) -> dict:
        """Route one named slider change through the matching update path.

        Values are clamped to the slider range published in `parameters`;
        non-finite values raise ValueError.
        """
        coerce = self._coerce[name]
        value = float(value)
        if not math.isfinite(value):
            raise ValueError(f"{name} must be finite, got {value!r}")
        lo, hi = self._limits[name]
        value = coerce(max(lo, min(hi, value)))
        if name == "cloudiness":
            return self.update_cloudiness(value)

        values = {
            "temperature": self.state.temperature,
            "intensity": self.state.intensity,
            "wind_speed": self.state.wind_speed,
        }
        values[name] = value
        return self.update_weather(**values)

    def initialize(self) -> dict:
        """Populate both fields from the current state, as on page load."""
        s = self.state
        self.update_weather(s.temperature, s.intensity, s.wind_speed)
        return self.update_cloudiness(s.cloudiness)

    def readout(self) -> dict:
        return build_readout(self.state)

    def _rebuild_particles(self) -> None:
        s = self.state
        self.particles.reinitialize(s.intensity, s.classify_precipitation_kind(), s.wind_speed)
