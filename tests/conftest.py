"""Shared fixtures for the Weather Canvas test suite."""

from __future__ import annotations

import random

import pytest

from animation import AnimationLoop
from display_list import DisplayList
from fields.base import Viewport
from fields.clouds import COMPOUND, CloudField
from fields.precipitation import ParticleField
from weather.binding import ParameterBinding
from weather.state import WeatherState


# ── State fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def default_state() -> WeatherState:
    """WeatherState with the slider defaults."""
    return WeatherState()


@pytest.fixture
def viewport() -> Viewport:
    return Viewport(width=400, height=300)


@pytest.fixture
def rng() -> random.Random:
    return random.Random(42)


# ── Field fixtures ──────────────────────────────────────────────────────


@pytest.fixture
def particle_field(viewport: Viewport, rng: random.Random) -> ParticleField:
    return ParticleField(viewport, rng)


@pytest.fixture
def cloud_field(viewport: Viewport, rng: random.Random) -> CloudField:
    return CloudField(viewport, rng)


@pytest.fixture
def compound_cloud_field(viewport: Viewport, rng: random.Random) -> CloudField:
    """Cloud field reproducing the decaying-drift layer quirk."""
    return CloudField(viewport, rng, drift_mode=COMPOUND)


@pytest.fixture
def canvas(viewport: Viewport) -> DisplayList:
    return DisplayList(viewport.width, viewport.height)


# ── Wiring fixtures ─────────────────────────────────────────────────────


@pytest.fixture
def binding(default_state: WeatherState, particle_field: ParticleField,
            cloud_field: CloudField, viewport: Viewport) -> ParameterBinding:
    b = ParameterBinding(default_state, particle_field, cloud_field, viewport)
    b.initialize()
    return b


@pytest.fixture
def animation_loop(binding: ParameterBinding) -> AnimationLoop:
    return AnimationLoop(binding.state, binding.particles, binding.clouds, binding.viewport)
