"""Precipitation field: rain streaks, snow discs, and the mixed flicker between them."""

from __future__ import annotations

import random

from display_list import DrawContext
from fields.base import Field, Viewport, clamp_count, wrap_x

RAIN = "rain"
SNOW = "snow"
MIXED = "mixed"
KINDS = (RAIN, SNOW, MIXED)

RAIN_COLOR = "#00f"
SNOW_COLOR = "#fff"
STREAK_LENGTH = 5  # rain streak height per unit of size


class Particle:
    """A single precipitation element.

    Attributes:
        x, y: position in canvas pixels.
        size: 1-4; snow disc radius, or streak length / 5 for rain.
        fall_speed: 1-2 px/frame, 3-4 for rain.
        drift_speed: horizontal px/frame, tracks the wind.
        kind: "rain", "snow" or "mixed".
    """

    __slots__ = ("x", "y", "size", "fall_speed", "drift_speed", "kind")

    def __init__(self, x: float, y: float, size: float, fall_speed: float,
                 drift_speed: float, kind: str) -> None:
        self.x = x
        self.y = y
        self.size = size
        self.fall_speed = fall_speed
        self.drift_speed = drift_speed
        self.kind = kind

    @classmethod
    def spawn(cls, kind: str, wind_speed: float, viewport: Viewport,
              rng: random.Random) -> Particle:
        return cls(
            x=rng.random() * viewport.width,
            y=rng.random() * viewport.height,
            size=rng.random() * 3 + 1,
            fall_speed=rng.random() + (3 if kind == RAIN else 1),
            drift_speed=wind_speed,
            kind=kind,
        )

    def update(self, viewport: Viewport, rng: random.Random) -> None:
        self.y += self.fall_speed
        self.x += self.drift_speed
        if self.y > viewport.height:
            self.y = 0.0
            self.x = rng.random() * viewport.width
        self.x = wrap_x(self.x, viewport.width)

    def draw_streak(self, ctx: DrawContext) -> None:
        ctx.line(self.x, self.y,
                 self.x + self.drift_speed, self.y + self.size * STREAK_LENGTH,
                 RAIN_COLOR, 1)

    def draw_flake(self, ctx: DrawContext) -> None:
        ctx.disc(self.x, self.y, self.size, SNOW_COLOR)


class ParticleField(Field):
    """Owns the live precipitation particles.

    Population size is the precipitation intensity; every particle in one
    population shares a kind.
    """

    name = "ParticleField"

    def __init__(self, viewport: Viewport, rng: random.Random | None = None) -> None:
        super().__init__(viewport, rng)
        self.kind: str = RAIN

    @property
    def particles(self) -> list[Particle]:
        return self._items

    def reinitialize(self, count: int, kind: str, wind_speed: float = 0.0) -> None:
        """Replace the population with `count` fresh particles of `kind`."""
        if kind not in KINDS:
            raise ValueError(f"Unknown precipitation kind: {kind!r}")
        n = clamp_count(count)
        self.kind = kind
        self._items = [
            Particle.spawn(kind, wind_speed, self.viewport, self.rng)
            for _ in range(n)
        ]

    def sync_wind(self, wind_speed: float) -> None:
        """Re-aim every existing particle without resetting the population."""
        for p in self._items:
            p.drift_speed = wind_speed

    def advance_frame(self) -> None:
        viewport, rng = self.viewport, self.rng
        self._isolated(self._items, lambda p: p.update(viewport, rng))

    def _draw(self, ctx: DrawContext, p: Particle) -> None:
        if p.kind == RAIN:
            p.draw_streak(ctx)
        elif p.kind == SNOW:
            p.draw_flake(ctx)
        elif p.kind == MIXED:
            # Re-rolled every frame: mixed particles flicker between looks.
            if self.rng.random() < 0.5:
                p.draw_streak(ctx)
            else:
                p.draw_flake(ctx)

    def render(self, ctx: DrawContext) -> None:
        self._isolated(self._items, lambda p: self._draw(ctx, p))
