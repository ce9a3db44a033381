"""Cloud field: soft radial-gradient blobs composited in several opacity layers."""

from __future__ import annotations

import random
from dataclasses import dataclass

from display_list import DrawContext
from fields.base import Field, Viewport, clamp_count, wrap_x


@dataclass(frozen=True)
class CloudLayer:
    speed_multiplier: float
    opacity: float


# Back to front: faint and slow first, dense and fast last.
CLOUD_LAYERS: tuple[CloudLayer, ...] = (
    CloudLayer(speed_multiplier=0.2, opacity=0.3),
    CloudLayer(speed_multiplier=0.4, opacity=0.5),
    CloudLayer(speed_multiplier=0.6, opacity=0.8),
)

# Drift scaling modes for render_layered()
STABLE = "stable"      # multiplier applied at draw time only
COMPOUND = "compound"  # multiplier folded into drift every draw (decays to 0)
DRIFT_MODES = (STABLE, COMPOUND)


class CloudParticle:
    """One cloud blob: position, radius 20-70, small drift, opacity 0.4-1.0."""

    __slots__ = ("x", "y", "radius", "drift_speed", "opacity")

    def __init__(self, x: float, y: float, radius: float,
                 drift_speed: float, opacity: float) -> None:
        self.x = x
        self.y = y
        self.radius = radius
        self.drift_speed = drift_speed
        self.opacity = opacity

    @classmethod
    def spawn(cls, viewport: Viewport, rng: random.Random) -> CloudParticle:
        return cls(
            x=rng.random() * viewport.width,
            y=rng.random() * viewport.height / 2,
            radius=rng.random() * 50 + 20,
            drift_speed=rng.random() * 0.5 - 0.25,
            opacity=rng.random() * 0.6 + 0.4,
        )

    def update(self, viewport: Viewport) -> None:
        self.x = wrap_x(self.x + self.drift_speed, viewport.width)

    def draw(self, ctx: DrawContext, offset: float = 0.0) -> None:
        ctx.radial_disc(
            self.x + offset, self.y, self.radius,
            f"rgba(255, 255, 255, {round(self.opacity, 3)})",
            "rgba(255, 255, 255, 0)",
        )


class CloudField(Field):
    """Owns the live clouds. Population size is the cloudiness percentage."""

    name = "CloudField"

    def __init__(self, viewport: Viewport, rng: random.Random | None = None,
                 drift_mode: str = STABLE) -> None:
        super().__init__(viewport, rng)
        if drift_mode not in DRIFT_MODES:
            raise ValueError(f"Unknown cloud drift mode: {drift_mode!r}")
        self.drift_mode = drift_mode

    @property
    def clouds(self) -> list[CloudParticle]:
        return self._items

    def reinitialize(self, count: int) -> None:
        n = clamp_count(count)
        self._items = [CloudParticle.spawn(self.viewport, self.rng) for _ in range(n)]

    def advance_frame(self) -> None:
        viewport = self.viewport
        self._isolated(self._items, lambda c: c.update(viewport))

    def _draw_in_layer(self, ctx: DrawContext, cloud: CloudParticle,
                       layer: CloudLayer) -> None:
        if self.drift_mode == COMPOUND:
            cloud.drift_speed *= layer.speed_multiplier
            offset = 0.0
        else:
            offset = cloud.drift_speed * layer.speed_multiplier
        ctx.set_alpha(layer.opacity)
        try:
            cloud.draw(ctx, offset)
        finally:
            ctx.set_alpha(1.0)

    def render_layered(self, ctx: DrawContext,
                       layers: tuple[CloudLayer, ...] | list = CLOUD_LAYERS) -> None:
        """Draw every cloud once per layer, at that layer's opacity.

        `layers` may hold CloudLayer instances or plain (multiplier, opacity) pairs.
        """
        clouds = self._items
        skipped = 0
        for layer in layers:
            if not isinstance(layer, CloudLayer):
                layer = CloudLayer(*layer)
            self._isolated(clouds, lambda c: self._draw_in_layer(ctx, c, layer))
            skipped += self.skipped
        self.skipped = skipped

    def render(self, ctx: DrawContext) -> None:
        self.render_layered(ctx, CLOUD_LAYERS)
