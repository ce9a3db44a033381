"""Per-frame animation loop: clear, fog, clouds, precipitation, reschedule."""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable

from display_list import DisplayList, DrawContext
from fields.base import Viewport
from fields.clouds import CLOUD_LAYERS, CloudField
from fields.precipitation import ParticleField
from weather.state import WeatherState

FOG_COLOR = "rgba(255, 255, 255, 0.2)"

STOPPED = "stopped"
RUNNING = "running"


class AnimationLoop:
    """Renders one frame per tick from whatever the fields currently hold.

    The loop never reads control input; it only sees the state and field
    references it was given, so parameter changes show up on the next tick.
    """

    def __init__(self, state: WeatherState, particles: ParticleField,
                 clouds: CloudField, viewport: Viewport,
                 frame_rate: float = 60.0) -> None:
        self.state = state
        self.particles = particles
        self.clouds = clouds
        self.viewport = viewport
        self.frame_rate = frame_rate
        self.status = STOPPED
        self.frames = 0

    @property
    def interval(self) -> float:
        return 1.0 / self.frame_rate

    def draw_fog(self, ctx: DrawContext) -> None:
        if self.state.fog_enabled:
            ctx.fill_rect(0, 0, self.viewport.width, self.viewport.height, FOG_COLOR)

    def tick(self, ctx: DrawContext) -> None:
        """Advance the simulation one frame and draw it into `ctx`."""
        w, h = self.viewport.width, self.viewport.height
        ctx.clear_rect(0, 0, w, h)
        self.draw_fog(ctx)

        self.clouds.advance_frame()
        self.clouds.render_layered(ctx, CLOUD_LAYERS)

        self.particles.advance_frame()
        self.particles.render(ctx)
        self.frames += 1

    def render_frame(self) -> DisplayList | None:
        """Tick into a fresh display list. Returns None if the tick failed."""
        frame = DisplayList(self.viewport.width, self.viewport.height)
        try:
            self.tick(frame)
        except Exception as e:
            print(f"[FrameLoop] Error: {e}")
            return None
        return frame

    async def run(self, present: Callable[[DisplayList], Awaitable[None]],
                  should_render: Callable[[], bool] | None = None) -> None:
        """Render forever, handing each frame to `present`.

        `should_render` lets the host idle the loop (e.g. nobody watching)
        without leaving the running state. Ends only by task cancellation.
        """
        self.status = RUNNING
        try:
            while True:
                if should_render is not None and not should_render():
                    await asyncio.sleep(0.1)
                    continue

                frame = self.render_frame()
                if frame is not None:
                    try:
                        await present(frame)
                    except Exception as e:
                        print(f"[FrameLoop] Present error: {e}")

                await asyncio.sleep(self.interval)
        finally:
            self.status = STOPPED
