"""Base abstractions shared by the precipitation and cloud fields."""

from __future__ import annotations

import abc
import math
import random
from dataclasses import dataclass

from display_list import DrawContext


@dataclass
class Viewport:
    """Canvas size in pixels. Shared by reference between fields and loop."""

    width: int = 1280
    height: int = 720

    def resize(self, width: int, height: int) -> bool:
        """Adopt a new size. Returns False (and keeps the old size) for non-positive input.

        Non-finite sizes raise ValueError.
        """
        width, height = float(width), float(height)
        if not (math.isfinite(width) and math.isfinite(height)):
            raise ValueError(f"Viewport size must be finite, got {width!r}x{height!r}")
        width, height = int(width), int(height)
        if width <= 0 or height <= 0:
            return False
        self.width = width
        self.height = height
        return True


def wrap_x(x: float, width: float) -> float:
    """Horizontal wrap: leaving one edge re-enters at the other."""
    if x > width:
        return 0.0
    if x < 0:
        return float(width)
    return x


def clamp_count(count: float) -> int:
    """Population size from a slider value; never negative."""
    return max(0, int(count))


class Field(abc.ABC):
    """A live, exclusively owned population of drawable elements.

    Reinitialization builds a new list and swaps the reference, so a frame
    that captured the old list finishes on it untouched.
    """

    name: str = "field"

    def __init__(self, viewport: Viewport, rng: random.Random | None = None) -> None:
        self.viewport = viewport
        self.rng = rng if rng is not None else random.Random()
        self._items: list = []
        self.skipped: int = 0  # elements skipped by the last advance/render pass

    def __len__(self) -> int:
        return len(self._items)

    def _isolated(self, items: list, step) -> None:
        """Apply `step` to every element; a failing element is skipped, not fatal."""
        skipped = 0
        last_error: Exception | None = None
        for item in items:
            try:
                step(item)
            except Exception as e:
                skipped += 1
                last_error = e
        self.skipped = skipped
        if skipped:
            print(f"[{self.name}] Skipped {skipped} element(s): {last_error}")

    @abc.abstractmethod
    def advance_frame(self) -> None:
        """Move every element one frame and apply the wrap invariants."""
        ...

    @abc.abstractmethod
    def render(self, ctx: DrawContext) -> None:
        ...
