"""Canvas abstraction and the JSON display list streamed to browser clients."""

from __future__ import annotations

import abc


class DrawContext(abc.ABC):
    """Minimal 2D drawing surface used by the fields and the animation loop.

    Mirrors the handful of canvas primitives the renderer needs. Colors are
    CSS color strings so the browser can use them verbatim.
    """

    global_alpha: float = 1.0

    @abc.abstractmethod
    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        ...

    @abc.abstractmethod
    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        ...

    @abc.abstractmethod
    def line(self, x1: float, y1: float, x2: float, y2: float,
             color: str, width: float = 1.0) -> None:
        ...

    @abc.abstractmethod
    def disc(self, x: float, y: float, radius: float, color: str) -> None:
        ...

    @abc.abstractmethod
    def radial_disc(self, x: float, y: float, radius: float,
                    inner: str, outer: str) -> None:
        """Disc filled with a radial gradient from `inner` at the centre to `outer` at `radius`."""
        ...

    def set_alpha(self, alpha: float) -> None:
        self.global_alpha = alpha


class DisplayList(DrawContext):
    """Records draw calls as JSON-ready command dicts.

    One DisplayList holds exactly one frame. Coordinates are rounded to keep
    the WebSocket payload small; the browser replays the commands in order.
    """

    PRECISION = 2

    def __init__(self, width: int, height: int) -> None:
        self.width = width
        self.height = height
        self.global_alpha = 1.0
        self.commands: list[dict] = []

    def _r(self, value: float) -> float:
        return round(value, self.PRECISION)

    def clear_rect(self, x: float, y: float, w: float, h: float) -> None:
        self.commands.append({
            "op": "clear", "x": self._r(x), "y": self._r(y),
            "w": self._r(w), "h": self._r(h),
        })

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None:
        self.commands.append({
            "op": "rect", "x": self._r(x), "y": self._r(y),
            "w": self._r(w), "h": self._r(h), "color": color,
        })

    def line(self, x1: float, y1: float, x2: float, y2: float,
             color: str, width: float = 1.0) -> None:
        self.commands.append({
            "op": "line",
            "x1": self._r(x1), "y1": self._r(y1),
            "x2": self._r(x2), "y2": self._r(y2),
            "color": color, "width": width,
        })

    def disc(self, x: float, y: float, radius: float, color: str) -> None:
        self.commands.append({
            "op": "disc", "x": self._r(x), "y": self._r(y),
            "r": self._r(radius), "color": color,
        })

    def radial_disc(self, x: float, y: float, radius: float,
                    inner: str, outer: str) -> None:
        self.commands.append({
            "op": "radial", "x": self._r(x), "y": self._r(y),
            "r": self._r(radius), "inner": inner, "outer": outer,
        })

    def set_alpha(self, alpha: float) -> None:
        # Only emit on change; layered clouds toggle alpha once per draw.
        if alpha == self.global_alpha:
            return
        self.global_alpha = alpha
        self.commands.append({"op": "alpha", "value": alpha})

    def ops(self) -> list[str]:
        """Command names in draw order."""
        return [c["op"] for c in self.commands]

    def to_message(self) -> dict:
        return {
            "type": "frame",
            "width": self.width,
            "height": self.height,
            "commands": self.commands,
        }
