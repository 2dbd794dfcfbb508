"""Drawing-surface boundary.

The engine never touches a concrete canvas. Hosts inject anything that
implements `DrawingSurface`: fill/stroke/text primitives in viewport pixels
(top-left origin) plus a size query.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, List, Protocol, Tuple


class DrawingSurface(Protocol):
    def size(self) -> Tuple[float, float]:
        """Return the current (width, height) in pixels; (0, 0) when not laid out."""

    def clear(self, width: float, height: float) -> None: ...

    def fill_rect(self, x: float, y: float, w: float, h: float, color: str) -> None: ...

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: str, line_width: float = 1.0) -> None: ...

    def line(self, x0: float, y0: float, x1: float, y1: float, color: str, line_width: float = 1.0) -> None: ...

    def text(
        self,
        x: float,
        y: float,
        s: str,
        color: str,
        *,
        font_size: float = 12.0,
        align: str = "left",
        baseline: str = "middle",
    ) -> None: ...


@dataclass(frozen=True)
class DrawCommand:
    op: str
    args: Tuple[Any, ...]


class RecordingSurface:
    """In-memory surface that records draw commands (headless hosts, tests)."""

    def __init__(self, width: float = 0, height: float = 0) -> None:
        self.width = width
        self.height = height
        self.commands: List[DrawCommand] = []

    def resize(self, width: float, height: float) -> None:
        self.width = width
        self.height = height

    def size(self) -> Tuple[float, float]:
        return (self.width, self.height)

    def clear(self, width: float, height: float) -> None:
        self.commands = [DrawCommand("clear", (width, height))]

    def fill_rect(self, x, y, w, h, color) -> None:
        self.commands.append(DrawCommand("fill_rect", (x, y, w, h, color)))

    def stroke_rect(self, x, y, w, h, color, line_width=1.0) -> None:
        self.commands.append(DrawCommand("stroke_rect", (x, y, w, h, color, line_width)))

    def line(self, x0, y0, x1, y1, color, line_width=1.0) -> None:
        self.commands.append(DrawCommand("line", (x0, y0, x1, y1, color, line_width)))

    def text(self, x, y, s, color, *, font_size=12.0, align="left", baseline="middle") -> None:
        self.commands.append(DrawCommand("text", (x, y, s, color, font_size, align, baseline)))

    def ops(self, op: str) -> List[DrawCommand]:
        return [c for c in self.commands if c.op == op]

    def texts(self) -> List[str]:
        return [c.args[2] for c in self.commands if c.op == "text"]


__all__ = ["DrawCommand", "DrawingSurface", "RecordingSurface"]
