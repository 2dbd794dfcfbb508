"""Matplotlib-backed drawing surface.

Draws onto a `matplotlib.figure.Figure` attached to an Agg canvas, using
viewport pixel coordinates with the origin at the top-left corner. Artists
get strictly increasing zorder so the result follows painter's order
regardless of artist type.
"""

from __future__ import annotations

from typing import Optional, Tuple

import numpy as np
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.lines import Line2D
from matplotlib.patches import Rectangle

_HA = {"left": "left", "center": "center", "right": "right", "start": "left", "end": "right"}
_VA = {"top": "top", "middle": "center", "bottom": "bottom", "alphabetic": "baseline"}


class MatplotlibSurface:
    def __init__(self, width: int, height: int, *, dpi: int = 100, figure: Optional[Figure] = None) -> None:
        self.dpi = dpi
        self.figure = figure if figure is not None else Figure(figsize=(width / dpi, height / dpi), dpi=dpi)
        if not isinstance(self.figure.canvas, FigureCanvasAgg):
            FigureCanvasAgg(self.figure)
        self.ax = self.figure.add_axes((0.0, 0.0, 1.0, 1.0))
        self._z = 0
        self._reset_axes(width, height)

    def _reset_axes(self, width: float, height: float) -> None:
        ax = self.ax
        ax.set_xlim(0, width)
        ax.set_ylim(height, 0)
        ax.set_axis_off()
        ax.margins(0)

    def _next_z(self) -> int:
        self._z += 1
        return self._z

    def size(self) -> Tuple[float, float]:
        w_in, h_in = self.figure.get_size_inches()
        return (float(round(w_in * self.figure.dpi)), float(round(h_in * self.figure.dpi)))

    def set_size(self, width: int, height: int) -> None:
        self.figure.set_size_inches(width / self.figure.dpi, height / self.figure.dpi)

    def clear(self, width: float, height: float) -> None:
        self.ax.cla()
        self._z = 0
        self._reset_axes(width, height)

    def fill_rect(self, x, y, w, h, color) -> None:
        self.ax.add_patch(Rectangle((x, y), w, h, facecolor=color, edgecolor="none", linewidth=0, zorder=self._next_z()))

    def stroke_rect(self, x, y, w, h, color, line_width=1.0) -> None:
        self.ax.add_patch(
            Rectangle((x, y), w, h, fill=False, edgecolor=color, linewidth=line_width, zorder=self._next_z())
        )

    def line(self, x0, y0, x1, y1, color, line_width=1.0) -> None:
        self.ax.add_line(Line2D([x0, x1], [y0, y1], color=color, linewidth=line_width, zorder=self._next_z()))

    def text(self, x, y, s, color, *, font_size=12.0, align="left", baseline="middle") -> None:
        self.ax.text(
            x,
            y,
            s,
            color=color,
            fontsize=font_size,
            ha=_HA.get(align, "left"),
            va=_VA.get(baseline, "center"),
            zorder=self._next_z(),
        )

    def to_array(self) -> np.ndarray:
        """Render and return the figure pixels as an (H, W, 4) uint8 RGBA array."""
        self.figure.canvas.draw()
        return np.asarray(self.figure.canvas.buffer_rgba()).copy()


__all__ = ["MatplotlibSurface"]
