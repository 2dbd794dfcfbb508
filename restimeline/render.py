"""Render pipeline: fixed-order draw passes over the visible window.

Passes (bottom to top):
  1. background  - content area and both gutters
  2. grid        - row boundaries and hour lines
  3. bars        - one bar per visible consumption, selection included
  4. axes        - time header and resource gutter, drawn last so they
                   occlude bars and grid under the pinned gutters
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Tuple

from restimeline.config import TimelineConfig
from restimeline.consumptions import ConsumptionIndex
from restimeline.geometry import ViewportGeometry
from restimeline.model import Resource
from restimeline.surface import DrawingSurface
from restimeline.util.tz import hour_of_day_label, iter_hour_marks
from restimeline.window import VisibleWindow


@dataclass(frozen=True)
class RenderFrame:
    """Everything one draw needs, captured before the first pass runs."""

    geometry: ViewportGeometry
    window: VisibleWindow
    resources: Tuple[Resource, ...]
    consumptions: ConsumptionIndex
    selected_id: Optional[str]
    tz: dt.tzinfo

    @property
    def config(self) -> TimelineConfig:
        return self.geometry.config

    @property
    def width(self) -> float:
        return float(self.geometry.viewport.width)

    @property
    def height(self) -> float:
        return float(self.geometry.viewport.height)


def draw_background(surface: DrawingSurface, frame: RenderFrame) -> None:
    cfg = frame.config
    colors = cfg.colors
    x0 = cfg.resource_axis_width
    y0 = cfg.time_axis_height
    content_w = frame.width - x0
    content_h = frame.height - y0

    surface.fill_rect(x0, y0, content_w, content_h, colors.content)
    surface.fill_rect(0, y0, x0, content_h, colors.gutter)
    surface.fill_rect(x0, 0, content_w, y0, colors.gutter)


def draw_grid(surface: DrawingSurface, frame: RenderFrame) -> None:
    cfg = frame.config
    geo = frame.geometry
    color = cfg.colors.grid
    x0 = cfg.resource_axis_width
    y0 = cfg.time_axis_height
    x1 = frame.width
    y1 = frame.height

    rows = frame.window.rows
    for i in range(rows.start, rows.stop + 1):
        y = geo.resource_index_to_y(i)
        if y0 <= y <= y1:
            surface.line(x0, y, x1, y, color)

    for t in iter_hour_marks(frame.window.start, frame.window.end):
        x = geo.time_to_x(t)
        if x0 <= x <= x1:
            surface.line(x, y0, x, y1, color)


def draw_consumption_bars(surface: DrawingSurface, frame: RenderFrame) -> None:
    cfg = frame.config
    geo = frame.geometry
    colors = cfg.colors
    win = frame.window
    x0 = cfg.resource_axis_width
    y0 = cfg.time_axis_height
    x1 = frame.width
    y1 = frame.height
    half = cfg.bar_height / 2

    for i in win.rows:
        resource = frame.resources[i]
        row_y = geo.resource_index_to_y(i)
        if row_y + cfg.resource_height < y0 or row_y > y1:
            continue
        center_y = row_y + cfg.resource_height / 2

        for cons in frame.consumptions.in_window(resource.id, win.start, win.end):
            bar_x = geo.time_to_x(cons.start_time)
            bar_end_x = geo.time_to_x(cons.end_time)
            if bar_end_x < x0 or bar_x > x1:
                continue
            bar_w = max(cfg.min_bar_width, bar_end_x - bar_x)

            if cons.id == frame.selected_id:
                surface.fill_rect(bar_x, center_y - half, bar_w, cfg.bar_height, colors.bar_selected)
                surface.stroke_rect(
                    bar_x - 1,
                    center_y - half - 1,
                    bar_w + 2,
                    cfg.bar_height + 2,
                    colors.bar_selected_outline,
                    2,
                )
            else:
                surface.fill_rect(bar_x, center_y - half, bar_w, cfg.bar_height, colors.bar)


def draw_time_axis(surface: DrawingSurface, frame: RenderFrame) -> None:
    cfg = frame.config
    colors = cfg.colors
    geo = frame.geometry
    x0 = cfg.resource_axis_width
    axis_h = cfg.time_axis_height
    x1 = frame.width

    surface.fill_rect(x0, 0, x1 - x0, axis_h, colors.gutter)
    surface.line(x0, axis_h, x1, axis_h, colors.gutter_border)

    for t in iter_hour_marks(frame.window.start, frame.window.end):
        x = geo.time_to_x(t)
        if not (x0 <= x <= x1):
            continue
        surface.line(x, axis_h - cfg.tick_length, x, axis_h, colors.tick)
        surface.text(
            x,
            axis_h / 2,
            hour_of_day_label(t, frame.tz),
            colors.label,
            font_size=cfg.time_label_font_size,
            align="center",
            baseline="middle",
        )


def draw_resource_axis(surface: DrawingSurface, frame: RenderFrame) -> None:
    cfg = frame.config
    colors = cfg.colors
    geo = frame.geometry
    axis_w = cfg.resource_axis_width
    y0 = cfg.time_axis_height
    y1 = frame.height

    surface.fill_rect(0, y0, axis_w, y1 - y0, colors.gutter)
    surface.line(axis_w, y0, axis_w, y1, colors.gutter_border)
    # Corner where the two gutters meet.
    surface.fill_rect(0, 0, axis_w, y0, colors.gutter)

    for i in frame.window.rows:
        y = geo.resource_index_to_y(i)
        if not (y0 <= y <= y1):
            continue
        surface.text(
            axis_w - cfg.label_padding,
            y + cfg.resource_height / 2,
            frame.resources[i].name,
            colors.label,
            font_size=cfg.resource_label_font_size,
            align="right",
            baseline="middle",
        )


def draw_axes(surface: DrawingSurface, frame: RenderFrame) -> None:
    draw_time_axis(surface, frame)
    draw_resource_axis(surface, frame)


RenderPass = Callable[[DrawingSurface, RenderFrame], None]

DEFAULT_PASSES: Tuple[Tuple[str, RenderPass], ...] = (
    ("background", draw_background),
    ("grid", draw_grid),
    ("bars", draw_consumption_bars),
    ("axes", draw_axes),
)


class RenderPipeline:
    def __init__(self, passes: Sequence[Tuple[str, RenderPass]] = DEFAULT_PASSES) -> None:
        self.passes = tuple(passes)

    def run(self, surface: DrawingSurface, frame: RenderFrame) -> None:
        """Clear the surface and run every pass in order. Exceptions propagate."""
        surface.clear(frame.width, frame.height)
        for _name, draw in self.passes:
            draw(surface, frame)


__all__ = [
    "DEFAULT_PASSES",
    "RenderFrame",
    "RenderPass",
    "RenderPipeline",
    "draw_axes",
    "draw_background",
    "draw_consumption_bars",
    "draw_grid",
    "draw_resource_axis",
    "draw_time_axis",
]
