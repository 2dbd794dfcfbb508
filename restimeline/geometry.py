"""Coordinate mapping between time / resource index and viewport pixels.

Pixel coordinates are viewport-relative (top-left origin). The content area
starts after the fixed gutters: the resource axis on the left
(`resource_axis_width`) and the time axis on top (`time_axis_height`).

Horizontal scale is fixed: one viewport width of content shows 24 hours, so
pixels-per-hour depends only on the viewport width, never on the dataset span.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional, Tuple

from restimeline.config import HOURS_PER_VIEWPORT, TimelineConfig
from restimeline.model import TimeRange, ViewportState
from restimeline.util.tz import DAY_MS, HOUR_MS


@dataclass(frozen=True)
class ViewportGeometry:
    config: TimelineConfig
    viewport: ViewportState
    time_range: Optional[TimeRange]
    resource_count: int

    @property
    def content_width(self) -> float:
        """Visible width of the content area (viewport minus the resource gutter)."""
        return float(self.viewport.width - self.config.resource_axis_width)

    @property
    def content_height(self) -> float:
        return float(self.viewport.height - self.config.time_axis_height)

    @property
    def pixels_per_hour(self) -> float:
        w = self.content_width
        return w / HOURS_PER_VIEWPORT if w > 0 else 0.0

    @property
    def ms_per_pixel(self) -> float:
        pph = self.pixels_per_hour
        return HOUR_MS / pph if pph > 0 else 0.0

    def time_to_x(self, t: float) -> float:
        if self.time_range is None or self.content_width <= 0:
            return 0.0
        content_x = (t - self.time_range.start) * self.pixels_per_hour / HOUR_MS
        return self.config.resource_axis_width + content_x - self.viewport.scroll_x

    def x_to_time(self, x: float) -> float:
        if self.time_range is None:
            return 0.0
        if self.content_width <= 0:
            return float(self.time_range.start)
        content_x = (x - self.config.resource_axis_width) + self.viewport.scroll_x
        return self.time_range.start + content_x * HOUR_MS / self.pixels_per_hour

    def resource_index_to_y(self, index: int) -> float:
        """Top edge of row `index` in viewport pixels."""
        cfg = self.config
        return float(cfg.time_axis_height + index * cfg.resource_height - self.viewport.scroll_y)

    def y_to_resource_index(self, y: float) -> Optional[int]:
        """Row under viewport pixel `y`, or None for the header band and past either end."""
        cfg = self.config
        if self.resource_count <= 0 or y < cfg.time_axis_height:
            return None
        row_y = y - cfg.time_axis_height + self.viewport.scroll_y
        if row_y < 0:
            return None
        index = int(math.floor(row_y / cfg.resource_height))
        return index if 0 <= index < self.resource_count else None

    def in_gutter(self, x: float, y: float) -> bool:
        return x < self.config.resource_axis_width or y < self.config.time_axis_height

    def content_size(self) -> Tuple[float, float]:
        """Total scrollable (width, height) for the full time range and roster."""
        cfg = self.config
        height = float(cfg.time_axis_height + self.resource_count * cfg.resource_height)
        if self.time_range is None or self.content_width <= 0:
            return float(cfg.resource_axis_width), height
        total_days = self.time_range.span / DAY_MS
        return cfg.resource_axis_width + total_days * self.content_width, height


__all__ = ["ViewportGeometry"]
