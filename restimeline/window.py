# restimeline/window.py
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

from restimeline.config import VISIBLE_PADDING
from restimeline.geometry import ViewportGeometry


@dataclass(frozen=True)
class VisibleWindow:
    start: float  # epoch ms, clamped to the dataset TimeRange
    end: float
    rows: range  # resource indices, always within [0, resource_count)


def visible_time_span(geo: ViewportGeometry) -> Optional[tuple[float, float]]:
    """Time covered by the scroll position plus one content width, padded and clamped."""
    tr = geo.time_range
    if tr is None or geo.content_width <= 0:
        return None

    ms_per_px = geo.ms_per_pixel
    start = tr.start + geo.viewport.scroll_x * ms_per_px
    end = start + geo.content_width * ms_per_px
    pad = (end - start) * VISIBLE_PADDING

    lo = min(max(tr.start, start - pad), tr.end)
    hi = max(min(tr.end, end + pad), lo)
    return lo, hi


def visible_rows(geo: ViewportGeometry) -> range:
    """Rows under the viewport, with one row of slack on each side."""
    n = geo.resource_count
    if n <= 0:
        return range(0, 0)
    row_h = geo.config.resource_height
    scroll_y = geo.viewport.scroll_y
    first = max(0, math.floor(scroll_y / row_h) - 1)
    stop = min(n, math.ceil((scroll_y + geo.content_height) / row_h) + 1)
    first = min(first, n)
    return range(first, max(first, stop))


def compute_visible_window(geo: ViewportGeometry) -> Optional[VisibleWindow]:
    span = visible_time_span(geo)
    if span is None:
        return None
    return VisibleWindow(start=span[0], end=span[1], rows=visible_rows(geo))


__all__ = ["VisibleWindow", "compute_visible_window", "visible_rows", "visible_time_span"]
