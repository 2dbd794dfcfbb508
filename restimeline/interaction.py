# restimeline/interaction.py
from __future__ import annotations

from typing import Iterable, Optional, Sequence

from restimeline.consumptions import ConsumptionIndex
from restimeline.geometry import ViewportGeometry
from restimeline.model import Consumption, Resource


def nearest_bar(
    candidates: Iterable[Consumption],
    click_time: float,
    click_x: float,
    geo: ViewportGeometry,
) -> Optional[Consumption]:
    """Among intervals containing click_time, the one whose bar centre is closest to click_x.

    Ties keep the first candidate in iteration order.
    """
    best: Optional[Consumption] = None
    best_dist = float("inf")
    for cons in candidates:
        if not cons.contains(click_time):
            continue
        center_x = (geo.time_to_x(cons.start_time) + geo.time_to_x(cons.end_time)) / 2
        dist = abs(click_x - center_x)
        if dist < best_dist:
            best_dist = dist
            best = cons
    return best


def hit_test(
    x: float,
    y: float,
    geo: ViewportGeometry,
    resources: Sequence[Resource],
    consumptions: ConsumptionIndex,
) -> Optional[Consumption]:
    """Resolve a viewport-relative click to a consumption, or None.

    Clicks in either gutter, outside every row, or off every interval resolve
    to None.
    """
    if geo.in_gutter(x, y):
        return None
    index = geo.y_to_resource_index(y)
    if index is None or index >= len(resources):
        return None
    click_time = geo.x_to_time(x)
    return nearest_bar(consumptions.for_resource(resources[index].id), click_time, x, geo)


__all__ = ["hit_test", "nearest_bar"]
