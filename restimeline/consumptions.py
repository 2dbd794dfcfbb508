# restimeline/consumptions.py
from __future__ import annotations

from bisect import bisect_left, bisect_right
from typing import Dict, Iterable, List, Optional, Tuple

from restimeline.model import Consumption


class ConsumptionIndex:
    """Consumptions sorted by start_time, grouped per resource.

    The full collection and every per-resource list keep start_time order
    (stable for equal starts, so input order breaks ties).
    """

    def __init__(self, consumptions: Iterable[Consumption] = ()) -> None:
        self.ordered: Tuple[Consumption, ...] = tuple(sorted(consumptions, key=lambda c: c.start_time))
        self.by_id: Dict[str, Consumption] = {c.id: c for c in self.ordered}
        self._by_resource: Dict[str, List[Consumption]] = {}
        for c in self.ordered:
            self._by_resource.setdefault(c.resource_id, []).append(c)
        self._starts: Dict[str, List[int]] = {
            rid: [c.start_time for c in items] for rid, items in self._by_resource.items()
        }
        self._longest: Dict[str, int] = {
            rid: max(c.duration for c in items) for rid, items in self._by_resource.items()
        }

    def __len__(self) -> int:
        return len(self.ordered)

    def get(self, consumption_id: Optional[str]) -> Optional[Consumption]:
        if consumption_id is None:
            return None
        return self.by_id.get(consumption_id)

    def for_resource(self, resource_id: str) -> List[Consumption]:
        return list(self._by_resource.get(resource_id, ()))

    def in_window(self, resource_id: str, start: float, end: float) -> List[Consumption]:
        """Consumptions of resource_id whose interval intersects [start, end]."""
        items = self._by_resource.get(resource_id)
        if not items:
            return []
        starts = self._starts[resource_id]
        # Nothing starting before start - longest can still reach start.
        lo = bisect_left(starts, start - self._longest[resource_id])
        hi = bisect_right(starts, end)
        return [c for c in items[lo:hi] if c.end_time >= start]


__all__ = ["ConsumptionIndex"]
