# restimeline/model.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Tuple


def _pick(d: Mapping[str, Any], *keys: str) -> Any:
    for k in keys:
        if k in d:
            return d[k]
    return None


@dataclass(frozen=True)
class Resource:
    id: str
    name: str

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Resource":
        rid = _pick(d, "id")
        name = _pick(d, "name")
        return cls(id=rid, name=str(name) if name is not None else str(rid))

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class TimeRange:
    start: int  # epoch ms
    end: int

    @property
    def span(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class Consumption:
    id: str
    resource_id: str
    start_time: int  # epoch ms
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    def contains(self, t: float) -> bool:
        return self.start_time <= t <= self.end_time

    def intersects(self, start: float, end: float) -> bool:
        return self.end_time >= start and self.start_time <= end

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> "Consumption":
        """Accept snake_case or camelCase (resourceId/startTime/endTime) keys."""
        return cls(
            id=_pick(d, "id"),
            resource_id=_pick(d, "resource_id", "resourceId"),
            start_time=_pick(d, "start_time", "startTime"),
            end_time=_pick(d, "end_time", "endTime"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "resourceId": self.resource_id,
            "startTime": self.start_time,
            "endTime": self.end_time,
        }


@dataclass(frozen=True)
class ViewportState:
    scroll_x: int = 0
    scroll_y: int = 0
    width: int = 0
    height: int = 0

    @property
    def is_sized(self) -> bool:
        return self.width > 0 and self.height > 0


@dataclass(frozen=True)
class SampleDataset:
    resources: Tuple[Resource, ...]
    time_range: TimeRange
    consumptions: Tuple[Consumption, ...]


__all__ = [
    "Resource",
    "TimeRange",
    "Consumption",
    "ViewportState",
    "SampleDataset",
]
