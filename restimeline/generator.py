"""Synthetic consumption data.

Per resource, the time range is cut into equal slots and at most one
interval is placed per slot, never earlier than the previous accepted
interval's end plus `min_gap`. The result has no zero-width intervals, none
outside the range, and little overlap.
"""

from __future__ import annotations

import datetime as dt
import logging
import math
import random
from dataclasses import dataclass, fields
from typing import Any, List, Mapping, Optional, Sequence, Union

from restimeline.model import Consumption, Resource, SampleDataset, TimeRange
from restimeline.util.tz import DAY_MS, HOUR_MS, MINUTE_MS, midnight_epoch_ms, resolve_tz, today_date

logger = logging.getLogger(__name__)

DEFAULT_RESOURCE_NAMES = tuple(
    [f"Server-{i:02d}" for i in range(1, 21)]
    + [f"Database-{i:02d}" for i in range(1, 13)]
    + [f"Cache-{i:02d}" for i in range(1, 9)]
    + [f"Worker-{i:02d}" for i in range(1, 17)]
    + [f"API-Gateway-{i:02d}" for i in range(1, 5)]
    + [f"Load-Balancer-{i:02d}" for i in range(1, 9)]
)

_CAMEL = {
    "minConsumptionsPerDay": "min_consumptions_per_day",
    "maxConsumptionsPerDay": "max_consumptions_per_day",
    "minDuration": "min_duration",
    "maxDuration": "max_duration",
    "minGap": "min_gap",
}


@dataclass(frozen=True)
class ConsumptionOptions:
    min_consumptions_per_day: int = 3
    max_consumptions_per_day: int = 8
    min_duration: int = 30 * MINUTE_MS
    max_duration: int = 4 * HOUR_MS
    min_gap: int = 15 * MINUTE_MS

    def __post_init__(self) -> None:
        if self.min_consumptions_per_day < 0:
            raise ValueError("min_consumptions_per_day must be >= 0")
        if self.max_consumptions_per_day < self.min_consumptions_per_day:
            raise ValueError("max_consumptions_per_day must be >= min_consumptions_per_day")
        if self.min_duration <= 0:
            raise ValueError("min_duration must be > 0")
        if self.max_duration < self.min_duration:
            raise ValueError("max_duration must be >= min_duration")
        if self.min_gap < 0:
            raise ValueError("min_gap must be >= 0")

    @classmethod
    def from_dict(cls, d: Optional[Mapping[str, Any]]) -> "ConsumptionOptions":
        """Build from snake_case or camelCase keys; unknown keys raise ValueError."""
        if not d:
            return cls()
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for k, v in d.items():
            name = _CAMEL.get(k, k)
            if name not in known:
                raise ValueError(f"Unknown consumption option: {k!r}")
            kwargs[name] = int(v)
        return cls(**kwargs)


OptionsLike = Union[ConsumptionOptions, Mapping[str, Any], None]


def _coerce_options(options: OptionsLike) -> ConsumptionOptions:
    if isinstance(options, ConsumptionOptions):
        return options
    return ConsumptionOptions.from_dict(options)


def generate_resources(names: Optional[Sequence[str]] = None) -> List[Resource]:
    names = DEFAULT_RESOURCE_NAMES if names is None else names
    return [Resource(id=f"res-{i + 1}", name=str(name)) for i, name in enumerate(names)]


def generate_time_range(
    days: int,
    end_date: Optional[dt.date] = None,
    tz: Optional[str] = "local",
) -> TimeRange:
    """`days` whole calendar days ending with end_date (default: today in tz)."""
    if days < 1:
        raise ValueError(f"days must be >= 1; got {days}")
    tzinfo = resolve_tz(tz)
    last = end_date if end_date is not None else today_date(tzinfo)
    first = last - dt.timedelta(days=days - 1)
    start = midnight_epoch_ms(first, tzinfo)
    end = midnight_epoch_ms(last + dt.timedelta(days=1), tzinfo) - 1
    return TimeRange(start=start, end=end)


def _generate_for_resource(
    resource: Resource,
    tr: TimeRange,
    days: int,
    opts: ConsumptionOptions,
    rng: random.Random,
) -> List[Consumption]:
    per_day = rng.randint(opts.min_consumptions_per_day, opts.max_consumptions_per_day)
    total = per_day * days
    if total <= 0:
        return []

    span = tr.span
    slot_size = span / total
    max_slot_usage = min(slot_size * 0.7, (opts.min_duration + opts.max_duration) / 2)
    duration_cap = max(opts.min_duration, min(opts.max_duration, max_slot_usage))

    out: List[Consumption] = []
    last_end = tr.start
    for i in range(total):
        slot_start = tr.start + i * slot_size
        slot_end = slot_start + slot_size
        min_start = max(slot_start, last_end + opts.min_gap)
        max_start = min(slot_end - opts.min_duration - opts.min_gap, tr.end - opts.min_duration)
        if max_start <= min_start:
            continue

        duration = int(opts.min_duration + rng.random() * (duration_cap - opts.min_duration))
        room = max(0.0, max_start - min_start - duration)
        start = math.ceil(min_start + rng.random() * room)
        end = start + duration
        if end > tr.end:
            continue

        out.append(Consumption(id=f"cons-{resource.id}-{i}", resource_id=resource.id, start_time=start, end_time=end))
        last_end = end
    return out


def generate_consumptions(
    resources: Sequence[Resource],
    time_range: TimeRange,
    options: OptionsLike = None,
    rng: Optional[random.Random] = None,
) -> List[Consumption]:
    """Generate consumptions for every resource, sorted by start_time."""
    opts = _coerce_options(options)
    rng = rng if rng is not None else random.Random()
    if time_range.span <= 0 or not resources:
        return []

    days = -(-time_range.span // DAY_MS)
    out: List[Consumption] = []
    for resource in resources:
        out.extend(_generate_for_resource(resource, time_range, days, opts, rng))
    out.sort(key=lambda c: c.start_time)

    logger.debug("Generated %d consumptions for %d resources over %d day(s)", len(out), len(resources), days)
    return out


def generate_sample_data(
    days: int = 100,
    resource_names: Optional[Sequence[str]] = None,
    consumption_options: OptionsLike = None,
    *,
    end_date: Optional[dt.date] = None,
    tz: Optional[str] = "local",
    seed: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SampleDataset:
    if rng is None:
        rng = random.Random(seed)
    resources = generate_resources(resource_names)
    time_range = generate_time_range(days, end_date=end_date, tz=tz)
    consumptions = generate_consumptions(resources, time_range, consumption_options, rng=rng)
    return SampleDataset(
        resources=tuple(resources),
        time_range=time_range,
        consumptions=tuple(consumptions),
    )


__all__ = [
    "ConsumptionOptions",
    "DEFAULT_RESOURCE_NAMES",
    "generate_consumptions",
    "generate_resources",
    "generate_sample_data",
    "generate_time_range",
]
