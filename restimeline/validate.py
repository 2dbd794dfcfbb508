"""Dataset validation helpers (library-facing)."""

from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from restimeline.model import Consumption, Resource, TimeRange


class DatasetValidationError(ValueError):
    """Raised when a dataset mutator receives invalid data."""


def _require(cond: bool, msg: str, errs: List[str]) -> None:
    if not cond:
        errs.append(msg)


def _is_int(v: object) -> bool:
    return isinstance(v, int) and not isinstance(v, bool)


def validate_resources(resources: Sequence[Resource], *, label: str = "resources") -> List[str]:
    errs: List[str] = []
    seen: set[str] = set()
    for i, r in enumerate(resources):
        if not isinstance(r, Resource):
            errs.append(f"{label}[{i}] must be Resource; got {type(r).__name__}")
            continue
        if not isinstance(r.id, str) or not r.id:
            errs.append(f"{label}[{i}].id must be non-empty string")
            continue
        if r.id in seen:
            errs.append(f"{label}[{i}]: duplicate resource id {r.id!r}")
        seen.add(r.id)
        _require(isinstance(r.name, str), f"{label}[{i}].name must be string", errs)
    return errs


def validate_time_range(time_range: Optional[TimeRange], *, label: str = "time_range") -> List[str]:
    if not isinstance(time_range, TimeRange):
        return [f"{label} must be TimeRange"]
    errs: List[str] = []
    _require(_is_int(time_range.start), f"{label}.start must be int epoch ms", errs)
    _require(_is_int(time_range.end), f"{label}.end must be int epoch ms", errs)
    if not errs:
        _require(
            time_range.start < time_range.end,
            f"{label}: start must be < end (start={time_range.start}, end={time_range.end})",
            errs,
        )
    return errs


def validate_consumptions(
    consumptions: Iterable[Consumption],
    resource_ids: Iterable[str],
    *,
    label: str = "consumptions",
) -> List[str]:
    errs: List[str] = []
    known = set(resource_ids)
    seen: set[str] = set()
    for i, c in enumerate(consumptions):
        if not isinstance(c, Consumption):
            errs.append(f"{label}[{i}] must be Consumption; got {type(c).__name__}")
            continue
        if not isinstance(c.id, str) or not c.id:
            errs.append(f"{label}[{i}].id must be non-empty string")
        elif c.id in seen:
            errs.append(f"{label}[{i}]: duplicate consumption id {c.id!r}")
        else:
            seen.add(c.id)
        if c.resource_id not in known:
            errs.append(f"{label}[{i}]: unknown resource_id {c.resource_id!r}")
        if not (_is_int(c.start_time) and _is_int(c.end_time)):
            errs.append(f"{label}[{i}]: start_time/end_time must be int epoch ms")
        elif c.start_time >= c.end_time:
            errs.append(
                f"{label}[{i}]: start_time must be < end_time "
                f"(start_time={c.start_time}, end_time={c.end_time})"
            )
    return errs


def validate_dataset(
    resources: Sequence[Resource],
    time_range: Optional[TimeRange],
    consumptions: Iterable[Consumption],
) -> List[str]:
    errs = validate_resources(resources)
    errs.extend(validate_time_range(time_range))
    errs.extend(validate_consumptions(consumptions, (r.id for r in resources if isinstance(r, Resource))))
    return errs


def raise_first(errs: List[str]) -> None:
    if errs:
        raise DatasetValidationError(errs[0])


def assert_valid_dataset(
    resources: Sequence[Resource],
    time_range: Optional[TimeRange],
    consumptions: Iterable[Consumption],
) -> None:
    raise_first(validate_dataset(resources, time_range, consumptions))


__all__ = [
    "DatasetValidationError",
    "assert_valid_dataset",
    "validate_consumptions",
    "validate_dataset",
    "validate_resources",
    "validate_time_range",
]
