# restimeline/util/tz.py
from __future__ import annotations

import datetime as dt
import re
import time
from typing import Optional

from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_OFFSET_RE = re.compile(r"^([+-])(\d{2}):?(\d{2})$")

MINUTE_MS = 60_000
HOUR_MS = 60 * MINUTE_MS
DAY_MS = 24 * HOUR_MS


_EPOCH = dt.datetime(1970, 1, 1)


class LocalTimezone(dt.tzinfo):
    """The machine's local timezone, DST-aware.

    Offsets are looked up per instant through the C library (honours $TZ),
    so instants on either side of a DST change get their own offset.
    """

    def _local_tm(self, d: Optional[dt.datetime]) -> time.struct_time:
        if d is None:
            return time.localtime()
        return time.localtime(time.mktime(d.replace(tzinfo=None).timetuple()))

    def utcoffset(self, d: Optional[dt.datetime]) -> dt.timedelta:
        return dt.timedelta(seconds=self._local_tm(d).tm_gmtoff)

    def dst(self, d: Optional[dt.datetime]) -> dt.timedelta:
        if self._local_tm(d).tm_isdst > 0:
            return dt.timedelta(seconds=time.timezone - time.altzone)
        return dt.timedelta(0)

    def tzname(self, d: Optional[dt.datetime]) -> str:
        return self._local_tm(d).tm_zone

    def fromutc(self, d: dt.datetime) -> dt.datetime:
        seconds = (d.replace(tzinfo=None) - _EPOCH).total_seconds()
        return dt.datetime.fromtimestamp(seconds).replace(tzinfo=self)

    def __repr__(self) -> str:
        return "LocalTimezone()"


LOCAL_TZ = LocalTimezone()


def normalize_tz_name(name: Optional[str]) -> str:
    """Normalize a timezone identifier.

    Supported forms:
      - None/"" -> "local"
      - "local" / "system" -> "local" (the machine's local timezone)
      - "UTC" / "Z" / "GMT" -> "UTC"
      - IANA names, e.g. "Europe/Bucharest"
      - Fixed offsets: "+02:00", "+0200", "-05:00"
    """
    if name is None:
        return "local"
    s = str(name).strip()
    if not s:
        return "local"

    low = s.lower()
    if low in {"local", "system", "native"}:
        return "local"
    if low in {"utc", "z", "gmt", "utc0", "utc+0"}:
        return "UTC"

    return s


def resolve_tz(name: Optional[str]) -> dt.tzinfo:
    """Resolve a timezone name into a tzinfo.

    Raises ValueError for invalid timezone identifiers.
    """
    tz_name = normalize_tz_name(name)

    if tz_name == "UTC":
        return dt.timezone.utc

    if tz_name == "local":
        return LOCAL_TZ

    m = _OFFSET_RE.match(tz_name)
    if m:
        sign_s, hh_s, mm_s = m.groups()
        hh = int(hh_s)
        mm = int(mm_s)
        if hh > 23 or mm > 59:
            raise ValueError(f"Invalid timezone offset: {tz_name!r}")
        sign = 1 if sign_s == "+" else -1
        return dt.timezone(sign * dt.timedelta(hours=hh, minutes=mm))

    try:
        return ZoneInfo(tz_name)
    except (ZoneInfoNotFoundError, ValueError) as ex:
        raise ValueError(f"Invalid timezone identifier: {tz_name!r}") from ex


def today_date(tz: dt.tzinfo) -> dt.date:
    return dt.datetime.now(tz=tz).date()


def midnight_epoch_ms(d: dt.date, tz: dt.tzinfo) -> int:
    aware = dt.datetime(d.year, d.month, d.day, 0, 0, 0, tzinfo=tz)
    return int(aware.timestamp() * 1000)


def hour_of_day_label(ms: float, tz: dt.tzinfo) -> str:
    """Two-digit hour of day ("00".."23") for an epoch-ms instant."""
    return f"{dt.datetime.fromtimestamp(ms / 1000.0, tz=tz).hour:02d}"


def iter_hour_marks(start_ms: float, end_ms: float):
    """Yield whole-hour epoch instants t with start_ms <= t <= end_ms."""
    t = (int(start_ms) // HOUR_MS) * HOUR_MS
    if t < start_ms:
        t += HOUR_MS
    while t <= end_ms:
        yield t
        t += HOUR_MS
