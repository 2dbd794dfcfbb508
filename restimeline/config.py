"""Layout, palette and timezone settings for the timeline engine."""

from __future__ import annotations

import datetime as dt
import os
from dataclasses import dataclass, field
from typing import Optional

from restimeline.util.tz import normalize_tz_name, resolve_tz

TZ_ENV = "RESTIMELINE_TZ"

# One viewport width of content always shows this many hours.
HOURS_PER_VIEWPORT = 24
# Fraction of the visible time span added on each side of the visible window.
VISIBLE_PADDING = 0.1


@dataclass(frozen=True)
class TimelineColors:
    content: str = "#ffffff"
    gutter: str = "#f8f9fa"
    gutter_border: str = "#dee2e6"
    grid: str = "#e9ecef"
    tick: str = "#adb5bd"
    label: str = "#495057"
    bar: str = "#74c0fc"
    bar_selected: str = "#4dabf7"
    bar_selected_outline: str = "#1971c2"


@dataclass(frozen=True)
class TimelineConfig:
    resource_height: int = 40
    time_axis_height: int = 60
    resource_axis_width: int = 150
    bar_height: int = 4
    min_bar_width: int = 2
    tick_length: int = 10
    label_padding: int = 10
    time_label_font_size: int = 12
    resource_label_font_size: int = 13
    tz: str = "local"
    colors: TimelineColors = field(default_factory=TimelineColors)

    def __post_init__(self) -> None:
        # Fail on a bad timezone here rather than inside a render pass.
        object.__setattr__(self, "tz", normalize_tz_name(self.tz))
        resolve_tz(self.tz)
        if self.resource_height <= 0:
            raise ValueError("resource_height must be > 0")
        if self.time_axis_height < 0 or self.resource_axis_width < 0:
            raise ValueError("axis gutters must be >= 0")

    @classmethod
    def from_env(cls, tz: Optional[str] = None, **overrides) -> "TimelineConfig":
        """Build a config whose label timezone defaults to $RESTIMELINE_TZ (or 'local')."""
        tz_name = tz if tz is not None else os.getenv(TZ_ENV, "local")
        return cls(tz=tz_name, **overrides)

    def tzinfo(self) -> dt.tzinfo:
        return resolve_tz(self.tz)


DEFAULT_CONFIG = TimelineConfig()


__all__ = ["DEFAULT_CONFIG", "HOURS_PER_VIEWPORT", "TZ_ENV", "TimelineColors", "TimelineConfig", "VISIBLE_PADDING"]
