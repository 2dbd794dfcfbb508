"""restimeline.api

Stable *library* entrypoint for restimeline.

Policy:
  - Only names listed in __all__ are considered public API.
  - Everything else is internal and may change without notice.
"""

from __future__ import annotations

from restimeline.bootstrap import load_dataset, load_sample_data
from restimeline.config import TimelineColors, TimelineConfig
from restimeline.engine import ResourceTimeline
from restimeline.frames import AsyncioFrameScheduler, FrameScheduler, ManualFrameScheduler
from restimeline.generator import (
    DEFAULT_RESOURCE_NAMES,
    ConsumptionOptions,
    generate_consumptions,
    generate_resources,
    generate_sample_data,
    generate_time_range,
)
from restimeline.geometry import ViewportGeometry
from restimeline.host import NullViewportHost, TimelineEvents, ViewportHost
from restimeline.model import Consumption, Resource, SampleDataset, TimeRange, ViewportState
from restimeline.mpl_surface import MatplotlibSurface
from restimeline.render import RenderPipeline
from restimeline.surface import DrawingSurface, RecordingSurface
from restimeline.validate import DatasetValidationError, assert_valid_dataset, validate_dataset
from restimeline.window import VisibleWindow, compute_visible_window


# --- Public API exports (locked by contract tests) ------------------------
# Keep changes intentional and reviewable.
_PUBLIC_EXPORTS = (
    "AsyncioFrameScheduler",
    "Consumption",
    "ConsumptionOptions",
    "DEFAULT_RESOURCE_NAMES",
    "DatasetValidationError",
    "DrawingSurface",
    "FrameScheduler",
    "ManualFrameScheduler",
    "MatplotlibSurface",
    "NullViewportHost",
    "RecordingSurface",
    "RenderPipeline",
    "Resource",
    "ResourceTimeline",
    "SampleDataset",
    "TimeRange",
    "TimelineColors",
    "TimelineConfig",
    "TimelineEvents",
    "ViewportGeometry",
    "ViewportHost",
    "ViewportState",
    "VisibleWindow",
    "assert_valid_dataset",
    "compute_visible_window",
    "generate_consumptions",
    "generate_resources",
    "generate_sample_data",
    "generate_time_range",
    "load_dataset",
    "load_sample_data",
    "validate_dataset",
)

__all__ = [n for n in _PUBLIC_EXPORTS if n in globals()]
# --- /Public API exports --------------------------------------------------
