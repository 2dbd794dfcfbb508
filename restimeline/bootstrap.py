# restimeline/bootstrap.py
from __future__ import annotations

from typing import Any, Hashable

from restimeline.engine import ResourceTimeline
from restimeline.generator import generate_sample_data
from restimeline.model import SampleDataset


def load_dataset(timeline: ResourceTimeline, dataset: SampleDataset) -> Hashable:
    """Load a dataset in layout order.

    Resources then time range (one layout pass once both are present); the
    consumptions follow on the next frame, after the surface has been sized.
    Returns the frame handle of the deferred consumption load.
    """
    timeline.set_resources(dataset.resources)
    timeline.set_time_range(dataset.time_range.start, dataset.time_range.end)
    return timeline.frames.request_frame(lambda: timeline.set_consumptions(dataset.consumptions))


def load_sample_data(timeline: ResourceTimeline, **kwargs: Any) -> SampleDataset:
    """Generate sample data (see generate_sample_data) and load it into timeline."""
    dataset = generate_sample_data(**kwargs)
    load_dataset(timeline, dataset)
    return dataset


__all__ = ["load_dataset", "load_sample_data"]
