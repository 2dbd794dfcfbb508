from __future__ import annotations

import datetime as dt
import unittest

from restimeline.bootstrap import load_dataset, load_sample_data
from restimeline.config import TimelineConfig
from restimeline.engine import ResourceTimeline
from restimeline.frames import ManualFrameScheduler
from restimeline.generator import generate_sample_data
from restimeline.surface import RecordingSurface


def _make_timeline(width=1110, height=600):
    return ResourceTimeline(RecordingSurface(width, height), ManualFrameScheduler(), config=TimelineConfig(tz="UTC"))


class TestBootstrapContract(unittest.TestCase):
    def test_consumptions_arrive_on_next_frame(self) -> None:
        ds = generate_sample_data(days=2, resource_names=["a", "b", "c"], tz="UTC", end_date=dt.date(2024, 1, 2), seed=1)
        tl = _make_timeline()
        load_dataset(tl, ds)

        self.assertEqual(tl.resources, ds.resources)
        self.assertEqual(tl.time_range, ds.time_range)
        self.assertTrue(tl.viewport.is_sized)
        self.assertEqual(tl.consumptions, ())

        # Frame 1: first render plus the deferred consumption load.
        tl.frames.flush()
        self.assertEqual(tl.consumptions, ds.consumptions)
        self.assertTrue(tl.render_pending)
        tl.frames.flush()
        self.assertFalse(tl.render_pending)

    def test_cancelling_deferred_load(self) -> None:
        ds = generate_sample_data(days=1, resource_names=["a"], tz="UTC", end_date=dt.date(2024, 1, 2), seed=1)
        tl = _make_timeline()
        handle = load_dataset(tl, ds)
        tl.frames.cancel_frame(handle)
        tl.frames.flush()
        self.assertEqual(tl.consumptions, ())

    def test_load_sample_data(self) -> None:
        tl = _make_timeline()
        ds = load_sample_data(tl, days=3, resource_names=["x", "y"], tz="UTC", end_date=dt.date(2024, 5, 1), seed=4)
        self.assertEqual([r.name for r in tl.resources], ["x", "y"])
        tl.frames.flush()
        self.assertEqual(len(tl.consumptions), len(ds.consumptions))
        tl.frames.flush()
        self.assertIn("x", tl.surface.texts())


if __name__ == "__main__":
    unittest.main(verbosity=2)
