from __future__ import annotations

import random
import unittest

from restimeline.config import TimelineConfig
from restimeline.engine import ResourceTimeline
from restimeline.frames import ManualFrameScheduler
from restimeline.host import TimelineEvents
from restimeline.model import Consumption, Resource
from restimeline.render import RenderPipeline
from restimeline.surface import RecordingSurface
from restimeline.validate import validate_dataset

HOUR = 3_600_000
DAY = 24 * HOUR
RESOURCES = [Resource(f"r{i}", f"Res {i}") for i in range(3)]


class RecordingHost:
    def __init__(self) -> None:
        self.content_sizes = []
        self.pins = []

    def set_content_size(self, width, height) -> None:
        self.content_sizes.append((width, height))

    def pin_viewport(self, scroll_x, scroll_y) -> None:
        self.pins.append((scroll_x, scroll_y))


class CountingPipeline(RenderPipeline):
    def __init__(self) -> None:
        super().__init__()
        self.runs = 0

    def run(self, surface, frame) -> None:
        self.runs += 1
        super().run(surface, frame)


def _make_timeline(width=1110, height=600):
    surface = RecordingSurface(width, height)
    frames = ManualFrameScheduler()
    host = RecordingHost()
    pipeline = CountingPipeline()
    tl = ResourceTimeline(surface, frames, config=TimelineConfig(tz="UTC"), host=host, pipeline=pipeline)
    return tl, surface, frames, host, pipeline


class TestEngineLifecycleContract(unittest.TestCase):
    def test_layout_waits_for_both_resources_and_range(self) -> None:
        tl, _surface, frames, host, _ = _make_timeline()
        tl.set_time_range(0, 2 * DAY)
        self.assertEqual(host.content_sizes, [])
        self.assertFalse(tl.is_ready())

        tl.set_resources(RESOURCES)
        self.assertEqual(host.content_sizes, [(2070.0, 180.0)])
        self.assertEqual(host.pins, [(0, 0)])
        self.assertTrue(tl.is_ready())
        self.assertEqual(frames.pending, 1)

    def test_resources_after_range_also_lays_out(self) -> None:
        tl, _surface, _frames, host, _ = _make_timeline()
        tl.set_resources(RESOURCES)
        self.assertEqual(host.content_sizes, [])
        tl.set_time_range(0, DAY)
        self.assertEqual(host.content_sizes, [(1110.0, 180.0)])

    def test_zero_sized_surface_defers_layout(self) -> None:
        tl, surface, frames, host, pipeline = _make_timeline(width=0, height=0)
        tl.set_resources(RESOURCES)
        tl.set_time_range(0, DAY)
        self.assertEqual(host.content_sizes, [])
        self.assertFalse(tl.viewport.is_sized)
        self.assertEqual(frames.pending, 1)

        # Still zero on the next frame: retry again.
        self.assertEqual(frames.flush(), 1)
        self.assertEqual(frames.pending, 1)

        surface.resize(1110, 600)
        frames.flush()
        self.assertEqual(tl.viewport.width, 1110)
        self.assertEqual(tl.viewport.height, 600)
        self.assertEqual(host.content_sizes, [(1110.0, 180.0)])
        self.assertEqual(pipeline.runs, 0)
        frames.flush()
        self.assertEqual(pipeline.runs, 1)

    def test_repeated_resize_keeps_single_retry(self) -> None:
        tl, _surface, frames, _host, _ = _make_timeline(width=0, height=0)
        tl.set_resources(RESOURCES)
        tl.set_time_range(0, DAY)
        tl.on_resize()
        tl.on_resize()
        self.assertEqual(frames.pending, 1)

    def test_scroll_clamps_and_pins(self) -> None:
        tl, _surface, _frames, host, _ = _make_timeline()
        tl.set_resources(RESOURCES)
        tl.set_time_range(0, DAY)
        tl.on_scroll(-20, 35.7)
        self.assertEqual((tl.viewport.scroll_x, tl.viewport.scroll_y), (0, 35))
        self.assertEqual(host.pins[-1], (0, 35))

    def test_consumptions_render_without_relayout(self) -> None:
        tl, _surface, frames, host, pipeline = _make_timeline()
        tl.set_resources(RESOURCES)
        tl.set_time_range(0, DAY)
        frames.flush()
        sizes_before = list(host.content_sizes)

        tl.set_consumptions([Consumption("c", "r0", 0, HOUR)])
        self.assertEqual(host.content_sizes, sizes_before)
        self.assertTrue(tl.render_pending)
        frames.flush()
        self.assertEqual(pipeline.runs, 2)

    def test_replacing_resources_drops_orphaned_consumptions(self) -> None:
        tl, _surface, frames, _host, _ = _make_timeline()
        tl.set_resources(RESOURCES[:2])
        tl.set_time_range(0, DAY)
        tl.set_consumptions([Consumption("keep", "r0", 0, HOUR), Consumption("c", "r1", HOUR, 2 * HOUR)])
        tl.select("c")
        frames.flush()

        tl.set_resources(RESOURCES[:1])
        self.assertEqual([c.id for c in tl.consumptions], ["keep"])
        self.assertEqual(tl.consumptions_for("r1"), [])
        self.assertIsNone(tl.get_selected_bar())
        self.assertIsNone(tl.selected_id)
        self.assertEqual(validate_dataset(tl.resources, tl.time_range, tl.consumptions), [])
        self.assertTrue(tl.render_pending)

    def test_replacing_resources_keeps_surviving_selection(self) -> None:
        tl, _surface, _frames, _host, _ = _make_timeline()
        tl.set_resources(RESOURCES)
        tl.set_time_range(0, DAY)
        tl.set_consumptions([Consumption("a", "r0", 0, HOUR), Consumption("b", "r2", 0, HOUR)])
        tl.select("a")
        tl.set_resources([Resource("r0", "Renamed"), Resource("r9", "New")])
        self.assertEqual(tl.get_selected_bar().id, "a")
        self.assertEqual([c.id for c in tl.consumptions], ["a"])

    def test_consumptions_sorted_for_any_input_order(self) -> None:
        tl, _surface, _frames, _host, _ = _make_timeline()
        tl.set_resources(RESOURCES)
        tl.set_time_range(0, 2 * DAY)
        items = [
            Consumption(f"c{i}", f"r{i % 3}", (i * 7919) % (40 * HOUR), (i * 7919) % (40 * HOUR) + HOUR)
            for i in range(40)
        ]
        items.append(Consumption("same-start", "r1", 0, 2 * HOUR))
        rng = random.Random(17)
        for _ in range(10):
            rng.shuffle(items)
            tl.set_consumptions(items)
            starts = [c.start_time for c in tl.consumptions]
            self.assertEqual(starts, sorted(starts))
            self.assertEqual(len(tl.consumptions), len(items))
            for rid in ("r0", "r1", "r2"):
                per = [c.start_time for c in tl.consumptions_for(rid)]
                self.assertEqual(per, sorted(per))

    def test_not_ready_operations_are_harmless(self) -> None:
        tl, surface, frames, host, pipeline = _make_timeline()
        tl.on_scroll(10, 10)
        tl.on_resize()
        self.assertIsNone(tl.on_click(300, 100))
        tl.schedule_render()
        self.assertEqual(frames.flush(), 0)
        self.assertEqual(pipeline.runs, 0)
        self.assertEqual(surface.commands, [])
        self.assertEqual(host.content_sizes, [])
        self.assertIsNone(tl.visible_window())


class TestRenderCoalescingContract(unittest.TestCase):
    def _ready(self):
        tl, surface, frames, host, pipeline = _make_timeline()
        tl.set_resources(RESOURCES)
        tl.set_time_range(0, 2 * DAY)
        tl.set_consumptions([Consumption("c", "r1", HOUR, 2 * HOUR)])
        frames.flush()
        pipeline.runs = 0
        return tl, frames, pipeline

    def test_burst_of_events_renders_once(self) -> None:
        tl, frames, pipeline = self._ready()
        for i in range(50):
            tl.on_scroll(i * 10, i)
        tl.on_click(300, 100)
        tl.on_resize()
        self.assertEqual(frames.pending, 1)
        self.assertEqual(frames.flush(), 1)
        self.assertEqual(pipeline.runs, 1)
        self.assertFalse(tl.render_pending)

    def test_render_uses_state_at_frame_time(self) -> None:
        tl, frames, _ = self._ready()
        seen = []
        tl.pipeline = RenderPipeline(passes=(("probe", lambda surface, frame: seen.append(frame.geometry.viewport.scroll_x)),))
        tl.on_scroll(100, 0)
        tl.on_scroll(480, 0)
        frames.flush()
        self.assertEqual(seen, [480])

    def test_each_frame_renders_again(self) -> None:
        tl, frames, pipeline = self._ready()
        for _ in range(3):
            tl.on_scroll(5, 5)
            frames.flush()
        self.assertEqual(pipeline.runs, 3)


class TestTimelineEventsContract(unittest.TestCase):
    def test_attach_routes_host_events(self) -> None:
        tl, _surface, frames, host, _ = _make_timeline()
        tl.set_resources(RESOURCES)
        tl.set_time_range(0, DAY)
        tl.set_consumptions([Consumption("c", "r0", 0, 2 * HOUR)])
        frames.flush()

        events = TimelineEvents()
        tl.attach(events)
        events.emit("scroll", 0, 0)
        self.assertEqual(host.pins[-1], (0, 0))
        hits = events.emit("click", 170, 80)
        self.assertEqual([h.id for h in hits], ["c"])
        self.assertEqual(tl.selected_id, "c")
        self.assertEqual(events.emit("contextmenu"), [True])
        events.emit("resize")
        self.assertEqual(frames.pending, 1)

    def test_unknown_kind_and_off(self) -> None:
        events = TimelineEvents()
        with self.assertRaises(ValueError):
            events.on("wheel", lambda: None)

        calls = []
        handler = lambda *a: calls.append(a)  # noqa: E731
        events.on("scroll", handler)
        events.emit("scroll", 1, 2)
        events.off("scroll", handler)
        self.assertEqual(events.emit("scroll", 3, 4), [])
        self.assertEqual(calls, [(1, 2)])


if __name__ == "__main__":
    unittest.main(verbosity=2)
