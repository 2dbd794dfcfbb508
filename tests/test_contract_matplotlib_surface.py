from __future__ import annotations

import unittest

from restimeline.config import TimelineConfig
from restimeline.engine import ResourceTimeline
from restimeline.frames import ManualFrameScheduler
from restimeline.model import Consumption, Resource
from restimeline.mpl_surface import MatplotlibSurface

HOUR = 3_600_000


class TestMatplotlibSurfaceContract(unittest.TestCase):
    def test_size_in_pixels(self) -> None:
        surface = MatplotlibSurface(400, 300)
        self.assertEqual(surface.size(), (400.0, 300.0))
        surface.set_size(640, 200)
        self.assertEqual(surface.size(), (640.0, 200.0))

    def test_top_left_origin(self) -> None:
        surface = MatplotlibSurface(400, 300)
        self.assertEqual(tuple(surface.ax.get_xlim()), (0.0, 400.0))
        self.assertEqual(tuple(surface.ax.get_ylim()), (300.0, 0.0))

    def test_artists_follow_painter_order(self) -> None:
        surface = MatplotlibSurface(400, 300)
        surface.clear(400, 300)
        surface.fill_rect(0, 0, 400, 300, "#ffffff")
        surface.line(0, 10, 400, 10, "#e9ecef")
        surface.stroke_rect(10, 10, 20, 5, "#1971c2", 2)
        surface.text(20, 30, "00", "#495057", font_size=12, align="center", baseline="middle")

        ax = surface.ax
        self.assertEqual(len(ax.patches), 2)
        self.assertEqual(len(ax.lines), 1)
        self.assertEqual([t.get_text() for t in ax.texts], ["00"])
        self.assertEqual(ax.texts[0].get_ha(), "center")

        z = [ax.patches[0].get_zorder(), ax.lines[0].get_zorder(), ax.patches[1].get_zorder(), ax.texts[0].get_zorder()]
        self.assertEqual(z, sorted(z))
        self.assertEqual(len(set(z)), 4)

    def test_clear_removes_artists(self) -> None:
        surface = MatplotlibSurface(400, 300)
        surface.fill_rect(0, 0, 10, 10, "#000000")
        surface.clear(400, 300)
        self.assertEqual(len(surface.ax.patches), 0)
        self.assertEqual(tuple(surface.ax.get_ylim()), (300.0, 0.0))

    def test_to_array_shape(self) -> None:
        surface = MatplotlibSurface(400, 300)
        surface.fill_rect(0, 0, 400, 300, "#ff0000")
        pixels = surface.to_array()
        self.assertEqual(pixels.shape, (300, 400, 4))
        self.assertEqual(tuple(pixels[150, 200]), (255, 0, 0, 255))

    def test_engine_draws_onto_figure(self) -> None:
        surface = MatplotlibSurface(630, 300)
        frames = ManualFrameScheduler()
        tl = ResourceTimeline(surface, frames, config=TimelineConfig(tz="UTC"))
        tl.set_resources([Resource("r0", "Server-01"), Resource("r1", "Server-02")])
        tl.set_time_range(0, 24 * HOUR)
        tl.set_consumptions([Consumption("c", "r0", HOUR, 3 * HOUR)])
        frames.flush()

        labels = [t.get_text() for t in surface.ax.texts]
        self.assertIn("Server-01", labels)
        self.assertIn("12", labels)
        self.assertGreater(len(surface.ax.patches), 3)
        self.assertEqual(surface.to_array().shape, (300, 630, 4))


if __name__ == "__main__":
    unittest.main(verbosity=2)
