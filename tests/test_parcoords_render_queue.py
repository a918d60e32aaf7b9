from __future__ import annotations

import itertools
import unittest

import numpy as np

from parcoords import DEFAULT_DIMENSIONS, PlotConfig, RenderQueue, ScreenLayout, build_dimensions, global_alpha
from parcoords.render_queue import FrameRateController, PolylinePainter


class _RecordingSurface:
    def __init__(self) -> None:
        self.global_alpha = 1.0
        self.composite = "source-over"
        self.stroke_style = (0, 0, 0, 255)
        self.line_width = 1
        self.clears = 0
        self.calls: list[tuple[object, ...]] = []

    def clear(self) -> None:
        self.clears += 1

    def begin_path(self) -> None:
        self.calls.append(("begin",))

    def move_to(self, x: float, y: float) -> None:
        self.calls.append(("move", x, y))

    def line_to(self, x: float, y: float) -> None:
        self.calls.append(("line", x, y))

    def stroke(self) -> None:
        self.calls.append(("stroke", self.stroke_style))


class GlobalAlphaTests(unittest.TestCase):
    def test_alpha_stays_in_unit_interval(self) -> None:
        for k in (0.85, 1.15):
            for count in (0, 1, 2, 10, 1000, 1_000_000):
                alpha = global_alpha(count, k)
                self.assertGreater(alpha, 0.0)
                self.assertLessEqual(alpha, 1.0)

    def test_alpha_decays_with_count(self) -> None:
        self.assertEqual(global_alpha(1, 1.15), 1.0)
        self.assertEqual(global_alpha(0, 0.85), 1.0)
        self.assertAlmostEqual(global_alpha(1000, 0.85), 0.85 / 1000**0.3)
        self.assertGreater(global_alpha(100, 0.85), global_alpha(10_000, 0.85))


class FrameRateControllerTests(unittest.TestCase):
    def test_ticks_are_paced(self) -> None:
        controller = FrameRateController(target_fps=30)
        self.assertTrue(controller.should_tick(0.0))
        self.assertFalse(controller.should_tick(0.01))
        self.assertTrue(controller.should_tick(0.04))
        self.assertAlmostEqual(controller.compute_sleep(1.0, 1.01), (1.0 / 30.0) - 0.01)
        self.assertEqual(controller.compute_sleep(1.0, 2.0), 0.0)

    def test_rejects_non_positive_fps(self) -> None:
        with self.assertRaises(ValueError):
            FrameRateController(target_fps=0)


class RenderQueueTests(unittest.TestCase):
    def setUp(self) -> None:
        self.surface = _RecordingSurface()
        self.drawn: list[int] = []
        self.queue = RenderQueue(self.surface, self.drawn.append, batch_size=30)

    def test_render_prepares_surface_and_draws_in_batches(self) -> None:
        task = self.queue.render(range(70), 0.4)
        self.assertEqual(self.surface.clears, 1)
        self.assertEqual(self.surface.global_alpha, 0.4)
        self.assertEqual(self.surface.composite, "darken")
        self.assertEqual(self.queue.tick(), 30)
        self.assertEqual(self.queue.tick(), 30)
        self.assertEqual(self.queue.tick(), 10)
        self.assertEqual(self.queue.tick(), 0)
        self.assertEqual(self.drawn, list(range(70)))
        self.assertTrue(task.done)
        self.assertEqual(task.batches_drawn, 3)
        self.assertIsNone(self.queue.active_task)

    def test_new_pass_cancels_the_previous_one(self) -> None:
        first = self.queue.render(range(100), 0.5)
        self.queue.tick()
        second = self.queue.render(range(1000, 1040), 0.7)
        self.assertTrue(first.cancelled)
        self.assertEqual(first.cursor, 30)
        self.assertIs(self.queue.active_task, second)

        self.assertEqual(self.queue.drain(), 40)
        self.assertEqual(self.drawn[:30], list(range(30)))
        self.assertEqual(self.drawn[30:], list(range(1000, 1040)))
        self.assertEqual(self.surface.clears, 2)

    def test_cancellation_is_observed_mid_batch(self) -> None:
        queue: RenderQueue

        def draw(index: int) -> None:
            self.drawn.append(index)
            if index == 4:
                queue.invalidate()

        queue = RenderQueue(self.surface, draw, batch_size=30)
        task = queue.render(range(50), 1.0)
        self.assertEqual(queue.tick(), 5)
        self.assertTrue(task.cancelled)
        self.assertIsNone(queue.active_task)
        self.assertEqual(queue.drain(), 0)

    def test_empty_pass_is_immediately_idle(self) -> None:
        task = self.queue.render(np.empty(0, dtype=np.int64), 1.0)
        self.assertTrue(task.done)
        self.assertIsNone(self.queue.active_task)
        self.assertEqual(self.surface.clears, 1)

    def test_tick_honours_frame_pacing(self) -> None:
        self.queue.render(range(100), 1.0)
        self.assertEqual(self.queue.tick(0.0), 30)
        self.assertEqual(self.queue.tick(0.01), 0)
        self.assertEqual(self.queue.tick(0.05), 30)

    def test_run_until_idle_sleeps_between_batches(self) -> None:
        clock = itertools.count(0.0, 0.25)
        sleeps: list[float] = []
        self.queue.render(range(70), 1.0)
        drawn = self.queue.run_until_idle(clock=lambda: next(clock), sleep=sleeps.append)
        self.assertEqual(drawn, 70)
        self.assertEqual(len(sleeps), 3)
        self.assertTrue(all(s == 0.0 for s in sleeps))

    def test_from_config_uses_plot_settings(self) -> None:
        config = PlotConfig(render_batch_size=7, render_fps=60, line_width=2)
        queue = RenderQueue.from_config(self.surface, self.drawn.append, config)
        self.assertEqual(queue.batch_size, 7)
        self.assertEqual(queue.controller.target_fps, 60)
        queue.render([1, 2], 1.0)
        self.assertEqual(self.surface.line_width, 2)


class PolylinePainterTests(unittest.TestCase):
    def test_absent_value_breaks_the_path(self) -> None:
        config = PlotConfig()
        records = [
            {"time": 1.0, "event_type": 1.0, "cpu_id": 0.0, "disk_usage": None, "memory_usage": 10.0},
            {"time": 2.0, "event_type": 3.0, "cpu_id": 1.0, "disk_usage": 5.0, "memory_usage": 20.0},
        ]
        dims = build_dimensions(DEFAULT_DIMENSIONS, records, config)
        layout = ScreenLayout(config=config, dimensions=dims)
        surface = _RecordingSurface()
        painter = PolylinePainter(surface, layout, records, layout.project_all(records))
        painter(0)
        kinds = [call[0] for call in surface.calls]
        self.assertEqual(kinds, ["begin", "move", "line", "line", "move", "stroke"])
        self.assertEqual(surface.calls[-1][1], (0x50, 0xA9, 0xD4, 255))


if __name__ == "__main__":
    unittest.main()
