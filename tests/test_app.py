from __future__ import annotations

from pathlib import Path
import tempfile
import unittest

from livechart_core.app import LiveChartApp
from livechart_core.config import ChartConfig
from livechart_core.events import PointerLeave, PointerMove, Resize
from livechart_core.scheduler import Scheduler
from livechart_core.window_matrix import MAX_PENDING_COMMITS
from tests._fakes import FakeClock


def _config(**overrides: object) -> ChartConfig:
    base = {"width": 380, "height": 120, "seed": 3}
    base.update(overrides)
    return ChartConfig(**base)  # type: ignore[arg-type]


class LiveChartAppTests(unittest.TestCase):
    def setUp(self) -> None:
        self.clock = FakeClock()
        self.app = LiveChartApp(_config(), scheduler=Scheduler(clock=self.clock, sleep=self.clock.sleep))

    def test_layout_puts_chart_right_of_sidebar(self) -> None:
        self.assertEqual(self.app.canvas_left, 280)
        self.assertEqual(self.app.chart_size, (100, 120))
        self.assertIsNone(self.app.chart_canvas)

    def test_step_appends_and_presents_frames(self) -> None:
        self.app.step(3)
        self.assertEqual([len(s.buffer) for s in self.app.session.series], [3, 3, 3])
        self.assertEqual(self.app.matrix.revision, 3)
        self.assertEqual(tuple(self.app.matrix.snapshot().shape), (120, 380, 4))
        self.assertEqual(self.app.stats_panel.lines[0], "Statistics")

    def test_chart_canvas_blitted_at_canvas_left(self) -> None:
        self.app.step()
        chart = self.app.chart_canvas
        assert chart is not None
        snap = self.app.matrix.snapshot()
        self.assertEqual(snap[100, 285].tolist(), chart[100, 5].tolist())

    def test_theme_switch_applies_to_next_render(self) -> None:
        self.app.controls.set("grid", False)
        self.app.controls.set("value_min", 90)
        self.app.controls.set("value_max", 90)
        self.app.step()
        chart = self.app.chart_canvas
        assert chart is not None
        self.assertEqual(chart[100, 5].tolist(), [255, 255, 255, 255])

        self.app.controls.set("theme", "dark")
        self.assertEqual(self.app.session.theme.name, "dark")
        chart = self.app.chart_canvas
        assert chart is not None
        self.assertEqual(chart[100, 5].tolist(), [255, 255, 255, 255])

        self.app.step()
        chart = self.app.chart_canvas
        assert chart is not None
        self.assertEqual(chart[100, 5].tolist(), [18, 18, 18, 255])

    def test_render_controls_update_session_options(self) -> None:
        self.app.controls.set("chart_type", "bar")
        self.app.controls.set("smoothing", True)
        options = self.app.session.render_options
        self.assertEqual(options.chart_type, "bar")
        self.assertTrue(options.smoothing)
        self.app.controls.set("value_min", 10)
        self.assertEqual(self.app.session.value_range, (10.0, 100.0))

    def test_pointer_events_drive_tooltip(self) -> None:
        self.app.step(3)
        self.app.post(PointerMove(x=282.0, y=50.0))
        self.app.scheduler.run_pending()
        overlay = self.app.tooltip.overlay
        self.assertTrue(overlay.visible)
        self.assertEqual(overlay.position, (292.0, 60.0))
        self.assertEqual(len(overlay.lines), 3)
        self.assertTrue(overlay.lines[0].startswith("Series 1: "))

        self.app.post(PointerMove(x=379.0, y=10.0, timestamp=0.1))
        self.app.scheduler.run_pending()
        self.assertTrue(overlay.visible)
        self.assertEqual(overlay.position, (292.0, 60.0))

        revision = self.app.matrix.revision
        self.app.post(PointerLeave(timestamp=0.2))
        self.app.scheduler.run_pending()
        self.assertFalse(overlay.visible)
        self.assertEqual(self.app.matrix.revision, revision + 1)

    def test_interval_control_rearms_running_driver(self) -> None:
        self.app.start()
        first = self.app.driver.task
        assert first is not None
        self.clock.advance(0.3)
        self.app.controls.set("interval_ms", 100)
        second = self.app.driver.task
        assert second is not None
        self.assertTrue(first.cancelled)
        self.assertAlmostEqual(second.next_due, 0.4)
        self.assertEqual(self.app.session.interval_ms, 100.0)

    def test_rejected_interval_keeps_controls_and_session_in_step(self) -> None:
        self.app.start()
        task = self.app.driver.task
        with self.assertRaisesRegex(ValueError, "interval_ms"):
            self.app.controls.set("interval_ms", 0)
        self.assertEqual(self.app.controls.values.interval_ms, 500.0)
        self.assertEqual(self.app.session.interval_ms, 500.0)
        self.assertIs(self.app.driver.task, task)

    def test_commit_notices_stay_bounded_without_a_presenter(self) -> None:
        self.app.step(200)
        for i in range(100):
            self.app.post(PointerMove(x=281.0 + i % 5, y=50.0))
        self.app.scheduler.run_pending()
        self.assertEqual(self.app.matrix.revision, 300)
        self.assertEqual(self.app.matrix.pending_commit_count(), MAX_PENDING_COMMITS)

    def test_toggle_and_reset_keep_last_stats(self) -> None:
        self.app.step(2)
        lines = list(self.app.stats_panel.lines)
        self.app.controls.press("toggle_run")
        self.assertEqual(self.app.driver.toggle_label, "Start")
        self.assertFalse(self.app.session.running)
        self.app.controls.press("reset")
        self.app.step()
        self.assertTrue(all(len(s.buffer) == 0 for s in self.app.session.series))
        self.assertEqual(self.app.stats_panel.lines, lines)
        self.app.controls.press("toggle_run")
        self.assertEqual(self.app.driver.toggle_label, "Pause")

    def test_export_action_writes_png(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            target = Path(tmp) / "out.png"
            self.app.export_path = target
            self.app.step()
            self.app.controls.press("export")
            self.assertTrue(target.exists())

    def test_resize_event_reallocates_surface(self) -> None:
        self.app.post(Resize(width=500, height=200))
        self.app.scheduler.run_pending()
        self.assertEqual((self.app.matrix.width, self.app.matrix.height), (500, 200))
        self.assertEqual(self.app.chart_size, (220, 200))
        self.app.step()
        chart = self.app.chart_canvas
        assert chart is not None
        self.assertEqual(chart.shape[:2], (200, 220))

    def test_run_uses_scheduler_clock(self) -> None:
        ticks = self.app.run(max_ticks=2)
        self.assertEqual(ticks, 2)
        self.assertAlmostEqual(self.clock.now, 1.0)
        self.assertEqual(self.app.session.ticks, 2)
        self.assertFalse(self.app.driver.armed)


if __name__ == "__main__":
    unittest.main()
