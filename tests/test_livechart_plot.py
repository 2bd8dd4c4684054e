from __future__ import annotations

import unittest

import numpy as np

from livechart_plot import (
    ChartTransform,
    RollingBuffer,
    SampleGenerator,
    build_series,
    round_half_up,
    smooth,
    summarize,
    value_to_y,
)


class RollingBufferTests(unittest.TestCase):
    def test_rejects_non_positive_capacity(self) -> None:
        with self.assertRaises(ValueError):
            RollingBuffer(capacity=0)

    def test_keeps_last_capacity_values_in_append_order(self) -> None:
        buf = RollingBuffer(capacity=50)
        for i in range(73):
            buf.append(float(i))
        self.assertEqual(len(buf), 50)
        np.testing.assert_array_equal(buf.values(), np.arange(23, 73, dtype=np.float64))

    def test_length_never_exceeds_capacity(self) -> None:
        buf = RollingBuffer(capacity=5)
        for i in range(12):
            buf.append(i)
            self.assertLessEqual(len(buf), 5)

    def test_values_is_a_snapshot(self) -> None:
        buf = RollingBuffer(capacity=3)
        buf.append(1.0)
        snap = buf.values()
        buf.append(2.0)
        self.assertEqual(snap.tolist(), [1.0])

    def test_value_at_out_of_range_is_none(self) -> None:
        buf = RollingBuffer(capacity=3)
        buf.append(4.0)
        self.assertEqual(buf.value_at(0), 4.0)
        self.assertIsNone(buf.value_at(1))
        self.assertIsNone(buf.value_at(-1))

    def test_reset_clears_buffer(self) -> None:
        buf = RollingBuffer(capacity=3)
        for v in (1.0, 2.0, 3.0, 4.0):
            buf.append(v)
        buf.reset()
        self.assertEqual(len(buf), 0)
        self.assertIsNone(buf.value_at(0))
        buf.append(9.0)
        self.assertEqual(buf.values().tolist(), [9.0])

    def test_accepts_values_outside_display_range(self) -> None:
        buf = RollingBuffer(capacity=3)
        buf.append(-20.0)
        buf.append(250.0)
        self.assertEqual(buf.values().tolist(), [-20.0, 250.0])

    def test_build_series_assigns_fixed_color_slots(self) -> None:
        series = build_series(count=3, capacity=50)
        self.assertEqual([s.index for s in series], [0, 1, 2])
        self.assertEqual([s.color_slot for s in series], [0, 1, 2])
        self.assertEqual([s.label for s in series], ["Series 1", "Series 2", "Series 3"])
        self.assertTrue(all(s.buffer.capacity == 50 for s in series))


class SmoothingTests(unittest.TestCase):
    def test_single_value_is_unchanged(self) -> None:
        self.assertEqual(smooth([7.5]).tolist(), [7.5])

    def test_trailing_window_clipped_at_start(self) -> None:
        a, b, c = 3.0, 9.0, 6.0
        out = smooth([a, b, c], window=3)
        np.testing.assert_allclose(out, [a, (a + b) / 2, (a + b + c) / 3])

    def test_window_spans_window_plus_one_samples(self) -> None:
        out = smooth([1.0, 2.0, 3.0, 4.0, 5.0, 6.0], window=3)
        self.assertAlmostEqual(float(out[4]), (2.0 + 3.0 + 4.0 + 5.0) / 4)
        self.assertAlmostEqual(float(out[5]), (3.0 + 4.0 + 5.0 + 6.0) / 4)

    def test_output_length_matches_input_and_input_untouched(self) -> None:
        data = np.asarray([5.0, 1.0, 8.0, 2.0])
        out = smooth(data)
        self.assertEqual(out.shape, data.shape)
        self.assertEqual(data.tolist(), [5.0, 1.0, 8.0, 2.0])

    def test_empty_input(self) -> None:
        self.assertEqual(smooth([]).size, 0)

    def test_rejects_negative_window(self) -> None:
        with self.assertRaises(ValueError):
            smooth([1.0], window=-1)


class StatsTests(unittest.TestCase):
    def test_concatenation_order_drives_current_and_trend(self) -> None:
        series = build_series(count=3, capacity=50)
        for s, value in zip(series, (10.0, 20.0, 5.0)):
            s.buffer.append(value)
        stats = summarize(series)
        assert stats is not None
        self.assertEqual(stats.current, 5.0)
        self.assertEqual(stats.minimum, 5.0)
        self.assertEqual(stats.maximum, 20.0)
        self.assertAlmostEqual(stats.average, 35.0 / 3.0, places=6)
        self.assertEqual(stats.trend, "falling")
        self.assertEqual(stats.sample_count, 3)

    def test_rising_when_last_exceeds_first(self) -> None:
        series = build_series(count=2, capacity=10)
        series[0].buffer.append(1.0)
        series[1].buffer.append(2.0)
        stats = summarize(series)
        assert stats is not None
        self.assertEqual(stats.trend, "rising")

    def test_equal_first_and_last_is_falling(self) -> None:
        series = build_series(count=1, capacity=10)
        series[0].buffer.append(4.0)
        stats = summarize(series)
        assert stats is not None
        self.assertEqual(stats.trend, "falling")

    def test_empty_buffers_report_nothing(self) -> None:
        series = build_series(count=3, capacity=10)
        self.assertIsNone(summarize(series))

    def test_skips_empty_series(self) -> None:
        series = build_series(count=3, capacity=10)
        series[0].buffer.append(30.0)
        series[1].buffer.append(40.0)
        stats = summarize(series)
        assert stats is not None
        self.assertEqual(stats.current, 40.0)


class ScalesTests(unittest.TestCase):
    def test_value_mapping_for_any_height(self) -> None:
        for height in (1, 99, 100, 600, 1080):
            self.assertEqual(value_to_y(0.0, height), height)
            self.assertEqual(value_to_y(100.0, height), 0.0)
            self.assertAlmostEqual(value_to_y(50.0, height), height / 2)

    def test_values_outside_range_are_not_clamped(self) -> None:
        self.assertEqual(value_to_y(150.0, 200), -100.0)
        self.assertEqual(value_to_y(-50.0, 200), 300.0)

    def test_step_x_spans_capacity_minus_one_slots(self) -> None:
        transform = ChartTransform(width=490, height=100, capacity=50)
        self.assertAlmostEqual(transform.step_x, 10.0)
        xs, ys = transform.map_points(np.asarray([0.0, 50.0, 100.0]))
        self.assertEqual(xs.tolist(), [0.0, 10.0, 20.0])
        self.assertEqual(ys.tolist(), [100.0, 50.0, 0.0])

    def test_index_for_x_rounds_half_up(self) -> None:
        transform = ChartTransform(width=490, height=100, capacity=50)
        self.assertEqual(transform.index_for_x(25.0), 3)
        self.assertEqual(transform.index_for_x(24.9), 2)
        self.assertEqual(round_half_up(0.5), 1)
        self.assertEqual(round_half_up(-0.5), 0)

    def test_transform_rejects_degenerate_inputs(self) -> None:
        with self.assertRaises(ValueError):
            ChartTransform(width=0, height=10, capacity=50)
        with self.assertRaises(ValueError):
            ChartTransform(width=10, height=10, capacity=1)


class SampleGeneratorTests(unittest.TestCase):
    def test_values_stay_inside_half_open_range(self) -> None:
        gen = SampleGenerator(seed=7)
        values = [gen.next_value(20.0, 30.0) for _ in range(500)]
        self.assertTrue(all(20.0 <= v < 30.0 for v in values))

    def test_seed_makes_runs_reproducible(self) -> None:
        a_gen, b_gen = SampleGenerator(seed=42), SampleGenerator(seed=42)
        a = [a_gen.next_value(0.0, 100.0) for _ in range(5)]
        b = [b_gen.next_value(0.0, 100.0) for _ in range(5)]
        self.assertEqual(a, b)

    def test_inverted_range_is_not_rejected(self) -> None:
        gen = SampleGenerator(seed=3)
        values = [gen.next_value(10.0, 0.0) for _ in range(200)]
        self.assertTrue(all(0.0 < v <= 10.0 for v in values))

    def test_degenerate_range_returns_bound(self) -> None:
        gen = SampleGenerator(seed=1)
        self.assertEqual(gen.next_value(5.0, 5.0), 5.0)


if __name__ == "__main__":
    unittest.main()
