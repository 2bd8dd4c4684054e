from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any

from livechart_plot.generator import SampleGenerator
from livechart_plot.renderer import RenderOptions
from livechart_plot.series import Series, build_series
from livechart_ui.style.theme import ChartTheme, get_theme, validate_theme

from .config import ChartConfig

LOGGER = logging.getLogger(__name__)


class ChartSession:
    """Process-wide chart state: buffers, active theme, run flag, interval and render options.

    Owned by the tick driver and passed by reference to everything that reads it.
    """

    def __init__(self, config: ChartConfig, generator: SampleGenerator | None = None) -> None:
        self._config = config
        self._series = build_series(count=config.series_count, capacity=config.capacity)
        self._generator = generator or SampleGenerator(seed=config.seed)
        self._theme = validate_theme(get_theme(config.theme), series_count=config.series_count)
        self._running = True
        self._interval_ms = float(config.interval_ms)
        self._value_range = (float(config.value_min), float(config.value_max))
        self._render_options = RenderOptions(
            chart_type=config.chart_type,  # type: ignore[arg-type]
            smoothing=config.smoothing,
            grid=config.grid,
        )
        self._ticks = 0

    @property
    def config(self) -> ChartConfig:
        return self._config

    @property
    def series(self) -> tuple[Series, ...]:
        return self._series

    @property
    def capacity(self) -> int:
        return self._config.capacity

    @property
    def theme(self) -> ChartTheme:
        return self._theme

    def set_theme(self, theme: str | ChartTheme) -> None:
        resolved = get_theme(theme) if isinstance(theme, str) else theme
        self._theme = validate_theme(resolved, series_count=len(self._series))
        LOGGER.info("theme switched to %s", self._theme.name)

    @property
    def running(self) -> bool:
        return self._running

    def set_running(self, running: bool) -> None:
        self._running = bool(running)

    @property
    def interval_ms(self) -> float:
        return self._interval_ms

    def set_interval_ms(self, interval_ms: float) -> None:
        if interval_ms <= 0:
            raise ValueError("interval_ms must be > 0")
        self._interval_ms = float(interval_ms)

    @property
    def value_range(self) -> tuple[float, float]:
        return self._value_range

    def set_value_range(self, low: float, high: float) -> None:
        self._value_range = (float(low), float(high))

    @property
    def render_options(self) -> RenderOptions:
        return self._render_options

    def update_render_options(self, **changes: Any) -> RenderOptions:
        self._render_options = replace(self._render_options, **changes)
        return self._render_options

    @property
    def ticks(self) -> int:
        return self._ticks

    def append_generated(self) -> list[float]:
        """Append one generated sample to every series; returns the new samples."""
        low, high = self._value_range
        samples = []
        for s in self._series:
            value = self._generator.next_value(low, high)
            s.buffer.append(value)
            samples.append(value)
        self._ticks += 1
        return samples

    def reset(self) -> None:
        for s in self._series:
            s.buffer.reset()
        LOGGER.info("all series buffers cleared")
