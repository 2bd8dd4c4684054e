from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import numpy as np

from livechart_plot.compile import compile_full_rewrite_batch
from livechart_plot.raster import blit, new_canvas
from livechart_plot.renderer import draw_chart
from livechart_plot.stats import ChartStats
from livechart_ui.controls import ControlPanel, ControlValues
from livechart_ui.panel import StatsPanel, draw_sidebar, draw_tooltip
from livechart_ui.style.theme import hex_to_rgba
from livechart_ui.tooltip import TooltipResolver

from .config import ChartConfig
from .events import InputEvent, PointerLeave, PointerMove, Resize
from .export import DEFAULT_EXPORT_NAME, export_png
from .scheduler import Scheduler
from .session import ChartSession
from .tick_driver import TickDriver
from .window_matrix import FrameCommitted, WindowMatrix

LOGGER = logging.getLogger(__name__)


class LiveChartApp:
    """Wires session, scheduler, controls, tooltip and display surface together.

    The window matrix holds the sidebar in its left ``sidebar_width`` columns
    and the chart canvas to the right of it.
    """

    def __init__(
        self,
        config: ChartConfig,
        *,
        scheduler: Scheduler | None = None,
        matrix: WindowMatrix | None = None,
        export_path: str | Path = DEFAULT_EXPORT_NAME,
    ) -> None:
        self.config = config
        self.session = ChartSession(config)
        self.scheduler = scheduler or Scheduler()
        self.matrix = matrix or WindowMatrix(height=config.height, width=config.width)
        self.controls = ControlPanel(
            ControlValues(
                value_min=config.value_min,
                value_max=config.value_max,
                chart_type=config.chart_type,
                grid=config.grid,
                smoothing=config.smoothing,
                interval_ms=config.interval_ms,
                theme=config.theme,
            )
        )
        self.stats_panel = StatsPanel()
        self.tooltip = TooltipResolver(self.session.series, config.capacity)
        self.driver = TickDriver(
            self.session,
            self.scheduler,
            redraw=self._redraw,
            publish_stats=self._publish_stats,
        )
        self.export_path = Path(export_path)
        self._chart_canvas: np.ndarray | None = None
        self.controls.subscribe(self._on_control)
        self.scheduler.add_event_handler(self._on_event)

    @property
    def sidebar_width(self) -> int:
        return min(self.config.sidebar_width, self.matrix.width - 1)

    @property
    def canvas_left(self) -> int:
        return self.sidebar_width

    @property
    def chart_size(self) -> tuple[int, int]:
        return (max(1, self.matrix.width - self.sidebar_width), self.matrix.height)

    @property
    def chart_canvas(self) -> np.ndarray | None:
        return None if self._chart_canvas is None else self._chart_canvas.copy()

    def start(self) -> None:
        self.driver.start()
        LOGGER.info(
            "live chart started: %dx%d interval=%.0fms type=%s theme=%s",
            self.matrix.width,
            self.matrix.height,
            self.session.interval_ms,
            self.session.render_options.chart_type,
            self.session.theme.name,
        )

    def stop(self) -> None:
        self.driver.stop()
        self.scheduler.stop()

    def run(self, *, max_ticks: int | None = None) -> int:
        if not self.driver.armed:
            self.start()
        try:
            return self.scheduler.run(max_runs=max_ticks)
        finally:
            self.driver.stop()

    def step(self, ticks: int = 1) -> None:
        """Run `ticks` tick cycles immediately without waiting on the scheduler."""
        for _ in range(ticks):
            self.driver.tick()

    def post(self, event: InputEvent) -> None:
        self.scheduler.post_event(event)

    def export(self, path: str | Path | None = None) -> Path:
        if self._chart_canvas is None:
            self._redraw(self.session)
        assert self._chart_canvas is not None
        return export_png(self._chart_canvas, path or self.export_path)

    def _redraw(self, session: ChartSession) -> None:
        width, height = self.chart_size
        if self._chart_canvas is None or self._chart_canvas.shape[:2] != (height, width):
            self._chart_canvas = new_canvas(width, height)
        draw_chart(
            self._chart_canvas,
            session.series,
            session.theme.palette(),
            session.render_options,
            capacity=session.capacity,
        )

    def _publish_stats(self, stats: ChartStats | None) -> None:
        self.stats_panel.update(stats)
        self.present()

    def present(self) -> FrameCommitted:
        """Compose sidebar, chart canvas and tooltip and commit them to the window matrix."""
        frame = new_canvas(self.matrix.width, self.matrix.height, hex_to_rgba(self.session.theme.panel))
        draw_sidebar(
            frame,
            self.sidebar_width,
            self.session.theme,
            self.controls.values,
            self.driver.toggle_label,
            self.stats_panel,
        )
        if self._chart_canvas is not None:
            blit(frame, self._chart_canvas, x0=self.canvas_left, y0=0)
        draw_tooltip(frame, self.tooltip.overlay, self.session.theme)
        return self.matrix.commit(compile_full_rewrite_batch(frame))

    def _on_control(self, name: str, value: Any) -> None:
        if name in ("value_min", "value_max"):
            values = self.controls.values
            self.session.set_value_range(values.value_min, values.value_max)
        elif name == "chart_type":
            self.session.update_render_options(chart_type=value)
        elif name == "grid":
            self.session.update_render_options(grid=value)
        elif name == "smoothing":
            self.session.update_render_options(smoothing=value)
        elif name == "interval_ms":
            self.driver.set_interval(value)
        elif name == "theme":
            self.session.set_theme(value)
        elif name == "toggle_run":
            self.driver.toggle()
        elif name == "reset":
            self.driver.reset()
        elif name == "export":
            self.export()

    def _on_event(self, event: InputEvent) -> None:
        if isinstance(event, PointerMove):
            width, _ = self.chart_size
            shown = self.tooltip.on_pointer_move(event.x, event.y, canvas_left=self.canvas_left, canvas_width=width)
            if shown is not None:
                self.present()
        elif isinstance(event, PointerLeave):
            self.tooltip.on_pointer_leave()
            self.present()
        elif isinstance(event, Resize):
            self.matrix.resize(height=event.height, width=event.width)
