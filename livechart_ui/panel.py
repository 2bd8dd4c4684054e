from __future__ import annotations

import numpy as np

from livechart_plot.raster import draw_text_lines, fill_rect, line_height, text_size
from livechart_plot.stats import ChartStats
from livechart_ui.controls import ControlValues
from livechart_ui.style.theme import ChartTheme, hex_to_rgba
from livechart_ui.tooltip import TooltipOverlay

PANEL_PADDING_PX = 12
TOOLTIP_PADDING_PX = 6
TREND_LABELS = {"rising": "Rising ↑", "falling": "Falling ↓"}


def format_stats_lines(stats: ChartStats) -> list[str]:
    return [
        "Statistics",
        f"Current: {stats.current:.2f}",
        f"Min: {stats.minimum:.2f}",
        f"Max: {stats.maximum:.2f}",
        f"Avg: {stats.average:.2f}",
        f"Trend: {TREND_LABELS[stats.trend]}",
    ]


class StatsPanel:
    """Last published statistics; an empty summary leaves the display unchanged."""

    def __init__(self) -> None:
        self.stats: ChartStats | None = None
        self.lines: list[str] = []
        self.updates = 0

    def update(self, stats: ChartStats | None) -> None:
        if stats is None:
            return
        self.stats = stats
        self.lines = format_stats_lines(stats)
        self.updates += 1

    @property
    def text(self) -> str:
        return "\n".join(self.lines)


def format_control_lines(values: ControlValues, toggle_label: str) -> list[str]:
    return [
        "Controls",
        f"Range: {values.value_min:g} .. {values.value_max:g}",
        f"Chart: {values.chart_type}",
        f"Grid: {'on' if values.grid else 'off'}",
        f"Smooth: {'on' if values.smoothing else 'off'}",
        f"Interval: {values.interval_ms:g} ms",
        f"Theme: {values.theme}",
        f"[{toggle_label}]",
    ]


def draw_sidebar(
    frame: np.ndarray,
    width: int,
    theme: ChartTheme,
    controls: ControlValues,
    toggle_label: str,
    stats_panel: StatsPanel,
) -> None:
    """Draw the control summary and statistics into the left `width` columns of `frame`."""
    if width <= 0:
        return
    fill_rect(frame, 0, 0, width, frame.shape[0], hex_to_rgba(theme.panel))
    color = hex_to_rgba(theme.text)
    y = draw_text_lines(frame, PANEL_PADDING_PX, PANEL_PADDING_PX, format_control_lines(controls, toggle_label), color)
    if stats_panel.lines:
        draw_text_lines(frame, PANEL_PADDING_PX, y + line_height(), stats_panel.lines, color)


def draw_tooltip(frame: np.ndarray, overlay: TooltipOverlay, theme: ChartTheme) -> None:
    if not overlay.visible or not overlay.lines:
        return
    lines = overlay.lines
    text_w = max(text_size(line)[0] for line in lines)
    box_w = text_w + 2 * TOOLTIP_PADDING_PX
    box_h = line_height() * len(lines) + 2 * TOOLTIP_PADDING_PX
    x, y = overlay.position
    fill_rect(frame, x, y, box_w, box_h, (0, 0, 0, 200))
    draw_text_lines(
        frame,
        int(round(x)) + TOOLTIP_PADDING_PX,
        int(round(y)) + TOOLTIP_PADDING_PX,
        lines,
        (255, 255, 255, 255),
    )
