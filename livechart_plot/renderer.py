from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Callable, Mapping, Sequence

import numpy as np

from livechart_plot.raster import (
    clear,
    draw_hline,
    draw_markers,
    draw_polyline,
    draw_vline,
    fill_polygon,
    fill_rect,
    new_canvas,
    with_alpha,
)
from livechart_plot.raster.canvas import RGBA
from livechart_plot.scales import ChartTransform
from livechart_plot.series import CHART_TYPES, ChartType, Series
from livechart_plot.smoothing import DEFAULT_SMOOTHING_WINDOW, smooth

LOGGER = logging.getLogger(__name__)

GRID_SPACING_PX = 50
LINE_WIDTH_PX = 2
AREA_FILL_ALPHA = 0.25
BAR_GUTTER_PX = 2
SCATTER_RADIUS_PX = 4.0


@dataclass(frozen=True)
class Palette:
    background: RGBA
    grid: RGBA
    series: tuple[RGBA, ...]

    def series_color(self, slot: int) -> RGBA:
        return self.series[slot % len(self.series)]


@dataclass(frozen=True)
class RenderOptions:
    chart_type: ChartType = "line"
    smoothing: bool = False
    grid: bool = True
    smoothing_window: int = DEFAULT_SMOOTHING_WINDOW

    def __post_init__(self) -> None:
        if self.chart_type not in CHART_TYPES:
            raise ValueError(f"unknown chart type: {self.chart_type}")


@dataclass(frozen=True)
class SeriesFrame:
    """Mapped pixel geometry of one series for the current frame."""

    index: int
    series_count: int
    xs: np.ndarray
    ys: np.ndarray
    color: RGBA
    transform: ChartTransform


DrawStrategy = Callable[[np.ndarray, SeriesFrame], None]


def draw_line(canvas: np.ndarray, frame: SeriesFrame) -> None:
    draw_polyline(canvas, frame.xs, frame.ys, color=frame.color, width=LINE_WIDTH_PX)


def draw_area(canvas: np.ndarray, frame: SeriesFrame) -> None:
    if frame.xs.size == 0:
        return
    width = float(frame.transform.width)
    height = float(frame.transform.height)
    poly_x = np.concatenate((frame.xs, [width, 0.0]))
    poly_y = np.concatenate((frame.ys, [height, height]))
    fill_polygon(canvas, poly_x, poly_y, with_alpha(frame.color, AREA_FILL_ALPHA))
    draw_polyline(canvas, frame.xs, frame.ys, color=frame.color, width=LINE_WIDTH_PX)


def draw_bars(canvas: np.ndarray, frame: SeriesFrame) -> None:
    slot = frame.transform.step_x / float(frame.series_count)
    bottom = float(frame.transform.height)
    offset = frame.index * slot
    for x, y in zip(frame.xs.tolist(), frame.ys.tolist(), strict=False):
        fill_rect(canvas, x + offset, y, slot - BAR_GUTTER_PX, bottom - y, frame.color)


def draw_scatter(canvas: np.ndarray, frame: SeriesFrame) -> None:
    draw_markers(canvas, frame.xs, frame.ys, color=frame.color, radius=SCATTER_RADIUS_PX)


DRAW_STRATEGIES: Mapping[ChartType, DrawStrategy] = {
    "line": draw_line,
    "area": draw_area,
    "bar": draw_bars,
    "scatter": draw_scatter,
}


def draw_grid(canvas: np.ndarray, color: RGBA, spacing: int = GRID_SPACING_PX) -> None:
    height, width = canvas.shape[0], canvas.shape[1]
    for x in range(0, width, spacing):
        draw_vline(canvas, x, 0, height - 1, color)
    for y in range(0, height, spacing):
        draw_hline(canvas, 0, width - 1, y, color)


def series_display_values(series: Series, options: RenderOptions) -> np.ndarray:
    values = series.buffer.values()
    if options.smoothing:
        return smooth(values, window=options.smoothing_window)
    return values


def draw_chart(
    canvas: np.ndarray,
    series: Sequence[Series],
    palette: Palette,
    options: RenderOptions,
    *,
    capacity: int,
) -> None:
    """Redraw the whole chart into `canvas` from the current buffer contents."""
    height, width = canvas.shape[0], canvas.shape[1]
    transform = ChartTransform(width=width, height=height, capacity=capacity)
    clear(canvas, palette.background)
    if options.grid:
        draw_grid(canvas, palette.grid)

    strategy = DRAW_STRATEGIES[options.chart_type]
    for s in series:
        values = series_display_values(s, options)
        if values.size == 0:
            continue
        xs, ys = transform.map_points(values)
        strategy(
            canvas,
            SeriesFrame(
                index=s.index,
                series_count=len(series),
                xs=xs,
                ys=ys,
                color=palette.series_color(s.color_slot),
                transform=transform,
            ),
        )
    LOGGER.debug(
        "chart drawn type=%s smoothing=%s grid=%s size=%dx%d",
        options.chart_type,
        options.smoothing,
        options.grid,
        width,
        height,
    )


def render_chart(
    series: Sequence[Series],
    palette: Palette,
    options: RenderOptions,
    *,
    width: int,
    height: int,
    capacity: int,
) -> np.ndarray:
    canvas = new_canvas(width, height, palette.background)
    draw_chart(canvas, series, palette, options, capacity=capacity)
    return canvas
