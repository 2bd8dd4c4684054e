from livechart_plot.generator import SampleGenerator
from livechart_plot.renderer import DRAW_STRATEGIES, Palette, RenderOptions, draw_chart, render_chart
from livechart_plot.scales import ChartTransform, round_half_up, value_to_y
from livechart_plot.series import CHART_TYPES, DEFAULT_CAPACITY, ChartType, RollingBuffer, Series, build_series
from livechart_plot.smoothing import smooth
from livechart_plot.stats import ChartStats, summarize

__all__ = [
    "CHART_TYPES",
    "ChartStats",
    "ChartTransform",
    "ChartType",
    "DEFAULT_CAPACITY",
    "DRAW_STRATEGIES",
    "Palette",
    "RenderOptions",
    "RollingBuffer",
    "SampleGenerator",
    "Series",
    "build_series",
    "draw_chart",
    "render_chart",
    "round_half_up",
    "smooth",
    "summarize",
    "value_to_y",
]
