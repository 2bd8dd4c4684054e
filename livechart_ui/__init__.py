from livechart_ui.controls import ControlPanel, ControlValues
from livechart_ui.panel import StatsPanel, format_stats_lines
from livechart_ui.style.theme import THEMES, ChartTheme, get_theme, hex_to_rgba
from livechart_ui.tooltip import TooltipOverlay, TooltipResolver, resolve_index

__all__ = [
    "THEMES",
    "ChartTheme",
    "ControlPanel",
    "ControlValues",
    "StatsPanel",
    "TooltipOverlay",
    "TooltipResolver",
    "format_stats_lines",
    "get_theme",
    "hex_to_rgba",
    "resolve_index",
]
