from __future__ import annotations

from dataclasses import dataclass
import re
from typing import Literal, Mapping

from livechart_plot.raster.canvas import RGBA
from livechart_plot.renderer import Palette

_HEX_COLOR = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6}|[0-9a-fA-F]{8})$")

ThemeName = Literal["light", "dark", "contrast"]


@dataclass(frozen=True)
class ChartTheme:
    """Named colour set for the chart canvas."""

    name: str
    background: str
    grid: str
    series: tuple[str, ...]
    text: str = "#202020"
    panel: str = "#f4f4f4"

    def palette(self) -> Palette:
        return Palette(
            background=hex_to_rgba(self.background),
            grid=hex_to_rgba(self.grid),
            series=tuple(hex_to_rgba(c) for c in self.series),
        )


THEMES: Mapping[str, ChartTheme] = {
    "light": ChartTheme(
        name="light",
        background="#ffffff",
        grid="#e0e0e0",
        series=("#e53935", "#1e88e5", "#43a047"),
        text="#202020",
        panel="#f4f4f4",
    ),
    "dark": ChartTheme(
        name="dark",
        background="#121212",
        grid="#333",
        series=("#ff5252", "#40c4ff", "#69f0ae"),
        text="#e8e8e8",
        panel="#1e1e1e",
    ),
    "contrast": ChartTheme(
        name="contrast",
        background="#000000",
        grid="#777",
        series=("#ff0000", "#00ff00", "#00ffff"),
        text="#ffffff",
        panel="#000000",
    ),
}

DEFAULT_THEME = "light"


def get_theme(name: str) -> ChartTheme:
    try:
        return THEMES[name]
    except KeyError:
        raise ValueError(f"Unknown theme: {name}") from None


def validate_theme(theme: ChartTheme, *, series_count: int) -> ChartTheme:
    for key in ("background", "grid", "text", "panel"):
        value = getattr(theme, key)
        if not isinstance(value, str) or not _HEX_COLOR.match(value):
            raise ValueError(f"Theme `{theme.name}` color `{key}` must be a hex color (#RGB, #RRGGBB or #RRGGBBAA)")
    for i, value in enumerate(theme.series):
        if not isinstance(value, str) or not _HEX_COLOR.match(value):
            raise ValueError(f"Theme `{theme.name}` series color {i} must be a hex color")
    if len(theme.series) < series_count:
        raise ValueError(
            f"Theme `{theme.name}` defines {len(theme.series)} series colors, needs at least {series_count}"
        )
    return theme


def hex_to_rgba(value: str) -> RGBA:
    if not _HEX_COLOR.match(value):
        raise ValueError(f"not a hex color: {value!r}")
    digits = value[1:]
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    if len(digits) == 6:
        digits += "ff"
    return (
        int(digits[0:2], 16),
        int(digits[2:4], 16),
        int(digits[4:6], 16),
        int(digits[6:8], 16),
    )
