from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from livechart_plot.raster.canvas import RGBA

Font = ImageFont.FreeTypeFont | ImageFont.ImageFont

FONT_FILE_STEMS = ("dejavusansmono", "liberationmono", "menlo", "courier")
FONT_DIRS = (
    Path("/usr/share/fonts"),
    Path("/usr/local/share/fonts"),
    Path.home() / ".fonts",
    Path("/Library/Fonts"),
    Path("/System/Library/Fonts"),
)


@dataclass(frozen=True)
class TextStyle:
    size_px: float = 13.0
    line_spacing: float = 1.35


DEFAULT_TEXT_STYLE = TextStyle()


def draw_text(
    dst: np.ndarray,
    x: int,
    y: int,
    text: str,
    color: RGBA,
    *,
    font_size_px: float = DEFAULT_TEXT_STYLE.size_px,
) -> None:
    """Blend `text` into `dst` with its ink box's top-left corner at (x, y)."""
    if not text:
        return
    coverage = _glyph_coverage(text, _font(font_size_px))
    _blend_coverage(dst, coverage, color, x, y)


def draw_text_lines(
    dst: np.ndarray,
    x: int,
    y: int,
    lines: list[str],
    color: RGBA,
    *,
    style: TextStyle = DEFAULT_TEXT_STYLE,
) -> int:
    """Draw `lines` top to bottom from (x, y); returns the y just below the last line."""
    step = line_height(style=style)
    for line in lines:
        draw_text(dst, x, y, line, color, font_size_px=style.size_px)
        y += step
    return y


def text_size(text: str, *, font_size_px: float = DEFAULT_TEXT_STYLE.size_px) -> tuple[int, int]:
    font = _font(font_size_px)
    if not text:
        return (0, _font_height(font))
    left, top, right, bottom = font.getbbox(text)
    return (max(0, int(right - left)), max(1, int(bottom - top)))


def line_height(*, style: TextStyle = DEFAULT_TEXT_STYLE) -> int:
    return max(1, int(round(_font_height(_font(style.size_px)) * style.line_spacing)))


def _font_height(font: Font) -> int:
    ascent, descent = font.getmetrics()
    return max(1, int(ascent + descent))


def _blend_coverage(dst: np.ndarray, coverage: np.ndarray, color: RGBA, x: int, y: int) -> None:
    xa, ya = max(0, x), max(0, y)
    xb = min(dst.shape[1], x + coverage.shape[1])
    yb = min(dst.shape[0], y + coverage.shape[0])
    if xa >= xb or ya >= yb:
        return
    alpha = coverage[ya - y : yb - y, xa - x : xb - x].astype(np.float32) * (color[3] / (255.0 * 255.0))
    if not np.any(alpha):
        return
    view = dst[ya:yb, xa:xb]
    ink = np.asarray(color[:3], dtype=np.float32)
    a = alpha[:, :, None]
    view[:, :, :3] = np.clip(ink * a + view[:, :, :3].astype(np.float32) * (1.0 - a), 0, 255).astype(np.uint8)
    view[:, :, 3] = 255


@lru_cache(maxsize=512)
def _glyph_coverage(text: str, font: Font) -> np.ndarray:
    left, top, right, bottom = font.getbbox(text)
    image = Image.new("L", (max(1, int(right - left)), max(1, int(bottom - top))), 0)
    ImageDraw.Draw(image).text((-left, -top), text, fill=255, font=font)
    return np.asarray(image, dtype=np.uint8)


@lru_cache(maxsize=16)
def _font(size_px: float) -> Font:
    size = max(1, int(round(size_px)))
    path = _find_mono_font()
    if path is not None:
        try:
            return ImageFont.truetype(str(path), size=size)
        except OSError:
            pass
    return ImageFont.load_default()


@lru_cache(maxsize=1)
def _find_mono_font() -> Path | None:
    found: dict[str, Path] = {}
    for base in FONT_DIRS:
        if not base.is_dir():
            continue
        for path in base.rglob("*.tt[fc]"):
            key = path.stem.lower().replace(" ", "").replace("-", "")
            for stem in FONT_FILE_STEMS:
                if key.startswith(stem) and (stem not in found or key == stem):
                    found[stem] = path
    for stem in FONT_FILE_STEMS:
        if stem in found:
            return found[stem]
    return None
