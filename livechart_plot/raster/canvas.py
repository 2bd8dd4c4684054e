from __future__ import annotations

import numpy as np


RGBA = tuple[int, int, int, int]


def new_canvas(width: int, height: int, color: RGBA = (0, 0, 0, 255)) -> np.ndarray:
    if width <= 0 or height <= 0:
        raise ValueError("canvas width/height must be > 0")
    return np.tile(np.asarray(color, dtype=np.uint8), (height, width, 1))


def clear(dst: np.ndarray, color: RGBA) -> None:
    dst[...] = np.asarray(color, dtype=np.uint8)


def with_alpha(color: RGBA, alpha: float) -> RGBA:
    a = int(round(min(1.0, max(0.0, alpha)) * color[3]))
    return (color[0], color[1], color[2], a)


def _blend_into(view: np.ndarray, color: RGBA) -> None:
    """Source-over `color` onto every pixel of `view`; the result is opaque."""
    a = color[3] / 255.0
    rgb = np.asarray(color[:3], dtype=np.float32)
    view[..., :3] = (rgb * a + view[..., :3].astype(np.float32) * (1.0 - a)).astype(np.uint8)
    view[..., 3] = 255


def _clip_box(dst: np.ndarray, x0: int, y0: int, x1: int, y1: int) -> tuple[int, int, int, int] | None:
    """Intersect the half-open box [x0, x1) x [y0, y1) with `dst`; None when empty."""
    xa, ya = max(0, x0), max(0, y0)
    xb, yb = min(dst.shape[1], x1), min(dst.shape[0], y1)
    if xa >= xb or ya >= yb:
        return None
    return xa, ya, xb, yb


def blit(dst: np.ndarray, src: np.ndarray, x0: int = 0, y0: int = 0) -> None:
    """Alpha-composite `src` onto `dst` with its top-left corner at (x0, y0)."""
    box = _clip_box(dst, x0, y0, x0 + src.shape[1], y0 + src.shape[0])
    if box is None:
        return
    xa, ya, xb, yb = box
    view = dst[ya:yb, xa:xb]
    patch = src[ya - y0 : yb - y0, xa - x0 : xb - x0]
    alpha = patch[..., 3:4].astype(np.float32) / 255.0
    view[..., :3] = (patch[..., :3] * alpha + view[..., :3] * (1.0 - alpha)).astype(np.uint8)
    view[..., 3] = 255


def blend_mask(dst: np.ndarray, mask: np.ndarray, color: RGBA, x0: int = 0, y0: int = 0) -> None:
    """Blend `color` into `dst` wherever the boolean `mask` is set.

    The mask is placed with its top-left corner at (x0, y0) and clipped to the
    destination bounds.
    """
    box = _clip_box(dst, x0, y0, x0 + mask.shape[1], y0 + mask.shape[0])
    if box is None:
        return
    xa, ya, xb, yb = box
    sub = mask[ya - y0 : yb - y0, xa - x0 : xb - x0]
    if not sub.any():
        return
    view = dst[ya:yb, xa:xb]
    picked = view[sub]
    _blend_into(picked, color)
    view[sub] = picked


def draw_hline(dst: np.ndarray, x0: int, x1: int, y: int, color: RGBA) -> None:
    box = _clip_box(dst, min(x0, x1), y, max(x0, x1) + 1, y + 1)
    if box is not None:
        xa, ya, xb, yb = box
        _blend_into(dst[ya:yb, xa:xb], color)


def draw_vline(dst: np.ndarray, x: int, y0: int, y1: int, color: RGBA) -> None:
    box = _clip_box(dst, x, min(y0, y1), x + 1, max(y0, y1) + 1)
    if box is not None:
        xa, ya, xb, yb = box
        _blend_into(dst[ya:yb, xa:xb], color)


def fill_rect(dst: np.ndarray, x: float, y: float, width: float, height: float, color: RGBA) -> None:
    """Fill an axis-aligned rectangle given in (possibly fractional) pixel units.

    Negative width or height flips the rectangle, matching canvas `fillRect`.
    """
    if width < 0:
        x, width = x + width, -width
    if height < 0:
        y, height = y + height, -height
    box = _clip_box(dst, int(round(x)), int(round(y)), int(round(x + width)), int(round(y + height)))
    if box is not None:
        xa, ya, xb, yb = box
        _blend_into(dst[ya:yb, xa:xb], color)
