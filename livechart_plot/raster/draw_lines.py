from __future__ import annotations

import numpy as np

from livechart_plot.raster.canvas import RGBA, blend_mask


def draw_polyline(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, width: int = 1) -> None:
    """Stroke a polyline through (xs, ys), rounding each vertex to the nearest pixel.

    Brush pixels are collected into one coverage mask first so overlapping
    segments do not blend a translucent colour more than once.
    """
    if xs.size < 2:
        return
    px = np.rint(np.asarray(xs, dtype=np.float64)).astype(np.int64)
    py = np.rint(np.asarray(ys, dtype=np.float64)).astype(np.int64)
    mask = np.zeros(dst.shape[:2], dtype=bool)
    radius = max(0, width // 2)
    for i in range(px.size - 1):
        cx, cy = segment_pixels(int(px[i]), int(py[i]), int(px[i + 1]), int(py[i + 1]), mask.shape, pad=radius)
        _stamp(mask, cx, cy, radius)
    blend_mask(dst, mask, color)


def segment_pixels(
    x0: int, y0: int, x1: int, y1: int, shape: tuple[int, int], *, pad: int = 0
) -> tuple[np.ndarray, np.ndarray]:
    """Pixel centres along a segment, one per step of its longer axis."""
    h, w = shape
    if max(x0, x1) < -pad or min(x0, x1) >= w + pad or max(y0, y1) < -pad or min(y0, y1) >= h + pad:
        empty = np.empty(0, dtype=np.int64)
        return empty, empty
    steps = max(abs(x1 - x0), abs(y1 - y0))
    t = np.linspace(0.0, 1.0, steps + 1)
    cx = np.rint(x0 + (x1 - x0) * t).astype(np.int64)
    cy = np.rint(y0 + (y1 - y0) * t).astype(np.int64)
    return cx, cy


def _stamp(mask: np.ndarray, cx: np.ndarray, cy: np.ndarray, radius: int) -> None:
    if cx.size == 0:
        return
    h, w = mask.shape
    for oy in range(-radius, radius + 1):
        for ox in range(-radius, radius + 1):
            x = cx + ox
            y = cy + oy
            keep = (x >= 0) & (x < w) & (y >= 0) & (y < h)
            mask[y[keep], x[keep]] = True
