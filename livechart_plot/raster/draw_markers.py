from __future__ import annotations

import numpy as np

from livechart_plot.raster.canvas import RGBA, blend_mask


def draw_markers(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA, radius: float = 4.0) -> None:
    for x, y in zip(np.asarray(xs).tolist(), np.asarray(ys).tolist(), strict=False):
        fill_circle(dst, float(x), float(y), radius, color)


def fill_circle(dst: np.ndarray, cx: float, cy: float, radius: float, color: RGBA) -> None:
    """Fill the pixels whose centres fall inside the circle at (cx, cy)."""
    if radius <= 0:
        return
    x0 = int(np.floor(cx - radius))
    y0 = int(np.floor(cy - radius))
    x1 = int(np.ceil(cx + radius)) + 1
    y1 = int(np.ceil(cy + radius)) + 1
    if x1 <= 0 or y1 <= 0 or x0 >= dst.shape[1] or y0 >= dst.shape[0]:
        return
    yy, xx = np.mgrid[y0:y1, x0:x1]
    mask = ((xx + 0.5 - cx) ** 2 + (yy + 0.5 - cy) ** 2) <= radius * radius
    blend_mask(dst, mask, color, x0=x0, y0=y0)
