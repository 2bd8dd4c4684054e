from __future__ import annotations

import numpy as np

from livechart_plot.raster.canvas import RGBA, blend_mask


def fill_polygon(dst: np.ndarray, xs: np.ndarray, ys: np.ndarray, color: RGBA) -> None:
    """Fill a closed polygon with the even-odd rule.

    Each pixel row is sampled at its centre line; crossings with polygon edges
    are paired left to right and the spans between pairs are filled.
    """
    vx = np.asarray(xs, dtype=np.float64)
    vy = np.asarray(ys, dtype=np.float64)
    if vx.size < 3 or vx.size != vy.size:
        return
    height, width = dst.shape[0], dst.shape[1]
    ax, ay = vx, vy
    bx, by = np.roll(vx, -1), np.roll(vy, -1)

    row_y = np.arange(height, dtype=np.float64) + 0.5
    mask = np.zeros((height, width), dtype=bool)
    lo = np.minimum(ay, by)
    hi = np.maximum(ay, by)
    horizontal = ay == by
    for row, yc in enumerate(row_y.tolist()):
        active = (~horizontal) & (lo <= yc) & (yc < hi)
        if not np.any(active):
            continue
        t = (yc - ay[active]) / (by[active] - ay[active])
        crossings = np.sort(ax[active] + t * (bx[active] - ax[active]))
        for left, right in zip(crossings[0::2].tolist(), crossings[1::2].tolist(), strict=False):
            xa = max(0, int(np.ceil(left - 0.5)))
            xb = min(width, int(np.floor(right - 0.5)) + 1)
            if xa < xb:
                mask[row, xa:xb] = True
    blend_mask(dst, mask, color)
