from __future__ import annotations

from typing import Sequence

import numpy as np


DEFAULT_SMOOTHING_WINDOW = 3


def smooth(values: Sequence[float] | np.ndarray, window: int = DEFAULT_SMOOTHING_WINDOW) -> np.ndarray:
    """Trailing moving average.

    ``out[i]`` is the mean of ``values[max(0, i - window) .. i]`` inclusive, so
    each output averages up to ``window + 1`` samples and never looks ahead.
    """
    if window < 0:
        raise ValueError("window must be >= 0")
    arr = np.asarray(values, dtype=np.float64)
    if arr.size == 0:
        return arr.copy()
    csum = np.concatenate(([0.0], np.cumsum(arr)))
    idx = np.arange(arr.size)
    start = np.maximum(0, idx - window)
    return (csum[idx + 1] - csum[start]) / (idx + 1 - start)
