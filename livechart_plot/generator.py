from __future__ import annotations

import numpy as np


class SampleGenerator:
    """Uniform pseudorandom samples in ``[low, high)``.

    Inverted ranges are not rejected: ``low > high`` yields values in
    ``(high, low]``.
    """

    def __init__(self, seed: int | None = None) -> None:
        self._rng = np.random.default_rng(seed)

    def next_value(self, low: float, high: float) -> float:
        u = float(self._rng.random())
        return float(low) + u * (float(high) - float(low))
