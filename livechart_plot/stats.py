from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Literal

import numpy as np

from livechart_plot.series import Series


Trend = Literal["rising", "falling"]


@dataclass(frozen=True)
class ChartStats:
    current: float
    minimum: float
    maximum: float
    average: float
    trend: Trend
    sample_count: int


def summarize(series: Iterable[Series]) -> ChartStats | None:
    """Summarize every series buffer concatenated in series order.

    The concatenation is not time-aligned: ``current`` is the newest sample of
    the last non-empty series and the trend compares it with the oldest sample
    of the first non-empty series. Returns ``None`` when all buffers are empty.
    """
    chunks = [s.buffer.values() for s in series]
    combined = np.concatenate(chunks) if chunks else np.zeros(0, dtype=np.float64)
    if combined.size == 0:
        return None
    first = float(combined[0])
    last = float(combined[-1])
    return ChartStats(
        current=last,
        minimum=float(np.min(combined)),
        maximum=float(np.max(combined)),
        average=float(np.mean(combined)),
        trend="rising" if last > first else "falling",
        sample_count=int(combined.size),
    )
