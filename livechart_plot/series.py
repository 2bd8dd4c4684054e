from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

import numpy as np


ChartType = Literal["line", "area", "bar", "scatter"]
CHART_TYPES: tuple[ChartType, ...] = ("line", "area", "bar", "scatter")

DEFAULT_CAPACITY = 50
DEFAULT_SERIES_COUNT = 3


class RollingBuffer:
    """Fixed-capacity FIFO of samples; the oldest sample is evicted once full."""

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity <= 0:
            raise ValueError("capacity must be > 0")
        self._capacity = int(capacity)
        self._values = np.zeros(self._capacity, dtype=np.float64)
        self._count = 0

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._count

    def append(self, value: float) -> None:
        if self._count < self._capacity:
            self._values[self._count] = float(value)
            self._count += 1
            return
        self._values = np.roll(self._values, -1)
        self._values[-1] = float(value)

    def reset(self) -> None:
        self._values[:] = 0.0
        self._count = 0

    def values(self) -> np.ndarray:
        return self._values[: self._count].copy()

    def value_at(self, index: int) -> float | None:
        if index < 0 or index >= self._count:
            return None
        return float(self._values[index])


@dataclass
class Series:
    index: int
    color_slot: int
    buffer: RollingBuffer = field(default_factory=RollingBuffer)

    @property
    def label(self) -> str:
        return f"Series {self.index + 1}"


def build_series(count: int = DEFAULT_SERIES_COUNT, capacity: int = DEFAULT_CAPACITY) -> tuple[Series, ...]:
    if count <= 0:
        raise ValueError("series count must be > 0")
    return tuple(Series(index=i, color_slot=i, buffer=RollingBuffer(capacity)) for i in range(count))
