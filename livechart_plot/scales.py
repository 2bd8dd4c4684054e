from __future__ import annotations

from dataclasses import dataclass
import math

import numpy as np


VALUE_MIN = 0.0
VALUE_MAX = 100.0


@dataclass(frozen=True)
class ChartTransform:
    """Linear index/value to pixel mapping for one frame.

    x grows with the sample index; y maps ``VALUE_MIN`` to the canvas bottom
    and ``VALUE_MAX`` to the top. Results are not clamped.
    """

    width: int
    height: int
    capacity: int

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError("canvas width/height must be > 0")
        if self.capacity <= 1:
            raise ValueError("capacity must be > 1")

    @property
    def step_x(self) -> float:
        return self.width / float(self.capacity - 1)

    def x_for_index(self, index: int | np.ndarray) -> float | np.ndarray:
        return index * self.step_x

    def y_for_value(self, value: float | np.ndarray) -> float | np.ndarray:
        return value_to_y(value, self.height)

    def map_points(self, values: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        arr = np.asarray(values, dtype=np.float64)
        xs = np.arange(arr.size, dtype=np.float64) * self.step_x
        return xs, self.y_for_value(arr)

    def index_for_x(self, x: float) -> int:
        return round_half_up(x / self.step_x)


def value_to_y(value: float | np.ndarray, height: int) -> float | np.ndarray:
    span = VALUE_MAX - VALUE_MIN
    return height - ((value - VALUE_MIN) / span) * height


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))
