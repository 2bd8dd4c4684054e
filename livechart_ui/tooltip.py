from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from livechart_plot.scales import round_half_up
from livechart_plot.series import Series

POINTER_OFFSET_PX = 10


@dataclass
class TooltipOverlay:
    visible: bool = False
    x: float = 0.0
    y: float = 0.0
    text: str = ""

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    @property
    def lines(self) -> list[str]:
        return self.text.split("\n") if self.text else []

    def show(self, x: float, y: float, text: str) -> None:
        self.visible = True
        self.x = x
        self.y = y
        self.text = text

    def hide(self) -> None:
        self.visible = False


def resolve_index(pointer_x: float, canvas_left: float, step_x: float) -> int:
    """Nearest sample index under the pointer, ties rounding up."""
    if step_x <= 0:
        raise ValueError("step_x must be > 0")
    return round_half_up((pointer_x - canvas_left) / step_x)


def format_tooltip(series: Sequence[Series], index: int) -> str:
    lines = []
    for s in series:
        value = s.buffer.value_at(index)
        lines.append(f"{s.label}: -" if value is None else f"{s.label}: {value:.2f}")
    return "\n".join(lines)


class TooltipResolver:
    """Maps pointer positions back to buffer indices and drives the overlay."""

    def __init__(self, series: Sequence[Series], capacity: int, overlay: TooltipOverlay | None = None) -> None:
        if capacity <= 1:
            raise ValueError("capacity must be > 1")
        if not series:
            raise ValueError("at least one series is required")
        self._series = tuple(series)
        self._capacity = capacity
        self.overlay = overlay or TooltipOverlay()

    def step_x(self, canvas_width: int) -> float:
        return canvas_width / float(self._capacity - 1)

    def on_pointer_move(self, pointer_x: float, pointer_y: float, *, canvas_left: float, canvas_width: int) -> int | None:
        """Show the tooltip when series 0 has a sample at the resolved index.

        Returns the resolved index when shown; otherwise the overlay keeps its
        previous state and None is returned.
        """
        index = resolve_index(pointer_x, canvas_left, self.step_x(canvas_width))
        if self._series[0].buffer.value_at(index) is None:
            return None
        self.overlay.show(
            pointer_x + POINTER_OFFSET_PX,
            pointer_y + POINTER_OFFSET_PX,
            format_tooltip(self._series, index),
        )
        return index

    def on_pointer_leave(self) -> None:
        self.overlay.hide()
