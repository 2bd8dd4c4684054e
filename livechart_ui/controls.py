from __future__ import annotations

from dataclasses import asdict, dataclass, replace
import logging
from typing import Any, Callable

from livechart_plot.series import CHART_TYPES
from livechart_ui.style.theme import THEMES

LOGGER = logging.getLogger(__name__)

ControlListener = Callable[[str, Any], None]
ACTIONS = ("toggle_run", "reset", "export")


@dataclass(frozen=True)
class ControlValues:
    value_min: float = 0.0
    value_max: float = 100.0
    chart_type: str = "line"
    grid: bool = True
    smoothing: bool = False
    interval_ms: float = 500.0
    theme: str = "light"


class ControlPanel:
    """Current control values plus synchronous change notifications.

    Listeners receive ``(name, value)`` for every value change and
    ``(action, None)`` for button presses.
    """

    def __init__(self, values: ControlValues | None = None) -> None:
        self._values = _validate(values or ControlValues())
        self._listeners: list[ControlListener] = []

    @property
    def values(self) -> ControlValues:
        return self._values

    def subscribe(self, listener: ControlListener) -> None:
        self._listeners.append(listener)

    def set(self, name: str, value: Any) -> None:
        """Apply one control change; a listener that raises leaves the previous values in place."""
        if name not in asdict(self._values):
            raise ValueError(f"Unknown control: {name}")
        previous = self._values
        updated = _validate(replace(previous, **{name: value}))
        if getattr(updated, name) == getattr(previous, name):
            return
        self._values = updated
        LOGGER.debug("control %s -> %r", name, value)
        try:
            self._notify(name, getattr(updated, name))
        except Exception:
            self._values = previous
            raise

    def press(self, action: str) -> None:
        if action not in ACTIONS:
            raise ValueError(f"Unknown control action: {action}")
        self._notify(action, None)

    def _notify(self, name: str, value: Any) -> None:
        for listener in list(self._listeners):
            listener(name, value)


def _validate(values: ControlValues) -> ControlValues:
    if values.chart_type not in CHART_TYPES:
        raise ValueError(f"Unknown chart type: {values.chart_type}")
    if values.theme not in THEMES:
        raise ValueError(f"Unknown theme: {values.theme}")
    if float(values.interval_ms) <= 0:
        raise ValueError("interval_ms must be > 0")
    return ControlValues(
        value_min=float(values.value_min),
        value_max=float(values.value_max),
        chart_type=values.chart_type,
        grid=bool(values.grid),
        smoothing=bool(values.smoothing),
        interval_ms=float(values.interval_ms),
        theme=values.theme,
    )
