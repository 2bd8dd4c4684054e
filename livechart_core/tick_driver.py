from __future__ import annotations

import logging
from typing import Callable

from livechart_plot.stats import ChartStats, summarize

from .scheduler import RepeatingTask, Scheduler
from .session import ChartSession

LOGGER = logging.getLogger(__name__)

RUNNING_LABEL = "Pause"
PAUSED_LABEL = "Start"


class TickDriver:
    """Periodic generate-then-redraw cycle.

    Every tick appends one sample per series while running, then always
    redraws and recomputes stats, so a paused chart still reflects theme and
    option changes.
    """

    def __init__(
        self,
        session: ChartSession,
        scheduler: Scheduler,
        *,
        redraw: Callable[[ChartSession], None],
        publish_stats: Callable[[ChartStats | None], None],
    ) -> None:
        self._session = session
        self._scheduler = scheduler
        self._redraw = redraw
        self._publish_stats = publish_stats
        self._task: RepeatingTask | None = None

    @property
    def session(self) -> ChartSession:
        return self._session

    @property
    def armed(self) -> bool:
        return self._task is not None and not self._task.cancelled

    @property
    def task(self) -> RepeatingTask | None:
        return self._task

    @property
    def toggle_label(self) -> str:
        return RUNNING_LABEL if self._session.running else PAUSED_LABEL

    def start(self) -> RepeatingTask:
        return self._arm()

    def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            self._task = None
            LOGGER.info("tick driver stopped")

    def set_interval(self, interval_ms: float) -> None:
        """Apply a new interval; an armed task is cancelled and re-armed right away."""
        self._session.set_interval_ms(interval_ms)
        if self.armed:
            self._arm()
            LOGGER.info("tick interval re-armed at %.1f ms", interval_ms)

    def toggle(self) -> str:
        self._session.set_running(not self._session.running)
        LOGGER.info("tick driver %s", "running" if self._session.running else "paused")
        return self.toggle_label

    def reset(self) -> None:
        self._session.reset()

    def tick(self) -> None:
        if self._session.running:
            samples = self._session.append_generated()
            LOGGER.debug("tick %d samples=%s", self._session.ticks, ["%.2f" % v for v in samples])
        self._redraw(self._session)
        self._publish_stats(summarize(self._session.series))

    def _arm(self) -> RepeatingTask:
        if self._task is not None:
            self._task.cancel()
        self._task = self._scheduler.call_every(
            self._session.interval_ms / 1000.0,
            self.tick,
            name="chart-tick",
        )
        return self._task
