from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
import logging
import time
from typing import Callable

from .events import InputEvent

LOGGER = logging.getLogger(__name__)

EventHandler = Callable[[InputEvent], None]


@dataclass
class RepeatingTask:
    """Handle for a callback the scheduler fires every `interval_s` seconds."""

    name: str
    interval_s: float
    callback: Callable[[], None]
    next_due: float
    runs: int = 0
    cancelled: bool = field(default=False)

    def cancel(self) -> None:
        self.cancelled = True

    def is_due(self, now: float) -> bool:
        return not self.cancelled and now >= self.next_due

    def advance(self, now: float) -> None:
        # A stalled loop fires once and realigns instead of bursting catch-up runs.
        while self.next_due <= now:
            self.next_due += self.interval_s


class Scheduler:
    """Single-threaded cooperative loop over repeating tasks and queued input events.

    Queued events are dispatched before due tasks on every pass. Callbacks run
    one at a time on the caller thread, so they never overlap.
    """

    def __init__(
        self,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._clock = clock
        self._sleep = sleep
        self._tasks: list[RepeatingTask] = []
        self._events: deque[InputEvent] = deque()
        self._handlers: list[EventHandler] = []
        self._running = False
        self._last_error: Exception | None = None

    @property
    def last_error(self) -> Exception | None:
        return self._last_error

    @property
    def running(self) -> bool:
        return self._running

    def now(self) -> float:
        return self._clock()

    def call_every(self, interval_s: float, callback: Callable[[], None], *, name: str = "task") -> RepeatingTask:
        if interval_s <= 0:
            raise ValueError("interval_s must be > 0")
        task = RepeatingTask(
            name=name,
            interval_s=float(interval_s),
            callback=callback,
            next_due=self._clock() + float(interval_s),
        )
        self._tasks.append(task)
        LOGGER.debug("armed task=%s interval_s=%.3f", name, interval_s)
        return task

    def add_event_handler(self, handler: EventHandler) -> None:
        self._handlers.append(handler)

    def post_event(self, event: InputEvent) -> None:
        self._events.append(event)

    def pending_event_count(self) -> int:
        return len(self._events)

    def active_tasks(self) -> list[RepeatingTask]:
        return [task for task in self._tasks if not task.cancelled]

    def next_deadline(self) -> float | None:
        deadlines = [task.next_due for task in self._tasks if not task.cancelled]
        return min(deadlines) if deadlines else None

    def run_pending(self, now: float | None = None) -> int:
        """Dispatch queued events, then fire every due task once. Returns tasks fired."""
        self._dispatch_events()
        if now is None:
            now = self._clock()
        fired = 0
        for task in list(self._tasks):
            if not task.is_due(now):
                continue
            task.runs += 1
            task.advance(now)
            fired += 1
            try:
                task.callback()
            except Exception as exc:  # noqa: BLE001
                self._last_error = exc
                LOGGER.exception("task %s failed", task.name)
                raise
        self._tasks = [task for task in self._tasks if not task.cancelled]
        return fired

    def run(
        self,
        *,
        max_runs: int | None = None,
        should_continue: Callable[[], bool] | None = None,
    ) -> int:
        """Run until stopped, `max_runs` task firings, or nothing is left to schedule."""
        if max_runs is not None and max_runs <= 0:
            raise ValueError("max_runs must be > 0")
        self._running = True
        total = 0
        try:
            while self._running:
                if should_continue is not None and not should_continue():
                    break
                total += self.run_pending()
                if max_runs is not None and total >= max_runs:
                    break
                deadline = self.next_deadline()
                if deadline is None:
                    if not self._events:
                        break
                    continue
                sleep_for = deadline - self._clock()
                if sleep_for > 0:
                    self._sleep(sleep_for)
        finally:
            self._running = False
        return total

    def stop(self) -> None:
        self._running = False

    def _dispatch_events(self) -> None:
        while self._events:
            event = self._events.popleft()
            for handler in list(self._handlers):
                try:
                    handler(event)
                except Exception as exc:  # noqa: BLE001
                    self._last_error = exc
                    LOGGER.exception("event handler failed for %s", type(event).__name__)
                    raise
