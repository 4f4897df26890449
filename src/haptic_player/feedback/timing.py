"""
Clocks and dispatchers that turn chain time points into executed triggers.

A chain only ever talks to two small interfaces:
- Clock: produces "now" and adds a duration to a time point
- Dispatcher: runs a zero-argument action no earlier than a time point

Two implementations of each are provided. MonotonicClock/ThreadDispatcher
run effects for real on a background thread. VirtualClock/VirtualDispatcher
execute synchronously on demand, for tests and offline inspection.
"""

from __future__ import annotations

import heapq
import itertools
import threading
import time
from datetime import timedelta
from typing import Any, Callable, Protocol

Action = Callable[[], None]


class Clock(Protocol):
    """Source of time points for a chain."""

    def now(self) -> Any:
        """Current time point."""
        ...

    def add(self, time_point: Any, duration: timedelta) -> Any:
        """Time point `duration` after `time_point`. Must be pure."""
        ...


class Dispatcher(Protocol):
    """Deferred executor for scheduled triggers."""

    def schedule_at(self, time_point: Any, action: Action) -> None:
        """
        Run `action` no earlier than `time_point`.

        Actions with equal or ascending time points run in submission order.
        Non-blocking and fire-and-forget.
        """
        ...


# =============================================================================
# REAL TIME
# =============================================================================

class MonotonicClock:
    """Wall-clock time points as float seconds from time.monotonic()."""

    def now(self) -> float:
        return time.monotonic()

    def add(self, time_point: float, duration: timedelta) -> float:
        return time_point + duration.total_seconds()


class ThreadDispatcher:
    """
    Runs scheduled actions on a single background thread.

    Pending actions live in a heap keyed by (deadline, sequence), so actions
    sharing a deadline keep their submission order. An action that raises
    is reported and the worker moves on to the next one.

    Deadlines are float seconds, so the clock must be a MonotonicClock.
    """

    def __init__(self, clock: MonotonicClock | None = None):
        if clock is not None and not isinstance(clock, MonotonicClock):
            raise TypeError(
                f"ThreadDispatcher needs a MonotonicClock, got {type(clock).__name__}"
            )
        self.clock = clock or MonotonicClock()

        self._heap: list[tuple[float, int, Action]] = []
        self._sequence = itertools.count()
        self._cond = threading.Condition()
        self._running = False
        self._busy = False
        self._thread: threading.Thread | None = None

    def start(self) -> None:
        """Start the worker thread."""
        with self._cond:
            if self._running:
                return
            self._running = True

        self._thread = threading.Thread(
            target=self._run,
            name="haptic-dispatch",
            daemon=True,
        )
        self._thread.start()

    def stop(self, timeout: float = 1.0) -> None:
        """Stop the worker. Actions that have not run yet are dropped."""
        with self._cond:
            self._running = False
            self._heap.clear()
            self._cond.notify_all()

        if self._thread is not None:
            self._thread.join(timeout=timeout)
            self._thread = None

    def schedule_at(self, time_point: float, action: Action) -> None:
        with self._cond:
            heapq.heappush(self._heap, (time_point, next(self._sequence), action))
            self._cond.notify_all()

    def wait_idle(self, timeout: float | None = None) -> bool:
        """
        Block until every scheduled action has run.

        Args:
            timeout: Maximum seconds to wait (None = no limit)

        Returns:
            True if the queue drained, False on timeout or if the worker
            is not running
        """
        deadline = None if timeout is None else time.monotonic() + timeout

        with self._cond:
            while self._heap or self._busy:
                if not self._running:
                    return False
                if deadline is None:
                    self._cond.wait()
                    continue
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    return False
                self._cond.wait(remaining)
        return True

    @property
    def pending(self) -> int:
        """Number of actions waiting to run."""
        with self._cond:
            return len(self._heap)

    @property
    def is_running(self) -> bool:
        return self._running

    def _run(self) -> None:
        """Worker loop: sleep until the earliest deadline, then run it."""
        while True:
            with self._cond:
                while self._running:
                    if not self._heap:
                        self._cond.wait()
                        continue
                    delay = self._heap[0][0] - self.clock.now()
                    if delay <= 0:
                        break
                    self._cond.wait(timeout=delay)

                if not self._running:
                    return

                _, _, action = heapq.heappop(self._heap)
                self._busy = True

            try:
                action()
            except Exception as e:
                print(f"[DISPATCH] Error running scheduled effect: {e}")
            finally:
                with self._cond:
                    self._busy = False
                    self._cond.notify_all()


# =============================================================================
# VIRTUAL TIME
# =============================================================================

class VirtualClock:
    """
    Manually advanced clock.

    Time points are timedelta offsets from the clock's own epoch, so
    arithmetic is exact and easy to compare in tests.
    """

    def __init__(self, start: timedelta = timedelta(0)):
        self._now = start

    def now(self) -> timedelta:
        return self._now

    def add(self, time_point: timedelta, duration: timedelta) -> timedelta:
        return time_point + duration

    def advance(self, delta: timedelta) -> timedelta:
        """Move the clock forward by `delta` and return the new time."""
        if delta < timedelta(0):
            raise ValueError(f"Cannot move a clock backwards: {delta}")
        self._now += delta
        return self._now

    def set(self, time_point: timedelta) -> None:
        """Jump to an absolute time point (never backwards)."""
        if time_point < self._now:
            raise ValueError(f"Cannot move a clock backwards: {time_point} < {self._now}")
        self._now = time_point


class VirtualDispatcher:
    """
    Deterministic dispatcher driven by explicit run calls.

    Nothing executes on schedule_at(). run_until() and run_all() execute
    due actions in (deadline, sequence) order, moving the virtual clock to
    each deadline first so actions observe the time they were scheduled for.
    """

    def __init__(self, clock: VirtualClock):
        self.clock = clock
        self._heap: list[tuple[timedelta, int, Action]] = []
        self._sequence = itertools.count()

    def schedule_at(self, time_point: timedelta, action: Action) -> None:
        heapq.heappush(self._heap, (time_point, next(self._sequence), action))

    def run_until(self, time_point: timedelta) -> int:
        """
        Run every action due at or before `time_point`.

        Returns:
            Number of actions executed
        """
        executed = 0
        while self._heap and self._heap[0][0] <= time_point:
            deadline, _, action = heapq.heappop(self._heap)
            if deadline > self.clock.now():
                self.clock.set(deadline)
            action()
            executed += 1

        if time_point > self.clock.now():
            self.clock.set(time_point)
        return executed

    def run_all(self) -> int:
        """Run everything scheduled, including actions scheduled while running."""
        executed = 0
        while self._heap:
            executed += self.run_until(self._heap[0][0])
        return executed

    def deadlines(self) -> list[timedelta]:
        """Pending deadlines in execution order."""
        return [entry[0] for entry in sorted(self._heap)]

    @property
    def pending(self) -> int:
        return len(self._heap)
