"""Clocks, repeating timers and the display-only view timer."""

from __future__ import annotations

import threading
from typing import Callable, Protocol, runtime_checkable

import pendulum
import structlog


@runtime_checkable
class Clock(Protocol):
    """Source of absolute time in epoch milliseconds."""

    def now_ms(self) -> int:
        """Return the current time in milliseconds since the epoch."""


@runtime_checkable
class TimerHandle(Protocol):
    def cancel(self) -> None:
        """Stop the timer. Callbacks never run after this returns."""


@runtime_checkable
class Scheduler(Protocol):
    """Factory for cancellable repeating wake-ups."""

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        """Invoke ``callback`` every ``interval_ms`` until cancelled."""


class SystemClock:
    def now_ms(self) -> int:
        return int(pendulum.now("UTC").timestamp() * 1000)


class _RepeatingThread:
    def __init__(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._interval = interval_ms / 1000.0
        self._callback = callback
        self._stopped = threading.Event()
        self._thread = threading.Thread(target=self._run, name="view-timer", daemon=True)
        self._logger = structlog.get_logger(__name__)

    def start(self) -> None:
        self._thread.start()

    def cancel(self) -> None:
        self._stopped.set()

    @property
    def cancelled(self) -> bool:
        return self._stopped.is_set()

    def _run(self) -> None:
        while not self._stopped.wait(self._interval):
            try:
                self._callback()
            except Exception as exc:  # noqa: BLE001
                self._logger.warning("timer.callback_failed", error=str(exc))


class ThreadingScheduler:
    """Run each repeating timer on its own daemon thread."""

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> TimerHandle:
        if interval_ms <= 0:
            raise ValueError(f"Timer interval must be positive, got {interval_ms}")
        timer = _RepeatingThread(interval_ms, callback)
        timer.start()
        return timer


class ViewTimer:
    """Live elapsed-time counter for the candidate currently on screen.

    The counter is for display only; recorded view times are computed from
    timestamps held in the session state. Every ``start`` or ``cancel``
    bumps a generation number so ticks from a superseded timer are dropped.
    """

    def __init__(self, *, clock: Clock, scheduler: Scheduler, interval_ms: int = 100) -> None:
        self._clock = clock
        self._scheduler = scheduler
        self._interval_ms = interval_ms
        self._lock = threading.Lock()
        self._handle: TimerHandle | None = None
        self._generation = 0
        self._shown_at: int | None = None
        self._elapsed_ms = 0

    @property
    def elapsed_ms(self) -> int:
        return self._elapsed_ms

    @property
    def running(self) -> bool:
        return self._handle is not None

    def start(self, shown_at_ms: int) -> None:
        self.cancel()
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._shown_at = shown_at_ms
            self._elapsed_ms = 0
        self._handle = self._scheduler.call_every(
            self._interval_ms, lambda: self._tick(generation)
        )

    def cancel(self) -> None:
        with self._lock:
            self._generation += 1
            self._shown_at = None
            self._elapsed_ms = 0
            handle, self._handle = self._handle, None
        if handle is not None:
            handle.cancel()

    def _tick(self, generation: int) -> None:
        now = self._clock.now_ms()
        with self._lock:
            if generation != self._generation or self._shown_at is None:
                return
            self._elapsed_ms = max(0, now - self._shown_at)
