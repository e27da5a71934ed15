from __future__ import annotations

import random
from typing import Callable

import pytest

from hiringstudy.core import CandidatePoolGenerator, SessionController
from hiringstudy.schemas import StudyConfig
from hiringstudy.storage import InMemoryStore


class ManualClock:
    def __init__(self, start_ms: int = 1_700_000_000_000):
        self.now = start_ms

    def now_ms(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


class ManualTimer:
    def __init__(self, interval_ms: int, callback: Callable[[], None]):
        self.interval_ms = interval_ms
        self.callback = callback
        self.cancelled = False
        self._pending = 0

    def cancel(self) -> None:
        self.cancelled = True

    def elapse(self, ms: int) -> None:
        self._pending += ms
        while self._pending >= self.interval_ms and not self.cancelled:
            self._pending -= self.interval_ms
            self.callback()


class ManualScheduler:
    """Fires timers only when ``advance`` is called, moving the clock along."""

    def __init__(self, clock: ManualClock):
        self.clock = clock
        self.timers: list[ManualTimer] = []

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> ManualTimer:
        timer = ManualTimer(interval_ms, callback)
        self.timers.append(timer)
        return timer

    @property
    def active(self) -> list[ManualTimer]:
        return [timer for timer in self.timers if not timer.cancelled]

    def advance(self, ms: int) -> None:
        self.clock.advance(ms)
        for timer in list(self.timers):
            timer.elapse(ms)


class FailingStore:
    def __init__(self) -> None:
        self.attempts = 0

    def put(self, key: str, document: dict) -> None:
        self.attempts += 1
        raise OSError("disk full")


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scheduler(clock: ManualClock) -> ManualScheduler:
    return ManualScheduler(clock)


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def study_config() -> StudyConfig:
    return StudyConfig(total_candidates=12, total_hires=4)


@pytest.fixture
def make_controller(clock, scheduler, store, study_config):
    def _make(config: StudyConfig | None = None, **overrides) -> SessionController:
        cfg = config or study_config
        ids = iter(f"session-{n}" for n in range(1, 100))
        kwargs = {
            "config": cfg,
            "generator": CandidatePoolGenerator(config=cfg, rng=random.Random(7)),
            "clock": clock,
            "scheduler": scheduler,
            "store": store,
            "session_id_factory": lambda: next(ids),
        }
        kwargs.update(overrides)
        return SessionController(**kwargs)

    return _make


@pytest.fixture
def failing_store() -> FailingStore:
    return FailingStore()
