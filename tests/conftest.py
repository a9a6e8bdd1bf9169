"""Shared test fixtures."""

from __future__ import annotations

import pytest

from health_aggregator import Health, HealthCheck, State

# 2017-06-01T12:30:05+0000
BASE_MILLIS = 1_496_320_205_000


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, now: int = BASE_MILLIS) -> None:
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, millis: int) -> None:
        self.now += millis


class CountingCheck(HealthCheck):
    """Object-style check whose result can be flipped; counts evaluations."""

    def __init__(self, name: str = "CountingCheck", state: State = State.UP) -> None:
        self._name = name
        self.state = state
        self.calls = 0

    @property
    def name(self) -> str:
        return self._name

    @property
    def description(self) -> str:
        return f"{self._name} failed"

    def evaluate(self) -> State:
        self.calls += 1
        return self.state


class CountingClosure:
    def __init__(self, state: State = State.UP) -> None:
        self.state = state
        self.calls = 0

    def __call__(self) -> State:
        self.calls += 1
        return self.state


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def health(clock: FakeClock) -> Health:
    """A Health with a 3 s window driven by the fake clock."""
    return Health(status_expiration_ms=3000, clock=clock)
