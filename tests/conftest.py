# tests/conftest.py
from __future__ import annotations

import pytest

from plancontext.context.store import ContextStore


class FakeClock:
    def __init__(self, start: float = 1_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture()
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture()
def store(clock: FakeClock) -> ContextStore:
    return ContextStore(default_timeout=600, clock=clock)
