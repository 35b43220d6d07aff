"""Shared fixtures for the Blackhole Run test suite."""

import random

import pytest

from bhrun.config import GameConfig
from bhrun.game import GameController


class FakeClock:
    """Manually advanced millisecond clock."""

    def __init__(self, start: float = 10_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, ms: float) -> float:
        self.now += ms
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def config():
    """Classic tuning without asteroids, so ship-only scenarios stay isolated."""
    return GameConfig(asteroid_count=0)


@pytest.fixture
def game(config, clock, rng):
    return GameController(config, clock=clock, rng=rng)
