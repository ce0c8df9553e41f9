"""Pytest configuration and fixtures for dodge engine tests."""

import pytest

from game.dodge.engine import DodgeEngine
from game.dodge.utils import FrameClock


@pytest.fixture
def clock():
    """Deterministic 60 FPS clock."""
    return FrameClock(dt=1 / 60)


@pytest.fixture
def engine(clock):
    """800x600 engine with spawning disabled so tests place enemies by hand."""
    return DodgeEngine(
        width=800,
        height=600,
        player_radius=16.0,
        spawn_base_chance=0.0,
        spawn_chance_per_level=0.0,
        clock=clock,
        seed=42,
    )


@pytest.fixture
def running_engine(engine):
    engine.start()
    return engine
