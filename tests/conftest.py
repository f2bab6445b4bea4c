"""
Pytest configuration and fixtures for groovy_ca tests.
"""

import numpy as np
import pytest

from groovy_ca.patterns import BLINKER, place_pattern


@pytest.fixture
def rng() -> np.random.Generator:
    """Seeded generator for reproducible random states."""
    return np.random.default_rng(12345)


@pytest.fixture
def random_states(rng):
    """A handful of random 1D states of assorted widths."""
    return [(rng.random(width) < 0.5).astype(np.uint8) for width in (5, 16, 33, 64)]


@pytest.fixture
def seed_state() -> np.ndarray:
    """Width 7 with only the center cell on."""
    return np.array([0, 0, 0, 1, 0, 0, 0], dtype=np.uint8)


@pytest.fixture
def blinker_grid() -> np.ndarray:
    """Horizontal blinker in the middle of a 5x5 torus."""
    return place_pattern(np.zeros((5, 5), dtype=np.uint8), BLINKER, x=1, y=2)
