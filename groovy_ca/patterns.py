"""Initial states. Randomness lives here, outside the deterministic step code."""

import numpy as np
from typing import Optional

from .automaton import as_grid
from .errors import InvalidDimensions


BLINKER = np.array([[1, 1, 1]], dtype=np.uint8)
GLIDER = np.array([
    [0, 1, 0],
    [0, 0, 1],
    [1, 1, 1],
], dtype=np.uint8)


def _check_size(*sizes: int):
    for size in sizes:
        if size < 1:
            raise InvalidDimensions(f"dimensions must be positive, got {size}")


def single_cell(width: int) -> np.ndarray:
    """All zero except the center cell."""
    _check_size(width)
    state = np.zeros(width, dtype=np.uint8)
    state[width // 2] = 1
    return state


def random_state(width: int, density: float = 0.5, rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Random 1D state with the given fraction of live cells."""
    _check_size(width)
    if rng is None:
        rng = np.random.default_rng()
    return (rng.random(width) < density).astype(np.uint8)


def random_grid(height: int, width: int, density: float = 0.3,
                rng: Optional[np.random.Generator] = None) -> np.ndarray:
    """Fill grid with random cells at given density."""
    _check_size(height, width)
    if rng is None:
        rng = np.random.default_rng()
    return (rng.random((height, width)) < density).astype(np.uint8)


def place_pattern(grid, pattern, x: int = 0, y: int = 0) -> np.ndarray:
    """Return a copy of ``grid`` with ``pattern`` placed at column ``x``, row ``y`` (wrapping)."""
    new_grid = as_grid(grid)
    pattern = as_grid(pattern)
    height, width = new_grid.shape
    ph, pw = pattern.shape
    for dy in range(ph):
        for dx in range(pw):
            new_grid[(y + dy) % height, (x + dx) % width] = pattern[dy, dx]
    return new_grid
