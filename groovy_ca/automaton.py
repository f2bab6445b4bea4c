"""Single-step transition functions for 1D and 2D automata with toroidal boundaries.

States are uint8 NumPy arrays. Every function returns a new array and leaves
its inputs untouched; all neighbor reads come from the old state.
"""

import numpy as np
from functools import singledispatch
from typing import Any, Callable, Iterable, NamedTuple, Optional

from .errors import InvalidDimensions, InvalidRule, InvalidState
from .rules import (
    AWARE_TABLE_SIZE,
    STANDARD_TABLE_SIZE,
    AwareRule,
    LifeRule,
    StandardRule,
    decode_life_rule,
)


def _as_binary(values: Any) -> np.ndarray:
    try:
        arr = np.asarray(values)
    except ValueError as err:
        raise InvalidDimensions("cells must form a rectangular array") from err
    if arr.dtype == object and any(hasattr(v, "__len__") for v in arr.flat):
        raise InvalidDimensions("cells must form a rectangular array")
    if arr.size and not np.all((arr == 0) | (arr == 1)):
        raise InvalidState("cells must be 0 or 1")
    return arr.astype(np.uint8)


def as_state_1d(state: Any) -> np.ndarray:
    """Coerce a sequence of 0/1 into a fresh 1D uint8 state."""
    arr = _as_binary(state)
    if arr.ndim != 1:
        raise InvalidDimensions(f"1D state must have one axis, got shape {arr.shape}")
    if arr.size == 0:
        raise InvalidDimensions("1D state must contain at least one cell")
    return arr


def as_grid(grid: Any) -> np.ndarray:
    """Coerce rows of 0/1 into a fresh H x W uint8 grid."""
    if not isinstance(grid, np.ndarray):
        widths = {len(row) for row in grid if hasattr(row, "__len__")}
        if len(widths) > 1:
            raise InvalidDimensions(f"grid rows have unequal lengths {sorted(widths)}")
    arr = _as_binary(grid)
    if arr.ndim != 2:
        raise InvalidDimensions(f"grid must have two axes, got shape {arr.shape}")
    if arr.shape[0] == 0 or arr.shape[1] == 0:
        raise InvalidDimensions(f"grid must have at least one row and column, got shape {arr.shape}")
    return arr


def _lookup(table: Any, size: int) -> np.ndarray:
    if hasattr(table, "table"):
        table = table.table
    raw = np.asarray(table)
    if raw.shape != (size,):
        raise InvalidRule(f"lookup table must have {size} entries, got shape {raw.shape}")
    if not np.all((raw == 0) | (raw == 1)):
        raise InvalidRule("lookup table entries must be 0 or 1")
    return raw.astype(np.uint8)


def shift(state: np.ndarray, k: int) -> np.ndarray:
    """Cyclically translate a state by ``k`` cells along its last axis."""
    return np.roll(np.asarray(state), k, axis=-1)


def _step_1d(x: np.ndarray, table: np.ndarray) -> np.ndarray:
    left = np.roll(x, 1)
    right = np.roll(x, -1)
    idx = (left << 2) | (x << 1) | right
    return table[idx]


def _step_aware_1d(x: np.ndarray, prev_derivative: Optional[np.ndarray], table: np.ndarray) -> np.ndarray:
    if prev_derivative is None:
        prev_derivative = np.zeros_like(x)
    elif prev_derivative.shape != x.shape:
        raise InvalidDimensions(
            f"previous derivative shape {prev_derivative.shape} does not match state shape {x.shape}"
        )
    left = np.roll(x, 1)
    right = np.roll(x, -1)
    idx = (left << 3) | (x << 2) | (right << 1) | prev_derivative
    return table[idx]


def count_neighbors(grid: np.ndarray) -> np.ndarray:
    """Count live Moore neighbors for each cell, wrapping at the edges."""
    neighbors = np.zeros(grid.shape, dtype=np.int32)
    for dy in [-1, 0, 1]:
        for dx in [-1, 0, 1]:
            if dy == 0 and dx == 0:
                continue
            neighbors += np.roll(np.roll(grid, dy, axis=0), dx, axis=1)
    return neighbors


def _step_2d(grid: np.ndarray, birth: Iterable[int], survival: Iterable[int]) -> np.ndarray:
    neighbors = count_neighbors(grid)
    new_grid = np.zeros_like(grid)

    # Birth: dead cells with neighbor count in birth set become alive
    for n in birth:
        new_grid |= ((grid == 0) & (neighbors == n)).astype(np.uint8)

    # Survival: live cells with neighbor count in survival set stay alive
    for n in survival:
        new_grid |= ((grid == 1) & (neighbors == n)).astype(np.uint8)

    return new_grid


def step_1d(state: Any, table: Any) -> np.ndarray:
    """One elementary step: cell i reads (state[i-1], state[i], state[i+1]) on a ring."""
    return _step_1d(as_state_1d(state), _lookup(table, STANDARD_TABLE_SIZE))


def step_aware_1d(state: Any, prev_derivative: Any, table: Any) -> np.ndarray:
    """One aware step; the lookup key also carries ``prev_derivative[i]``.

    ``prev_derivative=None`` stands for "no history yet" (all zero).
    """
    prev = None if prev_derivative is None else as_state_1d(prev_derivative)
    return _step_aware_1d(as_state_1d(state), prev, _lookup(table, AWARE_TABLE_SIZE))


def step_2d(grid: Any, birth: Iterable[int], survival: Iterable[int]) -> np.ndarray:
    """One Life-like step on a torus."""
    birth, survival = decode_life_rule(birth, survival)
    return _step_2d(as_grid(grid), birth, survival)


class Stepper(NamedTuple):
    """Step function of one rule family together with its input coercion."""
    coerce: Callable[[Any], np.ndarray]
    step: Callable[[np.ndarray], np.ndarray]

    def __call__(self, state: Any) -> np.ndarray:
        return self.step(self.coerce(state))


@singledispatch
def stepper(rule, prev_derivative=None) -> Stepper:
    """Return the step function for ``rule``.

    For aware rules the given ``prev_derivative`` is bound once and shared by
    every call of the returned stepper.
    """
    raise InvalidRule(f"unsupported rule type {type(rule).__name__}")


@stepper.register
def _(rule: StandardRule, prev_derivative=None) -> Stepper:
    table = rule.table
    return Stepper(as_state_1d, lambda x: _step_1d(x, table))


@stepper.register
def _(rule: AwareRule, prev_derivative=None) -> Stepper:
    table = rule.table
    prev = None if prev_derivative is None else as_state_1d(prev_derivative)
    return Stepper(as_state_1d, lambda x: _step_aware_1d(x, prev, table))


@stepper.register
def _(rule: LifeRule, prev_derivative=None) -> Stepper:
    return Stepper(as_grid, lambda g: _step_2d(g, rule.birth, rule.survival))


def step(state: Any, rule, prev_derivative: Any = None) -> np.ndarray:
    """Advance ``state`` by one step under any rule family."""
    return stepper(rule, prev_derivative)(state)
