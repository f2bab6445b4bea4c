"""Derivative, evolution and groovy commutator operators.

With ``step`` the transition of the rule family and ``^`` cellwise XOR:

    D(s)  = s ^ step(s)                 cells about to flip
    E(s)  = s ^ D(s)                    equal to step(s)
    G(s)  = D(E(s)) ^ E(D(s))           where the two orders disagree
    G2(s) = G(G(s))

``G(s) == 0`` everywhere means differentiation and evolution commute at ``s``.

Aware rules: the transition also depends on the previous derivative. Every
step taken inside one operator call reuses the single ``prev_derivative``
passed in, on both paths of the commutator. The aware G is therefore an
approximation; it does not track a separate history per path.
"""

import numpy as np
from typing import Any, Iterable

from .automaton import Stepper, stepper
from .rules import LifeRule


def _derivative(st: Stepper, s: np.ndarray) -> np.ndarray:
    return s ^ st.step(s)


def _evolve(st: Stepper, s: np.ndarray) -> np.ndarray:
    return s ^ _derivative(st, s)


def _groovy(st: Stepper, s: np.ndarray) -> np.ndarray:
    d = _derivative(st, s)
    e = _evolve(st, s)
    # Path 1: evolve then differentiate; path 2: differentiate then evolve
    return _derivative(st, e) ^ _evolve(st, d)


def derivative(state: Any, rule, prev_derivative: Any = None) -> np.ndarray:
    """Change mask D(s): 1 where the cell flips on the next step."""
    st = stepper(rule, prev_derivative)
    return _derivative(st, st.coerce(state))


def evolve(state: Any, rule, prev_derivative: Any = None) -> np.ndarray:
    """E(s) = s ^ D(s), identical to one step of the rule."""
    st = stepper(rule, prev_derivative)
    return _evolve(st, st.coerce(state))


def groovy_commutator(state: Any, rule, prev_derivative: Any = None) -> np.ndarray:
    """G(s) = D(E(s)) ^ E(D(s))."""
    st = stepper(rule, prev_derivative)
    return _groovy(st, st.coerce(state))


def second_order_commutator(state: Any, rule, prev_derivative: Any = None) -> np.ndarray:
    """G applied to its own output with the same rule."""
    st = stepper(rule, prev_derivative)
    return _groovy(st, _groovy(st, st.coerce(state)))


def is_transparent(state: Any, rule, prev_derivative: Any = None) -> bool:
    """True when D and E commute at ``state``."""
    return not groovy_commutator(state, rule, prev_derivative).any()


def derivative_2d(grid: Any, birth: Iterable[int], survival: Iterable[int]) -> np.ndarray:
    return derivative(grid, LifeRule(birth, survival))


def evolve_2d(grid: Any, birth: Iterable[int], survival: Iterable[int]) -> np.ndarray:
    return evolve(grid, LifeRule(birth, survival))


def groovy_commutator_2d(grid: Any, birth: Iterable[int], survival: Iterable[int]) -> np.ndarray:
    return groovy_commutator(grid, LifeRule(birth, survival))
