"""History threading for aware automata.

An aware cell looks at whether it changed on the previous step. The caller
carries that information explicitly: step ``t`` consumes the derivative
produced at step ``t - 1`` and hands its own derivative to step ``t + 1``.
The very first step sees no history (all zero).
"""

import numpy as np
from typing import Any, Iterator, NamedTuple, Optional

from .automaton import as_state_1d, step_aware_1d
from .rules import AwareRule


class AwareStep(NamedTuple):
    """Result of one aware step: the next state and the derivative to carry forward."""
    state: np.ndarray
    derivative: np.ndarray


def no_history(state: Any) -> np.ndarray:
    """All-zero previous derivative shaped like ``state``."""
    return np.zeros_like(as_state_1d(state))


def aware_step(state: Any, prev_derivative: Optional[Any], rule: AwareRule) -> AwareStep:
    s = as_state_1d(state)
    nxt = step_aware_1d(s, prev_derivative, rule.table)
    return AwareStep(state=nxt, derivative=s ^ nxt)


def aware_trajectory(initial: Any, rule: AwareRule, steps: int) -> Iterator[AwareStep]:
    """Yield ``steps`` successive aware steps starting from ``initial`` with no history."""
    state = as_state_1d(initial)
    prev = no_history(state)
    for _ in range(steps):
        result = aware_step(state, prev, rule)
        yield result
        state, prev = result.state, result.derivative
