"""Multi-step runs collecting state and operator histories."""

import numpy as np
from dataclasses import dataclass
from typing import Any, Tuple, Union

from .aware import aware_step, no_history
from .automaton import as_grid, as_state_1d
from .metrics import RunMetrics, mean_density
from .operators import derivative, evolve, groovy_commutator, second_order_commutator
from .rules import AwareRule, LifeRule, Rule, StandardRule


@dataclass(frozen=True, eq=False)
class RunResult:
    """Histories of a run: ``steps + 1`` states and ``steps`` of each operator."""
    rule: Rule
    states: Tuple[np.ndarray, ...]
    derivatives: Tuple[np.ndarray, ...]
    groovy: Tuple[np.ndarray, ...]
    second_order: Tuple[np.ndarray, ...]
    metrics: RunMetrics

    @property
    def steps(self) -> int:
        return len(self.derivatives)

    @property
    def final_state(self) -> np.ndarray:
        return self.states[-1]


def _check_steps(steps: int) -> int:
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)) or steps < 1:
        raise ValueError(f"steps must be a positive integer, got {steps!r}")
    return int(steps)


def run_1d(initial: Any, rule: Union[StandardRule, int], steps: int) -> RunResult:
    """Run an elementary automaton, recording D, G and G2 before every step."""
    if not isinstance(rule, StandardRule):
        rule = StandardRule(rule)
    steps = _check_steps(steps)

    state = as_state_1d(initial)
    states = [state]
    d_hist, g_hist, g2_hist = [], [], []
    for _ in range(steps):
        d_hist.append(derivative(state, rule))
        g_hist.append(groovy_commutator(state, rule))
        g2_hist.append(second_order_commutator(state, rule))
        state = evolve(state, rule)
        states.append(state)

    metrics = RunMetrics(
        derivative_density=mean_density(d_hist),
        groovy_density=mean_density(g_hist),
        second_order_density=mean_density(g2_hist),
    )
    return RunResult(rule, tuple(states), tuple(d_hist), tuple(g_hist), tuple(g2_hist), metrics)


def run_aware_1d(initial: Any, rule: AwareRule, steps: int) -> RunResult:
    """Run an aware automaton, threading the previous derivative through every step.

    The recorded G uses the shared-history approximation described in
    :mod:`groovy_ca.operators`. No second-order history is produced.
    """
    steps = _check_steps(steps)

    state = as_state_1d(initial)
    prev = no_history(state)
    states = [state]
    d_hist, g_hist = [], []
    for _ in range(steps):
        g_hist.append(groovy_commutator(state, rule, prev))
        result = aware_step(state, prev, rule)
        d_hist.append(result.derivative)
        state, prev = result.state, result.derivative
        states.append(state)

    metrics = RunMetrics(
        derivative_density=mean_density(d_hist),
        groovy_density=mean_density(g_hist),
    )
    return RunResult(rule, tuple(states), tuple(d_hist), tuple(g_hist), (), metrics)


def run_2d(initial: Any, rule: LifeRule, steps: int) -> RunResult:
    """Run a Life-like automaton, recording D and G before every step."""
    steps = _check_steps(steps)

    grid = as_grid(initial)
    states = [grid]
    d_hist, g_hist = [], []
    for _ in range(steps):
        d_hist.append(derivative(grid, rule))
        g_hist.append(groovy_commutator(grid, rule))
        grid = evolve(grid, rule)
        states.append(grid)

    metrics = RunMetrics(
        derivative_density=mean_density(d_hist),
        groovy_density=mean_density(g_hist),
    )
    return RunResult(rule, tuple(states), tuple(d_hist), tuple(g_hist), (), metrics)


def run(initial: Any, rule: Rule, steps: int) -> RunResult:
    """Dispatch to the run function of the rule's family."""
    if isinstance(rule, AwareRule):
        return run_aware_1d(initial, rule, steps)
    if isinstance(rule, LifeRule):
        return run_2d(initial, rule, steps)
    return run_1d(initial, rule, steps)
