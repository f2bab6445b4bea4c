"""Groovy Commutator - measure how a cellular automaton's update and change operators fail to commute."""

from .automaton import step, step_1d, step_2d, step_aware_1d
from .errors import InvalidDimensions, InvalidRule, InvalidState
from .metrics import density, mean_density
from .operators import derivative, evolve, groovy_commutator, second_order_commutator
from .rules import AwareRule, LifeRule, MemoryBehavior, StandardRule, lift_to_aware
from .simulation import run, run_1d, run_2d, run_aware_1d

__all__ = [
    "step", "step_1d", "step_2d", "step_aware_1d",
    "InvalidDimensions", "InvalidRule", "InvalidState",
    "density", "mean_density",
    "derivative", "evolve", "groovy_commutator", "second_order_commutator",
    "AwareRule", "LifeRule", "MemoryBehavior", "StandardRule", "lift_to_aware",
    "run", "run_1d", "run_2d", "run_aware_1d",
]
