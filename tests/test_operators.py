import numpy as np
import pytest

from groovy_ca.automaton import shift, step, step_1d
from groovy_ca.errors import InvalidDimensions
from groovy_ca.operators import (
    derivative,
    derivative_2d,
    evolve,
    evolve_2d,
    groovy_commutator,
    groovy_commutator_2d,
    is_transparent,
    second_order_commutator,
)
from groovy_ca.rules import GAME_OF_LIFE, HIGHLIFE, AwareRule, MemoryBehavior, StandardRule


@pytest.mark.parametrize("number", range(256))
def test_evolution_equals_step(number, random_states):
    rule = StandardRule(number)
    for state in random_states:
        np.testing.assert_array_equal(evolve(state, rule), step_1d(state, rule.table))


def test_single_cell_rule_110(seed_state):
    rule = StandardRule(110)
    assert derivative(seed_state, rule).tolist() == [0, 0, 1, 0, 0, 0, 0]
    assert evolve(seed_state, rule).tolist() == [0, 0, 1, 1, 0, 0, 0]
    # D(E(s)) = 0100000, E(D(s)) = 0110000
    assert groovy_commutator(seed_state, rule).tolist() == [0, 0, 1, 0, 0, 0, 0]


def test_derivative_marks_flips(random_states):
    rule = StandardRule(30)
    for state in random_states:
        d = derivative(state, rule)
        np.testing.assert_array_equal(d, (state != step(state, rule)).astype(np.uint8))


@pytest.mark.parametrize("number", [0, 60, 90, 102, 150, 204])
def test_linear_rules_commute(number, random_states):
    rule = StandardRule(number)
    for state in random_states:
        assert is_transparent(state, rule)
        assert not second_order_commutator(state, rule).any()


def test_rule_255_never_commutes(random_states):
    rule = StandardRule(255)
    for state in random_states:
        assert groovy_commutator(state, rule).all()
        assert second_order_commutator(state, rule).all()


@pytest.mark.parametrize("number", [30, 54, 110, 137])
def test_second_order_is_composition(number, random_states):
    rule = StandardRule(number)
    for state in random_states:
        once = groovy_commutator(state, rule)
        np.testing.assert_array_equal(second_order_commutator(state, rule), groovy_commutator(once, rule))


@pytest.mark.parametrize("k", [1, 5, -3])
def test_translation_invariance(k, random_states):
    rule = StandardRule(110)
    for state in random_states:
        shifted = shift(state, k)
        for op in (derivative, evolve, groovy_commutator):
            np.testing.assert_array_equal(op(shifted, rule), shift(op(state, rule), k))


def test_operators_return_new_arrays(seed_state):
    before = seed_state.copy()
    for op in (derivative, evolve, groovy_commutator, second_order_commutator):
        out = op(seed_state, StandardRule(110))
        assert out is not seed_state
    np.testing.assert_array_equal(seed_state, before)


class TestAwareOperators:
    """Aware operators share one previous derivative across both commutator paths."""

    def test_ignore_matches_standard(self, random_states, rng):
        aware = AwareRule.from_standard(110, MemoryBehavior.IGNORE)
        standard = StandardRule(110)
        for state in random_states:
            prev = (rng.random(state.size) < 0.5).astype(np.uint8)
            np.testing.assert_array_equal(derivative(state, aware, prev), derivative(state, standard))
            np.testing.assert_array_equal(
                groovy_commutator(state, aware, prev), groovy_commutator(state, standard)
            )

    def test_evolution_equals_aware_step(self, random_states):
        rule = AwareRule.from_standard(54, MemoryBehavior.INVERT)
        for state in random_states:
            prev = derivative(state, StandardRule(54))
            np.testing.assert_array_equal(evolve(state, rule, prev), step(state, rule, prev))

    def test_shared_history_in_both_paths(self):
        # All-ones history: excite forces every step to ones, whatever the input
        rule = AwareRule.from_standard(0, MemoryBehavior.EXCITE)
        state = np.array([0, 1, 0, 1, 1], dtype=np.uint8)
        prev = np.ones(5, dtype=np.uint8)
        # D(E(s)) = ones ^ ones = 0 and E(D(s)) = ones
        assert groovy_commutator(state, rule, prev).tolist() == [1] * 5

    def test_history_shape_checked(self):
        with pytest.raises(InvalidDimensions):
            groovy_commutator([0, 1, 0], AwareRule(0), [0, 1])


class TestOperators2D:
    """Derivative, evolution and commutator on Life-like grids."""

    def test_still_life_commutes(self):
        grid = np.zeros((6, 6), dtype=np.uint8)
        grid[2:4, 2:4] = 1
        assert not derivative(grid, GAME_OF_LIFE).any()
        assert is_transparent(grid, GAME_OF_LIFE)

    def test_blinker_derivative(self, blinker_grid):
        d = derivative_2d(blinker_grid, [3], [2, 3])
        expected = np.zeros((5, 5), dtype=np.uint8)
        expected[2, 1] = expected[2, 3] = 1
        expected[1, 2] = expected[3, 2] = 1
        np.testing.assert_array_equal(d, expected)

    def test_evolution_equals_step(self, rng):
        for rule in (GAME_OF_LIFE, HIGHLIFE):
            grid = (rng.random((12, 10)) < 0.35).astype(np.uint8)
            np.testing.assert_array_equal(evolve(grid, rule), step(grid, rule))
            np.testing.assert_array_equal(
                evolve_2d(grid, rule.birth, rule.survival), step(grid, rule)
            )

    def test_commutator_definition(self, rng):
        grid = (rng.random((10, 10)) < 0.3).astype(np.uint8)
        d = derivative(grid, GAME_OF_LIFE)
        e = evolve(grid, GAME_OF_LIFE)
        expected = derivative(e, GAME_OF_LIFE) ^ evolve(d, GAME_OF_LIFE)
        np.testing.assert_array_equal(groovy_commutator_2d(grid, [3], [2, 3]), expected)
