"""Tests for polytope membership and starting values."""

import numpy as np
import pytest

from stratsel.config import SAMPLER_CONFIG
from stratsel.errors import DimensionMismatch, PolytopeEmptyOrUnreachable
from stratsel.polytope import (
    Polytope,
    BinomialData,
    inside_ab,
    count_samples,
    count_sample,
    start_random,
    is_unset,
)


# ---------------------------------------------------------------------------
# Membership
# ---------------------------------------------------------------------------

class TestInsideAb:

    def test_matches_all_rows_check(self, rng):
        A = rng.normal(size=(6, 4))
        b = rng.normal(size=6) + 1.0
        X = rng.random((500, 4))
        expected = np.all(X @ A.T <= b, axis=1)
        np.testing.assert_array_equal(inside_ab(X, A, b), expected)

    def test_order_constraint(self, order3):
        X = np.array([
            [0.1, 0.2, 0.3],
            [0.3, 0.2, 0.1],
            [0.2, 0.2, 0.2],
            [0.1, 0.5, 0.4],
        ])
        np.testing.assert_array_equal(
            inside_ab(X, order3.A, order3.b), [True, False, True, False]
        )

    def test_vector_is_one_sample(self, order3):
        flags = inside_ab([0.1, 0.2, 0.3], order3.A, order3.b)
        assert flags.shape == (1,)
        assert flags[0]

    def test_tolerance(self):
        A = np.array([[1.0]])
        b = np.array([0.5])
        x = np.array([[0.5 + 1e-12]])
        assert not inside_ab(x, A, b)[0]
        assert inside_ab(x, A, b, tol=1e-9)[0]

    def test_count_samples(self, order3, rng):
        X = rng.random((1000, 3))
        assert count_samples(X, order3.A, order3.b) == int(np.sum(np.all(np.diff(X) >= 0, axis=1)))

    def test_count_single_sample(self, order3):
        assert count_sample(np.array([0.1, 0.5, 0.9]), order3.A, order3.b) is True
        assert count_sample(np.array([0.9, 0.5, 0.1]), order3.A, order3.b) is False

    def test_column_mismatch(self, order3):
        with pytest.raises(DimensionMismatch, match="2 columns but A has 3"):
            inside_ab(np.zeros((4, 2)), order3.A, order3.b)

    def test_row_mismatch(self):
        with pytest.raises(DimensionMismatch, match="3 rows but b has 2"):
            inside_ab(np.zeros((1, 2)), np.ones((3, 2)), np.ones(2))


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

class TestConstraintTypes:

    def test_rows_inclusive(self, order4_with_box):
        block = order4_with_box.rows(2, 4)
        assert block.n_rows == 3
        np.testing.assert_array_equal(block.A, order4_with_box.A[2:5])

    def test_rows_out_of_range(self, order3):
        with pytest.raises(DimensionMismatch):
            order3.rows(0, 2)

    def test_posterior_shapes(self):
        data = BinomialData([3, 0], [10, 4], prior=(0.5, 2.0))
        shape1, shape2 = data.posterior_shapes()
        np.testing.assert_allclose(shape1, [3.5, 0.5])
        np.testing.assert_allclose(shape2, [9.0, 6.0])

    def test_k_larger_than_n(self):
        with pytest.raises(DimensionMismatch, match="index 1"):
            BinomialData([1, 5], [2, 4])

    def test_length_mismatch(self):
        with pytest.raises(DimensionMismatch, match="k has 3 elements but n has 2"):
            BinomialData([1, 1, 1], [2, 2])

    def test_bad_prior(self):
        with pytest.raises(DimensionMismatch):
            BinomialData([1], [2], prior=(1.0,))
        with pytest.raises(DimensionMismatch):
            BinomialData([1], [2], prior=(0.0, 1.0))

    def test_data_polytope_mismatch(self, order3):
        with pytest.raises(DimensionMismatch, match="3 columns but k and n have 2"):
            BinomialData([1, 1], [2, 2]).check_polytope(order3)


# ---------------------------------------------------------------------------
# Starting values
# ---------------------------------------------------------------------------

class TestStartRandom:

    def test_explicit_start_unchanged(self, order3):
        start = np.array([0.2, 0.4, 0.6])
        result = start_random(order3.A, order3.b, 100, start)
        np.testing.assert_array_equal(result, start)

    def test_explicit_start_idempotent(self, order3):
        start = np.array([0.9, 0.1, 0.5])  # infeasible starts are not checked
        first = start_random(order3.A, order3.b, 100, start)
        second = start_random(order3.A, order3.b, 100, first)
        np.testing.assert_array_equal(first, start)
        np.testing.assert_array_equal(second, start)

    def test_sentinel_triggers_search(self, order3, rng):
        start = start_random(order3.A, order3.b, 100, np.array([-1.0, 0, 0]), rng)
        assert start.shape == (3,)
        assert count_sample(start, order3.A, order3.b)
        assert np.all((start >= 0) & (start <= 1))

    def test_none_triggers_search(self, order3, rng):
        start = start_random(order3.A, order3.b, 100, None, rng)
        assert count_sample(start, order3.A, order3.b)

    def test_is_unset(self):
        assert is_unset(None)
        assert is_unset([-1, 0.5])
        assert not is_unset([0.5, -1])

    def test_empty_polytope(self, rng):
        A = np.array([[1.0, 0.0]])
        b = np.array([-1.0])
        with pytest.raises(PolytopeEmptyOrUnreachable, match="after 1000 uniform draws") as info:
            start_random(A, b, 10, None, rng)
        assert info.value.attempts == 1000

    def test_budget_grows_with_m(self, rng):
        A = np.array([[1.0]])
        b = np.array([-1.0])
        with pytest.raises(PolytopeEmptyOrUnreachable) as info:
            start_random(A, b, 2500, None, rng)
        assert info.value.attempts == 2500

    def test_wrong_length_start(self, order3):
        with pytest.raises(DimensionMismatch, match="start has 2 elements"):
            start_random(order3.A, order3.b, 10, [0.1, 0.2])

    def test_budget_follows_global_config(self, rng, monkeypatch):
        A = np.array([[1.0]])
        b = np.array([-1.0])
        monkeypatch.setattr(SAMPLER_CONFIG, 'start_budget', 1500)
        with pytest.raises(PolytopeEmptyOrUnreachable) as info:
            start_random(A, b, 10, None, rng)
        assert info.value.attempts == 1500

    def test_explicit_budget_overrides_config(self, rng):
        A = np.array([[1.0]])
        b = np.array([-1.0])
        with pytest.raises(PolytopeEmptyOrUnreachable) as info:
            start_random(A, b, 10, None, rng, min_attempts=50)
        assert info.value.attempts == 50
