"""Shared fixtures for the stratsel test suite."""

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from stratsel.polytope import Polytope


@pytest.fixture
def rng():
    return np.random.default_rng(20240601)


@pytest.fixture
def order3():
    """x0 <= x1 <= x2 (2 rows, prior mass 1/6)"""
    return Polytope.order(3)


@pytest.fixture
def box3():
    """0 <= x_d <= 1 for three coordinates"""
    return Polytope.unit_box(3)


@pytest.fixture
def order4_with_box():
    """Unit box rows followed by the order x0 <= x1 <= x2 <= x3"""
    box = Polytope.unit_box(4)
    order = Polytope.order(4)
    return Polytope(np.vstack([box.A, order.A]), np.concatenate([box.b, order.b]))


@pytest.fixture
def assert_feasible():
    """Check that every row of X satisfies A x <= b up to tol"""
    def check(X, polytope, tol=1e-9):
        X = np.atleast_2d(X)
        slack = X @ polytope.A.T - polytope.b
        assert np.all(slack <= tol), f"max violation {slack.max():.3g}"
    return check
