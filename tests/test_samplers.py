"""Tests for the constrained Gibbs and hit-and-run samplers."""

import numpy as np
import pytest

from stratsel.config import SamplerConfig
from stratsel.errors import DimensionMismatch
from stratsel.polytope import Polytope, BinomialData
from stratsel.sampling import (
    CancellationToken,
    ConstrainedGibbsSampler,
    HitAndRunSampler,
    sampling_binomial,
    sampling_hitandrun,
)


# ---------------------------------------------------------------------------
# Gibbs sampler
# ---------------------------------------------------------------------------

class TestConstrainedGibbsSampler:

    def test_every_row_feasible(self, order4_with_box, rng, assert_feasible):
        k = [2, 5, 5, 9]
        n = [10, 10, 10, 10]
        X = sampling_binomial(k, n, order4_with_box.A, order4_with_box.b,
                              prior=(1, 1), M=2000, rng=rng)
        assert X.shape == (2000, 4)
        assert_feasible(X, order4_with_box)

    def test_data_against_order_stays_feasible(self, order3, rng, assert_feasible):
        # Data strongly favour the reverse order
        X = sampling_binomial([18, 10, 2], [20, 20, 20], order3.A, order3.b,
                              M=1000, rng=rng)
        assert_feasible(X, order3)

    def test_uniform_prior_on_order(self, order3, rng):
        # Uniform on x0 <= x1 <= x2: means of order statistics 1/4, 1/2, 3/4
        X = sampling_binomial([0, 0, 0], [0, 0, 0], order3.A, order3.b,
                              M=6000, rng=rng)
        np.testing.assert_allclose(X.mean(axis=0), [0.25, 0.5, 0.75], atol=0.03)

    def test_unconstrained_posterior_mean(self, box3, rng):
        k = np.array([1, 5, 9])
        n = np.array([10, 10, 10])
        X = sampling_binomial(k, n, box3.A, box3.b, prior=(1, 1), M=5000, rng=rng)
        np.testing.assert_allclose(X.mean(axis=0), (k + 1) / (n + 2), atol=0.02)

    def test_explicit_start_with_zero_burnin(self, order3, rng):
        start = np.array([0.1, 0.5, 0.9])
        X = sampling_binomial([0, 0, 0], [0, 0, 0], order3.A, order3.b,
                              M=10, start=start, burnin=0, rng=rng)
        assert X.shape == (10, 3)
        np.testing.assert_array_equal(X[0], start)

    def test_burnin_drops_leading_rows(self, order3):
        start = np.array([0.1, 0.5, 0.9])
        full = sampling_binomial([0, 0, 0], [0, 0, 0], order3.A, order3.b, M=15,
                                 start=start, burnin=0, rng=np.random.default_rng(7))
        trimmed = sampling_binomial([0, 0, 0], [0, 0, 0], order3.A, order3.b, M=10,
                                    start=start, burnin=5, rng=np.random.default_rng(7))
        np.testing.assert_array_equal(trimmed, full[5:])

    def test_reproducible_with_seed(self, order3):
        runs = [
            sampling_binomial([3, 4, 5], [9, 9, 9], order3.A, order3.b, M=50,
                              rng=np.random.default_rng(11))
            for _ in range(2)
        ]
        np.testing.assert_array_equal(runs[0], runs[1])

    def test_conditional_bounds(self):
        polytope = Polytope.order(2)
        sampler = ConstrainedGibbsSampler(rng=np.random.default_rng(0))
        sampler.sample(BinomialData.prior_only(2), polytope, M=1, start=[0.3, 0.7])

        x = np.array([0.3, 0.7])
        assert sampler.conditional_bounds(x, 0) == pytest.approx((0.0, 0.7))
        assert sampler.conditional_bounds(x, 1) == pytest.approx((0.3, 1.0))

    def test_zero_column_is_unbounded(self):
        # Column 1 does not appear in any row
        polytope = Polytope(np.array([[1.0, 0.0]]), np.array([0.4]))
        sampler = ConstrainedGibbsSampler(rng=np.random.default_rng(0))
        sampler.sample(BinomialData.prior_only(2), polytope, M=1, start=[0.2, 0.5])
        assert sampler.conditional_bounds(np.array([0.2, 0.5]), 1) == (0.0, 1.0)

    def test_cancellation_truncates_output(self, order3, assert_feasible):
        token = CancellationToken()
        token.cancel()
        with pytest.warns(RuntimeWarning, match="cancelled after 100 of 1005"):
            X = sampling_binomial([0, 0, 0], [0, 0, 0], order3.A, order3.b, M=1000,
                                  rng=np.random.default_rng(3), token=token)
        assert X.shape == (95, 3)
        assert_feasible(X, order3)

    def test_custom_check_interval(self, order3):
        sampler = ConstrainedGibbsSampler(SamplerConfig(check_interval=10),
                                          rng=np.random.default_rng(3))
        token = CancellationToken(limit=2)
        with pytest.warns(RuntimeWarning):
            X = sampler.sample(BinomialData.prior_only(3), order3, M=500, token=token)
        # polls at 10 and 20 pass, the poll at 30 cancels
        assert X.shape == (30 - 5, 3)

    def test_config_burnin_is_default(self, order3):
        sampler = ConstrainedGibbsSampler(SamplerConfig(burnin=0), rng=np.random.default_rng(4))
        start = np.array([0.2, 0.4, 0.6])
        X = sampler.sample(BinomialData.prior_only(3), order3, M=20, start=start)
        assert X.shape == (20, 3)
        np.testing.assert_array_equal(X[0], start)

    def test_config_fields(self):
        assert set(SamplerConfig.__dataclass_fields__) == {'burnin', 'check_interval', 'start_budget'}

    def test_dimension_mismatch(self, order3):
        with pytest.raises(DimensionMismatch):
            sampling_binomial([1, 1], [2, 2], order3.A, order3.b, M=10)

    def test_invalid_sample_size(self, order3):
        with pytest.raises(DimensionMismatch, match="must be positive"):
            sampling_binomial([0, 0, 0], [0, 0, 0], order3.A, order3.b, M=0)

    def test_negative_burnin(self, order3):
        with pytest.raises(DimensionMismatch, match="burnin must be non-negative"):
            sampling_binomial([0, 0, 0], [0, 0, 0], order3.A, order3.b, M=10, burnin=-3)


# ---------------------------------------------------------------------------
# Hit-and-run sampler
# ---------------------------------------------------------------------------

class TestHitAndRunSampler:

    def test_uniform_on_unit_box(self, box3, rng):
        X = sampling_hitandrun(box3.A, box3.b, M=20000, rng=rng)
        assert X.shape == (20000, 3)
        np.testing.assert_allclose(X.mean(axis=0), 0.5, atol=0.03)
        np.testing.assert_allclose(X.var(axis=0), 1 / 12, atol=0.01)

    def test_every_row_feasible(self, order4_with_box, rng, assert_feasible):
        X = sampling_hitandrun(order4_with_box.A, order4_with_box.b, M=3000, rng=rng)
        assert_feasible(X, order4_with_box)

    def test_ordered_means(self, order4_with_box, rng):
        X = sampling_hitandrun(order4_with_box.A, order4_with_box.b, M=20000, rng=rng)
        np.testing.assert_allclose(X.mean(axis=0), [0.2, 0.4, 0.6, 0.8], atol=0.04)

    def test_step_bounds_contain_zero(self, box3):
        sampler = HitAndRunSampler(rng=np.random.default_rng(5))
        sampler.sample(box3, M=1, start=[0.5, 0.5, 0.5])
        u = np.array([1.0, 0.0, 0.0])
        tmin, tmax = sampler.step_bounds(np.array([0.2, 0.5, 0.5]), u)
        assert tmin == pytest.approx(-0.2)
        assert tmax == pytest.approx(0.8)

    def test_explicit_start(self, box3, rng):
        start = np.array([0.5, 0.5, 0.5])
        X = sampling_hitandrun(box3.A, box3.b, M=5, start=start, burnin=0, rng=rng)
        np.testing.assert_array_equal(X[0], start)

    def test_cancellation(self, box3):
        token = CancellationToken()
        token.cancel()
        with pytest.warns(RuntimeWarning, match="Hit-and-run sampling cancelled"):
            X = sampling_hitandrun(box3.A, box3.b, M=300, rng=np.random.default_rng(1),
                                   token=token)
        assert X.shape == (95, 3)

    def test_negative_burnin(self, box3):
        with pytest.raises(DimensionMismatch, match="burnin must be non-negative"):
            sampling_hitandrun(box3.A, box3.b, M=10, burnin=-1)
