"""
Truncated Beta Sampling

Draws from Beta(shape1, shape2) restricted to [lower, upper] with the
inverse-CDF method on the upper tail (survival function), which keeps
precision when the interval sits in the right tail.
"""
import numpy as np
from typing import Optional
from scipy.special import betaincc, betainccinv


def _clamp_interval(lower: float, upper: float):
    """Intersect with the beta support and collapse inverted intervals"""
    lower = min(max(lower, 0.0), 1.0)
    upper = min(max(upper, 0.0), 1.0)
    if lower > upper:
        mid = (lower + upper) / 2
        lower = upper = mid
    return lower, upper


def rbeta_trunc(
    shape1: float,
    shape2: float,
    lower: float,
    upper: float,
    rng: Optional[np.random.Generator] = None
) -> float:
    """
    Sample one value from a truncated beta distribution.

    Args:
        shape1, shape2: Beta shape parameters (> 0)
        lower, upper: Truncation bounds; lower > upper from rounding
            error is clamped to a zero-width interval at the midpoint

    Returns:
        A value in [lower, upper] (exactly lower if the interval has
        zero width)
    """
    rng = rng or np.random.default_rng()
    lower, upper = _clamp_interval(float(lower), float(upper))
    u = rng.random()
    if lower == upper:
        return lower

    # Upper-tail probabilities P(X > lower), P(X > upper)
    pmin = betaincc(shape1, shape2, lower)
    pmax = betaincc(shape1, shape2, upper)
    x = betainccinv(shape1, shape2, pmin + u * (pmax - pmin))

    # Both tails can underflow to the same value far from the mode
    if not np.isfinite(x):
        x = (lower + upper) / 2
    return float(min(max(x, lower), upper))


def rbeta_mat(
    n: int,
    shape1,
    shape2,
    rng: Optional[np.random.Generator] = None,
    n_dims: Optional[int] = None
) -> np.ndarray:
    """
    Independent beta draws, one column per coordinate.

    Args:
        n: Number of rows (replications)
        shape1, shape2: Per-column shapes (scalars are broadcast)
        n_dims: Number of columns when both shapes are scalars

    Returns:
        n x D matrix
    """
    rng = rng or np.random.default_rng()
    shape1 = np.atleast_1d(np.asarray(shape1, dtype=float))
    shape2 = np.atleast_1d(np.asarray(shape2, dtype=float))
    D = max(shape1.size, shape2.size, n_dims or 1)
    shape1 = np.broadcast_to(shape1, (D,))
    shape2 = np.broadcast_to(shape2, (D,))
    return rng.beta(shape1, shape2, size=(int(n), D))
