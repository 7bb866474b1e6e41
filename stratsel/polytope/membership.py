"""
Polytope Membership

Counts the samples that adhere to the constraint A x <= b.
Samples are stored row-wise (rows: replications, cols: D dimensions).
"""
import numpy as np

from .constraints import Polytope, as_batch


def inside_ab(X, A, b, tol: float = 0.0) -> np.ndarray:
    """
    Flag the samples that satisfy every inequality.

    Rows of A are evaluated in order; a sample is dropped from further
    checks at its first violated row.

    Args:
        X: N x D samples (a length-D vector is treated as one sample)
        A: R x D constraint matrix
        b: Length-R right-hand side
        tol: Slack added to b (0 = strict A x <= b)

    Returns:
        Boolean array of length N
    """
    polytope = Polytope(A, b)
    X = as_batch(X, polytope.n_dims)

    inside = np.ones(X.shape[0], dtype=bool)
    for row, rhs in zip(polytope.A, polytope.b):
        idx = np.flatnonzero(inside)
        if idx.size == 0:
            break
        inside[idx] = X[idx] @ row <= rhs + tol
    return inside


def count_samples(X, A, b, tol: float = 0.0) -> int:
    """Number of samples inside the polytope"""
    return int(np.count_nonzero(inside_ab(X, A, b, tol)))


def count_sample(x, A, b, tol: float = 0.0) -> bool:
    """Check whether a single point lies inside the polytope"""
    x = np.asarray(x, dtype=float).ravel()
    return bool(inside_ab(x.reshape(1, -1), A, b, tol)[0])
