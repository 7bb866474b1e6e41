"""
Constraint System and Binomial Data

Value types for the inputs shared by every sampler:
- Polytope: linear inequalities A x <= b (R rows, D columns)
- BinomialData: per-coordinate binomial counts k of n with a common Beta prior

Both validate shapes on construction so that samplers fail fast with a
DimensionMismatch before drawing any random numbers.
"""
import numpy as np
from typing import Optional, Tuple
from dataclasses import dataclass

from ..errors import DimensionMismatch


def as_batch(X, n_dims: Optional[int] = None) -> np.ndarray:
    """
    Coerce samples to a 2D float array (rows: replications, cols: dimensions).

    A single length-D vector becomes a 1 x D batch.
    """
    X = np.asarray(X, dtype=float)
    if X.ndim == 1:
        X = X.reshape(1, -1)
    if X.ndim != 2:
        raise DimensionMismatch(f"Samples must be a vector or matrix, got {X.ndim} dimensions")
    if n_dims is not None and X.shape[1] != n_dims:
        raise DimensionMismatch(
            f"Samples have {X.shape[1]} columns but A has {n_dims} columns"
        )
    return X


@dataclass(frozen=True)
class Polytope:
    """Feasible region {x : A x <= b}"""
    A: np.ndarray
    b: np.ndarray

    def __post_init__(self):
        A = np.asarray(self.A, dtype=float)
        b = np.asarray(self.b, dtype=float).ravel()
        if A.ndim == 1:
            A = A.reshape(1, -1)
        if A.ndim != 2:
            raise DimensionMismatch(f"A must be a matrix, got {A.ndim} dimensions")
        if A.shape[0] != b.shape[0]:
            raise DimensionMismatch(
                f"A has {A.shape[0]} rows but b has {b.shape[0]} elements"
            )
        object.__setattr__(self, 'A', A)
        object.__setattr__(self, 'b', b)

    @property
    def n_rows(self) -> int:
        """Number of inequalities R"""
        return self.A.shape[0]

    @property
    def n_dims(self) -> int:
        """Number of parameters D"""
        return self.A.shape[1]

    def rows(self, first: int, last: int) -> 'Polytope':
        """Sub-system of rows first..last (0-based, inclusive)"""
        if first < 0 or last >= self.n_rows or first > last:
            raise DimensionMismatch(
                f"Row range [{first}, {last}] outside constraint system with {self.n_rows} rows"
            )
        return Polytope(self.A[first:last + 1], self.b[first:last + 1])

    @classmethod
    def unit_box(cls, n_dims: int) -> 'Polytope':
        """Rows 0 <= x_d <= 1 for every coordinate"""
        eye = np.eye(n_dims)
        return cls(np.vstack([eye, -eye]), np.concatenate([np.ones(n_dims), np.zeros(n_dims)]))

    @classmethod
    def order(cls, n_dims: int) -> 'Polytope':
        """Monotone order x_0 <= x_1 <= ... <= x_{D-1}"""
        A = np.zeros((n_dims - 1, n_dims))
        for r in range(n_dims - 1):
            A[r, r] = 1.0
            A[r, r + 1] = -1.0
        return cls(A, np.zeros(n_dims - 1))


@dataclass(frozen=True)
class BinomialData:
    """Binomial observations k of n per coordinate with a shared Beta prior"""
    k: np.ndarray
    n: np.ndarray
    prior: Tuple[float, float] = (1.0, 1.0)

    def __post_init__(self):
        k = np.atleast_1d(np.asarray(self.k, dtype=float))
        n = np.atleast_1d(np.asarray(self.n, dtype=float))
        prior = np.asarray(self.prior, dtype=float).ravel()

        if k.ndim != 1 or k.shape != n.shape:
            raise DimensionMismatch(
                f"k has {k.size} elements but n has {n.size} elements"
            )
        if prior.shape[0] != 2:
            raise DimensionMismatch(
                f"prior must have 2 elements (shape1, shape2), got {prior.shape[0]}"
            )
        if np.any(prior <= 0):
            raise DimensionMismatch(f"prior shapes must be positive, got {prior.tolist()}")
        if np.any(k < 0) or np.any(k > n):
            bad = int(np.flatnonzero((k < 0) | (k > n))[0])
            raise DimensionMismatch(
                f"Counts must satisfy 0 <= k <= n (violated at index {bad}: k={k[bad]}, n={n[bad]})"
            )

        object.__setattr__(self, 'k', k)
        object.__setattr__(self, 'n', n)
        object.__setattr__(self, 'prior', prior)

    @property
    def n_dims(self) -> int:
        return self.k.shape[0]

    def posterior_shapes(self) -> Tuple[np.ndarray, np.ndarray]:
        """Beta shapes of the conjugate posterior per coordinate"""
        return self.k + self.prior[0], self.n - self.k + self.prior[1]

    def check_polytope(self, polytope: Polytope):
        """Ensure data and constraints agree on the number of parameters"""
        if polytope.n_dims != self.n_dims:
            raise DimensionMismatch(
                f"A has {polytope.n_dims} columns but k and n have {self.n_dims} elements"
            )

    @classmethod
    def prior_only(cls, n_dims: int, prior=(1.0, 1.0)) -> 'BinomialData':
        """k = n = 0: the posterior equals the prior"""
        return cls(np.zeros(n_dims), np.zeros(n_dims), prior)
