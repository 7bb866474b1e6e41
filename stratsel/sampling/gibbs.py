"""
Constrained Gibbs Sampler for Binomial Data

Posterior sampling for a polytope A x <= b with independent binomial
likelihoods and a conjugate Beta prior. Uniform prior sampling is the
special case k = n = 0 with prior (1, 1).

Algorithm (one iteration):
1. Visit the D coordinates in a fresh random order
2. For coordinate j, fix all others and solve each row for the value of
   x_j that makes it tight; rows with A_rj < 0 give lower bounds, rows
   with A_rj > 0 give upper bounds
3. Draw x_j from the truncated Beta(k_j + a, n_j - k_j + b) full
   conditional on [max lower, min upper]
4. Use the new x_j immediately for the next coordinate
"""
import numpy as np
from typing import List, Optional, Tuple

from ..config import SamplerConfig
from ..polytope.constraints import Polytope, BinomialData
from ..polytope.starting_point import start_random
from .cancellation import CancellationToken
from .chain import MarkovChainSampler, check_samples
from .truncated_beta import rbeta_trunc


class ConstrainedGibbsSampler(MarkovChainSampler):
    """
    Single-site Gibbs sampler with truncated beta full conditionals.

    Each update keeps the current point inside the polytope, so every
    state of the chain is feasible.
    """

    description = "Gibbs sampling"

    def __init__(
        self,
        config: Optional[SamplerConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        super().__init__(config, rng)
        self._polytope: Optional[Polytope] = None
        self._columns: List[Tuple[np.ndarray, np.ndarray, np.ndarray]] = []
        self._shape1: Optional[np.ndarray] = None
        self._shape2: Optional[np.ndarray] = None

    def sample(
        self,
        data: BinomialData,
        polytope: Polytope,
        M: int,
        start=None,
        burnin: Optional[int] = None,
        progress: bool = False,
        token: Optional[CancellationToken] = None
    ) -> np.ndarray:
        """
        Draw M posterior samples inside the polytope.

        Args:
            data: Binomial counts and Beta prior
            polytope: Constraint system
            M: Number of samples to return
            start: Permissible start (None or start[0] == -1: search)
            burnin: Discarded iterations (default from config)
            progress: Show a progress bar
            token: Cancellation token polled every check_interval iterations

        Returns:
            M x D array (fewer rows if cancelled)
        """
        M = check_samples(M)
        data.check_polytope(polytope)

        x0 = start_random(polytope.A, polytope.b, M, start, self.rng,
                          min_attempts=self.config.start_budget)
        self._prepare(data, polytope)
        return self._run_chain(x0, M, burnin, progress, token)

    def _prepare(self, data: BinomialData, polytope: Polytope):
        """Cache the rows that bound each coordinate"""
        self._polytope = polytope
        self._shape1, self._shape2 = data.posterior_shapes()

        self._columns = []
        for j in range(polytope.n_dims):
            coef = polytope.A[:, j]
            rows = np.flatnonzero(coef != 0)
            self._columns.append((rows, coef[rows] < 0, coef[rows] > 0))

    def conditional_bounds(self, x: np.ndarray, j: int) -> Tuple[float, float]:
        """
        Interval for x_j with all other coordinates held at x.

        For every row r with A_rj != 0, x_j may move until
        (b_r - A_r x + A_rj x_j) / A_rj.
        """
        A, b = self._polytope.A, self._polytope.b
        rows, neg, pos = self._columns[j]
        coef = A[rows, j]
        rhs = (b[rows] - A[rows] @ x + coef * x[j]) / coef

        bmin = rhs[neg].max() if neg.any() else 0.0
        bmax = rhs[pos].min() if pos.any() else 1.0
        return float(bmin), float(bmax)

    def _step(self, x: np.ndarray) -> np.ndarray:
        x = x.copy()
        for j in self.rng.permutation(x.shape[0]):
            bmin, bmax = self.conditional_bounds(x, j)
            x[j] = rbeta_trunc(self._shape1[j], self._shape2[j], bmin, bmax, self.rng)
        return x


def sampling_binomial(
    k,
    n,
    A,
    b,
    prior=(1.0, 1.0),
    M: int = 1000,
    start=None,
    burnin: int = 5,
    progress: bool = False,
    rng: Optional[np.random.Generator] = None,
    token: Optional[CancellationToken] = None
) -> np.ndarray:
    """
    Posterior samples for binomial data constrained to A x <= b.

    Returns:
        M x D array (rows: iterations, cols: parameters)
    """
    data = BinomialData(k, n, prior)
    polytope = Polytope(A, b)
    sampler = ConstrainedGibbsSampler(rng=rng)
    return sampler.sample(data, polytope, M, start, burnin, progress, token)
