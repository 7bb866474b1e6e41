"""
Stepwise Encompassing Estimate

Splits the rows of A x <= b into ordered blocks and writes the polytope
mass as a product of conditional probabilities:

    P(all rows) = P(block 1) * P(block 2 | block 1) * ... * P(block S | blocks < S)

Block 1 is estimated by brute-force counting of encompassing samples.
Block s > 1 is estimated by Gibbs sampling inside the polytope formed by
all rows up to block s-1 and counting the draws that also satisfy the
rows of block s. Small blocks keep each conditional probability large,
which avoids the vanishing hit rate of direct counting in high dimensions.
"""
import warnings
import numpy as np
from typing import Optional

from ..config import SamplerConfig, CounterConfig, StepwiseConfig
from ..errors import DimensionMismatch
from ..polytope.constraints import Polytope, BinomialData
from ..polytope.membership import count_samples
from ..sampling.cancellation import CancellationToken
from ..sampling.gibbs import ConstrainedGibbsSampler
from .counter import MonteCarloCounter
from .results import StepwiseResult


def sort_steps(steps, max_row: int) -> np.ndarray:
    """
    Add the last row as final step and convert to sorted 0-based indices.

    Args:
        steps: 1-based last rows of the requested blocks
        max_row: Number of rows R

    Returns:
        Sorted unique 0-based block ends, always ending in R - 1
    """
    steps = np.atleast_1d(np.asarray(steps, dtype=float)).ravel()
    if np.any(steps != np.round(steps)):
        raise DimensionMismatch(f"steps must be whole row numbers, got {steps.tolist()}")
    steps = np.append(steps, max_row)
    steps = np.unique(steps - 1).astype(int)

    if steps[0] < 0 or steps[-1] > max_row - 1:
        raise DimensionMismatch(
            f"steps must lie in 1..{max_row} (number of rows in A), "
            f"got {(steps + 1).tolist()}"
        )
    return steps


def broadcast_samples(M, n_blocks: int) -> np.ndarray:
    """Samples per block; a single value applies to every block"""
    M = np.atleast_1d(np.asarray(M, dtype=float)).ravel()
    if M.size == 1:
        M = np.full(n_blocks, M[0])
    if M.size < n_blocks:
        raise DimensionMismatch(
            f"M has {M.size} elements but the steps define {n_blocks} blocks"
        )
    M = M[:n_blocks]
    if np.any(M < 1):
        raise DimensionMismatch(f"Samples per block must be positive, got {M.tolist()}")
    if np.any(M != np.round(M)):
        raise DimensionMismatch(f"Samples per block must be whole numbers, got {M.tolist()}")
    return M


class StepwiseEncompassing:
    """
    Block decomposition of the encompassing integral.

    Blocks are formed from contiguous row groups in the given order; rows
    are never reordered. The product of block estimates assumes the
    conditional estimates combine without further correction.
    """

    def __init__(
        self,
        config: Optional[StepwiseConfig] = None,
        sampler_config: Optional[SamplerConfig] = None,
        counter_config: Optional[CounterConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.config = config or StepwiseConfig()
        self.rng = rng or np.random.default_rng()
        self.counter = MonteCarloCounter(counter_config, rng=self.rng)
        self.sampler = ConstrainedGibbsSampler(sampler_config, rng=self.rng)

    def estimate(
        self,
        data: BinomialData,
        polytope: Polytope,
        M=None,
        steps=None,
        batch: Optional[int] = None,
        start=None,
        progress: bool = False,
        token: Optional[CancellationToken] = None
    ) -> StepwiseResult:
        """
        Estimate the mass of the polytope block by block.

        Args:
            data: Binomial counts and Beta prior (k = n = 0 for the prior)
            polytope: Full constraint system with R rows
            M: Samples per block (scalar or one value per block)
            steps: 1-based last rows of the blocks (R is always added)
            batch: Batch size of the first-block counter
            start: Starting values for the Gibbs chains (None: search)
            progress: Show progress bars
            token: Cancellation token shared by all blocks

        Returns:
            StepwiseResult; integral is NaN if the run was cancelled
        """
        data.check_polytope(polytope)
        R = polytope.n_rows
        steps = sort_steps(R if steps is None else steps, R)
        S = len(steps)
        M = broadcast_samples(self.config.samples if M is None else M, S)

        cnt = np.zeros(S)
        block = self.counter.count(
            data, polytope.rows(0, steps[0]), int(M[0]),
            batch=batch, progress=progress, token=token
        )
        cnt[0] = block.count
        cancelled = block.cancelled
        if cancelled:
            M[0] = block.M

        for s in range(1, S):
            if cancelled:
                break
            sample = self.sampler.sample(
                data, polytope.rows(0, steps[s - 1]), int(M[s]), start,
                burnin=self.config.burnin, progress=progress, token=token
            )
            new_rows = polytope.rows(steps[s - 1] + 1, steps[s])
            if sample.shape[0] > 0:
                cnt[s] = count_samples(sample, new_rows.A, new_rows.b)
            if sample.shape[0] < M[s]:
                cancelled = True
                M[s] = sample.shape[0]

        if cancelled:
            integral = np.nan
        else:
            integral = float(np.prod(cnt / M))
            empty = np.flatnonzero(cnt == 0)
            if empty.size > 0:
                warnings.warn(
                    f"No samples satisfied block(s) {(empty + 1).tolist()}; "
                    f"the integral estimate is zero (increase M or add steps)",
                    RuntimeWarning
                )

        return StepwiseResult(
            integral=integral,
            count=cnt,
            M=M,
            steps=steps + 1,
            cancelled=cancelled
        )


def count_stepwise(
    k,
    n,
    A,
    b,
    prior=(1.0, 1.0),
    M=10000,
    steps=None,
    batch: int = 10000,
    start=None,
    progress: bool = False,
    rng: Optional[np.random.Generator] = None,
    token: Optional[CancellationToken] = None
) -> StepwiseResult:
    """Stepwise estimate of the mass of A x <= b"""
    data = BinomialData(k, n, prior)
    estimator = StepwiseEncompassing(counter_config=CounterConfig(batch=batch), rng=rng)
    return estimator.estimate(data, Polytope(A, b), M, steps, batch, start, progress, token)
