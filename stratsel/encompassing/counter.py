"""
Monte Carlo Counter

Estimates the mass of A x <= b under the unconstrained product-of-betas
(encompassing) prior or posterior by drawing i.i.d. samples in batches
and counting those inside the polytope. Batching bounds memory use.
"""
import warnings
import numpy as np
from typing import Optional

from ..config import CounterConfig
from ..polytope.constraints import Polytope, BinomialData
from ..polytope.membership import count_samples
from ..sampling.cancellation import CancellationToken, should_stop, progress_bar
from ..sampling.chain import check_samples
from ..sampling.truncated_beta import rbeta_mat
from .results import CountResult


class MonteCarloCounter:
    """
    Brute-force counting of encompassing samples inside a polytope.

    Each round draws min(remaining, batch) samples and then reduces the
    remaining budget by the full batch size, so exactly M samples are
    drawn in ceil(M / batch) rounds.
    """

    def __init__(
        self,
        config: Optional[CounterConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.config = config or CounterConfig()
        self.rng = rng or np.random.default_rng()

    def count(
        self,
        data: BinomialData,
        polytope: Polytope,
        M: int,
        batch: Optional[int] = None,
        progress: bool = False,
        token: Optional[CancellationToken] = None
    ) -> CountResult:
        """
        Count encompassing samples inside the polytope.

        Args:
            data: Binomial counts and Beta prior (k = n = 0 for the prior)
            polytope: Constraint system
            M: Total number of samples
            batch: Samples per round (default from config)
            progress: Show a progress bar
            token: Cancellation token polled once per batch

        Returns:
            CountResult with integral = count / M; if cancelled, M is the
            number of samples actually drawn
        """
        M = check_samples(M)
        batch = check_samples(batch or self.config.batch, "batch")
        data.check_polytope(polytope)
        shape1, shape2 = data.posterior_shapes()

        count = 0
        drawn = 0
        todo = M
        cancelled = False

        with progress_bar(-(-M // batch), progress, "Counting samples") as bar:
            while todo > 0:
                if should_stop(token):
                    cancelled = True
                    break
                X = rbeta_mat(min(todo, batch), shape1, shape2, self.rng)
                count += count_samples(X, polytope.A, polytope.b)
                drawn += X.shape[0]
                todo -= batch
                bar.update(1)

        if cancelled:
            warnings.warn(
                f"Counting cancelled after {drawn} of {M} samples",
                RuntimeWarning
            )
            integral = count / drawn if drawn > 0 else np.nan
            return CountResult(integral=integral, count=count, M=drawn, cancelled=True)

        return CountResult(integral=count / M, count=count, M=M)


def count_binomial(
    k,
    n,
    A,
    b,
    prior=(1.0, 1.0),
    M: int = 10000,
    batch: int = 10000,
    progress: bool = False,
    rng: Optional[np.random.Generator] = None,
    token: Optional[CancellationToken] = None
) -> CountResult:
    """Direct Monte Carlo estimate of the mass of A x <= b"""
    data = BinomialData(k, n, prior)
    counter = MonteCarloCounter(CounterConfig(batch=batch), rng=rng)
    return counter.count(data, Polytope(A, b), M, progress=progress, token=token)
