"""
Markov Chain Driver for Polytope Samplers

Shared burn-in, cancellation and output trimming for the Gibbs and
hit-and-run samplers. Subclasses implement a single transition _step.
"""
import warnings
import numpy as np
from typing import Optional

from ..config import SamplerConfig
from ..errors import DimensionMismatch
from .cancellation import CancellationToken, should_stop, progress_bar


def check_samples(M, name: str = "M") -> int:
    """Validate a requested number of samples"""
    M = int(M)
    if M < 1:
        raise DimensionMismatch(f"Number of samples {name} must be positive, got {M}")
    return M


def check_burnin(burnin) -> int:
    """Validate the number of discarded leading iterations"""
    burnin = int(burnin)
    if burnin < 0:
        raise DimensionMismatch(f"burnin must be non-negative, got {burnin}")
    return burnin


class MarkovChainSampler:
    """
    Base class: runs M + burnin iterations from a feasible start and
    returns the post-burnin states as an M x D array.
    """

    description = "Sampling"

    def __init__(
        self,
        config: Optional[SamplerConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        self.config = config or SamplerConfig()
        self.rng = rng or np.random.default_rng()

    def _step(self, x: np.ndarray) -> np.ndarray:
        raise NotImplementedError

    def _run_chain(
        self,
        x0: np.ndarray,
        M: int,
        burnin: Optional[int] = None,
        progress: bool = False,
        token: Optional[CancellationToken] = None
    ) -> np.ndarray:
        """
        Iterate the chain.

        Row 0 holds the start; iteration i derives row i from row i-1.
        On cancellation the chain stops at the last completed iteration.

        Returns:
            States after burn-in (rows: iterations, cols: dimensions)
        """
        burnin = check_burnin(self.config.burnin if burnin is None else burnin)
        check_interval = self.config.check_interval
        total = int(M) + burnin

        X = np.empty((total, x0.shape[0]))
        X[0] = x0
        completed = 1

        with progress_bar(total - 1, progress, self.description) as bar:
            for i in range(1, total):
                if i % check_interval == 0 and should_stop(token):
                    break
                X[i] = self._step(X[i - 1])
                completed = i + 1
                bar.update(1)

        if completed < total:
            kept = max(0, completed - burnin)
            warnings.warn(
                f"{self.description} cancelled after {completed} of {total} iterations; "
                f"returning {kept} of {M} requested samples",
                RuntimeWarning
            )

        return X[burnin:completed]
