"""
Hit-and-Run Sampler for Uniform Polytope Sampling

Random-direction line sampling inside {x : A x <= b}. Requires the unit
box rows 0 <= x <= 1 to be part of the system: a direction that no row
restricts on one side falls back to the default step range [0, 1].
Less efficient than the coordinate-wise Gibbs sampler, but makes no use
of conjugate structure.
"""
import numpy as np
from typing import Optional, Tuple

from ..config import SamplerConfig
from ..polytope.constraints import Polytope
from ..polytope.starting_point import start_random
from .cancellation import CancellationToken
from .chain import MarkovChainSampler, check_samples


class HitAndRunSampler(MarkovChainSampler):
    """
    Uniform sampler over a 0/1-box bounded polytope.

    Transition:
    1. Draw a direction u uniformly on the unit sphere
    2. Find the step range [tmin, tmax] keeping x + t u feasible
    3. Move to x + t u with t ~ U(tmin, tmax)
    """

    description = "Hit-and-run sampling"

    def __init__(
        self,
        config: Optional[SamplerConfig] = None,
        rng: Optional[np.random.Generator] = None
    ):
        super().__init__(config, rng)
        self._polytope: Optional[Polytope] = None

    def sample(
        self,
        polytope: Polytope,
        M: int,
        start=None,
        burnin: Optional[int] = None,
        progress: bool = False,
        token: Optional[CancellationToken] = None
    ) -> np.ndarray:
        """
        Draw M approximately uniform samples inside the polytope.

        Returns:
            M x D array (fewer rows if cancelled)
        """
        M = check_samples(M)
        x0 = start_random(polytope.A, polytope.b, M, start, self.rng,
                          min_attempts=self.config.start_budget)
        self._polytope = polytope
        return self._run_chain(x0, M, burnin, progress, token)

    def _random_direction(self, n_dims: int) -> np.ndarray:
        """Normalised Gaussian vector (uniform on the sphere)"""
        z = self.rng.standard_normal(n_dims)
        return z / np.linalg.norm(z)

    def step_bounds(self, x: np.ndarray, u: np.ndarray) -> Tuple[float, float]:
        """Range of t for which A (x + t u) <= b"""
        A, b = self._polytope.A, self._polytope.b
        proj = A @ u
        nz = proj != 0
        rhs = (b[nz] - A[nz] @ x) / proj[nz]

        neg = proj[nz] < 0
        pos = proj[nz] > 0
        tmin = rhs[neg].max() if neg.any() else 0.0
        tmax = rhs[pos].min() if pos.any() else 1.0
        if tmin > tmax:
            tmin = tmax = (tmin + tmax) / 2
        return float(tmin), float(tmax)

    def _step(self, x: np.ndarray) -> np.ndarray:
        u = self._random_direction(x.shape[0])
        tmin, tmax = self.step_bounds(x, u)
        return x + self.rng.uniform(tmin, tmax) * u


def sampling_hitandrun(
    A,
    b,
    M: int = 1000,
    start=None,
    burnin: int = 5,
    progress: bool = False,
    rng: Optional[np.random.Generator] = None,
    token: Optional[CancellationToken] = None
) -> np.ndarray:
    """
    Uniform samples inside A x <= b via hit-and-run.

    Returns:
        M x D array (rows: iterations, cols: dimensions)
    """
    sampler = HitAndRunSampler(rng=rng)
    return sampler.sample(Polytope(A, b), M, start, burnin, progress, token)
