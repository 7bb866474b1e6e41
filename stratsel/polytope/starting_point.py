"""
Starting Values for Polytope Samplers

Either validates the shape of a caller-supplied start or searches for a
permissible one by rejection sampling in the unit box.
"""
import numpy as np
from typing import Optional

from ..config import SAMPLER_CONFIG, START_SENTINEL
from ..errors import DimensionMismatch, PolytopeEmptyOrUnreachable
from .constraints import Polytope
from .membership import count_sample


def is_unset(start) -> bool:
    """True for None or a vector whose first element is the -1 sentinel"""
    if start is None:
        return True
    start = np.atleast_1d(np.asarray(start, dtype=float))
    return start.size == 0 or start[0] == START_SENTINEL


def start_random(
    A,
    b,
    M: int,
    start=None,
    rng: Optional[np.random.Generator] = None,
    min_attempts: Optional[int] = None
) -> np.ndarray:
    """
    Find permissible starting values.

    If start is unset, uniform points in [0, 1]^D are drawn until one lies
    inside the polytope, for at most max(M, min_attempts) draws; min_attempts
    defaults to SAMPLER_CONFIG.start_budget at call time. Otherwise the
    supplied start is returned unchanged; it is not checked for feasibility.

    Raises:
        PolytopeEmptyOrUnreachable: if the attempt budget is exhausted
        DimensionMismatch: if an explicit start has the wrong length
    """
    polytope = Polytope(A, b)
    D = polytope.n_dims

    if not is_unset(start):
        start = np.array(start, dtype=float).ravel()
        if start.shape[0] != D:
            raise DimensionMismatch(
                f"start has {start.shape[0]} elements but A has {D} columns"
            )
        return start

    rng = rng or np.random.default_rng()
    if min_attempts is None:
        min_attempts = SAMPLER_CONFIG.start_budget
    budget = int(max(M, min_attempts))
    for _ in range(budget):
        candidate = rng.random(D)
        if count_sample(candidate, polytope.A, polytope.b):
            return candidate

    raise PolytopeEmptyOrUnreachable(budget, D)
