# stratsel: Encompassing Bayes factors for order-constrained binomial models
#
# Architecture:
# - polytope/: Constraint system (A x <= b), membership tests, starting values
# - sampling/: Truncated beta draws, Gibbs and hit-and-run samplers, diagnostics
# - encompassing/: Monte Carlo counting and stepwise polytope mass estimation
# - visualization/: Chain and block-estimate plots
# - interface.py: Host-facing entry points

from .errors import DimensionMismatch, PolytopeEmptyOrUnreachable
from .sampling.cancellation import CancellationToken
from .interface import (
    inside_ab,
    count_samples,
    start_random,
    sampling_binomial,
    count_binomial,
    count_stepwise,
    sampling_hitandrun,
)

__version__ = "1.0.0"

__all__ = [
    'DimensionMismatch',
    'PolytopeEmptyOrUnreachable',
    'CancellationToken',
    'inside_ab',
    'count_samples',
    'start_random',
    'sampling_binomial',
    'count_binomial',
    'count_stepwise',
    'sampling_hitandrun',
]
