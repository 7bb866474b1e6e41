"""
Host-Facing Entry Points

Plain functions taking arrays and returning arrays or result objects.
Samples are row-wise (rows: replications, cols: parameters); block
boundaries in `steps` are 1-based on input and output. Every function
draws its random numbers from the optional `rng` generator and polls the
optional cancellation `token`.
"""
from .polytope.membership import inside_ab, count_samples
from .polytope.starting_point import start_random
from .sampling.gibbs import sampling_binomial
from .sampling.hit_and_run import sampling_hitandrun
from .encompassing.counter import count_binomial
from .encompassing.stepwise import count_stepwise

__all__ = [
    'inside_ab',
    'count_samples',
    'start_random',
    'sampling_binomial',
    'count_binomial',
    'count_stepwise',
    'sampling_hitandrun',
]
