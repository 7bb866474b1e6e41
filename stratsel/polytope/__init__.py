# Polytope Module: constraint system, membership, starting values
from .constraints import Polytope, BinomialData, as_batch
from .membership import inside_ab, count_samples, count_sample
from .starting_point import start_random, is_unset

__all__ = [
    'Polytope',
    'BinomialData',
    'as_batch',
    'inside_ab',
    'count_samples',
    'count_sample',
    'start_random',
    'is_unset',
]
