# Encompassing Module: Monte Carlo mass of the constrained region
from .results import CountResult, StepwiseResult, wilson_interval
from .counter import MonteCarloCounter, count_binomial
from .stepwise import StepwiseEncompassing, count_stepwise, sort_steps

__all__ = [
    'CountResult',
    'StepwiseResult',
    'wilson_interval',
    'MonteCarloCounter',
    'count_binomial',
    'StepwiseEncompassing',
    'count_stepwise',
    'sort_steps',
]
