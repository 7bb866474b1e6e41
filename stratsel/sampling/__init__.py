# Sampling Module: truncated beta draws and polytope MCMC
from .cancellation import CancellationToken
from .truncated_beta import rbeta_trunc, rbeta_mat
from .chain import MarkovChainSampler
from .gibbs import ConstrainedGibbsSampler, sampling_binomial
from .hit_and_run import HitAndRunSampler, sampling_hitandrun
from .diagnostics import summarize_chain, effective_sample_size, hdi

__all__ = [
    'CancellationToken',
    'rbeta_trunc',
    'rbeta_mat',
    'MarkovChainSampler',
    'ConstrainedGibbsSampler',
    'sampling_binomial',
    'HitAndRunSampler',
    'sampling_hitandrun',
    'summarize_chain',
    'effective_sample_size',
    'hdi',
]
