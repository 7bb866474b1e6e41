# Visualization Module: chain traces and stepwise block estimates
from .chain_plots import plot_chain, plot_block_estimates

__all__ = ['plot_chain', 'plot_block_estimates']
