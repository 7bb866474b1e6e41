"""
Chain and Block-Estimate Plots

1. Trace + marginal histogram per parameter for sampler output
2. Conditional estimate per block of a stepwise run, with Wilson CIs
"""
import numpy as np
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
from typing import Optional, Sequence, Union

from ..encompassing.results import StepwiseResult
from .palette import PALETTE, LINE_STYLES, FILL_STYLES, block_color, apply_paper_style


def plot_chain(
    samples: np.ndarray,
    names: Optional[Sequence[str]] = None,
    output_path: Optional[Union[str, Path]] = None,
    max_params: int = 8
):
    """
    Trace plot (left) and marginal density (right) for each parameter.

    Args:
        samples: M x D chain output
        names: Parameter labels (default p1..pD)
        output_path: Save the figure here if given
        max_params: Plot at most this many parameters

    Returns:
        matplotlib Figure
    """
    samples = np.asarray(samples, dtype=float)
    if samples.ndim == 1:
        samples = samples.reshape(-1, 1)
    D = min(samples.shape[1], max_params)
    names = list(names) if names is not None else [f"p{d + 1}" for d in range(samples.shape[1])]

    fig, axes = plt.subplots(D, 2, figsize=(10, 1.8 * D + 0.6), squeeze=False,
                             gridspec_kw={'width_ratios': [3, 1]})

    for d in range(D):
        values = samples[:, d]
        ax_trace, ax_hist = axes[d]

        ax_trace.plot(values, **LINE_STYLES["trace"])
        ax_trace.axhline(np.mean(values), **LINE_STYLES["mean"])
        ax_trace.set_ylim(0, 1)
        ax_trace.set_ylabel(names[d])
        apply_paper_style(ax_trace)

        sns.histplot(y=values, bins=30, stat='density', ax=ax_hist,
                     color=PALETTE["fill"], edgecolor=PALETTE["aux"], linewidth=0.3)
        ax_hist.set_ylim(0, 1)
        ax_hist.set_ylabel('')
        apply_paper_style(ax_hist)

    axes[-1, 0].set_xlabel('Iteration')
    axes[-1, 1].set_xlabel('Density')
    fig.tight_layout()

    if output_path is not None:
        fig.savefig(output_path, bbox_inches='tight')
    return fig


def plot_block_estimates(
    result: StepwiseResult,
    output_path: Optional[Union[str, Path]] = None,
    confidence: float = 0.95
):
    """
    Conditional probability of each block with its Wilson interval.

    Returns:
        matplotlib Figure
    """
    df = result.to_frame(confidence)

    fig, ax = plt.subplots(figsize=(max(4, 0.8 * len(df) + 2), 3.5))
    x = df['block'].to_numpy()

    ax.fill_between(x, df['ci_lower'], df['ci_upper'], step='mid', **FILL_STYLES["default"])
    ax.scatter(x, df['estimate'], zorder=3, s=30,
               c=[block_color(c) for c in df['count']], edgecolors=PALETTE["baseline"])

    labels = [f"{r.first_row}-{r.last_row}" for r in df.itertuples()]
    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_ylim(0, 1.05)
    ax.set_xlabel('Constraint rows (block)')
    ax.set_ylabel('P(block | previous blocks)')

    title = 'Stepwise encompassing estimate'
    if result.cancelled:
        title += ' (cancelled)'
    else:
        title += f': integral = {result.integral:.3g}'
    ax.set_title(title)
    apply_paper_style(ax)
    fig.tight_layout()

    if output_path is not None:
        fig.savefig(output_path, bbox_inches='tight')
    return fig
