"""
Run Stepwise Encompassing Analysis

Estimates prior and posterior mass of an order-constrained polytope and
reports the Bayes factor of the constrained model against the
encompassing (unconstrained) model.

Input: headerless CSV with one row per inequality; all columns but the last form A,
the last column is b.
"""
import sys
from pathlib import Path
from typing import List, Optional
import numpy as np
import pandas as pd

sys.path.insert(0, str(Path(__file__).parent))

from stratsel.config import OUTPUT_DIR, FIGURE_DIR
from stratsel.encompassing import StepwiseEncompassing
from stratsel.polytope import Polytope, BinomialData
from stratsel.sampling import ConstrainedGibbsSampler, summarize_chain


def load_constraints(csv_path: str) -> Polytope:
    """Read A|b from a headerless CSV file, one row per inequality"""
    df = pd.read_csv(csv_path, header=None)
    values = df.to_numpy(dtype=float)
    return Polytope(values[:, :-1], values[:, -1])


def _parse_vector(text: Optional[str], n_dims: int) -> np.ndarray:
    if not text:
        return np.zeros(n_dims)
    return np.array([float(v) for v in text.split(',')])


def run_encompassing_analysis(
    constraints: str,
    k: Optional[str] = None,
    n: Optional[str] = None,
    prior=(1.0, 1.0),
    n_samples: int = 10000,
    steps: Optional[List[int]] = None,
    batch: int = 10000,
    seed: Optional[int] = None,
    plot: bool = False,
    progress: bool = True
) -> pd.DataFrame:
    """
    Stepwise prior and posterior integrals plus the resulting Bayes factor.

    Args:
        constraints: CSV with A|b
        k, n: Comma-separated binomial counts (default: prior only)
        prior: Beta prior shapes shared by all parameters
        n_samples: Samples per block
        steps: 1-based last rows of the blocks
        batch: Batch size for the first-block counter
        seed: Random seed
        plot: Save chain and block plots
        progress: Show progress bars
    """
    print("=" * 60)
    print("STEPWISE ENCOMPASSING ANALYSIS")
    print("=" * 60)

    polytope = load_constraints(constraints)
    D = polytope.n_dims
    print(f"Constraints: {polytope.n_rows} rows, {D} parameters")
    print(f"Samples per block: {n_samples}")
    print()

    rng = np.random.default_rng(seed)
    estimator = StepwiseEncompassing(rng=rng)

    datasets = {
        'prior': BinomialData.prior_only(D, prior),
        'posterior': BinomialData(_parse_vector(k, D), _parse_vector(n, D), prior),
    }

    tables = []
    results = {}
    for label, data in datasets.items():
        print(f"Estimating {label} mass...")
        result = estimator.estimate(data, polytope, n_samples, steps, batch, progress=progress)
        results[label] = result

        table = result.to_frame()
        table.insert(0, 'distribution', label)
        tables.append(table)
        print(table.to_string(index=False))
        print(f"  integral = {result.integral:.6g}\n")

    df = pd.concat(tables, ignore_index=True)

    OUTPUT_DIR.mkdir(parents=True, exist_ok=True)
    output_path = OUTPUT_DIR / 'stepwise_blocks.csv'
    df.to_csv(output_path, index=False)
    print(f"OK Results saved to: {output_path}")

    prior_mass = results['prior'].integral
    posterior_mass = results['posterior'].integral

    print("\n" + "=" * 60)
    print("SUMMARY")
    print("=" * 60)
    print(f"Prior integral:     {prior_mass:.6g}")
    print(f"Posterior integral: {posterior_mass:.6g}")
    if prior_mass > 0:
        print(f"Bayes factor (constrained vs encompassing): {posterior_mass / prior_mass:.6g}")
    else:
        print("Bayes factor undefined: no prior samples inside the polytope")

    sampler = ConstrainedGibbsSampler(rng=rng)
    chain = sampler.sample(datasets['posterior'], polytope, n_samples, progress=progress)
    print("\nPosterior summary:")
    print(summarize_chain(chain).round(4).to_string())

    if plot:
        from stratsel.visualization import plot_chain, plot_block_estimates

        FIGURE_DIR.mkdir(parents=True, exist_ok=True)
        plot_chain(chain, output_path=FIGURE_DIR / 'posterior_chain.pdf')
        plot_block_estimates(results['posterior'], output_path=FIGURE_DIR / 'posterior_blocks.pdf')
        print(f"\nOK Figures saved to: {FIGURE_DIR}")

    return df


if __name__ == '__main__':
    import argparse

    parser = argparse.ArgumentParser(description="Stepwise Encompassing Analysis")
    parser.add_argument(
        '--constraints', '-c',
        type=str,
        required=True,
        help='Headerless CSV file with A|b (last column is b)'
    )
    parser.add_argument('--k', type=str, default=None, help='Successes, e.g. "3,5,9"')
    parser.add_argument('--n', type=str, default=None, help='Trials, e.g. "10,10,10"')
    parser.add_argument(
        '--prior',
        type=str,
        default='1,1',
        help='Beta prior shapes (default: 1,1)'
    )
    parser.add_argument(
        '--samples', '-m',
        type=int,
        default=10000,
        help='Samples per block (default: 10000)'
    )
    parser.add_argument(
        '--steps', '-s',
        type=str,
        default=None,
        help='1-based last rows of the blocks (e.g. "2,5")'
    )
    parser.add_argument('--batch', type=int, default=10000, help='Counter batch size')
    parser.add_argument('--seed', type=int, default=None, help='Random seed')
    parser.add_argument('--plot', action='store_true', help='Save chain and block figures')
    parser.add_argument('--quiet', action='store_true', help='Hide progress bars')

    args = parser.parse_args()

    steps = [int(s) for s in args.steps.split(',')] if args.steps else None
    prior = tuple(float(p) for p in args.prior.split(','))

    run_encompassing_analysis(
        constraints=args.constraints,
        k=args.k,
        n=args.n,
        prior=prior,
        n_samples=args.samples,
        steps=steps,
        batch=args.batch,
        seed=args.seed,
        plot=args.plot,
        progress=not args.quiet
    )

    print("\n" + "=" * 60)
    print("Analysis complete!")
    print("=" * 60)
