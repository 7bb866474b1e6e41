"""
Global Configuration for stratsel samplers
"""
from pathlib import Path
from dataclasses import dataclass

# Project paths
PROJECT_ROOT = Path(__file__).parent.parent
OUTPUT_DIR = PROJECT_ROOT / "outputs"
FIGURE_DIR = OUTPUT_DIR / "figures"

# Sentinel marking an unset starting vector (start[0] == -1)
START_SENTINEL = -1.0


@dataclass
class SamplerConfig:
    """Settings shared by the Gibbs and hit-and-run chains"""
    burnin: int = 5                      # Discarded leading iterations
    check_interval: int = 100            # Poll cancellation every N iterations
    start_budget: int = 1000             # Minimum rejection attempts for a start


@dataclass
class CounterConfig:
    """Settings for i.i.d. Monte Carlo counting"""
    batch: int = 10000                   # Samples held in memory per round


@dataclass
class StepwiseConfig:
    """Settings for the block decomposition"""
    burnin: int = 10                     # Burn-in of the conditional Gibbs chains
    samples: int = 10000                 # Default samples per block


# Global instance
SAMPLER_CONFIG = SamplerConfig()
