"""
Result Types for Encompassing Estimates
"""
import numpy as np
import pandas as pd
from typing import Dict, List, Tuple
from dataclasses import dataclass


def wilson_interval(successes: int, total: int, confidence: float = 0.95) -> Tuple[float, float]:
    """
    Wilson score confidence interval for binomial proportion.

    More robust than normal approximation for small samples.
    """
    if total == 0:
        return 0.0, 1.0

    p = successes / total
    z = 1.96 if confidence == 0.95 else 2.576  # z-score

    denominator = 1 + z**2 / total
    center = (p + z**2 / (2 * total)) / denominator
    margin = z * np.sqrt(p * (1 - p) / total + z**2 / (4 * total**2)) / denominator

    lower = max(0.0, center - margin)
    upper = min(1.0, center + margin)

    return lower, upper


@dataclass
class CountResult:
    """Direct Monte Carlo estimate of the polytope mass"""
    integral: float   # count / M
    count: int        # Samples inside the polytope
    M: int            # Samples drawn
    cancelled: bool = False

    def wilson_interval(self, confidence: float = 0.95) -> Tuple[float, float]:
        return wilson_interval(self.count, self.M, confidence)

    def as_dict(self) -> Dict[str, float]:
        return {'integral': self.integral, 'count': self.count, 'M': self.M}


@dataclass
class StepwiseResult:
    """Product of per-block conditional estimates"""
    integral: float
    count: np.ndarray          # Survivors per block
    M: np.ndarray              # Samples per block
    steps: np.ndarray          # 1-based last row of each block
    cancelled: bool = False

    @property
    def n_blocks(self) -> int:
        return len(self.steps)

    def block_estimates(self) -> np.ndarray:
        """count[s] / M[s] for every block; NaN where no samples were drawn"""
        count = np.asarray(self.count, dtype=float)
        M = np.asarray(self.M, dtype=float)
        return np.divide(count, M, out=np.full(count.shape, np.nan), where=M > 0)

    def block_rows(self) -> List[Tuple[int, int]]:
        """(first, last) 1-based row numbers covered by each block"""
        rows = []
        first = 1
        for last in self.steps:
            rows.append((first, int(last)))
            first = int(last) + 1
        return rows

    def to_frame(self, confidence: float = 0.95) -> pd.DataFrame:
        """One row per block with its conditional estimate and Wilson CI"""
        records = []
        for s, (first, last) in enumerate(self.block_rows()):
            lower, upper = wilson_interval(int(self.count[s]), int(self.M[s]), confidence)
            records.append({
                'block': s + 1,
                'first_row': first,
                'last_row': last,
                'count': int(self.count[s]),
                'M': int(self.M[s]),
                'estimate': self.count[s] / self.M[s] if self.M[s] > 0 else np.nan,
                'ci_lower': lower,
                'ci_upper': upper,
            })
        return pd.DataFrame(records)

    def as_dict(self) -> Dict[str, object]:
        return {
            'integral': self.integral,
            'count': self.count,
            'M': self.M,
            'steps': self.steps,
        }
