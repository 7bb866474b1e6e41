"""
Posterior Summaries for Chain Output
"""
import numpy as np
import pandas as pd
from typing import List, Optional, Sequence, Tuple


def effective_sample_size(values: np.ndarray, max_lag: int = 100) -> float:
    """
    Compute effective sample size using autocorrelation.

    ESS = n / (1 + 2 * sum of autocorrelations), summing lags until the
    autocorrelation drops below 0.05.
    """
    values = np.asarray(values, dtype=float)
    n = len(values)

    if n < 10:
        return float(n)

    mean = np.mean(values)
    var = np.var(values)

    if var < 1e-10:
        return float(n)

    max_lag = min(max_lag, n // 2)
    rho_sum = 0.0

    for lag in range(1, max_lag):
        cov = np.mean((values[:-lag] - mean) * (values[lag:] - mean))
        rho = cov / var

        if rho < 0.05:
            break
        rho_sum += rho

    return n / (1 + 2 * rho_sum)


def hdi(values: np.ndarray, cred: float = 0.95) -> Tuple[float, float]:
    """Highest density interval of one-dimensional samples"""
    values = np.asarray(values, dtype=float)
    if values.size == 0:
        return 0.0, 1.0
    sorted_vals = np.sort(values)
    n = len(sorted_vals)
    interval = int(np.floor(cred * n))
    if interval < 1:
        return float(sorted_vals[0]), float(sorted_vals[-1])
    widths = sorted_vals[interval:] - sorted_vals[: n - interval]
    idx = int(np.argmin(widths))
    return float(sorted_vals[idx]), float(sorted_vals[idx + interval])


def summarize_chain(
    samples: np.ndarray,
    names: Optional[Sequence[str]] = None,
    cred: float = 0.95
) -> pd.DataFrame:
    """
    Posterior mean, sd, credible intervals and ESS per parameter.

    Args:
        samples: M x D chain output
        names: Parameter labels (default p1..pD)
        cred: Credible mass for both intervals

    Returns:
        DataFrame indexed by parameter
    """
    samples = np.asarray(samples, dtype=float)
    if samples.ndim == 1:
        samples = samples.reshape(-1, 1)
    D = samples.shape[1]
    names: List[str] = list(names) if names is not None else [f"p{d + 1}" for d in range(D)]

    tail = (1 - cred) / 2
    records = []
    for d, name in enumerate(names):
        values = samples[:, d]
        if values.size == 0:
            records.append({'parameter': name, 'n': 0})
            continue
        hdi_low, hdi_high = hdi(values, cred)
        records.append({
            'parameter': name,
            'n': values.size,
            'mean': float(np.mean(values)),
            'sd': float(np.std(values)),
            'ci_lower': float(np.quantile(values, tail)),
            'ci_upper': float(np.quantile(values, 1 - tail)),
            'hdi_lower': hdi_low,
            'hdi_upper': hdi_high,
            'ess': effective_sample_size(values),
        })

    return pd.DataFrame(records).set_index('parameter')
