"""
Prepare log-returns for GARCH estimation.
"""

import logging
from typing import Dict

import numpy as np
import pandas as pd
from scipy import stats

logger = logging.getLogger(__name__)

def compute_log_returns(prices: pd.Series) -> pd.Series:
    """
    Log-returns r_t = ln(p_t) - ln(p_{t-1}).

    Args:
        prices: Positive prices in chronological order

    Returns:
        Series one shorter than prices, indexed by the date of p_t
    """
    prices = pd.Series(prices).dropna().astype(float)
    if np.any(prices <= 0):
        raise ValueError("Log-returns require strictly positive prices")

    log_returns = np.log(prices).diff().dropna()
    log_returns.name = 'log_returns'
    return log_returns

def summarize_returns(returns: pd.Series) -> Dict[str, float]:
    """Descriptive statistics of a return series"""
    values = pd.Series(returns).dropna().to_numpy(dtype=float)
    jb_stat, jb_pvalue = stats.jarque_bera(values)

    summary = {
        'nobs': int(len(values)),
        'mean': float(np.mean(values)),
        'std': float(np.std(values, ddof=1)),
        'skewness': float(stats.skew(values)),
        'excess_kurtosis': float(stats.kurtosis(values)),
        'min': float(np.min(values)),
        'max': float(np.max(values)),
        'jarque_bera': float(jb_stat),
        'jarque_bera_pvalue': float(jb_pvalue)
    }

    logger.info(
        f"Log-return statistics:\n"
        f"  Mean: {summary['mean']:.6f}\n"
        f"  Std:  {summary['std']:.6f}\n"
        f"  Skew: {summary['skewness']:.3f}\n"
        f"  Kurt: {summary['excess_kurtosis']:.3f}"
    )
    return summary
