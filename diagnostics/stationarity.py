"""Unit-root testing for price and return series"""

import logging
from typing import Optional

import numpy as np
import pandas as pd
from statsmodels.tsa.stattools import adfuller

from models import StationarityResult

logger = logging.getLogger(__name__)

class StationarityError(ValueError):
    """Raised when a series that must be stationary still has a unit root"""

def default_adf_lags(nobs: int) -> int:
    """Lag order trunc((n-1)^(1/3)) used by the classic ADF specification"""
    return int(np.trunc((nobs - 1) ** (1 / 3)))

def adf_test(series: pd.Series,
             regression: str = 'ct',
             max_lag: Optional[int] = None,
             significance_level: float = 0.05,
             name: Optional[str] = None) -> StationarityResult:
    """
    Augmented Dickey-Fuller test. H0: the series is not stationary.

    Parameters:
    - series: observations in chronological order
    - regression: deterministic terms ('c', 'ct', 'ctt', 'n')
    - max_lag: fixed lag order, trunc((n-1)^(1/3)) when None
    - significance_level: threshold on the p-value
    - name: label used in reports, defaults to the series name
    """
    values = pd.Series(series).dropna()
    if len(values) < 10:
        raise ValueError(f"Too few observations for ADF test: {len(values)}")

    lags = default_adf_lags(len(values)) if max_lag is None else max_lag
    stat, p_value, used_lag, nobs, critical_values = adfuller(
        values.to_numpy(dtype=float),
        maxlag=lags,
        regression=regression,
        autolag=None
    )

    result = StationarityResult(
        series_name=name or str(values.name or 'series'),
        statistic=float(stat),
        p_value=float(p_value),
        lags=int(used_lag),
        nobs=int(nobs),
        critical_values={k: float(v) for k, v in critical_values.items()},
        regression=regression,
        significance_level=significance_level
    )

    logger.info(
        f"ADF on {result.series_name}: stat={result.statistic:.4f}, "
        f"p={result.p_value:.4f}, lags={result.lags} -> "
        f"{'stationary' if result.is_stationary else 'unit root not rejected'}"
    )
    return result

def require_stationary(series: pd.Series, **kwargs) -> StationarityResult:
    """Run adf_test and raise StationarityError if the unit root is not rejected"""
    result = adf_test(series, **kwargs)
    if not result.is_stationary:
        raise StationarityError(
            f"{result.series_name} is not stationary "
            f"(ADF p-value {result.p_value:.4f} >= {result.significance_level})"
        )
    return result
