import sys
from pathlib import Path

# Add project root to Python path
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pandas as pd
import pytest

def simulate_gjr_returns(n: int = 2000,
                         mu: float = 0.04,
                         omega: float = 0.02,
                         alpha: float = 0.03,
                         gamma: float = 0.12,
                         beta: float = 0.88,
                         nu: float = 6.0,
                         seed: int = 42) -> pd.Series:
    """GJR-GARCH(1,1) log-returns with Student-t shocks, simulated in percent"""
    rng = np.random.RandomState(seed)
    burn = 500
    z = rng.standard_t(nu, size=n + burn) * np.sqrt((nu - 2) / nu)

    sigma2 = omega / (1 - alpha - beta - 0.5 * gamma)
    eps = np.zeros(n + burn)
    for t in range(n + burn):
        if t > 0:
            shock = eps[t - 1]
            sigma2 = omega + (alpha + gamma * (shock < 0)) * shock ** 2 + beta * sigma2
        eps[t] = np.sqrt(sigma2) * z[t]

    dates = pd.bdate_range('2016-01-04', periods=n)
    return pd.Series((mu + eps[burn:]) / 100, index=dates, name='log_returns')

def returns_to_prices(returns: pd.Series, start: float = 2000.0) -> pd.Series:
    first = returns.index[0] - pd.offsets.BDay(1)
    log_prices = np.log(start) + np.concatenate([[0.0], np.cumsum(returns.values)])
    index = pd.DatetimeIndex([first]).append(returns.index)
    return pd.Series(np.exp(log_prices), index=index, name='^GSPC')

@pytest.fixture
def gjr_returns():
    """Log-returns with volatility clustering and a leverage effect"""
    return simulate_gjr_returns()

@pytest.fixture
def gjr_prices():
    """Prices whose log-returns follow a GJR-GARCH process"""
    return returns_to_prices(simulate_gjr_returns(n=1200, seed=7))

@pytest.fixture
def white_noise():
    np.random.seed(42)
    dates = pd.bdate_range('2016-01-04', periods=1000)
    return pd.Series(np.random.normal(0, 0.01, len(dates)), index=dates, name='noise')

@pytest.fixture
def integrated_series():
    """I(2) series: no unit-root test can call it stationary"""
    np.random.seed(42)
    dates = pd.bdate_range('2016-01-04', periods=500)
    values = np.cumsum(np.cumsum(np.random.normal(0, 1, len(dates))))
    return pd.Series(values, index=dates, name='integrated')
