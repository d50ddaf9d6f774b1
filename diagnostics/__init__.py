"""
Statistical diagnostics for the volatility analysis.
Unit-root tests and residual autocorrelation / heteroskedasticity /
asymmetry tests.
"""

from .stationarity import adf_test, require_stationary, StationarityError
from .residual_tests import ljung_box_test, arch_lm_test, sign_bias_test

__all__ = [
    'adf_test', 'require_stationary', 'StationarityError',
    'ljung_box_test', 'arch_lm_test', 'sign_bias_test'
]
