"""
GARCH modeling package for volatility analysis.
Implements ARMA-GARCH estimation, model comparison and forecasting.
"""

from .data_prep import compute_log_returns, summarize_returns
from .estimator import GARCHEstimator
from .forecaster import GARCHForecaster
from .comparison import compare_models, information_criteria, preferred_model
from .models import GARCHResult, GARCHSpec

__all__ = [
    'GARCHEstimator', 'GARCHForecaster', 'GARCHResult', 'GARCHSpec',
    'compute_log_returns', 'summarize_returns',
    'compare_models', 'information_criteria', 'preferred_model'
]
