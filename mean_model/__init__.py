"""
Conditional mean models: automatic ARIMA order selection on prices and the
fixed-order ARMA mean equation used by the GARCH models.
"""

from .arima import fit_auto_arima, fit_arma, diagnose_residuals

__all__ = ['fit_auto_arima', 'fit_arma', 'diagnose_residuals']
