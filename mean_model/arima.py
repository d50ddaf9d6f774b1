"""ARIMA mean models built on pmdarima"""

import logging
from typing import Tuple

import numpy as np
import pandas as pd
import pmdarima as pm
from scipy import stats

from diagnostics.residual_tests import arch_lm_test, ljung_box_test
from models import ArimaResult, ResidualDiagnostics

logger = logging.getLogger(__name__)

def fit_auto_arima(prices: pd.Series,
                   box_cox: bool = True,
                   information_criterion: str = 'aicc',
                   max_p: int = 5,
                   max_q: int = 5) -> ArimaResult:
    """
    Select and fit a non-seasonal ARIMA by stepwise search.

    Parameters:
    - prices: positive price series in chronological order
    - box_cox: apply a Box-Cox transform with lambda chosen by maximum
      likelihood before fitting
    - information_criterion: criterion minimised by the stepwise search
    - max_p, max_q: upper bounds of the AR and MA orders

    Residuals are on the transformed scale. The first d residuals of a
    differenced model carry the diffuse initialisation and are dropped.
    """
    y = pd.Series(prices).dropna().astype(float)
    values = y.to_numpy()

    lam = None
    if box_cox:
        if np.any(values <= 0):
            raise ValueError("Box-Cox transform requires strictly positive data")
        values, lam = stats.boxcox(values)
        lam = float(lam)
        logger.info(f"Box-Cox lambda (MLE): {lam:.6f}")

    model = pm.auto_arima(
        values,
        seasonal=False,
        stepwise=True,
        trace=False,
        max_p=max_p,
        max_q=max_q,
        information_criterion=information_criterion,
        suppress_warnings=True,
        error_action='ignore'
    )

    order = tuple(int(o) for o in model.order)
    d = order[1]
    resid = pd.Series(np.asarray(model.resid()), index=y.index, name='residuals').iloc[d:]

    result = ArimaResult(
        order=order,
        residuals=resid,
        aic=float(model.aic()),
        bic=float(model.bic()),
        model=model,
        box_cox_lambda=lam,
        with_intercept=bool(model.with_intercept)
    )
    logger.info(f"Selected {result.label} (AIC={result.aic:.2f}, BIC={result.bic:.2f})")
    return result

def fit_arma(returns: pd.Series,
             order: Tuple[int, int] = (1, 1),
             scale: float = 1.0) -> ArimaResult:
    """
    Fit an ARMA(p, q) with intercept to a stationary series.

    The series is multiplied by `scale` before fitting; residuals and
    parameters stay on that scale.
    """
    y = pd.Series(returns).dropna().astype(float)
    p, q = order

    model = pm.ARIMA(order=(p, 0, q), with_intercept=True, suppress_warnings=True)
    model.fit(y.to_numpy() * scale)

    resid = pd.Series(np.asarray(model.resid()), index=y.index, name='residuals')
    return ArimaResult(
        order=(p, 0, q),
        residuals=resid,
        aic=float(model.aic()),
        bic=float(model.bic()),
        model=model,
        with_intercept=True
    )

def diagnose_residuals(result: ArimaResult,
                       lags: int = 10,
                       arch_lags: int = 10,
                       significance_level: float = 0.05) -> ResidualDiagnostics:
    """
    Ljung-Box (df corrected by p + q) and ARCH LM on ARIMA residuals.

    The Ljung-Box lag order is max(p + q + 3, min(lags, n / 5)) so that the
    test keeps at least 3 degrees of freedom for large ARMA orders.
    """
    p, _, q = result.order
    model_df = p + q
    lb_lags = max(model_df + 3, min(lags, len(result.residuals) // 5))
    diagnostics = ResidualDiagnostics(
        ljung_box=ljung_box_test(
            result.residuals, lags=lb_lags, model_df=model_df,
            significance_level=significance_level
        ),
        arch_lm=arch_lm_test(
            result.residuals, lags=arch_lags, demean=True,
            significance_level=significance_level
        )
    )

    logger.info(f"{result.label} residuals: {diagnostics.ljung_box}")
    logger.info(f"{result.label} residuals: {diagnostics.arch_lm}")
    return diagnostics
