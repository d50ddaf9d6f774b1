from typing import Dict, Iterable, Optional
import numpy as np
import pandas as pd
from arch import arch_model
import logging

from diagnostics.residual_tests import arch_lm_test, ljung_box_test, sign_bias_test
from mean_model.arima import fit_arma
from models import ResidualDiagnostics
from .models import GARCHResult, GARCHSpec


class GARCHEstimator:
    """Estimates ARMA-GARCH models on log-returns"""

    def __init__(self, return_scale: float = 100.0,
                 diagnostic_lags: int = 10,
                 arch_lags: Optional[int] = None,
                 significance_level: float = 0.05,
                 max_iter: int = 1000):
        """
        Initialize estimator

        Args:
            return_scale: Multiplier applied to returns before estimation
                (100 fits on percentage returns)
            diagnostic_lags: Lags of the Ljung-Box tests
            arch_lags: Lags of the ARCH LM test, diagnostic_lags when None
            significance_level: Threshold used by all tests
            max_iter: Optimizer iteration cap
        """
        self.return_scale = return_scale
        self.diagnostic_lags = diagnostic_lags
        self.arch_lags = arch_lags or diagnostic_lags
        self.significance_level = significance_level
        self.max_iter = max_iter
        self.logger = logging.getLogger('garch.estimator')

    def fit(self, returns: pd.Series, spec: GARCHSpec) -> GARCHResult:
        """
        Two-step estimation: ARMA mean equation, then the conditional
        variance model by maximum likelihood on the ARMA residuals.
        """
        returns = pd.Series(returns).dropna().astype(float)
        if len(returns) < 100:
            raise ValueError(f"Insufficient observations for {spec.name}: {len(returns)} < 100")

        self.logger.info(f"Fitting {spec.name} with {spec.distribution} innovations "
                         f"on {len(returns)} returns")

        mean_fit = fit_arma(returns, order=spec.arma_order, scale=self.return_scale)

        p, q = spec.garch_order
        model = arch_model(
            mean_fit.residuals,
            mean='Zero',
            vol='GARCH',
            p=p,
            o=spec.asymmetric_order,
            q=q,
            dist=spec.distribution,
            rescale=False
        )
        variance_fit = model.fit(
            disp='off',
            show_warning=False,
            options={'maxiter': self.max_iter},
            update_freq=0
        )

        if variance_fit.convergence_flag != 0:
            self.logger.warning(
                f"{spec.name} optimizer did not converge "
                f"(flag={variance_fit.convergence_flag})"
            )

        diagnostics = self._diagnose(variance_fit.std_resid)
        result = GARCHResult(
            spec=spec,
            returns=returns,
            mean_fit=mean_fit,
            variance_fit=variance_fit,
            scale=self.return_scale,
            diagnostics=diagnostics,
            significance_level=self.significance_level
        )

        self.logger.info(
            f"{spec.name} fit:\n"
            f"  LogLik:      {result.loglikelihood:.3f}\n"
            f"  Persistence: {result.persistence:.4f}\n"
            f"  {diagnostics.ljung_box}\n"
            f"  {diagnostics.ljung_box_squared}\n"
            f"  {diagnostics.arch_lm}"
        )
        if diagnostics.sign_bias.has_asymmetry:
            self.logger.info(f"{spec.name}: sign bias test signals asymmetric volatility response")
        return result

    def fit_models(self, returns: pd.Series,
                   specs: Iterable[GARCHSpec]) -> Dict[str, GARCHResult]:
        """Fit each specification on the same returns, keyed by model name"""
        results = {}
        for spec in specs:
            results[spec.name] = self.fit(returns, spec)
        if not results:
            raise ValueError("No model specifications given")
        return results

    def _diagnose(self, std_resid: pd.Series) -> ResidualDiagnostics:
        """Residual tests on standardized residuals z and z^2"""
        lags = self.diagnostic_lags
        alpha = self.significance_level
        return ResidualDiagnostics(
            ljung_box=ljung_box_test(std_resid, lags=lags, significance_level=alpha),
            ljung_box_squared=ljung_box_test(std_resid, lags=lags, squared=True,
                                             significance_level=alpha),
            arch_lm=arch_lm_test(std_resid, lags=self.arch_lags, significance_level=alpha),
            sign_bias=sign_bias_test(std_resid, significance_level=alpha)
        )

    @staticmethod
    def default_specs(arma_order=(1, 1), garch_order=(1, 1),
                      distribution: str = 't') -> Dict[str, GARCHSpec]:
        """Symmetric and asymmetric specifications compared by the analysis"""
        return {
            model: GARCHSpec(model=model, garch_order=tuple(garch_order),
                             arma_order=tuple(arma_order), distribution=distribution)
            for model in ('sGARCH', 'gjrGARCH')
        }
