from dataclasses import dataclass
import numpy as np
import pandas as pd
from typing import Dict, Optional, Tuple

from models import ArimaResult, ResidualDiagnostics
from .comparison import information_criteria

MODEL_TYPES = ('sGARCH', 'gjrGARCH')

@dataclass(frozen=True)
class GARCHSpec:
    """ARMA mean + GARCH variance specification"""
    model: str = 'sGARCH'  # One of: 'sGARCH', 'gjrGARCH'
    garch_order: Tuple[int, int] = (1, 1)  # (ARCH p, GARCH q)
    arma_order: Tuple[int, int] = (1, 1)
    distribution: str = 't'  # arch names: 'normal', 't', 'skewt', 'ged'

    def __post_init__(self):
        if self.model not in MODEL_TYPES:
            raise ValueError(f"Unknown variance model '{self.model}', expected one of {MODEL_TYPES}")

    @property
    def asymmetric_order(self) -> int:
        """Leverage (o) order passed to arch"""
        return 1 if self.model == 'gjrGARCH' else 0

    @property
    def name(self) -> str:
        p, q = self.arma_order
        gp, gq = self.garch_order
        return f"ARMA({p},{q})-{self.model}({gp},{gq})"

@dataclass(frozen=True)
class GARCHResult:
    """Container for a fitted ARMA-GARCH model, in log-return units"""
    spec: GARCHSpec
    returns: pd.Series
    mean_fit: ArimaResult
    variance_fit: object  # arch ARCHModelResult on scaled ARMA residuals
    scale: float
    diagnostics: ResidualDiagnostics
    significance_level: float = 0.05

    @property
    def name(self) -> str:
        return self.spec.name

    @property
    def nobs(self) -> int:
        return len(self.returns)

    @property
    def residuals(self) -> pd.Series:
        return self.mean_fit.residuals / self.scale

    @property
    def conditional_mean(self) -> pd.Series:
        return (self.returns - self.residuals).rename('conditional_mean')

    @property
    def conditional_volatility(self) -> pd.Series:
        return pd.Series(
            np.asarray(self.variance_fit.conditional_volatility) / self.scale,
            index=self.returns.index,
            name='sigma'
        )

    @property
    def std_resid(self) -> pd.Series:
        return pd.Series(
            np.asarray(self.variance_fit.std_resid),
            index=self.returns.index,
            name='std_resid'
        )

    @property
    def loglikelihood(self) -> float:
        # Change of variables from scaled residuals back to log-returns
        return float(self.variance_fit.loglikelihood + self.nobs * np.log(self.scale))

    @property
    def num_params(self) -> int:
        return len(self._mean_params()) + len(self.variance_fit.params)

    @property
    def converged(self) -> bool:
        return self.variance_fit.convergence_flag == 0

    def _mean_params(self) -> pd.DataFrame:
        res = self.mean_fit.model.arima_res_
        table = pd.DataFrame({
            'Estimate': np.asarray(res.params, dtype=float),
            'Std. Error': np.asarray(res.bse, dtype=float),
            't value': np.asarray(res.tvalues, dtype=float),
            'Pr(>|t|)': np.asarray(res.pvalues, dtype=float)
        }, index=list(res.model.param_names))
        table = table.drop(index='sigma2', errors='ignore')
        if 'intercept' in table.index:
            table.loc['intercept', ['Estimate', 'Std. Error']] /= self.scale
        return table.rename(index=lambda name: name.replace('.L', '').replace('.', ''))

    @property
    def unconditional_mean(self) -> float:
        """Long-run mean return c / (1 - sum(ar)) implied by the ARMA equation"""
        table = self._mean_params()
        c = float(table['Estimate'].get('intercept', 0.0))
        ar = table.loc[[name for name in table.index if name.startswith('ar')], 'Estimate']
        return c / (1 - float(ar.sum()))

    def params(self) -> pd.DataFrame:
        """Optimal parameters of mean and variance equations"""
        fit = self.variance_fit
        variance = pd.DataFrame({
            'Estimate': fit.params,
            'Std. Error': fit.std_err,
            't value': fit.tvalues,
            'Pr(>|t|)': fit.pvalues
        })
        if 'omega' in variance.index:
            variance.loc['omega', ['Estimate', 'Std. Error']] /= self.scale ** 2
        return pd.concat([self._mean_params(), variance])

    def leverage_effect(self) -> Optional[Dict[str, float]]:
        """Gamma estimate of the GJR term, None for symmetric models"""
        if self.spec.asymmetric_order == 0:
            return None
        gamma = float(self.variance_fit.params['gamma[1]'])
        p_value = float(self.variance_fit.pvalues['gamma[1]'])
        return {
            'gamma': gamma,
            'p_value': p_value,
            'significant': bool(gamma > 0 and p_value < self.significance_level)
        }

    def _variance_terms(self) -> Tuple[float, float, float, float]:
        params = self.variance_fit.params
        omega = float(params['omega'])
        alpha = float(params.get('alpha[1]', 0.0))
        gamma = float(params.get('gamma[1]', 0.0))
        beta = float(sum(v for k, v in params.items() if k.startswith('beta[')))
        return omega, alpha, gamma, beta

    @property
    def persistence(self) -> float:
        _, alpha, gamma, beta = self._variance_terms()
        return alpha + beta + 0.5 * gamma

    @property
    def unconditional_variance(self) -> float:
        """Long-run variance of log-returns"""
        omega, _, _, _ = self._variance_terms()
        if self.persistence < 1:
            return omega / (1 - self.persistence) / self.scale ** 2
        return float(np.var(self.residuals))

    def standardized_quantile(self, level: float) -> float:
        """Quantile of the fitted unit-variance innovation distribution"""
        dist = self.variance_fit.model.distribution
        names = dist.parameter_names()
        dist_params = self.variance_fit.params[names].to_numpy() if names else None
        return float(np.asarray(dist.ppf(level, dist_params)).squeeze())

    def value_at_risk(self, level: float = 0.01) -> pd.Series:
        """In-sample conditional VaR: mu_t + sigma_t * q(level)"""
        q = self.standardized_quantile(level)
        var = self.conditional_mean + self.conditional_volatility * q
        return var.rename(f"VaR({level:.0%})")

    def var_exceedances(self, level: float = 0.01) -> int:
        return int((self.returns < self.value_at_risk(level)).sum())

    def news_impact_curve(self, n_points: int = 201, width: float = 5.0) -> pd.DataFrame:
        """
        Conditional variance response to a shock of size e, holding the
        lagged variance at its unconditional level.
        """
        omega, alpha, gamma, beta = self._variance_terms()
        long_run = self.unconditional_variance * self.scale ** 2
        shocks = np.linspace(-width, width, n_points) * np.sqrt(long_run)
        variance = omega + beta * long_run + (alpha + gamma * (shocks < 0)) * shocks ** 2
        return pd.DataFrame({
            'shock': shocks / self.scale,
            'variance': variance / self.scale ** 2
        })

    def summary(self) -> str:
        """Text report of the fit, parameters, criteria and diagnostics"""
        criteria = information_criteria(self)
        diag = self.diagnostics
        lines = [
            "*" + "-" * 35 + "*",
            "*          GARCH Model Fit          *",
            "*" + "-" * 35 + "*",
            "",
            "Conditional Variance Dynamics",
            "-" * 37,
            f"GARCH Model    : {self.spec.model}({self.spec.garch_order[0]},{self.spec.garch_order[1]})",
            f"Mean Model     : ARFIMA({self.spec.arma_order[0]},0,{self.spec.arma_order[1]})",
            f"Distribution   : {self.spec.distribution}",
            f"Observations   : {self.nobs}",
            f"Converged      : {self.converged}",
            "",
            "Optimal Parameters",
            "-" * 37,
            self.params().to_string(float_format=lambda v: f"{v:.6f}"),
            "",
            f"LogLikelihood : {self.loglikelihood:.3f}",
            "",
            "Information Criteria",
            "-" * 37,
        ]
        lines += [f"{name:<13}: {value:.4f}" for name, value in criteria.items()]
        lines += [
            "",
            "Diagnostics on standardized residuals",
            "-" * 37,
            str(diag.ljung_box),
            str(diag.ljung_box_squared),
            str(diag.arch_lm),
        ]
        if diag.sign_bias is not None:
            lines += ["", "Sign Bias Test", "-" * 37, diag.sign_bias.to_frame().to_string()]
        leverage = self.leverage_effect()
        if leverage is not None:
            lines += ["", f"Leverage gamma1 = {leverage['gamma']:.6f} "
                          f"(p-value {leverage['p_value']:.6f})"]
        return "\n".join(lines)
