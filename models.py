"""Common data models used across the project."""

from dataclasses import dataclass, field
from datetime import datetime
import numpy as np
import pandas as pd
from typing import Dict, Optional, Tuple

@dataclass(frozen=True)
class TestResult:
    """Outcome of a single hypothesis test"""
    __test__ = False  # not a pytest class

    name: str
    statistic: float
    p_value: float
    lags: Optional[int] = None
    significance_level: float = 0.05

    @property
    def reject_null(self) -> bool:
        return self.p_value < self.significance_level

    def __str__(self) -> str:
        lags = f", lags={self.lags}" if self.lags is not None else ""
        verdict = "reject H0" if self.reject_null else "fail to reject H0"
        return (f"{self.name}: statistic={self.statistic:.4f}, "
                f"p-value={self.p_value:.6f}{lags} ({verdict})")

@dataclass(frozen=True)
class StationarityResult:
    """Augmented Dickey-Fuller test outcome. H0: the series has a unit root"""
    series_name: str
    statistic: float
    p_value: float
    lags: int
    nobs: int
    critical_values: Dict[str, float]
    regression: str = 'ct'
    significance_level: float = 0.05

    @property
    def is_stationary(self) -> bool:
        return self.p_value < self.significance_level

    def __str__(self) -> str:
        crit = ", ".join(f"{k}: {v:.3f}" for k, v in self.critical_values.items())
        verdict = "stationary" if self.is_stationary else "NOT stationary"
        return (
            f"Augmented Dickey-Fuller test on {self.series_name}\n"
            f"  Dickey-Fuller = {self.statistic:.4f}, Lag order = {self.lags}, "
            f"p-value = {self.p_value:.4f}\n"
            f"  Critical values: {crit}\n"
            f"  Conclusion: series is {verdict}"
        )

@dataclass(frozen=True)
class SignBiasResult:
    """Engle-Ng sign and size bias tests on standardized residuals"""
    sign_bias: TestResult
    negative_size_bias: TestResult
    positive_size_bias: TestResult
    joint_effect: TestResult

    @property
    def has_asymmetry(self) -> bool:
        return any(t.reject_null for t in self.tests())

    def tests(self) -> Tuple[TestResult, ...]:
        return (self.sign_bias, self.negative_size_bias,
                self.positive_size_bias, self.joint_effect)

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame(
            [{'test': t.name, 't-value': t.statistic, 'prob': t.p_value,
              'sig': t.reject_null} for t in self.tests()]
        ).set_index('test')

@dataclass(frozen=True)
class ResidualDiagnostics:
    """Autocorrelation and heteroskedasticity checks of model residuals"""
    ljung_box: TestResult
    arch_lm: TestResult
    ljung_box_squared: Optional[TestResult] = None
    sign_bias: Optional[SignBiasResult] = None

    @property
    def is_white_noise(self) -> bool:
        return not self.ljung_box.reject_null

    @property
    def is_homoskedastic(self) -> bool:
        return not self.arch_lm.reject_null

@dataclass(frozen=True)
class ArimaResult:
    """Fitted ARIMA mean model"""
    order: Tuple[int, int, int]
    residuals: pd.Series
    aic: float
    bic: float
    model: object  # pmdarima.ARIMA
    box_cox_lambda: Optional[float] = None
    with_intercept: bool = True

    @property
    def label(self) -> str:
        p, d, q = self.order
        drift = " with drift" if self.with_intercept and d == 1 else ""
        mean = " with non-zero mean" if self.with_intercept and d == 0 else ""
        return f"ARIMA({p},{d},{q}){drift}{mean}"

    def summary(self) -> str:
        lines = [f"Series model: {self.label}"]
        if self.box_cox_lambda is not None:
            lines.append(f"Box Cox transformation: lambda = {self.box_cox_lambda:.6f}")
        lines.append(str(self.model.summary()))
        return "\n".join(lines)

@dataclass(frozen=True)
class VolatilityForecast:
    """Mean and conditional volatility forecast, indexed by steps ahead"""
    origin: datetime
    model_name: str
    mean: np.ndarray
    sigma: np.ndarray

    @property
    def horizon(self) -> int:
        return len(self.sigma)

    @property
    def dates(self) -> pd.DatetimeIndex:
        """Business days following the forecast origin"""
        start = pd.Timestamp(self.origin) + pd.offsets.BDay(1)
        return pd.bdate_range(start=start, periods=self.horizon)

    def to_frame(self, trading_days: int = 252) -> pd.DataFrame:
        index = pd.Index([f"T+{h}" for h in range(1, self.horizon + 1)], name='step')
        return pd.DataFrame({
            'date': self.dates,
            'mean': self.mean,
            'sigma': self.sigma,
            'annualized_vol': self.sigma * np.sqrt(trading_days)
        }, index=index)

@dataclass
class AnalysisReport:
    """Everything produced by one run of the pipeline"""
    ticker: str
    price_stationarity: StationarityResult
    arima: ArimaResult
    arima_diagnostics: ResidualDiagnostics
    returns_stationarity: StationarityResult
    returns_summary: Dict[str, float]
    garch_results: Dict[str, object] = field(default_factory=dict)
    comparison: Optional[pd.DataFrame] = None
    preferred_model: Optional[str] = None
    forecast: Optional[VolatilityForecast] = None
