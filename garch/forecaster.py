import logging
import numpy as np

from models import VolatilityForecast
from .models import GARCHResult


class GARCHForecaster:
    """Multi-step mean and volatility forecasts from a fitted ARMA-GARCH"""

    def __init__(self, horizon: int = 30):
        if horizon < 1:
            raise ValueError(f"Forecast horizon must be positive: {horizon}")
        self.horizon = horizon
        self.logger = logging.getLogger('garch.forecaster')

    def forecast(self, result: GARCHResult, horizon: int = None) -> VolatilityForecast:
        """
        Forecast conditional mean and standard deviation h steps ahead.

        The mean path comes from the ARMA equation, the variance path from
        the analytic forecast of the variance model. Both are returned in
        log-return units.
        """
        if horizon is None:
            horizon = self.horizon
        if horizon < 1:
            raise ValueError(f"Forecast horizon must be positive: {horizon}")

        mean_path = np.asarray(
            result.mean_fit.model.predict(n_periods=horizon), dtype=float
        ) / result.scale

        variance = result.variance_fit.forecast(
            horizon=horizon,
            method='analytic',
            reindex=False
        ).variance.values[-1]
        sigma_path = np.sqrt(np.asarray(variance, dtype=float)) / result.scale

        if np.any(~np.isfinite(sigma_path)) or np.any(sigma_path <= 0):
            raise ValueError(f"Invalid volatility forecast from {result.name}")

        forecast = VolatilityForecast(
            origin=result.returns.index[-1],
            model_name=result.name,
            mean=mean_path,
            sigma=sigma_path
        )

        self.logger.info(
            f"{result.name} {horizon}-day forecast from {forecast.origin:%Y-%m-%d}:\n"
            f"  Mean return T+1: {mean_path[0]:.6f}  T+{horizon}: {mean_path[-1]:.6f}\n"
            f"  Sigma T+1:       {sigma_path[0]:.6f}  T+{horizon}: {sigma_path[-1]:.6f}\n"
            f"  Long-run sigma:  {np.sqrt(result.unconditional_variance):.6f}"
        )
        return forecast
