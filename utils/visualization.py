from typing import Dict, Optional
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import seaborn as sns
from pathlib import Path
import logging
from statsmodels.graphics.tsaplots import plot_acf

logger = logging.getLogger(__name__)

class VolatilityVisualizer:
    """Visualization utilities for the ARMA-GARCH analysis"""

    def __init__(self, style: str = 'seaborn-v0_8-whitegrid', show: bool = False):
        """
        Initialize visualizer

        Parameters:
        -----------
        style : str
            Matplotlib style to use.
            Available styles can be listed with `plt.style.available`
        show : bool
            Call plt.show() after each figure is drawn
        """
        try:
            plt.style.use(style)
        except OSError:
            plt.style.use('default')
            logger.warning(f"Style '{style}' not found, using default style")

        self.show = show
        self.colors = plt.rcParams['axes.prop_cycle'].by_key()['color']

    def _finish(self, fig: plt.Figure, save_path: Optional[Path]) -> plt.Figure:
        fig.tight_layout()
        if save_path:
            save_path = Path(save_path)
            save_path.parent.mkdir(parents=True, exist_ok=True)
            fig.savefig(save_path)
            logger.info(f"Saved plot to {save_path}")
        if self.show:
            plt.show()
        return fig

    def plot_prices(self,
                    prices: pd.Series,
                    title: Optional[str] = None,
                    save_path: Optional[Path] = None) -> plt.Figure:
        """Price level over time"""
        if len(prices) == 0:
            raise ValueError("Empty price series")

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(prices.index, prices.values, color=self.colors[0])
        ax.set_xlabel('Date')
        ax.set_ylabel('Price (USD)')
        ax.set_title(title or f"{prices.name} adjusted close")
        return self._finish(fig, save_path)

    def plot_residual_check(self,
                            residuals: pd.Series,
                            lags: int = 30,
                            title: Optional[str] = None,
                            save_path: Optional[Path] = None) -> plt.Figure:
        """
        Residual time plot, ACF and histogram of a fitted mean model

        Parameters:
        -----------
        residuals : Series
            Model residuals indexed by date
        lags : int
            Lags shown in the ACF panel
        """
        fig = plt.figure(figsize=(12, 8))
        gs = fig.add_gridspec(2, 2)

        ax1 = fig.add_subplot(gs[0, :])
        ax1.plot(residuals.index, residuals.values, color=self.colors[0], linewidth=0.8)
        ax1.axhline(y=0, color='k', linestyle='--', alpha=0.5)
        ax1.set_title(title or 'Residuals')

        ax2 = fig.add_subplot(gs[1, 0])
        plot_acf(residuals.dropna(), lags=lags, ax=ax2, zero=False)
        ax2.set_title('ACF')

        ax3 = fig.add_subplot(gs[1, 1])
        sns.histplot(residuals.dropna(), ax=ax3, bins=50, kde=True, stat='density')
        ax3.set_title('Residual Distribution')

        return self._finish(fig, save_path)

    def plot_returns(self,
                     returns: pd.Series,
                     title: Optional[str] = None,
                     save_path: Optional[Path] = None) -> plt.Figure:
        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(returns.index, returns.values, color=self.colors[0], linewidth=0.7)
        ax.axhline(y=0, color='k', linestyle='--', alpha=0.5)
        ax.set_xlabel('Date')
        ax.set_ylabel('Log-return')
        ax.set_title(title or 'Daily log-returns')
        return self._finish(fig, save_path)

    def plot_conditional_volatility(self,
                                    result,
                                    save_path: Optional[Path] = None) -> plt.Figure:
        """Conditional sigma against absolute returns"""
        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(result.returns.index, result.returns.abs().values,
                color='lightgray', linewidth=0.7, label='|returns|')
        sigma = result.conditional_volatility
        ax.plot(sigma.index, sigma.values, color=self.colors[1], label='Conditional sigma')
        ax.set_xlabel('Date')
        ax.set_ylabel('Volatility')
        ax.set_title(f"Conditional SD vs |returns| - {result.name}")
        ax.legend()
        return self._finish(fig, save_path)

    def plot_value_at_risk(self,
                           result,
                           level: float = 0.01,
                           save_path: Optional[Path] = None) -> plt.Figure:
        """Returns with the in-sample conditional VaR and its exceedances"""
        var = result.value_at_risk(level)
        returns = result.returns
        breaches = returns[returns < var]

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(returns.index, returns.values, color='gray', linewidth=0.6, label='Returns')
        ax.plot(var.index, var.values, color=self.colors[0], label=f'VaR {level:.0%}')
        ax.scatter(breaches.index, breaches.values, color='red', s=15, zorder=3,
                   label=f'Exceedances ({len(breaches)})')
        ax.set_xlabel('Date')
        ax.set_ylabel('Log-return')
        ax.set_title(f"Series with {level:.0%} VaR limits - {result.name}")
        ax.legend()
        return self._finish(fig, save_path)

    def plot_news_impact(self,
                         results: Dict[str, object],
                         save_path: Optional[Path] = None) -> plt.Figure:
        """News impact curves of one or more fitted models"""
        if not results:
            raise ValueError("No models to plot")

        fig, ax = plt.subplots(figsize=(10, 6))
        for i, (name, result) in enumerate(results.items()):
            curve = result.news_impact_curve()
            ax.plot(curve['shock'], curve['variance'], label=name,
                    color=self.colors[i % len(self.colors)])
        ax.axvline(x=0, color='k', linestyle='--', alpha=0.5)
        ax.set_xlabel('Shock (epsilon t-1)')
        ax.set_ylabel('Conditional variance (sigma^2 t)')
        ax.set_title('News Impact Curve')
        ax.legend()
        return self._finish(fig, save_path)

    def plot_mean_forecast(self,
                           forecast,
                           returns: pd.Series,
                           n_history: int = 100,
                           save_path: Optional[Path] = None) -> plt.Figure:
        """Recent returns followed by the mean forecast with 2 sigma bands"""
        history = returns.iloc[-n_history:]
        dates = forecast.dates

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(history.index, history.values, color='gray', linewidth=0.8, label='Actual')
        ax.plot(dates, forecast.mean, color=self.colors[1], label='Forecast')
        ax.fill_between(dates,
                        forecast.mean - 2 * forecast.sigma,
                        forecast.mean + 2 * forecast.sigma,
                        color=self.colors[1], alpha=0.2, label='+/- 2 sigma')
        ax.set_xlabel('Date')
        ax.set_ylabel('Log-return')
        ax.set_title(f"Forecast series ({forecast.horizon} days) - {forecast.model_name}")
        ax.legend()
        return self._finish(fig, save_path)

    def plot_sigma_forecast(self,
                            forecast,
                            result,
                            n_history: int = 100,
                            save_path: Optional[Path] = None) -> plt.Figure:
        """Recent conditional sigma followed by the sigma forecast"""
        history = result.conditional_volatility.iloc[-n_history:]
        dates = forecast.dates

        fig, ax = plt.subplots(figsize=(12, 6))
        ax.plot(history.index, history.values, color=self.colors[0], label='In-sample sigma')
        ax.plot(dates, forecast.sigma, color=self.colors[1], marker='.', label='Forecast sigma')
        ax.axhline(y=np.sqrt(result.unconditional_variance), color='k',
                   linestyle='--', alpha=0.5, label='Long-run sigma')
        ax.set_xlabel('Date')
        ax.set_ylabel('Sigma')
        ax.set_title(f"Forecast sigma ({forecast.horizon} days) - {forecast.model_name}")
        ax.legend()
        return self._finish(fig, save_path)

    def close_all(self):
        """Close all open figures"""
        plt.close('all')

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close_all()
