#!/usr/bin/env python
"""
ARMA-GARCH volatility analysis of the S&P 500.
Runs the full sequence: stationarity checks, ARIMA mean model and residual
diagnostics, symmetric and asymmetric GARCH fits, information criteria
comparison and a 30 day risk forecast.
"""
import sys
from pathlib import Path
import logging
from datetime import datetime
from typing import Any, Dict, Optional
import traceback

import pandas as pd

# Add project root to path
project_root = Path(__file__).parent
if str(project_root) not in sys.path:
    sys.path.append(str(project_root))

from config import AnalysisConfig, TRADING_DAYS_PER_YEAR
from data_manager import PriceLoader, PriceValidator
from diagnostics import adf_test, require_stationary
from garch import (GARCHEstimator, GARCHForecaster, compare_models,
                   compute_log_returns, preferred_model, summarize_returns)
from mean_model import diagnose_residuals, fit_auto_arima
from models import AnalysisReport
from utils import ProgressMonitor, VolatilityVisualizer

N_STAGES = 9
FILE_HANDLER = "volatility_analysis_file"
CONSOLE_HANDLER = "volatility_analysis_console"

def setup_logging(output_dir: Path, level: str = 'INFO') -> logging.Logger:
    """
    Configure logging with both file and console handlers

    Parameters:
    -----------
    output_dir : Path
        Directory for log file
    level : str
        Logging level name

    Returns:
    --------
    logging.Logger
        Configured logger
    """
    log_dir = output_dir / "logs"
    log_dir.mkdir(parents=True, exist_ok=True)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = log_dir / f"volatility_analysis_{timestamp}.log"

    # Module loggers (garch.*, mean_model.*, diagnostics.*) propagate to root
    root = logging.getLogger()
    root.setLevel(level)
    for handler in list(root.handlers):
        if handler.get_name() in (FILE_HANDLER, CONSOLE_HANDLER):
            root.removeHandler(handler)
            handler.close()

    file_handler = logging.FileHandler(log_file)
    file_handler.set_name(FILE_HANDLER)
    file_handler.setLevel(level)
    file_handler.setFormatter(
        logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    )

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.set_name(CONSOLE_HANDLER)
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(message)s'))

    root.addHandler(file_handler)
    root.addHandler(console_handler)

    logger = logging.getLogger("volatility_analysis")
    logger.setLevel(level)
    return logger

def initialize_components(config: AnalysisConfig,
                          logger: Optional[logging.Logger] = None) -> Dict:
    """Initialize all analysis components"""
    if logger is None:
        logger = logging.getLogger('volatility_analysis')

    logger.info("Creating data loader...")
    validator = PriceValidator()
    loader = PriceLoader(price_column=config.price_column, validator=validator)

    logger.info("Creating GARCH estimator...")
    estimator = GARCHEstimator(
        return_scale=config.return_scale,
        diagnostic_lags=config.ljung_box_lags,
        arch_lags=config.arch_lags,
        significance_level=config.significance_level
    )

    logger.info("Creating forecaster...")
    forecaster = GARCHForecaster(horizon=config.forecast_horizon)

    logger.info("Creating visualizer...")
    visualizer = VolatilityVisualizer(show=config.show_plots)

    return {
        'loader': loader,
        'validator': validator,
        'estimator': estimator,
        'forecaster': forecaster,
        'visualizer': visualizer
    }

def _advance(monitor: Any, status: str):
    if monitor is not None:
        monitor.update(1, status=status)

def run_analysis(components: Dict, prices: pd.Series, config: AnalysisConfig,
                 output_dir: Path, logger: logging.Logger,
                 monitor: Any = None) -> AnalysisReport:
    """Run the analysis pipeline stage by stage, saving tables and plots"""
    logger.info("Starting analysis pipeline...")
    alpha = config.significance_level

    try:
        components['validator'].check(prices)
        estimator = components['estimator']
        forecaster = components['forecaster']
        visualizer = components['visualizer']

        output_dir.mkdir(parents=True, exist_ok=True)
        plot_dir = output_dir / "plots"
        plot_dir.mkdir(parents=True, exist_ok=True)

        # 1. Prices: non-stationarity
        visualizer.plot_prices(prices, save_path=plot_dir / "prices.png")
        price_adf = adf_test(prices, significance_level=alpha, name=f"{config.ticker} prices")
        logger.info(f"\n{price_adf}")
        if not price_adf.is_stationary:
            logger.info("Prices are NOT stationary: the unit root cannot be rejected")
        _advance(monitor, "price stationarity")

        # 2. Automatic ARIMA on prices
        arima = fit_auto_arima(prices, box_cox=True)
        logger.info(f"\n{arima.summary()}")
        _advance(monitor, "auto ARIMA")

        # 3. ARIMA residuals: autocorrelation and heteroskedasticity
        arima_diag = diagnose_residuals(
            arima,
            lags=config.ljung_box_lags,
            arch_lags=config.arch_lags,
            significance_level=alpha
        )
        visualizer.plot_residual_check(
            arima.residuals,
            title=f"Residuals from {arima.label}",
            save_path=plot_dir / "arima_residuals.png"
        )
        if not arima_diag.is_white_noise:
            logger.info("ARIMA residuals are autocorrelated: the mean model leaves structure behind")
        if not arima_diag.is_homoskedastic:
            logger.info("ARIMA residuals show ARCH effects: variance is not constant")
        _advance(monitor, "ARIMA diagnostics")

        # 4. Log-returns must be stationary before any variance model
        log_returns = compute_log_returns(prices)
        returns_adf = require_stationary(
            log_returns, significance_level=alpha, name=f"{config.ticker} log-returns"
        )
        logger.info(f"\n{returns_adf}")
        returns_summary = summarize_returns(log_returns)
        visualizer.plot_returns(log_returns, save_path=plot_dir / "log_returns.png")
        _advance(monitor, "log-returns")

        report = AnalysisReport(
            ticker=config.ticker,
            price_stationarity=price_adf,
            arima=arima,
            arima_diagnostics=arima_diag,
            returns_stationarity=returns_adf,
            returns_summary=returns_summary
        )

        specs = estimator.default_specs(
            arma_order=config.arma_order,
            garch_order=config.garch_order,
            distribution=config.distribution
        )

        # 5. Symmetric GARCH
        sgarch = estimator.fit(log_returns, specs['sGARCH'])
        report.garch_results[sgarch.name] = sgarch
        logger.info(f"\n{sgarch.summary()}")
        if sgarch.diagnostics.sign_bias.has_asymmetry:
            logger.info("Sign bias test rejects symmetry: fitting an asymmetric model")
        _advance(monitor, "sGARCH")

        # 6. Asymmetric GJR-GARCH
        gjr = estimator.fit(log_returns, specs['gjrGARCH'])
        report.garch_results[gjr.name] = gjr
        logger.info(f"\n{gjr.summary()}")
        leverage = gjr.leverage_effect()
        if leverage['significant']:
            logger.info(
                f"Leverage effect confirmed: gamma1={leverage['gamma']:.4f} "
                f"(p-value {leverage['p_value']:.4f})"
            )
        else:
            logger.info("Leverage term gamma1 is not significant")
        _advance(monitor, "gjrGARCH")

        # 7. Information criteria
        comparison = compare_models(report.garch_results)
        report.comparison = comparison
        report.preferred_model = preferred_model(comparison)
        comparison.to_csv(output_dir / "comparison.csv")
        logger.info(f"\n--- Information criteria (AIC/BIC) ---\n{comparison.to_string()}")
        logger.info(f"Preferred model: {report.preferred_model}")
        _advance(monitor, "model comparison")

        # 8. Plots of the final model
        final = report.garch_results[report.preferred_model]
        visualizer.plot_news_impact(report.garch_results,
                                    save_path=plot_dir / "news_impact.png")
        visualizer.plot_conditional_volatility(final,
                                               save_path=plot_dir / "conditional_sigma.png")
        visualizer.plot_value_at_risk(final, level=config.var_level,
                                      save_path=plot_dir / "value_at_risk.png")
        logger.info(
            f"{config.var_level:.0%} VaR exceedances: {final.var_exceedances(config.var_level)} "
            f"of {final.nobs} (expected {config.var_level * final.nobs:.1f})"
        )
        _advance(monitor, "final model plots")

        # 9. Forecast
        forecast = forecaster.forecast(final, horizon=config.forecast_horizon)
        report.forecast = forecast
        forecast_df = forecast.to_frame(trading_days=TRADING_DAYS_PER_YEAR)
        forecast_df.to_csv(output_dir / "forecast.csv")
        logger.info(f"\n--- Log-return forecast (mean) ---\n{forecast_df['mean'].to_string()}")
        logger.info(f"\n--- Volatility forecast (sigma) ---\n{forecast_df['sigma'].to_string()}")
        visualizer.plot_mean_forecast(forecast, log_returns,
                                      save_path=plot_dir / "forecast_mean.png")
        visualizer.plot_sigma_forecast(forecast, final,
                                       save_path=plot_dir / "forecast_sigma.png")
        _advance(monitor, "forecast")

        summary_file = output_dir / "summary.txt"
        summary_file.write_text(format_report(report))
        logger.info(f"Summary written to {summary_file}")

        logger.info("Pipeline completed successfully")
        return report

    except Exception as e:
        logger.error(f"Error in analysis pipeline: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise

def format_report(report: AnalysisReport) -> str:
    """Plain text summary of a completed analysis"""
    lines = [
        f"Volatility analysis for {report.ticker}",
        "=" * 60,
        str(report.price_stationarity),
        "",
        report.arima.label,
        f"  {report.arima_diagnostics.ljung_box}",
        f"  {report.arima_diagnostics.arch_lm}",
        "",
        str(report.returns_stationarity),
        "",
    ]
    for result in report.garch_results.values():
        lines += [result.summary(), ""]
    if report.comparison is not None:
        lines += ["Information criteria", report.comparison.to_string(), "",
                  f"Preferred model: {report.preferred_model}", ""]
    if report.forecast is not None:
        lines += [f"Forecast ({report.forecast.model_name})",
                  report.forecast.to_frame().to_string()]
    return "\n".join(lines)

def main():
    """Main entry point with configuration and setup"""
    config = AnalysisConfig.from_env()
    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    logger = setup_logging(output_dir, config.log_level)
    logger.info(f"Starting volatility analysis for {config.ticker} from {config.start_date}...")

    components = initialize_components(config, logger)
    monitor = ProgressMonitor(total=N_STAGES, desc="Volatility analysis", logger=logger)
    try:
        prices = components['loader'].get_prices(config)
        run_analysis(components, prices, config, output_dir, logger, monitor)
    except Exception as e:
        logger.error(f"Pipeline failed: {str(e)}")
        logger.error(f"Traceback: {traceback.format_exc()}")
        raise
    finally:
        monitor.close()
        components['visualizer'].close_all()

if __name__ == '__main__':
    main()
