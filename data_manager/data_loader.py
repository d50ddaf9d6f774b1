"""
Price loader for the volatility analysis.

Downloads daily price history from Yahoo Finance, or reads a pinned CSV copy
of it so that an analysis can be reproduced without network access.
"""

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd
import yfinance as yf

from data_manager.data_validator import PriceValidator

logger = logging.getLogger(__name__)

class PriceLoader:
    def __init__(self, price_column: str = 'Adj Close',
                 validator: Optional[PriceValidator] = None):
        """Initialize loader with the price field to extract."""
        self.price_column = price_column
        self.validator = validator or PriceValidator()

    def fetch_prices(self, ticker: str, start: str,
                     end: Optional[str] = None) -> pd.Series:
        """
        Download daily prices for a ticker.

        Args:
            ticker: Yahoo Finance symbol (e.g. '^GSPC')
            start: First date to request (YYYY-MM-DD)
            end: Last date (exclusive), None for today

        Returns:
            Chronological price series with incomplete rows removed
        """
        logger.info(f"Downloading {ticker} prices from {start} to {end or 'today'}...")
        raw = yf.download(
            ticker,
            start=start,
            end=end,
            auto_adjust=False,
            progress=False
        )

        if raw is None or raw.empty:
            raise ValueError(f"No price data returned for {ticker}")

        # Recent yfinance versions return (field, ticker) columns
        if isinstance(raw.columns, pd.MultiIndex):
            raw.columns = raw.columns.get_level_values(0)

        if self.price_column not in raw.columns:
            raise ValueError(
                f"Column '{self.price_column}' missing from download. "
                f"Available: {list(raw.columns)}"
            )

        prices = self._clean(raw[self.price_column], ticker)
        logger.info(
            f"Downloaded {len(prices)} observations "
            f"({prices.index[0]:%Y-%m-%d} to {prices.index[-1]:%Y-%m-%d})"
        )
        return prices

    def load_prices(self, path: Union[str, Path]) -> pd.Series:
        """Load a price series saved with save_prices."""
        path = Path(path)
        logger.info(f"Reading prices from: {path}")
        df = pd.read_csv(path, index_col=0, parse_dates=True)
        if df.shape[1] < 1:
            raise ValueError(f"No price column found in {path}")
        return self._clean(df.iloc[:, 0], df.columns[0])

    def save_prices(self, prices: pd.Series, path: Union[str, Path]) -> Path:
        """Write prices as a two column CSV (date, ticker)."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        prices.rename_axis('date').to_csv(path, header=True)
        logger.info(f"Saved {len(prices)} prices to {path}")
        return path

    def get_prices(self, config) -> pd.Series:
        """Load prices for an AnalysisConfig, preferring the pinned dataset."""
        data_file = config.data_file
        if data_file is not None and Path(data_file).exists():
            prices = self.load_prices(data_file)
        else:
            prices = self.fetch_prices(config.ticker, config.start_date, config.end_date)
            if data_file is not None:
                self.save_prices(prices, data_file)

        self.validator.check(prices)
        return prices

    def _clean(self, series: pd.Series, name) -> pd.Series:
        """Drop incomplete rows and order chronologically"""
        series = pd.to_numeric(series, errors='coerce')
        n_missing = int(series.isna().sum())
        if n_missing:
            logger.warning(f"Removing {n_missing} rows with missing prices")
        series = series.dropna()
        series.index = pd.DatetimeIndex(series.index)
        series = series[~series.index.duplicated(keep='last')].sort_index()
        series.name = name
        return series
