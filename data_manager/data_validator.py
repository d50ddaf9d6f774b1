"""
Data validation for daily price series.
"""

import logging
import numpy as np
import pandas as pd
from typing import List, Tuple

logger = logging.getLogger(__name__)

class PriceValidator:
    """Validates a price series before it enters the econometric pipeline."""

    def __init__(self, min_observations: int = 100):
        self.min_observations = min_observations

    def validate(self, prices: pd.Series) -> Tuple[bool, List[str]]:
        """
        Validates a price series.

        Args:
            prices: Series of prices indexed by date

        Returns:
            Tuple of (is_valid, list_of_issues)
        """
        issues = []

        if not isinstance(prices.index, pd.DatetimeIndex):
            issues.append("Index is not a DatetimeIndex")
        else:
            if prices.index.has_duplicates:
                issues.append(f"Found {prices.index.duplicated().sum()} duplicate dates")
            if not prices.index.is_monotonic_increasing:
                issues.append("Dates are not in chronological order")

        n_missing = int(prices.isna().sum())
        if n_missing:
            issues.append(f"Found {n_missing} missing prices")

        values = prices.dropna().to_numpy(dtype=float)
        if np.any(values <= 0):
            issues.append(f"Found {int(np.sum(values <= 0))} non-positive prices")
        if not np.all(np.isfinite(values)):
            issues.append("Found non-finite prices")

        if len(prices) < self.min_observations:
            issues.append(
                f"Insufficient observations: {len(prices)} < {self.min_observations}"
            )

        return len(issues) == 0, issues

    def check(self, prices: pd.Series) -> pd.Series:
        """Raise ValueError listing every issue found"""
        is_valid, issues = self.validate(prices)
        if not is_valid:
            for issue in issues:
                logger.error(issue)
            raise ValueError("Invalid price series: " + "; ".join(issues))
        return prices
