"""
Data management package for the volatility analysis.
Handles price acquisition, caching and validation.
"""

from .data_loader import PriceLoader
from .data_validator import PriceValidator

__all__ = ['PriceLoader', 'PriceValidator']
