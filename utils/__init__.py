"""Utility functions and classes for the volatility analysis"""

from .progress import ProgressMonitor
from .visualization import VolatilityVisualizer

__all__ = ['ProgressMonitor', 'VolatilityVisualizer']
