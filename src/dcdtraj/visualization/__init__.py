"""
Visualization module for dcdtraj.

This module provides plotting of atom coordinate time series.
"""

from .plotter import AtomSeriesPlotter
from .styles import style_params, DEFAULT_STYLE, COLOR_SCHEMES

__all__ = [
    'AtomSeriesPlotter',
    'style_params',
    'DEFAULT_STYLE',
    'COLOR_SCHEMES'
]
