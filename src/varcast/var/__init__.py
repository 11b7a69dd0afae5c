"""
VAR (Vector Autoregression) module for time series analysis.

This module provides lag-order selection, equation-by-equation OLS estimation,
iterated forecasting, Granger causality tests and forecast evaluation.
"""

from .options import Options
from .var_model import VARModel
from .lag_selection import LagSelection, select_order
from .forecast import ForecastResult, forecast
from .causality import CausalityResult, granger_test, granger_both_ways, granger_pairs
from .evaluation import mean_absolute_error

__all__ = [
    'Options',
    'VARModel',
    'LagSelection',
    'select_order',
    'ForecastResult',
    'forecast',
    'CausalityResult',
    'granger_test',
    'granger_both_ways',
    'granger_pairs',
    'mean_absolute_error',
]
