"""
varcast: VAR lag selection, estimation, forecasting and evaluation.
"""

from .errors import VARError, InsufficientDataError, SingularDesignError, InvalidHorizonError
from .var import (
    VARModel,
    Options,
    LagSelection,
    select_order,
    ForecastResult,
    forecast,
    CausalityResult,
    granger_test,
    granger_both_ways,
    granger_pairs,
    mean_absolute_error,
)
from .pipeline import AnalysisReport, run_analysis

__all__ = [
    'VARError',
    'InsufficientDataError',
    'SingularDesignError',
    'InvalidHorizonError',
    'VARModel',
    'Options',
    'LagSelection',
    'select_order',
    'ForecastResult',
    'forecast',
    'CausalityResult',
    'granger_test',
    'granger_both_ways',
    'granger_pairs',
    'mean_absolute_error',
    'AnalysisReport',
    'run_analysis',
]
