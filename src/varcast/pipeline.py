"""
End-to-end VAR analysis.

Splits off a held-out tail, runs the Granger pre-check, selects the lag
order, fits the model, forecasts the tail and scores the forecast.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Union

import numpy as np
import pandas as pd

from .utils.data_handling import validate_series, train_test_split
from .var.causality import granger_pairs
from .var.evaluation import mean_absolute_error
from .var.forecast import ForecastResult
from .var.lag_selection import LagSelection, select_order
from .var.options import Options
from .var.var_model import VARModel

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AnalysisReport:
    """Results of every stage of :func:`run_analysis`."""
    options: Options
    train: pd.DataFrame
    test: pd.DataFrame
    causality: pd.DataFrame
    selection: LagSelection
    model: VARModel
    forecast: ForecastResult
    mae: pd.Series

    @property
    def nlag(self) -> int:
        return self.model.nlag


def run_analysis(data: Union[pd.DataFrame, np.ndarray],
                 options: Optional[Options] = None) -> AnalysisReport:
    """Run causality pre-check, lag selection, estimation, forecast and evaluation.

    Args:
        data: gap-free, equally-spaced series (nobs x nvar)
        options: analysis settings; defaults to ``Options()``

    Returns:
        AnalysisReport
    """
    options = (options or Options()).validate()

    data = validate_series(data)
    if options.vnames:
        missing = [name for name in options.vnames if name not in data.columns]
        if missing:
            raise ValueError(f'Unknown variables {missing}; available: {list(data.columns)}')
        data = data[options.vnames]
    if data.shape[1] < 2:
        raise ValueError(f'A VAR needs at least two variables, got {list(data.columns)}')

    train, test = train_test_split(data, options.horizon)
    logger.info("Training on %d observations, holding out %d", len(train), len(test))

    causality = granger_pairs(train, options.causality_lag)
    causality['rejects'] = causality['pvalue'] < options.alpha

    selection = select_order(train, options.lag_max, options.season)
    nlag = selection.best(options.ic)
    logger.info("Selected lag order %d by %s", nlag, options.ic)

    model = VARModel(train, nlag, season=options.season)
    fcst = model.forecast(options.horizon, ci=options.ci)
    mae = mean_absolute_error(fcst, test)
    logger.info("MAE: %s", mae.to_dict())

    return AnalysisReport(
        options=options,
        train=train,
        test=test,
        causality=causality,
        selection=selection,
        model=model,
        forecast=fcst,
        mae=mae,
    )
