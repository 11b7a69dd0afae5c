"""
Iterated multi-step forecasts from a fitted VAR model.

Point forecasts are built one step at a time: the regressors of step h are
the last ``nlag`` values, taken from the training data while they last and
from earlier forecasts afterwards. Interval forecasts use the forecast MSE

    Σ_y(h) = Σᵢ₌₀^{h-1} Ψᵢ Σ_u Ψᵢ'

with Ψᵢ the moving-average multipliers of the fitted model. Both come from
the statsmodels results held by the model, with the seasonal dummies of the
forecast periods passed as future exogenous values.
"""

import logging
from dataclasses import dataclass

import numpy as np
import pandas as pd

from ..errors import InvalidHorizonError
from ..utils.var import VARUtils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ForecastResult:
    """Point and interval forecasts for ``steps`` periods.

    Attributes:
        point: point forecasts (steps x nvar)
        lower: lower interval bounds (steps x nvar)
        upper: upper interval bounds (steps x nvar)
        stderr: forecast standard errors (steps x nvar)
        ci: interval coverage
    """
    point: pd.DataFrame
    lower: pd.DataFrame
    upper: pd.DataFrame
    stderr: pd.DataFrame
    ci: float

    @property
    def steps(self) -> int:
        return len(self.point)

    def __len__(self) -> int:
        return self.steps

    def to_frame(self) -> pd.DataFrame:
        """Point forecasts and bounds side by side, one column group per variable."""
        return pd.concat(
            {'forecast': self.point, 'lower': self.lower, 'upper': self.upper},
            axis=1
        ).swaplevel(axis=1).sort_index(axis=1, level=0, sort_remaining=False)


def _forecast_index(index: pd.Index, steps: int) -> pd.Index:
    """Continue the training index for ``steps`` periods."""
    if isinstance(index, pd.DatetimeIndex) and len(index) > 2:
        freq = index.freq or pd.infer_freq(index)
        if freq is not None:
            return pd.date_range(start=index[-1], periods=steps + 1, freq=freq)[1:]
    return pd.RangeIndex(len(index), len(index) + steps)


def _check_horizon(steps) -> None:
    if isinstance(steps, bool) or not isinstance(steps, (int, np.integer)):
        raise InvalidHorizonError(f'Forecast horizon must be an integer, got {steps!r}')
    if steps < 1:
        raise InvalidHorizonError(f'Forecast horizon must be at least 1, got {steps}')


def _future_dummies(model, steps: int):
    """Seasonal dummies of the forecast periods, None without a seasonal period."""
    dummies = VARUtils.seasonal_dummies(steps, model.season, start=model.nobs)
    return dummies if dummies.shape[1] else None


def forecast(model, steps: int, ci: float = 0.95) -> ForecastResult:
    """Forecast ``steps`` periods past the end of the training sample.

    Args:
        model: fitted VARModel
        steps: forecast horizon, at least 1
        ci: coverage of the interval forecasts

    Returns:
        ForecastResult

    Raises:
        InvalidHorizonError: steps is not a positive integer
    """
    _check_horizon(steps)
    if not 0 < ci < 1:
        raise ValueError(f'ci must lie in (0, 1), got {ci}')

    results = model.var_results

    # An exact fit leaves a zero MSE, rounding can push it slightly negative
    with np.errstate(invalid='ignore'):
        point, lower, upper = results.forecast_interval(
            np.asarray(model.history), steps, alpha=1 - ci,
            exog_future=_future_dummies(model, steps)
        )
    mse = results.forecast_cov(steps)
    stderr = np.sqrt(np.clip(np.diagonal(mse, axis1=1, axis2=2), 0.0, None))

    index = _forecast_index(model.endo.index, steps)
    columns = model.endo.columns

    def frame(values):
        return pd.DataFrame(values, index=index, columns=columns)

    logger.info("Forecast %d steps from VAR(%d)", steps, model.nlag)
    return ForecastResult(
        point=frame(point),
        lower=frame(lower),
        upper=frame(upper),
        stderr=frame(stderr),
        ci=ci,
    )
