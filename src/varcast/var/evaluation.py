"""Forecast accuracy against held-out observations."""

import numpy as np
import pandas as pd

from .forecast import ForecastResult


def _as_frame(values) -> pd.DataFrame:
    if isinstance(values, ForecastResult):
        return values.point
    if isinstance(values, pd.DataFrame):
        return values
    if isinstance(values, pd.Series):
        return values.to_frame()
    x = np.asarray(values, dtype=float)
    if x.ndim == 1:
        x = x.reshape(-1, 1)
    return pd.DataFrame(x, columns=[f"y{i+1}" for i in range(x.shape[1])])


def _is_named(values) -> bool:
    if isinstance(values, pd.Series):
        return values.name is not None
    return isinstance(values, (ForecastResult, pd.DataFrame))


def mean_absolute_error(forecast, actual) -> pd.Series:
    """Mean Absolute Error per variable.

    Rows are aligned by position, so a forecast indexed by forecast dates can
    be scored against the held-out slice of the original series. Columns are
    matched by name when both inputs carry names, by position otherwise.

    Args:
        forecast: ForecastResult, DataFrame or array (steps x nvar)
        actual: DataFrame or array of the same shape

    Returns:
        pd.Series with one MAE per variable

    Raises:
        ValueError: shapes differ, the input is empty or the variable names
            of forecast and actual differ
    """
    f = _as_frame(forecast)
    a = _as_frame(actual)
    if f.shape != a.shape:
        raise ValueError(f'Forecast shape {f.shape} does not match actual shape {a.shape}')
    if f.empty:
        raise ValueError('Cannot score an empty forecast')

    if _is_named(forecast) and _is_named(actual):
        # Pair variables by name
        if set(f.columns) != set(a.columns):
            raise ValueError(
                f'Forecast variables {list(f.columns)} do not match actual variables {list(a.columns)}'
            )
        a = a[f.columns]
        columns = f.columns
    else:
        columns = f.columns if _is_named(forecast) else a.columns

    errors = np.abs(f.values.astype(float) - a.values.astype(float))
    return pd.Series(errors.mean(axis=0), index=columns, name='mae')
