"""
Granger causality pre-check.

Tests whether the past of one series improves the prediction of another
beyond the latter's own past. The test compares a restricted regression of
y on its own lags with an unrestricted one that adds the lags of x, using an
F test on the reduction of the residual sum of squares.
"""

import logging
from dataclasses import dataclass
from itertools import permutations
from typing import Union

import numpy as np
import pandas as pd
import statsmodels.api as sm

from ..auxiliary import check_design
from ..errors import InsufficientDataError
from ..utils.data_handling import is_positive_int, validate_series
from ..utils.var import VARUtils

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CausalityResult:
    """Outcome of one directional Granger test (H0: ``cause`` does not Granger-cause ``effect``)."""
    cause: str
    effect: str
    lag: int
    fstat: float
    df_num: int
    df_denom: int
    pvalue: float

    def rejects(self, alpha: float = 0.05) -> bool:
        """True when the null of no predictive power is rejected at ``alpha``."""
        return self.pvalue < alpha


def granger_test(x: Union[pd.Series, np.ndarray],
                 y: Union[pd.Series, np.ndarray],
                 lag: int,
                 cause: str = 'x',
                 effect: str = 'y') -> CausalityResult:
    """Test whether x Granger-causes y.

    Args:
        x: candidate cause (nobs,)
        y: response (nobs,)
        lag: number of lags of both series in the regressions
        cause: label of x in the result
        effect: label of y in the result

    Returns:
        CausalityResult with the F statistic and its p-value

    Raises:
        InsufficientDataError: fewer than 2*lag + 2 usable observations
        SingularDesignError: the unrestricted design is rank-deficient
    """
    x = np.asarray(x, dtype=float).ravel()
    y = np.asarray(y, dtype=float).ravel()
    if len(x) != len(y):
        raise ValueError(f'Series must have equal length, got {len(x)} and {len(y)}')
    if not is_positive_int(lag):
        raise ValueError(f'lag must be a positive integer, got {lag!r}')
    if np.isnan(x).any() or np.isnan(y).any():
        raise ValueError('Series contain missing values')

    nobs = len(y) - lag
    df_denom = nobs - 2 * lag - 1
    if df_denom < 1:
        raise InsufficientDataError(
            f'Granger test with lag {lag} needs at least {3 * lag + 2} observations, got {len(y)}'
        )

    endog = y[lag:]
    restricted = np.column_stack([np.ones(nobs), VARUtils.var_make_lags(y, lag)])
    unrestricted = np.column_stack([restricted, VARUtils.var_make_lags(x, lag)])
    check_design(unrestricted, name=f'Granger design ({cause} -> {effect})')

    res_r = sm.OLS(endog, restricted).fit()
    res_u = sm.OLS(endog, unrestricted).fit()
    with np.errstate(divide='ignore', invalid='ignore'):
        fstat, pvalue, df_diff = res_u.compare_f_test(res_r)

    result = CausalityResult(
        cause=cause,
        effect=effect,
        lag=lag,
        fstat=float(fstat),
        df_num=int(df_diff),
        df_denom=int(res_u.df_resid),
        pvalue=float(pvalue),
    )
    logger.info("Granger %s -> %s (lag %d): F=%.4f, p=%.4g",
                cause, effect, lag, result.fstat, result.pvalue)
    return result


def granger_pairs(data: Union[pd.DataFrame, np.ndarray], lag: int) -> pd.DataFrame:
    """Run the Granger test in both directions for every pair of columns.

    Args:
        data: series (nobs x nvar), nvar >= 2
        lag: lag order of the tests

    Returns:
        DataFrame with one row per ordered (cause, effect) pair
    """
    data = validate_series(data)
    if data.shape[1] < 2:
        raise ValueError('Granger tests need at least two variables')

    rows = []
    for cause, effect in permutations(data.columns, 2):
        res = granger_test(data[cause], data[effect], lag, cause=str(cause), effect=str(effect))
        rows.append({
            'cause': res.cause,
            'effect': res.effect,
            'lag': res.lag,
            'fstat': res.fstat,
            'df_num': res.df_num,
            'df_denom': res.df_denom,
            'pvalue': res.pvalue,
        })
    return pd.DataFrame(rows)


def granger_both_ways(data: pd.DataFrame, lag: int):
    """Granger tests x -> y and y -> x for a two-column frame.

    Returns:
        tuple of CausalityResult: (first column -> second, second column -> first)
    """
    data = validate_series(data)
    if data.shape[1] != 2:
        raise ValueError(f'Expected exactly two columns, got {data.shape[1]}')
    a, b = data.columns
    return (
        granger_test(data[a], data[b], lag, cause=str(a), effect=str(b)),
        granger_test(data[b], data[a], lag, cause=str(b), effect=str(a)),
    )
