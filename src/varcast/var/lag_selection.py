"""
Lag-order selection for VAR models.

Every candidate order p in [1, lag_max] is fitted on its own effective
sample (the first p observations dropped) and scored with four information
criteria computed from the ML residual covariance:

    aic = ln|Σ| + 2/T · (pK² + Kd)
    hq  = ln|Σ| + 2 ln(ln T)/T · (pK² + Kd)
    sc  = ln|Σ| + ln(T)/T · (pK² + Kd)
    fpe = ((T + m)/(T - m))^K · |Σ|

with T = nobs - p, d the number of deterministic regressors (intercept and
seasonal dummies) and m = pK + d the regressors per equation. The scores
are those of the statsmodels fit of each order.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, Optional, Union

import numpy as np
import pandas as pd

from ..auxiliary import check_design
from ..errors import InsufficientDataError, SingularDesignError
from ..utils.data_handling import is_positive_int, validate_series, table_print
from ..utils.var import VARUtils
from .options import CRITERIA

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LagSelection:
    """Information criteria for every tested lag order.

    Attributes:
        scores: DataFrame with one row per criterion and one column per lag order
        selected: minimizing lag order of each criterion
        lag_max: largest lag order tested
        season: seasonal period used, if any
    """
    scores: pd.DataFrame
    selected: Dict[str, int] = field(default_factory=dict)
    lag_max: int = 0
    season: Optional[int] = None

    def best(self, ic: str = 'aic') -> int:
        """Lag order chosen by the criterion ``ic``."""
        if ic not in self.selected:
            raise ValueError(f'Unknown criterion {ic!r}; choose one of {list(self.selected)}')
        return self.selected[ic]

    def __str__(self) -> str:
        chosen = ", ".join(f"{ic}={p}" for ic, p in self.selected.items())
        return table_print(self.scores, precision=4, title=f"Lag selection ({chosen})")


def select_order(data: Union[pd.DataFrame, np.ndarray],
                 lag_max: int,
                 season: Optional[int] = None) -> LagSelection:
    """Score lag orders 1..lag_max by information criteria.

    Args:
        data: Training series (nobs x nvar)
        lag_max: Largest lag order to test
        season: Optional seasonal period

    Returns:
        LagSelection with the score table and per-criterion choice

    Raises:
        InsufficientDataError: the series is too short for lag_max
        SingularDesignError: a candidate design matrix is rank-deficient or
            its residual covariance is singular
    """
    data = validate_series(data)
    if not is_positive_int(lag_max):
        raise ValueError(f'lag_max must be a positive integer, got {lag_max!r}')
    if season is not None and not is_positive_int(season):
        raise ValueError(f'season must be a positive integer, got {season!r}')

    nobs, nvar = data.shape
    if nvar < 2:
        raise ValueError(f'A VAR needs at least two variables, got {nvar}')
    ndet = 1 + (season - 1 if season else 0)
    nrows = nobs - lag_max
    nreg = nvar * lag_max + ndet
    if nrows <= nreg:
        raise InsufficientDataError(
            f'lag_max={lag_max} needs more than {nreg} usable rows after dropping '
            f'{lag_max} warm-up observations; the series has {nobs} observations'
        )

    scores = {}
    for p in range(1, lag_max + 1):
        # Reject collinear regressors, then fit the order
        _, X = VARUtils.var_make_xy(data, p, season)
        check_design(X.values, name=f'VAR({p}) design matrix')
        res = VARUtils.fit_var(data, p, season)

        # Criteria need a positive definite residual covariance
        try:
            scores[p] = {'aic': res.aic, 'hq': res.hqic, 'sc': res.bic, 'fpe': res.fpe}
        except np.linalg.LinAlgError as e:
            raise SingularDesignError(
                f'VAR({p}) residual covariance is singular; the series is fitted exactly'
            ) from e
        logger.debug("lag %d: %s", p, scores[p])

    scores = pd.DataFrame(scores).loc[list(CRITERIA)]
    scores.columns.name = 'lag'
    selected = {ic: int(scores.loc[ic].idxmin()) for ic in CRITERIA}

    logger.info("Lag selection up to %d: %s", lag_max, selected)
    return LagSelection(scores=scores, selected=selected, lag_max=lag_max, season=season)
