"""
Vector Autoregression (VAR) Model Implementation.

Equation-by-equation OLS estimation of a VAR(p) with an intercept and
optional seasonal dummies, fitted through statsmodels.
"""

import logging
import numpy as np
import pandas as pd
from typing import Dict, Optional, Union
from statsmodels.stats.stattools import durbin_watson

from ..auxiliary import check_design
from ..errors import SingularDesignError
from ..utils.data_handling import is_positive_int, validate_series, table_print
from ..utils.var import VARUtils

logger = logging.getLogger(__name__)


def _read_only(x: np.ndarray) -> np.ndarray:
    x = np.array(x, dtype=float)
    x.flags.writeable = False
    return x


class VARModel:
    """Vector Autoregression (VAR) Model.

    Every equation regresses one variable on the same regressor set: an
    intercept, the last ``nlag`` observation vectors and ``season - 1``
    seasonal dummies. The model is estimated on construction; attributes
    cannot be reassigned afterwards.
    """

    def __init__(self,
                 endo: Union[pd.DataFrame, np.ndarray],
                 nlag: int,
                 season: Optional[int] = None):
        """Initialize and estimate the VAR model.

        Args:
            endo: DataFrame of endogenous variables (nobs x nvar)
            nlag: Number of lags
            season: Optional seasonal period; adds season-1 dummy regressors
        """
        # Store inputs
        self.endo = validate_series(endo)
        self.nlag = nlag
        self.season = season

        # Validate inputs
        self._validate_inputs()

        # Get dimensions
        self.nobs, self.nvar = self.endo.shape
        if self.nvar < 2:
            raise ValueError(f'A VAR needs at least two variables, got {self.nvar}')
        self.vnames = [str(col) for col in self.endo.columns]

        # Compute effective sample size
        self.nobse = self.nobs - self.nlag

        # Compute number of coefficients per equation
        self.ncoeff = self.nvar * self.nlag
        self.nseason = season - 1 if season else 0
        self.ntotcoeff = 1 + self.ncoeff + self.nseason

        # Estimate VAR
        self._estimate()
        self._fitted = True

    def __setattr__(self, name, value):
        if getattr(self, '_fitted', False):
            raise AttributeError(f"VARModel is fitted; '{name}' cannot be reassigned")
        super().__setattr__(name, value)

    def _validate_inputs(self):
        """Validate input arguments."""
        if not is_positive_int(self.nlag):
            raise ValueError(f'nlag must be a positive integer, got {self.nlag!r}')
        if self.season is not None and not is_positive_int(self.season):
            raise ValueError(f'season must be a positive integer, got {self.season!r}')

    def _estimate(self):
        """Estimate VAR model using statsmodels."""
        # Too few rows leave no residual degrees of freedom
        if self.nobse <= self.ntotcoeff:
            raise SingularDesignError(
                f'{self.nobse} usable rows for {self.ntotcoeff} regressors per equation '
                f'(nobs={self.nobs}, nlag={self.nlag}, season={self.season})'
            )

        # Create Y and X matrices and reject collinear regressors before fitting
        Y, X = VARUtils.var_make_xy(self.endo, self.nlag, self.season)
        check_design(X.values, name=f'VAR({self.nlag}) design matrix')
        self.Y = Y
        self.X = X

        # Fit the model
        results = VARUtils.fit_var(self.endo, self.nlag, self.season)
        self.var_results = results

        # Reorder coefficients into the [const, lags, seasons] layout of X
        order = VARUtils.statsmodels_order(self.nvar, self.nlag, self.nseason)

        def coef_frame(values):
            return pd.DataFrame(np.asarray(values)[order], index=X.columns, columns=Y.columns)

        # A perfect fit leaves zero standard errors
        with np.errstate(divide='ignore', invalid='ignore'):
            self.params = coef_frame(results.params)
            self.stderr = coef_frame(results.stderr)
            self.tvalues = coef_frame(results.tvalues)
            self.pvalues = coef_frame(results.pvalues)

            # Store residuals and fit statistics equation by equation
            resid = np.asarray(results.resid)
            self.resid = pd.DataFrame(resid, index=Y.index, columns=Y.columns)
            self.fitted = pd.DataFrame(np.asarray(results.fittedvalues), index=Y.index, columns=Y.columns)

            ssr = np.sum(resid ** 2, axis=0)
            sst = np.sum((Y.values - Y.values.mean(axis=0)) ** 2, axis=0)
            self.rsquared = pd.Series(1.0 - ssr / sst, index=Y.columns, name='r2')
            self.rsquared_adj = pd.Series(
                1.0 - (ssr / (self.nobse - self.ntotcoeff)) / (sst / (self.nobse - 1.0)),
                index=Y.columns, name='r2_adj'
            )
            self.durbin_watson = pd.Series(durbin_watson(resid, axis=0), index=Y.columns, name='dw')

        self.sigma = pd.DataFrame(results.sigma_u, index=Y.columns, columns=Y.columns)
        self.sigma_ml = pd.DataFrame(results.sigma_u_mle, index=Y.columns, columns=Y.columns)

        # Last nlag observations, the starting point of the forecasts
        self.coefs = _read_only(self.params.values)
        self.history = _read_only(self.endo.values[-self.nlag:])

        # Store coefficient matrices
        self.Fp = VARUtils.get_lag_coefs_matrices(self.params, self.nlag)
        self.Fcomp = VARUtils.compute_companion_matrix(self.Fp)
        self.maxEig = float(np.max(np.abs(np.linalg.eigvals(self.Fcomp))))

        logger.info(
            "Estimated VAR(%d) on %d observations, %d variables, %d regressors per equation",
            self.nlag, self.nobse, self.nvar, self.ntotcoeff
        )
        if not self.is_stable:
            logger.warning("VAR(%d) is not stable: largest companion eigenvalue %.4f",
                           self.nlag, self.maxEig)

    @property
    def is_stable(self) -> bool:
        """True when all companion eigenvalues lie inside the unit circle."""
        return self.maxEig < 1.0

    @property
    def lag_coefficients(self) -> Dict[int, pd.DataFrame]:
        """Coefficient matrix of each lag (rows = responses, columns = predictors)."""
        return {lag: F.copy() for lag, F in self.Fp.items()}

    def forecast(self, steps: int, ci: float = 0.95):
        """Iterated multi-step forecast, see :func:`varcast.var.forecast.forecast`."""
        from .forecast import forecast
        return forecast(self, steps, ci=ci)

    def summary(self, precision: int = 4) -> str:
        """Coefficient tables and fit statistics as text."""
        blocks = [f"VAR({self.nlag}) estimated on {self.nobse} observations"
                  + (f", seasonal period {self.season}" if self.nseason else "")]
        for name in self.vnames:
            table = pd.DataFrame({
                'coef': self.params[name],
                'stderr': self.stderr[name],
                'tstat': self.tvalues[name],
                'pval': self.pvalues[name],
            })
            blocks.append(table_print(
                table, precision=precision,
                title=f"\nEquation {name}  (R2={self.rsquared[name]:.4f}, adj R2={self.rsquared_adj[name]:.4f})"
            ))
        blocks.append(table_print(self.sigma, precision=precision, title="\nResidual covariance"))
        blocks.append(f"\nLargest companion eigenvalue modulus: {self.maxEig:.4f}"
                      + ("" if self.is_stable else " (unstable)"))
        return "\n".join(blocks)
