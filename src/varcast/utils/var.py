import numpy as np
import pandas as pd
from typing import Dict, Optional, Tuple, Union


class VARUtils:
    """Utility functions for VAR models."""

    @staticmethod
    def var_make_lags(data: Union[np.ndarray, pd.DataFrame], lag: int) -> np.ndarray:
        """Create matrix of lagged values.

        Args:
            data: Matrix containing the original data (nobs x nvar)
            lag: Lag order

        Returns:
            Matrix (nobs-lag x nvar*lag) ordered [y_{t-1}, y_{t-2}, ..., y_{t-lag}]
        """
        # Convert DataFrame to numpy array if needed
        if isinstance(data, (pd.DataFrame, pd.Series)):
            data = data.values
        data = np.asarray(data, dtype=float)

        # A single series becomes one column
        if data.ndim == 1:
            data = data.reshape(-1, 1)

        nobs = len(data)

        # Create the lagged matrix; each pass puts the more recent lag in front
        out = np.array([])
        for jj in range(lag):
            if out.size == 0:
                out = data[jj:nobs-lag+jj]
            else:
                out = np.hstack([data[jj:nobs-lag+jj], out])

        return out

    @staticmethod
    def seasonal_dummies(nobs: int, season: Optional[int], start: int = 0) -> np.ndarray:
        """Create 0/1 seasonal indicator columns.

        Row ``i`` corresponds to observation ``start + i`` and activates column
        ``(start + i) mod season`` unless that is the last season, which is the
        baseline absorbed by the intercept.

        Args:
            nobs: Number of rows
            season: Seasonal period (None or 1 gives no columns)
            start: Position of the first row in the observation sequence

        Returns:
            Matrix (nobs x season-1)
        """
        # No seasonal period, no dummies
        if not season or season <= 1:
            return np.zeros((nobs, 0))

        # Phase of each row in the seasonal cycle; the last phase stays all-zero
        phase = (start + np.arange(nobs)) % season
        dummies = np.zeros((nobs, season - 1))
        rows = np.flatnonzero(phase < season - 1)
        dummies[rows, phase[rows]] = 1.0
        return dummies

    @staticmethod
    def var_make_xy(data: Union[np.ndarray, pd.DataFrame], lags: int,
                    season: Optional[int] = None) -> Tuple[pd.DataFrame, pd.DataFrame]:
        """Create matrices Y and X for VAR estimation.

        X holds, in order, a constant, the ``lags`` lagged observation vectors and
        the seasonal dummies. The first ``lags`` observations are dropped.

        Args:
            data: DataFrame containing the original data (nobs x nvar)
            lags: Lag order of the VAR
            season: Optional seasonal period

        Returns:
            tuple:
                - Y: VAR dependent variable
                - X: VAR independent variable
        """
        if not isinstance(data, pd.DataFrame):
            data = pd.DataFrame(np.asarray(data, dtype=float))
        names = [str(col) for col in data.columns]
        values = data.values.astype(float)
        nobs = len(values)

        # Y matrix: drop the first lags observations
        Y = pd.DataFrame(values[lags:], index=data.index[lags:], columns=data.columns)

        # X matrix: constant, lagged observations, seasonal dummies
        X = np.hstack([
            np.ones((nobs - lags, 1)),
            VARUtils.var_make_lags(values, lags),
            VARUtils.seasonal_dummies(nobs, season)[lags:],
        ])
        X = pd.DataFrame(X, index=Y.index, columns=VARUtils.regressor_names(names, lags, season))

        return Y, X

    @staticmethod
    def regressor_names(vnames, nlag: int, season: Optional[int] = None) -> list:
        """Names of the regressors in the order used by ``var_make_xy``."""
        X_cols = ['const']
        for lag in range(1, nlag + 1):
            for col in vnames:
                X_cols.append(f"{col}_lag{lag}")
        if season and season > 1:
            X_cols.extend(f"season{j}" for j in range(1, season))
        return X_cols

    @staticmethod
    def get_lag_coefs_matrices(params: pd.DataFrame, nlag: int) -> Dict[int, pd.DataFrame]:
        """Extract lag coefficient matrices from the VAR parameter DataFrame.

        ``params`` has one row per regressor and one column per equation.
        Each Fp[lag] is an (nvar x nvar) DataFrame where rows are the response
        variables and columns the lagged predictors, so Fp[lag][i, j] is the
        effect of variable j lagged by ``lag`` periods on variable i.

        Args:
            params: Parameter DataFrame from VAR estimation
            nlag: Lag order

        Returns:
            Dict[int, pd.DataFrame]: Dictionary mapping lag numbers to coefficient matrices
        """
        Fp = {}
        for lag in range(1, nlag + 1):
            rows = [f"{col}_lag{lag}" for col in params.columns]
            Fp[lag] = pd.DataFrame(
                params.loc[rows].values.T,
                index=params.columns,
                columns=params.columns
            )
        return Fp

    @staticmethod
    def compute_companion_matrix(Fp: Dict[int, pd.DataFrame]) -> np.ndarray:
        """Compute the companion matrix for the VAR model.

        The companion matrix transforms a VAR(p) into a VAR(1) in a higher dimension.
        For a VAR with n variables and p lags, it creates an (n*p)×(n*p) matrix:

        | A₁ A₂ ... Aₚ₋₁ Aₚ |
        | I  0  ... 0    0  |
        | 0  I  ... 0    0  |
        | ⋮  ⋮  ⋱  ⋮    ⋮  |
        | 0  0  ... I    0  |

        Args:
            Fp: Dictionary of lag coefficient matrices from get_lag_coefs_matrices

        Returns:
            np.ndarray: Companion matrix ((n*p) × (n*p))
        """
        nvar = Fp[1].shape[0]
        nlag = len(Fp)
        n_companion = nvar * nlag
        companion = np.zeros((n_companion, n_companion))

        companion[:nvar, :] = np.hstack([Fp[lag].values for lag in range(1, nlag + 1)])

        if nlag > 1:
            companion[nvar:, :-nvar] = np.eye(nvar * (nlag - 1))

        return companion

    @staticmethod
    def fit_var(data: Union[np.ndarray, pd.DataFrame], nlag: int, season: Optional[int] = None):
        """Fit a VAR(nlag) with a constant through statsmodels.

        Seasonal dummies enter as exogenous regressors, aligned with the
        observation they belong to.

        Args:
            data: Matrix containing the original data (nobs x nvar)
            nlag: Lag order
            season: Optional seasonal period

        Returns:
            statsmodels VARResults
        """
        from statsmodels.tsa.api import VAR

        # Convert DataFrame to numpy array if needed
        if isinstance(data, pd.DataFrame):
            data = data.values
        values = np.asarray(data, dtype=float)

        dummies = VARUtils.seasonal_dummies(len(values), season)
        exog = dummies if dummies.shape[1] else None

        return VAR(values, exog=exog).fit(nlag, trend='c')

    @staticmethod
    def statsmodels_order(nvar: int, nlag: int, nseason: int) -> np.ndarray:
        """Row positions that turn statsmodels params into the ``var_make_xy`` layout.

        statsmodels orders regressors [const, exog, L1, ..., Lp]; here they are
        [const, L1, ..., Lp, season dummies].
        """
        lags = np.arange(1 + nseason, 1 + nseason + nvar * nlag)
        seasons = np.arange(1, 1 + nseason)
        return np.concatenate([[0], lags, seasons])
