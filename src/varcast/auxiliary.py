"""Design-matrix checks shared by the estimation and selection routines."""

import numpy as np

from .errors import SingularDesignError


def check_design(x: np.ndarray, name: str = 'design matrix') -> None:
    """Raise SingularDesignError unless x has full column rank and spare rows.

    statsmodels solves the normal equations with a pseudo-inverse, so a
    collinear design would be fitted silently; this check runs first.

    Args:
        x: Regressor matrix (nobs x nvar)
        name: Label used in the error message
    """
    x = np.asarray(x, dtype=float)
    nobs, nvar = x.shape

    # Need at least one residual degree of freedom
    if nobs <= nvar:
        raise SingularDesignError(
            f'{name} has {nobs} rows for {nvar} regressors; '
            'estimation needs more rows than regressors'
        )

    # Perfectly collinear regressors
    rank = np.linalg.matrix_rank(x)
    if rank < nvar:
        raise SingularDesignError(
            f'{name} is rank-deficient (rank {rank} for {nvar} regressors); '
            'reduce the lag order, drop a variable or supply more data'
        )
