"""Exceptions raised by the VAR estimation and forecast routines."""


class VARError(ValueError):
    """Base class for VAR estimation and forecasting errors."""


class InsufficientDataError(VARError):
    """Too few observations for the requested lag order or seasonal period."""


class SingularDesignError(VARError):
    """The regressor matrix is rank-deficient or has no residual degrees of freedom."""


class InvalidHorizonError(VARError):
    """The forecast horizon is not a positive integer."""
