"""
VAR analysis options.

Holds the settings of a lag-selection, estimation and forecast run.
"""

from dataclasses import dataclass, asdict, fields
from typing import List, Optional

from ..utils.data_handling import is_positive_int

CRITERIA = ('aic', 'hq', 'sc', 'fpe')


@dataclass
class Options:
    """Optional inputs for VAR analysis."""
    lag_max: int = 10                   # largest lag order tried by the selector
    season: Optional[int] = None        # seasonal period, adds season-1 dummies
    ic: str = 'aic'                     # criterion that picks the lag order
    horizon: int = 14                   # forecast steps, also the held-out length
    ci: float = 0.95                    # coverage of the interval forecasts
    causality_lag: int = 2              # lag order of the Granger pre-check
    alpha: float = 0.05                 # significance level of the Granger pre-check
    vnames: Optional[List[str]] = None  # endogenous variables to model (None => all)

    def validate(self) -> 'Options':
        """Raise ValueError for out-of-range settings."""
        if not is_positive_int(self.lag_max):
            raise ValueError(f'lag_max must be a positive integer, got {self.lag_max!r}')
        if self.season is not None and not is_positive_int(self.season):
            raise ValueError(f'season must be a positive integer, got {self.season!r}')
        if self.ic not in CRITERIA:
            raise ValueError(f'ic must be one of {CRITERIA}, got {self.ic!r}')
        if not is_positive_int(self.horizon):
            raise ValueError(f'horizon must be a positive integer, got {self.horizon!r}')
        if not 0 < self.ci < 1:
            raise ValueError(f'ci must lie in (0, 1), got {self.ci}')
        if not is_positive_int(self.causality_lag):
            raise ValueError(f'causality_lag must be a positive integer, got {self.causality_lag!r}')
        if not 0 < self.alpha < 1:
            raise ValueError(f'alpha must lie in (0, 1), got {self.alpha}')
        return self

    def to_dict(self) -> dict:
        """Convert the options to a dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, values: dict) -> 'Options':
        """Create options from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in values.items() if k in known})
