"""
Data handling utilities.

Validation of the series handed to the modelling routines, the hold-out
split used for evaluation and a plain-text table formatter.
"""

from typing import Union, Optional, Tuple
import numpy as np
import pandas as pd


def is_positive_int(value) -> bool:
    """True for a positive int or numpy integer (booleans excluded)."""
    return (not isinstance(value, (bool, np.bool_))
            and isinstance(value, (int, np.integer))
            and value >= 1)


def validate_series(data: Union[np.ndarray, pd.DataFrame]) -> pd.DataFrame:
    """Check that data is a gap-free, equally-spaced numeric matrix.

    Arrays are wrapped in a DataFrame with columns y1..yK and a RangeIndex.

    Args:
        data: Input array/DataFrame (nobs x nvar)

    Returns:
        Validated float DataFrame

    Raises:
        ValueError: if the data are empty, non-numeric, contain NaNs or have
            an unordered or unequally spaced DatetimeIndex
    """
    if isinstance(data, pd.Series):
        data = data.to_frame()
    if not isinstance(data, pd.DataFrame):
        x = np.asarray(data)
        if x.ndim == 1:
            x = x.reshape(-1, 1)
        if x.ndim != 2:
            raise ValueError('Series data must be two-dimensional (nobs x nvar)')
        data = pd.DataFrame(x, columns=[f"y{i+1}" for i in range(x.shape[1])])

    if data.empty:
        raise ValueError('Series data are empty')

    non_numeric = [col for col in data.columns if not pd.api.types.is_numeric_dtype(data[col])]
    if non_numeric:
        raise ValueError(f'Non-numeric columns: {non_numeric}')

    data = data.astype(float)
    if data.isna().any().any():
        missing = data.columns[data.isna().any()].tolist()
        raise ValueError(f'Missing values in columns {missing}; impute before modelling')

    if isinstance(data.index, pd.DatetimeIndex) and len(data) > 1:
        if not data.index.is_monotonic_increasing or data.index.has_duplicates:
            raise ValueError('Timestamps must be strictly increasing')
        steps = np.diff(data.index.asi8)
        if np.any(steps != steps[0]):
            raise ValueError('Timestamps must be equally spaced')

    return data


def train_test_split(data: pd.DataFrame, test_size: int) -> Tuple[pd.DataFrame, pd.DataFrame]:
    """Split a series into a training prefix and a held-out suffix.

    Args:
        data: Input DataFrame (nobs x nvar)
        test_size: Number of trailing rows to hold out

    Returns:
        tuple:
            - train: first nobs-test_size rows
            - test: last test_size rows
    """
    if not isinstance(test_size, (int, np.integer)) or isinstance(test_size, bool):
        raise ValueError('test_size must be an integer')
    if test_size < 1 or test_size >= len(data):
        raise ValueError(f'test_size must be between 1 and {len(data) - 1}, got {test_size}')
    return data.iloc[:-test_size], data.iloc[-test_size:]


def table_print(data: Union[np.ndarray, pd.DataFrame],
                row_names: Optional[list] = None,
                col_names: Optional[list] = None,
                precision: int = 4,
                title: Optional[str] = None) -> str:
    """Create formatted string table from data.

    Args:
        data: Input array/DataFrame
        row_names: Optional list of row names
        col_names: Optional list of column names
        precision: Number of decimal places (default=4)
        title: Optional table title

    Returns:
        Formatted string table
    """
    x = data.values if isinstance(data, pd.DataFrame) else np.asarray(data)
    x = x.astype(float)
    if x.ndim == 1:
        x = x.reshape(-1, 1)

    nrows, ncols = x.shape

    if isinstance(data, pd.DataFrame):
        row_names = row_names or data.index.astype(str).tolist()
        col_names = col_names or data.columns.astype(str).tolist()
    else:
        row_names = row_names or [f"Row{i+1}" for i in range(nrows)]
        col_names = col_names or [f"Col{i+1}" for i in range(ncols)]

    fmt = f"{{:.{precision}f}}"

    col_widths = [max([len(str(col))] + [len(fmt.format(v)) for v in x[:, i]])
                  for i, col in enumerate(col_names)]
    row_width = max(len(str(row)) for row in row_names)

    table = [title] if title else []

    header = " " * row_width + " | "
    header += " | ".join(f"{col:>{width}}" for col, width in zip(col_names, col_widths))
    table.append(header)

    separator = "-" * row_width + "-+-" + "-+-".join("-" * width for width in col_widths)
    table.append(separator)

    for i, row_name in enumerate(row_names):
        row = f"{row_name:>{row_width}} | "
        row += " | ".join(f"{fmt.format(x[i,j]):>{width}}"
                         for j, width in enumerate(col_widths))
        table.append(row)

    return "\n".join(table)
