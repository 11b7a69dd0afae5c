"""
Utility modules for the varcast package.
"""

from .data_handling import is_positive_int, validate_series, train_test_split, table_print
from .var import VARUtils

__all__ = [
    'is_positive_int',
    'validate_series',
    'train_test_split',
    'table_print',
    'VARUtils',
]
