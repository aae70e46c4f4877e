"""
Base classes and common utilities for changepoint detection methods.
"""

from .base_method import BaseMethod
from .common_config import CommonConfig
from .errors import InvalidArgumentError, NumericInputError
from .numeric import as_vector, moving_average, diff
from .utils import validate_input_data, split_by_period, standardize_output

__all__ = [
    'BaseMethod', 'CommonConfig', 'InvalidArgumentError', 'NumericInputError',
    'as_vector', 'moving_average', 'diff',
    'validate_input_data', 'split_by_period', 'standardize_output'
]
