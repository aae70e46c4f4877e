"""
Exception types raised by the detection methods.
"""


class InvalidArgumentError(ValueError):
    """Raised when a parameter (significance, sizes, counts) is out of range."""


class NumericInputError(ValueError):
    """Raised when an input sequence is empty or contains non-finite values."""
