"""Errors raised by the ratio signal pipeline.

None of these derive from ``ValueError`` so that raising them inside a
pydantic validator propagates the error itself instead of a wrapped
``ValidationError``.
"""


class RatioSignalError(Exception):
    """Base class for all pipeline errors."""


class InvalidQuote(RatioSignalError):
    """A quote carries a negative or non-finite price, or is malformed."""


class DivisionByZero(RatioSignalError):
    """The denominator mid-price is zero or non-finite."""


class InvalidConfiguration(RatioSignalError):
    """Window capacity, threshold or error policy is out of range."""
