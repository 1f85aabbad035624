"""Error taxonomy for uncertain-value construction and propagation."""

from __future__ import annotations


class UncertaintyError(Exception):
    """Base class for all uncertain-value failures."""


class InvalidParameter(UncertaintyError, ValueError):
    """Distribution parameters or sampling settings are invalid."""


class EmptyInput(UncertaintyError, ValueError):
    """An empirical distribution was requested from an empty sample set."""


class DivisionByZero(UncertaintyError, ZeroDivisionError):
    """A divisor is zero everywhere, so no sample pair survives division."""


class DegradedPrecisionWarning(UserWarning):
    """Too many sample pairs were skipped during pointwise propagation."""
