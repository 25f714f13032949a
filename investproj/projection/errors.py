"""Validation errors raised by the projection engine.

All errors subclass ``ValueError`` so callers that only care about
"bad input" can catch a single type. They are raised before any
computation starts; the engine never returns a partial result.
"""

from __future__ import annotations


class ProjectionError(ValueError):
    """Base class for invalid projection inputs."""


class InvalidHorizonError(ProjectionError):
    """The horizon is not a positive whole number of years."""


class InvalidRateError(ProjectionError):
    """A rate is non-finite, below -100%, or a volatility is negative."""


class InvalidTargetDateError(ProjectionError):
    """The target date is present but cannot be parsed."""


class InvalidAmountError(ProjectionError):
    """A monetary amount is negative or non-finite."""
