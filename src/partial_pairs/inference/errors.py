from __future__ import annotations


class InsufficientDataError(ValueError):
    """Too few observations for the modified test or any of its fallbacks."""


class LengthMismatchError(InsufficientDataError):
    """x and y differ in length and are too small for the unpaired fallback."""


class DegenerateVarianceError(ValueError):
    """Spread of the data is numerically indistinguishable from zero."""


class FallbackWarning(UserWarning):
    """A classical t-test was substituted for the modified-MLE test."""
