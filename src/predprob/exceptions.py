"""
Exceptions raised by predprob.

All input problems are detected once, at the entry of each estimator, and
reported before any computation starts.
"""

from __future__ import annotations


class PredProbError(Exception):
    """Base class for predicted probability errors."""

    pass


class DimensionMismatchError(PredProbError):
    """Raised when posterior draws and design matrix are not aligned."""

    pass


class InvalidColumnIndexError(PredProbError):
    """Raised when the focal column does not identify a design column."""

    pass


class EmptyInputError(PredProbError):
    """Raised when a required input is empty.

    Parameters
    ----------
    condition : str
        Which input was empty: "values", "draws", "observations" or "columns".
    message : str, optional
        Human readable message. A default is built from ``condition``.
    """

    def __init__(self, condition: str, message: str | None = None):
        self.condition = condition
        super().__init__(message or f"Empty input: no {condition} supplied")


class InvalidInputError(PredProbError):
    """Raised for malformed inputs (non-finite, wrong shape, unknown selector)."""

    pass


__all__ = [
    "PredProbError",
    "DimensionMismatchError",
    "InvalidColumnIndexError",
    "EmptyInputError",
    "InvalidInputError",
]
