"""Utility modules for predprob."""

from .statistics import compute_credible_bounds, compute_quantile_bounds

__all__ = [
    "compute_credible_bounds",
    "compute_quantile_bounds",
]
