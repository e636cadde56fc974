"""Statistical utility functions for predprob.

This module provides the quantile-based credible bounds used to summarize
posterior draws of predicted probabilities.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from numpy.typing import NDArray


def compute_quantile_bounds(
    samples: NDArray,
    lower_quantile: float = 0.025,
    upper_quantile: float = 0.975,
    axis: int = 0,
    method: str = "linear",
) -> tuple[NDArray, NDArray]:
    """Compute lower and upper posterior quantiles.

    Parameters
    ----------
    samples : NDArray
        Sample array from the posterior distribution. Shape can be
        (n_samples,) for 1D or (n_samples, n_points) for 2D.
    lower_quantile : float, default=0.025
        Quantile level in [0, 1] for the lower bound.
    upper_quantile : float, default=0.975
        Quantile level in [0, 1] for the upper bound.
    axis : int, default=0
        Axis holding the samples.
    method : str, default="linear"
        Quantile estimation method passed to ``numpy.quantile``. The
        default interpolates linearly between order statistics
        (Hyndman & Fan type 7), so bounds are reproducible across runs
        and platforms.

    Returns
    -------
    tuple[NDArray, NDArray]
        Tuple of (lower_bound, upper_bound) arrays.

    Examples
    --------
    >>> import numpy as np
    >>> from predprob.utils import compute_quantile_bounds
    >>>
    >>> samples = np.linspace(0, 1, 101)
    >>> lower, upper = compute_quantile_bounds(samples, 0.1, 0.9)
    >>> round(float(lower), 3), round(float(upper), 3)
    (0.1, 0.9)
    """
    return (
        np.quantile(samples, lower_quantile, axis=axis, method=method),
        np.quantile(samples, upper_quantile, axis=axis, method=method),
    )


def compute_credible_bounds(
    samples: NDArray,
    ci_prob: float = 0.95,
    axis: int = 0,
    method: str = "linear",
) -> tuple[NDArray, NDArray]:
    """Compute equal-tailed credible interval bounds.

    The percentiles are computed as:
    - lower = (1 - ci_prob) / 2
    - upper = (1 + ci_prob) / 2

    For ci_prob=0.95, this gives quantiles 0.025 and 0.975.

    Notes
    -----
    This is a central interval, not a highest density interval. For
    skewed posteriors (e.g. probabilities close to 0 or 1) a true HDI
    would be narrower and shifted toward the mode.
    """
    alpha = (1 - ci_prob) / 2
    return compute_quantile_bounds(
        samples,
        lower_quantile=alpha,
        upper_quantile=1 - alpha,
        axis=axis,
        method=method,
    )
