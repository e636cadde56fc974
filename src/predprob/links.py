"""Inverse link functions for binary-outcome regression models.

Each function maps a real-valued linear predictor to the probability of the
positive outcome. Both are evaluated elementwise and never overflow.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING

import numpy as np
from scipy import special

from .config import LinkFunction
from .exceptions import InvalidInputError

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray

# Bound on the logistic argument; expit(-700) is still a normal float64
_LOGIT_CLIP = 700.0


def logistic_cdf(eta: ArrayLike) -> NDArray[np.floating]:
    """
    Standard logistic CDF, ``1 / (1 + exp(-eta))``.

    Parameters
    ----------
    eta : ArrayLike
        Linear predictor values.

    Returns
    -------
    NDArray[np.floating]
        Probabilities in [0, 1], same shape as ``eta``.

    Examples
    --------
    >>> logistic_cdf(np.array([-1.0, 0.0, 1.0])).round(4)
    array([0.2689, 0.5   , 0.7311])
    """
    eta = np.clip(np.asarray(eta, dtype=float), -_LOGIT_CLIP, _LOGIT_CLIP)
    return special.expit(eta)


def normal_cdf(eta: ArrayLike) -> NDArray[np.floating]:
    """Standard normal CDF, ``Phi(eta)``."""
    return special.ndtr(np.asarray(eta, dtype=float))


LINK_FUNCTIONS: dict[LinkFunction, Callable[[ArrayLike], NDArray[np.floating]]] = {
    LinkFunction.LOGIT: logistic_cdf,
    LinkFunction.PROBIT: normal_cdf,
}


def resolve_link(link: LinkFunction | str) -> LinkFunction:
    """Coerce a link selector to :class:`LinkFunction`."""
    try:
        return LinkFunction(link)
    except ValueError:
        valid = [lf.value for lf in LinkFunction]
        raise InvalidInputError(
            f"Unknown link function {link!r}; expected one of {valid}"
        ) from None


def inverse_link(
    eta: ArrayLike,
    link: LinkFunction | str = LinkFunction.LOGIT,
) -> NDArray[np.floating]:
    """
    Map linear predictors to probabilities through the chosen link.

    The link is not inferred from the posterior draws; it must match the
    model that produced them.

    Parameters
    ----------
    eta : ArrayLike
        Linear predictor values, any shape.
    link : LinkFunction | str, default="logit"
        ``"logit"`` (logistic CDF) or ``"probit"`` (standard normal CDF).

    Returns
    -------
    NDArray[np.floating]
        Probabilities in [0, 1].

    Raises
    ------
    InvalidInputError
        If ``link`` is not a supported link function.
    """
    return LINK_FUNCTIONS[resolve_link(link)](eta)


__all__ = [
    "logistic_cdf",
    "normal_cdf",
    "LINK_FUNCTIONS",
    "resolve_link",
    "inverse_link",
]
