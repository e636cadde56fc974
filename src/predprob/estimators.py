"""
Probability-matrix producers.

This module implements the Strategy pattern for the two counterfactual
conventions used to turn posterior draws into predicted probabilities:

- Average case (King et al.): non-focal covariates fixed at a typical value
- Observed value (Hanmer & Kalkan): non-focal covariates kept at each
  observation's values, probabilities averaged over observations

Both return a matrix of shape (n_values, n_draws) that is summarized by
:class:`predprob.summary.PosteriorSummarizer`.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import TYPE_CHECKING, Protocol, runtime_checkable

import numpy as np
from joblib import Parallel, delayed
from loguru import logger

from .config import Approach, AverageCasePolicy, LinkFunction, PredictionConfig
from .exceptions import InvalidInputError
from .links import inverse_link, resolve_link
from .validation import PreparedInputs, prepare_inputs

if TYPE_CHECKING:
    import pandas as pd
    from numpy.typing import ArrayLike, NDArray


@runtime_checkable
class ProbabilityMatrixProducer(Protocol):
    """Protocol for objects producing per-draw predicted probabilities."""

    def compute(
        self,
        design: ArrayLike | pd.DataFrame,
        draws: ArrayLike | pd.DataFrame,
        column: int | Hashable,
        values: ArrayLike,
    ) -> NDArray[np.floating]:
        """
        Compute predicted probabilities for each focal value and draw.

        Parameters
        ----------
        design : ArrayLike | pd.DataFrame
            Design matrix, shape (n_obs, n_columns), including intercept.
        draws : ArrayLike | pd.DataFrame
            Posterior coefficient draws, shape (n_draws, n_columns).
        column : int | Hashable
            0-based focal column position, or label for DataFrame designs.
        values : ArrayLike
            Ordered values substituted into the focal column.

        Returns
        -------
        NDArray[np.floating]
            Probability matrix, shape (n_values, n_draws).
        """
        ...


def typical_covariate_profile(
    design: NDArray[np.floating],
    policy: AverageCasePolicy | str = AverageCasePolicy.MEAN,
) -> NDArray[np.floating]:
    """
    Build the covariate vector used by the average-case approach.

    Parameters
    ----------
    design : NDArray
        Design matrix, shape (n_obs, n_columns).
    policy : AverageCasePolicy | str
        ``"mean"`` uses column means everywhere, so indicator columns
        become proportions. ``"mode_for_binary"`` sets non-constant 0/1
        columns to their most common value (ties go to 0).

    Returns
    -------
    NDArray
        Profile vector, shape (n_columns,). A constant intercept column
        keeps its value under either policy.
    """
    policy = AverageCasePolicy(policy)
    profile = design.mean(axis=0)

    if policy is AverageCasePolicy.MODE_FOR_BINARY:
        is_binary = np.all((design == 0.0) | (design == 1.0), axis=0)
        varies = design.min(axis=0) != design.max(axis=0)
        mask = is_binary & varies
        profile[mask] = (profile[mask] > 0.5).astype(float)

    return profile


def _check_linear_predictor(eta: NDArray[np.floating]) -> NDArray[np.floating]:
    """Reject linear predictors that overflowed float64 from finite inputs."""
    if not np.all(np.isfinite(eta)):
        n_bad = int(np.sum(~np.isfinite(eta)))
        raise InvalidInputError(
            f"linear predictor overflowed to {n_bad} non-finite value(s); "
            "rescale the design matrix or the focal values"
        )
    return eta


def _draw_slices(n_draws: int, chunk_size: int | None) -> list[slice]:
    if chunk_size is None or chunk_size >= n_draws:
        return [slice(0, n_draws)]
    return [slice(start, min(start + chunk_size, n_draws)) for start in range(0, n_draws, chunk_size)]


class BaseEstimator(ABC):
    """
    Base class for predicted probability estimators.

    Validates inputs once at entry, then delegates to :meth:`_compute`.

    Parameters
    ----------
    link : LinkFunction | str, optional
        Link function of the fitted model. Overrides ``config.link``.
    config : PredictionConfig, optional
        Full configuration. Defaults to ``PredictionConfig()``.
    """

    approach: Approach

    def __init__(
        self,
        link: LinkFunction | str | None = None,
        config: PredictionConfig | None = None,
    ):
        config = config or PredictionConfig()
        if link is not None:
            config = config.model_copy(update={"link": resolve_link(link)})
        self.config = config

    @property
    def link(self) -> LinkFunction:
        return self.config.link

    def compute(
        self,
        design: ArrayLike | pd.DataFrame,
        draws: ArrayLike | pd.DataFrame,
        column: int | Hashable,
        values: ArrayLike,
    ) -> NDArray[np.floating]:
        """Compute the probability matrix, shape (n_values, n_draws)."""
        inputs = prepare_inputs(design, draws, column, values)
        logger.debug(
            f"{self.approach.value}: n_obs={inputs.n_obs}, n_draws={inputs.n_draws}, "
            f"n_columns={inputs.n_columns}, n_values={inputs.n_values}, "
            f"column={inputs.column}, link={self.link.value}"
        )
        return self._compute(inputs)

    @abstractmethod
    def _compute(self, inputs: PreparedInputs) -> NDArray[np.floating]:
        """Compute probabilities from validated inputs."""
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}(link={self.link.value!r})"


class AverageCaseEstimator(BaseEstimator):
    """
    Average-case predicted probabilities.

    Non-focal covariates are held at a typical profile (column means by
    default) while the focal covariate takes each value in the range.
    Cost is one (n_values x n_columns) @ (n_columns x n_draws) product.
    """

    approach = Approach.AVERAGE_CASE

    def _compute(self, inputs: PreparedInputs) -> NDArray[np.floating]:
        profile = typical_covariate_profile(inputs.design, self.config.average_policy)

        scenarios = np.tile(profile, (inputs.n_values, 1))
        scenarios[:, inputs.column] = inputs.values

        with np.errstate(over="ignore", invalid="ignore"):
            eta = scenarios @ inputs.draws.T
        return inverse_link(_check_linear_predictor(eta), self.link)


class ObservedValueEstimator(BaseEstimator):
    """
    Observed-value predicted probabilities.

    For each focal value, every observation keeps its own covariates except
    the focal one, which is set to the value. Per-observation probabilities
    are averaged over observations separately for each draw.

    The linear predictor splits as ``X_v @ b = X_0 @ b + v * b[focal]``
    where ``X_0`` is the design with the focal column zeroed, so the
    (n_obs x n_draws) product is formed once per draw chunk and reused for
    every value.
    """

    approach = Approach.OBSERVED_VALUE

    def _compute(self, inputs: PreparedInputs) -> NDArray[np.floating]:
        col = inputs.column
        base_design = inputs.design.copy()
        base_design[:, col] = 0.0

        out = np.empty((inputs.n_values, inputs.n_draws))
        slices = _draw_slices(inputs.n_draws, self.config.draw_chunk_size)
        if len(slices) > 1:
            logger.debug(f"observed_value: processing draws in {len(slices)} chunks")

        with Parallel(n_jobs=self.config.n_jobs, prefer="threads") as parallel:
            for sl in slices:
                chunk = inputs.draws[sl]
                with np.errstate(over="ignore", invalid="ignore"):
                    eta_base = base_design @ chunk.T
                focal_coef = chunk[:, col]

                rows = parallel(
                    delayed(self._mean_probability)(eta_base, focal_coef, v)
                    for v in inputs.values
                )
                # Parallel returns results in submission order
                for i, row in enumerate(rows):
                    out[i, sl] = row

        return out

    def _mean_probability(
        self,
        eta_base: NDArray[np.floating],
        focal_coef: NDArray[np.floating],
        value: float,
    ) -> NDArray[np.floating]:
        """Mean over observations of P(y=1) for one focal value, per draw."""
        with np.errstate(over="ignore", invalid="ignore"):
            eta = eta_base + value * focal_coef[np.newaxis, :]
        return inverse_link(_check_linear_predictor(eta), self.link).mean(axis=0)


class EstimatorFactory:
    """
    Factory for predicted probability estimators.

    Selects the appropriate strategy based on :class:`Approach`.
    """

    STRATEGIES: dict[Approach, type[BaseEstimator]] = {
        Approach.AVERAGE_CASE: AverageCaseEstimator,
        Approach.OBSERVED_VALUE: ObservedValueEstimator,
    }

    @classmethod
    def create(
        cls,
        approach: Approach | str,
        config: PredictionConfig | None = None,
    ) -> BaseEstimator:
        """
        Create an estimator for ``approach``.

        Raises
        ------
        InvalidInputError
            If ``approach`` is not a known approach.
        """
        try:
            approach = Approach(approach)
        except ValueError:
            valid = [a.value for a in Approach]
            raise InvalidInputError(
                f"Unknown approach {approach!r}; expected one of {valid}"
            ) from None
        return cls.STRATEGIES[approach](config=config)


__all__ = [
    "ProbabilityMatrixProducer",
    "typical_covariate_profile",
    "BaseEstimator",
    "AverageCaseEstimator",
    "ObservedValueEstimator",
    "EstimatorFactory",
]
