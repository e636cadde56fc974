"""Analysis utilities for predicted probabilities.

This module ties estimators and the posterior summarizer together: a
high-level analyzer bound to one design matrix and one set of posterior
draws, a one-shot :func:`predicted_probabilities` function, and helpers for
building focal ranges and comparing the two counterfactual approaches.
"""

from __future__ import annotations

from collections.abc import Hashable
from typing import TYPE_CHECKING

import numpy as np
import pandas as pd
from loguru import logger

from .config import Approach, LinkFunction, PredictionConfig
from .estimators import EstimatorFactory
from .exceptions import InvalidInputError
from .links import resolve_link
from .summary import PosteriorSummarizer, ResultTable
from .validation import (
    align_design_and_draws,
    as_design_matrix,
    resolve_focal_column,
)

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


def focal_range(
    design: ArrayLike | pd.DataFrame,
    column: int | Hashable,
    n_points: int = 100,
) -> NDArray[np.floating]:
    """
    Evenly spaced values between the observed min and max of a column.

    Parameters
    ----------
    design : ArrayLike | pd.DataFrame
        Design matrix.
    column : int | Hashable
        0-based focal column position, or label for DataFrame designs.
    n_points : int, default=100
        Number of values.

    Returns
    -------
    NDArray
        Increasing values, shape (n_points,).
    """
    if n_points < 1:
        raise InvalidInputError(f"n_points must be at least 1, got {n_points}")
    X = as_design_matrix(design)
    names = list(design.columns) if isinstance(design, pd.DataFrame) else None
    idx = resolve_focal_column(column, X.shape[1], names)
    values = X[:, idx]
    return np.linspace(values.min(), values.max(), n_points)


def _with_link(config: PredictionConfig | None, link: LinkFunction | str | None) -> PredictionConfig:
    config = config or PredictionConfig()
    if link is not None:
        config = config.model_copy(update={"link": resolve_link(link)})
    return config


def predicted_probabilities(
    design: ArrayLike | pd.DataFrame,
    draws: ArrayLike | pd.DataFrame,
    column: int | Hashable,
    values: ArrayLike | None = None,
    approach: Approach | str = Approach.OBSERVED_VALUE,
    link: LinkFunction | str | None = None,
    config: PredictionConfig | None = None,
    n_points: int = 100,
) -> ResultTable:
    """
    Compute summarized predicted probabilities in one call.

    Parameters
    ----------
    design : ArrayLike | pd.DataFrame
        Design matrix including intercept, shape (n_obs, n_columns).
    draws : ArrayLike | pd.DataFrame
        Posterior draws, shape (n_draws, n_columns).
    column : int | Hashable
        Focal column.
    values : ArrayLike, optional
        Focal values. Defaults to :func:`focal_range` with ``n_points``.
    approach : Approach | str, default="observed_value"
        ``"average_case"`` or ``"observed_value"``.
    link : LinkFunction | str, optional
        Overrides ``config.link`` (logit by default).
    config : PredictionConfig, optional
        Full configuration.
    n_points : int, default=100
        Number of focal values when ``values`` is None.

    Returns
    -------
    ResultTable
        One record per focal value, in order.
    """
    analyzer = PredictedProbabilityAnalyzer(design, draws, config=_with_link(config, link))
    return analyzer.predict(column, values=values, approach=approach, n_points=n_points)


class PredictedProbabilityAnalyzer:
    """Analyzer for posterior predicted probabilities of a binary outcome.

    Provides methods for:
    - Average-case predicted probabilities
    - Observed-value predicted probabilities
    - Side-by-side comparison of both approaches

    Parameters
    ----------
    design : ArrayLike | pd.DataFrame
        Design matrix including intercept, shape (n_obs, n_columns).
    draws : ArrayLike | pd.DataFrame
        Posterior coefficient draws, shape (n_draws, n_columns).
    config : PredictionConfig, optional
        Link, average-case policy and summary settings.
    link : LinkFunction | str, optional
        Overrides ``config.link``.

    Examples
    --------
    >>> from predprob import PredictedProbabilityAnalyzer
    >>> analyzer = PredictedProbabilityAnalyzer(X, draws, link="logit")
    >>> table = analyzer.observed_value("age", n_points=50)
    >>> table.to_dataframe().head()

    >>> comparison = analyzer.compare("age")
    """

    def __init__(
        self,
        design: ArrayLike | pd.DataFrame,
        draws: ArrayLike | pd.DataFrame,
        config: PredictionConfig | None = None,
        link: LinkFunction | str | None = None,
    ):
        self._design = design
        self._draws = draws
        self.config = _with_link(config, link)
        self._validate_inputs()

    def _validate_inputs(self) -> None:
        """Validate that design and draws are aligned and finite."""
        X, B, _ = align_design_and_draws(self._design, self._draws)
        self._n_obs, self._n_columns = X.shape
        self._n_draws = B.shape[0]

    @property
    def column_names(self) -> list[Hashable] | None:
        """Get design column labels, if the design is a DataFrame."""
        if isinstance(self._design, pd.DataFrame):
            return list(self._design.columns)
        return None

    @property
    def n_obs(self) -> int:
        return self._n_obs

    @property
    def n_draws(self) -> int:
        return self._n_draws

    @property
    def summarizer(self) -> PosteriorSummarizer:
        return PosteriorSummarizer(self.config.summary)

    def focal_range(self, column: int | Hashable, n_points: int = 100) -> NDArray[np.floating]:
        """Evenly spaced values spanning the observed range of ``column``."""
        return focal_range(self._design, column, n_points)

    def probability_matrix(
        self,
        column: int | Hashable,
        values: ArrayLike | None = None,
        approach: Approach | str = Approach.OBSERVED_VALUE,
        n_points: int = 100,
    ) -> NDArray[np.floating]:
        """
        Compute unsummarized per-draw probabilities.

        Returns
        -------
        NDArray
            Shape (n_values, n_draws).
        """
        if values is None:
            values = self.focal_range(column, n_points)
        estimator = EstimatorFactory.create(approach, self.config)
        return estimator.compute(self._design, self._draws, column, values)

    def predict(
        self,
        column: int | Hashable,
        values: ArrayLike | None = None,
        approach: Approach | str = Approach.OBSERVED_VALUE,
        n_points: int = 100,
    ) -> ResultTable:
        """
        Compute summarized predicted probabilities for a focal column.

        Parameters
        ----------
        column : int | Hashable
            Focal column position or label.
        values : ArrayLike, optional
            Focal values in reporting order. Defaults to ``n_points``
            evenly spaced values over the observed range.
        approach : Approach | str
            ``"average_case"`` or ``"observed_value"``.
        n_points : int
            Number of focal values when ``values`` is None.

        Returns
        -------
        ResultTable
            One record per focal value.
        """
        estimator = EstimatorFactory.create(approach, self.config)
        if values is None:
            values = self.focal_range(column, n_points)

        probs = estimator.compute(self._design, self._draws, column, values)
        idx = resolve_focal_column(column, self._n_columns, self.column_names)
        label = self.column_names[idx] if self.column_names is not None else idx

        logger.debug(
            f"Summarizing {probs.shape[0]} values x {probs.shape[1]} draws "
            f"for column {label!r}"
        )
        return self.summarizer.summarize(
            probs,
            values,
            metadata={
                "approach": estimator.approach.value,
                "link": self.config.link.value,
                "column": label,
            },
        )

    def average_case(
        self,
        column: int | Hashable,
        values: ArrayLike | None = None,
        n_points: int = 100,
    ) -> ResultTable:
        """Predicted probabilities with other covariates at their typical values."""
        return self.predict(column, values, Approach.AVERAGE_CASE, n_points)

    def observed_value(
        self,
        column: int | Hashable,
        values: ArrayLike | None = None,
        n_points: int = 100,
    ) -> ResultTable:
        """Predicted probabilities averaged over observed covariate profiles."""
        return self.predict(column, values, Approach.OBSERVED_VALUE, n_points)

    def compare(
        self,
        column: int | Hashable,
        values: ArrayLike | None = None,
        n_points: int = 100,
    ) -> pd.DataFrame:
        """
        Compare average-case and observed-value predictions.

        Returns
        -------
        pd.DataFrame
            Long format with an ``approach`` column followed by the
            ResultTable columns, average case first. Within each approach
            rows follow ``values`` order.
        """
        if values is None:
            values = self.focal_range(column, n_points)

        frames = []
        for approach in (Approach.AVERAGE_CASE, Approach.OBSERVED_VALUE):
            df = self.predict(column, values, approach).to_dataframe()
            df.insert(0, "approach", approach.value)
            frames.append(df)

        return pd.concat(frames, ignore_index=True)


__all__ = [
    "focal_range",
    "predicted_probabilities",
    "PredictedProbabilityAnalyzer",
]
