"""
Posterior summaries of predicted probabilities.

Reduces a probability matrix (rows = focal values, columns = draws) to one
record per focal value holding the posterior median and credible bounds.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from .config import SummaryConfig
from .exceptions import DimensionMismatchError, EmptyInputError, InvalidInputError
from .utils import compute_quantile_bounds
from .validation import as_value_range

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True)
class PredictionRecord:
    """Summary of the predicted probability at one focal value.

    Attributes
    ----------
    predictor_value : float
        Value of the focal covariate.
    median_pp : float
        Posterior median of the predicted probability.
    lower_pp : float
        Lower credible bound.
    upper_pp : float
        Upper credible bound.
    """

    predictor_value: float
    median_pp: float
    lower_pp: float
    upper_pp: float


@dataclass
class ResultTable:
    """
    Ordered predicted probability summaries, one record per focal value.

    Record order equals the order of the range passed in; it is never
    sorted.

    Attributes
    ----------
    records : list[PredictionRecord]
        Summaries in input order.
    lower_quantile : float
        Quantile level of ``lower_pp``.
    upper_quantile : float
        Quantile level of ``upper_pp``.
    metadata : dict
        Free-form context (approach, link, focal column) set by callers.
    """

    records: list[PredictionRecord]
    lower_quantile: float = 0.025
    upper_quantile: float = 0.975
    metadata: dict[str, Any] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self) -> Iterator[PredictionRecord]:
        return iter(self.records)

    def __getitem__(self, idx: int) -> PredictionRecord:
        return self.records[idx]

    @property
    def predictor_values(self) -> NDArray:
        return np.array([r.predictor_value for r in self.records])

    @property
    def median_pp(self) -> NDArray:
        return np.array([r.median_pp for r in self.records])

    @property
    def lower_pp(self) -> NDArray:
        return np.array([r.lower_pp for r in self.records])

    @property
    def upper_pp(self) -> NDArray:
        return np.array([r.upper_pp for r in self.records])

    def to_dataframe(self) -> pd.DataFrame:
        """Get records as a DataFrame with one row per focal value."""
        df = pd.DataFrame(
            {
                "predictor_value": self.predictor_values,
                "median_pp": self.median_pp,
                "lower_pp": self.lower_pp,
                "upper_pp": self.upper_pp,
            }
        )
        df.attrs.update(self.metadata)
        df.attrs["lower_quantile"] = self.lower_quantile
        df.attrs["upper_quantile"] = self.upper_quantile
        return df


class PosteriorSummarizer:
    """
    Summarize per-draw predicted probabilities.

    Parameters
    ----------
    config : SummaryConfig, optional
        Quantile levels and method. Defaults to the equal-tailed 95%
        interval with linear interpolation between order statistics.

    Examples
    --------
    >>> import numpy as np
    >>> from predprob import PosteriorSummarizer
    >>> probs = np.array([[0.6225, 0.7311, 0.8176]])
    >>> table = PosteriorSummarizer().summarize(probs, [1.0])
    >>> round(table[0].median_pp, 4)
    0.7311
    """

    def __init__(self, config: SummaryConfig | None = None):
        self.config = config or SummaryConfig()

    def summarize(
        self,
        probability_matrix: ArrayLike,
        values: ArrayLike,
        metadata: dict[str, Any] | None = None,
    ) -> ResultTable:
        """
        Reduce each row of the probability matrix to median and bounds.

        Parameters
        ----------
        probability_matrix : ArrayLike
            Shape (n_values, n_draws).
        values : ArrayLike
            Focal values, one per matrix row, in the order to report.
        metadata : dict, optional
            Stored on the returned table.

        Returns
        -------
        ResultTable
            One record per row, in input order.

        Raises
        ------
        DimensionMismatchError
            If the number of rows differs from the number of values.
        EmptyInputError
            If the matrix has no draw columns.
        InvalidInputError
            If the matrix is not 2-D or contains values outside [0, 1].
        """
        probs = np.asarray(probability_matrix, dtype=float)
        v = as_value_range(values)

        if probs.ndim != 2:
            raise InvalidInputError(
                f"probability matrix must be 2-D (values x draws), got {probs.ndim}-D"
            )
        if probs.shape[0] != v.shape[0]:
            raise DimensionMismatchError(
                f"probability matrix has {probs.shape[0]} rows but "
                f"{v.shape[0]} values were given"
            )
        if probs.shape[1] == 0:
            raise EmptyInputError("draws", "probability matrix has no draw columns")
        if not np.all((probs >= 0.0) & (probs <= 1.0)):
            raise InvalidInputError("probability matrix has entries outside [0, 1]")

        cfg = self.config
        median = np.quantile(probs, 0.5, axis=1, method=cfg.quantile_method)
        lower, upper = compute_quantile_bounds(
            probs,
            lower_quantile=cfg.lower_quantile,
            upper_quantile=cfg.upper_quantile,
            axis=1,
            method=cfg.quantile_method,
        )

        records = [
            PredictionRecord(
                predictor_value=float(v[i]),
                median_pp=float(median[i]),
                lower_pp=float(lower[i]),
                upper_pp=float(upper[i]),
            )
            for i in range(v.shape[0])
        ]
        return ResultTable(
            records=records,
            lower_quantile=cfg.lower_quantile,
            upper_quantile=cfg.upper_quantile,
            metadata=dict(metadata or {}),
        )


__all__ = [
    "PredictionRecord",
    "ResultTable",
    "PosteriorSummarizer",
]
