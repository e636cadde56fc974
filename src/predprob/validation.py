"""
Input coercion and precondition checks.

Every estimator funnels its arguments through :func:`prepare_inputs`, which
returns private float copies of the inputs so callers' arrays and frames are
never touched during computation.
"""

from __future__ import annotations

from collections.abc import Hashable
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd

from .exceptions import (
    DimensionMismatchError,
    EmptyInputError,
    InvalidColumnIndexError,
    InvalidInputError,
)

if TYPE_CHECKING:
    from numpy.typing import ArrayLike, NDArray


@dataclass(frozen=True)
class PreparedInputs:
    """Validated inputs for a single estimator call.

    Attributes
    ----------
    design : NDArray
        Design matrix, shape (n_obs, n_columns).
    draws : NDArray
        Posterior coefficient draws, shape (n_draws, n_columns).
    column : int
        0-based position of the focal column.
    values : NDArray
        Values substituted into the focal column, shape (n_values,).
    column_names : list[str] | None
        Design column labels when the design was a DataFrame.
    """

    design: NDArray
    draws: NDArray
    column: int
    values: NDArray
    column_names: list[Hashable] | None = None

    @property
    def n_obs(self) -> int:
        return self.design.shape[0]

    @property
    def n_columns(self) -> int:
        return self.design.shape[1]

    @property
    def n_draws(self) -> int:
        return self.draws.shape[0]

    @property
    def n_values(self) -> int:
        return self.values.shape[0]

    @property
    def column_name(self) -> Hashable | None:
        if self.column_names is None:
            return None
        return self.column_names[self.column]


def _to_float_array(data: Any, name: str) -> NDArray:
    """Convert array-like or DataFrame to a fresh float64 array."""
    try:
        if isinstance(data, (pd.DataFrame, pd.Series)):
            return data.to_numpy(dtype=float, copy=True)
        return np.array(data, dtype=float, copy=True)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"{name} must be numeric: {e}") from e


def _check_finite(arr: NDArray, name: str) -> None:
    if not np.all(np.isfinite(arr)):
        n_bad = int(np.sum(~np.isfinite(arr)))
        raise InvalidInputError(f"{name} contains {n_bad} non-finite value(s)")


def as_design_matrix(design: ArrayLike | pd.DataFrame) -> NDArray:
    """
    Coerce a design matrix to a 2-D float array.

    Raises
    ------
    InvalidInputError
        If the design is not 2-D or not numeric.
    EmptyInputError
        If the design has no observations or no columns.
    """
    arr = _to_float_array(design, "design matrix")
    if arr.ndim != 2:
        raise InvalidInputError(
            f"design matrix must be 2-D (observations x terms), got {arr.ndim}-D"
        )
    if arr.shape[0] == 0:
        raise EmptyInputError("observations", "design matrix has no observations")
    if arr.shape[1] == 0:
        raise EmptyInputError("columns", "design matrix has no columns")
    return arr


def as_posterior_draws(draws: ArrayLike | pd.DataFrame) -> NDArray:
    """
    Coerce posterior draws to a 2-D float array, one row per draw.

    A 1-D input is read as a single draw.
    """
    arr = _to_float_array(draws, "posterior draws")
    if arr.size == 0:
        raise EmptyInputError("draws", "no posterior draws supplied")
    if arr.ndim == 1:
        arr = arr.reshape(1, -1)
    if arr.ndim != 2:
        raise InvalidInputError(
            f"posterior draws must be 2-D (draws x coefficients), got {arr.ndim}-D"
        )
    return arr


def as_value_range(values: ArrayLike) -> NDArray:
    """Coerce the focal value range to a 1-D float array, preserving order."""
    arr = _to_float_array(values, "value range")
    if arr.ndim == 0:
        arr = arr.reshape(1)
    if arr.ndim != 1:
        raise InvalidInputError(f"value range must be 1-D, got {arr.ndim}-D")
    if arr.size == 0:
        raise EmptyInputError("values", "value range is empty")
    return arr


def resolve_focal_column(
    column: int | Hashable,
    n_columns: int,
    column_names: list[Hashable] | None = None,
) -> int:
    """
    Resolve a focal column identifier to a 0-based position.

    Parameters
    ----------
    column : int | Hashable
        0-based integer position, or a column label when ``column_names``
        is given.
    n_columns : int
        Number of design columns.
    column_names : list, optional
        Design column labels.

    Returns
    -------
    int
        Position in ``[0, n_columns)``.

    Raises
    ------
    InvalidColumnIndexError
        If the position is out of range or the label is unknown.
    """
    if isinstance(column, (bool, np.bool_)):
        raise InvalidColumnIndexError(f"Focal column must be an index or label, got {column!r}")

    if column_names is not None and not isinstance(column, (int, np.integer)):
        if column not in column_names:
            raise InvalidColumnIndexError(
                f"Unknown focal column {column!r}; available: {column_names}"
            )
        return column_names.index(column)

    if not isinstance(column, (int, np.integer)):
        raise InvalidColumnIndexError(
            f"Focal column {column!r} is not an integer position and the design "
            "matrix has no column labels"
        )

    if not 0 <= column < n_columns:
        raise InvalidColumnIndexError(
            f"Focal column index {column} outside [0, {n_columns - 1}]"
        )
    return int(column)


def align_design_and_draws(
    design: ArrayLike | pd.DataFrame,
    draws: ArrayLike | pd.DataFrame,
) -> tuple[NDArray, NDArray, list[Hashable] | None]:
    """
    Coerce a design matrix and posterior draws and check they belong together.

    Returns
    -------
    tuple
        ``(design, draws, column_names)`` where the arrays are private float
        copies and ``column_names`` holds the design labels for DataFrame
        designs, otherwise None.

    Raises
    ------
    EmptyInputError
        Empty draws or design.
    DimensionMismatchError
        Draw width differs from the design column count, or DataFrame labels
        disagree.
    InvalidInputError
        Non-numeric, non-finite, or wrongly shaped input.
    """
    X = as_design_matrix(design)
    B = as_posterior_draws(draws)

    if B.shape[1] != X.shape[1]:
        raise DimensionMismatchError(
            f"Posterior draws have {B.shape[1]} coefficients but the design "
            f"matrix has {X.shape[1]} columns"
        )

    column_names = list(design.columns) if isinstance(design, pd.DataFrame) else None
    if column_names is not None and isinstance(draws, pd.DataFrame):
        if list(draws.columns) != column_names:
            raise DimensionMismatchError(
                f"Draw columns {list(draws.columns)} do not match design "
                f"columns {column_names}"
            )

    _check_finite(X, "design matrix")
    _check_finite(B, "posterior draws")
    return X, B, column_names


def prepare_inputs(
    design: ArrayLike | pd.DataFrame,
    draws: ArrayLike | pd.DataFrame,
    column: int | Hashable,
    values: ArrayLike,
) -> PreparedInputs:
    """
    Validate and coerce all estimator inputs.

    Raises
    ------
    EmptyInputError
        Empty range, draws, or design.
    DimensionMismatchError
        Draw width differs from the design column count, or DataFrame labels
        disagree.
    InvalidColumnIndexError
        Focal column not found.
    InvalidInputError
        Non-numeric, non-finite, or wrongly shaped input.
    """
    X, B, column_names = align_design_and_draws(design, draws)
    v = as_value_range(values)
    idx = resolve_focal_column(column, X.shape[1], column_names)
    _check_finite(v, "value range")

    return PreparedInputs(design=X, draws=B, column=idx, values=v, column_names=column_names)


__all__ = [
    "PreparedInputs",
    "as_design_matrix",
    "as_posterior_draws",
    "as_value_range",
    "resolve_focal_column",
    "align_design_and_draws",
    "prepare_inputs",
]
