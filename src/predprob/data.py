"""
Adapters from sampler and data-frame containers to plain arrays.

Posterior draws usually come out of a sampler as an ArviZ ``InferenceData``
(or ``DataTree``) whose posterior group holds variables with ``chain`` and
``draw`` dimensions. The helpers here flatten those into the
(n_samples, n_coefficients) matrix the estimators expect, and build design
frames with an explicit intercept column.
"""

from __future__ import annotations

from collections.abc import Hashable, Sequence
from typing import TYPE_CHECKING, Any

import numpy as np
import pandas as pd
import xarray as xr
from loguru import logger

from .exceptions import EmptyInputError, InvalidInputError

if TYPE_CHECKING:
    from numpy.typing import NDArray


def _posterior_group(posterior: Any) -> Any:
    """Return the posterior group of an InferenceData/DataTree, or the input."""
    if isinstance(posterior, xr.Dataset):
        return posterior
    group = getattr(posterior, "posterior", None)
    if group is None:
        raise InvalidInputError(
            f"Expected an InferenceData, DataTree or xarray Dataset, got {type(posterior).__name__}"
        )
    return group


def _flatten_variable(data: xr.DataArray, name: str) -> NDArray:
    """Flatten sample dimensions to (n_samples, n_coefficients)."""
    dims = list(data.dims)
    if "chain" in dims and "draw" in dims:
        data = data.transpose("chain", "draw", ...)
        n_sample_dims = 2
    elif "sample" in dims:
        data = data.transpose("sample", ...)
        n_sample_dims = 1
    else:
        raise InvalidInputError(
            f"Variable '{name}' has dims {dims}; expected ('chain', 'draw', ...) or ('sample', ...)"
        )

    arr = np.asarray(data.values, dtype=float)
    n_samples = int(np.prod(arr.shape[:n_sample_dims]))
    coef_shape = arr.shape[n_sample_dims:]
    if len(coef_shape) > 1:
        raise InvalidInputError(
            f"Variable '{name}' has {len(coef_shape)} coefficient dims; expected at most 1"
        )
    return arr.reshape(n_samples, int(np.prod(coef_shape)))


def draws_from_posterior(
    posterior: Any,
    var_names: str | Sequence[str],
    intercept_var: str | None = None,
) -> NDArray[np.floating]:
    """
    Flatten posterior coefficient samples into a draw matrix.

    Chains are concatenated in order, so row ``c * n_draw + d`` holds draw
    ``d`` of chain ``c``.

    Parameters
    ----------
    posterior : InferenceData | DataTree | xr.Dataset
        Sampler output. Objects with a ``posterior`` attribute use that
        group; xarray Datasets are used directly.
    var_names : str | Sequence[str]
        Coefficient variables, stacked column-wise in the given order. Each
        is a scalar or a 1-D vector per sample.
    intercept_var : str, optional
        Scalar intercept variable placed in column 0.

    Returns
    -------
    NDArray
        Draw matrix, shape (n_samples, n_coefficients), with columns in the
        same order the design matrix must use.

    Raises
    ------
    InvalidInputError
        If a variable is missing or has unsupported dimensions, or if the
        variables disagree on the number of samples.
    EmptyInputError
        If the posterior holds no samples.

    Examples
    --------
    >>> draws = draws_from_posterior(idata, ["beta"], intercept_var="alpha")
    >>> draws.shape
    (4000, 4)
    """
    group = _posterior_group(posterior)
    names = [var_names] if isinstance(var_names, str) else list(var_names)
    if intercept_var is not None:
        names = [intercept_var, *names]
    if not names:
        raise InvalidInputError("No posterior variables requested")

    blocks = []
    for name in names:
        try:
            data = group[name]
        except KeyError:
            raise InvalidInputError(f"Variable '{name}' not found in posterior") from None
        blocks.append(_flatten_variable(data, name))

    n_samples = {block.shape[0] for block in blocks}
    if len(n_samples) != 1:
        raise InvalidInputError(f"Posterior variables disagree on sample count: {sorted(n_samples)}")

    draws = np.concatenate(blocks, axis=1)
    if draws.shape[0] == 0:
        raise EmptyInputError("draws", "posterior holds no samples")

    logger.debug(f"Flattened posterior {names} to draw matrix of shape {draws.shape}")
    return draws


def design_from_frame(
    frame: pd.DataFrame,
    columns: Sequence[Hashable],
    intercept: bool = True,
    intercept_name: str = "Intercept",
) -> pd.DataFrame:
    """
    Build a design frame from selected columns of a data frame.

    Parameters
    ----------
    frame : pd.DataFrame
        Source data, one row per observation.
    columns : Sequence[Hashable]
        Covariates in the coefficient order of the fitted model.
    intercept : bool, default=True
        Prepend a constant column of ones.
    intercept_name : str, default="Intercept"
        Label of the intercept column.

    Returns
    -------
    pd.DataFrame
        Float design frame sharing ``frame``'s index.
    """
    missing = [c for c in columns if c not in frame.columns]
    if missing:
        raise InvalidInputError(f"Columns not found in frame: {missing}")

    try:
        design = frame.loc[:, list(columns)].astype(float)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(f"Design columns must be numeric: {e}") from e
    if intercept:
        if intercept_name in design.columns:
            raise InvalidInputError(f"Column '{intercept_name}' already exists in frame")
        design.insert(0, intercept_name, 1.0)
    return design


__all__ = [
    "draws_from_posterior",
    "design_from_frame",
]
