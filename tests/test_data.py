"""
Tests for posterior and design adapters.
"""

from types import SimpleNamespace

import numpy as np
import pandas as pd
import pytest
import xarray as xr

from predprob import (
    EmptyInputError,
    InvalidInputError,
    design_from_frame,
    draws_from_posterior,
)


@pytest.fixture
def posterior(rng):
    """Posterior with 2 chains x 5 draws, scalar alpha and 3-vector beta."""
    alpha = rng.normal(size=(2, 5))
    beta = rng.normal(size=(2, 5, 3))
    return xr.Dataset(
        {
            "alpha": (("chain", "draw"), alpha),
            "beta": (("chain", "draw", "coef"), beta),
        },
        coords={"chain": [0, 1], "draw": np.arange(5), "coef": ["a", "b", "c"]},
    )


class TestDrawsFromPosterior:
    """Tests for draws_from_posterior."""

    def test_intercept_first(self, posterior):
        draws = draws_from_posterior(posterior, "beta", intercept_var="alpha")

        assert draws.shape == (10, 4)
        np.testing.assert_array_equal(draws[:, 0], posterior["alpha"].values.reshape(-1))
        np.testing.assert_array_equal(draws[:, 1:], posterior["beta"].values.reshape(10, 3))

    def test_chains_concatenated_in_order(self, posterior):
        draws = draws_from_posterior(posterior, ["alpha"])

        np.testing.assert_array_equal(draws[:5, 0], posterior["alpha"].values[0])
        np.testing.assert_array_equal(draws[5:, 0], posterior["alpha"].values[1])

    def test_transposed_dims(self, posterior):
        """Dimension order in the container does not matter."""
        transposed = posterior.transpose("coef", "draw", "chain")
        np.testing.assert_array_equal(
            draws_from_posterior(transposed, "beta"),
            draws_from_posterior(posterior, "beta"),
        )

    def test_inference_data_like(self, posterior):
        """Objects exposing a posterior group are unwrapped."""
        idata = SimpleNamespace(posterior=posterior)
        np.testing.assert_array_equal(
            draws_from_posterior(idata, "beta"),
            draws_from_posterior(posterior, "beta"),
        )

    def test_stacked_sample_dim(self, posterior):
        stacked = posterior.stack(sample=("chain", "draw"))
        draws = draws_from_posterior(stacked, "beta", intercept_var="alpha")
        np.testing.assert_array_equal(
            draws, draws_from_posterior(posterior, "beta", intercept_var="alpha")
        )

    def test_missing_variable(self, posterior):
        with pytest.raises(InvalidInputError, match="not found"):
            draws_from_posterior(posterior, "gamma")

    def test_unsupported_container(self):
        with pytest.raises(InvalidInputError):
            draws_from_posterior(np.zeros((3, 2)), "beta")

    def test_no_sample_dims(self):
        ds = xr.Dataset({"beta": (("coef",), np.zeros(3))})
        with pytest.raises(InvalidInputError, match="dims"):
            draws_from_posterior(ds, "beta")

    def test_matrix_valued_variable(self):
        ds = xr.Dataset({"beta": (("chain", "draw", "i", "j"), np.zeros((1, 2, 2, 2)))})
        with pytest.raises(InvalidInputError, match="coefficient dims"):
            draws_from_posterior(ds, "beta")

    def test_empty_posterior(self):
        ds = xr.Dataset({"beta": (("chain", "draw", "coef"), np.zeros((1, 0, 2)))})
        with pytest.raises(EmptyInputError):
            draws_from_posterior(ds, "beta")


class TestDesignFromFrame:
    """Tests for design_from_frame."""

    @pytest.fixture
    def frame(self):
        return pd.DataFrame(
            {
                "age": [25, 40, 61],
                "female": [1, 0, 1],
                "vote": [0, 1, 1],
            }
        )

    def test_intercept_column(self, frame):
        design = design_from_frame(frame, ["age", "female"])

        assert list(design.columns) == ["Intercept", "age", "female"]
        assert (design["Intercept"] == 1.0).all()
        assert design.dtypes.eq(float).all()

    def test_no_intercept(self, frame):
        design = design_from_frame(frame, ["female", "age"], intercept=False)
        assert list(design.columns) == ["female", "age"]

    def test_source_not_modified(self, frame):
        original = frame.copy()
        design_from_frame(frame, ["age"])
        pd.testing.assert_frame_equal(frame, original)

    def test_missing_column(self, frame):
        with pytest.raises(InvalidInputError, match="not found"):
            design_from_frame(frame, ["age", "income"])

    def test_duplicate_intercept_name(self, frame):
        with pytest.raises(InvalidInputError):
            design_from_frame(frame, ["age"], intercept_name="age")

    def test_feeds_estimators(self, frame):
        """Frames from both adapters plug straight into the analyzer."""
        from predprob import PredictedProbabilityAnalyzer

        design = design_from_frame(frame, ["age", "female"])
        draws = np.array([[-2.0, 0.05, 0.3], [-2.1, 0.04, 0.2]])

        table = PredictedProbabilityAnalyzer(design, draws).average_case("female", [0.0, 1.0])
        assert table.metadata["column"] == "female"
        assert table[1].median_pp > table[0].median_pp
