"""
Tests for utility functions.
"""

import numpy as np
import pytest


class TestComputeQuantileBounds:
    """Tests for compute_quantile_bounds utility function."""

    def test_basic_computation(self):
        """Test basic bounds computation."""
        from predprob.utils import compute_quantile_bounds

        np.random.seed(42)
        samples = np.random.randn(1000, 10)  # 1000 samples, 10 points

        lower, upper = compute_quantile_bounds(samples)

        assert lower.shape == (10,)
        assert upper.shape == (10,)
        assert np.all(lower < upper)

    def test_different_axis(self):
        """Test bounds along the second axis."""
        from predprob.utils import compute_quantile_bounds

        np.random.seed(42)
        samples = np.random.randn(50, 100)

        lower, upper = compute_quantile_bounds(samples, axis=1)
        assert lower.shape == (50,)
        assert upper.shape == (50,)

    def test_linear_interpolation_values(self):
        """Linear method interpolates between order statistics."""
        from predprob.utils import compute_quantile_bounds

        samples = np.array([0.0, 10.0, 20.0])

        lower, upper = compute_quantile_bounds(samples, 0.025, 0.975)

        assert lower == pytest.approx(0.5)
        assert upper == pytest.approx(19.5)

    def test_method_changes_result(self):
        """Other quantile conventions give different bounds."""
        from predprob.utils import compute_quantile_bounds

        samples = np.array([0.0, 10.0, 20.0])

        lower, upper = compute_quantile_bounds(samples, 0.025, 0.975, method="nearest")

        assert lower == 0.0
        assert upper == 20.0


class TestComputeCredibleBounds:
    """Tests for compute_credible_bounds utility function."""

    def test_default_prob(self):
        """Default 95% interval covers about 95% of samples."""
        from predprob.utils import compute_credible_bounds

        np.random.seed(42)
        samples = np.random.randn(2000, 5)

        lower, upper = compute_credible_bounds(samples)

        within_bounds = np.mean((samples >= lower) & (samples <= upper))
        assert 0.93 < within_bounds < 0.97

    def test_narrower_with_lower_prob(self):
        """A 50% interval is narrower than a 95% one."""
        from predprob.utils import compute_credible_bounds

        np.random.seed(42)
        samples = np.random.randn(1000, 5)

        lower_50, upper_50 = compute_credible_bounds(samples, ci_prob=0.50)
        lower_95, upper_95 = compute_credible_bounds(samples, ci_prob=0.95)

        assert np.all(upper_50 - lower_50 < upper_95 - lower_95)

    def test_percentile_values(self):
        """Bounds sit at the expected quantiles of a uniform grid."""
        from predprob.utils import compute_credible_bounds

        samples = np.linspace(0, 100, 101).reshape(-1, 1)

        lower, upper = compute_credible_bounds(samples, ci_prob=0.90)

        assert abs(lower[0] - 5.0) < 1e-9
        assert abs(upper[0] - 95.0) < 1e-9
