"""
Tests for configuration classes.
"""

import pytest
from pydantic import ValidationError

from predprob import (
    AverageCasePolicy,
    LinkFunction,
    PredictionConfig,
    SummaryConfig,
)


class TestSummaryConfig:
    """Tests for SummaryConfig."""

    def test_defaults(self):
        """Default is the equal-tailed 95% interval with linear quantiles."""
        config = SummaryConfig()

        assert config.lower_quantile == 0.025
        assert config.upper_quantile == 0.975
        assert config.quantile_method == "linear"
        assert config.ci_prob == pytest.approx(0.95)

    def test_from_ci_prob(self):
        config = SummaryConfig.from_ci_prob(0.9)

        assert config.lower_quantile == pytest.approx(0.05)
        assert config.upper_quantile == pytest.approx(0.95)

    @pytest.mark.parametrize("ci_prob", [0.0, 1.0, 1.5, -0.1])
    def test_from_ci_prob_invalid(self, ci_prob):
        with pytest.raises(ValueError):
            SummaryConfig.from_ci_prob(ci_prob)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"lower_quantile": -0.1},
            {"lower_quantile": 0.6},
            {"upper_quantile": 0.4},
            {"upper_quantile": 1.1},
            {"quantile_method": "cubic"},
            {"unknown": 1},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            SummaryConfig(**kwargs)

    def test_frozen(self):
        config = SummaryConfig()
        with pytest.raises(ValidationError):
            config.lower_quantile = 0.1


class TestPredictionConfig:
    """Tests for PredictionConfig."""

    def test_defaults(self):
        config = PredictionConfig()

        assert config.link is LinkFunction.LOGIT
        assert config.average_policy is AverageCasePolicy.MEAN
        assert config.summary == SummaryConfig()
        assert config.draw_chunk_size is None
        assert config.n_jobs == 1

    def test_string_enums(self):
        config = PredictionConfig(link="probit", average_policy="mode_for_binary")

        assert config.link is LinkFunction.PROBIT
        assert config.average_policy is AverageCasePolicy.MODE_FOR_BINARY

    def test_nested_summary(self):
        config = PredictionConfig(summary={"lower_quantile": 0.05, "upper_quantile": 0.95})
        assert config.summary.ci_prob == pytest.approx(0.9)

    @pytest.mark.parametrize(
        "kwargs",
        [
            {"link": "cloglog"},
            {"draw_chunk_size": 0},
            {"n_jobs": 0},
            {"n_jobs": -2},
        ],
    )
    def test_invalid_values(self, kwargs):
        with pytest.raises(ValidationError):
            PredictionConfig(**kwargs)

    def test_all_cores(self):
        assert PredictionConfig(n_jobs=-1).n_jobs == -1

    def test_model_dump_round_trip(self):
        config = PredictionConfig(link="probit", draw_chunk_size=100)
        assert PredictionConfig(**config.model_dump()) == config
