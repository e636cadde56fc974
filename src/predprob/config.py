"""
Configuration classes for predicted probability computation.

Holds the link function, estimation approach, average-case policy and
credible interval settings. Uses Pydantic for validation and type safety.
"""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, model_validator


# =============================================================================
# Enums
# =============================================================================


class LinkFunction(str, Enum):
    """Supported link functions for binary-outcome models."""

    LOGIT = "logit"
    PROBIT = "probit"


class Approach(str, Enum):
    """Counterfactual convention used to build predicted probabilities."""

    AVERAGE_CASE = "average_case"  # King et al.
    OBSERVED_VALUE = "observed_value"  # Hanmer & Kalkan


class AverageCasePolicy(str, Enum):
    """How non-focal covariates are fixed in the average-case approach."""

    MEAN = "mean"
    MODE_FOR_BINARY = "mode_for_binary"


QuantileMethod = Literal[
    "linear",
    "lower",
    "higher",
    "midpoint",
    "nearest",
    "inverted_cdf",
    "averaged_inverted_cdf",
    "closest_observation",
    "interpolated_inverted_cdf",
    "hazen",
    "weibull",
    "median_unbiased",
    "normal_unbiased",
]


# =============================================================================
# Summary configuration
# =============================================================================


class SummaryConfig(BaseModel):
    """Configuration for summarizing per-draw probabilities.

    The default gives the equal-tailed 95% credible interval with
    ``numpy.quantile(method="linear")`` (linear interpolation between order
    statistics, Hyndman & Fan type 7).
    """

    lower_quantile: float = Field(default=0.025, ge=0.0, lt=0.5)
    upper_quantile: float = Field(default=0.975, gt=0.5, le=1.0)
    quantile_method: QuantileMethod = "linear"

    model_config = {"extra": "forbid", "frozen": True}

    @classmethod
    def from_ci_prob(
        cls, ci_prob: float = 0.95, quantile_method: QuantileMethod = "linear"
    ) -> SummaryConfig:
        """Build an equal-tailed interval holding ``ci_prob`` of the mass."""
        if not 0.0 < ci_prob < 1.0:
            raise ValueError(f"ci_prob must be in (0, 1), got {ci_prob}")
        alpha = (1 - ci_prob) / 2
        return cls(
            lower_quantile=alpha,
            upper_quantile=1 - alpha,
            quantile_method=quantile_method,
        )

    @property
    def ci_prob(self) -> float:
        """Probability mass between the two quantiles."""
        return self.upper_quantile - self.lower_quantile


# =============================================================================
# Prediction configuration
# =============================================================================


class PredictionConfig(BaseModel):
    """Complete configuration for a predicted probability computation."""

    link: LinkFunction = LinkFunction.LOGIT
    average_policy: AverageCasePolicy = AverageCasePolicy.MEAN
    summary: SummaryConfig = Field(default_factory=SummaryConfig)

    # Observed-value memory/parallelism knobs
    draw_chunk_size: int | None = Field(
        default=None, ge=1, description="Draws processed per matrix product"
    )
    n_jobs: int = Field(
        default=1, description="Parallel workers over range values (-1 = all cores)"
    )

    model_config = {"extra": "forbid", "frozen": True}

    @model_validator(mode="after")
    def _check_n_jobs(self) -> PredictionConfig:
        if self.n_jobs == 0 or self.n_jobs < -1:
            raise ValueError(f"n_jobs must be a positive integer or -1, got {self.n_jobs}")
        return self


__all__ = [
    "LinkFunction",
    "Approach",
    "AverageCasePolicy",
    "QuantileMethod",
    "SummaryConfig",
    "PredictionConfig",
]
