"""
predprob

Posterior predicted probabilities for Bayesian logit/probit models.
Turns a matrix of MCMC coefficient draws and a design matrix into
median and credible-interval summaries of P(y=1) as one covariate is swept
over a range, under the average-case and observed-value conventions.
"""

from loguru import logger

from .config import (
    # Enums
    LinkFunction,
    Approach,
    AverageCasePolicy,
    # Config classes
    SummaryConfig,
    PredictionConfig,
)

from .exceptions import (
    PredProbError,
    DimensionMismatchError,
    InvalidColumnIndexError,
    EmptyInputError,
    InvalidInputError,
)

from .links import inverse_link, logistic_cdf, normal_cdf

from .estimators import (
    ProbabilityMatrixProducer,
    BaseEstimator,
    AverageCaseEstimator,
    ObservedValueEstimator,
    EstimatorFactory,
    typical_covariate_profile,
)

from .summary import PosteriorSummarizer, PredictionRecord, ResultTable

from .analysis import (
    PredictedProbabilityAnalyzer,
    focal_range,
    predicted_probabilities,
)

from .data import design_from_frame, draws_from_posterior

logger.disable("predprob")

__version__ = "0.1.0"

__all__ = [
    # Enums
    "LinkFunction",
    "Approach",
    "AverageCasePolicy",
    # Config classes
    "SummaryConfig",
    "PredictionConfig",
    # Exceptions
    "PredProbError",
    "DimensionMismatchError",
    "InvalidColumnIndexError",
    "EmptyInputError",
    "InvalidInputError",
    # Links
    "inverse_link",
    "logistic_cdf",
    "normal_cdf",
    # Estimators
    "ProbabilityMatrixProducer",
    "BaseEstimator",
    "AverageCaseEstimator",
    "ObservedValueEstimator",
    "EstimatorFactory",
    "typical_covariate_profile",
    # Summaries
    "PosteriorSummarizer",
    "PredictionRecord",
    "ResultTable",
    # Analysis
    "PredictedProbabilityAnalyzer",
    "focal_range",
    "predicted_probabilities",
    # Data adapters
    "design_from_frame",
    "draws_from_posterior",
]
