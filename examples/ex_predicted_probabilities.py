"""
Predicted Probabilities Example
===============================

Walks through the predicted probability workflow on simulated turnout data:

1. Simulate a design matrix and posterior coefficient draws for a logit model
2. Compute average-case (King et al.) predicted probabilities
3. Compute observed-value (Hanmer & Kalkan) predicted probabilities
4. Compare the two approaches side by side

Draws here come from a normal approximation around known coefficients so
the example runs without a sampler. With a real model, pass the sampler's
InferenceData to ``draws_from_posterior``.
"""

import numpy as np
import pandas as pd
from loguru import logger

logger.enable("predprob")

from predprob import (
    PredictedProbabilityAnalyzer,
    PredictionConfig,
    SummaryConfig,
    design_from_frame,
)

# =============================================================================
# Simulated data
# =============================================================================

rng = np.random.default_rng(2024)
n_obs, n_draws = 500, 2000

data = pd.DataFrame(
    {
        "age": rng.integers(18, 90, n_obs).astype(float),
        "female": rng.binomial(1, 0.52, n_obs).astype(float),
        "education": rng.integers(8, 21, n_obs).astype(float),
    }
)

design = design_from_frame(data, ["age", "female", "education"])

beta_mean = np.array([-4.0, 0.03, 0.25, 0.18])
beta_sd = np.array([0.40, 0.004, 0.12, 0.02])
draws = pd.DataFrame(
    beta_mean + beta_sd * rng.standard_normal((n_draws, 4)),
    columns=design.columns,
)

# =============================================================================
# Predicted probabilities
# =============================================================================

config = PredictionConfig(link="logit", summary=SummaryConfig.from_ci_prob(0.95))
analyzer = PredictedProbabilityAnalyzer(design, draws, config=config)

ages = np.arange(20, 90, 10, dtype=float)

average = analyzer.average_case("age", ages)
observed = analyzer.observed_value("age", ages)

print("Average case (covariates at sample means)")
print(average.to_dataframe().round(3).to_string(index=False))
print()
print("Observed value (averaged over respondents)")
print(observed.to_dataframe().round(3).to_string(index=False))
print()

# =============================================================================
# Comparison
# =============================================================================

comparison = analyzer.compare("age", ages)
wide = comparison.pivot(index="predictor_value", columns="approach", values="median_pp")
wide["difference"] = wide["observed_value"] - wide["average_case"]
print("Median predicted probability by approach")
print(wide.round(3).to_string())
