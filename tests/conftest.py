"""
Pytest configuration and fixtures for predprob tests.
"""

import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def rng():
    """Seeded random number generator for reproducible tests."""
    return np.random.default_rng(42)


@pytest.fixture
def simple_design():
    """Intercept plus one covariate with x = 0, 1, 2."""
    return np.array(
        [
            [1.0, 0.0],
            [1.0, 1.0],
            [1.0, 2.0],
        ]
    )


@pytest.fixture
def single_draw():
    """One posterior draw: intercept 0, slope 1."""
    return np.array([[0.0, 1.0]])


@pytest.fixture
def logistic_data(rng):
    """Simulated design (intercept, age, female, income) and posterior-like draws."""
    n_obs, n_draws = 200, 400
    age = rng.uniform(18, 80, n_obs)
    female = rng.binomial(1, 0.45, n_obs).astype(float)
    income = rng.normal(0, 1, n_obs)
    design = np.column_stack([np.ones(n_obs), age, female, income])

    true_beta = np.array([-3.0, 0.05, 0.4, -0.6])
    draws = true_beta + rng.normal(0, 0.05, size=(n_draws, 4)) * np.array([1.0, 0.02, 1.0, 1.0])
    return design, draws


@pytest.fixture
def logistic_frames(logistic_data):
    """The simulated data as labelled DataFrames."""
    design, draws = logistic_data
    columns = ["Intercept", "age", "female", "income"]
    return pd.DataFrame(design, columns=columns), pd.DataFrame(draws, columns=columns)
