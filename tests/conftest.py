"""Shared fixtures for the Gibbs mixture tests."""

import os

import numpy as np
import pytest

from gibbs_mixture.generate_data import simulate_mixture


@pytest.fixture(scope="function")
def rng() -> np.random.Generator:
    """Provide a deterministic numpy RNG for tests.

    Uses seed from TEST_RNG_SEED environment variable (default: 0).
    """
    seed = int(os.environ.get("TEST_RNG_SEED", "0"))
    return np.random.default_rng(seed)


@pytest.fixture(scope="module")
def two_cluster_data() -> np.ndarray:
    """1000 points from an equal-weight mixture of N(-2, 1) and N(2, 1)."""
    y, _ = simulate_mixture(1000, [-2.0, 2.0], [0.5, 0.5], np.random.default_rng(2024))
    return y
