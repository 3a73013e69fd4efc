"""Tests for the posterior summaries."""

import numpy as np
import pytest

from gibbs_mixture.metrics import (
    compute_credible_intervals,
    create_metrics,
    credible_interval,
    pool_chains,
    posterior_samples,
)
from gibbs_mixture.state import Trajectory


@pytest.fixture
def switching_trajectory():
    """Ten iterations whose labels switch after the first five."""
    mu = np.array([[-2.0, 2.0]] * 5 + [[2.0, -2.0]] * 5)
    pi = np.array([[0.4, 0.6]] * 5 + [[0.6, 0.4]] * 5)
    z = np.zeros((10, 4), dtype=np.int64)
    return Trajectory(mu=mu, pi=pi, z=z)


def test_credible_interval_default_is_5_95():
    samples = np.arange(101.0)
    lower, upper = credible_interval(samples)
    assert lower == pytest.approx(5.0)
    assert upper == pytest.approx(95.0)


def test_credible_interval_custom_alpha():
    lower, upper = credible_interval(np.arange(101.0), alpha=0.5)
    assert lower == pytest.approx(25.0)
    assert upper == pytest.approx(75.0)


@pytest.mark.parametrize("alpha", [0.0, 1.0, -0.1])
def test_credible_interval_rejects_invalid_alpha(alpha):
    with pytest.raises(ValueError, match="alpha"):
        credible_interval(np.arange(10.0), alpha=alpha)


def test_compute_credible_intervals_columnwise():
    pooled = np.column_stack([np.arange(101.0), np.arange(101.0) * 2])
    lower, upper = compute_credible_intervals(pooled)
    np.testing.assert_allclose(lower, [5.0, 10.0])
    np.testing.assert_allclose(upper, [95.0, 190.0])


def test_posterior_samples_discards_burn_in_and_relabels(switching_trajectory):
    samples = posterior_samples(switching_trajectory, burn=2)
    assert samples.shape == (8, 2)
    np.testing.assert_array_equal(samples, np.tile([-2.0, 2.0], (8, 1)))


def test_posterior_samples_without_relabel(switching_trajectory):
    samples = posterior_samples(switching_trajectory, burn=0, relabel=False)
    np.testing.assert_array_equal(samples, switching_trajectory.mu)


def test_posterior_samples_rejects_unknown_parameter(switching_trajectory):
    with pytest.raises(ValueError, match="param_name"):
        posterior_samples(switching_trajectory, burn=0, param_name="sigma2")


def test_create_metrics_mu(switching_trajectory):
    mean, lower, upper = create_metrics(switching_trajectory, burn=1)
    np.testing.assert_allclose(mean, [-2.0, 2.0])
    np.testing.assert_allclose(lower, [-2.0, 2.0])
    np.testing.assert_allclose(upper, [-2.0, 2.0])


def test_create_metrics_pi_follows_mean_order(switching_trajectory):
    mean, _, _ = create_metrics(switching_trajectory, burn=0, param_name="pi")
    np.testing.assert_allclose(mean, [0.4, 0.6])


def test_create_metrics_interval_contains_mean(rng):
    mu = rng.normal([-1.0, 1.0], 0.1, size=(500, 2))
    trajectory = Trajectory(
        mu=mu, pi=np.full((500, 2), 0.5), z=np.zeros((500, 1), dtype=np.int64)
    )
    mean, lower, upper = create_metrics(trajectory, burn=50)
    assert np.all(lower < mean)
    assert np.all(mean < upper)


def test_pool_chains(switching_trajectory):
    pooled = pool_chains([switching_trajectory, switching_trajectory], burn=4)
    assert pooled.shape == (12, 2)
    np.testing.assert_array_equal(pooled[:, 0], -2.0)
