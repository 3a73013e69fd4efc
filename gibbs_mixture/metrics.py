from typing import List, Tuple

import numpy as np

from gibbs_mixture.state import Trajectory

PARAM_NAMES = ("mu", "pi")
DEFAULT_ALPHA = 0.1


def credible_interval(samples: np.ndarray, alpha: float = DEFAULT_ALPHA):
    """
    Compute an equal-tailed credible interval from posterior samples.

    Args:
        samples: Posterior samples.
        alpha: Tail mass outside the interval (default 0.1, i.e. the 5th and
            95th percentiles).

    Returns:
        Tuple of (lower, upper) bounds of the credible interval.
    """
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")
    lower = np.percentile(samples, 100 * alpha / 2)
    upper = np.percentile(samples, 100 * (1 - alpha / 2))
    return lower, upper


def compute_credible_intervals(pooled: np.ndarray, alpha: float = DEFAULT_ALPHA):
    """
    Compute credible intervals for every column of pooled posterior samples.

    Args:
        pooled: Posterior samples, shape (n_samples, K).
        alpha: Tail mass outside the interval.

    Returns:
        Tuple of (lower, upper) arrays of length K.
    """
    if not 0 < alpha < 1:
        raise ValueError(f"alpha must be in (0, 1), got {alpha}")
    lower_percentile = 100 * alpha / 2
    upper_percentile = 100 * (1 - alpha / 2)

    percentiles = np.percentile(pooled, [lower_percentile, upper_percentile], axis=0)

    return percentiles[0], percentiles[1]


def posterior_samples(
    trajectory: Trajectory, burn: int, param_name: str = "mu", relabel: bool = True
) -> np.ndarray:
    """
    Post burn-in draws of one parameter of a chain.

    Args:
        trajectory: Output of a chain.
        burn: Number of initial iterations to discard.
        param_name: "mu" or "pi".
        relabel: Sort the components of each iteration by mean first.

    Returns:
        Array of shape (n_iter - burn, K).
    """
    if param_name not in PARAM_NAMES:
        raise ValueError(f"param_name must be one of {PARAM_NAMES}, got {param_name}")
    kept = trajectory.discard(burn)
    if relabel:
        kept = kept.relabel()
    return getattr(kept, param_name)


def pool_chains(
    trajectories: List[Trajectory],
    burn: int,
    param_name: str = "mu",
    relabel: bool = True,
) -> np.ndarray:
    """Stack the post burn-in draws of several chains."""
    return np.vstack(
        [posterior_samples(t, burn, param_name, relabel) for t in trajectories]
    )


def create_metrics(
    trajectory: Trajectory,
    burn: int,
    param_name: str = "mu",
    alpha: float = DEFAULT_ALPHA,
    relabel: bool = True,
) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """
    Posterior summaries of one parameter of a chain.

    Args:
        trajectory: Output of a chain.
        burn: Number of initial iterations to discard.
        param_name: "mu" or "pi".
        alpha: Tail mass outside the credible intervals.
        relabel: Sort the components of each iteration by mean first, so
            that label switching does not mix components.

    Returns:
        Tuple containing:
        - param_mean: Posterior mean for each component
        - ci_lower: Lower bounds of the credible intervals
        - ci_upper: Upper bounds of the credible intervals
    """
    samples = posterior_samples(trajectory, burn, param_name, relabel)
    ci_lower, ci_upper = compute_credible_intervals(samples, alpha)
    return samples.mean(axis=0), ci_lower, ci_upper
