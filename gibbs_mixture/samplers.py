# pylint: disable=too-many-arguments

import time
from typing import List, Tuple, Union

import numpy as np
from tqdm import tqdm

from gibbs_mixture.state import Prior, State, Trajectory

# constants
LOG_2PI = 0.5 * np.log(2 * np.pi)
DEFAULT_N_ITER = 1000
DEFAULT_INIT_SD = 10.0

Seed = Union[None, int, np.random.Generator]


def _check_weights(pi: np.ndarray, mu: np.ndarray):
    if pi.ndim != 1 or mu.ndim != 1 or len(pi) != len(mu) or len(pi) == 0:
        raise ValueError(
            f"pi and mu must be 1-d of equal positive length, got shapes "
            f"{pi.shape} and {mu.shape}"
        )
    if np.any(pi < 0) or not np.isclose(pi.sum(), 1.0, rtol=0.0, atol=1e-8):
        raise ValueError(f"pi must be non-negative and sum to 1, got {pi}")


def _check_assignments(z, K: int) -> np.ndarray:
    z = np.asarray(z)
    if z.size == 0:
        z = z.astype(np.int64)
    if K < 1:
        raise ValueError(f"K must be at least 1, got {K}")
    if z.ndim != 1 or not np.issubdtype(z.dtype, np.integer):
        raise ValueError(
            f"z must be a 1-d integer array, got shape {z.shape} and dtype {z.dtype}"
        )
    if len(z) > 0 and (z.min() < 0 or z.max() >= K):
        raise ValueError(f"z labels must lie in [0, K={K}), got {z.min()}..{z.max()}")
    return z


def _check_observations(y) -> np.ndarray:
    y = np.asarray(y, dtype=float)
    if y.ndim != 1:
        raise ValueError(f"y must be 1-d, got shape {y.shape}")
    return y


def sample_z(
    y: np.ndarray, pi: np.ndarray, mu: np.ndarray, rng: np.random.Generator
) -> np.ndarray:
    """
    Sample cluster assignments for each data point.

    Each assignment is drawn independently with probability proportional
    to pi_k * N(y_j; mu_k, 1).

    Args:
        y: Observed data points.
        pi: Mixture weights for each component.
        mu: Mean parameters for each component.
        rng: Random number generator.

    Returns:
        New cluster assignments (0-based component indices).
    """
    y = np.asarray(y, dtype=float)
    pi = np.asarray(pi, dtype=float)
    mu = np.asarray(mu, dtype=float)
    _check_weights(pi, mu)

    with np.errstate(divide="ignore"):
        log_prior = np.log(pi)
    diff = y[:, np.newaxis] - mu[np.newaxis, :]
    logw = log_prior[np.newaxis, :] - 0.5 * diff**2 - LOG_2PI
    logw -= logw.max(axis=1, keepdims=True)
    probs = np.exp(logw)
    probs /= probs.sum(axis=1, keepdims=True)
    cdf = np.cumsum(probs, axis=1)
    # scale u by the row total so rounding never reaches a zero-weight tail
    u = rng.random((len(y), 1)) * cdf[:, -1:]
    return (cdf > u).argmax(axis=1)


def sample_pi(
    z: np.ndarray, K: int, rng: np.random.Generator, alpha: float = 1.0
) -> np.ndarray:
    """
    Sample mixture weights from the posterior Dirichlet distribution.

    Args:
        z: Current cluster assignments.
        K: Number of mixture components.
        rng: Random number generator.
        alpha: Symmetric Dirichlet concentration parameter (1 is uniform).

    Returns:
        New mixture weights, a point on the K-simplex.
    """
    z = _check_assignments(z, K)
    pi = rng.dirichlet(alpha + np.bincount(z, minlength=K))
    return pi / pi.sum()


def posterior_mu_params(
    y: np.ndarray, z: np.ndarray, K: int, prior: Prior
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Conjugate posterior of each component mean under unit variance.

    The sample mean of an empty component is taken as 0; with a count of
    0 it drops out and the posterior is the prior.

    Args:
        y: Observed data points.
        z: Current cluster assignments.
        K: Number of mixture components.
        prior: Prior mean and precision of the component means.

    Returns:
        Tuple of (post_mean, post_prec), each of length K.
    """
    z = _check_assignments(z, K)
    y = _check_observations(y)
    if len(y) != len(z):
        raise ValueError(f"y and z must have equal length, got {len(y)} and {len(z)}")
    n_k = np.bincount(z, minlength=K).astype(float)
    sum_y = np.bincount(z, weights=y, minlength=K)
    ybar = np.zeros(K)
    np.divide(sum_y, n_k, out=ybar, where=n_k > 0)

    post_prec = n_k + prior.tau0
    post_mean = (prior.m0 * prior.tau0 + ybar * n_k) / post_prec
    return post_mean, post_prec


def sample_mu(
    y: np.ndarray,
    z: np.ndarray,
    K: int,
    rng: np.random.Generator,
    prior: Prior = Prior(),
) -> np.ndarray:
    """
    Sample mean parameters from their posterior normal distributions.

    Args:
        y: Observed data points.
        z: Current cluster assignments.
        K: Number of mixture components.
        rng: Random number generator.
        prior: Prior mean and precision of the component means.

    Returns:
        New mean parameters for each component.
    """
    post_mean, post_prec = posterior_mu_params(y, z, K, prior)
    return rng.normal(post_mean, np.sqrt(1.0 / post_prec))


def initialize_state(
    y: np.ndarray, K: int, rng: np.random.Generator, init_sd: float = DEFAULT_INIT_SD
) -> State:
    """
    Draw the starting state of a chain.

    Weights start uniform, means are drawn from N(0, init_sd^2) and the
    assignments are sampled given both.
    """
    pi = np.ones(K) / K
    mu = rng.normal(0.0, init_sd, K)
    return State(sample_z(y, pi, mu, rng), pi, mu)


def gibbs_step(
    y: np.ndarray,
    z: np.ndarray,
    K: int,
    rng: np.random.Generator,
    prior: Prior = Prior(),
) -> State:
    """
    Perform one step of the Gibbs sampler.

    Samples pi and mu given the previous assignments, then new
    assignments given pi and mu.

    Args:
        y: Observed data points.
        z: Assignments of the previous iteration.
        K: Number of mixture components.
        rng: Random number generator.
        prior: Prior mean and precision of the component means.

    Returns:
        New state after one Gibbs sampling step.
    """
    pi = sample_pi(z, K, rng)
    mu = sample_mu(y, z, K, rng, prior)
    return State(sample_z(y, pi, mu, rng), pi, mu)


def run_chain(
    y: np.ndarray,
    K: int,
    n_iter: int = DEFAULT_N_ITER,
    seed: Seed = None,
    prior: Prior = Prior(),
    init_sd: float = DEFAULT_INIT_SD,
    verbose: bool = False,
    loading_bar: bool = False,
) -> Trajectory:
    """
    Run a single Gibbs sampling chain.

    Always performs exactly n_iter iterations (the first one being the
    initial state) and keeps all of them; burn-in is discarded by the
    caller.

    Args:
        y: Observed data points.
        K: Number of mixture components.
        n_iter: Total number of iterations, including the initial state.
        seed: Random seed or generator for reproducibility.
        prior: Prior mean and precision of the component means.
        init_sd: Standard deviation of the initial means around 0.
        verbose: Whether to print verbose output.
        loading_bar: Whether to show a progress bar.

    Returns:
        Trajectory with n_iter rows of mu, pi and z.

    Raises:
        ValueError: If K < 1, n_iter < 1, init_sd <= 0 or y is not 1-d.
    """
    y = _check_observations(y)
    if K < 1:
        raise ValueError(f"K must be at least 1, got {K}")
    if n_iter < 1:
        raise ValueError(f"n_iter must be at least 1, got {n_iter}")
    if not init_sd > 0:
        raise ValueError(f"init_sd must be positive, got {init_sd}")

    rng = np.random.default_rng(seed)
    trajectory = Trajectory.empty(n_iter, K, len(y))

    t0 = time.perf_counter()
    state = initialize_state(y, K, rng, init_sd)
    trajectory.record(0, state)

    iterations = (
        tqdm(range(1, n_iter)) if (verbose or loading_bar) else range(1, n_iter)
    )
    for it in iterations:
        state = gibbs_step(y, state.z, K, rng, prior)
        trajectory.record(it, state)

    trajectory.runtime = time.perf_counter() - t0
    if verbose:
        print(f"Chain finished: {n_iter} iterations in {trajectory.runtime:.2f}s")
    return trajectory


def run_chains(
    y: np.ndarray,
    K: int,
    n_iter: int = DEFAULT_N_ITER,
    base_seed: int = 0,
    n_chains: int = 4,
    prior: Prior = Prior(),
    init_sd: float = DEFAULT_INIT_SD,
    verbose: bool = False,
    loading_bar: bool = False,
) -> List[Trajectory]:
    """
    Run several independent chains one after the other.

    Args:
        y: Observed data points.
        K: Number of mixture components.
        n_iter: Total number of iterations per chain.
        base_seed: Base seed to generate unique seeds for each chain.
        n_chains: Number of chains to run.
        prior: Prior mean and precision of the component means.
        init_sd: Standard deviation of the initial means around 0.
        verbose: Whether to print verbose output.
        loading_bar: Whether to show progress bars.

    Returns:
        List of trajectories, one per chain.
    """
    if n_chains < 1:
        raise ValueError(f"n_chains must be at least 1, got {n_chains}")
    seeds = [base_seed + i * 1000 for i in range(n_chains)]
    if verbose:
        print(f"Running {n_chains} Gibbs chains…")
    return [
        run_chain(y, K, n_iter, seed, prior, init_sd, verbose, loading_bar)
        for seed in seeds
    ]
