from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from gibbs_mixture.plots import create_density_plot

EXAMPLES = {
    "example_1": {"means": [-2.0, 2.0], "weights": [0.5, 0.5]},
    "example_2": {"means": [-2.0, 0.0, 3.0], "weights": [0.3, 0.3, 0.4]},
    "example_3": {"means": [-5.0, 0.0, 2.0, 5.0], "weights": [0.2, 0.3, 0.1, 0.4]},
}


def simulate_mixture(
    n: int,
    means: List[float],
    weights: List[float],
    rng: np.random.Generator,
    sigmas: Optional[List[float]] = None,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Draw n points from a mixture of normal distributions.

    Args:
        n: Number of data points to generate.
        means: Mean of each normal component.
        weights: Mixture weights of each component (must sum to 1).
        rng: Random number generator.
        sigmas: Standard deviation of each component (defaults to 1).

    Returns:
        Tuple of (data, classes) where classes holds the 0-based component
        each point was drawn from.

    Raises:
        ValueError: If the lengths of means, weights and sigmas don't match,
            the weights are not a probability vector or n is negative.
    """
    if sigmas is None:
        sigmas = [1.0] * len(means)

    if not len(means) == len(weights) == len(sigmas):
        raise ValueError("The lengths of means, weights and sigmas must be equal")

    if len(means) == 0:
        raise ValueError("At least one component is required")

    if any(w < 0 for w in weights) or not np.isclose(sum(weights), 1.0):
        raise ValueError("The weights must be non-negative and sum to 1")

    if n < 0:
        raise ValueError(f"n must be non-negative, got {n}")

    K = len(means)
    p = np.asarray(weights, dtype=float)
    classes = rng.choice(K, size=n, p=p / p.sum())
    means_array = np.array(means, dtype=float)
    sigmas_array = np.array(sigmas, dtype=float)
    data = rng.normal(means_array[classes], sigmas_array[classes])
    return data, classes


def generate_data(
    n: int,
    means: List[float],
    weights: List[float],
    sigmas: Optional[List[float]],
    name: str,
    seed: int = 0,
    figures_dir: str = "figures",
) -> np.ndarray:
    """
    Simulate a dataset and save figures describing it.

    Writes the theoretical density of the mixture and the histogram of
    the simulated data against it to '{figures_dir}/{name}/'.

    Args:
        n: Number of data points to generate.
        means: Mean of each normal component.
        weights: Mixture weights of each component.
        sigmas: Standard deviation of each component (None for unit).
        name: Name identifier for the dataset (used for the figure directory).
        seed: Random seed.
        figures_dir: Root directory of the figures.

    Returns:
        The simulated data.
    """
    if sigmas is None:
        sigmas = [1.0] * len(means)
    rng = np.random.default_rng(seed)
    data, _ = simulate_mixture(n, means, weights, rng, sigmas)

    figure_dir = Path(figures_dir) / name
    create_density_plot(
        means, weights, sigmas, output_path=figure_dir / "generator_density.png"
    )
    create_density_plot(
        means, weights, sigmas, data=data, output_path=figure_dir / "data_histogram.png"
    )
    return data


if __name__ == "__main__":
    for example_name, params in EXAMPLES.items():
        generate_data(600, params["means"], params["weights"], None, example_name)
        print(f"Figures for {example_name} saved in figures/{example_name}")
