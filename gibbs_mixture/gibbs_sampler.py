# pylint: disable=too-many-arguments
# pylint: disable=too-many-locals

import argparse
import warnings
from pathlib import Path
from typing import Dict, List, Optional, Sequence

import numpy as np

from gibbs_mixture.generate_data import simulate_mixture
from gibbs_mixture.metrics import DEFAULT_ALPHA, create_metrics, posterior_samples
from gibbs_mixture.plots import (
    create_density_plot,
    create_histogram_plots,
    create_interval_plot,
    create_trace_plots,
)
from gibbs_mixture.samplers import DEFAULT_INIT_SD, DEFAULT_N_ITER, run_chain
from gibbs_mixture.state import Prior
from gibbs_mixture.utils import (
    add_gibbs_args,
    create_output_message,
    parse_float_list,
    parse_prior_args,
    parse_sizes,
    print_parameter_summary,
    print_runtime_summary,
)

def run_size_study(
    sizes: Sequence[int],
    means: Sequence[float],
    weights: Sequence[float],
    K: Optional[int] = None,
    n_iter: int = DEFAULT_N_ITER,
    burn: int = 100,
    seed: int = 0,
    prior: Prior = Prior(),
    init_sd: float = DEFAULT_INIT_SD,
    alpha: float = DEFAULT_ALPHA,
    verbose: bool = False,
    loading_bar: bool = False,
) -> List[Dict]:
    """
    Run the sampler on simulated datasets of increasing size.

    One dataset is simulated per size and one chain is run on it; data
    and chain seeds are drawn from a single master generator.

    Args:
        sizes: Number of observations of each dataset.
        means: True component means.
        weights: True mixture weights.
        K: Number of components fitted (defaults to len(means)).
        n_iter: Iterations per chain.
        burn: Burn-in discarded before the summaries.
        seed: Master random seed.
        prior: Prior of the component means.
        init_sd: Standard deviation of the initial means.
        alpha: Tail mass outside the credible intervals.
        verbose: Whether to print verbose output.
        loading_bar: Whether to show progress bars.

    Returns:
        One dict per size with keys "n", "y", "trajectory", "mu" and "pi",
        the last two holding (mean, ci_lower, ci_upper) tuples.
    """
    if K is None:
        K = len(means)
    if not 0 <= burn < n_iter:
        raise ValueError(f"burn must be in [0, n_iter={n_iter}), got {burn}")

    rng_master = np.random.default_rng(seed)
    results = []
    for n in sizes:
        y, _ = simulate_mixture(n, list(means), list(weights), rng_master)
        if verbose:
            print(f"Running Gibbs chain on n={n} observations…")
        trajectory = run_chain(
            y,
            K,
            n_iter,
            int(rng_master.integers(2**32)),
            prior,
            init_sd,
            verbose,
            loading_bar,
        )
        results.append(
            {
                "n": n,
                "y": y,
                "trajectory": trajectory,
                "mu": create_metrics(trajectory, burn, "mu", alpha),
                "pi": create_metrics(trajectory, burn, "pi", alpha),
            }
        )
    return results


def create_study_plots(
    results: List[Dict],
    means: Sequence[float],
    weights: Sequence[float],
    burn: int,
    figures_dir: str,
):
    """Write the data, trace, histogram and interval figures of a study."""
    figures = Path(figures_dir)
    titles = [f"n = {r['n']}" for r in results]

    largest = max(results, key=lambda r: r["n"])
    create_density_plot(
        means,
        weights,
        [1.0] * len(means),
        data=largest["y"],
        output_path=figures / "data_histogram.png",
    )
    for param_name in ("mu", "pi"):
        create_trace_plots(
            [getattr(r["trajectory"], param_name) for r in results],
            titles,
            param_name,
            output_path=figures / f"gibbs_trace_{param_name}.png",
        )
        create_histogram_plots(
            [posterior_samples(r["trajectory"], burn, param_name) for r in results],
            titles,
            param_name,
            output_path=figures / f"gibbs_hist_{param_name}.png",
        )
    create_interval_plot(
        [r["n"] for r in results],
        np.array([r["mu"][0] for r in results]),
        np.array([r["mu"][1] for r in results]),
        np.array([r["mu"][2] for r in results]),
        true_means=means,
        output_path=figures / "gibbs_intervals_mu.png",
    )


def main(argv=None):
    warnings.filterwarnings("ignore", category=DeprecationWarning)

    ap = argparse.ArgumentParser(
        description="Gibbs Sampler for a normal mixture with known unit variance"
    )
    add_gibbs_args(ap)
    args = ap.parse_args(argv)

    sizes = parse_sizes(args.sizes)
    means = parse_float_list(args.means, "means")
    weights = parse_float_list(args.weights, "weights")
    prior = parse_prior_args(args)

    results = run_size_study(
        sizes,
        means,
        weights,
        K=args.K,
        n_iter=args.n_iter,
        burn=args.burn,
        seed=args.seed,
        prior=prior,
        init_sd=args.init_sd,
        alpha=args.alpha,
        verbose=args.verbose,
        loading_bar=args.loading_bar,
    )

    print("\n=== GIBBS SUMMARY ===")
    for result in results:
        print(f"\nn = {result['n']}")
        print_parameter_summary("μ", result["mu"])
        print_parameter_summary("π", result["pi"])
    print_runtime_summary([r["trajectory"].runtime for r in results])

    if not args.no_plots:
        create_study_plots(results, means, weights, args.burn, args.figures)
        print(create_output_message(args.figures))

    return results


if __name__ == "__main__":
    main()
