import numpy as np

from gibbs_mixture.state import Prior


def parse_float_list(arg_str, param_name):
    """Parse a comma-separated list of numbers.

    Args:
        arg_str: String containing comma-separated values
        param_name: Name of the parameter for error messages

    Returns:
        List of floats

    Raises:
        ValueError: If the string is empty or holds a non-numeric value
    """
    try:
        values = [float(x) for x in arg_str.split(",") if x.strip()]
    except ValueError as exc:
        raise ValueError(
            f"{param_name} must be comma-separated numbers, got {arg_str!r}"
        ) from exc
    if not values:
        raise ValueError(f"{param_name} must hold at least one value")
    return values


def parse_sizes(arg_str):
    """Parse the comma-separated dataset sizes.

    Raises:
        ValueError: If a size is not a non-negative integer
    """
    sizes = parse_float_list(arg_str, "sizes")
    if any(s < 0 or s != int(s) for s in sizes):
        raise ValueError(f"sizes must be non-negative integers, got {arg_str!r}")
    return [int(s) for s in sizes]


def add_common_args(subparser):
    """Add common arguments to an argument parser.

    Args:
        subparser: ArgumentParser subparser to add arguments to
    """
    subparser.add_argument(
        "--K",
        type=int,
        default=None,
        help="Number of mixture components (defaults to the number of true means)",
    )
    subparser.add_argument(
        "--verbose", action="store_true", help="Indicates if verbose output is desired"
    )
    subparser.add_argument(
        "--loading_bar", action="store_true", help="Show a progress bar per chain"
    )


def add_data_args(subparser):
    """Add simulated data arguments to an argument parser.

    Args:
        subparser: ArgumentParser subparser to add arguments to
    """
    subparser.add_argument(
        "--sizes",
        type=str,
        default="50,200,1000",
        help="Dataset sizes (comma-separated values)",
    )
    subparser.add_argument(
        "--means",
        type=str,
        default="-2.0,2.0",
        help="True component means (comma-separated values)",
    )
    subparser.add_argument(
        "--weights",
        type=str,
        default="0.5,0.5",
        help="True mixture weights (comma-separated values)",
    )


def add_sampling_args(subparser, n_iter=1000, burn=100):
    """Add sampling-related arguments to an argument parser.

    Args:
        subparser: ArgumentParser subparser to add arguments to
        n_iter: Default number of iterations
        burn: Default burn-in period
    """
    subparser.add_argument(
        "--n_iter", type=int, default=n_iter, help="Number of iterations"
    )
    subparser.add_argument("--burn", type=int, default=burn, help="Burn-in period")
    subparser.add_argument("--seed", type=int, default=0, help="Random seed")
    subparser.add_argument(
        "--init_sd",
        type=float,
        default=10.0,
        help="Standard deviation of the initial means",
    )


def add_prior_args(subparser):
    """Add prior parameter arguments to an argument parser.

    Args:
        subparser: ArgumentParser subparser to add arguments to
    """
    subparser.add_argument(
        "--m0", type=float, default=0.0, help="Prior mean of the component means"
    )
    subparser.add_argument(
        "--tau0",
        type=float,
        default=0.1,
        help="Prior precision of the component means",
    )


def add_output_args(subparser):
    """Add summary and figure arguments to an argument parser.

    Args:
        subparser: ArgumentParser subparser to add arguments to
    """
    subparser.add_argument(
        "--alpha",
        type=float,
        default=0.1,
        help="Tail mass outside the credible intervals",
    )
    subparser.add_argument(
        "--figures", type=str, default="figures", help="Output directory of the figures"
    )
    subparser.add_argument(
        "--no_plots", action="store_true", help="Skip writing the figures"
    )


def add_gibbs_args(subparser):
    """Add all arguments for the Gibbs sampler script.

    Args:
        subparser: ArgumentParser subparser to add arguments to
    """
    add_common_args(subparser)
    add_data_args(subparser)
    add_sampling_args(subparser)
    add_prior_args(subparser)
    add_output_args(subparser)


def parse_prior_args(args):
    """Build the prior from parsed command line args."""
    return Prior(m0=args.m0, tau0=args.tau0)


def print_parameter_summary(param_symbol, metrics):
    """Print formatted parameter summary statistics.

    Args:
        param_symbol: Symbol for the parameter (e.g., "μ", "π")
        metrics: Tuple of (mean_vals, ci_lower, ci_upper)
    """
    mean_vals, ci_lower, ci_upper = metrics
    print(f"Posterior mean {param_symbol}      :", np.round(mean_vals, 4))
    print(f"CI lower {param_symbol}            :", np.round(ci_lower, 4))
    print(f"CI upper {param_symbol}            :", np.round(ci_upper, 4))


def print_runtime_summary(times):
    """Print runtime summary.

    Args:
        times: List of runtime values
    """
    print(f"\nMean runtime / chain: {np.mean(times):.2f}s")


def create_output_message(figures_dir):
    """Create standardized output message for the figure files.

    Args:
        figures_dir: Directory the figures were written to

    Returns:
        Formatted output message string
    """
    return f"\nPNG figures saved in {figures_dir}"
