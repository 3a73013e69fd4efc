# pylint: disable=too-many-locals
# pylint: disable=too-many-arguments

from pathlib import Path
from typing import List, Optional, Sequence, Union

import numpy as np
import plotly.graph_objects as go
import plotly.subplots as sp
from scipy.stats import norm

PathLike = Union[str, Path]

COLORS = [
    "blue",
    "red",
    "green",
    "orange",
    "purple",
    "brown",
    "pink",
    "gray",
    "olive",
    "cyan",
]


def setup_plot_colors_and_positions(K: int, n_panels: int):
    """Set up colors and subplot positions for trajectory plots.

    Args:
        K: Number of mixture components.
        n_panels: Number of panels (chains or datasets).

    Returns:
        Tuple of (param_colors, positions) where param_colors maps
        component indices to colors and positions contains subplot
        coordinates for each panel.
    """
    param_colors = {k: COLORS[k % len(COLORS)] for k in range(K)}

    cols = min(2, n_panels)
    positions = []
    for i in range(n_panels):
        row = (i // cols) + 1
        col = (i % cols) + 1
        positions.append((row, col))

    return param_colors, positions


def get_param_label(param_name: str, k: Optional[int] = None) -> str:
    """Get parameter label for plots."""
    if param_name == "mu":
        return f"\\mu_{{{k + 1}}}" if k is not None else "\\mu"
    if param_name == "pi":
        return f"\\pi_{{{k + 1}}}" if k is not None else "\\pi"

    return f"{param_name}_{{{k + 1}}}" if k is not None else param_name


def _finish(fig: go.Figure, output_path: Optional[PathLike]) -> go.Figure:
    fig.update_layout(plot_bgcolor="white", paper_bgcolor="white")
    fig.update_xaxes(gridcolor="lightgray")
    fig.update_yaxes(gridcolor="lightgray")
    if output_path is not None:
        output_path = Path(output_path)
        output_path.parent.mkdir(parents=True, exist_ok=True)
        fig.write_image(output_path)
    return fig


def _panel_grid(titles: Sequence[str], K: int):
    param_colors, positions = setup_plot_colors_and_positions(K, len(titles))
    n_rows = max(positions, key=lambda x: x[0])[0]
    n_cols = max(positions, key=lambda x: x[1])[1]
    fig = sp.make_subplots(rows=n_rows, cols=n_cols, subplot_titles=list(titles))
    return fig, param_colors, positions


def create_trace_plots(
    samples: List[np.ndarray],
    titles: Sequence[str],
    param_name: str = "mu",
    output_path: Optional[PathLike] = None,
) -> go.Figure:
    """Create trace plots for several sample arrays.

    Each array of shape (n_iter, K) gets its own subplot, with one line
    per component.

    Args:
        samples: List of sample arrays, one per panel.
        titles: Subplot titles, one per panel.
        param_name: Name of the parameter type ("mu" or "pi").
        output_path: Where to save the PNG (not saved if None).
    """
    if len(samples) != len(titles):
        raise ValueError(
            f"Got {len(samples)} sample arrays but {len(titles)} titles"
        )
    K = samples[0].shape[1]
    fig, param_colors, positions = _panel_grid(titles, K)

    for c, (row, col) in enumerate(positions):
        for k in range(K):
            fig.add_trace(
                go.Scatter(
                    y=samples[c][:, k],
                    mode="lines",
                    line={"width": 0.8, "color": param_colors[k]},
                    name=f"${get_param_label(param_name, k)}$",
                    showlegend=(c == 0),
                ),
                row=row,
                col=col,
            )

    fig.update_layout(
        height=600,
        width=1000,
        title_text="$\\text{Trace Plots - Parameter }"
        f"{get_param_label(param_name)}$",
    )
    return _finish(fig, output_path)


def create_histogram_plots(
    samples: List[np.ndarray],
    titles: Sequence[str],
    param_name: str = "mu",
    output_path: Optional[PathLike] = None,
) -> go.Figure:
    """Create histograms of the posterior draws of every component.

    Args:
        samples: List of post burn-in sample arrays, one per panel.
        titles: Subplot titles, one per panel.
        param_name: Name of the parameter type ("mu" or "pi").
        output_path: Where to save the PNG (not saved if None).
    """
    if len(samples) != len(titles):
        raise ValueError(
            f"Got {len(samples)} sample arrays but {len(titles)} titles"
        )
    K = samples[0].shape[1]
    fig, param_colors, positions = _panel_grid(titles, K)

    for c, (row, col) in enumerate(positions):
        for k in range(K):
            fig.add_trace(
                go.Histogram(
                    x=samples[c][:, k],
                    nbinsx=30,
                    opacity=0.6,
                    marker={"color": param_colors[k]},
                    name=f"${get_param_label(param_name, k)}$",
                    showlegend=(c == 0),
                ),
                row=row,
                col=col,
            )

    fig.update_layout(
        height=600,
        width=1000,
        title_text="$\\text{Posterior Histograms - Parameter }"
        f"{get_param_label(param_name)}$",
        barmode="overlay",
    )
    return _finish(fig, output_path)


def create_interval_plot(
    sizes: Sequence[int],
    means: np.ndarray,
    ci_lower: np.ndarray,
    ci_upper: np.ndarray,
    true_means: Optional[Sequence[float]] = None,
    output_path: Optional[PathLike] = None,
) -> go.Figure:
    """Plot posterior means and credible intervals against the dataset size.

    Args:
        sizes: Number of observations of each dataset.
        means: Posterior means, shape (len(sizes), K).
        ci_lower: Lower credible bounds, shape (len(sizes), K).
        ci_upper: Upper credible bounds, shape (len(sizes), K).
        true_means: Means used to simulate the data, drawn as reference lines.
        output_path: Where to save the PNG (not saved if None).
    """
    means = np.asarray(means)
    ci_lower = np.asarray(ci_lower)
    ci_upper = np.asarray(ci_upper)
    K = means.shape[1]
    x = [str(n) for n in sizes]

    fig = go.Figure()
    for k in range(K):
        color = COLORS[k % len(COLORS)]
        fig.add_trace(
            go.Scatter(
                x=x,
                y=means[:, k],
                mode="markers",
                marker={"color": color, "size": 9},
                error_y={
                    "type": "data",
                    "symmetric": False,
                    "array": ci_upper[:, k] - means[:, k],
                    "arrayminus": means[:, k] - ci_lower[:, k],
                },
                name=f"${get_param_label('mu', k)}$",
            )
        )

    if true_means is not None:
        for value in true_means:
            fig.add_hline(y=value, line={"dash": "dash", "color": "black"})

    fig.update_layout(
        height=600,
        width=1000,
        title_text="Posterior credible intervals by dataset size",
        xaxis_title="n",
        yaxis_title="$\\mu$",
    )
    return _finish(fig, output_path)


def create_density_plot(
    means: Sequence[float],
    weights: Sequence[float],
    sigmas: Sequence[float],
    data: Optional[np.ndarray] = None,
    output_path: Optional[PathLike] = None,
) -> go.Figure:
    """Plot the density of a normal mixture.

    Without data, the weighted component densities are drawn with the
    mixture density; with data, the histogram of the data is drawn
    against the mixture density.

    Args:
        means: Mean of each component.
        weights: Mixture weight of each component.
        sigmas: Standard deviation of each component.
        data: Simulated data to overlay (optional).
        output_path: Where to save the PNG (not saved if None).
    """
    means_array = np.array(means, dtype=float)
    sigmas_array = np.array(sigmas, dtype=float)
    weights_array = np.array(weights, dtype=float)
    K = len(means_array)

    lim_inf = np.min(means_array - 4 * sigmas_array)
    lim_sup = np.max(means_array + 4 * sigmas_array)
    n_points = max(200, min(1000, int((lim_sup - lim_inf) * 100)))
    x = np.linspace(lim_inf, lim_sup, n_points)

    individual_densities = np.array(
        [norm.pdf(x, means_array[i], sigmas_array[i]) for i in range(K)]
    )
    mixture_density = np.sum(
        weights_array[:, np.newaxis] * individual_densities, axis=0
    )

    fig = go.Figure()
    if data is None:
        fig.add_trace(
            go.Scatter(
                x=x,
                y=mixture_density,
                mode="lines",
                showlegend=False,
                line={"width": 3, "color": "black"},
                name="Mixture Density",
            )
        )
        for i in range(K):
            fig.add_trace(
                go.Scatter(
                    x=x,
                    y=weights_array[i] * individual_densities[i],
                    mode="lines",
                    name=f"N({means[i]}, {sigmas[i]}) (w = {weights[i]})",
                    line={
                        "dash": "dash",
                        "width": 2,
                        "color": COLORS[i % len(COLORS)],
                    },
                )
            )
        title = f"Mixture of {K} Gaussians"
        yaxis_title = "f(x)"
    else:
        fig.add_trace(
            go.Histogram(
                x=data,
                nbinsx=100,
                histnorm="probability density",
                name="Simulated Data",
                opacity=0.7,
                marker_color="lightblue",
                marker_line_color="darkblue",
                marker_line_width=1,
            )
        )
        fig.add_trace(
            go.Scatter(
                x=x,
                y=mixture_density,
                mode="lines",
                name="Theoretical Density",
                line={"color": "red", "width": 3},
            )
        )
        title = "Simulated Data vs Theoretical Density"
        yaxis_title = "Density"

    fig.update_layout(
        title=title,
        xaxis_title="x",
        yaxis_title=yaxis_title,
        height=600,
        width=1000,
        legend={"yanchor": "top", "y": 0.99, "xanchor": "left", "x": 0.01},
    )
    return _finish(fig, output_path)
