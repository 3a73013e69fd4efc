"""Tests for the figure builders (no image is written)."""

import numpy as np
import plotly.graph_objects as go
import pytest

from gibbs_mixture import plots
from gibbs_mixture.plots import (
    create_density_plot,
    create_histogram_plots,
    create_interval_plot,
    create_trace_plots,
    get_param_label,
    setup_plot_colors_and_positions,
)


def test_setup_plot_colors_and_positions():
    colors, positions = setup_plot_colors_and_positions(3, 3)
    assert colors == {0: "blue", 1: "red", 2: "green"}
    assert positions == [(1, 1), (1, 2), (2, 1)]


def test_setup_plot_colors_single_panel():
    _, positions = setup_plot_colors_and_positions(2, 1)
    assert positions == [(1, 1)]


@pytest.mark.parametrize(
    "param_name, k, expected",
    [
        ("mu", 0, "\\mu_{1}"),
        ("mu", None, "\\mu"),
        ("pi", 2, "\\pi_{3}"),
        ("z", 1, "z_{2}"),
    ],
)
def test_get_param_label(param_name, k, expected):
    assert get_param_label(param_name, k) == expected


def test_create_trace_plots_one_line_per_component_and_panel(rng):
    samples = [rng.normal(size=(50, 2)), rng.normal(size=(50, 2)), rng.normal(size=(50, 2))]
    fig = create_trace_plots(samples, ["n = 10", "n = 100", "n = 1000"])

    assert isinstance(fig, go.Figure)
    assert len(fig.data) == 6
    assert sum(trace.showlegend for trace in fig.data) == 2


def test_create_trace_plots_rejects_mismatched_titles(rng):
    with pytest.raises(ValueError, match="titles"):
        create_trace_plots([rng.normal(size=(5, 2))], ["a", "b"])


def test_create_histogram_plots(rng):
    fig = create_histogram_plots([rng.normal(size=(50, 3))], ["chain 1"], "pi")
    assert len(fig.data) == 3
    assert all(isinstance(trace, go.Histogram) for trace in fig.data)


def test_create_interval_plot_error_bars():
    means = np.array([[-1.8, 2.1], [-2.0, 2.0]])
    lower = means - 0.5
    upper = means + 0.25
    fig = create_interval_plot([50, 1000], means, lower, upper, true_means=[-2.0, 2.0])

    assert len(fig.data) == 2


def test_create_density_plot_narrow_component_keeps_grid():
    fig = create_density_plot([0.0], [1.0], [0.001])
    assert len(fig.data[0].x) == 200
    assert np.all(np.isfinite(fig.data[0].y))
    np.testing.assert_allclose(fig.data[0].error_y.array, [0.25, 0.25])
    np.testing.assert_allclose(fig.data[0].error_y.arrayminus, [0.5, 0.5])
    assert len(fig.layout.shapes) == 2


def test_create_density_plot_components():
    fig = create_density_plot([-2.0, 2.0], [0.5, 0.5], [1.0, 1.0])
    # mixture density and one curve per component
    assert len(fig.data) == 3


def test_create_density_plot_with_data(rng):
    fig = create_density_plot([0.0], [1.0], [1.0], data=rng.normal(size=100))
    assert isinstance(fig.data[0], go.Histogram)
    assert len(fig.data) == 2


def test_output_path_writes_image(tmp_path, monkeypatch):
    written = []
    monkeypatch.setattr(go.Figure, "write_image", lambda self, path: written.append(path))

    target = tmp_path / "sub" / "trace.png"
    plots.create_trace_plots([np.zeros((5, 1))], ["chain"], output_path=target)

    assert written == [target]
    assert target.parent.is_dir()
