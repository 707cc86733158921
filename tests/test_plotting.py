"""Smoke tests for plotting helpers."""

import matplotlib.pyplot as plt
import pytest

from movie_tlbx.analysis.model_selection import backward_elimination
from movie_tlbx.analysis.ols_helper import fit_linear_model
from movie_tlbx.plotting import (
    plot_qq,
    plot_rating_differences,
    plot_residual_diagnostics,
    plot_residual_histogram,
    plot_residuals_vs_fitted,
    plot_residuals_vs_predictor,
    plot_selection_path,
)
from movie_tlbx.plotting.regression_plots import default_predictor
from movie_tlbx.utils.plotting_config import PlottingConfig


@pytest.fixture(scope="module")
def regression_result(linear_xy):
    X, y = linear_xy
    return fit_linear_model(X.assign(flag=(X["b"] > 0).astype(float)), y).diagnose()


@pytest.fixture(autouse=True)
def _close_figures():
    yield
    plt.close("all")


def test_residuals_vs_fitted(regression_result) -> None:
    ax = plot_residuals_vs_fitted(regression_result)
    assert ax.get_xlabel() == "Fitted values"
    assert ax.get_title() == "Residuals vs Fitted"


def test_residuals_vs_predictor(regression_result) -> None:
    ax = plot_residuals_vs_predictor(regression_result, "a")
    assert ax.get_xlabel() == "a"


def test_residuals_vs_unknown_predictor(regression_result) -> None:
    with pytest.raises(KeyError):
        plot_residuals_vs_predictor(regression_result, "not_a_column")
    with pytest.raises(KeyError):
        plot_residuals_vs_predictor(regression_result, "const")


def test_histogram_and_qq(regression_result) -> None:
    fig, (ax1, ax2) = plt.subplots(1, 2)
    assert plot_residual_histogram(regression_result, ax=ax1) is ax1
    assert plot_qq(regression_result, ax=ax2) is ax2
    assert ax2.lines


def test_residual_diagnostics_grid(regression_result) -> None:
    fig = plot_residual_diagnostics(regression_result)
    assert len(fig.axes) == 4
    assert fig.axes[1].get_xlabel() == "a"


def test_default_predictor_skips_indicators(linear_xy) -> None:
    X, y = linear_xy
    result = fit_linear_model(X[["a"]].assign(flag=(X["b"] > 0).astype(float))[["flag", "a"]], y).diagnose()
    assert default_predictor(result) == "a"


def test_result_shortcut(regression_result) -> None:
    fig = regression_result.plot_residual_diags(predictor="c")
    assert fig.axes[1].get_xlabel() == "c"


def test_selection_path_plot(linear_xy) -> None:
    X, y = linear_xy
    path = backward_elimination(X, y)
    ax = plot_selection_path(path)
    assert ax.get_ylabel() == "AIC"
    assert len(ax.lines[0].get_xdata()) == len(path.steps)


def test_rating_differences(movies_dataset) -> None:
    result = movies_dataset.make_rating_comparison().fit().result()
    ax = plot_rating_differences(result)
    assert ax.get_ylabel() == "Number of movies"
    assert "t=" in ax.get_title()


def test_plotting_config_restores_rcparams() -> None:
    before = plt.rcParams["axes.titlesize"]
    with PlottingConfig(title_size=22).apply():
        assert plt.rcParams["axes.titlesize"] == 22
    assert plt.rcParams["axes.titlesize"] == before
