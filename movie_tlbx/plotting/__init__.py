"""Plotting utilities for the movie rating report."""

from .rating_plots import plot_rating_differences
from .regression_plots import (
    plot_qq,
    plot_residual_diagnostics,
    plot_residual_histogram,
    plot_residuals_vs_fitted,
    plot_residuals_vs_predictor,
    plot_selection_path,
)


__all__ = [
    "plot_qq",
    "plot_rating_differences",
    "plot_residual_diagnostics",
    "plot_residual_histogram",
    "plot_residuals_vs_fitted",
    "plot_residuals_vs_predictor",
    "plot_selection_path",
]
