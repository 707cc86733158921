"""Plots for the rating-source comparison."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import seaborn as sns


if TYPE_CHECKING:
    from movie_tlbx.analysis.rating_comparison import RatingComparisonResult


def plot_rating_differences(
    result: RatingComparisonResult,
    *,
    ax: plt.Axes | None = None,
    bins: int | str = 30,
) -> plt.Axes:
    """Histogram of per-movie rating differences with the zero line and the mean difference."""
    ax = ax or plt.gca()
    sns.histplot(result.differences, bins=bins, kde=True, ax=ax, color="tab:blue")
    ax.axvline(0.0, color="black", linestyle="--", linewidth=1, label="no difference")
    ax.axvline(result.mean_difference, color="tab:red", linewidth=2, label=f"mean = {result.mean_difference:.2f}")
    ax.axvspan(result.ci_lower, result.ci_upper, color="tab:red", alpha=0.15)
    ax.set_xlabel(f"{result.left_label} (rescaled) - {result.right_label}")
    ax.set_ylabel("Number of movies")
    ax.set_title(f"Rating differences (t={result.statistic:.2f}, p={result.p_value:.3g})")
    ax.legend()
    return ax
