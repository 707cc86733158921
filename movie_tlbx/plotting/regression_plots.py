"""Plotting helpers for regression diagnostics and model-selection paths."""

from __future__ import annotations

from typing import TYPE_CHECKING

import matplotlib.pyplot as plt
import seaborn as sns
from statsmodels.graphics.gofplots import qqplot

from movie_tlbx.analysis.ols_helper import INTERCEPT


if TYPE_CHECKING:
    from matplotlib.figure import Figure

    from movie_tlbx.analysis.model_selection import SelectionPathResult
    from movie_tlbx.analysis.ols_helper import RegressionResult


def plot_residuals_vs_fitted(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """Residuals vs fitted values with LOWESS smooth.

    Wraps [:func:`seaborn.residplot`](https://seaborn.pydata.org/generated/seaborn.residplot.html).
    A random band around 0 supports linearity and constant variance; a funnel
    shape suggests heteroscedasticity.
    """
    ax = ax or plt.gca()
    sns.residplot(x=result.fitted, y=result.residuals, lowess=True, ax=ax, scatter_kws={"alpha": 0.45})
    ax.set_xlabel("Fitted values")
    ax.set_ylabel("Residuals")
    ax.set_title("Residuals vs Fitted")
    return ax


def plot_residuals_vs_predictor(
    result: RegressionResult,
    predictor: str,
    *,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """Residuals against a single predictor column of the design matrix."""
    if predictor not in result.design_matrix.columns or predictor == INTERCEPT:
        raise KeyError(f"Predictor '{predictor}' not in model design matrix.")
    ax = ax or plt.gca()
    sns.scatterplot(x=result.design_matrix[predictor], y=result.residuals, ax=ax, alpha=0.45)
    ax.axhline(0.0, color="tab:red", linestyle="--", linewidth=1)
    ax.set_xlabel(predictor)
    ax.set_ylabel("Residuals")
    ax.set_title(f"Residuals vs {predictor}")
    return ax


def plot_residual_histogram(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
    bins: int | str = "auto",
) -> plt.Axes:
    """Histogram of residuals with a KDE overlay."""
    ax = ax or plt.gca()
    sns.histplot(result.residuals, bins=bins, kde=True, ax=ax, color="tab:green")
    ax.set_xlabel("Residuals")
    ax.set_title("Residual distribution")
    return ax


def plot_qq(
    result: RegressionResult,
    *,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """QQ plot of studentized residuals to assess normality."""
    ax = ax or plt.gca()
    stud_resid = result.model.results.get_influence().resid_studentized_internal
    qqplot(stud_resid, line="45", fit=True, ax=ax)
    ax.set_title("QQ plot (studentized residuals)")
    return ax


def default_predictor(result: RegressionResult) -> str | None:
    """First non-indicator predictor of the model (falls back to the first predictor)."""
    predictors = [col for col in result.design_matrix.columns if col != INTERCEPT]
    for col in predictors:
        if result.design_matrix[col].nunique() > 2:  # noqa: PLR2004
            return col
    return predictors[0] if predictors else None


def plot_residual_diagnostics(
    result: RegressionResult,
    *,
    predictor: str | None = None,
    figsize: tuple[int, int] = (12, 10),
) -> Figure:
    """Plot the standard residual diagnostics on a 2x2 grid.

    - Residuals vs fitted (linearity and homoscedasticity).
    - Residuals vs ``predictor`` (defaults to the first continuous predictor).
    - Residual histogram (distribution shape).
    - Normal Q-Q plot (normality, tails, outliers).
    """
    fig, axes = plt.subplots(2, 2, figsize=figsize)
    plot_residuals_vs_fitted(result, ax=axes[0, 0])

    predictor = predictor or default_predictor(result)
    if predictor is None:
        axes[0, 1].set_visible(False)
    else:
        plot_residuals_vs_predictor(result, predictor, ax=axes[0, 1])

    plot_residual_histogram(result, ax=axes[1, 0])
    plot_qq(result, ax=axes[1, 1])
    fig.tight_layout()
    return fig


def plot_selection_path(
    path: SelectionPathResult,
    *,
    ax: plt.Axes | None = None,
) -> plt.Axes:
    """Criterion value after every accepted selection step, annotated with the changed column."""
    ax = ax or plt.gca()
    table = path.summary_table()
    ax.plot(table.index, table["criterion"], marker="o", color="tab:blue")
    for step, row in table.iloc[1:].iterrows():
        sign = "-" if row["action"] == "remove" else "+"
        ax.annotate(
            f"{sign}{row['changed']}",
            xy=(step, row["criterion"]),
            xytext=(4, 6),
            textcoords="offset points",
            fontsize=8,
            rotation=30,
        )
    ax.set_xlabel("Step")
    ax.set_ylabel(path.criterion.upper())
    ax.set_title(f"{path.direction.capitalize()} selection path")
    return ax
