"""End-to-end movie rating report.

Runs the complete workflow on a loaded :class:`MoviesDataset`:

1. paired comparison of the rescaled IMDb rating with the audience score,
2. encoding of the movie attributes and listwise deletion,
3. stepwise selection of the regression model for the averaged score,
4. diagnostics of the selected model,
5. prediction interval for :data:`EXAMPLE_MOVIE`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

import matplotlib.pyplot as plt

from movie_tlbx.analysis.model_selection import SelectionPathResult, selection_path
from movie_tlbx.analysis.ols_helper import LinearModel, RegressionResult, diagnose_ols, fit_linear_model
from movie_tlbx.analysis.prediction import PredictionResult, predict_record
from movie_tlbx.analysis.rating_comparison import RatingComparisonResult
from movie_tlbx.config import ReportConfig
from movie_tlbx.data.encoding import DesignData
from movie_tlbx.data.movie_dataset import MoviesDataset
from movie_tlbx.plotting import plot_rating_differences, plot_residual_diagnostics, plot_selection_path


if TYPE_CHECKING:
    from matplotlib.figure import Figure


logger = logging.getLogger(__name__)


EXAMPLE_MOVIE: dict[str, object] = {
    "title": "Harbor Lights",
    "title_type": "Feature Film",
    "genre": "Drama",
    "runtime": 118,
    "mpaa_rating": "PG-13",
    "thtr_rel_year": 2012,
    "thtr_rel_month": 11,
    "thtr_rel_day": 9,
    "dvd_rel_year": 2013,
    "dvd_rel_month": 3,
    "dvd_rel_day": 19,
    "imdb_num_votes": 85000,
    "best_pic_nom": "no",
    "best_pic_win": "no",
    "best_actor_win": "yes",
    "best_actress_win": "no",
    "best_dir_win": "no",
    "top200_box": "no",
}
"""Synthetic movie used to demonstrate the prediction interval."""


@dataclass(frozen=True)
class MovieReport:
    """All results of one report run."""

    comparison: RatingComparisonResult
    design: DesignData
    full_model: LinearModel
    """Model on every usable encoded column (before selection)."""
    selection: SelectionPathResult
    diagnostics: RegressionResult
    """Diagnostics of the selected model."""
    prediction: PredictionResult
    example: dict[str, object]
    config: ReportConfig = field(default_factory=ReportConfig)

    @property
    def final_model(self) -> LinearModel:
        return self.selection.final_model

    def figures(self) -> dict[str, Figure]:
        """Build the report figures, keyed by file stem."""
        with self.config.plotting.apply():
            fig_diff, ax = plt.subplots(figsize=(8, 5))
            plot_rating_differences(self.comparison, ax=ax)
            fig_diff.tight_layout()

            fig_diag = plot_residual_diagnostics(self.diagnostics)

            fig_path, ax = plt.subplots(figsize=(8, 5))
            plot_selection_path(self.selection, ax=ax)
            fig_path.tight_layout()

        return {
            "rating_differences": fig_diff,
            "residual_diagnostics": fig_diag,
            "selection_path": fig_path,
        }

    def save_figures(self, directory: str | Path, *, fmt: str = "png") -> list[Path]:
        """Write every report figure to ``directory`` and return the file paths."""
        directory = Path(directory)
        directory.mkdir(parents=True, exist_ok=True)
        paths: list[Path] = []
        for name, fig in self.figures().items():
            path = directory / f"{name}.{fmt}"
            fig.savefig(path, bbox_inches="tight")
            plt.close(fig)
            logger.info("Saved figure %s", path)
            paths.append(path)
        return paths

    def to_text(self) -> str:
        """Render a plain-text summary of the report."""
        selection = self.selection
        title = self.example.get("title", "example movie")
        excluded = ", ".join(f"{col} ({why})" for col, why in selection.excluded_columns.items()) or "none"
        lines = [
            "Movie rating report",
            "===================",
            "",
            "Rating comparison",
            "-----------------",
            repr(self.comparison),
            self.comparison.decision,
            "",
            "Design matrix",
            "-------------",
            f"{self.design.n_obs} of {self.design.n_input_rows} movies used "
            f"({self.design.n_dropped_rows} dropped for missing values), "
            f"{self.design.X.shape[1]} encoded columns.",
            f"Excluded before fitting: {excluded}",
            "",
            f"Model selection ({selection.direction}, {selection.criterion.upper()})",
            "-" * 30,
            selection.summary_table().round(3).to_string(),
            f"Removed: {', '.join(selection.removed_columns) or 'none'}",
            f"Full model {selection.criterion.upper()}: {self.full_model.score(selection.criterion):.3f}; "
            f"final model {selection.criterion.upper()}: {selection.final_step.criterion:.3f}",
            "",
            "Final model coefficients",
            "------------------------",
            self.final_model.coefficient_table(alpha=1.0 - self.config.level).round(4).to_string(),
            "",
            "Diagnostics",
            "-----------",
            repr(self.diagnostics.metrics),
            repr(self.diagnostics.assumptions),
            "",
            f"Prediction for '{title}'",
            "-" * 30,
            repr(self.prediction),
        ]
        if self.prediction.exceeds_bounds:
            lines.append(f"Note: the interval leaves the score range {self.config.bounds}.")
        return "\n".join(lines) + "\n"


def run_report(
    dataset: MoviesDataset | None = None,
    config: ReportConfig | None = None,
    *,
    example: dict[str, object] | None = None,
) -> MovieReport:
    """Run the full analysis and return a :class:`MovieReport`.

    Args:
        dataset: Loaded movies dataset (defaults to :meth:`MoviesDataset.from_csv`).
        config: Report settings (defaults to :class:`ReportConfig`).
        example: Raw record to predict (defaults to :data:`EXAMPLE_MOVIE`).
    """
    config = config or ReportConfig()
    dataset = dataset if dataset is not None else MoviesDataset.from_csv()
    example = dict(EXAMPLE_MOVIE if example is None else example)

    comparison = dataset.make_rating_comparison(scale=config.scale, alpha=config.alpha).fit().result()

    design = dataset.design_data(
        scale=config.scale,
        na_indicator=config.na_indicator,
        warn_fraction=config.warn_fraction,
    )
    selection = selection_path(
        design.X,
        design.y,
        direction=config.direction,
        criterion=config.criterion,
        threshold=config.threshold,
        on_collinear=config.on_collinear,
        n_jobs=config.n_jobs,
    )
    full_model = fit_linear_model(design.X.drop(columns=list(selection.excluded_columns)), design.y)
    logger.info(
        "Selected %d of %d columns (%s %.3f -> %.3f)",
        len(selection.selected_columns),
        full_model.n_params - 1,
        selection.criterion,
        full_model.score(selection.criterion),
        selection.final_step.criterion,
    )

    diagnostics = diagnose_ols(
        selection.final_model,
        cv_folds=config.cv_folds,
        shuffle_cv=config.random_state is not None,
        random_state=config.random_state,
    )
    prediction = predict_record(
        selection.final_model,
        design.encoding,
        example,
        level=config.level,
        bounds=config.bounds,
    )
    return MovieReport(
        comparison=comparison,
        design=design,
        full_model=full_model,
        selection=selection,
        diagnostics=diagnostics,
        prediction=prediction,
        example=example,
        config=config,
    )


__all__ = ["EXAMPLE_MOVIE", "MovieReport", "run_report"]
