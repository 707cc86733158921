"""Tunable settings of the movie rating report."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Literal

from movie_tlbx.data.movie_dataset import IMDB_SCALE_FACTOR
from movie_tlbx.utils.plotting_config import PlottingConfig


@dataclass(frozen=True)
class ReportConfig:
    """Settings for :func:`movie_tlbx.report.run_report`.

    Override individual values by keyword, e.g. ``ReportConfig(criterion="bic")``.
    """

    scale: float = IMDB_SCALE_FACTOR
    """Multiplier putting the IMDb rating on the audience-score scale."""
    alpha: float = 0.05
    """Significance level of the rating comparison."""
    level: float = 0.95
    """Confidence level of the prediction interval."""
    bounds: tuple[float, float] = (0.0, 100.0)
    """Physical range of the score, used to flag out-of-range intervals."""
    criterion: Literal["aic", "bic"] = "aic"
    direction: Literal["backward", "forward", "both"] = "backward"
    threshold: float = 0.0
    on_collinear: Literal["raise", "drop"] = "drop"
    na_indicator: bool = False
    warn_fraction: float = 0.2
    """Warn when listwise deletion removes more than this share of rows."""
    n_jobs: int | None = None
    cv_folds: int | None = 5
    random_state: int | None = 42
    plotting: PlottingConfig = field(default_factory=PlottingConfig)

    def __post_init__(self) -> None:
        if not 0 < self.alpha < 1:
            raise ValueError("alpha must be in (0, 1)")
        if not 0 < self.level < 1:
            raise ValueError("level must be in (0, 1)")
        low, high = self.bounds
        if low >= high:
            raise ValueError("bounds must be an increasing (low, high) pair")
        if self.scale <= 0:
            raise ValueError("scale must be positive")
        if not 0 <= self.warn_fraction <= 1:
            raise ValueError("warn_fraction must be in [0, 1]")


__all__ = ["ReportConfig"]
