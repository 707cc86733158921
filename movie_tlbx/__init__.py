"""Movie rating toolbox: rating-source comparison, stepwise OLS, and prediction intervals."""

from .config import ReportConfig
from .data import MovieCol, MoviesDataset
from .errors import (
    InvalidEncodingError,
    MissingValueError,
    ModelFitError,
    MovieToolboxError,
    RankDeficiencyError,
    SchemaError,
    UnderDeterminedError,
)
from .report import EXAMPLE_MOVIE, MovieReport, run_report


__all__ = [
    "EXAMPLE_MOVIE",
    "InvalidEncodingError",
    "MissingValueError",
    "ModelFitError",
    "MovieCol",
    "MovieReport",
    "MovieToolboxError",
    "MoviesDataset",
    "RankDeficiencyError",
    "ReportConfig",
    "SchemaError",
    "UnderDeterminedError",
    "run_report",
]
