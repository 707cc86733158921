"""Exception types raised by data preparation, model fitting, and prediction."""

from __future__ import annotations


class MovieToolboxError(Exception):
    """Base class for all toolbox errors."""


class SchemaError(MovieToolboxError, ValueError):
    """Raised when a loaded table does not match the declared column schema."""

    def __init__(self, message: str, *, columns: list[str] | None = None) -> None:
        super().__init__(message)
        self.columns = list(columns or [])


class MissingValueError(MovieToolboxError, ValueError):
    """A required value is missing (prediction input or an all-missing column)."""

    def __init__(self, message: str, *, column: str | None = None) -> None:
        super().__init__(message)
        self.column = column


class InvalidEncodingError(MovieToolboxError, ValueError):
    """A categorical or binary value is not part of the training encoding."""

    def __init__(self, message: str, *, column: str | None = None, value: object = None) -> None:
        super().__init__(message)
        self.column = column
        self.value = value


class ModelFitError(MovieToolboxError):
    """Base class for failures while fitting an OLS model."""

    def __init__(self, message: str, *, column: str | None = None) -> None:
        super().__init__(message)
        self.column = column


class RankDeficiencyError(ModelFitError):
    """The design matrix does not have full column rank.

    ``column`` names the first column (in design-matrix order) that adds no
    rank to the columns before it.
    """


class UnderDeterminedError(ModelFitError):
    """There are not more observations than parameters to estimate."""


__all__ = [
    "InvalidEncodingError",
    "MissingValueError",
    "ModelFitError",
    "MovieToolboxError",
    "RankDeficiencyError",
    "SchemaError",
    "UnderDeterminedError",
]
