"""Base column definitions, column kinds/roles, and metadata structures."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from movie_tlbx.errors import SchemaError


class ColumnKind(StrEnum):
    """How a column's raw values are turned into numeric features."""

    NUMERIC = "numeric"
    """Continuous or count value, used as-is."""
    YEAR = "year"
    """Calendar year, rescaled so the earliest observed year maps to 0."""
    BINARY = "binary"
    """Two-level label mapped to {0, 1}."""
    CATEGORICAL = "categorical"
    """Multi-level label, one-hot encoded against declared levels."""
    IDENTIFIER = "identifier"
    """High-cardinality identifier or free text, never a predictor."""


class ColumnRole(StrEnum):
    """What a column is used for in the regression workflow."""

    FEATURE = "feature"
    TARGET = "target"
    """Rating source combined into the response."""
    EXCLUDED = "excluded"
    """Alternate measurement of the response, dropped to avoid leakage."""
    IDENTIFIER = "identifier"


@dataclass(frozen=True)
class ColumnMetadata:
    """Metadata for a dataset column.

    Attributes:
        cleaned_name: Standardized column name used in DataFrames.
        kind: Encoding kind of the column.
        role: Role of the column in the modelling workflow.
        pretty_name: Human-readable name for use in plots and reports.
        levels: Declared categorical levels; the first one is the reference level.
        true_label: Raw label mapped to 1 for binary columns.
    """

    original_name: str
    """Column name as it appears in the raw CSV file."""
    cleaned_name: str
    kind: ColumnKind
    role: ColumnRole
    pretty_name: str
    levels: tuple[str, ...] = ()
    true_label: str | None = None


class BaseColumn(StrEnum):
    """Base class for dataset column enums.

    All derived column enums must define a TARGET member naming the derived
    response column. Every member, the target included, is described by
    ``metadata()``. The target is computed from other columns, so it is left
    out of ``schema_members()``: a raw table may carry it but never needs to.
    """

    TARGET: str

    def metadata(self) -> ColumnMetadata:
        """Get metadata for this column.

        Raises:
            NotImplementedError: If not implemented by subclass.
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement metadata() method")

    @classmethod
    def schema_members(cls) -> list[BaseColumn]:
        """Members that describe raw input columns (the derived target excluded)."""
        return [col for col in cls if col != cls.TARGET]

    @classmethod
    def columns_with_role(cls, role: ColumnRole) -> list[str]:
        return [col.value for col in cls.schema_members() if col.metadata().role == role]

    @classmethod
    def columns_with_kind(cls, kind: ColumnKind) -> list[str]:
        return [col.value for col in cls.schema_members() if col.metadata().kind == kind]

    @classmethod
    def feature_columns(cls) -> list[str]:
        """Raw columns used as predictors, in schema order."""
        return cls.columns_with_role(ColumnRole.FEATURE)

    @classmethod
    def identifier_columns(cls) -> list[str]:
        return cls.columns_with_role(ColumnRole.IDENTIFIER)

    @classmethod
    def validate_columns(cls, columns: Iterable[str]) -> None:
        """Check a set of cleaned column names against the schema.

        Unknown columns fail loudly instead of being silently kept or dropped,
        and every feature and target column must be present.

        Raises:
            SchemaError: On unknown or missing columns.
        """
        present = list(columns)
        known = {col.value for col in cls}
        unknown = [col for col in present if col not in known]
        if unknown:
            raise SchemaError(f"Unknown columns not declared in {cls.__name__}: {unknown}", columns=unknown)

        required = [*cls.columns_with_role(ColumnRole.FEATURE), *cls.columns_with_role(ColumnRole.TARGET)]
        missing = [col for col in required if col not in present]
        if missing:
            raise SchemaError(f"Required columns missing from table: {missing}", columns=missing)

    @property
    def pretty_name(self) -> str:
        """Get the human-readable name for plots and reports."""
        return self.metadata().pretty_name

    @property
    def original_name(self) -> str:
        """Get the original column name from the CSV file."""
        return self.metadata().original_name

    @property
    def kind(self) -> ColumnKind:
        return self.metadata().kind

    @property
    def role(self) -> ColumnRole:
        return self.metadata().role
