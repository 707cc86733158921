"""Feature encoding: turning cleaned movie attributes into a numeric design matrix.

The encoding is fitted once on the training table and then reused unchanged
for new records, so that a prediction row is encoded exactly like the rows the
model was fitted on:

- numeric columns are used as-is,
- year columns are shifted by the minimum year observed during fitting,
- binary columns map ``true_label`` to 1 and the other label to 0,
- categorical columns are one-hot encoded with treatment coding: the first
  declared level is the reference and gets no indicator column.

Missing categorical values either propagate as missing (and the row is later
removed by listwise deletion) or get their own ``<column>_nan`` indicator when
``na_indicator=True``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field

import numpy as np
import pandas as pd

from movie_tlbx.errors import InvalidEncodingError, MissingValueError, SchemaError

from .base_columns import BaseColumn, ColumnKind


logger = logging.getLogger(__name__)


def _strip(value: object) -> object:
    return value.strip() if isinstance(value, str) else value


@dataclass(frozen=True)
class FeatureEncoding:
    """Frozen encoding rules learned from a training table."""

    feature_columns: tuple[str, ...]
    """Raw feature columns in schema order."""
    kinds: Mapping[str, ColumnKind]
    levels: Mapping[str, tuple[str, ...]]
    """Declared levels of categorical and binary columns."""
    true_labels: Mapping[str, str]
    year_minima: Mapping[str, float]
    """Minimum observed value per year column (subtracted during encoding)."""
    na_indicator: bool = False
    encoded_columns: tuple[str, ...] = field(default=())
    """Names of the encoded (design-matrix) columns, intercept excluded."""

    @classmethod
    def fit(
        cls,
        df: pd.DataFrame,
        col_enum: type[BaseColumn],
        *,
        na_indicator: bool = False,
    ) -> FeatureEncoding:
        """Learn the encoding for all feature columns of ``col_enum`` from ``df``.

        Raises:
            SchemaError: If a feature column is absent from ``df``.
            MissingValueError: If a feature column holds only missing values
                (for year columns the minimum would be undefined).
        """
        feature_columns = tuple(col_enum.feature_columns())
        absent = [col for col in feature_columns if col not in df.columns]
        if absent:
            raise SchemaError(f"Feature columns missing from table: {absent}", columns=absent)

        for col in feature_columns:
            if df[col].isna().all():
                raise MissingValueError(f"Feature column '{col}' contains only missing values.", column=col)

        kinds: dict[str, ColumnKind] = {}
        levels: dict[str, tuple[str, ...]] = {}
        true_labels: dict[str, str] = {}
        year_minima: dict[str, float] = {}
        for col in feature_columns:
            meta = col_enum(col).metadata()
            kinds[col] = meta.kind
            match meta.kind:
                case ColumnKind.NUMERIC:
                    pass
                case ColumnKind.YEAR:
                    year_minima[col] = float(pd.to_numeric(df[col], errors="coerce").min())
                case ColumnKind.BINARY:
                    levels[col] = tuple(level.lower() for level in meta.levels)
                    true_labels[col] = (meta.true_label or meta.levels[-1]).lower()
                case ColumnKind.CATEGORICAL:
                    declared = meta.levels or tuple(sorted(df[col].dropna().map(_strip).unique()))
                    levels[col] = tuple(declared)
                case ColumnKind.IDENTIFIER:
                    raise SchemaError(f"Identifier column '{col}' cannot be used as a feature.", columns=[col])
                case _:
                    raise ValueError(f"Unsupported column kind {meta.kind!r} for '{col}'.")

        encoding = cls(
            feature_columns=feature_columns,
            kinds=kinds,
            levels=levels,
            true_labels=true_labels,
            year_minima=year_minima,
            na_indicator=na_indicator,
        )
        encoded = encoding.transform(df)
        return cls(
            feature_columns=feature_columns,
            kinds=kinds,
            levels=levels,
            true_labels=true_labels,
            year_minima=year_minima,
            na_indicator=na_indicator,
            encoded_columns=tuple(encoded.columns),
        )

    def transform(self, df: pd.DataFrame) -> pd.DataFrame:
        """Encode ``df`` into numeric feature columns (missing values preserved).

        Raises:
            InvalidEncodingError: On a categorical or binary value outside the
                declared levels.
        """
        blocks = [self._encode_column(col, df[col]) for col in self.feature_columns]
        encoded = pd.concat(blocks, axis=1) if blocks else pd.DataFrame(index=df.index)
        if self.encoded_columns:
            encoded = encoded.reindex(columns=list(self.encoded_columns))
        return encoded

    def encode(self, record: Mapping[str, object]) -> pd.Series:
        """Encode a single raw record for prediction.

        No imputation is performed: every feature column must be present and
        non-missing.

        Raises:
            MissingValueError: If a feature value is absent or missing.
            InvalidEncodingError: If a categorical level was not seen in training.
        """
        for col in self.feature_columns:
            if col not in record or pd.isna(record[col]):
                raise MissingValueError(f"Record is missing a value for feature '{col}'.", column=col)
        frame = pd.DataFrame([{col: record[col] for col in self.feature_columns}])
        return self.transform(frame).iloc[0]

    def _encode_column(self, name: str, series: pd.Series) -> pd.DataFrame:
        match self.kinds[name]:
            case ColumnKind.NUMERIC:
                return pd.to_numeric(series, errors="coerce").astype(float).to_frame(name)
            case ColumnKind.YEAR:
                shifted = pd.to_numeric(series, errors="coerce").astype(float) - self.year_minima[name]
                return shifted.to_frame(name)
            case ColumnKind.BINARY:
                return self._encode_binary(name, series).to_frame(name)
            case ColumnKind.CATEGORICAL:
                return self._encode_categorical(name, series)
            case kind:
                raise ValueError(f"Unsupported column kind {kind!r} for '{name}'.")

    def _encode_binary(self, name: str, series: pd.Series) -> pd.Series:
        levels = self.levels[name]
        true_label = self.true_labels[name]
        false_label = next(level for level in levels if level != true_label)

        def normalize(value: object) -> object:
            if pd.isna(value):
                return np.nan
            if isinstance(value, str):
                return value.strip().lower()
            if value in (0, 1):
                return true_label if value == 1 else false_label
            return value

        labels = series.map(normalize)
        invalid = labels.notna() & ~labels.isin(levels)
        if invalid.any():
            bad = sorted({str(v) for v in labels[invalid]})
            raise InvalidEncodingError(
                f"Column '{name}' expects one of {list(levels)}, got {bad}.",
                column=name,
                value=bad[0],
            )
        return (labels == true_label).astype(float).where(labels.notna())

    def _encode_categorical(self, name: str, series: pd.Series) -> pd.DataFrame:
        levels = self.levels[name]
        values = series.map(_strip)
        invalid = values.notna() & ~values.isin(levels)
        if invalid.any():
            bad = sorted({str(v) for v in values[invalid]})
            raise InvalidEncodingError(
                f"Unseen level(s) {bad} for categorical column '{name}' (known: {list(levels)}).",
                column=name,
                value=bad[0],
            )

        categorical = pd.Series(pd.Categorical(values, categories=list(levels)), index=series.index)
        dummies = pd.get_dummies(
            categorical,
            prefix=name,
            prefix_sep="_",
            drop_first=True,
            dummy_na=self.na_indicator,
            dtype=float,
        )
        if not self.na_indicator:
            dummies.loc[values.isna().to_numpy(), :] = np.nan
        return dummies


@dataclass(frozen=True)
class DesignData:
    """Encoded feature matrix and response after listwise deletion.

    Attributes:
        X: Encoded feature columns (no intercept), one row per retained movie.
        y: Response values aligned with ``X``.
        encoding: Encoding rules used to build ``X`` (reused for prediction).
        n_input_rows: Number of rows before listwise deletion.
        n_dropped_rows: Number of rows removed because of a missing value.
    """

    X: pd.DataFrame
    y: pd.Series
    encoding: FeatureEncoding
    n_input_rows: int
    n_dropped_rows: int

    @property
    def dropped_fraction(self) -> float:
        """Share of input rows lost to listwise deletion."""
        return self.n_dropped_rows / self.n_input_rows if self.n_input_rows else 0.0

    @property
    def n_obs(self) -> int:
        return int(self.X.shape[0])

    def frame(self) -> pd.DataFrame:
        """Return ``X`` and ``y`` joined in one DataFrame."""
        return self.X.assign(**{str(self.y.name): self.y})


def listwise_delete(
    X: pd.DataFrame,
    y: pd.Series,
    *,
    warn_fraction: float = 0.2,
) -> tuple[pd.DataFrame, pd.Series, int]:
    """Drop every row with a missing value in ``X`` or ``y``.

    Returns:
        The reduced ``X`` and ``y`` plus the number of removed rows.
    """
    mask = X.notna().all(axis=1) & y.notna()
    n_dropped = int((~mask).sum())
    fraction = n_dropped / len(mask) if len(mask) else 0.0
    log = logger.warning if fraction > warn_fraction else logger.info
    log("Listwise deletion removed %d of %d rows (%.1f%%).", n_dropped, len(mask), 100 * fraction)
    return X.loc[mask].copy(), y.loc[mask].copy(), n_dropped


__all__ = ["DesignData", "FeatureEncoding", "listwise_delete"]
