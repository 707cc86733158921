"""Dataset class for the movies table: loading, cleaning, and design-matrix preparation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

import pandas as pd

from movie_tlbx.utils.paths import get_dataset_path

from .base_columns import ColumnKind, ColumnRole
from .base_dataset import BaseDataset
from .encoding import DesignData, FeatureEncoding, listwise_delete
from .movie_columns import MovieColumn as Col


if TYPE_CHECKING:
    from movie_tlbx.analysis.rating_comparison import RatingComparisonAnalyzer


logger = logging.getLogger(__name__)

IMDB_SCALE_FACTOR = 10.0
"""Multiplier bringing the 1-10 IMDb rating onto the 0-100 audience-score scale."""


class MoviesDataset(BaseDataset):
    """Loading, cleaning and encoding for the movies dataset.

    **Example workflow**:
    >>> from movie_tlbx.data import MoviesDataset
    >>> from movie_tlbx.analysis import backward_elimination
    >>> ds = MoviesDataset.from_csv()
    >>> comparison = ds.make_rating_comparison().fit().result()
    >>> design = ds.design_data()
    >>> path = backward_elimination(design.X, design.y)
    >>> path.final_model.coefficient_table()
    """

    Col = Col

    @classmethod
    def from_csv(
        cls,
        *,
        csv_path: str | Path | None = None,
        **read_kwargs: object,
    ) -> MoviesDataset:
        """Load and clean the movies dataset from a CSV file.

        Args:
            csv_path: Path to the CSV file (defaults to ``movies.csv`` in the data directory)
            **read_kwargs: Forwarded to :func:`pandas.read_csv`

        Raises:
            SchemaError: If the file contains unknown columns or lacks required ones.
        """
        csv_path = get_dataset_path("movies") if csv_path is None else Path(csv_path)
        logger.info("Loading movies dataset from %s", csv_path)
        return cls.from_frame(pd.read_csv(csv_path, **read_kwargs))

    @classmethod
    def from_frame(cls, raw: pd.DataFrame) -> MoviesDataset:
        """Normalize, validate, and type-convert an already loaded raw table."""
        movies_df = raw.pipe(cls._normalize_col_names)
        Col.validate_columns(movies_df.columns)
        movies_df = movies_df.pipe(cls._convert_data_types)
        logger.info("Loaded %d movies with %d columns", *movies_df.shape)
        return cls(df=movies_df)

    @staticmethod
    def _normalize_col_names(df: pd.DataFrame) -> pd.DataFrame:
        """Standardize column names to match the MovieColumn enum.

        Strip whitespace, convert to lowercase, replace spaces/slashes/hyphens
        with underscores, collapse multiple underscores.
        """
        return df.set_axis(
            df.columns.str.strip()
            .str.lower()
            .str.replace(r"[\s/\-]+", "_", regex=True)
            .str.replace(r"_+", "_", regex=True),
            axis=1,
        )

    @staticmethod
    def _convert_data_types(df: pd.DataFrame) -> pd.DataFrame:
        """Set appropriate data types for each column.

        Numeric, year and rating columns are coerced to numbers; text columns
        are stripped and empty strings become missing. Binary and categorical
        labels stay as text until encoding.
        """
        numeric_cols = [
            col
            for col in df.columns
            if Col(col) != Col.TARGET and Col(col).kind in {ColumnKind.NUMERIC, ColumnKind.YEAR}
        ]
        text_cols = [col for col in df.columns if col not in numeric_cols and col != Col.TARGET]
        return df.assign(
            **{col: pd.to_numeric(df[col], errors="coerce") for col in numeric_cols},
            **{
                col: df[col].map(lambda v: v.strip() if isinstance(v, str) else v).replace("", pd.NA)
                for col in text_cols
            },
        )

    @staticmethod
    def compute_score(
        df: pd.DataFrame,
        *,
        scale: float = IMDB_SCALE_FACTOR,
    ) -> pd.Series:
        """Averaged rating score: mean of the rescaled IMDb rating and the audience score."""
        score = (df[Col.IMDB_RATING] * scale + df[Col.AUDIENCE_SCORE]) / 2.0
        return score.rename(Col.TARGET.value)

    @property
    def numeric_cols(self) -> pd.Index:
        return super().numeric_cols.difference(Col.columns_with_role(ColumnRole.IDENTIFIER))

    def with_score(self, *, scale: float = IMDB_SCALE_FACTOR) -> pd.DataFrame:
        """Return a copy of the table with the derived ``score`` column."""
        return self.df.assign(**{Col.TARGET.value: self.compute_score(self.df, scale=scale)})

    def design_data(
        self,
        *,
        scale: float = IMDB_SCALE_FACTOR,
        na_indicator: bool = False,
        warn_fraction: float = 0.2,
    ) -> DesignData:
        """Encode features, compute the target, and apply listwise deletion.

        Identifier and leakage columns never enter the design matrix; the
        source table is left untouched.

        Args:
            scale: IMDb rescale factor used for the target.
            na_indicator: Give missing categorical values their own indicator
                column instead of dropping those rows.
            warn_fraction: Log a warning when listwise deletion removes more
                than this share of rows.

        Raises:
            MissingValueError: If a feature column is entirely missing.
            InvalidEncodingError: If a categorical value is not a declared level.
        """
        encoding = FeatureEncoding.fit(self.df, Col, na_indicator=na_indicator)
        X = encoding.transform(self.df)
        y = self.compute_score(self.df, scale=scale)
        X_kept, y_kept, n_dropped = listwise_delete(X, y, warn_fraction=warn_fraction)
        return DesignData(
            X=X_kept,
            y=y_kept,
            encoding=encoding,
            n_input_rows=len(self.df),
            n_dropped_rows=n_dropped,
        )

    def make_rating_comparison(
        self,
        *,
        scale: float = IMDB_SCALE_FACTOR,
        alpha: float = 0.05,
    ) -> RatingComparisonAnalyzer:
        """Instantiate a paired comparison of the IMDb rating and the audience score."""
        from movie_tlbx.analysis.rating_comparison import RatingComparisonAnalyzer

        view = self.view(columns=[Col.IMDB_RATING, Col.AUDIENCE_SCORE], dropna=True)
        return RatingComparisonAnalyzer(
            view,
            left=Col.IMDB_RATING,
            right=Col.AUDIENCE_SCORE,
            scale=scale,
            alpha=alpha,
        )
