"""Task-specific views over dataset content."""

from collections.abc import Mapping
from dataclasses import dataclass

import pandas as pd


@dataclass(frozen=True)
class DatasetView:
    """Immutable snapshot of dataset data and related metadata.

    Attributes:
        df: Dataframe slice containing the relevant columns.
        pretty_by_col: Mapping from normalized column names to display-friendly labels.
        numeric_cols: Ordered list of numeric column names present in ``df``.
        target_col: Optional name of the response used for analysis.
    """

    df: pd.DataFrame
    pretty_by_col: Mapping[str, str]
    numeric_cols: list[str]
    target_col: str | None = None

    @property
    def features(self) -> pd.DataFrame:
        """Return view over numeric columns (all columns if none are flagged numeric)."""
        cols = self.numeric_cols or self.df.columns.tolist()
        return self.df.loc[:, cols]

    def pretty(self, column: str) -> str:
        """Display label for ``column`` (falls back to the raw name)."""
        return self.pretty_by_col.get(column, column)
