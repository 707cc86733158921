"""Base dataset class for all dataset implementations."""

from abc import ABC, abstractmethod
from collections.abc import Iterable
from pathlib import Path

import pandas as pd

from .base_columns import BaseColumn
from .views import DatasetView


class BaseDataset(ABC):
    """Abstract base class for dataset handlers used throughout the toolbox.

    A dataset owns one cleaned DataFrame that is never mutated after loading;
    every derived table (views, design matrices) is a new object.
    """

    Col: type[BaseColumn]

    def __init__(self, df: pd.DataFrame | None = None) -> None:
        """Initialize the base dataset.

        Args:
            df: Pre-loaded and cleaned DataFrame (optional)
        """
        self._df: pd.DataFrame | None = df

    @classmethod
    @abstractmethod
    def from_csv(cls, *, csv_path: str | Path | None = None, **kwargs: object) -> "BaseDataset":
        """Load dataset from CSV file.

        Args:
            csv_path: Path to the CSV file
            **kwargs: Additional loading parameters

        Returns:
            Dataset instance with loaded data
        """
        ...

    @property
    def df(self) -> pd.DataFrame:
        """Get the cleaned DataFrame.

        Raises:
            ValueError: If dataset not loaded
        """
        if self._df is None:
            raise ValueError("Dataset not loaded. Use from_csv() to load data.")
        return self._df

    @property
    def df_pretty(self) -> pd.DataFrame:
        """Get the DataFrame with pretty column names."""
        return self.df.rename(columns={col: self.get_pretty_name(col) for col in self.df.columns})

    @property
    def numeric_cols(self) -> pd.Index:
        """Get numeric column names (filtered by dtype)."""
        return self.df.select_dtypes(include=["number"]).columns

    def __len__(self) -> int:
        return len(self.df)

    def view(
        self,
        columns: Iterable[str] | None = None,
        target_col: str | None = None,
        dropna: bool = True,
    ) -> DatasetView:
        """Build an immutable dataset view for analyzers and plotting layers.

        Args:
            columns: Columns to include in the view (defaults to all)
            target_col: Optional target column reference
            dropna: Drop rows with any missing value in the selected columns

        Returns:
            DatasetView containing selected data and metadata
        """
        selected_cols = list(columns or self.df.columns.to_list())
        missing = [col for col in selected_cols if col not in self.df.columns]
        if missing:
            raise KeyError(f"Columns not in dataset: {missing}")

        frame = self.df.loc[:, selected_cols]
        if dropna:
            frame = frame.dropna(axis=0, how="any")

        return DatasetView(
            df=frame,
            pretty_by_col={col: self.get_pretty_name(col) for col in selected_cols},
            numeric_cols=[col for col in selected_cols if col in self.numeric_cols],
            target_col=target_col,
        )

    def get_pretty_names(self, column_names: list[str] | None = None) -> list[str]:
        """Convert multiple column names to pretty names."""
        return [self.get_pretty_name(name) for name in column_names or self.df.columns.to_list()]

    def get_pretty_name(self, column_name: str) -> str:
        """Convert column name to pretty name for visualization.

        Args:
            column_name: The cleaned column name

        Returns:
            Pretty name suitable for plot labels and titles
        """
        try:
            col_enum = self.Col(column_name)
        except ValueError:
            # Fallback: capitalize and replace underscores if not in enum
            return column_name.replace("_", " ").title()
        else:
            return str(col_enum.pretty_name)
