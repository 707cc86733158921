"""Base analyzer class for analysis components that work on a dataset view."""

from abc import ABC, abstractmethod
from typing import Any

from movie_tlbx.data.views import DatasetView


class BaseAnalyser(ABC):
    """Abstract base class for data analysis components.

    All analyzers must:
    1. Accept a DatasetView in their constructor
    2. Implement fit() to perform the analysis and return self for chaining
    3. Implement result() to return a frozen dataclass with results

    Analyzers are pure computation; plotting lives in ``movie_tlbx.plotting``
    and consumes the result dataclasses.

    Example:
        >>> from movie_tlbx.data import MoviesDataset
        >>> result = MoviesDataset.from_csv().make_rating_comparison().fit().result()
        >>> result.reject_null
    """

    def __init__(self, view: DatasetView) -> None:
        self._view = view
        self._fitted = False

    @property
    def view(self) -> DatasetView:
        return self._view

    @abstractmethod
    def fit(self) -> "BaseAnalyser":
        """Fit the analyzer to the data.

        Returns:
            Self for method chaining.
        """
        ...

    @abstractmethod
    def result(self) -> Any:
        """Return analysis results as a frozen dataclass instance.

        Raises:
            ValueError: If fit() has not been called yet.
        """
        ...

    def _check_fitted(self) -> None:
        if not self._fitted:
            raise ValueError("Call fit() first")
