"""Tests for DatasetView."""

import pandas as pd
import pytest

from movie_tlbx.data.views import DatasetView


class TestDatasetView:
    """Test DatasetView functionality."""

    @pytest.fixture
    def sample_view(self) -> DatasetView:
        data = pd.DataFrame(
            {
                "imdb_rating": [7.1, 6.4, 8.0],
                "audience_score": [70.0, 55.0, 91.0],
                "genre": ["Drama", "Comedy", "Drama"],
            },
        )
        return DatasetView(
            df=data,
            pretty_by_col={"imdb_rating": "IMDb Rating", "audience_score": "Audience Score", "genre": "Genre"},
            numeric_cols=["imdb_rating", "audience_score"],
            target_col="audience_score",
        )

    def test_view_creation(self, sample_view: DatasetView) -> None:
        assert len(sample_view.df) == 3
        assert sample_view.target_col == "audience_score"

    def test_view_is_frozen(self, sample_view: DatasetView) -> None:
        with pytest.raises(AttributeError):
            sample_view.target_col = "imdb_rating"  # type: ignore[misc]

    def test_features_property(self, sample_view: DatasetView) -> None:
        assert list(sample_view.features.columns) == ["imdb_rating", "audience_score"]

    def test_features_without_numeric_cols(self) -> None:
        view = DatasetView(df=pd.DataFrame({"a": [1], "b": [2]}), pretty_by_col={}, numeric_cols=[])
        assert list(view.features.columns) == ["a", "b"]

    def test_pretty_falls_back_to_column_name(self, sample_view: DatasetView) -> None:
        assert sample_view.pretty("genre") == "Genre"
        assert sample_view.pretty("runtime") == "runtime"


class TestDatasetViewFromMovies:
    def test_view_selects_and_drops_missing(self, movies_raw) -> None:
        from movie_tlbx.data import MoviesDataset

        raw = movies_raw.copy()
        raw.loc[0, "imdb_rating"] = None
        ds = MoviesDataset.from_frame(raw)
        view = ds.view(columns=["imdb_rating", "audience_score"])
        assert len(view.df) == len(raw) - 1
        assert view.pretty("imdb_rating") == "IMDb Rating (1-10)"
        assert view.numeric_cols == ["imdb_rating", "audience_score"]

    def test_view_unknown_column(self, movies_dataset) -> None:
        with pytest.raises(KeyError):
            movies_dataset.view(columns=["box_office"])
