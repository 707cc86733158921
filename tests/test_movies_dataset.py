"""Tests for MoviesDataset loading, cleaning, and design-matrix preparation."""

import numpy as np
import pandas as pd
import pytest

from movie_tlbx.data import MovieCol, MoviesDataset
from movie_tlbx.errors import MissingValueError, SchemaError


N_ENCODED_COLUMNS = 31  # 2 title types + 10 genres + 5 MPAA ratings + 8 numeric + 6 yes/no


class TestLoading:
    def test_from_frame_normalizes_column_names(self, movies_raw: pd.DataFrame) -> None:
        raw = movies_raw.rename(columns={"imdb_rating": " IMDB Rating ", "thtr_rel_year": "Thtr-Rel-Year"})
        ds = MoviesDataset.from_frame(raw)
        assert MovieCol.IMDB_RATING in ds.df.columns
        assert MovieCol.THTR_REL_YEAR in ds.df.columns

    def test_from_csv_roundtrip(self, movies_raw: pd.DataFrame, tmp_path) -> None:
        path = tmp_path / "movies.csv"
        movies_raw.to_csv(path, index=False)
        ds = MoviesDataset.from_csv(csv_path=path)
        assert len(ds) == len(movies_raw)
        assert ds.df[MovieCol.RUNTIME].dtype.kind == "f"

    def test_unknown_column_fails_loudly(self, movies_raw: pd.DataFrame) -> None:
        with pytest.raises(SchemaError) as excinfo:
            MoviesDataset.from_frame(movies_raw.assign(box_office=1.0))
        assert excinfo.value.columns == ["box_office"]

    def test_missing_feature_column_fails(self, movies_raw: pd.DataFrame) -> None:
        with pytest.raises(SchemaError):
            MoviesDataset.from_frame(movies_raw.drop(columns=["genre"]))

    def test_text_cells_are_stripped(self, movies_raw: pd.DataFrame) -> None:
        raw = movies_raw.copy()
        raw.loc[0, "genre"] = "  Drama "
        raw.loc[1, "mpaa_rating"] = ""
        ds = MoviesDataset.from_frame(raw)
        assert ds.df.loc[0, "genre"] == "Drama"
        assert pd.isna(ds.df.loc[1, "mpaa_rating"])

    def test_unloaded_dataset_raises(self) -> None:
        with pytest.raises(ValueError, match="not loaded"):
            _ = MoviesDataset().df

    def test_pretty_names(self, movies_dataset: MoviesDataset) -> None:
        assert movies_dataset.get_pretty_name("runtime") == "Runtime (minutes)"
        assert movies_dataset.get_pretty_name("not_a_column") == "Not A Column"
        assert "Genre" in movies_dataset.df_pretty.columns

    def test_numeric_cols_exclude_text(self, movies_dataset: MoviesDataset) -> None:
        numeric = set(movies_dataset.numeric_cols)
        assert "runtime" in numeric
        assert "genre" not in numeric
        assert "title" not in numeric


class TestScore:
    def test_compute_score(self) -> None:
        df = pd.DataFrame({"imdb_rating": [7.5, 10.0], "audience_score": [80.0, 100.0]})
        score = MoviesDataset.compute_score(df)
        assert score.tolist() == [77.5, 100.0]
        assert score.name == "score"

    def test_score_stays_in_bounds(self, movies_dataset: MoviesDataset) -> None:
        score = movies_dataset.with_score()["score"]
        assert score.between(0, 100).all()

    def test_with_score_does_not_mutate_source(self, movies_dataset: MoviesDataset) -> None:
        movies_dataset.with_score()
        assert "score" not in movies_dataset.df.columns


class TestDesignData:
    def test_design_matrix_columns(self, movies_dataset: MoviesDataset) -> None:
        design = movies_dataset.design_data()
        columns = list(design.X.columns)
        assert len(columns) == N_ENCODED_COLUMNS
        assert len(set(columns)) == len(columns)
        assert "genre_Drama" in columns
        assert "genre_Action & Adventure" not in columns
        assert "title_type_Documentary" not in columns
        assert "mpaa_rating_G" not in columns
        for excluded in ("title", "critics_score", "imdb_rating", "audience_score"):
            assert excluded not in columns

    def test_design_is_numeric_and_complete(self, movies_dataset: MoviesDataset) -> None:
        design = movies_dataset.design_data()
        assert all(dtype.kind == "f" for dtype in design.X.dtypes)
        assert design.X.notna().all().all()
        assert design.n_dropped_rows == 0
        assert design.n_obs == len(movies_dataset)
        assert design.X.index.equals(design.y.index)

    def test_years_start_at_zero(self, movies_dataset: MoviesDataset) -> None:
        X = movies_dataset.design_data().X
        assert X["thtr_rel_year"].min() == 0.0
        assert X["dvd_rel_year"].min() == 0.0

    def test_listwise_deletion(self, movies_raw: pd.DataFrame) -> None:
        raw = movies_raw.copy()
        raw.loc[3, "runtime"] = np.nan
        raw.loc[5, "audience_score"] = np.nan
        design = MoviesDataset.from_frame(raw).design_data()
        assert design.n_dropped_rows == 2
        assert 3 not in design.X.index
        assert 5 not in design.y.index
        assert design.dropped_fraction == pytest.approx(2 / len(raw))

    def test_missing_category_dropped_or_indicated(self, movies_raw: pd.DataFrame) -> None:
        raw = movies_raw.copy()
        raw.loc[0, "mpaa_rating"] = np.nan
        ds = MoviesDataset.from_frame(raw)

        dropped = ds.design_data()
        assert dropped.n_dropped_rows == 1
        assert "mpaa_rating_nan" not in dropped.X.columns

        indicated = ds.design_data(na_indicator=True)
        assert indicated.n_dropped_rows == 0
        assert indicated.X.loc[0, "mpaa_rating_nan"] == 1.0

    def test_all_missing_feature_raises(self, movies_raw: pd.DataFrame) -> None:
        ds = MoviesDataset.from_frame(movies_raw.assign(dvd_rel_year=np.nan))
        with pytest.raises(MissingValueError) as excinfo:
            ds.design_data()
        assert excinfo.value.column == "dvd_rel_year"

    def test_source_frame_not_mutated(self, movies_dataset: MoviesDataset) -> None:
        before = movies_dataset.df.copy()
        movies_dataset.design_data()
        pd.testing.assert_frame_equal(movies_dataset.df, before)

    def test_frame_joins_x_and_y(self, movies_dataset: MoviesDataset) -> None:
        design = movies_dataset.design_data()
        frame = design.frame()
        assert frame.shape == (design.n_obs, N_ENCODED_COLUMNS + 1)
        assert "score" in frame.columns
