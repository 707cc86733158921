"""Tests for column definition modules."""

import pytest

from movie_tlbx.data.base_columns import ColumnKind, ColumnMetadata, ColumnRole
from movie_tlbx.data.movie_columns import GENRE_LEVELS, MovieColumn
from movie_tlbx.errors import SchemaError


class TestColumnMetadata:
    """Test ColumnMetadata dataclass."""

    def test_column_metadata_creation(self) -> None:
        metadata = ColumnMetadata(
            original_name="Test Name",
            cleaned_name="test_name",
            kind=ColumnKind.NUMERIC,
            role=ColumnRole.FEATURE,
            pretty_name="Test Name (units)",
        )
        assert metadata.cleaned_name == "test_name"
        assert metadata.levels == ()
        assert metadata.true_label is None

    def test_column_metadata_is_frozen(self) -> None:
        metadata = ColumnMetadata(
            original_name="Test",
            cleaned_name="test",
            kind=ColumnKind.BINARY,
            role=ColumnRole.FEATURE,
            pretty_name="Test",
        )
        with pytest.raises(AttributeError):
            metadata.original_name = "Changed"  # type: ignore[misc]


class TestMovieColumn:
    """Test MovieColumn enum."""

    def test_target_column_exists(self) -> None:
        assert MovieColumn.TARGET.value == "score"
        assert MovieColumn.SCORE is MovieColumn.TARGET

    def test_enum_values_are_snake_case(self) -> None:
        for col in MovieColumn:
            assert col.value.islower()
            assert " " not in col.value

    def test_all_schema_members_have_metadata(self) -> None:
        for col in MovieColumn.schema_members():
            meta = col.metadata()
            assert meta.cleaned_name == col.value
            assert meta.pretty_name

    def test_leakage_and_identifier_columns_are_not_features(self) -> None:
        features = MovieColumn.feature_columns()
        for col in ("critics_score", "critics_rating", "audience_rating", "title", "director", "imdb_url"):
            assert col not in features
        assert "imdb_rating" not in features
        assert "audience_score" not in features

    def test_feature_kinds(self) -> None:
        assert MovieColumn.GENRE.kind == ColumnKind.CATEGORICAL
        assert MovieColumn.THTR_REL_YEAR.kind == ColumnKind.YEAR
        assert MovieColumn.BEST_PIC_WIN.kind == ColumnKind.BINARY
        assert MovieColumn.RUNTIME.role == ColumnRole.FEATURE

    def test_genre_reference_level_is_first(self) -> None:
        assert MovieColumn.GENRE.metadata().levels == GENRE_LEVELS
        assert GENRE_LEVELS[0] == "Action & Adventure"

    def test_validate_columns_rejects_unknown(self) -> None:
        cols = [*MovieColumn.feature_columns(), "imdb_rating", "audience_score", "box_office"]
        with pytest.raises(SchemaError) as excinfo:
            MovieColumn.validate_columns(cols)
        assert excinfo.value.columns == ["box_office"]

    def test_validate_columns_requires_features_and_ratings(self) -> None:
        cols = [c for c in MovieColumn.feature_columns() if c != "runtime"]
        with pytest.raises(SchemaError) as excinfo:
            MovieColumn.validate_columns(cols)
        assert "runtime" in excinfo.value.columns
        assert "imdb_rating" in excinfo.value.columns

    def test_identifiers_are_optional(self) -> None:
        MovieColumn.validate_columns([*MovieColumn.feature_columns(), "imdb_rating", "audience_score"])

    def test_target_has_metadata_but_is_not_a_schema_member(self) -> None:
        meta = MovieColumn.TARGET.metadata()
        assert meta.role == ColumnRole.TARGET
        assert meta.cleaned_name == "score"
        assert MovieColumn.TARGET not in MovieColumn.schema_members()

    def test_precomputed_target_column_is_accepted(self) -> None:
        MovieColumn.validate_columns([*MovieColumn.feature_columns(), "imdb_rating", "audience_score", "score"])
