"""Utility path resolution tests."""

import pytest

from movie_tlbx.utils.paths import DATA_DIR_ENV, get_data_dir, get_dataset_path


def test_env_override(tmp_path, monkeypatch) -> None:
    (tmp_path / "movies.csv").write_text("title\n", encoding="utf-8")
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))

    assert get_data_dir() == tmp_path.resolve()
    movies_path = get_dataset_path("movies")
    assert movies_path.parent == tmp_path.resolve()
    assert movies_path.name == "movies.csv"


def test_custom_filename(tmp_path, monkeypatch) -> None:
    (tmp_path / "other.csv").write_text("a\n", encoding="utf-8")
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    assert get_dataset_path("other.csv").name == "other.csv"


def test_missing_data_dir(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path / "nope"))
    with pytest.raises(FileNotFoundError):
        get_data_dir()


def test_missing_dataset_file(tmp_path, monkeypatch) -> None:
    monkeypatch.setenv(DATA_DIR_ENV, str(tmp_path))
    with pytest.raises(FileNotFoundError, match="movies"):
        get_dataset_path("movies")
