"""Test configuration for the movie toolbox."""

from pathlib import Path
import sys

import matplotlib
import numpy as np
import pandas as pd
import pytest


matplotlib.use("Agg")

# Ensure the local package is importable when the repo isn't installed.
REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))


N_MOVIES = 240


def _shuffled_levels(rng: np.random.Generator, levels: tuple[str, ...], n: int) -> np.ndarray:
    """Every level appears at least once, in random order."""
    return rng.permutation(np.resize(np.asarray(levels, dtype=object), n))


def make_movies_frame(n: int = N_MOVIES, seed: int = 7) -> pd.DataFrame:
    """Synthetic raw movies table with every schema column (identifiers included)."""
    from movie_tlbx.data.movie_columns import GENRE_LEVELS, MPAA_RATING_LEVELS, TITLE_TYPE_LEVELS

    rng = np.random.default_rng(seed)
    genre = _shuffled_levels(rng, GENRE_LEVELS, n)
    runtime = rng.integers(80, 160, size=n).astype(float)
    thtr_year = rng.integers(1970, 2015, size=n)
    drama = (genre == "Drama").astype(float)

    imdb = np.clip(np.round(6.0 + 0.015 * (runtime - 110) + 0.8 * drama + rng.normal(0, 0.7, size=n), 1), 1, 10)
    audience = np.clip(np.round(imdb * 10 - 5 + rng.normal(0, 8, size=n)), 0, 100)

    def yes_no(p: float) -> np.ndarray:
        return np.where(rng.random(n) < p, "yes", "no")

    return pd.DataFrame(
        {
            "title": [f"Movie {i}" for i in range(n)],
            "title_type": _shuffled_levels(rng, TITLE_TYPE_LEVELS, n),
            "genre": genre,
            "runtime": runtime,
            "mpaa_rating": _shuffled_levels(rng, MPAA_RATING_LEVELS, n),
            "studio": rng.choice(["Warner", "Paramount", "Universal"], size=n),
            "thtr_rel_year": thtr_year,
            "thtr_rel_month": rng.integers(1, 13, size=n),
            "thtr_rel_day": rng.integers(1, 29, size=n),
            "dvd_rel_year": thtr_year + rng.integers(0, 4, size=n),
            "dvd_rel_month": rng.integers(1, 13, size=n),
            "dvd_rel_day": rng.integers(1, 29, size=n),
            "imdb_rating": imdb,
            "imdb_num_votes": rng.integers(200, 500_000, size=n),
            "critics_rating": rng.choice(["Certified Fresh", "Fresh", "Rotten"], size=n),
            "critics_score": rng.integers(0, 101, size=n),
            "audience_rating": np.where(audience >= 60, "Upright", "Spilled"),
            "audience_score": audience,
            "best_pic_nom": yes_no(0.1),
            "best_pic_win": yes_no(0.05),
            "best_actor_win": yes_no(0.3),
            "best_actress_win": yes_no(0.25),
            "best_dir_win": yes_no(0.15),
            "top200_box": yes_no(0.1),
            "director": rng.choice(["A. Smith", "B. Jones", "C. Lee"], size=n),
            "actor1": rng.choice(["Actor A", "Actor B"], size=n),
            "imdb_url": [f"https://www.imdb.com/title/tt{i:07d}/" for i in range(n)],
        },
    )


@pytest.fixture
def movies_raw() -> pd.DataFrame:
    """Fresh copy of the synthetic raw movies table."""
    return make_movies_frame()


@pytest.fixture(scope="session")
def movies_dataset():
    """Cleaned synthetic movies dataset shared across tests."""
    from movie_tlbx.data import MoviesDataset

    return MoviesDataset.from_frame(make_movies_frame())


@pytest.fixture(scope="session")
def linear_xy() -> tuple[pd.DataFrame, pd.Series]:
    """``y = 5 + 3a + e`` where ``e`` is exactly orthogonal to every column.

    Columns ``b``, ``c`` and ``d`` therefore explain nothing: dropping any of
    them leaves the RSS unchanged and lowers AIC by 2.
    """
    rng = np.random.default_rng(0)
    n = 120
    X = pd.DataFrame(rng.normal(size=(n, 4)), columns=["a", "b", "c", "d"])
    design = np.column_stack([np.ones(n), X.to_numpy()])
    noise = rng.normal(size=n)
    noise = noise - design @ np.linalg.lstsq(design, noise, rcond=None)[0]
    y = pd.Series(5.0 + 3.0 * X["a"] + noise, name="y")
    return X, y
