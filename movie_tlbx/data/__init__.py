"""Data module for dataset classes."""

from .base_columns import ColumnKind, ColumnRole
from .encoding import DesignData, FeatureEncoding
from .movie_columns import MovieColumn as MovieCol
from .movie_dataset import IMDB_SCALE_FACTOR, MoviesDataset


__all__ = [
    "IMDB_SCALE_FACTOR",
    "ColumnKind",
    "ColumnRole",
    "DesignData",
    "FeatureEncoding",
    "MovieCol",
    "MoviesDataset",
]
