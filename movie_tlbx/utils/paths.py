import os
from pathlib import Path
from typing import Literal


__all__ = ["DATA_DIR_ENV", "get_data_dir", "get_dataset_path"]


DATA_DIR_ENV = "MOVIE_TLBX_DATA_DIR"

_DATASET_MAP: dict[str, str] = {
    "movies": "movies.csv",
}


def get_data_dir() -> Path:
    """Get the path to the data directory.

    Uses ``$MOVIE_TLBX_DATA_DIR`` when set, otherwise the ``_data`` directory
    at the project root.

    Raises:
        FileNotFoundError: If the directory does not exist.
    """
    override = os.environ.get(DATA_DIR_ENV)
    data_dir = Path(override) if override else Path(__file__).parents[2] / "_data"
    data_dir = data_dir.resolve()
    if not data_dir.is_dir():
        raise FileNotFoundError(f"Data directory not found at {data_dir} (set ${DATA_DIR_ENV} to override)")
    return data_dir


def get_dataset_path(filename: Literal["movies"] | str) -> Path:  # noqa: PYI051
    """Get the full path to a dataset file in the data directory.

    Args:
        filename: Key to a known dataset or a custom filename

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    ds_path = get_data_dir() / _DATASET_MAP.get(filename, filename)
    if not ds_path.exists():
        raise FileNotFoundError(f"Dataset file '{filename}' not found at {ds_path}")
    return ds_path
