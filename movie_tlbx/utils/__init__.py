from .paths import DATA_DIR_ENV, get_data_dir, get_dataset_path
from .plotting_config import DEFAULT_PLOT_CFG, PlottingConfig


__all__ = [
    "DATA_DIR_ENV",
    "DEFAULT_PLOT_CFG",
    "PlottingConfig",
    "get_data_dir",
    "get_dataset_path",
]
