"""
Utility modules for ridgematch.
"""

from .config import (
    Config,
    DataConfig,
    BinarizationConfig,
    MatchingConfig,
    LoggingConfig,
    load_config,
    load_yaml,
    merge_configs,
    config_from_dict,
    DEFAULT_CONFIG
)
from .logger import (
    ExperimentLogger,
    ProgressTracker,
    get_logger
)
from .io import (
    binarize_image,
    load_grid,
    save_grid,
    load_pair_list,
    save_pair_list,
    discover_images,
    load_json,
    save_json,
    load_minutiae,
    save_minutiae,
    SUPPORTED_EXTENSIONS
)

__all__ = [
    # Config
    'Config',
    'DataConfig',
    'BinarizationConfig',
    'MatchingConfig',
    'LoggingConfig',
    'load_config',
    'load_yaml',
    'merge_configs',
    'config_from_dict',
    'DEFAULT_CONFIG',
    # Logger
    'ExperimentLogger',
    'ProgressTracker',
    'get_logger',
    # IO
    'binarize_image',
    'load_grid',
    'save_grid',
    'load_pair_list',
    'save_pair_list',
    'discover_images',
    'load_json',
    'save_json',
    'load_minutiae',
    'save_minutiae',
    'SUPPORTED_EXTENSIONS',
]
