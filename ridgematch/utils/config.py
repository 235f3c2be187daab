"""
Configuration management for ridgematch.

This module provides utilities for loading and accessing configuration
parameters from YAML files. Matching thresholds are fixed constants of
ridgematch.minutiae and are not configurable.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Union
import yaml


@dataclass
class DataConfig:
    """Configuration for data paths."""
    image_dir: str = "data/images"
    pairs_file: str = "data/pairs.csv"
    output_dir: str = "results/minutiae_matching"


@dataclass
class BinarizationConfig:
    """Configuration for turning grayscale images into ridge grids."""
    threshold: int = 128
    ridges_dark: bool = True


@dataclass
class MatchingConfig:
    """Configuration for the matching pipeline."""
    num_workers: int = 1
    max_thinning_iterations: Optional[int] = None


@dataclass
class LoggingConfig:
    """Configuration for logging."""
    level: str = "INFO"
    log_dir: str = "logs"
    save_results: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Attributes:
        data: Data path configurations
        binarization: Image binarization settings
        matching: Matching pipeline settings
        logging: Logging configuration
    """
    data: DataConfig = field(default_factory=DataConfig)
    binarization: BinarizationConfig = field(default_factory=BinarizationConfig)
    matching: MatchingConfig = field(default_factory=MatchingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load a YAML configuration file.

    Args:
        path: Path to the YAML file

    Returns:
        Dictionary containing the configuration (empty for an empty file)

    Raises:
        FileNotFoundError: If the configuration file does not exist
        yaml.YAMLError: If the YAML file is malformed
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {path}")

    with open(path, 'r') as f:
        return yaml.safe_load(f) or {}


def merge_configs(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Recursively merge two configuration dictionaries.

    The override dictionary values take precedence over base values.

    Args:
        base: Base configuration dictionary
        override: Override configuration dictionary

    Returns:
        Merged configuration dictionary
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result


def config_from_dict(config_dict: Dict[str, Any]) -> Config:
    """
    Build a Config from a plain dictionary.

    Missing sections and keys fall back to their defaults.

    Args:
        config_dict: Dictionary with optional 'data', 'binarization',
            'matching' and 'logging' sections

    Returns:
        Config object
    """
    data_dict = config_dict.get('data') or {}
    binarization_dict = config_dict.get('binarization') or {}
    matching_dict = config_dict.get('matching') or {}
    logging_dict = config_dict.get('logging') or {}

    data_config = DataConfig(
        image_dir=data_dict.get('image_dir', 'data/images'),
        pairs_file=data_dict.get('pairs_file', 'data/pairs.csv'),
        output_dir=data_dict.get('output_dir', 'results/minutiae_matching')
    )

    binarization_config = BinarizationConfig(
        threshold=int(binarization_dict.get('threshold', 128)),
        ridges_dark=bool(binarization_dict.get('ridges_dark', True))
    )

    max_iterations = matching_dict.get('max_thinning_iterations')
    matching_config = MatchingConfig(
        num_workers=int(matching_dict.get('num_workers', 1)),
        max_thinning_iterations=int(max_iterations) if max_iterations is not None else None
    )

    logging_config = LoggingConfig(
        level=logging_dict.get('level', 'INFO'),
        log_dir=logging_dict.get('log_dir', 'logs'),
        save_results=logging_dict.get('save_results', True)
    )

    return Config(
        data=data_config,
        binarization=binarization_config,
        matching=matching_config,
        logging=logging_config
    )


def load_config(
    config_path: Union[str, Path],
    base_config_path: Optional[Union[str, Path]] = None
) -> Config:
    """
    Load configuration from YAML files.

    Optionally merges with a base configuration file.

    Args:
        config_path: Path to the main configuration file
        base_config_path: Optional path to base configuration to merge with

    Returns:
        Config object with loaded settings
    """
    config_dict = load_yaml(config_path)

    if base_config_path is not None:
        base_dict = load_yaml(base_config_path)
        config_dict = merge_configs(base_dict, config_dict)

    return config_from_dict(config_dict)


# Default configuration instance
DEFAULT_CONFIG = Config()
