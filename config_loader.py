"""
Configuration Loader

Reads the YAML configuration shared by every component. A missing file is
not an error: components fall back to their built-in defaults.
"""

import os
import logging
from typing import Dict, Any

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = 'config.yaml'


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """
    Load configuration from a YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Parsed configuration, or an empty dict if the file does not exist
        or is empty

    Example:
        >>> config = load_config('config.yaml')
        >>> config.get('taxonomy', {}).get('path')
        'taxonomy.xml'
    """
    if not os.path.exists(config_path):
        logger.warning(f"Config file not found: {config_path} - using defaults")
        return {}

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f)

    return config or {}
