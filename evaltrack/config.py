"""
Configuration loader
"""
import logging
import os
from pathlib import Path
from typing import Optional

import yaml

from evaltrack.models import AppConfig


logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config/evaltrack.yaml"
CONFIG_ENV_VAR = "EVALTRACK_CONFIG"


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from YAML file

    Args:
        config_path: Path to config file. Defaults to $EVALTRACK_CONFIG,
            then config/evaltrack.yaml

    Returns:
        AppConfig object (built-in defaults if the file does not exist)
    """
    path = Path(config_path or os.environ.get(CONFIG_ENV_VAR) or DEFAULT_CONFIG_PATH)

    if not path.exists():
        logger.warning(f"⚠️ Config file not found: {path}, using defaults")
        return AppConfig()

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f) or {}

    return AppConfig(**data)
