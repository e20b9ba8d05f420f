"""
I/O utilities for reading configuration files.
"""
from pathlib import Path
from typing import Any, Dict
import logging

import yaml

logger = logging.getLogger(__name__)


def load_yaml(filepath: Path) -> Dict[str, Any]:
    """
    Load YAML configuration file.

    Args:
        filepath: Path to YAML file

    Returns:
        Parsed configuration dictionary

    Raises:
        FileNotFoundError: If file does not exist
        yaml.YAMLError: If file is malformed
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Config file not found: {filepath}")

    try:
        with open(filepath, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f)
        logger.debug(f"Loaded {filepath}")
        return data if data is not None else {}

    except yaml.YAMLError as e:
        logger.error(f"Failed to parse {filepath}: {e}")
        raise
