"""
Utilities to load calibrator configuration from YAML files.

Thresholds and the target grid size live in `config/calibration.yaml` so
they can be tuned per device without touching code. Unknown keys are
ignored to keep the loader backwards compatible.
"""
from pathlib import Path
from typing import Any, Dict, Optional
import logging

from src.core import XYinfo, load_yaml
from .calibrator import CalibratorConfig

logger = logging.getLogger(__name__)

# Default location for the calibration settings
DEFAULT_CONFIG_PATH = Path("config/calibration.yaml")


def _apply_overrides(target: Any, overrides: Dict[str, Any]) -> None:
    """
    Apply dictionary overrides to a dataclass-like object.

    Unknown keys are ignored to remain forward compatible with new YAML fields.
    """
    for key, value in overrides.items():
        if hasattr(target, key):
            setattr(target, key, value)
        else:
            logger.debug("Ignoring unknown config key: %s", key)


def load_calibration_settings(config_path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load raw configuration dictionary from YAML.

    Args:
        config_path: Optional path to YAML file (defaults to DEFAULT_CONFIG_PATH)

    Returns:
        Dictionary with configuration values (empty dict on failure)
    """
    path = Path(config_path) if config_path else DEFAULT_CONFIG_PATH

    if not path.exists():
        logger.info("Calibration config not found at %s, using defaults", path)
        return {}

    try:
        return load_yaml(path) or {}
    except Exception as exc:  # YAML/IO errors fall back to safe defaults
        logger.warning("Failed to load calibration config from %s: %s", path, exc)
        return {}


def build_calibrator_config(settings: Optional[Dict[str, Any]] = None) -> CalibratorConfig:
    """
    Construct CalibratorConfig from settings.

    Args:
        settings: Raw settings dictionary (e.g., from load_calibration_settings)

    Returns:
        Populated CalibratorConfig instance

    Raises:
        ValueError: If the resulting num_blocks is not greater than 2
    """
    settings = settings or {}
    overrides = settings.get("calibrator") or settings.get("calibration") or {}

    config = CalibratorConfig()
    _apply_overrides(config, overrides)

    # setattr bypasses __post_init__
    if config.num_blocks <= 2:
        raise ValueError(f"num_blocks must be greater than 2, got {config.num_blocks}")

    return config


def build_old_axys(
        settings: Optional[Dict[str, Any]] = None,
        default: Optional[XYinfo] = None
) -> Optional[XYinfo]:
    """
    Read the coordinate range currently in effect from settings.

    Accepts either a mapping with x_min/x_max/y_min/y_max or a list of
    four values under `device.old_axys`.
    """
    settings = settings or {}
    device = settings.get("device") or {}
    raw = device.get("old_axys")

    if raw is None:
        return default

    return XYinfo.from_dict(raw)


def load_calibrator_config(config_path: Optional[Path] = None) -> CalibratorConfig:
    """
    Convenience wrapper to load and build a calibrator config in one call.
    """
    settings = load_calibration_settings(config_path)
    return build_calibrator_config(settings)
