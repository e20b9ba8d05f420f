"""
Calibration module - four-point touchscreen calibration.
"""
from .base import (
    CalibrationError,
    CalibrationResult,
    CalibrationSink,
    CallbackSink,
    LoggingSink,
)
from .calibrator import Calibrator, CalibratorConfig, CalibrationState
from .config_loader import (
    build_calibrator_config,
    build_old_axys,
    load_calibration_settings,
    load_calibrator_config,
)

__all__ = [
    "CalibrationError",
    "CalibrationResult",
    "CalibrationSink",
    "CallbackSink",
    "LoggingSink",
    "Calibrator",
    "CalibratorConfig",
    "CalibrationState",
    "build_calibrator_config",
    "build_old_axys",
    "load_calibration_settings",
    "load_calibrator_config",
]
