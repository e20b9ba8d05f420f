"""
Shared calibration types: results, error kinds and output sinks.

A sink receives the finished coordinate range and decides what to do with
it (apply it to a driver, print it, hand it to a GUI). The calibrator only
propagates the sink's success flag.
"""
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional
import logging

from src.core import XYinfo

logger = logging.getLogger(__name__)


class CalibrationError(Enum):
    """Why a finish attempt did not succeed."""
    INSUFFICIENT_CLICKS = "insufficient_clicks"  # finish() before 4 clicks
    SINK_FAILURE = "sink_failure"  # Sink rejected the computed range


@dataclass
class CalibrationResult:
    """Result of a calibration operation."""
    success: bool
    data: Optional[XYinfo]
    message: str
    swap_xy: bool = False
    error: Optional[CalibrationError] = None


class CalibrationSink:
    """
    Receiver for a finished calibration.

    Subclasses apply or report the new range for a specific driver or
    platform.
    """

    def finish_data(self, axys: XYinfo, swap_xy: bool) -> bool:
        """
        Apply the new coordinate range.

        Args:
            axys: Computed coordinate range
            swap_xy: Whether the device axes must be swapped

        Returns:
            True if the range was accepted
        """
        raise NotImplementedError


class CallbackSink(CalibrationSink):
    """Sink that forwards to a plain callable."""

    def __init__(self, callback: Callable[[XYinfo, bool], bool]):
        self.callback = callback

    def finish_data(self, axys: XYinfo, swap_xy: bool) -> bool:
        return bool(self.callback(axys, swap_xy))


class LoggingSink(CalibrationSink):
    """
    Sink that only reports the result.

    Used when no driver integration is available, e.g. for a dry run with
    fake clicks. Always succeeds.
    """

    def __init__(self, device_name: str = "unknown"):
        self.device_name = device_name
        self.last_axys: Optional[XYinfo] = None
        self.last_swap_xy: Optional[bool] = None

    def finish_data(self, axys: XYinfo, swap_xy: bool) -> bool:
        self.last_axys = axys
        self.last_swap_xy = swap_xy

        logger.info(
            f"Calibration for '{self.device_name}': "
            f"x={axys.x_min}..{axys.x_max}, y={axys.y_min}..{axys.y_max}, "
            f"swap_xy={swap_xy}"
        )
        return True
