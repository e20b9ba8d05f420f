"""
Four-point touchscreen calibrator.

The user taps four targets drawn near the screen corners, in the order
upper-left, upper-right, lower-left, lower-right. From the raw device
coordinates of those taps, the display size and the range currently in
effect, a new coordinate range is computed.

State flow:
- EMPTY: No clicks yet
- COLLECTING: 1-3 clicks accepted
- READY: 4 clicks accepted, finish() may be called
- FINISHED: Range computed and accepted by the sink
"""
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional
import logging

import numpy as np

from src.core import NUM_CORNERS, ClickPoint, Corner, XYinfo
from .base import (
    CalibrationError,
    CalibrationResult,
    CalibrationSink,
    LoggingSink,
)

logger = logging.getLogger(__name__)


class CalibrationState(Enum):
    """Calibration session states."""
    EMPTY = "empty"
    COLLECTING = "collecting"
    READY = "ready"
    FINISHED = "finished"


def _scaled_mean(coord_sum: int, scale: np.float32, offset: int) -> int:
    """Half of coord_sum * scale plus offset, in float32, truncated."""
    value = np.float32(coord_sum) * scale / np.float32(2) + np.float32(offset)
    return int(value)


@dataclass
class CalibratorConfig:
    """Configuration for the calibrator."""
    threshold_doubleclick: int = 7  # Pixels; <= 0 disables the check
    threshold_misclick: int = 15  # Pixels
    num_blocks: int = 8  # Grid divisions of the calibration target
    verbose: bool = False

    def __post_init__(self):
        if self.num_blocks <= 2:
            raise ValueError("num_blocks must be greater than 2")


class Calibrator:
    """
    Collects four corner clicks and turns them into a coordinate range.

    Click quality heuristics:
    1. Double-click suppression: a click too close to the previous one on
       both axes is rejected
    2. Mis-click detection: clicks far away from earlier ones are reported
       (diagnostic only, never rejected)
    """

    def __init__(
            self,
            device_name: str,
            old_axys: XYinfo,
            verbose: bool = False,
            sink: Optional[CalibrationSink] = None,
            config: Optional[CalibratorConfig] = None
    ):
        """
        Initialize calibrator.

        Args:
            device_name: Device name, used in diagnostics only
            old_axys: Coordinate range currently in effect on the device
            verbose: Log every accepted and rejected click
            sink: Receiver of the finished range (default: LoggingSink)
            config: Thresholds and target grid size
        """
        self.device_name = device_name
        self.old_axys = old_axys
        self.config = config or CalibratorConfig()
        self.verbose = verbose or self.config.verbose
        self.sink = sink or LoggingSink(device_name)

        self.threshold_doubleclick = self.config.threshold_doubleclick
        self.threshold_misclick = self.config.threshold_misclick

        # Raw clicks, one row per Corner
        self._clicks = np.zeros((NUM_CORNERS, 2), dtype=np.int64)
        self.num_clicks = 0
        self._finished = False

        # Statistics
        self.rejected_clicks = 0
        self.misclicks = 0

        logger.info(
            f"Calibrator initialized for '{device_name}': "
            f"old range x={old_axys.x_min}..{old_axys.x_max}, "
            f"y={old_axys.y_min}..{old_axys.y_max}"
        )

    def set_threshold_doubleclick(self, t: int) -> None:
        """Set double-click distance in pixels (<= 0 disables the check)."""
        self.threshold_doubleclick = t

    def set_threshold_misclick(self, t: int) -> None:
        """Set mis-click distance in pixels."""
        self.threshold_misclick = t

    def get_numclicks(self) -> int:
        """Number of accepted clicks (0-4)."""
        return self.num_clicks

    @property
    def state(self) -> CalibrationState:
        """Current session state."""
        if self._finished:
            return CalibrationState.FINISHED
        if self.num_clicks == 0:
            return CalibrationState.EMPTY
        if self.num_clicks < NUM_CORNERS:
            return CalibrationState.COLLECTING
        return CalibrationState.READY

    @property
    def clicks(self) -> List[ClickPoint]:
        """Accepted clicks in slot order."""
        return [
            ClickPoint(int(x), int(y))
            for x, y in self._clicks[:self.num_clicks]
        ]

    def add_click(self, x: int, y: int) -> bool:
        """
        Add a click for the next target.

        Args:
            x, y: Raw device coordinates

        Returns:
            True if the click was accepted, False if it was suppressed
        """
        n = self.num_clicks

        if n >= NUM_CORNERS:
            logger.warning(f"Ignoring click ({x}, {y}): all {NUM_CORNERS} clicks already collected")
            return False

        # Double-click check
        if n > 0 and self.threshold_doubleclick > 0:
            prev_x, prev_y = (int(v) for v in self._clicks[n - 1])
            if (abs(x - prev_x) < self.threshold_doubleclick
                    and abs(y - prev_y) < self.threshold_doubleclick):
                self.rejected_clicks += 1
                if self.verbose:
                    logger.debug(
                        f"Not adding click {n} (X={x}, Y={y}): "
                        f"within {self.threshold_doubleclick} pixels of previous click"
                    )
                return False

        # Mis-click check: second and third click against the first
        if n in (1, 2):
            self._report_misclick(n, x, y, [Corner.UL])

        # Mis-click check: last click against the second and third
        elif n == 3:
            self._report_misclick(n, x, y, [Corner.UR, Corner.LL])

        self._clicks[n] = (x, y)
        self.num_clicks += 1

        if self.verbose:
            logger.debug(f"Adding click {n} (X={x}, Y={y})")

        return True

    def _is_misclick(self, x: int, y: int, ref: Corner) -> bool:
        """
        Four-difference outlier test against an earlier click.

        Both coordinates of the new click are compared with both coordinates
        of the reference click.
        """
        ref_x, ref_y = (int(v) for v in self._clicks[ref])
        t = self.threshold_misclick
        return (abs(x - ref_x) > t
                and abs(x - ref_y) > t
                and abs(y - ref_x) > t
                and abs(y - ref_y) > t)

    def _report_misclick(self, n: int, x: int, y: int, refs: List[Corner]) -> None:
        """Log a mis-click or good-click verdict. Never rejects."""
        names = ", ".join(ref.name for ref in refs)
        if any(self._is_misclick(x, y, ref) for ref in refs):
            self.misclicks += 1
            logger.warning(f"Click {n}: probable mis-click at ({x}, {y}) compared to {names}")
        else:
            logger.info(f"Click {n}: good click at ({x}, {y}) compared to {names}")

    def finish(
            self,
            width: int,
            height: int,
            num_blocks: Optional[int] = None
    ) -> CalibrationResult:
        """
        Compute the new coordinate range from the four clicks.

        Args:
            width: Display width in pixels
            height: Display height in pixels
            num_blocks: Grid divisions of the calibration target
                        (default: config.num_blocks)

        Returns:
            CalibrationResult with the new range and swap flag

        Raises:
            ValueError: If num_blocks <= 2 or the display size is not positive
        """
        if self.num_clicks != NUM_CORNERS:
            logger.warning(f"Cannot finish: {self.num_clicks}/{NUM_CORNERS} clicks collected")
            return CalibrationResult(
                success=False,
                data=None,
                message=f"Not enough clicks ({self.num_clicks}/{NUM_CORNERS})",
                error=CalibrationError.INSUFFICIENT_CLICKS
            )

        if num_blocks is None:
            num_blocks = self.config.num_blocks
        if num_blocks <= 2:
            raise ValueError(f"num_blocks must be greater than 2, got {num_blocks}")
        if width <= 0 or height <= 0:
            raise ValueError(f"Invalid display size: {width}x{height}")

        points = self._clicks.copy()

        swap_xy = self._detect_swap(points)
        if swap_xy:
            self._swap_corner_points(points)

        axys = self._compute_bounds(points, width, height)
        axys = self._expand_for_target_inset(axys, num_blocks)

        if swap_xy:
            axys = axys.swapped()

        if self.verbose:
            logger.debug(f"Computed range {axys.as_tuple()} (swap_xy={swap_xy})")

        if not self.finish_data(axys, swap_xy):
            logger.error(f"Sink rejected calibration for '{self.device_name}'")
            return CalibrationResult(
                success=False,
                data=axys,
                message="Failed to apply calibration",
                swap_xy=swap_xy,
                error=CalibrationError.SINK_FAILURE
            )

        self._finished = True
        logger.info(f"Calibration of '{self.device_name}' finished")

        return CalibrationResult(
            success=True,
            data=axys,
            message="Calibration completed successfully",
            swap_xy=swap_xy
        )

    def finish_data(self, axys: XYinfo, swap_xy: bool) -> bool:
        """Hand the finished range to the sink."""
        return self.sink.finish_data(axys, swap_xy)

    @staticmethod
    def _detect_swap(points: np.ndarray) -> bool:
        """
        Check whether the device axes are rotated against the display.

        True if the two upper clicks are further apart vertically than
        horizontally.
        """
        dx = abs(int(points[Corner.UL, 0]) - int(points[Corner.UR, 0]))
        dy = abs(int(points[Corner.UL, 1]) - int(points[Corner.UR, 1]))
        return dx < dy

    @staticmethod
    def _swap_corner_points(points: np.ndarray) -> None:
        """Exchange the LL and UR clicks (both coordinates) in place."""
        ll, ur = int(Corner.LL), int(Corner.UR)
        points[[ll, ur]] = points[[ur, ll]]

    def _compute_bounds(self, points: np.ndarray, width: int, height: int) -> XYinfo:
        """
        Average opposite clicks and scale them with the old range.

        Computed in float32 and truncated toward zero; existing driver
        ranges were produced with single precision.
        """
        old = self.old_axys
        ul_x, ul_y = (int(v) for v in points[Corner.UL])
        ur_x, ur_y = (int(v) for v in points[Corner.UR])
        ll_x, ll_y = (int(v) for v in points[Corner.LL])
        lr_x, lr_y = (int(v) for v in points[Corner.LR])

        scale_x = np.float32(old.x_max - old.x_min) / np.float32(width)
        scale_y = np.float32(old.y_max - old.y_min) / np.float32(height)

        return XYinfo(
            x_min=_scaled_mean(ul_x + ll_x, scale_x, old.x_min),
            x_max=_scaled_mean(ur_x + lr_x, scale_x, old.x_min),
            y_min=_scaled_mean(ul_y + ur_y, scale_y, old.y_min),
            y_max=_scaled_mean(ll_y + lr_y, scale_y, old.y_min),
        )

    @staticmethod
    def _expand_for_target_inset(axys: XYinfo, num_blocks: int) -> XYinfo:
        """
        Extend the range by one grid block on each side.

        The targets sit one block in from the screen edges, so the clicked
        range covers num_blocks - 2 blocks.
        """
        blocks = np.float32(num_blocks - 2)
        delta_x = int(np.float32(axys.x_max - axys.x_min) / blocks)
        delta_y = int(np.float32(axys.y_max - axys.y_min) / blocks)

        return XYinfo(
            x_min=axys.x_min - delta_x,
            x_max=axys.x_max + delta_x,
            y_min=axys.y_min - delta_y,
            y_max=axys.y_max + delta_y,
        )

    def reset(self) -> None:
        """Drop all clicks and start over."""
        self._clicks[:] = 0
        self.num_clicks = 0
        self._finished = False
        logger.info("Calibration reset")

    def get_stats(self) -> dict:
        """Get calibration session statistics."""
        return {
            "device_name": self.device_name,
            "state": self.state.value,
            "num_clicks": self.num_clicks,
            "rejected_clicks": self.rejected_clicks,
            "misclicks": self.misclicks,
        }
