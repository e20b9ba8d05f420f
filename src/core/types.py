"""
Core data types for the touchscreen calibrator.
Defines contracts between modules to ensure stable interfaces.
"""
from dataclasses import dataclass, asdict
from enum import IntEnum
from typing import Any, Dict, NamedTuple, Sequence, Tuple, Union

NUM_CORNERS = 4


class Corner(IntEnum):
    """Click slot roles, in the order the user taps the targets."""
    UL = 0  # Upper-left
    UR = 1  # Upper-right
    LL = 2  # Lower-left
    LR = 3  # Lower-right


class ClickPoint(NamedTuple):
    """A single click in raw device coordinates."""
    x: int
    y: int


@dataclass(frozen=True)
class XYinfo:
    """
    Coordinate range of a touch device.

    Describes the linear mapping from raw device coordinates to the
    display: the raw values reported at the left/right and top/bottom
    screen edges.
    """
    x_min: int
    x_max: int
    y_min: int
    y_max: int

    def as_tuple(self) -> Tuple[int, int, int, int]:
        return (self.x_min, self.x_max, self.y_min, self.y_max)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Union[Dict[str, Any], Sequence[Any]]) -> "XYinfo":
        """
        Build a range from a mapping or a 4-sequence.

        Args:
            data: {"x_min": .., "x_max": .., "y_min": .., "y_max": ..}
                  or [x_min, x_max, y_min, y_max]

        Returns:
            XYinfo instance

        Raises:
            ValueError: If data has the wrong shape
        """
        if isinstance(data, dict):
            try:
                return cls(
                    x_min=int(data["x_min"]),
                    x_max=int(data["x_max"]),
                    y_min=int(data["y_min"]),
                    y_max=int(data["y_max"]),
                )
            except KeyError as e:
                raise ValueError(f"Coordinate range is missing {e}") from e

        values = list(data)
        if len(values) != 4:
            raise ValueError(f"Coordinate range needs 4 values, got {len(values)}")
        return cls(*(int(v) for v in values))

    def swapped(self) -> "XYinfo":
        """
        Cross-swap the bounds for a device with rotated axes.

        x_min <-> y_max and y_min <-> x_max.
        """
        return XYinfo(
            x_min=self.y_max,
            x_max=self.y_min,
            y_min=self.x_max,
            y_max=self.x_min,
        )


CoordinateRange = XYinfo
