"""
Core module - shared data types and utilities.
"""
from .types import (
    NUM_CORNERS,
    Corner,
    ClickPoint,
    XYinfo,
    CoordinateRange,
)
from .io_utils import load_yaml

__all__ = [
    # Types
    "NUM_CORNERS",
    "Corner",
    "ClickPoint",
    "XYinfo",
    "CoordinateRange",
    # I/O
    "load_yaml",
]
