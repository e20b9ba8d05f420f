"""
Unit tests for core module.
"""
import dataclasses
from pathlib import Path
import pytest

from src.core import (
    NUM_CORNERS, Corner, ClickPoint, XYinfo, CoordinateRange, load_yaml
)


def test_corner_order():
    """Test corner slots follow click order."""
    assert NUM_CORNERS == 4
    assert [c.name for c in Corner] == ["UL", "UR", "LL", "LR"]
    assert [int(c) for c in Corner] == [0, 1, 2, 3]


def test_click_point():
    """Test ClickPoint tuple."""
    p = ClickPoint(10, 20)
    assert p.x == 10
    assert p.y == 20
    assert p == (10, 20)


def test_xyinfo_immutable():
    """Test XYinfo is a frozen value type."""
    axys = XYinfo(x_min=0, x_max=1000, y_min=0, y_max=1000)
    assert CoordinateRange is XYinfo
    assert axys.as_tuple() == (0, 1000, 0, 1000)

    with pytest.raises(dataclasses.FrozenInstanceError):
        axys.x_min = 5


def test_xyinfo_from_dict():
    """Test XYinfo construction from mapping and sequence."""
    from_map = XYinfo.from_dict({"x_min": 1, "x_max": 2, "y_min": 3, "y_max": 4})
    from_list = XYinfo.from_dict([1, 2, 3, 4])

    assert from_map == from_list == XYinfo(1, 2, 3, 4)
    assert XYinfo.from_dict(from_map.to_dict()) == from_map

    with pytest.raises(ValueError):
        XYinfo.from_dict([1, 2, 3])

    with pytest.raises(ValueError):
        XYinfo.from_dict({"x_min": 1, "x_max": 2})


def test_xyinfo_swapped():
    """Test cross swap of the bounds."""
    axys = XYinfo(x_min=-16, x_max=116, y_min=-10, y_max=110)
    swapped = axys.swapped()

    assert swapped.x_min == 110  # old y_max
    assert swapped.y_max == -16  # old x_min
    assert swapped.y_min == 116  # old x_max
    assert swapped.x_max == -10  # old y_min


def test_load_yaml(tmp_path: Path):
    """Test YAML loading."""
    filepath = tmp_path / "settings.yaml"
    filepath.write_text("calibrator:\n  num_blocks: 10\n")

    loaded = load_yaml(filepath)
    assert loaded["calibrator"]["num_blocks"] == 10

    empty = tmp_path / "empty.yaml"
    empty.write_text("")
    assert load_yaml(empty) == {}


def test_load_nonexistent_yaml():
    """Test loading non-existent file."""
    with pytest.raises(FileNotFoundError):
        load_yaml(Path("nonexistent_file.yaml"))
