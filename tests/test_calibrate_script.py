"""
Tests for the fake-click calibration script.
"""
import importlib.util
from pathlib import Path

import pytest

SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "calibrate.py"


@pytest.fixture(scope="module")
def calibrate_script():
    spec = importlib.util.spec_from_file_location("calibrate_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


def _base_args(tmp_path):
    return ["--config", str(tmp_path / "missing.yaml"), "--width", "1000", "--height", "1000"]


def test_script_success(calibrate_script, tmp_path, capsys):
    """Four clicks produce a range on stdout."""
    argv = _base_args(tmp_path) + [
        "--click", "100,100", "--click", "900,100",
        "--click", "100,900", "--click", "900,900",
    ]

    assert calibrate_script.main(argv) == 0

    out = capsys.readouterr().out
    assert "X range: -33 .. 1033" in out
    assert "Swap XY: False" in out


def test_script_not_enough_clicks(calibrate_script, tmp_path, capsys):
    """A rejected double-click leaves too few clicks."""
    argv = _base_args(tmp_path) + [
        "--click", "100,100", "--click", "103,102",
        "--click", "100,900", "--click", "900,900",
    ]

    assert calibrate_script.main(argv) == 1

    out = capsys.readouterr().out
    assert "rejected as double-click" in out
    assert "Calibration failed" in out


def test_script_invalid_num_blocks(calibrate_script, tmp_path):
    """Invalid grid size is reported as an error."""
    argv = _base_args(tmp_path) + [
        "--num-blocks", "2",
        "--click", "100,100", "--click", "900,100",
        "--click", "100,900", "--click", "900,900",
    ]

    assert calibrate_script.main(argv) == 2


def test_parse_point(calibrate_script):
    """Click parsing."""
    assert calibrate_script.parse_point("12,34") == (12, 34)

    with pytest.raises(Exception):
        calibrate_script.parse_point("12")


def test_script_invalid_config_file(calibrate_script, tmp_path):
    """Invalid values in the config file are reported as an error."""
    clicks = [
        "--click", "100,100", "--click", "900,100",
        "--click", "100,900", "--click", "900,900",
    ]

    bad_blocks = tmp_path / "bad_blocks.yaml"
    bad_blocks.write_text("calibrator:\n  num_blocks: 2\n")
    assert calibrate_script.main(["--config", str(bad_blocks)] + clicks) == 2

    bad_axys = tmp_path / "bad_axys.yaml"
    bad_axys.write_text("device:\n  old_axys: [0, 1000, 0]\n")
    assert calibrate_script.main(["--config", str(bad_axys)] + clicks) == 2
