"""
Touchscreen calibration with fake clicks.

Runs the four-point calibration without a touchscreen: the raw clicks are
given on the command line in target order (upper-left, upper-right,
lower-left, lower-right) and the resulting range is printed.

Usage:
    python scripts/calibrate.py --click 100,100 --click 900,100 \\
        --click 100,900 --click 900,900 --width 1000 --height 1000

    # Thresholds and grid size from YAML
    python scripts/calibrate.py --config config/calibration.yaml --click ...
"""
import sys
import argparse
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from src.core import XYinfo
from src.calibration import (
    Calibrator,
    LoggingSink,
    build_calibrator_config,
    build_old_axys,
    load_calibration_settings,
)
import logging

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

DEFAULT_OLD_AXYS = XYinfo(x_min=0, x_max=1000, y_min=0, y_max=1000)


def parse_point(text):
    """Parse 'X,Y' into an (x, y) int tuple."""
    try:
        x, y = (int(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected X,Y but got '{text}'")
    return x, y


def parse_axys(text):
    """Parse 'XMIN,XMAX,YMIN,YMAX' into an XYinfo."""
    try:
        return XYinfo.from_dict([int(v) for v in text.split(",")])
    except ValueError:
        raise argparse.ArgumentTypeError(f"Expected XMIN,XMAX,YMIN,YMAX but got '{text}'")


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Four-point touchscreen calibration with fake clicks",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python scripts/calibrate.py --click 100,100 --click 900,100 --click 100,900 --click 900,900
  python scripts/calibrate.py --old-axys 0,4095,0,4095 --width 800 --height 480 --click ...
        """
    )

    parser.add_argument(
        "--click",
        type=parse_point,
        action="append",
        default=[],
        metavar="X,Y",
        help="Raw click, repeat 4 times in UL, UR, LL, LR order"
    )

    parser.add_argument("--width", type=int, default=1024, help="Display width (default: 1024)")
    parser.add_argument("--height", type=int, default=768, help="Display height (default: 768)")

    parser.add_argument(
        "--old-axys",
        type=parse_axys,
        default=None,
        metavar="XMIN,XMAX,YMIN,YMAX",
        help="Range currently in effect (default: from config or 0,1000,0,1000)"
    )

    parser.add_argument("--device", type=str, default="fake device", help="Device name")

    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Calibration config YAML (default: config/calibration.yaml)"
    )

    parser.add_argument("--num-blocks", type=int, default=None, help="Target grid size")
    parser.add_argument("--threshold-doubleclick", type=int, default=None)
    parser.add_argument("--threshold-misclick", type=int, default=None)

    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Show debug output for every click"
    )

    return parser.parse_args(argv)


def main(argv=None):
    """Run calibration with fake clicks."""
    args = parse_args(argv)

    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    settings = load_calibration_settings(Path(args.config) if args.config else None)
    try:
        config = build_calibrator_config(settings)
        old_axys = args.old_axys or build_old_axys(settings, default=DEFAULT_OLD_AXYS)
    except ValueError as e:
        logger.error(f"Invalid calibration config: {e}")
        return 2

    sink = LoggingSink(args.device)
    calibrator = Calibrator(args.device, old_axys, verbose=args.verbose, sink=sink, config=config)

    if args.threshold_doubleclick is not None:
        calibrator.set_threshold_doubleclick(args.threshold_doubleclick)
    if args.threshold_misclick is not None:
        calibrator.set_threshold_misclick(args.threshold_misclick)

    for x, y in args.click:
        if calibrator.get_numclicks() == 4:
            logger.warning(f"Extra click ({x}, {y}) ignored")
            continue
        if not calibrator.add_click(x, y):
            print(f"Click ({x}, {y}) rejected as double-click")

    try:
        result = calibrator.finish(args.width, args.height, num_blocks=args.num_blocks)
    except ValueError as e:
        logger.error(f"Invalid calibration parameters: {e}")
        return 2

    if not result.success:
        print(f"\nCalibration failed: {result.message}")
        return 1

    axys = result.data
    print("\nCalibration successful!")
    print(f"  Device:  {args.device}")
    print(f"  X range: {axys.x_min} .. {axys.x_max}")
    print(f"  Y range: {axys.y_min} .. {axys.y_max}")
    print(f"  Swap XY: {result.swap_xy}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
