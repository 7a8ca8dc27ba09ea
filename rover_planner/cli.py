"""Command-line interface for Rover Planner.

Plans a route across a DEM raster and writes it to the terminal or a JSON file.

Run: python -m rover_planner data/marsMap.tif --slope 15 --start 10 10 --end 20 20
"""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence

from rover_planner.constants import DEMConfig, OutputConfig, RoverConfig
from rover_planner.core.dem_service import DEMLoadError, DEMService
from rover_planner.generators.best_first import BestFirstPlanner
from rover_planner.model.coordinate import Coordinate, CoordinateUnit
from rover_planner.model.rover import RoverState
from rover_planner.output.file_output import FileOutput
from rover_planner.output.terminal_output import TerminalOutput

logger = logging.getLogger(__name__)

EXIT_PATH_FOUND = 0
EXIT_NO_PATH = 1
EXIT_LOAD_ERROR = 3


def existing_file(value: str) -> Path:
    """argparse type: path to an existing file."""
    path = Path(value)
    if not path.is_file():
        raise argparse.ArgumentTypeError(f"map file not found: {value}")
    return path


def slope_degrees(value: str) -> float:
    """argparse type: slope in degrees within the rover limits."""
    try:
        slope = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"slope must be a number, got {value!r}") from None
    if not RoverConfig.MIN_SLOPE_DEG <= slope <= RoverConfig.MAX_SLOPE_DEG:
        raise argparse.ArgumentTypeError(
            f"slope must be between {RoverConfig.MIN_SLOPE_DEG:g} and {RoverConfig.MAX_SLOPE_DEG:g} degrees, got {value}"
        )
    return slope


def grid_int(value: str) -> int:
    """argparse type: integer pixel coordinate."""
    try:
        return int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"coordinates must be integers, got {value!r}") from None


def field_of_view(value: str) -> float:
    """argparse type: non-negative visibility radius in pixels."""
    try:
        radius = float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"field of view must be a number, got {value!r}") from None
    if radius < 0:
        raise argparse.ArgumentTypeError(f"field of view must be non-negative, got {value}")
    return radius


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="rover-planner",
        description="Plan a slope-constrained rover route across a DEM raster.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "map", nargs="?", type=existing_file, default=DEMConfig.REFERENCE_MAP_PATH, help="Path to the DEM raster (GeoTIFF)"
    )
    parser.add_argument("--slope", type=slope_degrees, required=True, help="Maximum traversable slope in degrees")
    parser.add_argument(
        "--start", type=grid_int, nargs=2, required=True, metavar=("X", "Y"), help="Start position in pixels"
    )
    parser.add_argument(
        "--end", type=grid_int, nargs=2, required=True, metavar=("X", "Y"), help="Goal position in pixels"
    )
    parser.add_argument(
        "--coords",
        choices=[unit.value for unit in CoordinateUnit],
        default=CoordinateUnit.PIXEL.value,
        help="Units of the printed path",
    )
    parser.add_argument("--output", choices=["terminal", "file"], default="terminal", help="Where to write the path")
    parser.add_argument(
        "--output-path", type=Path, default=OutputConfig.DEFAULT_OUTPUT_PATH, help="JSON file for --output file"
    )
    parser.add_argument(
        "--field-of-view",
        type=field_of_view,
        default=RoverConfig.UNLIMITED_FIELD_OF_VIEW,
        help="Visibility radius around the start in pixels",
    )
    parser.add_argument(
        "--exhaustive", action="store_true", help="Keep expanding after the goal is reached, until the open set is empty"
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Parse arguments, plan, write the result.

    Returns:
        0 if a path was found, 1 if the goal is unreachable, 3 if the DEM
        could not be loaded. argparse exits with 2 on usage errors.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        dem = DEMService.open(args.map)
    except DEMLoadError as e:
        logger.error(f"Cannot load DEM: {e}")
        return EXIT_LOAD_ERROR

    coord_type = CoordinateUnit(args.coords)
    rover = RoverState(
        max_slope=args.slope,
        start=Coordinate(x=args.start[0], y=args.start[1]),
        end=Coordinate(x=args.end[0], y=args.end[1]),
        dem=dem,
        coord_type=coord_type,
        field_of_view=args.field_of_view,
    )
    rover.log_specs()

    result = BestFirstPlanner(rover=rover, exhaustive=args.exhaustive).plan()

    if args.output == "file":
        FileOutput(path=args.output_path, coord_type=coord_type, dem=dem).write(result)
    else:
        TerminalOutput(coord_type=coord_type, dem=dem).write(result)

    return EXIT_PATH_FOUND if result.found else EXIT_NO_PATH
