"""Terminal rendering of a planned rover path."""

import sys
from typing import Optional, TextIO

from rover_planner.constants import OutputConfig
from rover_planner.core.dem_service import DEMService
from rover_planner.model.coordinate import Coordinate, CoordinateUnit
from rover_planner.model.planning_result import PlanningResult


def format_point(coordinate: Coordinate, coord_type: CoordinateUnit, dem: Optional[DEMService] = None) -> str:
    """Format one path point as "(x, y)" in the requested units.

    Args:
        coordinate: Pixel coordinate from the path
        coord_type: PIXEL for raw cells, GEO for raster CRS coordinates
        dem: Elevation provider, required for GEO output

    Returns:
        "(x, y)" for pixels, "(lon, lat)" for geo output.
    """
    if coord_type is CoordinateUnit.GEO:
        if dem is None:
            raise ValueError("Geo output requires the DEM the path was planned on")
        lon, lat = dem.pixel_to_geo(coordinate)
        return f"({lon:.6f}, {lat:.6f})"
    return f"({coordinate.x}, {coordinate.y})"


def render_path(
    result: PlanningResult,
    coord_type: CoordinateUnit = CoordinateUnit.PIXEL,
    dem: Optional[DEMService] = None,
) -> str:
    """Render a planning result as a numbered list of points.

    Example output:
        Output path:
        ------------
        1. (0, 0)
        2. (1, 1)
        ------------
    """
    lines = ["Output path:", OutputConfig.TERMINAL_RULE]
    if result.path is None:
        lines.append(f"No traversable path from {result.start!r} to {result.goal!r}")
    else:
        for i, coordinate in enumerate(result.path, start=1):
            lines.append(f"{i}. {format_point(coordinate, coord_type=coord_type, dem=dem)}")
    lines.append(OutputConfig.TERMINAL_RULE)
    return "\n".join(lines)


class TerminalOutput:
    """Writes planning results to a text stream (stdout by default)."""

    def __init__(
        self,
        coord_type: CoordinateUnit = CoordinateUnit.PIXEL,
        dem: Optional[DEMService] = None,
        stream: Optional[TextIO] = None,
    ) -> None:
        self.coord_type = coord_type
        self.dem = dem
        self._stream = stream

    def write(self, result: PlanningResult) -> None:
        stream = self._stream or sys.stdout
        print("\n" + render_path(result, coord_type=self.coord_type, dem=self.dem), file=stream)
