"""Slope traversability analysis between adjacent raster cells.

Decides whether the rover may drive directly from one cell to a neighbor:
- Bearing between the two cells (0-360°, counter-clockwise from +x)
- Flat-terrain short-circuit, with a per-dataset quantization tolerance
- Plateau marching: both endpoints are pushed apart along the bearing to the
  edges of their elevation plateaus before measuring, so stair-stepped DEM
  values do not read as a cliff between two cells of one terrace
- Slope in degrees between the adjusted points, compared to the rover limit

Elevation sampling failures never escape: any ambiguity means "cannot traverse".
"""

import logging
from dataclasses import dataclass
from math import atan, atan2, degrees, hypot, isnan, sqrt

from rover_planner.constants import PlannerConfig
from rover_planner.core.dem_service import DEMService, ElevationLookupError
from rover_planner.model.coordinate import Coordinate

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlopeMeasurement:
    """Result of a slope measurement between two (possibly adjusted) points.

    Attributes:
        start: (x, y) pixel position the rise is measured from
        end: (x, y) pixel position the rise is measured to
        rise: Elevation difference end - start (raster units)
        run: Planar distance in pixels
        slope_deg: atan(rise / run) in degrees, negative when descending; NaN when run is 0
    """

    start: tuple[int, int]
    end: tuple[int, int]
    rise: float
    run: float
    slope_deg: float


class SlopeEvaluator:
    """Traversability test for a rover with a maximum climbable slope.

    Example:
        evaluator = SlopeEvaluator(dem=dem, max_slope=15.0)
        if evaluator.traversable(Coordinate(10, 10), Coordinate(11, 10)):
            ...
    """

    def __init__(self, dem: DEMService, max_slope: float):
        """Initialize with the elevation provider and rover limit.

        Args:
            dem: Elevation provider (read-only, may be shared)
            max_slope: Maximum traversable slope in degrees
        """
        self._dem = dem
        self._max_slope = max_slope

    @property
    def dem(self) -> DEMService:
        """Access the elevation provider."""
        return self._dem

    @property
    def max_slope(self) -> float:
        return self._max_slope

    @staticmethod
    def bearing_deg(p1: Coordinate, p2: Coordinate) -> float:
        """Direction from p1 to p2 in raster space.

        Args:
            p1: Origin cell
            p2: Target cell

        Returns:
            Angle of atan2(dy, dx) in degrees, normalized to [0, 360).
        """
        angle = degrees(atan2(p2.y - p1.y, p2.x - p1.x))
        return angle % 360.0

    def in_extent(self, p: Coordinate) -> bool:
        """Check p against the closed extent [0, width] x [0, height]."""
        return 0 <= p.x <= self._dem.width and 0 <= p.y <= self._dem.height

    def same_height(self, elevation1: float, elevation2: float) -> bool:
        """Compare elevations using the dataset's quantization tolerance.

        Most datasets compare exactly; datasets listed in
        DEMConfig.QUANTIZATION_TOLERANCES absorb small differences.
        """
        tolerance = self._dem.quantization_tolerance
        if tolerance > 0:
            return abs(elevation1 - elevation2) <= tolerance
        return elevation1 == elevation2

    def measure(self, x1: int, y1: int, x2: int, y2: int) -> SlopeMeasurement:
        """Measure the slope between two pixel positions.

        Builds the right triangle with run = planar distance and rise =
        elevation difference, so slope = atan(rise / run).

        Raises:
            ElevationLookupError: If either position cannot be sampled.
        """
        z1 = self._dem.elevation(x1, y1)
        z2 = self._dem.elevation(x2, y2)
        rise = z2 - z1
        run = sqrt((x2 - x1) ** 2 + (y2 - y1) ** 2)
        slope = degrees(atan(rise / run)) if run > 0 else float("nan")
        return SlopeMeasurement(start=(x1, y1), end=(x2, y2), rise=rise, run=run, slope_deg=slope)

    def slope_deg(self, p1: Coordinate, p2: Coordinate) -> float:
        """Raw slope in degrees between two cells, without plateau marching.

        Raises:
            ElevationLookupError: If either cell cannot be sampled.
        """
        return self.measure(p1.x, p1.y, p2.x, p2.y).slope_deg

    def _march(self, x: float, y: float, elevation: float, dx: float, dy: float) -> tuple[float, float]:
        """Walk from (x, y) by (dx, dy) until the elevation changes or the raster ends.

        The walk stays on fractional positions; callers truncate at the end.
        """
        width, height = self._dem.width, self._dem.height
        while 0 < x < width and 0 < y < height:
            if self._dem.elevation(x, y) != elevation:
                break
            x += dx
            y += dy
        return x, y

    def adjusted_measurement(self, p1: Coordinate, p2: Coordinate) -> SlopeMeasurement:
        """Slope between p1 and p2 after extending both to their plateau edges.

        p1 walks backward and p2 forward along the p1 -> p2 bearing, one
        unit step at a time. The step comes from the integer cell deltas, so
        axis-aligned walks stay exactly on their row or column.

        Raises:
            ElevationLookupError: If any sample along the way fails.
        """
        dx, dy = p2.x - p1.x, p2.y - p1.y
        distance = hypot(dx, dy)
        if distance == 0:
            return self.measure(p1.x, p1.y, p2.x, p2.y)
        step_x = PlannerConfig.MARCH_STEP_PX * dx / distance
        step_y = PlannerConfig.MARCH_STEP_PX * dy / distance

        elevation1 = self._dem.elevation(p1.x, p1.y)
        elevation2 = self._dem.elevation(p2.x, p2.y)

        x1, y1 = self._march(p1.x, p1.y, elevation1, -step_x, -step_y)
        x2, y2 = self._march(p2.x, p2.y, elevation2, step_x, step_y)

        return self.measure(int(x1), int(y1), int(x2), int(y2))

    def traversable(self, p1: Coordinate, p2: Coordinate) -> bool:
        """Decide whether the rover can move directly from p1 to p2.

        Args:
            p1: Current cell
            p2: Candidate cell

        Returns:
            True if |slope| <= max_slope. False when either point is off the
            raster or any elevation sample fails.
        """
        if not (self.in_extent(p1) and self.in_extent(p2)):
            return False

        try:
            elevation1 = self._dem.elevation(p1.x, p1.y)
            elevation2 = self._dem.elevation(p2.x, p2.y)
            if self.same_height(elevation1, elevation2):
                return True

            measurement = self.adjusted_measurement(p1, p2)
        except ElevationLookupError as e:
            logger.debug(f"Edge {p1!r} -> {p2!r} rejected: {e}")
            return False

        if isnan(measurement.slope_deg):
            logger.debug(f"Edge {p1!r} -> {p2!r} rejected: zero-length measurement")
            return False
        if abs(measurement.slope_deg) > self._max_slope:
            logger.debug(
                f"Edge {p1!r} -> {p2!r} too steep: {measurement.slope_deg:.1f}° "
                f"(max {self._max_slope:.1f}°, measured {measurement.start} -> {measurement.end})"
            )
            return False
        return True


def traversable(p1: Coordinate, p2: Coordinate, dem: DEMService, max_slope: float) -> bool:
    """Functional form of SlopeEvaluator.traversable."""
    return SlopeEvaluator(dem=dem, max_slope=max_slope).traversable(p1, p2)
