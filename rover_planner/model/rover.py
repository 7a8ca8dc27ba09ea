"""RoverState - The rover's physical limits and positions for one planning session.

Owned by the planning session and read by:
- SlopeEvaluator (max_slope)
- BestFirstPlanner neighbor generation (field_of_view, when bounded)
- Output writers (coord_type, elevation provider for pixel to geo conversion)
"""

import logging
from dataclasses import dataclass, field
from math import isinf, isnan
from typing import Any, Optional

from rover_planner.constants import RoverConfig
from rover_planner.core.dem_service import DEMService
from rover_planner.core.slope_evaluator import SlopeEvaluator
from rover_planner.model.coordinate import Coordinate, CoordinateUnit

logger = logging.getLogger(__name__)


@dataclass
class RoverState:
    """A rover on a DEM with a maximum climbable slope.

    Attributes:
        max_slope: Maximum traversable slope in degrees (0-90)
        start: Start position (pixels)
        end: Goal position (pixels)
        dem: Shared, read-only elevation provider
        coord_type: Units the resulting path is rendered in
        field_of_view: Visibility radius in pixels (inf = unlimited)
        current: Current position, starts at `start`

    Example:
        rover = RoverState(max_slope=15.0, start=Coordinate(0, 0), end=Coordinate(20, 20), dem=dem)
        rover.can_traverse(Coordinate(0, 0), Coordinate(1, 1))
    """

    max_slope: float
    start: Coordinate
    end: Coordinate
    dem: DEMService = field(repr=False)
    coord_type: CoordinateUnit = CoordinateUnit.PIXEL
    field_of_view: float = RoverConfig.UNLIMITED_FIELD_OF_VIEW
    current: Optional[Coordinate] = None
    _evaluator: SlopeEvaluator = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        """Validate limits and initialize the current position."""
        if isnan(self.max_slope) or not RoverConfig.MIN_SLOPE_DEG <= self.max_slope <= RoverConfig.MAX_SLOPE_DEG:
            raise ValueError(
                f"max_slope must be between {RoverConfig.MIN_SLOPE_DEG} and {RoverConfig.MAX_SLOPE_DEG} degrees, "
                f"got {self.max_slope}"
            )
        if isnan(self.field_of_view) or self.field_of_view < 0:
            raise ValueError(f"field_of_view must be non-negative, got {self.field_of_view}")
        if self.current is None:
            self.current = self.start
        self._evaluator = SlopeEvaluator(dem=self.dem, max_slope=self.max_slope)

    @property
    def evaluator(self) -> SlopeEvaluator:
        """Slope evaluator bound to this rover's DEM and limit."""
        return self._evaluator

    @property
    def has_limited_view(self) -> bool:
        return not isinf(self.field_of_view)

    def can_traverse(self, p1: Coordinate, p2: Coordinate) -> bool:
        """Check whether the rover may drive directly from p1 to p2."""
        return self._evaluator.traversable(p1, p2)

    def in_view(self, coordinate: Coordinate) -> bool:
        """Check whether coordinate lies within the field of view around the start."""
        if not self.has_limited_view:
            return True
        return self.start.euclidean_distance(coordinate) <= self.field_of_view

    def move_to(self, position: Coordinate) -> None:
        """Record a new current position."""
        self.current = position

    def specs(self) -> dict[str, Any]:
        """Rover settings in display order."""
        return {
            "max_slope": self.max_slope,
            "coord_type": self.coord_type.value,
            "field_of_view": "unlimited" if not self.has_limited_view else self.field_of_view,
            "current": self.current.xy,
            "start": self.start.xy,
            "end": self.end.xy,
            "dem": self.dem.source_id,
        }

    def log_specs(self) -> None:
        """Log the rover settings at INFO level."""
        for name, value in self.specs().items():
            logger.info(f"Rover {name}: {value}")
