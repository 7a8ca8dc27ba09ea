"""Coordinate - The fundamental grid position for rover planning.

A Coordinate is an integer (x, y) raster cell plus a unit tag telling output
collaborators whether the pair is in pixel space or has been converted to
geographic units.

Used by:
- SearchNode (specializes Coordinate with a discovery back-reference)
- RoverState (start, end and current rover positions)
- PlanningResult (the ordered route handed to output writers)
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np


class CoordinateUnit(Enum):
    """Units a coordinate (or a rendered path) is expressed in."""

    PIXEL = "pixel"
    GEO = "geo"


@dataclass(frozen=True, eq=False)
class Coordinate:
    """An integer grid position.

    Equality and hashing are structural on (x, y) only; the unit tag does not
    take part, so a pixel and a geo-tagged coordinate at the same cell compare
    equal. No bounds checking is done here, the elevation provider enforces
    raster extents.

    Attributes:
        x: Column index (pixels)
        y: Row index (pixels)
        unit: Unit tag, PIXEL unless converted for output

    Example:
        start = Coordinate(x=10, y=10)
        assert start == Coordinate(x=10, y=10, unit=CoordinateUnit.GEO)
    """

    x: int
    y: int
    unit: CoordinateUnit = CoordinateUnit.PIXEL

    def __post_init__(self) -> None:
        """Validate data after initialization."""
        if not all(_is_grid_int(v) for v in (self.x, self.y)):
            raise TypeError(f"Coordinate components must be integers, got ({self.x!r}, {self.y!r})")

    @property
    def xy(self) -> tuple[int, int]:
        """Return (x, y) tuple."""
        return (self.x, self.y)

    def chebyshev_distance(self, other: "Coordinate") -> int:
        """Diagonal distance on an 8-connected grid.

        Diagonal and orthogonal moves cost the same, so the number of moves
        between two cells on an open grid is max(|dx|, |dy|).

        Args:
            other: Coordinate to measure distance to

        Returns:
            Chebyshev distance in grid cells.
        """
        return chebyshev(self, other)

    def euclidean_distance(self, other: "Coordinate") -> float:
        """Planar distance in pixels."""
        return ((self.x - other.x) ** 2 + (self.y - other.y) ** 2) ** 0.5

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Coordinate):
            return NotImplemented
        return self.xy == other.xy

    def __hash__(self) -> int:
        return hash(self.xy)

    def __repr__(self) -> str:
        return f"Coordinate({self.x}, {self.y})"


def chebyshev(a: Coordinate, b: Coordinate) -> int:
    """Heuristic estimate of moves from a to b on an 8-connected grid."""
    return max(abs(a.x - b.x), abs(a.y - b.y))


def _is_grid_int(value: object) -> bool:
    # bool is an int subclass but never a valid grid index
    return isinstance(value, (int, np.integer)) and not isinstance(value, bool)
