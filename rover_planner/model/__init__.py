"""Data model classes for rover route planning.

- Coordinate: Grid position atom (x, y, unit)
- SearchNode / NodeStore: Planner nodes and the arena owning them
- PlanningResult: Path or explicit "no path" outcome
- RoverState: Rover limits and positions (import directly from model.rover)
"""

from rover_planner.model.coordinate import Coordinate, CoordinateUnit, chebyshev
from rover_planner.model.planning_result import PlanningResult
from rover_planner.model.search_node import NodeStore, SearchNode

# RoverState depends on core.dem_service, which depends on model.coordinate.
# Import directly: from rover_planner.model.rover import RoverState

__all__ = [
    "Coordinate",
    "CoordinateUnit",
    "chebyshev",
    "SearchNode",
    "NodeStore",
    "PlanningResult",
]
