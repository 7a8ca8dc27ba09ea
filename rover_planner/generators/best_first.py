"""Best-First Planner - Greedy grid search for a traversable rover route.

Expands the open node closest to the goal (Chebyshev distance) on an
8-connected raster grid, admitting only neighbors the slope evaluator accepts.

The search is greedy, not A*: it never tracks path cost, never re-opens a
closed node when a cheaper route appears later, and tolerates duplicate
entries for one cell in the open set. Produced paths are traversable but not
guaranteed to be shortest.

Data structures:
- Open: binary heap keyed by (heuristic, insertion sequence), so equal
  heuristic values pop in insertion order
- Closed: hash set of coordinates
- Nodes: NodeStore arena; back-references are node ids into it
"""

import heapq
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Optional

from rover_planner.constants import PlannerConfig
from rover_planner.generators.path_reconstructor import reconstruct_path
from rover_planner.model.coordinate import Coordinate, chebyshev
from rover_planner.model.planning_result import PlanningResult
from rover_planner.model.rover import RoverState
from rover_planner.model.search_node import NodeStore, SearchNode

logger = logging.getLogger(__name__)


class NeighborStatus(Enum):
    """Outcome of proposing one Moore-neighborhood cell."""

    CANDIDATE = "candidate"
    OFF_RASTER = "off_raster"
    OUT_OF_VIEW = "out_of_view"


@dataclass(frozen=True)
class NeighborCandidate:
    """A proposed neighbor cell and whether it may be evaluated.

    Attributes:
        coordinate: Proposed cell
        status: CANDIDATE, or the reason it is skipped
    """

    coordinate: Coordinate
    status: NeighborStatus

    @property
    def is_candidate(self) -> bool:
        return self.status is NeighborStatus.CANDIDATE


class BestFirstPlanner:
    """Greedy best-first route search over a DEM.

    Algorithm Overview:
    1. Open = {start}, Closed = {}
    2. Pop the open node with the smallest Chebyshev distance to the goal
       (ties: first inserted); skip it if its cell is already closed
    3. Close it; if it is the goal, remember it as the terminal node
    4. Push every traversable, not-yet-closed Moore neighbor with the
       current node as parent
    5. Stop at the goal, or when Open is exhausted (no path)

    With exhaustive=True, step 5 does not stop at the goal: expansion runs
    until Open is empty, and the path still comes from the first goal popped.

    Example:
        planner = BestFirstPlanner(rover=rover)
        result = planner.plan()
        if result.found:
            print(result.path)
    """

    def __init__(self, rover: RoverState, exhaustive: bool = False) -> None:
        """Initialize the planner for one rover.

        Args:
            rover: Rover state (slope limit, start/end, DEM, field of view)
            exhaustive: Keep expanding after the goal is reached
        """
        self._rover = rover
        self._exhaustive = exhaustive

    @property
    def rover(self) -> RoverState:
        """Access the rover state."""
        return self._rover

    @property
    def goal(self) -> Coordinate:
        return self._rover.end

    def heuristic(self, coordinate: Coordinate) -> int:
        """Chebyshev distance from coordinate to the goal."""
        return chebyshev(coordinate, self.goal)

    def neighbor_candidates(self, coordinate: Coordinate) -> Iterator[NeighborCandidate]:
        """Propose the 8 Moore-neighborhood cells around coordinate.

        Cells off the raster, or outside a bounded field of view, are
        reported with the reason they are skipped instead of raising.
        """
        dem = self._rover.dem
        for dx, dy in PlannerConfig.NEIGHBORS_8:
            neighbor = Coordinate(x=coordinate.x + dx, y=coordinate.y + dy)
            if not dem.contains(neighbor.x, neighbor.y):
                status = NeighborStatus.OFF_RASTER
            elif not self._rover.in_view(neighbor):
                status = NeighborStatus.OUT_OF_VIEW
            else:
                status = NeighborStatus.CANDIDATE
            yield NeighborCandidate(coordinate=neighbor, status=status)

    def candidate_coordinates(self, coordinate: Coordinate) -> list[Coordinate]:
        """Neighbor cells eligible for a traversability check."""
        return [c.coordinate for c in self.neighbor_candidates(coordinate) if c.is_candidate]

    def reachable_neighbors(self, node: SearchNode) -> list[SearchNode]:
        """Neighbors of node the rover can drive to, each parented to node.

        Args:
            node: Node being expanded (must already be in the NodeStore)

        Returns:
            New, unstored SearchNodes in neighbor order.
        """
        neighbors = []
        for coordinate in self.candidate_coordinates(node.location):
            neighbor = SearchNode.from_coordinate(coordinate)
            neighbor.set_parent(node)
            if self._rover.can_traverse(node.location, neighbor.location):
                neighbors.append(neighbor)
        return neighbors

    def plan(self) -> PlanningResult:
        """Run the search to completion.

        Returns:
            PlanningResult with the start -> goal path, or path=None if the
            open set was exhausted before reaching the goal.
        """
        start_coordinate = self._rover.start
        goal = self.goal
        dem = self._rover.dem

        if not dem.contains(start_coordinate.x, start_coordinate.y):
            logger.warning(f"Start {start_coordinate!r} lies outside the DEM ({dem.width}x{dem.height})")
        if not dem.contains(goal.x, goal.y):
            logger.warning(f"Goal {goal!r} lies outside the DEM ({dem.width}x{dem.height})")

        store = NodeStore()
        start = store.add(SearchNode.from_coordinate(start_coordinate))

        open_heap: list[tuple[int, int, SearchNode]] = [(self.heuristic(start.location), 0, start)]
        sequence = 1
        closed: set[Coordinate] = set()
        terminal: Optional[SearchNode] = None

        while open_heap:
            _, _, current = heapq.heappop(open_heap)

            # Stale duplicate of a cell expanded earlier
            if current.location in closed:
                continue
            closed.add(current.location)

            if terminal is None and current == goal:
                terminal = current
                logger.debug(f"Goal {goal!r} reached after {len(closed)} expansions")
                if not self._exhaustive:
                    break

            for neighbor in self.reachable_neighbors(current):
                if neighbor.location in closed:
                    continue
                store.add(neighbor)
                heapq.heappush(open_heap, (self.heuristic(neighbor.location), sequence, neighbor))
                sequence += 1

        path = reconstruct_path(terminal, store) if terminal is not None else None

        result = PlanningResult(
            start=start_coordinate,
            goal=goal,
            path=path,
            max_slope=self._rover.max_slope,
            nodes_expanded=len(closed),
            nodes_discovered=len(store),
        )

        if result.found:
            logger.info(f"Path found: {len(path)} points, {result.nodes_expanded} nodes expanded")
        else:
            logger.warning(
                f"No traversable path from {start_coordinate!r} to {goal!r} "
                f"at max slope {self._rover.max_slope}° ({result.nodes_expanded} nodes expanded)"
            )
        return result


def plan_route(rover: RoverState, exhaustive: bool = False) -> PlanningResult:
    """Plan a route for rover with a fresh BestFirstPlanner."""
    return BestFirstPlanner(rover=rover, exhaustive=exhaustive).plan()
