"""PlanningResult - Outcome of one best-first planner run.

An unreachable goal is a normal outcome, not an error: `path` is None and
`found` is False.
"""

from dataclasses import dataclass
from typing import Any, Optional

from rover_planner.model.coordinate import Coordinate


@dataclass
class PlanningResult:
    """Route found by the planner (or the explicit absence of one).

    Attributes:
        start: Start coordinate
        goal: Goal coordinate
        path: Ordered coordinates start -> goal inclusive, None if unreachable
        max_slope: Rover slope limit used for the run (degrees)
        nodes_expanded: Number of nodes moved to the closed set
        nodes_discovered: Number of nodes admitted to the open set (duplicates included)
    """

    start: Coordinate
    goal: Coordinate
    path: Optional[list[Coordinate]]
    max_slope: float
    nodes_expanded: int = 0
    nodes_discovered: int = 0

    @property
    def found(self) -> bool:
        return self.path is not None

    @property
    def num_steps(self) -> int:
        """Number of moves along the path (0 if not found or start == goal)."""
        return len(self.path) - 1 if self.path else 0

    def to_dict(self) -> dict[str, Any]:
        """Convert result to dictionary (pixel coordinates)."""
        return {
            "found": self.found,
            "start": list(self.start.xy),
            "goal": list(self.goal.xy),
            "max_slope": float(self.max_slope),
            "nodes_expanded": self.nodes_expanded,
            "nodes_discovered": self.nodes_discovered,
            "path": [list(c.xy) for c in self.path] if self.path is not None else None,
        }

    def __repr__(self) -> str:
        outcome = f"{len(self.path)} points" if self.path is not None else "no path"
        return f"PlanningResult({self.start!r} -> {self.goal!r}: {outcome}, expanded={self.nodes_expanded})"
