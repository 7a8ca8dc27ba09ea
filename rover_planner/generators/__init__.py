"""Route search algorithms.

- BestFirstPlanner: Greedy nearest-to-goal search with slope constraints
- reconstruct_path: Back-reference walk from a terminal node to the start
"""

from rover_planner.generators.best_first import (
    BestFirstPlanner,
    NeighborCandidate,
    NeighborStatus,
    plan_route,
)
from rover_planner.generators.path_reconstructor import reconstruct_path

__all__ = [
    "BestFirstPlanner",
    "NeighborCandidate",
    "NeighborStatus",
    "plan_route",
    "reconstruct_path",
]
