"""Path reconstruction from search-node back-references."""

from rover_planner.model.coordinate import Coordinate
from rover_planner.model.search_node import NodeStore, SearchNode


def reconstruct_path(terminal: SearchNode, store: NodeStore) -> list[Coordinate]:
    """Follow parent links from terminal to the root and return start -> terminal.

    Args:
        terminal: Last node of the route (usually the goal)
        store: NodeStore owning terminal and all of its ancestors

    Returns:
        Ordered coordinates; a single element if terminal is the root.

    Raises:
        RuntimeError: If the chain is longer than the store, i.e. the parent
            links are corrupted.
    """
    path = [terminal.location]
    node = store.parent(terminal)
    while node is not None:
        if len(path) > len(store):
            raise RuntimeError(f"Parent chain from {terminal!r} exceeds {len(store)} stored nodes")
        path.append(node.location)
        node = store.parent(node)

    path.reverse()
    return path
