"""SearchNode - A grid position as seen by the best-first planner.

A SearchNode wraps a Coordinate (single source of truth for position) and adds
a back-reference to the node that discovered it. Back-references are node ids
into a planner-owned NodeStore, never direct object links: many nodes share a
discovering ancestor, and the store owns node lifetime.

The parent relation forms a tree rooted at the start node. It is write-once,
so no cycle can form through it.
"""

from typing import Iterator, Optional

from rover_planner.model.coordinate import Coordinate


class SearchNode:
    """A coordinate plus its discovery back-reference.

    Equality and hashing use (x, y) only: two nodes at the same cell are the
    same node regardless of discovery order. A SearchNode also compares equal
    to a plain Coordinate at the same cell.

    Attributes:
        location: Coordinate of the node
        node_id: Index in the owning NodeStore (None until stored)
        parent_id: Index of the discovering node (None for the root)

    Example:
        store = NodeStore()
        root = store.add(SearchNode(x=0, y=0))
        child = SearchNode(x=1, y=1)
        child.set_parent(root)
        store.add(child)
        assert store.parent(child) is root
    """

    __slots__ = ("location", "node_id", "parent_id", "_parent_set")

    def __init__(self, x: int, y: int) -> None:
        self.location = Coordinate(x=x, y=y)
        self.node_id: Optional[int] = None
        self.parent_id: Optional[int] = None
        self._parent_set = False

    @classmethod
    def from_coordinate(cls, coordinate: Coordinate) -> "SearchNode":
        """Promote a plain Coordinate to a parentless SearchNode."""
        return cls(x=coordinate.x, y=coordinate.y)

    @property
    def x(self) -> int:
        """Column delegated from location."""
        return self.location.x

    @property
    def y(self) -> int:
        """Row delegated from location."""
        return self.location.y

    @property
    def is_root(self) -> bool:
        return self.parent_id is None

    def set_parent(self, parent: "SearchNode") -> None:
        """Record the node that discovered this one.

        Must be called at most once, before the node enters the open set.

        Args:
            parent: Discovering node, already registered in a NodeStore

        Raises:
            ValueError: If the parent was already set, or the parent is not stored.
        """
        if self._parent_set:
            raise ValueError(f"Parent of {self!r} is already set")
        if parent.node_id is None:
            raise ValueError(f"Parent {parent!r} must be added to a NodeStore first")
        self.parent_id = parent.node_id
        self._parent_set = True

    def __eq__(self, other: object) -> bool:
        if isinstance(other, SearchNode):
            return self.location == other.location
        if isinstance(other, Coordinate):
            return self.location == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self.location)

    def __repr__(self) -> str:
        return f"SearchNode({self.x}, {self.y}, id={self.node_id}, parent={self.parent_id})"


class NodeStore:
    """Arena owning every SearchNode discovered during one planner run.

    Nodes are addressed by the integer id assigned in add(). The store is
    dropped with the planner run, reclaiming all nodes at once.
    """

    def __init__(self) -> None:
        self._nodes: list[SearchNode] = []

    def add(self, node: SearchNode) -> SearchNode:
        """Register a node and assign its id.

        Args:
            node: Node not yet owned by any store

        Returns:
            The same node, now carrying its node_id.
        """
        if node.node_id is not None:
            raise ValueError(f"{node!r} already belongs to a NodeStore")
        node.node_id = len(self._nodes)
        self._nodes.append(node)
        return node

    def get(self, node_id: int) -> SearchNode:
        return self._nodes[node_id]

    def parent(self, node: SearchNode) -> Optional[SearchNode]:
        """Resolve a node's back-reference (None for the root)."""
        if node.parent_id is None:
            return None
        return self._nodes[node.parent_id]

    def __len__(self) -> int:
        return len(self._nodes)

    def __iter__(self) -> Iterator[SearchNode]:
        return iter(self._nodes)
