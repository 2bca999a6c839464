"""
Common types for the tree embedder.

This module provides the fundamental types shared by the package:
- Node: Graph vertex with a position that the embedder rewrites
- Link: Edge connecting two nodes
- Edge: Link resolved to its endpoint nodes, as seen from the graph
- EventType: Layout lifecycle events
- Event: Event payload for callbacks
"""

from __future__ import annotations

from enum import IntEnum
from typing import Any, NamedTuple, Optional, Sequence, TypedDict, Union


class EventType(IntEnum):
    """
    Layout lifecycle events.

    - start: Embedding has begun
    - end: All reachable vertices have been relocated (or nothing was done)
    """

    start = 0
    end = 1


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    placed: int


class Node:
    """
    Graph vertex with position and properties.

    Attributes:
        index: Index in nodes array (set by layout)
        x: X coordinate
        y: Y coordinate
    """

    def __init__(self, **kwargs: Any) -> None:
        """Initialize node with optional properties."""
        self.index: Optional[int] = kwargs.get("index")
        self.x: float = kwargs.get("x", 0.0)
        self.y: float = kwargs.get("y", 0.0)

        # Copy any additional custom properties
        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        return f"Node(index={self.index}, x={self.x:.2f}, y={self.y:.2f})"


class Link:
    """
    Edge connecting two nodes.

    Attributes:
        source: Source node or node index
        target: Target node or node index
    """

    def __init__(
        self,
        source: Union[Node, int],
        target: Union[Node, int],
        **kwargs: Any,
    ) -> None:
        """
        Initialize link between two nodes.

        Args:
            source: Source node or node index (required)
            target: Target node or node index (required)

        Raises:
            ValueError: If source or target is None
        """
        if source is None:
            raise ValueError("Link source cannot be None")
        if target is None:
            raise ValueError("Link target cannot be None")

        self.source = source
        self.target = target

        for key, value in kwargs.items():
            if not hasattr(self, key):
                setattr(self, key, value)

    def __repr__(self) -> str:
        if isinstance(self.source, int):
            src: Any = self.source
        else:
            src = getattr(self.source, "index", None)
        if isinstance(self.target, int):
            tgt: Any = self.target
        else:
            tgt = getattr(self.target, "index", None)
        return f"Link({src} -> {tgt})"


class Edge(NamedTuple):
    """An incident edge with both endpoints resolved to vertices."""

    source: Any
    target: Any
    link: Optional[Link] = None

    def opposite(self, vertex: Any) -> Any:
        """Return the endpoint that is not ``vertex``."""
        return self.target if self.source == vertex else self.source


# Type aliases for Pythonic API
NodeLike = Union[Node, dict[str, Any], Any]
"""Input type for nodes: Node objects, dicts, or objects with x/y attributes."""

LinkLike = Union[Link, dict[str, Any], Any]
"""Input type for links: Link objects, dicts, or objects with source/target."""

PointType = Union[tuple[float, float], list[float], Sequence[float]]
"""A 2D position: (x, y) tuple, list, or sequence."""


def to_node(node_data: NodeLike) -> Node:
    """Convert a Node, dict, or object with index/x/y attributes to a Node."""
    if isinstance(node_data, Node):
        return node_data
    if isinstance(node_data, dict):
        return Node(**node_data)
    # Generic object - copy position attributes
    node = Node()
    for attr in ["index", "x", "y"]:
        if hasattr(node_data, attr):
            setattr(node, attr, getattr(node_data, attr))
    return node


def to_link(link_data: LinkLike) -> Link:
    """Convert a Link, dict, or object with source/target attributes to a Link."""
    if isinstance(link_data, Link):
        return link_data
    if isinstance(link_data, dict):
        return Link(**link_data)
    return Link(getattr(link_data, "source", 0), getattr(link_data, "target", 0))


__all__ = [
    "EventType",
    "Event",
    "Node",
    "Link",
    "Edge",
    "NodeLike",
    "LinkLike",
    "PointType",
    "to_node",
    "to_link",
]
