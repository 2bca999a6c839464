"""
Graph collaborator for the tree embedder.

The embedder never owns graph storage. It needs exactly three things from
the graph it embeds:

- whether the graph is directed
- the incident edges of a vertex, in a fixed rotational order
- a way to move a vertex to a new position

``EmbeddableGraph`` names that contract. ``Graph`` is a ready-made adapter
over plain node and link lists.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Protocol, Sequence, runtime_checkable

from .types import Edge, Link, LinkLike, Node, NodeLike, to_link, to_node
from .validation import validate_edge_order, validate_link_indices


@runtime_checkable
class EmbeddableGraph(Protocol):
    """Interface the embedder consumes."""

    def is_directed(self) -> bool: ...

    def incident_edges(self, vertex: Any) -> Sequence[Edge]: ...

    def relocate(self, vertex: Any, x: float, y: float) -> None: ...


class Graph:
    """
    Adjacency view over a node list and a link list.

    Incident edges are reported either in link order (``"insertion"``) or
    sorted counterclockwise by the angle of the opposite endpoint around
    the vertex (``"counterclockwise"``), using the coordinates the nodes
    have when the graph is built.

    Example:
        graph = Graph(
            nodes=[{}, {}, {}],
            links=[{"source": 0, "target": 1}, {"source": 0, "target": 2}],
        )
        graph.incident_edges(graph.vertex(0))
    """

    def __init__(
        self,
        nodes: Sequence[NodeLike] = (),
        links: Sequence[LinkLike] = (),
        *,
        directed: bool = False,
        edge_order: str = "insertion",
    ) -> None:
        """
        Build the adjacency view.

        Args:
            nodes: Nodes (Node objects, dicts, or objects with x/y)
            links: Links (Link objects, dicts, or objects with source/target)
            directed: Treat links as directed source -> target
            edge_order: "insertion" or "counterclockwise"

        Raises:
            InvalidLinkError: If a link references a node that does not exist.
            InvalidEdgeOrderError: If ``edge_order`` is unknown.
        """
        self._directed = bool(directed)
        self._edge_order = validate_edge_order(edge_order)
        self._nodes: list[Node] = [to_node(n) for n in nodes]
        self._links: list[Link] = [to_link(link) for link in links]
        self.relocations = 0

        for i, node in enumerate(self._nodes):
            if node.index is None:
                node.index = i

        validate_link_indices(self._links, len(self._nodes), strict=True)

        self._incidence: dict[int, list[Edge]] = {id(n): [] for n in self._nodes}
        for link in self._links:
            src = self._resolve(link.source)
            tgt = self._resolve(link.target)
            edge = Edge(src, tgt, link)
            self._incidence[id(src)].append(edge)
            if tgt is not src:
                self._incidence[id(tgt)].append(edge)

        if self._edge_order == "counterclockwise":
            for node in self._nodes:
                self._incidence[id(node)].sort(key=lambda e, v=node: _angle(v, e.opposite(v)))

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def vertices(self) -> list[Node]:
        """Get the list of vertices."""
        return self._nodes

    @property
    def links(self) -> list[Link]:
        """Get the list of links."""
        return self._links

    @property
    def directed(self) -> bool:
        """Whether links are read as source -> target."""
        return self._directed

    @property
    def edge_order(self) -> str:
        """Get the incident-edge ordering mode."""
        return self._edge_order

    # -------------------------------------------------------------------------
    # EmbeddableGraph
    # -------------------------------------------------------------------------

    def is_directed(self) -> bool:
        return self._directed

    def incident_edges(self, vertex: Any) -> list[Edge]:
        """
        Return the edges touching ``vertex`` in rotational order.

        Raises:
            KeyError: If ``vertex`` does not belong to this graph.
        """
        return list(self._incidence[id(vertex)])

    def relocate(self, vertex: Any, x: float, y: float) -> None:
        """Move ``vertex`` to (x, y)."""
        vertex.x = x
        vertex.y = y
        self.relocations += 1

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def vertex(self, index: int) -> Node:
        """Get the vertex at ``index``."""
        return self._nodes[index]

    def __contains__(self, vertex: Any) -> bool:
        return id(vertex) in self._incidence

    def _resolve(self, endpoint: Any) -> Node:
        if isinstance(endpoint, int):
            return self._nodes[endpoint]
        if id(endpoint) in self._incidence:
            return endpoint
        index: Optional[int] = getattr(endpoint, "index", None)
        assert index is not None
        return self._nodes[index]


def _angle(center: Node, other: Node) -> float:
    """Counterclockwise angle of ``other`` around ``center`` in [0, 2*pi)."""
    angle = math.atan2(other.y - center.y, other.x - center.x)
    return angle if angle >= 0 else angle + 2 * math.pi


__all__ = ["EmbeddableGraph", "Graph"]
