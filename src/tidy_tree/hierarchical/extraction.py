"""
Tree extraction: turn a graph and a root vertex into an ordered rooted tree.

The graph is walked depth-first from the root. Edges are read in the graph's
rotational order, which fixes the left-to-right order of siblings. Edges
that lead to an already visited vertex are dropped, so any connected graph
yields a spanning tree and cycles cannot cause non-termination.

Vertices are compared with ``==`` and kept in a set, so they must be
hashable. Graphs may hand out fresh but equal objects for the same vertex.
"""

from __future__ import annotations

import logging
from typing import Any, Iterator, Optional, Sequence

from ..graph import EmbeddableGraph
from ..types import Edge
from .arena import TreeArena

logger = logging.getLogger(__name__)


def extract_tree(
    graph: EmbeddableGraph,
    root: Any,
    root_edges: Optional[Sequence[Edge]] = None,
) -> TreeArena:
    """
    Build the spanning tree of everything reachable from ``root``.

    For directed graphs only edges leaving the current vertex are followed.
    Vertices that cannot be reached are left out of the tree.

    Args:
        graph: Graph providing ``is_directed`` and ``incident_edges``
        root: Vertex to hang the tree from
        root_edges: The root's incident edges, if already fetched

    Returns:
        Arena holding the tree in pre-order, root at index 0
    """
    if root_edges is None:
        root_edges = graph.incident_edges(root)

    directed = graph.is_directed()
    arena = TreeArena()
    visited = {root}
    discarded = 0

    arena.add(root)
    # (arena index, parent vertex, remaining incident edges)
    stack: list[tuple[int, Optional[Any], Iterator[Edge]]] = [(0, None, iter(root_edges))]

    while stack:
        index, parent, edges = stack[-1]
        vertex = arena[index].vertex

        for edge in edges:
            if directed and edge.source != vertex:
                continue
            child = edge.opposite(vertex)
            if parent is not None and child == parent:
                continue
            if child in visited:
                discarded += 1
                continue

            visited.add(child)
            child_index = arena.add(child, index)
            stack.append((child_index, vertex, iter(graph.incident_edges(child))))
            break
        else:
            stack.pop()

    logger.debug(
        "Extracted tree with %d node(s) and height %d; %d edge(s) to visited vertices dropped",
        len(arena),
        arena.height,
        discarded,
    )
    return arena


__all__ = ["extract_tree"]
