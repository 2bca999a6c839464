"""
Layout quality metrics for tree drawings.

Provides quantitative checks of an embedding:
- Edge crossings: Number of intersecting edges
- Level gaps: Horizontal distances between neighbours on each level
- Mirror check: Whether one layout is the reflection of another

All metrics work with final node positions.
"""

from __future__ import annotations

import math
from typing import Sequence, Tuple, Union

from .types import Link, Node


def edge_crossings(nodes: Sequence[Node], links: Sequence[Link]) -> int:
    """
    Count the number of edge crossings in the layout.

    Two edges cross if their line segments intersect (excluding
    shared endpoints).

    Args:
        nodes: List of positioned nodes
        links: List of links

    Returns:
        Number of edge crossings

    Time Complexity: O(m^2) where m = number of edges
    """
    crossings = 0
    n_links = len(links)

    for i in range(n_links):
        for j in range(i + 1, n_links):
            if _edges_cross(nodes, links[i], links[j]):
                crossings += 1

    return crossings


def level_gaps(nodes: Sequence[Node], tolerance: float = 1e-9) -> dict[float, list[float]]:
    """
    Horizontal gaps between neighbouring nodes on each level.

    Nodes whose y coordinates differ by at most ``tolerance`` share a level.

    Returns:
        Mapping from level y to the gaps between consecutive nodes, left to right
    """
    levels: list[tuple[float, list[float]]] = []
    for node in sorted(nodes, key=lambda n: n.y):
        if levels and abs(node.y - levels[-1][0]) <= tolerance:
            levels[-1][1].append(node.x)
        else:
            levels.append((node.y, [node.x]))

    gaps: dict[float, list[float]] = {}
    for y, xs in levels:
        xs.sort()
        gaps[y] = [b - a for a, b in zip(xs, xs[1:])]
    return gaps


def minimum_level_gap(nodes: Sequence[Node], tolerance: float = 1e-9) -> float:
    """Smallest horizontal gap between neighbours on any level (inf if none)."""
    smallest = math.inf
    for gaps in level_gaps(nodes, tolerance).values():
        if gaps:
            smallest = min(smallest, min(gaps))
    return smallest


def is_mirror_layout(
    original: Sequence[Node],
    mirrored: Sequence[Node],
    axis_x: float = 0.0,
    tolerance: float = 1e-9,
) -> bool:
    """
    Check whether ``mirrored`` is ``original`` reflected about x = axis_x.

    Nodes are paired by position in the two sequences; y must match exactly
    up to ``tolerance``.
    """
    if len(original) != len(mirrored):
        return False
    for a, b in zip(original, mirrored):
        if abs((2 * axis_x - a.x) - b.x) > tolerance or abs(a.y - b.y) > tolerance:
            return False
    return True


def _get_link_index(endpoint: Union[Node, int]) -> int:
    """Get index from a link endpoint (Node or int)."""
    if isinstance(endpoint, int):
        return endpoint
    return endpoint.index if endpoint.index is not None else 0


def _edges_cross(nodes: Sequence[Node], e1: Link, e2: Link) -> bool:
    """Check if two edges cross (not at shared endpoints)."""
    s1 = _get_link_index(e1.source)
    t1 = _get_link_index(e1.target)
    s2 = _get_link_index(e2.source)
    t2 = _get_link_index(e2.target)

    # Skip if edges share an endpoint
    if s1 == s2 or s1 == t2 or t1 == s2 or t1 == t2:
        return False

    n = len(nodes)
    if not (0 <= s1 < n and 0 <= t1 < n and 0 <= s2 < n and 0 <= t2 < n):
        return False

    p1 = (nodes[s1].x, nodes[s1].y)
    p2 = (nodes[t1].x, nodes[t1].y)
    p3 = (nodes[s2].x, nodes[s2].y)
    p4 = (nodes[t2].x, nodes[t2].y)

    return _segments_intersect(p1, p2, p3, p4)


def _segments_intersect(
    p1: Tuple[float, float],
    p2: Tuple[float, float],
    p3: Tuple[float, float],
    p4: Tuple[float, float],
) -> bool:
    """Check if line segments (p1,p2) and (p3,p4) intersect."""

    def ccw(a: Tuple[float, float], b: Tuple[float, float], c: Tuple[float, float]) -> bool:
        return (c[1] - a[1]) * (b[0] - a[0]) > (b[1] - a[1]) * (c[0] - a[0])

    return ccw(p1, p3, p4) != ccw(p2, p3, p4) and ccw(p1, p2, p3) != ccw(p1, p2, p4)


__all__ = [
    "edge_crossings",
    "level_gaps",
    "minimum_level_gap",
    "is_mirror_layout",
]
