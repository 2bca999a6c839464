"""
Absolute placement: turn relative offsets into coordinates.
"""

from __future__ import annotations

from ..graph import EmbeddableGraph
from .arena import TreeArena


def petrify(
    arena: TreeArena,
    graph: EmbeddableGraph,
    root_position: tuple[float, float],
    vertical_spacing: float,
) -> list[tuple[float, float]]:
    """
    Accumulate offsets top-down and relocate every vertex.

    x is the root's x plus the sum of offsets on the path from the root;
    y drops by ``vertical_spacing`` per level below the root. All positions
    are computed before the first vertex is moved.

    Returns:
        (x, y) per arena node, in arena order
    """
    root_x, root_y = root_position
    accumulated = [0.0] * len(arena)
    positions: list[tuple[float, float]] = []

    # Arena order is pre-order: a parent's sum is known before its children's
    for index, node in enumerate(arena):
        if node.parent is not None:
            accumulated[index] = accumulated[node.parent] + node.offset
        positions.append((root_x + accumulated[index], root_y - vertical_spacing * node.level))

    for node, (x, y) in zip(arena, positions):
        graph.relocate(node.vertex, x, y)

    return positions


__all__ = ["petrify"]
