"""
Internal tree representation for the tidy tree embedder.

Nodes live in a flat list and refer to each other by index. Index 0 is the
root, and nodes are appended in pre-order, so every child has a larger index
than its parent: iterating the arena backwards visits children before their
parents, forwards visits parents before their children.
"""

from __future__ import annotations

from typing import Any, Iterator, NamedTuple, Optional

LEFT = 0
RIGHT = 1


class TreeNode:
    """Internal tree node representation for layout computation."""

    __slots__ = (
        "vertex",
        "parent",
        "children",
        "level",
        "offset",
        "threaded",
        "left_thread",
        "right_thread",
        "left_thread_offset",
        "right_thread_offset",
    )

    def __init__(self, vertex: Any, parent: Optional[int], level: int) -> None:
        self.vertex = vertex
        self.parent = parent
        self.children: list[int] = []
        self.level = level

        # Horizontal displacement from the parent, set when the parent is set up
        self.offset: float = 0.0

        # Contour threads, only ever set on leaves. The offsets are the
        # horizontal displacement from this node to the thread target. They
        # live on the source because one target can receive threads from
        # several leaves, each with its own displacement.
        self.threaded: bool = False
        self.left_thread: Optional[int] = None
        self.right_thread: Optional[int] = None
        self.left_thread_offset: float = 0.0
        self.right_thread_offset: float = 0.0

    def __repr__(self) -> str:
        return f"TreeNode(level={self.level}, offset={self.offset:.2f}, children={self.children})"


class Extreme(NamedTuple):
    """
    Extreme descendant of a subtree: the leftmost or rightmost node on its
    deepest level, with its horizontal offset from the subtree's frame.
    """

    node: int
    offset: float
    level: int

    def shifted(self, dx: float) -> Extreme:
        return Extreme(self.node, self.offset + dx, self.level)

    def mirrored(self) -> Extreme:
        return Extreme(self.node, -self.offset, self.level)


class TreeArena:
    """Flat, index-addressed storage for a rooted ordered tree."""

    def __init__(self) -> None:
        self.nodes: list[TreeNode] = []

    def add(self, vertex: Any, parent: Optional[int] = None) -> int:
        """Append a node under ``parent`` and return its index."""
        level = 0 if parent is None else self.nodes[parent].level + 1
        index = len(self.nodes)
        self.nodes.append(TreeNode(vertex, parent, level))
        if parent is not None:
            self.nodes[parent].children.append(index)
        return index

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> TreeNode:
        return self.nodes[index]

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.nodes)

    @property
    def root(self) -> Optional[TreeNode]:
        return self.nodes[0] if self.nodes else None

    @property
    def height(self) -> int:
        """Deepest level in the tree (0 for a lone root, -1 when empty)."""
        return max((n.level for n in self.nodes), default=-1)

    def next_on_contour(self, index: int, side: int) -> tuple[Optional[int], float]:
        """
        Step one level down the ``side`` contour from ``index``.

        Returns the next contour node (or None when the contour ends) and its
        horizontal displacement from ``index``.
        """
        node = self.nodes[index]
        if node.children:
            child = node.children[0] if side == LEFT else node.children[-1]
            return child, self.nodes[child].offset
        if side == LEFT:
            return node.left_thread, node.left_thread_offset
        return node.right_thread, node.right_thread_offset

    def set_thread(self, source: int, target: int, offset: float, side: int) -> None:
        """Continue the ``side`` contour of leaf ``source`` at ``target``."""
        node = self.nodes[source]
        assert not node.children, "threads are only installed on leaves"
        assert self.nodes[target].level == node.level + 1, "thread must descend one level"
        if side == LEFT:
            assert node.left_thread is None, "left contour already continues"
            node.left_thread = target
            node.left_thread_offset = offset
        else:
            assert node.right_thread is None, "right contour already continues"
            node.right_thread = target
            node.right_thread_offset = offset
        node.threaded = True

    def clear_thread(self, source: int, side: int) -> None:
        node = self.nodes[source]
        if side == LEFT:
            node.left_thread = None
            node.left_thread_offset = 0.0
        else:
            node.right_thread = None
            node.right_thread_offset = 0.0
        node.threaded = node.left_thread is not None or node.right_thread is not None


__all__ = ["LEFT", "RIGHT", "TreeNode", "Extreme", "TreeArena"]
