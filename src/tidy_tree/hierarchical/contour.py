"""
Relative positioning (setup) for the tidy tree embedder.

Based on the paper:
"Tidier Drawings of Trees" by Reingold and Tilford (1981),
generalized from binary to m-ary trees.

Every node receives an offset relative to its parent. Children are merged
one at a time into a growing clump: the clump's right contour is walked
against the newcomer's left contour, level by level, and the largest
deficit below the minimum separation decides how far the newcomer's root
must sit from its left neighbour. The newcomer is then pushed once by

    push_offset = (root_separation + 1) / 2

while the siblings already placed move back by the same amount, which
keeps the parent centered over the clump.

Where one side of a merge is shallower than the other, its deepest
extreme leaf is threaded to the next contour node of the deeper side, so
later walks can continue down a contour without visiting interior nodes.

A single left-to-right merge is biased: small subtrees squeezed between
large ones end up next to their left neighbour. To keep mirrored trees
drawn as mirror images, the merge also runs right to left on the mirrored
tree, the sibling gaps of the two sweeps are averaged, and the final
threads are installed by one more pass over the settled offsets. Both
sweeps satisfy every pairwise separation constraint between siblings, and
those constraints are linear in the offsets, so their average does too.
"""

from __future__ import annotations

import logging
from typing import NamedTuple, Optional, Sequence

from .arena import LEFT, RIGHT, Extreme, TreeArena

logger = logging.getLogger(__name__)


class _Sweep(NamedTuple):
    """Outcome of merging a sibling sequence, in the sweep's own frame."""

    positions: list[float]
    gaps: list[float]
    threads: list[tuple[int, int]]
    leftmost: Extreme
    rightmost: Extreme


class ContourSetup:
    """
    Post-order pass computing relative offsets and contour threads.

    Args:
        arena: Tree produced by extraction
        minimum_separation: Minimum horizontal distance between contours
    """

    def __init__(self, arena: TreeArena, minimum_separation: float) -> None:
        self.arena = arena
        self.minimum_separation = float(minimum_separation)
        # (leftmost, rightmost) per node, relative to the node itself
        self._extremes: list[Optional[tuple[Extreme, Extreme]]] = [None] * len(arena)

    def run(self) -> Optional[tuple[Extreme, Extreme]]:
        """
        Set up every node, children before parents.

        Returns:
            The root's (leftmost, rightmost) extreme descendants, or None for
            an empty arena.
        """
        for index in reversed(range(len(self.arena))):
            self._setup_node(index)

        if not self._extremes:
            return None
        root_extremes = self._extremes[0]
        # Only the root's record is meaningful once its parent is gone
        self._extremes = []
        return root_extremes

    # -------------------------------------------------------------------------
    # Per-node setup
    # -------------------------------------------------------------------------

    def _setup_node(self, index: int) -> None:
        node = self.arena[index]
        node.offset = 0.0

        if not node.children:
            leaf = Extreme(index, 0.0, node.level)
            self._extremes[index] = (leaf, leaf)
            return

        children = node.children
        forward = self._sweep(children, mirrored=False)
        self._unthread(forward.threads)
        backward = self._sweep(children[::-1], mirrored=True)
        self._unthread(backward.threads)

        gaps = [(a + b) / 2.0 for a, b in zip(forward.gaps, reversed(backward.gaps))]
        positions = centered_positions(gaps)

        settled = self._sweep(children, mirrored=False, fixed=positions)
        for child, x in zip(children, positions):
            self.arena[child].offset = x
        self._extremes[index] = (settled.leftmost, settled.rightmost)

        # Children's records are consumed by this merge
        for child in children:
            self._extremes[child] = None

    def _sweep(
        self,
        order: Sequence[int],
        mirrored: bool,
        fixed: Optional[Sequence[float]] = None,
    ) -> _Sweep:
        """
        Merge ``order`` left to right in the sweep frame.

        A mirrored sweep sees the tree reflected: x is negated, left and
        right contours swap, and so do left and right threads. Without
        ``fixed``, each newcomer is pushed as close as the separation
        allows; with ``fixed``, positions are taken as given and only threads
        and extremes are computed.
        """
        sign = -1.0 if mirrored else 1.0
        near, far = (LEFT, RIGHT) if mirrored else (RIGHT, LEFT)
        min_sep = self.minimum_separation

        positions = [fixed[0] if fixed is not None else 0.0]
        gaps: list[float] = []
        threads: list[tuple[int, int]] = []
        leftmost, rightmost = self._oriented(order[0], mirrored)
        leftmost = leftmost.shifted(positions[0])
        rightmost = rightmost.shifted(positions[0])

        for j in range(1, len(order)):
            # Walk the clump's near contour against the newcomer's far contour
            left, left_x = order[j - 1], 0.0
            right, right_x = order[j], 0.0
            root_sep = min_sep
            while True:
                if left_x - right_x + min_sep > root_sep:
                    root_sep = left_x - right_x + min_sep
                next_left, left_dx = self.arena.next_on_contour(left, near)
                next_right, right_dx = self.arena.next_on_contour(right, far)
                if next_left is None or next_right is None:
                    break
                left, left_x = next_left, left_x + sign * left_dx
                right, right_x = next_right, right_x + sign * right_dx

            if fixed is None:
                push_offset = (root_sep + 1.0) / 2.0
                positions.append(positions[j - 1] + 2.0 * push_offset)
            else:
                positions.append(fixed[j])
            gaps.append(positions[j] - positions[j - 1])

            new_left, new_right = self._oriented(order[j], mirrored)
            new_left = new_left.shifted(positions[j])
            new_right = new_right.shifted(positions[j])

            if next_left is not None and next_right is None:
                # Newcomer is shallower: its right contour continues in the clump
                target_x = positions[j - 1] + left_x + sign * left_dx
                self.arena.set_thread(
                    new_right.node, next_left, sign * (target_x - new_right.offset), near
                )
                threads.append((new_right.node, near))
            elif next_right is not None and next_left is None:
                # Clump is shallower: its left contour continues in the newcomer
                target_x = positions[j] + right_x + sign * right_dx
                self.arena.set_thread(
                    leftmost.node, next_right, sign * (target_x - leftmost.offset), far
                )
                threads.append((leftmost.node, far))

            if new_left.level > leftmost.level:
                leftmost = new_left
            if new_right.level >= rightmost.level:
                rightmost = new_right

        if mirrored:
            leftmost, rightmost = rightmost.mirrored(), leftmost.mirrored()
        return _Sweep(positions, gaps, threads, leftmost, rightmost)

    def _oriented(self, index: int, mirrored: bool) -> tuple[Extreme, Extreme]:
        """Extremes of a set-up child as seen from the sweep frame."""
        record = self._extremes[index]
        assert record is not None, "child must be set up before its parent"
        leftmost, rightmost = record
        if mirrored:
            return rightmost.mirrored(), leftmost.mirrored()
        return leftmost, rightmost

    def _unthread(self, threads: Sequence[tuple[int, int]]) -> None:
        for source, side in threads:
            self.arena.clear_thread(source, side)


def centered_positions(gaps: Sequence[float]) -> list[float]:
    """
    Place siblings with the given consecutive gaps so that the midpoint of
    the first and last sibling sits at 0.

    Each position is half the difference between the distance already
    covered from the left end and the distance left to the right end, so a
    reversed gap sequence yields exactly negated positions.
    """
    prefix = [0.0]
    for gap in gaps:
        prefix.append(prefix[-1] + gap)
    suffix = [0.0]
    for gap in reversed(gaps):
        suffix.append(suffix[-1] + gap)
    suffix.reverse()
    return [(before - after) / 2.0 for before, after in zip(prefix, suffix)]


def setup_tree(arena: TreeArena, minimum_separation: float) -> Optional[tuple[Extreme, Extreme]]:
    """
    Compute every node's offset relative to its parent.

    Args:
        arena: Tree produced by extraction
        minimum_separation: Minimum horizontal distance between nodes that
            share a level

    Returns:
        The root's (leftmost, rightmost) extreme descendants, or None for an
        empty arena
    """
    extremes = ContourSetup(arena, minimum_separation).run()
    logger.debug("Set up %d node(s) with minimum separation %s", len(arena), minimum_separation)
    return extremes


__all__ = ["ContourSetup", "centered_positions", "setup_tree"]
