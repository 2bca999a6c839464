"""
Tests for relative positioning and contour threading.
"""

import pytest

from tidy_tree.hierarchical import TreeArena, setup_tree
from tidy_tree.hierarchical.arena import LEFT, RIGHT
from tidy_tree.hierarchical.contour import centered_positions

# =============================================================================
# Test Fixtures
# =============================================================================


def build(spec):
    """
    Build an arena from nested (name, [children]) tuples.

    Returns the arena and a name -> index mapping.
    """
    arena = TreeArena()
    names = {}
    stack = [(spec, None)]
    while stack:
        (name, children), parent = stack.pop()
        names[name] = arena.add(name, parent)
        for child in reversed(children):
            stack.append((child, names[name]))
    return arena, names


def absolute_x(arena):
    xs = [0.0] * len(arena)
    for i, node in enumerate(arena):
        if node.parent is not None:
            xs[i] = xs[node.parent] + node.offset
    return xs


def leaf(name):
    return (name, [])


def create_uneven_pair():
    """Leaf next to a subtree of height two."""
    #      r
    #     / \
    #    a   b
    #       / \
    #      c   d
    return ("r", [leaf("a"), ("b", [leaf("c"), leaf("d")])])


def create_threaded_merge():
    """Tree whose root merge must follow a thread to find the deepest clash."""
    #          R
    #        /   \
    #       A     B
    #       |    / \
    #       a1  b1  b2
    #      ////      |
    #     p q r s    c1
    return (
        "R",
        [
            ("A", [("a1", [leaf("p"), leaf("q"), leaf("r"), leaf("s")])]),
            ("B", [leaf("b1"), ("b2", [leaf("c1")])]),
        ],
    )


# =============================================================================
# Centering
# =============================================================================


class TestCenteredPositions:
    """Tests for sibling placement from gaps."""

    def test_single_sibling(self):
        """One sibling sits at the parent."""
        assert centered_positions([]) == [0.0]

    def test_two_siblings(self):
        """Two siblings straddle the parent."""
        assert centered_positions([11.0]) == [-5.5, 5.5]

    def test_uneven_gaps(self):
        """Midpoint of the outer siblings stays at zero."""
        positions = centered_positions([11.0, 21.0])
        assert positions == [-16.0, -5.0, 16.0]

    def test_reversed_gaps_negate(self):
        """Reversing the gaps mirrors the positions exactly."""
        gaps = [11.0, 13.25, 0.1, 7.7]
        forward = centered_positions(gaps)
        backward = centered_positions(gaps[::-1])
        assert backward == [-x for x in reversed(forward)]


# =============================================================================
# Setup
# =============================================================================


class TestSetup:
    """Tests for the post-order setup pass."""

    def test_empty_arena(self):
        """Nothing to set up yields no extremes."""
        assert setup_tree(TreeArena(), 10.0) is None

    def test_leaf_root(self):
        """A lone root is its own extreme descendant."""
        arena, names = build(leaf("r"))
        leftmost, rightmost = setup_tree(arena, 10.0)

        assert arena[0].offset == 0.0
        assert leftmost == (names["r"], 0.0, 0)
        assert rightmost == (names["r"], 0.0, 0)

    def test_two_leaves(self):
        """Two leaves are pushed (min_sep + 1) / 2 each way."""
        arena, names = build(("r", [leaf("a"), leaf("b")]))
        leftmost, rightmost = setup_tree(arena, 10.0)

        assert arena[names["a"]].offset == pytest.approx(-5.5)
        assert arena[names["b"]].offset == pytest.approx(5.5)
        assert leftmost.node == names["a"]
        assert rightmost.node == names["b"]
        assert leftmost.level == rightmost.level == 1

    def test_three_leaves(self):
        """Equal leaves are spaced evenly around the parent."""
        arena, names = build(("r", [leaf("a"), leaf("b"), leaf("c")]))
        setup_tree(arena, 10.0)

        offsets = [arena[names[n]].offset for n in "abc"]
        assert offsets == pytest.approx([-11.0, 0.0, 11.0])

    def test_single_child_below_parent(self):
        """An only child sits directly below its parent."""
        arena, names = build(("r", [("a", [leaf("b")])]))
        setup_tree(arena, 10.0)

        assert arena[names["a"]].offset == 0.0
        assert arena[names["b"]].offset == 0.0

    def test_custom_separation(self):
        """The push offset follows the configured separation."""
        arena, names = build(("r", [leaf("a"), leaf("b")]))
        setup_tree(arena, 3.0)
        assert arena[names["b"]].offset == pytest.approx(2.0)

    def test_uneven_heights_install_thread(self):
        """The shallow side's deepest leaf is threaded into the deeper side."""
        arena, names = build(create_uneven_pair())
        leftmost, rightmost = setup_tree(arena, 10.0)

        a = arena[names["a"]]
        assert a.threaded
        assert a.left_thread == names["c"]
        assert a.right_thread is None

        xs = absolute_x(arena)
        # Following the thread lands exactly on c
        assert xs[names["a"]] + a.left_thread_offset == pytest.approx(xs[names["c"]])

        assert leftmost.node == names["c"]
        assert rightmost.node == names["d"]
        assert leftmost.offset == pytest.approx(xs[names["c"]])
        assert rightmost.offset == pytest.approx(xs[names["d"]])

    def test_uneven_heights_offsets(self):
        """Subtrees of unequal height are placed one push apart."""
        arena, names = build(create_uneven_pair())
        setup_tree(arena, 10.0)

        assert arena[names["a"]].offset == pytest.approx(-5.5)
        assert arena[names["b"]].offset == pytest.approx(5.5)
        assert arena[names["c"]].offset == pytest.approx(-5.5)
        assert arena[names["d"]].offset == pytest.approx(5.5)

    def test_merge_follows_threads(self):
        """Deep clashes hidden behind a thread still push subtrees apart."""
        arena, names = build(create_threaded_merge())
        setup_tree(arena, 10.0)

        # b1 continues its left contour at c1
        b1 = arena[names["b1"]]
        assert b1.left_thread == names["c1"]
        assert b1.left_thread_offset == pytest.approx(11.0)

        xs = absolute_x(arena)
        assert xs[names["A"]] == pytest.approx(-11.0)
        assert xs[names["B"]] == pytest.approx(11.0)
        assert xs[names["s"]] == pytest.approx(5.5)
        assert xs[names["c1"]] == pytest.approx(16.5)
        assert xs[names["c1"]] - xs[names["s"]] >= 10.0

    def test_no_temporary_threads_remain(self):
        """Only threads from the settled merge survive setup."""
        arena, names = build(create_threaded_merge())
        setup_tree(arena, 10.0)

        threaded = {arena[i].vertex for i in range(len(arena)) if arena[i].threaded}
        assert threaded == {"b1"}
        for node in arena:
            if node.children:
                assert not node.threaded

    def test_thread_targets_one_level_down(self):
        """Every thread descends exactly one level."""
        arena, _ = build(
            (
                "r",
                [
                    ("a", [leaf("a1")]),
                    leaf("b"),
                    ("c", [("c1", [leaf("c2")])]),
                    leaf("d"),
                ],
            )
        )
        setup_tree(arena, 10.0)

        for node in arena:
            for target in (node.left_thread, node.right_thread):
                if target is not None:
                    assert arena[target].level == node.level + 1

    def test_contour_walk(self):
        """next_on_contour prefers children and falls back to threads."""
        arena, names = build(create_uneven_pair())
        setup_tree(arena, 10.0)

        assert arena.next_on_contour(names["r"], LEFT)[0] == names["a"]
        assert arena.next_on_contour(names["r"], RIGHT)[0] == names["b"]
        assert arena.next_on_contour(names["a"], LEFT)[0] == names["c"]
        assert arena.next_on_contour(names["a"], RIGHT) == (None, 0.0)
        assert arena.next_on_contour(names["d"], RIGHT) == (None, 0.0)


class TestArena:
    """Tests for the arena bookkeeping."""

    def test_levels_follow_parents(self):
        """Levels increase by one per generation."""
        arena, names = build(create_threaded_merge())
        for node in arena:
            if node.parent is not None:
                assert node.level == arena[node.parent].level + 1
        assert arena[names["p"]].level == 3
        assert arena.height == 3

    def test_thread_on_inner_node_rejected(self):
        """Threads may only start at leaves."""
        arena, names = build(create_uneven_pair())
        with pytest.raises(AssertionError):
            arena.set_thread(names["b"], names["c"], 0.0, LEFT)

    def test_clear_thread(self):
        """Clearing the only thread resets the threaded flag."""
        arena, names = build(create_uneven_pair())
        arena.set_thread(names["a"], names["c"], 1.0, LEFT)
        assert arena[names["a"]].threaded

        arena.clear_thread(names["a"], LEFT)
        assert not arena[names["a"]].threaded
        assert arena[names["a"]].left_thread is None
        assert arena[names["a"]].left_thread_offset == 0.0
