"""
Reingold-Tilford tree embedder.

Based on the paper:
"Tidier Drawings of Trees" by Reingold and Tilford (1981)

extended to trees of any arity. Only vertex coordinates are changed.

The embedding runs in three stages:
1. Extraction: a spanning tree is read off the graph from the root,
   dropping edges to vertices that were already visited.
2. Setup: a post-order pass computes each node's offset from its parent
   and threads the subtree contours.
3. Petrify: a pre-order pass accumulates the offsets into absolute
   coordinates and relocates the vertices.
"""

from __future__ import annotations

import logging
import warnings
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from ..base import EventSource, StaticLayout
from ..graph import EmbeddableGraph, Graph
from ..types import Event, EventType, LinkLike, NodeLike, PointType
from ..validation import validate_edge_order, validate_root_position, validate_spacing
from .arena import TreeArena
from .contour import setup_tree
from .extraction import extract_tree
from .petrify import petrify

logger = logging.getLogger(__name__)

DEFAULT_SPACING = 10.0


class TreeStructureWarning(UserWarning):
    """Warning issued when graph structure doesn't match tree assumptions."""

    pass


class TreeEmbedder(EventSource):
    """
    Tidy tree embedder for any graph implementing ``EmbeddableGraph``.

    Positions vertices so that:
    - Parents are centered over their children
    - Nodes on the same level are at least ``minimum_horizontal_spacing`` apart
    - Each level sits ``vertical_spacing`` below the previous one
    - Mirrored trees are drawn as mirror images

    Without a root, ``embed`` does nothing.

    Example:
        graph = Graph(
            nodes=[{}, {}, {}],
            links=[{"source": 0, "target": 1}, {"source": 0, "target": 2}],
        )
        embedder = TreeEmbedder(root=graph.vertex(0), root_position=(0, 100))
        embedder.embed(graph)
    """

    def __init__(
        self,
        *,
        root: Optional[Any] = None,
        minimum_horizontal_spacing: float = DEFAULT_SPACING,
        vertical_spacing: float = DEFAULT_SPACING,
        root_position: PointType = (0.0, 0.0),
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize the embedder.

        Args:
            root: Vertex the tree hangs from. If None, embedding is a no-op.
            minimum_horizontal_spacing: Minimum distance between nodes on
                the same level.
            vertical_spacing: Distance between consecutive levels.
            root_position: (x, y) at which the root is placed.
            on_start: Callback for start event
            on_end: Callback for end event

        Raises:
            InvalidSpacingError: If a spacing is negative or not finite.
            InvalidPositionError: If root_position is not two finite numbers.
        """
        super().__init__(on_start=on_start, on_end=on_end)
        self._root: Optional[Any] = root
        self._min_sep: float = validate_spacing(
            minimum_horizontal_spacing, "minimum_horizontal_spacing"
        )
        self._vertical_sep: float = validate_spacing(vertical_spacing, "vertical_spacing")
        self._root_position: tuple[float, float] = validate_root_position(root_position)

        self._tree: Optional[TreeArena] = None
        self._positions: dict[Any, tuple[float, float]] = {}

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Optional[Any]:
        """Get the root vertex."""
        return self._root

    @root.setter
    def root(self, value: Optional[Any]) -> None:
        """Set the root vertex."""
        self._root = value

    @property
    def minimum_horizontal_spacing(self) -> float:
        """Get the minimum horizontal distance between nodes on a level."""
        return self._min_sep

    @minimum_horizontal_spacing.setter
    def minimum_horizontal_spacing(self, value: float) -> None:
        self._min_sep = validate_spacing(value, "minimum_horizontal_spacing")

    @property
    def vertical_spacing(self) -> float:
        """Get the distance between levels."""
        return self._vertical_sep

    @vertical_spacing.setter
    def vertical_spacing(self, value: float) -> None:
        self._vertical_sep = validate_spacing(value, "vertical_spacing")

    @property
    def root_position(self) -> tuple[float, float]:
        """Get the (x, y) position of the root."""
        return self._root_position

    @root_position.setter
    def root_position(self, value: PointType) -> None:
        self._root_position = validate_root_position(value)

    @property
    def x(self) -> float:
        """Get the x coordinate of the root placement."""
        return self._root_position[0]

    @property
    def y(self) -> float:
        """Get the y coordinate of the root placement."""
        return self._root_position[1]

    @property
    def tree(self) -> Optional[TreeArena]:
        """Tree built by the most recent embedding, if any."""
        return self._tree

    @property
    def positions(self) -> dict[Any, tuple[float, float]]:
        """Positions written by the most recent embedding, keyed by vertex."""
        return self._positions

    def position_of(self, vertex: Any) -> Optional[tuple[float, float]]:
        """Position given to ``vertex`` by the last embedding, or None."""
        return self._positions.get(vertex)

    # -------------------------------------------------------------------------
    # Embedding
    # -------------------------------------------------------------------------

    def embed(self, graph: EmbeddableGraph) -> Self:
        """
        Relocate every vertex reachable from the root.

        Does nothing when no root is set or when the graph cannot list the
        root's incident edges.

        Returns:
            self (for chaining)
        """
        self.trigger({"type": EventType.start})
        self._tree = None
        self._positions = {}

        placed = 0
        arena = self._extract(graph)
        if arena is not None:
            setup_tree(arena, self._min_sep)
            positions = petrify(arena, graph, self._root_position, self._vertical_sep)
            self._positions = {node.vertex: pos for node, pos in zip(arena, positions)}
            self._tree = arena
            placed = len(arena)
            logger.debug("Embedded %d vertex(es) below %s", placed, self._root_position)

        self.trigger({"type": EventType.end, "placed": placed})
        return self

    def _extract(self, graph: EmbeddableGraph) -> Optional[TreeArena]:
        if self._root is None:
            logger.debug("No root set; nothing to embed")
            return None
        try:
            root_edges = graph.incident_edges(self._root)
        except LookupError:
            logger.debug("Root %r is not part of the graph; nothing to embed", self._root)
            return None
        return extract_tree(graph, self._root, root_edges)


class TidyTreeLayout(StaticLayout):
    """
    Tidy tree layout over node and link lists.

    Builds a ``Graph`` from ``nodes`` and ``links`` and embeds it with a
    ``TreeEmbedder`` rooted at node ``root``. Nodes not reachable from the
    root keep their positions.

    Example:
        layout = TidyTreeLayout(
            nodes=[{}, {}, {}, {}, {}],
            links=[
                {'source': 0, 'target': 1},
                {'source': 0, 'target': 2},
                {'source': 1, 'target': 3},
                {'source': 1, 'target': 4},
            ],
            root=0,
        )
        layout.run()
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
        # Tree-specific parameters
        root: Optional[int] = None,
        directed: bool = False,
        edge_order: str = "insertion",
        minimum_horizontal_spacing: float = DEFAULT_SPACING,
        vertical_spacing: float = DEFAULT_SPACING,
        root_position: PointType = (0.0, 0.0),
    ) -> None:
        """
        Initialize tidy tree layout.

        Args:
            nodes: List of nodes
            links: List of links
            on_start: Callback for start event
            on_end: Callback for end event
            root: Root node index. If None, run() leaves all nodes in place.
            directed: Follow links only from source to target.
            edge_order: Sibling order, "insertion" (link order) or
                "counterclockwise" (angle around the parent).
            minimum_horizontal_spacing: Minimum distance between nodes on
                the same level.
            vertical_spacing: Distance between consecutive levels.
            root_position: (x, y) at which the root is placed.
        """
        super().__init__(nodes=nodes, links=links, on_start=on_start, on_end=on_end)

        self._root_index: Optional[int] = root
        self._directed: bool = bool(directed)
        self._edge_order: str = validate_edge_order(edge_order)
        self._embedder = TreeEmbedder(
            minimum_horizontal_spacing=minimum_horizontal_spacing,
            vertical_spacing=vertical_spacing,
            root_position=root_position,
        )

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def root(self) -> Optional[int]:
        """Get root node index."""
        return self._root_index

    @root.setter
    def root(self, value: Optional[int]) -> None:
        """Set root node index."""
        self._root_index = value

    @property
    def directed(self) -> bool:
        """Whether links are followed only from source to target."""
        return self._directed

    @directed.setter
    def directed(self, value: bool) -> None:
        self._directed = bool(value)

    @property
    def edge_order(self) -> str:
        """Get the sibling ordering mode."""
        return self._edge_order

    @edge_order.setter
    def edge_order(self, value: str) -> None:
        self._edge_order = validate_edge_order(value)

    @property
    def minimum_horizontal_spacing(self) -> float:
        return self._embedder.minimum_horizontal_spacing

    @minimum_horizontal_spacing.setter
    def minimum_horizontal_spacing(self, value: float) -> None:
        self._embedder.minimum_horizontal_spacing = value

    @property
    def vertical_spacing(self) -> float:
        return self._embedder.vertical_spacing

    @vertical_spacing.setter
    def vertical_spacing(self, value: float) -> None:
        self._embedder.vertical_spacing = value

    @property
    def root_position(self) -> tuple[float, float]:
        return self._embedder.root_position

    @root_position.setter
    def root_position(self, value: PointType) -> None:
        self._embedder.root_position = value

    @property
    def embedder(self) -> TreeEmbedder:
        """The embedder doing the work."""
        return self._embedder

    # -------------------------------------------------------------------------
    # Layout Computation
    # -------------------------------------------------------------------------

    def _compute(self, **kwargs: Any) -> int:
        """Embed the tree hanging from the root node."""
        root = self._root_index
        if root is None or not 0 <= root < len(self._nodes):
            logger.debug("Root index %r does not name a node; nothing to lay out", root)
            return 0

        graph = Graph(
            self._nodes,
            self._links,
            directed=self._directed,
            edge_order=self._edge_order,
        )
        self._embedder.root = graph.vertex(root)
        self._embedder.embed(graph)

        unreached = len(self._nodes) - graph.relocations
        if unreached:
            warnings.warn(
                f"Found {unreached} disconnected node(s) not reachable from root. "
                "These nodes keep their current positions.",
                TreeStructureWarning,
                stacklevel=3,
            )
        return graph.relocations


__all__ = ["DEFAULT_SPACING", "TreeEmbedder", "TidyTreeLayout", "TreeStructureWarning"]
