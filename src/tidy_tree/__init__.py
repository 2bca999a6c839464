"""
tidy-tree: Reingold-Tilford tidy drawings of m-ary trees.

This package assigns planar coordinates to the vertices of a rooted tree
(or the spanning tree of any graph reachable from a root) so that:
- edges never cross
- parents are centered over their children
- nodes on a level are at least a minimum distance apart
- mirrored trees are drawn as mirror images

Entry points:
- TreeEmbedder: embeds any object implementing EmbeddableGraph
- TidyTreeLayout: index-based layout over node and link lists
"""

__version__ = "0.1.0"

# Base classes for building layouts
from .base import (
    BaseLayout,
    EventSource,
    StaticLayout,
)

# Graph collaborator
from .graph import EmbeddableGraph, Graph

# Tree embedding
from .hierarchical import (
    DEFAULT_SPACING,
    TidyTreeLayout,
    TreeEmbedder,
    TreeStructureWarning,
)

# Metrics for layout quality evaluation
from .metrics import (
    edge_crossings,
    is_mirror_layout,
    level_gaps,
    minimum_level_gap,
)
from .types import (
    Edge,
    Event,
    EventType,
    Link,
    LinkLike,
    Node,
    NodeLike,
    PointType,
)

# Validation utilities
from .validation import (
    InvalidEdgeOrderError,
    InvalidLinkError,
    InvalidPositionError,
    InvalidSpacingError,
    ValidationError,
    validate_edge_order,
    validate_link_indices,
    validate_root_position,
    validate_spacing,
)

__all__ = [
    # Version
    "__version__",
    # Shared types
    "Node",
    "Link",
    "Edge",
    "EventType",
    "Event",
    "NodeLike",
    "LinkLike",
    "PointType",
    # Base classes
    "EventSource",
    "BaseLayout",
    "StaticLayout",
    # Graph
    "EmbeddableGraph",
    "Graph",
    # Tree embedding
    "TreeEmbedder",
    "TreeStructureWarning",
    "TidyTreeLayout",
    "DEFAULT_SPACING",
    # Metrics
    "edge_crossings",
    "level_gaps",
    "minimum_level_gap",
    "is_mirror_layout",
    # Validation
    "ValidationError",
    "InvalidLinkError",
    "InvalidSpacingError",
    "InvalidPositionError",
    "InvalidEdgeOrderError",
    "validate_spacing",
    "validate_root_position",
    "validate_edge_order",
    "validate_link_indices",
]
