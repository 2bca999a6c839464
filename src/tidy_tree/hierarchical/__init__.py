"""
Hierarchical tree embedding.

This module provides the tidy tree embedder and its stages:
- TreeEmbedder: Reingold-Tilford embedder for any EmbeddableGraph
- TidyTreeLayout: The same embedder driven by node and link lists
- extract_tree / setup_tree / petrify: The three embedding stages
"""

from .arena import Extreme, TreeArena, TreeNode
from .contour import setup_tree
from .extraction import extract_tree
from .petrify import petrify
from .reingold_tilford import DEFAULT_SPACING, TidyTreeLayout, TreeEmbedder, TreeStructureWarning

__all__ = [
    "TreeEmbedder",
    "TidyTreeLayout",
    "TreeStructureWarning",
    "DEFAULT_SPACING",
    "TreeArena",
    "TreeNode",
    "Extreme",
    "extract_tree",
    "setup_tree",
    "petrify",
]
