"""
Input validation utilities for the tree embedder.

Provides centralized validation functions for links, spacings, the root
position and the edge ordering mode. Raises descriptive exceptions on
invalid input.
"""

from __future__ import annotations

import math
from typing import Any, Optional, Sequence

EDGE_ORDERS = ("insertion", "counterclockwise")


class ValidationError(ValueError):
    """Base exception for embedder validation errors."""

    pass


class InvalidLinkError(ValidationError):
    """Raised when a link references invalid nodes."""

    pass


class InvalidSpacingError(ValidationError):
    """Raised when a horizontal or vertical spacing is unusable."""

    pass


class InvalidPositionError(ValidationError):
    """Raised when the root position is malformed."""

    pass


class InvalidEdgeOrderError(ValidationError):
    """Raised when an unknown incident-edge ordering is requested."""

    pass


def validate_spacing(value: float, name: str = "spacing") -> float:
    """
    Validate a spacing value.

    Args:
        value: Spacing in coordinate units
        name: Parameter name used in the error message

    Returns:
        The spacing as a float

    Raises:
        InvalidSpacingError: If the value is not a finite, non-negative number
    """
    try:
        spacing = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidSpacingError(f"{name} must be a number, got {value!r}") from exc

    if not math.isfinite(spacing):
        raise InvalidSpacingError(f"{name} must be finite, got {spacing}")
    if spacing < 0:
        raise InvalidSpacingError(f"{name} must be non-negative, got {spacing}")

    return spacing


def validate_root_position(position: Sequence[float]) -> tuple[float, float]:
    """
    Validate the position at which the root is placed.

    Args:
        position: [x, y] sequence

    Returns:
        Validated (x, y) tuple

    Raises:
        InvalidPositionError: If the position is not two finite numbers
    """
    if len(position) != 2:
        raise InvalidPositionError(
            f"Root position must have 2 elements [x, y], got {len(position)}"
        )

    try:
        x, y = float(position[0]), float(position[1])
    except (TypeError, ValueError) as exc:
        raise InvalidPositionError(f"Root position must be numeric, got {position!r}") from exc

    if not (math.isfinite(x) and math.isfinite(y)):
        raise InvalidPositionError(f"Root position must be finite, got ({x}, {y})")

    return x, y


def validate_edge_order(order: str) -> str:
    """
    Validate the incident-edge ordering mode.

    Raises:
        InvalidEdgeOrderError: If ``order`` is not a known mode
    """
    if order not in EDGE_ORDERS:
        raise InvalidEdgeOrderError(f"edge_order must be one of {EDGE_ORDERS}, got {order!r}")
    return order


def validate_link_indices(
    links: Sequence[Any],
    node_count: int,
    strict: bool = True,
) -> list[tuple[int, str]]:
    """
    Validate that all link source/target indices are within bounds.

    Args:
        links: Sequence of Link objects or dicts with source/target
        node_count: Number of nodes in the graph
        strict: If True, raises on invalid. If False, returns list of issues.

    Returns:
        List of (link_index, issue_description) tuples

    Raises:
        InvalidLinkError: If strict=True and invalid links found
    """
    issues: list[tuple[int, str]] = []

    for i, link in enumerate(links):
        src = _get_index(link, "source")
        tgt = _get_index(link, "target")

        if src is None:
            issues.append((i, f"Link {i}: source is None"))
        elif src < 0 or src >= node_count:
            issues.append((i, f"Link {i}: source index {src} out of bounds [0, {node_count})"))

        if tgt is None:
            issues.append((i, f"Link {i}: target is None"))
        elif tgt < 0 or tgt >= node_count:
            issues.append((i, f"Link {i}: target index {tgt} out of bounds [0, {node_count})"))

    if strict and issues:
        msg = "Invalid link indices:\n" + "\n".join(issue[1] for issue in issues)
        raise InvalidLinkError(msg)

    return issues


def _get_index(obj: Any, attr: str) -> Optional[int]:
    """Extract index from int, Node, or object with index attribute."""
    if isinstance(obj, dict):
        val = obj.get(attr)
    elif hasattr(obj, attr):
        val = getattr(obj, attr, None)
    else:
        val = None

    if val is None:
        return None
    if isinstance(val, int):
        return val
    if getattr(val, "index", None) is not None:
        return int(val.index)
    return None


__all__ = [
    "EDGE_ORDERS",
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
