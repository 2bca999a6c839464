"""
Base classes for index-based layouts.

This module provides the shared interface for layouts configured with
node and link lists:

- BaseLayout: Abstract base with event system, node/link management
- StaticLayout: For single-pass layouts (tree embedding)
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Callable, Optional, Sequence

if TYPE_CHECKING:
    from typing_extensions import Self

from .types import (
    Event,
    EventType,
    Link,
    LinkLike,
    Node,
    NodeLike,
    to_link,
    to_node,
)
from .validation import validate_link_indices


class EventSource:
    """
    Lifecycle callbacks shared by layouts and embedders.

    Callbacks receive an ``Event`` dict with at least a ``type`` key.
    """

    def __init__(
        self,
        *,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}
        if on_start:
            self._events[EventType.start] = on_start
        if on_end:
            self._events[EventType.end] = on_end

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a layout event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """
        Trigger an event, calling the registered callback.

        Args:
            event: Event payload with type and optional data
        """
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)


class BaseLayout(EventSource, ABC):
    """
    Abstract base class for index-based layouts.

    Provides shared infrastructure:
    - Event system (start/end events)
    - Node/link management via properties

    Example:
        layout = SomeLayout(nodes=nodes, links=links)
        layout.run()

        for node in layout.nodes:
            print(f"Node {node.index}: ({node.x}, {node.y})")
    """

    def __init__(
        self,
        *,
        nodes: Optional[Sequence[NodeLike]] = None,
        links: Optional[Sequence[LinkLike]] = None,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize layout with configuration.

        Args:
            nodes: List of nodes (Node objects, dicts, or objects with attributes)
            links: List of links (Link objects or dicts with source/target)
            on_start: Callback for start event
            on_end: Callback for end event
        """
        super().__init__(on_start=on_start, on_end=on_end)
        self._nodes: list[Node] = []
        self._links: list[Link] = []

        if nodes is not None:
            self.nodes = nodes
        if links is not None:
            self.links = links

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def nodes(self) -> list[Node]:
        """Get the list of nodes."""
        return self._nodes

    @nodes.setter
    def nodes(self, value: Sequence[NodeLike]) -> None:
        """Set nodes from a sequence of Node objects, dicts, or objects."""
        self._nodes = [to_node(node_data) for node_data in value]

    @property
    def links(self) -> list[Link]:
        """Get the list of links."""
        return self._links

    @links.setter
    def links(self, value: Sequence[LinkLike]) -> None:
        """Set links from a sequence of Link objects, dicts, or objects."""
        self._links = [to_link(link_data) for link_data in value]

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    def validate(self) -> Self:
        """
        Validate current configuration.

        Checks that all link references point to valid node indices.
        Called automatically by run() but can be called early for fail-fast
        behavior.

        Returns:
            self (for chaining)

        Raises:
            InvalidLinkError: If any link references an invalid node index.
        """
        if self._links:
            validate_link_indices(self._links, len(self._nodes), strict=True)
        return self

    # -------------------------------------------------------------------------
    # Lifecycle Methods
    # -------------------------------------------------------------------------

    @abstractmethod
    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Returns:
            self (for chaining)
        """
        pass

    def _initialize_indices(self) -> None:
        """Assign indices to nodes that don't have them."""
        for i, node in enumerate(self._nodes):
            if node.index is None:
                node.index = i


class StaticLayout(BaseLayout):
    """
    Base class for single-pass layout algorithms.

    These layouts compute positions in one pass without iteration.
    """

    def run(self, **kwargs: Any) -> Self:
        """
        Run the layout algorithm.

        Fires start event, computes layout, fires end event.

        Args:
            **kwargs: Additional arguments passed to _compute()

        Returns:
            self (for chaining)
        """
        self._initialize_indices()
        self.validate()
        self.trigger({"type": EventType.start})

        placed = self._compute(**kwargs)

        self.trigger({"type": EventType.end, "placed": placed})
        return self

    @abstractmethod
    def _compute(self, **kwargs: Any) -> int:
        """
        Compute node positions.

        Returns:
            Number of nodes that were positioned
        """
        pass


__all__ = [
    "EventSource",
    "BaseLayout",
    "StaticLayout",
]
