"""Exceptions raised by digraph."""

from collections.abc import Hashable


class GraphError(Exception):
    """Base class for digraph errors."""


class UnknownNodeError(GraphError):
    """Raised when a shortest-path endpoint is not a node of the graph."""

    def __init__(self, node: Hashable, role: str = "node") -> None:
        self.node = node
        self.role = role
        super().__init__(f"{role.capitalize()} node {node!r} is not in the graph")


class NoPathError(GraphError):
    """Raised when no path leads from the source to the destination."""

    def __init__(self, source: Hashable, destination: Hashable) -> None:
        self.source = source
        self.destination = destination
        super().__init__(f"No path found from {source!r} to {destination!r}")


class GraphFileError(GraphError):
    """Raised when a graph document file cannot be read or written."""
