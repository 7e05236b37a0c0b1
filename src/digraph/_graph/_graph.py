"""Mutable directed graph with weighted, annotated edges."""

from __future__ import annotations

import logging
from collections.abc import Hashable, Iterable, Mapping
from typing import TYPE_CHECKING, Any

from digraph._document import GraphDocument, LinkEntry, NodeEntry

from ._algorithms import ShortestPath, depth_first_search, shortest_path, topological_sort

if TYPE_CHECKING:
    from typing import Self

logger = logging.getLogger(__name__)

DEFAULT_EDGE_WEIGHT = 1

# Marks an omitted add_edge argument; None is a valid payload.
_UNSET: Any = object()


class Graph[T: Hashable]:
    """A directed graph stored as ordered adjacency lists.

    Nodes are plain hashable identifiers with no attributes of their own.
    Every edge (u, v) may carry a numeric weight (1 when unset) and an
    arbitrary payload (an empty dict when unset). Both are keyed by the
    ordered pair rather than by the edge itself, so they survive
    :meth:`remove_edge` and are picked up again if the pair is re-added.

    Adjacency lists keep insertion order and may contain the same target
    more than once. The node set is not stored: it is every adjacency key
    plus every node that appears as a target.

    Mutators return the graph so calls can be chained::

        graph = Graph().add_edge("a", "b", 3).add_edge("b", "c")

    Args:
        serialized: Optional document produced by :meth:`serialize` to
            populate the new graph from.

    """

    def __init__(self, serialized: Mapping[str, Any] | GraphDocument | None = None) -> None:
        self._adjacency: dict[T, list[T]] = {}
        self._edge_weights: dict[tuple[T, T], float] = {}
        self._edge_data: dict[tuple[T, T], Any] = {}
        if serialized is not None:
            self.deserialize(serialized)

    # -------------------------------------------------------------------------
    # Nodes
    # -------------------------------------------------------------------------

    def add_node(self, node: T) -> Self:
        """Add a node. Adding an existing node leaves its edges as they are."""
        self._adjacency.setdefault(node, [])
        return self

    def remove_node(self, node: T) -> Self:
        """Remove a node together with its incoming and outgoing edges.

        Weights and payloads stored for its edges are kept.
        """
        for source, targets in self._adjacency.items():
            if node in targets:
                self._adjacency[source] = [target for target in targets if target != node]
        self._adjacency.pop(node, None)
        return self

    def nodes(self) -> list[T]:
        """Return every node in the graph exactly once.

        Nodes that only appear as edge targets are included. The order
        (first seen while scanning the adjacency lists) is stable for a
        given sequence of mutations but carries no other meaning.
        """
        seen: dict[T, None] = {}
        for source, targets in self._adjacency.items():
            seen[source] = None
            for target in targets:
                seen[target] = None
        return list(seen)

    def adjacent(self, node: T) -> list[T]:
        """Return the successors of ``node`` in insertion order ([] if unknown)."""
        return self._adjacency.get(node, [])

    def indegree(self, node: T) -> int:
        """Count the edges ending at ``node``. Scans every adjacency list."""
        return sum(targets.count(node) for targets in self._adjacency.values())

    def outdegree(self, node: T) -> int:
        """Count the edges starting at ``node``."""
        return len(self._adjacency.get(node, ()))

    # -------------------------------------------------------------------------
    # Edges
    # -------------------------------------------------------------------------

    def add_edge(self, u: T, v: T, weight: float = _UNSET, data: Any = _UNSET) -> Self:
        """Add an edge from ``u`` to ``v``, adding both nodes if needed.

        Adding the same pair twice creates a parallel edge. ``weight`` and
        ``data`` overwrite the stored values for the pair only when given.
        """
        self.add_node(u)
        self.add_node(v)
        self._adjacency[u].append(v)
        if weight is not _UNSET:
            self.set_edge_weight(u, v, weight)
        if data is not _UNSET:
            self.set_edge_data(u, v, data)
        return self

    def remove_edge(self, u: T, v: T) -> Self:
        """Remove every edge from ``u`` to ``v``. The nodes stay in the graph."""
        if u in self._adjacency:
            self._adjacency[u] = [target for target in self._adjacency[u] if target != v]
        return self

    def set_edge_weight(self, u: T, v: T, weight: float) -> Self:
        self._edge_weights[u, v] = weight
        return self

    def get_edge_weight(self, u: T, v: T) -> float:
        """Return the weight stored for (u, v), or 1 if none was set."""
        return self._edge_weights.get((u, v), DEFAULT_EDGE_WEIGHT)

    def set_edge_data(self, u: T, v: T, data: Any) -> Self:
        self._edge_data[u, v] = data
        return self

    def get_edge_data(self, u: T, v: T) -> Any:
        """Return the payload stored for (u, v), or a new empty dict if none was set."""
        if (u, v) in self._edge_data:
            return self._edge_data[u, v]
        return {}

    # -------------------------------------------------------------------------
    # Algorithms
    # -------------------------------------------------------------------------

    def depth_first_search(self, sources: Iterable[T] | None = None, *, include_sources: bool = True) -> list[T]:
        """Return nodes in depth-first finish order. See :func:`depth_first_search`."""
        return depth_first_search(self, sources, include_sources=include_sources)

    def topological_sort(self, sources: Iterable[T] | None = None, *, include_sources: bool = True) -> list[T]:
        """Return nodes in topological order. See :func:`topological_sort`."""
        return topological_sort(self, sources, include_sources=include_sources)

    def shortest_path(self, source: T, destination: T) -> ShortestPath[T]:
        """Return the lightest path between two nodes. See :func:`shortest_path`."""
        return shortest_path(self, source, destination)

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_document(self) -> GraphDocument:
        """Build the node/link document describing this graph.

        Links are grouped by source in :meth:`nodes` order and follow
        adjacency order within a source. Parallel edges produce one link
        each, all carrying the single weight and payload stored for the pair.
        """
        nodes = self.nodes()
        links = [
            LinkEntry(
                source=source,
                target=target,
                weight=self.get_edge_weight(source, target),
                data=self.get_edge_data(source, target),
            )
            for source in nodes
            for target in self.adjacent(source)
        ]
        return GraphDocument(nodes=[NodeEntry(id=node) for node in nodes], links=links)

    def serialize(self) -> dict[str, Any]:
        """Return the graph as a plain ``{"nodes": [...], "links": [...]}`` dict."""
        return self.to_document().model_dump()

    def deserialize(self, serialized: Mapping[str, Any] | GraphDocument) -> Self:
        """Add the nodes and links of a serialized document to this graph.

        Nodes are added first, then links are replayed through
        :meth:`add_edge` in document order, which fixes the adjacency order.
        A link without a ``weight`` (or with a null one) keeps the stored
        weight; a link without a ``data`` key keeps the stored payload, while
        an explicit null payload is stored as None.

        Raises:
            pydantic.ValidationError: If ``serialized`` is not a valid document.

        """
        document = GraphDocument.model_validate(serialized)
        for node in document.nodes:
            self.add_node(node.id)
        for link in document.links:
            weight = link.weight if link.weight is not None else _UNSET
            data = link.data if "data" in link.model_fields_set else _UNSET
            self.add_edge(link.source, link.target, weight, data)
        logger.debug("Deserialized %d node(s) and %d link(s)", len(document.nodes), len(document.links))
        return self

    # -------------------------------------------------------------------------
    # Container protocol
    # -------------------------------------------------------------------------

    def __len__(self) -> int:
        """Return the number of nodes in the graph."""
        return len(self.nodes())

    def __contains__(self, node: object) -> bool:
        """Check if a node is in the graph, as a source or as a target."""
        if node in self._adjacency:
            return True
        return any(node in targets for targets in self._adjacency.values())

    def __repr__(self) -> str:
        edge_count = sum(len(targets) for targets in self._adjacency.values())
        return f"{type(self).__name__}(nodes={len(self)}, edges={edge_count})"
