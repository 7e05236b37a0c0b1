"""Traversal and shortest-path algorithms over a Graph."""

from __future__ import annotations

import logging
import math
from collections.abc import Hashable, Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from digraph._errors import NoPathError, UnknownNodeError

if TYPE_CHECKING:
    from ._graph import Graph

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ShortestPath[T: Hashable]:
    """A path found by :func:`shortest_path`.

    Behaves like the sequence of its nodes (source first, destination last)
    and carries the total weight of the traversed edges.

    Attributes:
        nodes: Nodes on the path, from source to destination inclusive.
        weight: Sum of the edge weights along the path.

    """

    nodes: list[T]
    weight: float

    def __iter__(self) -> Iterator[T]:
        return iter(self.nodes)

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> T:
        return self.nodes[index]


def depth_first_search[T: Hashable](
    graph: Graph[T],
    sources: Iterable[T] | None = None,
    *,
    include_sources: bool = True,
) -> list[T]:
    """Visit the graph depth-first and return nodes in order of finish time.

    A node finishes once every node reachable from it has been visited, so
    each node appears after all of its not-yet-visited successors. Neighbours
    are visited in adjacency order.

    Args:
        graph: The graph to traverse.
        sources: Nodes to start from, in order. Defaults to every node of
            the graph in :meth:`Graph.nodes` order.
        include_sources: If False, the source nodes are marked visited up
            front and left out of the result; the search still proceeds
            into their neighbours.

    Returns:
        Visited nodes in order of finish time, each exactly once.

    Example:
        >>> graph = Graph().add_edge("a", "b").add_edge("b", "c")
        >>> depth_first_search(graph, ["a"])
        ['c', 'b', 'a']

    """
    source_list = graph.nodes() if sources is None else list(sources)
    logger.debug("Depth-first search from %d source(s), include_sources=%s", len(source_list), include_sources)

    visited: set[T] = set()
    order: list[T] = []

    def visit(start: T) -> None:
        # Explicit stack of (node, remaining neighbours) mirrors the recursive visit.
        if start in visited:
            return
        visited.add(start)
        stack = [(start, iter(graph.adjacent(start)))]
        while stack:
            node, neighbours = stack[-1]
            for neighbour in neighbours:
                if neighbour not in visited:
                    visited.add(neighbour)
                    stack.append((neighbour, iter(graph.adjacent(neighbour))))
                    break
            else:
                stack.pop()
                order.append(node)

    if include_sources:
        for node in source_list:
            visit(node)
    else:
        visited.update(source_list)
        for node in source_list:
            for neighbour in graph.adjacent(node):
                visit(neighbour)

    return order


def topological_sort[T: Hashable](
    graph: Graph[T],
    sources: Iterable[T] | None = None,
    *,
    include_sources: bool = True,
) -> list[T]:
    """Sort the nodes reachable from ``sources`` topologically.

    This is the depth-first finish order reversed: for every edge (u, v)
    between visited nodes, u comes before v. Cycles are not detected; on a
    cyclic graph the result is complete but not a valid topological order.

    Example:
        >>> graph = Graph().add_edge("a", "b").add_edge("b", "c")
        >>> topological_sort(graph)
        ['a', 'b', 'c']

    """
    order = depth_first_search(graph, sources, include_sources=include_sources)
    order.reverse()
    return order


def shortest_path[T: Hashable](graph: Graph[T], source: T, destination: T) -> ShortestPath[T]:
    """Find the lightest path from ``source`` to ``destination`` with Dijkstra's algorithm.

    Edge weights must be non-negative. The priority queue is a linear scan
    over the unsettled nodes; ties go to the node that comes first in
    :meth:`Graph.nodes` order.

    Args:
        graph: The graph to search.
        source: Start node.
        destination: End node.

    Returns:
        The path and its total weight.

    Raises:
        UnknownNodeError: If ``source`` or ``destination`` is not in the graph.
        NoPathError: If ``destination`` cannot be reached from ``source``.

    """
    nodes = graph.nodes()
    distance: dict[T, float] = dict.fromkeys(nodes, math.inf)
    if source not in distance:
        raise UnknownNodeError(source, "source")
    if destination not in distance:
        raise UnknownNodeError(destination, "destination")
    distance[source] = 0

    predecessor: dict[T, T] = {}
    # dict as an insertion-ordered set
    unsettled = dict.fromkeys(nodes)

    while unsettled:
        nearest = min(unsettled, key=distance.__getitem__)
        if distance[nearest] == math.inf:
            logger.debug("%d node(s) unreachable from %r", len(unsettled), source)
            break
        del unsettled[nearest]
        logger.debug("Settled %r at distance %s", nearest, distance[nearest])

        for neighbour in graph.adjacent(nearest):
            candidate = distance[nearest] + graph.get_edge_weight(nearest, neighbour)
            if candidate < distance[neighbour]:
                distance[neighbour] = candidate
                predecessor[neighbour] = nearest

    path = [destination]
    weight: float = 0
    node = destination
    while node != source and node in predecessor:
        previous = predecessor[node]
        weight += graph.get_edge_weight(previous, node)
        node = previous
        path.append(node)

    if node != source:
        raise NoPathError(source, destination)

    path.reverse()
    return ShortestPath(nodes=path, weight=weight)
