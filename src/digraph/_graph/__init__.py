"""Graph module providing the directed graph and its algorithms.

This module contains:
- Graph[T]: A mutable directed graph with weighted, annotated edges
- depth_first_search / topological_sort: Traversal orderings
- shortest_path: Dijkstra's algorithm returning a ShortestPath
"""

from ._algorithms import ShortestPath, depth_first_search, shortest_path, topological_sort
from ._graph import DEFAULT_EDGE_WEIGHT, Graph

__all__ = [
    "DEFAULT_EDGE_WEIGHT",
    "Graph",
    "ShortestPath",
    "depth_first_search",
    "shortest_path",
    "topological_sort",
]
