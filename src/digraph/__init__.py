"""In-memory directed graphs with traversal, shortest paths and serialization."""

__all__ = [
    "DEFAULT_EDGE_WEIGHT",
    "Graph",
    "GraphDocument",
    "GraphError",
    "GraphFileError",
    "LinkEntry",
    "NoPathError",
    "NodeEntry",
    "ShortestPath",
    "UnknownNodeError",
    "depth_first_search",
    "load_document",
    "load_graph",
    "save_graph",
    "shortest_path",
    "topological_sort",
]

from ._document import GraphDocument, LinkEntry, NodeEntry
from ._errors import GraphError, GraphFileError, NoPathError, UnknownNodeError
from ._graph import DEFAULT_EDGE_WEIGHT, Graph, ShortestPath, depth_first_search, shortest_path, topological_sort
from ._io import load_document, load_graph, save_graph
