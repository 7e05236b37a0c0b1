"""Pydantic models of the node/link document a graph serializes to.

The document shape is::

    {
      "nodes": [{"id": <node-id>}, ...],
      "links": [{"source": <node-id>, "target": <node-id>, "weight": <number>, "data": <any>}, ...]
    }

Unknown extra fields are ignored so that documents written by other tools
can be read back.
"""

from collections.abc import Hashable
from typing import Any

from pydantic import BaseModel, ConfigDict


class NodeEntry(BaseModel):
    """A node of the serialized graph."""

    model_config = ConfigDict(frozen=True)

    id: Hashable


class LinkEntry(BaseModel):
    """A directed edge of the serialized graph.

    ``weight`` and ``data`` are optional: when omitted, replaying the link
    leaves whatever weight or payload is already stored for the pair. A null
    ``weight`` counts as omitted; an explicit null ``data`` is a payload of its
    own (check ``model_fields_set`` to tell it from an omitted one).
    """

    model_config = ConfigDict(frozen=True)

    source: Hashable
    target: Hashable
    weight: int | float | None = None
    data: Any = None


class GraphDocument(BaseModel):
    """The whole serialized graph.

    ``links`` order is significant: it becomes the adjacency order when the
    document is deserialized.
    """

    model_config = ConfigDict(frozen=True)

    nodes: list[NodeEntry]
    links: list[LinkEntry]
