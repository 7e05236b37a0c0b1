import json
import logging
import tomllib
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import ValidationError

from ._document import GraphDocument
from ._errors import GraphFileError
from ._graph import Graph

logger = logging.getLogger(__name__)

JSON_SUFFIXES = frozenset({".json"})
TOML_SUFFIXES = frozenset({".toml"})
SCALAR_ID_TYPES = (str, int, float, bool)


def _format_for(path: Path) -> str:
    suffix = path.suffix.lower()
    if suffix in JSON_SUFFIXES:
        return "json"
    if suffix in TOML_SUFFIXES:
        return "toml"
    msg = f"Unsupported graph file type '{path.suffix}' for {path} (expected .json or .toml)"
    raise GraphFileError(msg)


def _check_node_ids(contents: dict[str, Any], path: Path, file_format: str) -> None:
    """Reject node ids that would not load back as the same hashable value.

    JSON and TOML only round-trip scalar ids; a tuple, for one, comes back as
    an unhashable list. None is a valid JSON id and is left to the TOML check.
    """
    for node in contents["nodes"]:
        node_id = node["id"]
        if node_id is None or isinstance(node_id, SCALAR_ID_TYPES):
            continue
        msg = (
            f"Node id {node_id!r} cannot be written to {file_format.upper()} in {path} "
            "(ids must be str, int, float or bool)"
        )
        raise GraphFileError(msg)


def _find_none(value: Any, location: str) -> str | None:
    """Return the location of the first None inside ``value``, if any."""
    if value is None:
        return location
    if isinstance(value, dict):
        for key, item in value.items():
            found = _find_none(item, f"{location}.{key}")
            if found is not None:
                return found
    elif isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            found = _find_none(item, f"{location}[{index}]")
            if found is not None:
                return found
    return None


def _check_toml_values(contents: dict[str, Any], path: Path) -> None:
    for key in ("nodes", "links"):
        location = _find_none(contents[key], key)
        if location is not None:
            msg = f"Cannot write None at {location} to TOML in {path} (TOML has no null; use .json instead)"
            raise GraphFileError(msg)


def load_document(path: Path | str) -> GraphDocument:
    """Read and validate a graph document from a JSON or TOML file.

    Args:
        path: Path to a ``.json`` or ``.toml`` file.

    Returns:
        The validated document.

    Raises:
        GraphFileError: If the file type is unsupported, the file cannot be
            parsed, or its contents are not a valid graph document.

    """
    path = Path(path)
    file_format = _format_for(path)

    try:
        if file_format == "json":
            with path.open(encoding="utf-8") as f:
                contents = json.load(f)
        else:
            with path.open("rb") as f:
                contents = tomllib.load(f)
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        msg = f"Invalid {file_format.upper()} in {path}: {e}"
        raise GraphFileError(msg) from e

    try:
        document = GraphDocument.model_validate(contents)
    except ValidationError as e:
        msg = f"Invalid graph document in {path}: {e}"
        raise GraphFileError(msg) from e

    logger.debug("Loaded %d node(s) and %d link(s) from %s", len(document.nodes), len(document.links), path)
    return document


def load_graph(path: Path | str) -> Graph:
    """Build a graph from a JSON or TOML document file.

    Raises:
        GraphFileError: See :func:`load_document`.

    """
    return Graph(load_document(path))


def save_graph(graph: Graph, path: Path | str) -> None:
    """Write the serialized form of ``graph`` to a JSON or TOML file.

    The format follows the file suffix. Both formats require scalar node ids
    (str, int, float or bool; None is also allowed for JSON), and TOML output
    cannot hold None anywhere, including inside edge payloads. Nothing is
    written when a check fails.

    Raises:
        GraphFileError: If the file type is unsupported or the graph cannot be
            represented in the chosen format.

    """
    path = Path(path)
    file_format = _format_for(path)
    contents = graph.serialize()
    _check_node_ids(contents, path, file_format)
    if file_format == "toml":
        _check_toml_values(contents, path)

    if file_format == "json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(contents, f, indent=2)
            f.write("\n")
    else:
        with path.open("wb") as f:
            tomli_w.dump(contents, f)

    logger.debug("Saved %d node(s) and %d link(s) to %s", len(contents["nodes"]), len(contents["links"]), path)
