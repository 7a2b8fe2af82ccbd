"""Load graphs described in the DOT language."""

from __future__ import annotations

import logging
import os
import re
from collections.abc import Iterator, Mapping, Sequence

import pydot

from graph_explorer.errors import EmptyStartSet, GraphParseError, UnknownStart
from graph_explorer.graph import Graph

logger = logging.getLogger(__name__)

# Statements setting default attributes share the node statement syntax.
_DEFAULT_STATEMENTS = frozenset({"node", "edge", "graph"})
_QUOTED_ID = re.compile(r'"((?:[^"\\]|\\.)*)"')


def parse_dot(text: str, *, path: str | None = None) -> Graph:
    """
    Parse a DOT document into a graph view.

    Only the first graph of the document is used. Vertices and edges declared
    inside subgraphs and clusters belong to the graph. Quotes surrounding
    vertex names and the port of edge endpoints are removed.

    Parameters
    ----------
    text :
        The DOT source.
    path :
        Where the source was read from, used in error messages.

    Returns
    -------
    :
        The parsed graph.

    Raises
    ------
    GraphParseError
        If the source is not valid DOT or describes no vertices.
    """
    if not text.strip():
        raise GraphParseError("No graph found.", path=path)

    try:
        parsed = pydot.graph_from_dot_data(text)
    except Exception as exc:
        # pydot surfaces pyparsing errors of various types.
        raise GraphParseError(f"invalid DOT source: {exc}", path=path) from exc

    if not parsed:
        raise GraphParseError("No graph found.", path=path)
    if len(parsed) > 1:
        logger.warning(
            "%s contains %d graphs, only the first is explored",
            path or "DOT source",
            len(parsed),
        )

    dot = parsed[0]
    nodes: list[str] = []
    edges: list[tuple[str, str]] = []
    for block in _walk(dot):
        nodes.extend(_declared_nodes(block))
        edges.extend(_declared_edges(block))
    graph = Graph.from_edges(edges, nodes=nodes, directed=dot.get_type() == "digraph")
    if len(graph) == 0:
        raise GraphParseError("No graph found.", path=path)

    logger.debug(
        "Parsed %s graph with %d nodes and %d edges",
        "directed" if graph.directed else "undirected",
        len(graph),
        graph.number_of_edges(),
    )
    return graph


def load_dot(path: str | os.PathLike[str]) -> Graph:
    """
    Read and parse the DOT file at `path`.

    Raises
    ------
    OSError
        If the file cannot be read.
    GraphParseError
        If the file does not describe a graph.
    """
    with open(path, encoding="utf-8") as file:
        text = file.read()
    return parse_dot(text, path=os.fspath(path))


def resolve_starts(graph: Graph, names: Sequence[str]) -> list[str]:
    """
    Resolve user-supplied names into the starting vertices of a search.

    One layer of surrounding double quotes is removed from each name, to
    match the names produced by [parse_dot][graph_explorer.dot.parse_dot].
    Repeated names are kept once, in their first position.

    Parameters
    ----------
    graph :
        The graph to be explored.
    names :
        The requested starting vertices.

    Returns
    -------
    :
        The names of the starting vertices.

    Raises
    ------
    EmptyStartSet
        If `names` is empty.
    UnknownStart
        If a name does not identify a vertex of `graph`.
    """
    if not names:
        raise EmptyStartSet()

    starts: dict[str, None] = {}
    for name in names:
        if name not in graph and len(name) >= 2 and name[0] == name[-1] == '"':
            name = name[1:-1]
        if name not in graph:
            raise UnknownStart(name)
        starts.setdefault(name, None)
    return list(starts)


def _walk(graph: pydot.Graph) -> Iterator[pydot.Graph]:
    """Yield `graph` and every subgraph nested in it."""
    yield graph
    for subgraph in graph.get_subgraph_list():
        yield from _walk(subgraph)


def _declared_nodes(graph: pydot.Graph) -> Iterator[str]:
    for node in graph.get_node_list():
        name = _vertex_name(node.get_name())
        if name not in _DEFAULT_STATEMENTS:
            yield name


def _declared_edges(graph: pydot.Graph) -> Iterator[tuple[str, str]]:
    for edge in graph.get_edge_list():
        for source in _endpoints(edge.get_source()):
            for destination in _endpoints(edge.get_destination()):
                yield source, destination


def _endpoints(endpoint: str | Mapping) -> list[str]:
    # An anonymous subgraph such as `a -> {b c}` stands for all its nodes.
    if isinstance(endpoint, str):
        return [_vertex_name(endpoint)]
    return [_vertex_name(name) for name in endpoint["nodes"]]


def _vertex_name(token: str) -> str:
    """Remove the quotes and any `:port[:compass]` suffix from a DOT ID."""
    token = token.strip()
    quoted = _QUOTED_ID.match(token)
    if quoted:
        return quoted.group(1).replace('\\"', '"')
    return token.split(":", 1)[0]
