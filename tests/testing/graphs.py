from collections.abc import Iterable

import networkx as nx
from graph_explorer import Graph, NodeData


def as_pairs(records: Iterable[NodeData]) -> list[tuple[str, int]]:
    return sorted(r.as_tuple() for r in records)


def triangle() -> Graph:
    return Graph.from_edges([("a", "b"), ("b", "c"), ("a", "c")], directed=False)


def directed_line() -> Graph:
    return Graph.from_edges([("a", "b"), ("b", "c"), ("c", "d"), ("d", "e")])


def two_components() -> Graph:
    return Graph.from_edges([("a", "b"), ("c", "d")], directed=False)


def diamond() -> Graph:
    return Graph.from_edges([("a", "b"), ("a", "c"), ("b", "d"), ("c", "d")])


def self_loop() -> Graph:
    return Graph.from_edges([("a", "a"), ("a", "b"), ("b", "a")])


def random_graph(seed: int, *, nodes: int = 1000, edges: int = 10000) -> Graph:
    return Graph.from_networkx(
        nx.gnm_random_graph(nodes, edges, seed=seed, directed=seed % 2 == 0)
    )


def shortest_distances(graph: Graph, starts: Iterable[str]) -> dict[str, int]:
    """Shortest distances computed by networkx, as an independent reference."""
    nx_graph = nx.DiGraph() if graph.directed else nx.Graph()
    nx_graph.add_nodes_from(graph.nodes)
    nx_graph.add_edges_from(
        (source, destination)
        for source, destinations in graph.successors.items()
        for destination in destinations
    )
    distances: dict[str, int] = {}
    for start in starts:
        for name, distance in nx.single_source_shortest_path_length(
            nx_graph, start
        ).items():
            distances[name] = min(distance, distances.get(name, distance))
    return distances
