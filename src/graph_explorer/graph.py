"""Defines the read-only graph view explored by the strategies."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING

from immutabledict import immutabledict

if TYPE_CHECKING:
    import networkx as nx

Adjacency = immutabledict[str, frozenset[str]]


@dataclass(frozen=True)
class Graph:
    """
    An immutable adjacency view over a directed or undirected graph.

    Instances are shared between concurrent workers without synchronisation,
    so nothing about them changes after construction. Build them with
    [from_edges][graph_explorer.graph.Graph.from_edges] or
    [from_networkx][graph_explorer.graph.Graph.from_networkx].

    Parameters
    ----------
    directed :
        Whether edges may only be followed in their declared direction.
    successors :
        Maps every vertex name to the names its outgoing edges lead to.
    predecessors :
        Maps every vertex name to the names whose outgoing edges lead to it.
    """

    directed: bool
    successors: Adjacency
    predecessors: Adjacency

    @staticmethod
    def from_edges(
        edges: Iterable[tuple[str, str]],
        *,
        nodes: Iterable[str] = (),
        directed: bool = True,
    ) -> Graph:
        """
        Create a graph from `(source, destination)` pairs.

        Parameters
        ----------
        edges :
            The edges of the graph. Repeated edges collapse into one.
        nodes :
            Additional vertices, for instance ones without any edge.
        directed :
            Whether the graph is directed.

        Returns
        -------
        :
            The graph view.
        """
        successors: dict[str, set[str]] = {}
        predecessors: dict[str, set[str]] = {}
        for name in nodes:
            successors.setdefault(name, set())
            predecessors.setdefault(name, set())
        for source, destination in edges:
            successors.setdefault(source, set()).add(destination)
            successors.setdefault(destination, set())
            predecessors.setdefault(destination, set()).add(source)
            predecessors.setdefault(source, set())
        return Graph(
            directed=directed,
            successors=_freeze(successors),
            predecessors=_freeze(predecessors),
        )

    @staticmethod
    def from_networkx(graph: nx.Graph) -> Graph:
        """
        Create a graph view from a networkx graph.

        Vertex keys are converted to strings. Multi-graphs are accepted and
        their parallel edges collapse.
        """
        return Graph.from_edges(
            ((str(u), str(v)) for u, v in graph.edges()),
            nodes=(str(n) for n in graph.nodes()),
            directed=graph.is_directed(),
        )

    @property
    def nodes(self) -> Iterator[str]:
        """The names of all vertices."""
        return iter(self.successors)

    def __len__(self) -> int:
        return len(self.successors)

    def __contains__(self, name: object) -> bool:
        return name in self.successors

    def has(self, name: str) -> bool:
        """Return whether `name` is a vertex of the graph."""
        return name in self.successors

    def number_of_edges(self) -> int:
        """Return the number of distinct `(source, destination)` pairs."""
        return sum(len(dsts) for dsts in self.successors.values())

    def neighbours(self, name: str) -> frozenset[str]:
        """
        Return the vertices reachable from `name` through a single edge.

        For directed graphs these are the destinations of outgoing edges. For
        undirected graphs incoming edges are followed as well. Self-loops are
        included. The iteration order is unspecified.

        Raises
        ------
        KeyError
            If `name` is not a vertex of the graph.
        """
        if self.directed:
            return self.successors[name]
        return self.successors[name] | self.predecessors[name]


def _freeze(adjacency: dict[str, set[str]]) -> Adjacency:
    return immutabledict((name, frozenset(dsts)) for name, dsts in adjacency.items())
