"""Provide the single-task breadth-first strategy."""

import dataclasses
from collections import deque

from typing_extensions import override

from graph_explorer.graph import Graph
from graph_explorer.sink import NodeSink
from graph_explorer.strategies.base import Strategy
from graph_explorer.types import NodeData


@dataclasses.dataclass
class Sequential(Strategy):
    """
    Textbook breadth-first search with one queue and one distance table.

    A vertex gets its distance the first time it is discovered and later
    discoveries are ignored. Records are emitted in BFS order. This is the
    reference against which [Parallel][graph_explorer.strategies.Parallel]
    is checked.
    """

    @property
    @override
    def name(self) -> str:
        return "Sequential"

    @override
    async def _explore(self, graph: Graph, starts: list[str], sink: NodeSink) -> None:
        distances = {name: 0 for name in starts}
        frontier = deque(starts)

        while frontier:
            name = frontier.popleft()
            next_distance = distances[name] + 1
            for neighbour in graph.neighbours(name):
                if neighbour not in distances:
                    distances[neighbour] = next_distance
                    frontier.append(neighbour)
            await sink.send(NodeData(name=name, distance=distances[name]))

        await sink.close()
