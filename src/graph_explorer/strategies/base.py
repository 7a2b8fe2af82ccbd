"""Define the base exploration strategy."""

from __future__ import annotations

import abc
import dataclasses
from collections.abc import Sequence
from typing import Any

from graph_explorer.errors import EmptyStartSet, UnknownStart
from graph_explorer.graph import Graph
from graph_explorer.sink import NodeSink


@dataclasses.dataclass(kw_only=True)
class Strategy(abc.ABC):
    """
    Interface for the ways of exploring a graph breadth-first.

    Every strategy computes the same result: each vertex reachable from the
    starting vertices is emitted exactly once, together with the number of
    edges on a shortest path from the closest starting vertex. Strategies
    differ in how the work is scheduled.
    """

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Human readable name, used in reports."""
        ...

    def validate(self) -> None:
        """
        Check the configuration of the strategy.

        Raises
        ------
        ExplorationError
            If the strategy cannot run as configured.
        """

    async def run(self, graph: Graph, starts: Sequence[str], sink: NodeSink) -> None:
        """
        Explore `graph` from `starts`, reporting every vertex on `sink`.

        All arguments are checked before any work starts. The sink is closed
        once every reachable vertex has been sent.

        Parameters
        ----------
        graph :
            The graph to explore.
        starts :
            Names of the starting vertices, all at distance 0. Repeated names
            are explored once.
        sink :
            Receives one record per reachable vertex, followed by the
            completion signal.

        Raises
        ------
        ExplorationError
            See [check][graph_explorer.strategies.Strategy.check].
        """
        self.check(graph, starts)
        await self._explore(graph, list(dict.fromkeys(starts)), sink)

    def check(self, graph: Graph, starts: Sequence[str]) -> None:
        """
        Check that an exploration of `graph` from `starts` can run.

        Raises
        ------
        EmptyStartSet
            If `starts` is empty.
        UnknownStart
            If a starting vertex is not in `graph`.
        InvalidWorkerCount
            If the strategy is configured with fewer than one worker.
        """
        self.validate()
        if not starts:
            raise EmptyStartSet()
        for name in starts:
            if name not in graph:
                raise UnknownStart(name)

    @abc.abstractmethod
    async def _explore(self, graph: Graph, starts: list[str], sink: NodeSink) -> None:
        """
        Perform the exploration on validated arguments.

        Implementations must close `sink` exactly once, after the last record.
        """
        ...

    @staticmethod
    def build(base_strategy: Strategy, **kwargs: Any) -> Strategy:
        """
        Apply per-call settings on top of a configured strategy.

        Parameters
        ----------
        base_strategy :
            The strategy to start from. It is not modified.
        kwargs :
            Replacement values for fields of `base_strategy`, for instance
            `n_workers` of a [Parallel][graph_explorer.strategies.Parallel]
            strategy.

        Returns
        -------
        :
            A new strategy of the same type as `base_strategy`.

        Raises
        ------
        TypeError
            If `base_strategy` is not a strategy, or a keyword does not name one
            of its fields.
        ExplorationError
            If the resulting configuration is invalid.
        """
        if not isinstance(base_strategy, Strategy):
            raise TypeError(
                f"Unsupported strategy type {type(base_strategy).__name__}."
                " Must be a sub-class of Strategy"
            )
        return dataclasses.replace(base_strategy, **kwargs)
