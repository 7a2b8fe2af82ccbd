"""Implements the entry points for exploring a graph."""

import asyncio
import logging
from collections.abc import Sequence
from typing import Any

from graph_explorer.graph import Graph
from graph_explorer.sink import NodeSink
from graph_explorer.strategies import Strategy
from graph_explorer.types import NodeData

logger = logging.getLogger(__name__)


def explore(
    graph: Graph,
    *,
    starts: Sequence[str],
    strategy: Strategy,
    **kwargs: Any,
) -> list[NodeData]:
    """
    Compute the distance of every vertex reachable from `starts`.

    Runs the exploration on a new event loop. Use
    [aexplore][graph_explorer.aexplore] from asynchronous code.

    Parameters
    ----------
    graph :
        The graph to explore.
    starts :
        Names of the starting vertices.
    strategy :
        How the exploration is scheduled.
    kwargs :
        Settings overriding fields of `strategy` for this call only.

    Returns
    -------
    :
        One record per reachable vertex, in the order they were emitted.
    """
    return asyncio.run(aexplore(graph, starts=starts, strategy=strategy, **kwargs))


async def aexplore(
    graph: Graph,
    *,
    starts: Sequence[str],
    strategy: Strategy,
    **kwargs: Any,
) -> list[NodeData]:
    """
    Asynchronously compute the distance of every vertex reachable from `starts`.

    Parameters
    ----------
    graph :
        The graph to explore.
    starts :
        Names of the starting vertices.
    strategy :
        How the exploration is scheduled.
    kwargs :
        Settings overriding fields of `strategy` for this call only, see
        [Strategy.build][graph_explorer.strategies.Strategy.build].

    Returns
    -------
    :
        One record per reachable vertex, in the order they were emitted.

    Raises
    ------
    ExplorationError
        If the starting vertices or the strategy are invalid. No task is
        started in that case.
    """
    strategy = Strategy.build(strategy, **kwargs)
    strategy.check(graph, starts)

    logger.info(
        "%s exploration of %d nodes from %d starting nodes",
        strategy.name,
        len(graph),
        len(starts),
    )
    sink = NodeSink()
    collector = asyncio.create_task(sink.collect())
    try:
        await strategy.run(graph, starts, sink)
    except BaseException:
        collector.cancel()
        raise
    results = await collector
    logger.info("%s exploration reached %d nodes", strategy.name, len(results))
    return results
