from __future__ import annotations

import abc
import asyncio
from collections.abc import Sequence
from typing import Any

import pytest
from graph_explorer import Graph, NodeData, aexplore, explore
from graph_explorer.strategies import Parallel, Sequential, Strategy


class SyncOrAsync(abc.ABC):
    @abc.abstractmethod
    async def explore(
        self, graph: Graph, starts: Sequence[str], strategy: Strategy, **kwargs: Any
    ) -> list[NodeData]: ...


class SyncExploration(SyncOrAsync):
    async def explore(self, graph, starts, strategy, **kwargs):
        # `explore` starts its own event loop, so run it outside of ours.
        return await asyncio.to_thread(
            explore, graph, starts=starts, strategy=strategy, **kwargs
        )


class AsyncExploration(SyncOrAsync):
    async def explore(self, graph, starts, strategy, **kwargs):
        return await aexplore(graph, starts=starts, strategy=strategy, **kwargs)


@pytest.fixture(scope="function", params=["sync", "async"])
def sync_or_async(request: pytest.FixtureRequest) -> SyncOrAsync:
    if request.param == "sync":
        return SyncExploration()
    elif request.param == "async":
        return AsyncExploration()
    else:
        raise ValueError(f"Unexpected value '{request.param}'")


@pytest.fixture(
    scope="function",
    params=["sequential", "parallel-1", "parallel-2", "parallel-8"],
)
def strategy(request: pytest.FixtureRequest) -> Strategy:
    if request.param == "sequential":
        return Sequential()
    elif request.param.startswith("parallel-"):
        return Parallel(n_workers=int(request.param.removeprefix("parallel-")))
    else:
        raise ValueError(f"Unexpected value '{request.param}'")
