"""Provide the level-synchronous parallel breadth-first strategy."""

from __future__ import annotations

import asyncio
import dataclasses
import logging

from typing_extensions import override

from graph_explorer.actors import DistanceActor, FrontierActor
from graph_explorer.channels import Channel, LevelBarrier
from graph_explorer.errors import InvalidWorkerCount
from graph_explorer.graph import Graph
from graph_explorer.sink import NodeSink
from graph_explorer.strategies.base import Strategy
from graph_explorer.types import NodeData

logger = logging.getLogger(__name__)


@dataclasses.dataclass
class Parallel(Strategy):
    """
    Breadth-first search expanding each level with a pool of workers.

    The frontier and the distance table are owned by actors, so workers
    share no mutable state. The coordinator takes one level at a time from
    the frontier, hands its vertices to the workers and waits on a barrier
    until all of them are expanded before taking the next level.

    Parameters
    ----------
    n_workers :
        Number of concurrent workers. Must be at least 1.

    Raises
    ------
    InvalidWorkerCount
        If `n_workers` is lower than 1.
    """

    n_workers: int = 1

    def __post_init__(self) -> None:
        self.validate()

    @property
    @override
    def name(self) -> str:
        suffix = "worker" if self.n_workers == 1 else "workers"
        return f"Parallel ({self.n_workers} {suffix})"

    @override
    def validate(self) -> None:
        if self.n_workers < 1:
            raise InvalidWorkerCount(self.n_workers)

    @override
    async def _explore(self, graph: Graph, starts: list[str], sink: NodeSink) -> None:
        exploration = ParallelExploration(
            graph, starts=starts, sink=sink, n_workers=self.n_workers
        )
        await exploration.run()


class ParallelExploration:
    """
    Handles a single run of the parallel breadth-first search.

    The run owns two actors, the frontier and the distance table, and
    `n_workers` worker tasks. Workers talk to the actors through messages
    only. Each worker queries distances on a reply channel of its own, so
    answers never reach another worker.

    The distance actor is kept after the run so its history of accepted
    updates can be inspected.

    This class should not be reused between explorations.
    """

    def __init__(
        self,
        graph: Graph,
        *,
        starts: list[str],
        sink: NodeSink,
        n_workers: int,
    ) -> None:
        self.graph = graph
        self.sink = sink
        self.n_workers = n_workers

        self.frontier = FrontierActor(starts)
        self.distances = DistanceActor(starts)
        self.jobs: Channel[str] = Channel("jobs")
        self.barrier = LevelBarrier()
        self.levels = 0

        self._used = False
        self._workers: list[asyncio.Task[None]] = []

    def _check_first_use(self):
        assert not self._used, "Explorations cannot be re-used."
        self._used = True

    async def run(self) -> None:
        """
        Run the exploration until the frontier is exhausted.

        Workers are stopped before the actors, and the sink is closed last.
        If a worker fails, every task of the run is cancelled and the error
        is raised.
        """
        self._check_first_use()

        actors = [
            asyncio.create_task(self.frontier.run(), name="frontier"),
            asyncio.create_task(self.distances.run(), name="distances"),
        ]
        self._workers = [
            asyncio.create_task(self._work(worker_id), name=f"worker-{worker_id}")
            for worker_id in range(self.n_workers)
        ]

        try:
            await self._coordinate()
            self.jobs.close()
            await asyncio.gather(*self._workers)
            await self.frontier.shutdown()
            await self.distances.shutdown()
            await asyncio.gather(*actors)
        except BaseException:
            tasks = [*self._workers, *actors]
            for task in tasks:
                task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)
            raise

        logger.debug("Explored %d levels", self.levels)
        await self.sink.close()

    async def _coordinate(self) -> None:
        reply: Channel[list[str]] = Channel("coordinator-reply")
        while True:
            level = await self.frontier.take_level(reply)
            if not level:
                return

            # The same vertex may be appended by several workers.
            unique = list(dict.fromkeys(level))
            logger.debug(
                "Level %d: %d vertices (%d duplicates dropped)",
                self.levels,
                len(unique),
                len(level) - len(unique),
            )
            await self._expand_level(unique)
            self.levels += 1

    async def _expand_level(self, level: list[str]) -> None:
        """Dispatch `level` to the workers and wait until all are expanded."""
        dispatch = asyncio.create_task(self._dispatch(level))
        try:
            done, _ = await asyncio.wait(
                {dispatch, *self._workers}, return_when=asyncio.FIRST_COMPLETED
            )
            if dispatch in done:
                dispatch.result()
                return

            # A worker only returns early when it fails.
            for task in done:
                task.result()
            raise RuntimeError("Worker exited before the level was expanded")
        finally:
            if not dispatch.done():
                dispatch.cancel()
                await asyncio.gather(dispatch, return_exceptions=True)

    async def _dispatch(self, level: list[str]) -> None:
        self.barrier.reset(len(level))
        for name in level:
            await self.jobs.send(name)
        await self.barrier.wait()

    async def _work(self, worker_id: int) -> None:
        """Expand vertices received on the jobs channel until it is closed."""
        reply: Channel[int] = Channel(f"worker-{worker_id}-reply")
        logger.debug("Worker %d started", worker_id)

        async for name in self.jobs:
            distance = await self.distances.query(name, reply)
            proposed = distance + 1

            batch: list[str] = []
            for neighbour in self.graph.neighbours(name):
                if proposed < await self.distances.query(neighbour, reply):
                    await self.distances.update(neighbour, proposed)
                    batch.append(neighbour)

            await self.frontier.append(batch)
            await self.sink.send(NodeData(name=name, distance=distance))
            self.barrier.signal()

        logger.debug("Worker %d exiting", worker_id)
