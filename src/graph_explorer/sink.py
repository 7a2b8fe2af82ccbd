"""The stream through which explorations report discovered vertices."""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator, Iterable

from graph_explorer.types import NodeData


class _Done:
    pass


_DONE = _Done()


class NodeSink:
    """
    Receives the records emitted by an exploration and its completion signal.

    Records and the completion signal travel over one FIFO queue, so a
    receiver always observes every record before completion. A sink serves a
    single exploration; `close` may only be called once.

    By default a single record is buffered, so workers are throttled by the
    receiver and one must consume the sink while the exploration runs.

    Parameters
    ----------
    maxsize :
        Number of records which may be buffered before senders suspend.
        Zero means unbounded.
    """

    def __init__(self, maxsize: int = 1) -> None:
        self._queue: asyncio.Queue[NodeData | _Done] = asyncio.Queue(maxsize)
        self._closed = False
        self.sent = 0

    @property
    def closed(self) -> bool:
        """Whether the completion signal has been sent."""
        return self._closed

    async def send(self, record: NodeData) -> None:
        """Emit a record, suspending while the buffer is full."""
        if self._closed:
            raise RuntimeError("Cannot send on a completed sink")
        self.sent += 1
        await self._queue.put(record)

    async def close(self) -> None:
        """Signal that the exploration is complete."""
        if self._closed:
            raise RuntimeError("Sink completion was already signalled")
        self._closed = True
        await self._queue.put(_DONE)

    def __aiter__(self) -> AsyncIterator[NodeData]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[NodeData]:
        while True:
            item = await self._queue.get()
            if isinstance(item, _Done):
                return
            yield item

    async def collect(self) -> list[NodeData]:
        """Receive every record until completion, in arrival order."""
        return [record async for record in self]


async def gather_results(sink: NodeSink) -> list[NodeData]:
    """
    Gather information about the explored vertices until completion.

    When a vertex is reported more than once the last record wins.

    Returns
    -------
    :
        The records listed by ascending distance, then ascending name.
    """
    distances: dict[str, int] = {}
    async for record in sink:
        distances[record.name] = record.distance
    return sort_by_distance(
        NodeData(name=name, distance=distance) for name, distance in distances.items()
    )


def sort_by_distance(records: Iterable[NodeData]) -> list[NodeData]:
    """List records by ascending distance, then ascending name."""
    return sorted(records, key=lambda r: (r.distance, r.name))
