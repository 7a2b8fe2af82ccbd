"""
Message-passing primitives used by the parallel exploration.

A [Channel][graph_explorer.channels.Channel] is an unbuffered, typed channel
between asyncio tasks: a send completes only once a receiver has taken the
item. A [LevelBarrier][graph_explorer.channels.LevelBarrier] counts down the
vertices of one BFS level.
"""

from __future__ import annotations

import asyncio
from collections.abc import AsyncIterator
from typing import Generic, TypeVar

T = TypeVar("T")


class ChannelClosed(Exception):
    """Raised when sending on, or receiving from, a closed channel."""


class _Closed:
    """Marker placed on the queue when the channel is closed."""


_CLOSED = _Closed()


class Channel(Generic[T]):
    """
    An unbuffered channel for many senders and many receivers.

    Every `send` is a rendezvous: it suspends until some receiver has taken
    the item. Items are delivered in the order they were sent. Closing the
    channel lets receivers drain the items already sent and then raises
    [ChannelClosed][graph_explorer.channels.ChannelClosed] in every receiver.

    Parameters
    ----------
    name :
        Name used when describing the channel.
    """

    def __init__(self, name: str = "channel") -> None:
        self.name = name
        self._queue: asyncio.Queue[tuple[T, asyncio.Future[None]] | _Closed] = (
            asyncio.Queue()
        )
        self._closed = False

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"Channel({self.name!r}, {state})"

    @property
    def closed(self) -> bool:
        """Whether the channel has been closed."""
        return self._closed

    async def send(self, item: T) -> None:
        """
        Send an item, waiting until a receiver takes it.

        Parameters
        ----------
        item :
            The item to deliver.

        Raises
        ------
        ChannelClosed
            If the channel has been closed.
        """
        if self._closed:
            raise ChannelClosed(f"send on closed {self!r}")
        delivered: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        self._queue.put_nowait((item, delivered))
        await delivered

    async def receive(self) -> T:
        """
        Receive the next item, waiting until one is sent.

        Returns
        -------
        :
            The received item.

        Raises
        ------
        ChannelClosed
            If the channel is closed and no items remain.
        """
        entry = await self._queue.get()
        if isinstance(entry, _Closed):
            # Leave the marker for the other receivers.
            self._queue.put_nowait(entry)
            raise ChannelClosed(f"receive on closed {self!r}")
        item, delivered = entry
        if not delivered.done():
            delivered.set_result(None)
        return item

    def close(self) -> None:
        """Close the channel. Closing an already closed channel does nothing."""
        if self._closed:
            return
        self._closed = True
        self._queue.put_nowait(_CLOSED)

    def __aiter__(self) -> AsyncIterator[T]:
        return self._iterate()

    async def _iterate(self) -> AsyncIterator[T]:
        while True:
            try:
                yield await self.receive()
            except ChannelClosed:
                return


class LevelBarrier:
    """
    Counts down the vertices of one BFS level.

    The coordinator calls `reset` with the size of the level before
    dispatching it, every worker calls `signal` once per finished vertex,
    and the coordinator awaits `wait` before taking the next level.
    Signalling never suspends.
    """

    def __init__(self) -> None:
        self._remaining = 0
        self._released = asyncio.Event()
        self._released.set()

    @property
    def remaining(self) -> int:
        """The number of signals still expected for the current level."""
        return self._remaining

    def reset(self, count: int) -> None:
        """Expect `count` signals before releasing waiters."""
        if count < 0:
            raise ValueError(f"Barrier count must be non-negative, got {count}")
        self._remaining = count
        if count == 0:
            self._released.set()
        else:
            self._released.clear()

    def signal(self) -> None:
        """Record that one vertex of the current level is complete."""
        if self._remaining <= 0:
            raise RuntimeError("Barrier signalled more times than expected")
        self._remaining -= 1
        if self._remaining == 0:
            self._released.set()

    async def wait(self) -> None:
        """Wait until every vertex of the current level has been signalled."""
        await self._released.wait()
