"""The actor owning the queue of vertices awaiting expansion."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable, Sequence

from typing_extensions import override

from graph_explorer.actors.base import Actor
from graph_explorer.channels import Channel

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class TakeLevel:
    """Request the whole pending queue, which is then emptied."""

    reply: Channel[list[str]]


@dataclasses.dataclass(frozen=True)
class Append:
    """Extend the pending queue with a batch of vertex names."""

    batch: tuple[str, ...]


FrontierMessage = TakeLevel | Append


class FrontierActor(Actor[FrontierMessage]):
    """
    Serialises access to the frontier.

    Everything appended between two `take_level` requests forms the next
    level. A vertex may be appended more than once; the distance table
    removes the duplicates when they are expanded. Once draining, appends
    are discarded and levels are empty.

    Parameters
    ----------
    starts :
        The vertices forming the first level.
    """

    def __init__(self, starts: Iterable[str]) -> None:
        super().__init__("frontier")
        self._pending: list[str] = list(starts)

    @override
    async def handle(self, message: FrontierMessage) -> None:
        if isinstance(message, TakeLevel):
            if self.draining:
                level: list[str] = []
            else:
                level, self._pending = self._pending, []
            await message.reply.send(level)
        elif isinstance(message, Append):
            if self.draining:
                logger.debug("Discarding %d appended nodes", len(message.batch))
                return
            self._pending.extend(message.batch)
        else:
            raise TypeError(f"Unexpected frontier message {message!r}")

    async def take_level(self, reply: Channel[list[str]]) -> list[str]:
        """
        Take the current level, leaving the frontier empty.

        Parameters
        ----------
        reply :
            Channel owned by the caller on which the level is delivered.

        Returns
        -------
        :
            The vertices of the level. Empty once the search is over or the
            actor is shutting down. The caller owns the returned list.
        """
        if not await self._request(TakeLevel(reply)):
            return []
        return await reply.receive()

    async def append(self, batch: Sequence[str]) -> None:
        """Add `batch` to the next level."""
        await self._request(Append(tuple(batch)))
