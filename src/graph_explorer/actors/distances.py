"""The actor owning the table of recorded distances."""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Iterable

from typing_extensions import override

from graph_explorer.actors.base import Actor
from graph_explorer.channels import Channel
from graph_explorer.types import MAX_DISTANCE, NodeData

logger = logging.getLogger(__name__)


@dataclasses.dataclass(frozen=True)
class Query:
    """Ask for the distance of `name`, answered on `reply`."""

    name: str
    reply: Channel[int]


@dataclasses.dataclass(frozen=True)
class Update:
    """Record `distance` for `name` if it is shorter than the current one."""

    name: str
    distance: int


@dataclasses.dataclass(frozen=True)
class Snapshot:
    """Ask for a copy of the whole table."""

    reply: Channel[dict[str, int]]


DistanceMessage = Query | Update | Snapshot


class DistanceActor(Actor[DistanceMessage]):
    """
    Serialises access to the vertex to distance mapping.

    Vertices missing from the table have not been discovered and are
    reported at `MAX_DISTANCE`. A recorded distance only ever decreases:
    updates which are not strictly shorter are refused and counted in
    `rejected`. Every accepted update is appended to `history`.

    Parameters
    ----------
    starts :
        The starting vertices, recorded at distance 0.
    """

    def __init__(self, starts: Iterable[str]) -> None:
        super().__init__("distances")
        self._distances: dict[str, int] = {name: 0 for name in starts}
        self.history: list[NodeData] = [
            NodeData(name=name, distance=0) for name in self._distances
        ]
        self.rejected = 0

    @override
    async def handle(self, message: DistanceMessage) -> None:
        if isinstance(message, Query):
            await message.reply.send(self._distances.get(message.name, MAX_DISTANCE))
        elif isinstance(message, Update):
            self._update(message.name, message.distance)
        elif isinstance(message, Snapshot):
            await message.reply.send(dict(self._distances))
        else:
            raise TypeError(f"Unexpected distance message {message!r}")

    def _update(self, name: str, distance: int) -> None:
        if self.draining:
            return
        current = self._distances.get(name, MAX_DISTANCE)
        if distance >= current:
            self.rejected += 1
            logger.debug(
                "Refusing to record %s at %d, already at %d", name, distance, current
            )
            return
        self._distances[name] = distance
        self.history.append(NodeData(name=name, distance=distance))

    async def query(self, name: str, reply: Channel[int]) -> int:
        """
        Return the recorded distance of `name`.

        Parameters
        ----------
        name :
            The vertex to look up.
        reply :
            Channel owned by the caller on which the answer is delivered. It
            must not be shared with other concurrent callers.

        Returns
        -------
        :
            The distance, or `MAX_DISTANCE` if the vertex is undiscovered or
            the actor is shutting down.
        """
        if not await self._request(Query(name, reply)):
            return MAX_DISTANCE
        return await reply.receive()

    async def update(self, name: str, distance: int) -> None:
        """Record `distance` for `name` if it is shorter than the current one."""
        await self._request(Update(name, distance))

    async def snapshot(self, reply: Channel[dict[str, int]]) -> dict[str, int]:
        """Return a copy of the table, or an empty one if shutting down."""
        if not await self._request(Snapshot(reply)):
            return {}
        return await reply.receive()
