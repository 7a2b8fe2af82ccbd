"""Define the base serialising actor."""

from __future__ import annotations

import abc
import dataclasses
import enum
import logging
from typing import Generic, TypeVar

from graph_explorer.channels import Channel, ChannelClosed

logger = logging.getLogger(__name__)

M = TypeVar("M")


class ActorState(enum.Enum):
    """Lifecycle of an actor."""

    RUNNING = "running"
    """Messages are handled normally."""

    DRAINING = "draining"
    """Shutdown was received; remaining messages are handled as no-ops."""

    STOPPED = "stopped"
    """The mailbox is drained and the actor task has returned."""


@dataclasses.dataclass(frozen=True)
class Shutdown:
    """Ask an actor to stop. Sending it more than once is harmless."""


class Actor(abc.ABC, Generic[M]):
    """
    A task which owns a piece of state and exposes it only through messages.

    Messages are received one at a time from an unbuffered mailbox, so the
    state needs no locking. Start the actor by running `run` as a task and
    stop it with `shutdown`.

    Parameters
    ----------
    name :
        Name of the actor, used for its mailbox and in log messages.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self.mailbox: Channel[M | Shutdown] = Channel(name)
        self.state = ActorState.RUNNING

    @property
    def draining(self) -> bool:
        """Whether a shutdown has been received."""
        return self.state is not ActorState.RUNNING

    async def run(self) -> None:
        """Handle messages until the actor is shut down and drained."""
        logger.debug("%s actor running", self.name)
        async for message in self.mailbox:
            if isinstance(message, Shutdown):
                if self.state is ActorState.RUNNING:
                    logger.debug("%s actor draining", self.name)
                    self.state = ActorState.DRAINING
                    self.mailbox.close()
                continue
            await self.handle(message)
        self.state = ActorState.STOPPED
        logger.debug("%s actor stopped", self.name)

    async def shutdown(self) -> None:
        """Ask the actor to stop. Does nothing if it is already stopping."""
        try:
            await self.mailbox.send(Shutdown())
        except ChannelClosed:
            pass

    async def _request(self, message: M) -> bool:
        """Deliver `message`, returning false if the mailbox is closed."""
        try:
            await self.mailbox.send(message)
        except ChannelClosed:
            return False
        return True

    @abc.abstractmethod
    async def handle(self, message: M) -> None:
        """
        Handle a single message.

        Implementations check `draining` to discard messages which arrive
        after a shutdown.
        """
        ...
