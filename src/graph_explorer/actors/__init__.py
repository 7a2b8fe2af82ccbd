"""Actors own the shared state of a parallel exploration."""

from .base import Actor, ActorState, Shutdown
from .distances import DistanceActor
from .frontier import FrontierActor

__all__ = [
    "Actor",
    "ActorState",
    "DistanceActor",
    "FrontierActor",
    "Shutdown",
]
