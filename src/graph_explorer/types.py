"""Defines the records emitted during an exploration."""

from __future__ import annotations

import sys
from dataclasses import dataclass

MAX_DISTANCE: int = sys.maxsize
"""Distance reported for vertices which have not been discovered yet."""


@dataclass(frozen=True, order=True, kw_only=True)
class NodeData:
    """
    The name of a vertex and its distance from the starting frontier.

    Records order by distance first, then by name, which is the order used
    when listing the results of an exploration. Fields are keyword-only.

    Parameters
    ----------
    distance :
        The number of edges on a shortest path from any starting vertex.
    name :
        The name of the vertex.
    """

    distance: int
    name: str

    def as_tuple(self) -> tuple[str, int]:
        """Return the record as a `(name, distance)` pair."""
        return (self.name, self.distance)
