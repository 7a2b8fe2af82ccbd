"""
Breadth-first exploration of graphs described in the DOT language.

The main methods are [`explore`][graph_explorer.explore] and
[`aexplore`][graph_explorer.aexplore] which provide synchronous and
asynchronous explorations, using either the
[Sequential][graph_explorer.strategies.Sequential] or the
[Parallel][graph_explorer.strategies.Parallel] strategy.
"""

from .exploration import aexplore, explore
from .graph import Graph
from .types import MAX_DISTANCE, NodeData

__all__ = [
    "Graph",
    "MAX_DISTANCE",
    "NodeData",
    "aexplore",
    "explore",
]
