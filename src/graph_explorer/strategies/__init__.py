"""Strategies determine how the breadth-first search is scheduled."""

from .base import Strategy
from .parallel import Parallel, ParallelExploration
from .sequential import Sequential

__all__ = [
    "Parallel",
    "ParallelExploration",
    "Sequential",
    "Strategy",
]
