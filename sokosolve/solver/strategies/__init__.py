"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .astar import AStarStrategy
from .greedy import GreedyStrategy

__all__ = [
    "AStarStrategy",
    "GreedyStrategy",
]
