"""Search strategies over compiled problems.

Usage:
    from bitplanner.search import HillClimbing

    strategy = HillClimbing(timeout=10, heuristic=HeuristicType.FAST_FORWARD)
    plan = strategy.solve_plan(problem)
"""

from .node import SearchNode
from .strategy import (
    DEFAULT_HEURISTIC,
    DEFAULT_TIMEOUT,
    DEFAULT_WEIGHT,
    AbstractStateSpaceStrategy,
    InvalidConfigurationError,
    SearchOutcome,
    StateSpaceStrategy,
)
from .hill_climbing import HillClimbing

__all__ = [
    "SearchNode",
    "DEFAULT_HEURISTIC",
    "DEFAULT_TIMEOUT",
    "DEFAULT_WEIGHT",
    "AbstractStateSpaceStrategy",
    "InvalidConfigurationError",
    "SearchOutcome",
    "StateSpaceStrategy",
    "HillClimbing",
]
