"""Shared configuration and entry points for state-space search strategies.

A strategy only has to implement ``search(problem)``; configuration, the
``solve_node``/``solve_plan`` entry points and plan extraction are shared
through :class:`AbstractStateSpaceStrategy`.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Callable, Optional, Protocol, runtime_checkable

from bitplanner.encoding import CompiledProblem
from bitplanner.heuristic import HEURISTICS, HeuristicType, RelaxationHeuristic
from bitplanner.plan import SequentialPlan
from bitplanner.search.node import SearchNode

DEFAULT_HEURISTIC = HeuristicType.FAST_FORWARD
DEFAULT_WEIGHT = 1.0
DEFAULT_TIMEOUT = 300


class InvalidConfigurationError(ValueError):
    pass


class SearchOutcome(Enum):
    SOLVED = "solved"
    DEAD_END = "dead end"
    TIMEOUT = "timeout"


@runtime_checkable
class StateSpaceStrategy(Protocol):
    def configure(self, heuristic: HeuristicType, weight: float, timeout: float) -> None: ...

    def search(self, problem: CompiledProblem) -> Optional[SearchNode]: ...

    def extract_plan(self, node: Optional[SearchNode],
                     problem: CompiledProblem) -> Optional[SequentialPlan]: ...


class AbstractStateSpaceStrategy(ABC):
    def __init__(
        self,
        heuristic: HeuristicType = DEFAULT_HEURISTIC,
        weight: float = DEFAULT_WEIGHT,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.searching_time = 0
        self.root_node: Optional[SearchNode] = None
        self.outcome: Optional[SearchOutcome] = None
        self.expanded_nodes = 0
        self.generated_nodes = 0
        self.configure(heuristic, weight, timeout)

    def configure(self, heuristic: HeuristicType, weight: float, timeout: float) -> None:
        """Set the heuristic, its weight and the timeout (seconds).

        Weight and timeout are not range-checked; a timeout of zero or less
        makes the next search expire before expanding anything.
        """
        if heuristic is None:
            raise InvalidConfigurationError("The heuristic type cannot be None.")
        try:
            self._heuristic_factory: Callable[[CompiledProblem], RelaxationHeuristic] = HEURISTICS[heuristic]
        except (KeyError, TypeError):
            raise InvalidConfigurationError(f"Unknown heuristic type: {heuristic!r}") from None
        self.heuristic = heuristic
        self.weight = weight
        self.timeout = timeout

    def create_heuristic(self, problem: CompiledProblem) -> RelaxationHeuristic:
        return self._heuristic_factory(problem)

    @abstractmethod
    def search(self, problem: CompiledProblem) -> Optional[SearchNode]:
        """Search for a goal node; return ``None`` when no plan is found."""

    def solve_node(self, problem: CompiledProblem) -> Optional[SearchNode]:
        if problem is None:
            raise ValueError("The problem to solve cannot be None.")
        return self.search(problem)

    def solve_plan(self, problem: CompiledProblem) -> Optional[SequentialPlan]:
        if problem is None:
            raise ValueError("The problem to solve cannot be None.")
        node = self.solve_node(problem)
        if node is None:
            return None
        return self.extract_plan(node, problem)

    def extract_plan(self, node: Optional[SearchNode],
                     problem: CompiledProblem) -> Optional[SequentialPlan]:
        """Walk from ``node`` back to the root and return the actions in order."""
        if node is None:
            return None
        plan = SequentialPlan()
        n = node
        while n.parent is not None:
            plan.add(0, problem.operators[n.operator])
            n = n.parent
        return plan
