"""Delete-relaxation heuristics over compiled problems.

All estimators ignore negative preconditions, delete effects and negative
goals, and only look at the first effect record of each operator. Relaxed
proposition costs are computed by a vectorised fixpoint over the operator
table (operators x propositions boolean matrices).
"""

from enum import Enum
from typing import Callable, Dict, Tuple
import math

import numpy as np

from bitplanner.encoding import BitExpression, BitState, CompiledProblem


class HeuristicType(Enum):
    MAX = "max"
    SUM = "sum"
    FAST_FORWARD = "ff"

    def __str__(self) -> str:
        return self.value


class RelaxationHeuristic:
    """Base class for the relaxation heuristics.

    Subclasses combine the relaxed proposition costs into a single estimate
    by implementing ``_combine``.
    """

    aggregate = "sum"

    def __init__(self, problem: CompiledProblem):
        num_ops = len(problem.operators)
        num_props = problem.proposition_count
        self._pre = np.zeros((num_ops, num_props), dtype=bool)
        self._add = np.zeros((num_ops, num_props), dtype=bool)
        self._cost = np.zeros(num_ops, dtype=float)
        for i, op in enumerate(problem.operators):
            self._pre[i] = op.precondition.positive
            self._add[i] = op.cond_effects[0].effects.positive
            self._cost[i] = op.cost

    def _relaxed_costs(self, state: BitState) -> Tuple[np.ndarray, np.ndarray]:
        """Return (proposition costs, operator costs) at the relaxed fixpoint."""
        prop_cost = np.where(state.bits, 0.0, math.inf)
        op_cost = np.full(len(self._cost), math.inf)
        if not len(self._cost):
            return prop_cost, op_cost

        while True:
            pre_costs = np.where(self._pre, prop_cost, 0.0)
            if self.aggregate == "max":
                op_cost = pre_costs.max(axis=1, initial=0.0) + self._cost
            else:
                op_cost = pre_costs.sum(axis=1) + self._cost
            reached = np.where(self._add, op_cost[:, None], math.inf).min(axis=0, initial=math.inf)
            updated = np.minimum(prop_cost, reached)
            if np.array_equal(updated, prop_cost):
                return prop_cost, op_cost
            prop_cost = updated

    def estimate(self, state: BitState, goal: BitExpression) -> float:
        goal_props = np.flatnonzero(goal.positive & ~state.bits)
        if not len(goal_props):
            return 0.0
        prop_cost, op_cost = self._relaxed_costs(state)
        goal_costs = prop_cost[goal_props]
        if np.isinf(goal_costs).any():
            return math.inf
        return self._combine(state, goal_props, prop_cost, op_cost)

    def _combine(self, state: BitState, goal_props: np.ndarray,
                 prop_cost: np.ndarray, op_cost: np.ndarray) -> float:
        raise NotImplementedError()

    def __call__(self, state: BitState, goal: BitExpression) -> float:
        return self.estimate(state, goal)


class MaxHeuristic(RelaxationHeuristic):
    """h_max: the most expensive goal proposition."""

    aggregate = "max"

    def _combine(self, state, goal_props, prop_cost, op_cost):
        return float(prop_cost[goal_props].max())


class SumHeuristic(RelaxationHeuristic):
    """h_add: goal propositions are assumed independent."""

    aggregate = "sum"

    def _combine(self, state, goal_props, prop_cost, op_cost):
        return float(prop_cost[goal_props].sum())


class FastForwardHeuristic(RelaxationHeuristic):
    """Cost of a relaxed plan built from h_add best supporters."""

    aggregate = "sum"

    def _combine(self, state, goal_props, prop_cost, op_cost):
        supporter = np.where(self._add, op_cost[:, None], math.inf).argmin(axis=0)

        needed = list(goal_props.tolist())
        visited = set()
        used_actions = set()
        total_cost = 0.0
        while needed:
            prop = needed.pop()
            if prop in visited or state.bits[prop]:
                continue
            visited.add(prop)
            op = int(supporter[prop])
            if op not in used_actions:
                used_actions.add(op)
                total_cost += self._cost[op]
                needed.extend(np.flatnonzero(self._pre[op] & ~state.bits).tolist())
        return float(total_cost)


Heuristic = Callable[[BitState, BitExpression], float]

HEURISTICS: Dict[HeuristicType, Callable[[CompiledProblem], RelaxationHeuristic]] = {
    HeuristicType.MAX: MaxHeuristic,
    HeuristicType.SUM: SumHeuristic,
    HeuristicType.FAST_FORWARD: FastForwardHeuristic,
}


def create_heuristic(kind: HeuristicType, problem: CompiledProblem) -> RelaxationHeuristic:
    try:
        factory = HEURISTICS[kind]
    except KeyError:
        raise ValueError(f"Unknown heuristic type: {kind}") from None
    return factory(problem)
