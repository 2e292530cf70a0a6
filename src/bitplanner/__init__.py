"""Greedy state-space search over bit-encoded planning problems."""

from bitplanner.core import Action, Effect, Fluent, Operator
from bitplanner.encoding import BitState, CompiledProblem, compile_problem
from bitplanner.heuristic import HeuristicType
from bitplanner.plan import SequentialPlan
from bitplanner.search import HillClimbing, SearchNode

__all__ = [
    "Action",
    "Effect",
    "Fluent",
    "Operator",
    "BitState",
    "CompiledProblem",
    "compile_problem",
    "HeuristicType",
    "SequentialPlan",
    "HillClimbing",
    "SearchNode",
]
