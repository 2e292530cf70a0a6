import logging
import math
import time
from typing import List, Optional

from bitplanner.encoding import CompiledProblem
from bitplanner.heuristic import Heuristic, HeuristicType
from bitplanner.search.node import SearchNode
from bitplanner.search.strategy import (
    DEFAULT_HEURISTIC,
    DEFAULT_TIMEOUT,
    DEFAULT_WEIGHT,
    AbstractStateSpaceStrategy,
    SearchOutcome,
)

logger = logging.getLogger(__name__)


class HillClimbing(AbstractStateSpaceStrategy):
    """Greedy local search that commits to one successor per round.

    Each round expands the single frontier node, keeps one successor and
    discards the rest. The successor is chosen against the best heuristic
    value seen over the whole search rather than within the round: the last
    successor (in operator-table order) whose value is strictly below that
    bound is kept, or the first successor when none is.

    There is no duplicate detection, so the search can cycle; it stops on a
    goal, a dead end (no applicable operator) or the timeout, which is
    checked once per round. A timeout of zero or less returns before the
    first expansion.
    """

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT,
        heuristic: HeuristicType = DEFAULT_HEURISTIC,
        weight: float = DEFAULT_WEIGHT,
    ):
        super().__init__(heuristic=heuristic, weight=weight, timeout=timeout)

    def search(self, problem: CompiledProblem) -> Optional[SearchNode]:
        heuristic = self.create_heuristic(problem)
        self.expanded_nodes = 0
        self.generated_nodes = 0
        begin = time.time()

        root = SearchNode(
            state=problem.init,
            heuristic=heuristic(problem.init, problem.goal),
        )
        self.root_node = root
        best_heuristic = math.inf

        current = root
        solution = None
        if root.satisfies(problem.goal):
            solution = root
            self.outcome = SearchOutcome.SOLVED

        while solution is None:
            if time.time() - begin >= self.timeout:
                self.outcome = SearchOutcome.TIMEOUT
                break

            successors = self.get_successors(current, problem, heuristic)
            self.expanded_nodes += 1
            self.generated_nodes += len(successors)
            if not successors:
                self.outcome = SearchOutcome.DEAD_END
                break

            successor = self.pop_best_node(successors, best_heuristic)
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("depth %d: picked %s (h=%g, bound=%g) out of %d successors",
                             successor.depth, problem.operators[successor.operator].name,
                             successor.heuristic, best_heuristic, len(successors))
            if successor.satisfies(problem.goal):
                solution = successor
                self.outcome = SearchOutcome.SOLVED
            else:
                current = successor
                if successor.heuristic <= best_heuristic:
                    best_heuristic = successor.heuristic

        self.searching_time = int((time.time() - begin) * 1000)
        logger.info("Hill climbing finished (%s) after %d ms, %d expanded / %d generated nodes",
                    self.outcome.value, self.searching_time,
                    self.expanded_nodes, self.generated_nodes)
        return solution

    @staticmethod
    def get_successors(parent: SearchNode, problem: CompiledProblem,
                       heuristic: Heuristic) -> List[SearchNode]:
        """Apply every applicable operator, in table order, to ``parent``."""
        successors = []
        for index, op in enumerate(problem.operators):
            if not op.is_applicable(parent.state):
                continue
            # Only the first effect record is applied.
            effects = op.cond_effects[0].effects
            next_state = parent.state.apply(effects)
            successors.append(SearchNode(
                state=next_state,
                parent=parent,
                operator=index,
                cost=parent.cost + op.cost,
                depth=parent.depth + 1,
                heuristic=heuristic(next_state, problem.goal),
            ))
        return successors

    @staticmethod
    def pop_best_node(nodes: List[SearchNode], best_heuristic: float) -> SearchNode:
        """Pick a successor against the search-wide bound ``best_heuristic``."""
        node = nodes[0]
        for candidate in nodes[1:]:
            if candidate.heuristic < best_heuristic:
                node = candidate
        return node
