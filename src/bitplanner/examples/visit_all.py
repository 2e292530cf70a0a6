"""Visit All Locations.

One robot starts at ``start`` and must visit every other location. Moving
between any two locations is allowed, so the only question is the order; a
greedy search with the fast-forward heuristic walks straight through the
locations without backtracking.
"""

from bitplanner.core import Fluent as F
from bitplanner.encoding import CompiledProblem, compile_problem
from bitplanner import operators


def build_problem(num_locations: int = 4) -> CompiledProblem:
    locations = [f"loc{i}" for i in range(1, num_locations + 1)]
    objects_by_type = {
        "robot": ["robot1"],
        "location": ["start"] + locations,
    }
    actions = operators.construct_move_visited_operator().instantiate(objects_by_type)

    initial_fluents = {F("at robot1 start"), F("visited start")}
    goal_fluents = {F(f"visited {loc}") for loc in locations}
    return compile_problem(actions, initial_fluents, goal_fluents)
