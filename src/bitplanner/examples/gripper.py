"""Gripper.

A robot with a left and a right gripper must carry every ball from
``rooma`` to ``roomb``. Each gripper holds one ball at a time.
"""

from bitplanner.core import Fluent as F
from bitplanner.encoding import CompiledProblem, compile_problem
from bitplanner import operators


def build_problem(num_balls: int = 2) -> CompiledProblem:
    balls = [f"ball{i}" for i in range(1, num_balls + 1)]
    objects_by_type = {
        "room": ["rooma", "roomb"],
        "ball": balls,
        "gripper": ["left", "right"],
    }
    actions = (
        operators.construct_move_operator().instantiate(objects_by_type)
        + operators.construct_pick_operator().instantiate(objects_by_type)
        + operators.construct_drop_operator().instantiate(objects_by_type)
    )

    initial_fluents = {F("at-robby rooma"), F("free left"), F("free right")}
    initial_fluents |= {F(f"at {ball} rooma") for ball in balls}
    goal_fluents = {F(f"at {ball} roomb") for ball in balls}
    return compile_problem(actions, initial_fluents, goal_fluents)
