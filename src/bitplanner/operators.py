"""Operator constructors for the bundled example domains.

- Movement: construct_move_operator, construct_move_visited_operator
- Manipulation: construct_pick_operator, construct_drop_operator

All operators are deterministic with a single effect record.
"""

from bitplanner.core import Effect, Fluent, Operator

F = Fluent


# =============================================================================
# Move Operators
# =============================================================================


def construct_move_operator(cost: float = 1.0) -> Operator:
    """Construct a move operator between two rooms.

    Args:
        cost: Cost charged for every grounded move.

    Returns:
        Operator moving the robot from ``?from`` to ``?to``.
    """
    return Operator(
        name="move",
        parameters=[("?from", "room"), ("?to", "room")],
        preconditions=[F("at-robby ?from")],
        effects=[Effect(resulting_fluents={F("at-robby ?to"), F("not at-robby ?from")})],
        cost=cost,
    )


def construct_move_visited_operator(cost: float = 1.0) -> Operator:
    """Construct a move operator that also marks the destination as visited."""
    return Operator(
        name="move",
        parameters=[("?r", "robot"), ("?from", "location"), ("?to", "location")],
        preconditions=[F("at ?r ?from")],
        effects=[
            Effect(resulting_fluents={F("not at ?r ?from"), F("at ?r ?to"), F("visited ?to")}),
        ],
        cost=cost,
    )


# =============================================================================
# Pick and Drop Operators
# =============================================================================


def construct_pick_operator(cost: float = 1.0) -> Operator:
    return Operator(
        name="pick",
        parameters=[("?obj", "ball"), ("?room", "room"), ("?g", "gripper")],
        preconditions=[F("at ?obj ?room"), F("at-robby ?room"), F("free ?g")],
        effects=[
            Effect(resulting_fluents={F("carry ?obj ?g"), F("not at ?obj ?room"), F("not free ?g")}),
        ],
        cost=cost,
    )


def construct_drop_operator(cost: float = 1.0) -> Operator:
    return Operator(
        name="drop",
        parameters=[("?obj", "ball"), ("?room", "room"), ("?g", "gripper")],
        preconditions=[F("carry ?obj ?g"), F("at-robby ?room")],
        effects=[
            Effect(resulting_fluents={F("at ?obj ?room"), F("free ?g"), F("not carry ?obj ?g")}),
        ],
        cost=cost,
    )
