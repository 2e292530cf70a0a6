"""Bit-vector encoding of grounded planning problems.

Every positive fluent mentioned by a problem is assigned a proposition index.
States, preconditions, goals and effect sets then become fixed-length numpy
boolean vectors over that index, which keeps applicability tests and state
transitions down to a handful of vectorised operations.
"""

from typing import Dict, Iterable, List, Sequence, Set

import numpy as np

from bitplanner.core import Action, Fluent


def _frozen(bits: np.ndarray) -> np.ndarray:
    bits = np.asarray(bits, dtype=bool)
    bits.flags.writeable = False
    return bits


class BitState:
    """An immutable set of true propositions.

    The backing array is never written after construction; ``union`` and
    ``difference`` always return a new state.
    """

    __slots__ = ('bits', '_hash')

    def __init__(self, bits: Iterable[bool]):
        self.bits = _frozen(np.array(bits, dtype=bool, copy=True))
        self._hash = hash(self.bits.tobytes())

    @classmethod
    def empty(cls, size: int) -> 'BitState':
        return cls(np.zeros(size, dtype=bool))

    @classmethod
    def from_indices(cls, size: int, indices: Iterable[int]) -> 'BitState':
        bits = np.zeros(size, dtype=bool)
        bits[list(indices)] = True
        return cls(bits)

    def union(self, other: np.ndarray) -> 'BitState':
        return BitState(self.bits | other)

    def difference(self, other: np.ndarray) -> 'BitState':
        return BitState(self.bits & ~other)

    def satisfies(self, expression: 'BitExpression') -> bool:
        """True if every positive proposition is set and no negative one is."""
        return bool(
            np.all(self.bits[expression.positive])
            and not np.any(self.bits[expression.negative])
        )

    def apply(self, effects: 'BitExpression') -> 'BitState':
        return self.union(effects.positive).difference(effects.negative)

    def indices(self) -> List[int]:
        return np.flatnonzero(self.bits).tolist()

    def __len__(self) -> int:
        return len(self.bits)

    def __contains__(self, index: int) -> bool:
        return bool(self.bits[index])

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BitState):
            return NotImplemented
        return bool(np.array_equal(self.bits, other.bits))

    def __hash__(self) -> int:
        return self._hash

    def __repr__(self) -> str:
        return f"BitState<{self.indices()}>"


class BitExpression:
    """A conjunction of positive and negative propositions."""

    __slots__ = ('positive', 'negative')

    def __init__(self, positive: Iterable[bool], negative: Iterable[bool]):
        self.positive = _frozen(np.array(positive, dtype=bool, copy=True))
        self.negative = _frozen(np.array(negative, dtype=bool, copy=True))
        if self.positive.shape != self.negative.shape:
            raise ValueError("Positive and negative parts must have the same length.")

    @classmethod
    def empty(cls, size: int) -> 'BitExpression':
        return cls(np.zeros(size, dtype=bool), np.zeros(size, dtype=bool))

    def is_empty(self) -> bool:
        return not (self.positive.any() or self.negative.any())

    def __len__(self) -> int:
        return len(self.positive)

    def __repr__(self) -> str:
        pos = np.flatnonzero(self.positive).tolist()
        neg = np.flatnonzero(self.negative).tolist()
        return f"BitExpression<+{pos} -{neg}>"


class CondBitExpression:
    """One effect record: ``effects`` applies when ``condition`` holds."""

    __slots__ = ('condition', 'effects')

    def __init__(self, condition: BitExpression, effects: BitExpression):
        self.condition = condition
        self.effects = effects

    def __repr__(self) -> str:
        return f"CondBitExpression<when {self.condition!r} then {self.effects!r}>"


class BitOp:
    """A compiled operator addressed by its index in the operator table."""

    def __init__(self, index: int, name: str, precondition: BitExpression,
                 cond_effects: Sequence[CondBitExpression], cost: float = 1.0):
        if not cond_effects:
            raise ValueError(f"Operator '{name}' needs at least one effect record.")
        if cost < 0:
            raise ValueError(f"Operator '{name}' has negative cost {cost}.")
        self.index = index
        self.name = name
        self.precondition = precondition
        self.cond_effects = list(cond_effects)
        self.cost = float(cost)

    def is_applicable(self, state: BitState) -> bool:
        return state.satisfies(self.precondition)

    def __str__(self) -> str:
        return self.name

    def __repr__(self) -> str:
        return f"BitOp<{self.index}: {self.name}>"


class CompiledProblem:
    def __init__(self, fluents: Sequence[Fluent], operators: Sequence[BitOp],
                 init: BitState, goal: BitExpression):
        self.fluents = list(fluents)
        self.fluent_index: Dict[Fluent, int] = {f: i for i, f in enumerate(self.fluents)}
        self.operators = list(operators)
        self.init = init
        self.goal = goal

    @property
    def proposition_count(self) -> int:
        return len(self.fluents)

    def get_operator(self, name: str) -> BitOp:
        for op in self.operators:
            if op.name == name:
                return op
        raise ValueError(f"No operator found with name: {name}")

    def to_fluents(self, state: BitState) -> Set[Fluent]:
        return {self.fluents[i] for i in state.indices()}

    def __repr__(self) -> str:
        return (f"CompiledProblem<{self.proposition_count} propositions, "
                f"{len(self.operators)} operators>")


def _encode(fluents: Iterable[Fluent], fluent_index: Dict[Fluent, int]) -> BitExpression:
    size = len(fluent_index)
    positive = np.zeros(size, dtype=bool)
    negative = np.zeros(size, dtype=bool)
    for f in fluents:
        if f.negated:
            negative[fluent_index[f.positive]] = True
        else:
            positive[fluent_index[f]] = True
    return BitExpression(positive, negative)


def compile_problem(actions: Sequence[Action], initial_fluents: Iterable[Fluent],
                    goal_fluents: Iterable[Fluent]) -> CompiledProblem:
    """Compile grounded actions, an initial state and a goal into bit vectors.

    The proposition index holds every positive fluent mentioned by an
    action, the initial state or the goal, sorted by name so that two
    compilations of the same input agree. Operators keep the order of
    ``actions``, which fixes the iteration order of the search.
    """
    initial_fluents = set(initial_fluents)
    goal_fluents = set(goal_fluents)
    if any(f.negated for f in initial_fluents):
        raise ValueError("The initial state may only contain positive fluents.")

    mentioned: Set[Fluent] = set(initial_fluents)
    mentioned |= {f.positive for f in goal_fluents}
    for action in actions:
        mentioned |= {f.positive for f in action.preconditions}
        for effect in action.effects:
            mentioned |= {f.positive for f in effect.resulting_fluents}
            mentioned |= {f.positive for f in effect.condition}
    fluents = sorted(mentioned, key=str)
    fluent_index = {f: i for i, f in enumerate(fluents)}
    size = len(fluents)

    operators = []
    for index, action in enumerate(actions):
        records = [
            CondBitExpression(_encode(e.condition, fluent_index),
                              _encode(e.resulting_fluents, fluent_index))
            for e in action.effects
        ]
        if not records:
            records = [CondBitExpression(BitExpression.empty(size), BitExpression.empty(size))]
        operators.append(BitOp(
            index=index,
            name=action.name,
            precondition=_encode(action.preconditions, fluent_index),
            cond_effects=records,
            cost=action.cost,
        ))

    init = BitState.from_indices(size, (fluent_index[f] for f in initial_fluents))
    goal = _encode(goal_fluents, fluent_index)
    return CompiledProblem(fluents, operators, init, goal)
