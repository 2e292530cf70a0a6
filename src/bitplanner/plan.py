from typing import Iterator, List, Optional, Sequence

from bitplanner.encoding import BitOp, BitState, CompiledProblem


class SequentialPlan:
    """An ordered list of operators; index 0 is executed first."""

    def __init__(self, actions: Optional[Sequence[BitOp]] = None):
        self._actions: List[BitOp] = list(actions or [])

    @property
    def actions(self) -> List[BitOp]:
        return list(self._actions)

    def add(self, index: int, op: BitOp) -> None:
        self._actions.insert(index, op)

    def cost(self) -> float:
        return sum((op.cost for op in self._actions), 0.0)

    def replay(self, init: BitState) -> BitState:
        """Apply every action in order and return the final state.

        Only the first effect record of each action is applied, matching the
        transition used during search.
        """
        state = init
        for step, op in enumerate(self._actions):
            if not op.is_applicable(state):
                raise ValueError(f"Action {step} ('{op.name}') is not applicable.")
            state = state.apply(op.cond_effects[0].effects)
        return state

    def is_valid(self, problem: CompiledProblem) -> bool:
        try:
            final = self.replay(problem.init)
        except ValueError:
            return False
        return final.satisfies(problem.goal)

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[BitOp]:
        return iter(self._actions)

    def __getitem__(self, index: int) -> BitOp:
        return self._actions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SequentialPlan):
            return NotImplemented
        return [op.index for op in self._actions] == [op.index for op in other._actions]

    def __str__(self) -> str:
        width = len(str(len(self._actions)))
        return "\n".join(
            f"{step:0{width}d}: ({op.name}) [{op.cost:g}]"
            for step, op in enumerate(self._actions)
        )

    def __repr__(self) -> str:
        return f"SequentialPlan<{[op.name for op in self._actions]}>"
