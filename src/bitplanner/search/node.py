from dataclasses import dataclass
from typing import Optional

from bitplanner.encoding import BitExpression, BitState


@dataclass(frozen=True, eq=False)
class SearchNode:
    """A state together with the path that reached it.

    ``parent`` points toward the root only, so the nodes of a search form a
    tree. ``operator`` is the index, in the problem's operator table, of the
    operator applied to ``parent`` to produce ``state``; it is ``None`` for
    the root.
    """

    state: BitState
    parent: Optional["SearchNode"] = None
    operator: Optional[int] = None
    cost: float = 0.0
    depth: int = 0
    heuristic: float = 0.0

    @property
    def is_root(self) -> bool:
        return self.parent is None

    def satisfies(self, goal: BitExpression) -> bool:
        return self.state.satisfies(goal)

    def __repr__(self) -> str:
        return (f"SearchNode<depth={self.depth}, cost={self.cost:g}, "
                f"h={self.heuristic:g}, operator={self.operator}>")
