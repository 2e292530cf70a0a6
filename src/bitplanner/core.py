from typing import Collection, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple
import itertools


Binding = Dict[str, str]


class Fluent(object):
    __slots__ = ('name', 'args', 'negated', '_hash')

    def __init__(self, name: str, *args: str, negated: bool = False):
        if args:
            self.name = name
            self.args = args
            if name == "not" or name.startswith("not "):
                raise ValueError("Use the 'negated' argument or ~Fluent to negate.")
            self.negated = negated
        else:
            if negated:
                raise ValueError("Cannot both pass a full string and negated=True. Use 'not' or ~Fluent.")
            split = name.split(" ")
            if split[0] == 'not':
                self.negated = True
                split = split[1:]
            else:
                self.negated = False
            self.name = split[0]
            self.args = tuple(split[1:])

        self._hash = hash((self.name, self.args, self.negated))

    @property
    def positive(self) -> 'Fluent':
        return ~self if self.negated else self

    def __str__(self) -> str:
        prefix = "not " if self.negated else ""
        return f"{prefix}{' '.join((self.name,) + self.args)}"

    def __repr__(self) -> str:
        return f"Fluent<{self}>"

    def __hash__(self) -> int:
        return self._hash

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fluent):
            return NotImplemented
        return (self.name, self.args, self.negated) == (other.name, other.args, other.negated)

    def __invert__(self) -> 'Fluent':
        # Built directly: a zero-argument name would otherwise be re-parsed.
        flipped = object.__new__(Fluent)
        flipped.name = self.name
        flipped.args = self.args
        flipped.negated = not self.negated
        flipped._hash = hash((flipped.name, flipped.args, flipped.negated))
        return flipped


def _substitute_fluent(fluent: Fluent, binding: Binding) -> Fluent:
    grounded_args = tuple(binding.get(arg, arg) for arg in fluent.args)
    if not grounded_args:
        return fluent
    return Fluent(fluent.name, *grounded_args, negated=fluent.negated)


class Effect:
    """A single effect record.

    Positive fluents in ``resulting_fluents`` are added, negated ones are
    deleted. ``condition`` is kept for completeness of the encoding; the
    search only ever applies the first record of an action, unconditionally.
    """

    def __init__(self, resulting_fluents: Iterable[Fluent] = (), condition: Iterable[Fluent] = ()):
        self.resulting_fluents = frozenset(resulting_fluents)
        self.condition = frozenset(condition)

    def _ground(self, binding: Binding) -> 'Effect':
        return Effect(
            resulting_fluents={_substitute_fluent(f, binding) for f in self.resulting_fluents},
            condition={_substitute_fluent(f, binding) for f in self.condition},
        )

    def __str__(self):
        rfs = ", ".join(sorted(str(f) for f in self.resulting_fluents))
        if self.condition:
            cond = ", ".join(sorted(str(f) for f in self.condition))
            return f"when {cond}: {rfs}"
        return rfs

    def __repr__(self):
        return f"Effect({self})"


class Action:
    def __init__(self, preconditions: Iterable[Fluent], effects: Sequence[Effect],
                 name: Optional[str] = None, cost: float = 1.0):
        self.preconditions = frozenset(preconditions)
        self.effects = list(effects)
        self.name = name or "anonymous"
        self.cost = cost

    def __str__(self):
        pre_str = ", ".join(sorted(str(p) for p in self.preconditions))
        eff_strs = [f"    {eff}" for eff in self.effects]
        return (f"Action('{self.name}'\n  Preconditions: [{pre_str}]\n  Effects:\n"
                + "\n".join(eff_strs) + ")")

    def __repr__(self):
        return f"Action<{self.name}>"


class Operator:
    def __init__(
        self,
        name: str,
        parameters: List[Tuple[str, str]],
        preconditions: List[Fluent],
        effects: Sequence[Effect],
        cost: float = 1.0,
    ):
        self.name = name
        self.parameters = parameters
        self.preconditions = preconditions
        self.effects = effects
        self.cost = cost

    def instantiate(self, objects_by_type: Mapping[str, Collection[str]]) -> List[Action]:
        grounded_actions = []
        domains = [objects_by_type[typ] for _, typ in self.parameters]
        for assignment in itertools.product(*domains):
            binding = {var: obj for (var, _), obj in zip(self.parameters, assignment)}
            if len(set(binding.values())) != len(binding):
                continue
            grounded_actions.append(self._ground(binding))
        return grounded_actions

    def _ground(self, binding: Binding) -> Action:
        grounded_preconditions = frozenset(
            _substitute_fluent(f, binding) for f in self.preconditions
        )
        grounded_effects = [eff._ground(binding) for eff in self.effects]

        name_str = " ".join([self.name] + [binding[var] for var, _ in self.parameters])
        return Action(grounded_preconditions, grounded_effects, name=name_str, cost=self.cost)
