import pytest

from bitplanner.core import Action, Effect, Fluent
from bitplanner.encoding import compile_problem

F = Fluent


@pytest.fixture
def chain_problem():
    """p -A-> q -B-> r, starting from {p} with goal {r}."""
    actions = [
        Action({F("p")}, [Effect({F("q")})], name="A"),
        Action({F("q")}, [Effect({F("r")})], name="B"),
    ]
    return compile_problem(actions, {F("p")}, {F("r")})
