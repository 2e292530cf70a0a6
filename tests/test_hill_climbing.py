import logging

import pytest

from bitplanner.core import Action, Effect, Fluent
from bitplanner.encoding import BitState, compile_problem
from bitplanner.heuristic import HEURISTICS, HeuristicType
from bitplanner.search import HillClimbing, SearchNode, SearchOutcome

F = Fluent


def _node(h):
    return SearchNode(state=BitState.empty(0), heuristic=h)


def _check_path(node, problem):
    """Walk back to the root checking the cost and depth recurrences."""
    while node.parent is not None:
        op = problem.operators[node.operator]
        assert node.cost == pytest.approx(node.parent.cost + op.cost)
        assert node.depth == node.parent.depth + 1
        assert node.cost >= node.parent.cost
        assert len(node.state) == problem.proposition_count
        node = node.parent
    assert node.operator is None
    assert node.depth == 0 and node.cost == 0


@pytest.mark.parametrize("kind", list(HeuristicType), ids=str)
def test_chain_problem_is_solved(chain_problem, kind):
    strategy = HillClimbing(timeout=10, heuristic=kind)
    node = strategy.solve_node(chain_problem)

    assert node is not None
    assert node.depth == 2
    assert node.cost == 2.0
    assert node.satisfies(chain_problem.goal)
    assert strategy.outcome == SearchOutcome.SOLVED
    assert strategy.root_node.is_root
    assert strategy.root_node.heuristic == pytest.approx(2.0)
    assert strategy.searching_time >= 0

    plan = strategy.extract_plan(node, chain_problem)
    assert [op.name for op in plan] == ["A", "B"]
    assert plan.cost() == 2.0
    assert plan.replay(chain_problem.init) == node.state
    _check_path(node, chain_problem)


def test_goal_already_satisfied_returns_root():
    actions = [Action({F("p")}, [Effect({F("q")})], name="A")]
    problem = compile_problem(actions, {F("p"), F("r")}, {F("r")})
    strategy = HillClimbing(timeout=10)

    node = strategy.solve_node(problem)
    assert node is strategy.root_node
    assert node.depth == 0
    assert strategy.expanded_nodes == 0
    assert len(strategy.solve_plan(problem)) == 0


def test_dead_end_returns_none():
    actions = [Action({F("p")}, [Effect({F("q")})], name="A")]
    problem = compile_problem(actions, set(), {F("q")})
    strategy = HillClimbing(timeout=10)

    assert strategy.solve_node(problem) is None
    assert strategy.outcome == SearchOutcome.DEAD_END
    assert strategy.expanded_nodes == 1
    assert strategy.generated_nodes == 0
    assert strategy.solve_plan(problem) is None


@pytest.mark.parametrize("timeout", [0, -1], ids=["zero", "negative"])
def test_expired_timeout_returns_before_expanding(chain_problem, timeout):
    strategy = HillClimbing(timeout=timeout)
    assert strategy.solve_node(chain_problem) is None
    assert strategy.outcome == SearchOutcome.TIMEOUT
    assert strategy.expanded_nodes == 0
    assert strategy.root_node is not None
    assert strategy.solve_plan(chain_problem) is None


def test_timeout_stops_a_cycling_search():
    # Toggling between two states never reaches g.
    actions = [
        Action({F("a")}, [Effect({F("b"), ~F("a")})], name="ab"),
        Action({F("b")}, [Effect({F("a"), ~F("b")})], name="ba"),
        Action({F("unreachable")}, [Effect({F("g")})], name="finish"),
    ]
    problem = compile_problem(actions, {F("a")}, {F("g")})
    strategy = HillClimbing(timeout=0.05)

    assert strategy.solve_node(problem) is None
    assert strategy.outcome == SearchOutcome.TIMEOUT
    assert strategy.expanded_nodes > 1


def test_first_round_keeps_last_successor():
    # With the bound still unset every successor beats it, so the goal
    # successor produced by the first operator is passed over.
    actions = [
        Action({F("s")}, [Effect({F("g")})], name="good"),
        Action({F("s")}, [Effect({F("a")})], name="detour"),
    ]
    problem = compile_problem(actions, {F("s")}, {F("g")})
    strategy = HillClimbing(timeout=10, heuristic=HeuristicType.SUM)

    plan = strategy.solve_plan(problem)
    assert [op.name for op in plan] == ["detour", "good"]
    assert strategy.expanded_nodes == 2
    assert strategy.generated_nodes == 4


@pytest.mark.parametrize(
    "heuristics, bound, expected",
    [
        ([5, 3, 4], float("inf"), 2),
        ([5, 3, 4], 3.5, 1),
        ([5, 3, 4], 2, 0),
        ([1, 3, 4], 2, 0),
        ([2, 1, 1], 2, 2),
        ([7], 0, 0),
    ],
    ids=["unset bound", "one beats bound", "none beats bound",
         "first not compared", "last of ties", "single"],
)
def test_selection_uses_search_wide_bound(heuristics, bound, expected):
    nodes = [_node(h) for h in heuristics]
    assert HillClimbing.pop_best_node(nodes, bound) is nodes[expected]


def test_successors_follow_operator_order(chain_problem):
    strategy = HillClimbing(heuristic=HeuristicType.MAX)
    heuristic = strategy.create_heuristic(chain_problem)
    root = SearchNode(state=BitState.from_indices(3, [0, 1]), heuristic=1.0)

    successors = HillClimbing.get_successors(root, chain_problem, heuristic)
    assert [s.operator for s in successors] == [0, 1]
    assert [s.heuristic for s in successors] == [1.0, 0.0]
    assert all(s.parent is root and s.depth == 1 for s in successors)
    assert successors[0].state is not root.state


def test_only_the_first_effect_record_is_applied():
    actions = [
        Action({F("p")}, [Effect({F("q")}), Effect({F("r")})], name="both"),
        Action({F("q")}, [Effect({F("r")})], name="finish"),
    ]
    problem = compile_problem(actions, {F("p")}, {F("r")})
    node = HillClimbing(timeout=10).solve_node(problem)

    assert node is not None
    assert node.depth == 2
    first = node.parent
    assert problem.to_fluents(first.state) == {F("p"), F("q")}


def test_search_is_deterministic(chain_problem):
    first = HillClimbing(timeout=10).solve_node(chain_problem)
    second = HillClimbing(timeout=10).solve_node(chain_problem)
    assert first.depth == second.depth
    assert first.cost == second.cost
    assert first.state == second.state


def test_strategy_can_be_reused(chain_problem):
    strategy = HillClimbing(timeout=10)
    assert strategy.solve_node(chain_problem) is not None
    first_root = strategy.root_node
    strategy.configure(HeuristicType.MAX, 1.0, 0)
    assert strategy.solve_node(chain_problem) is None
    assert strategy.root_node is not first_root


def test_search_logs_outcome(chain_problem, caplog):
    with caplog.at_level(logging.DEBUG, logger="bitplanner.search.hill_climbing"):
        HillClimbing(timeout=10).solve_node(chain_problem)
    messages = [r.getMessage() for r in caplog.records]
    assert any("picked B" in m for m in messages)
    assert any("solved" in m for m in messages)


def test_bound_carries_over_between_rounds(monkeypatch):
    # After s1 the bound is 1. Neither successor of r2 beats it, so the
    # first one (toa) is kept even though tob has the lower estimate.
    actions = [
        Action({F("s")}, [Effect({F("r1"), ~F("s")})], name="s1"),
        Action({F("r1")}, [Effect({F("r2"), ~F("r1")})], name="s2"),
        Action({F("r2")}, [Effect({F("a"), ~F("r2")})], name="toa"),
        Action({F("r2")}, [Effect({F("b"), ~F("r2")})], name="tob"),
        Action({F("a")}, [Effect({F("g")})], name="finish"),
    ]
    problem = compile_problem(actions, {F("s")}, {F("g")})
    estimates = [("g", 0), ("r1", 1), ("b", 2), ("a", 3), ("r2", 5), ("s", 10)]

    def fixed_estimates(compiled):
        def estimate(state, goal):
            for name, value in estimates:
                if compiled.fluent_index[F(name)] in state:
                    return value
            return float("inf")
        return estimate

    monkeypatch.setitem(HEURISTICS, HeuristicType.MAX, fixed_estimates)
    strategy = HillClimbing(timeout=10, heuristic=HeuristicType.MAX)

    plan = strategy.solve_plan(problem)
    assert plan is not None
    assert [op.name for op in plan] == ["s1", "s2", "toa", "finish"]
    assert strategy.outcome == SearchOutcome.SOLVED
