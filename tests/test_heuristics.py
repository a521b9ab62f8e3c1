import numpy as np
import pytest

from delivery_lab.algorithms.ucs import uniform_cost_search
from delivery_lab.planner import solve
from delivery_lab.problems.delivery import DeliveryProblem
from delivery_lab.problems.generator import generate_grid
from delivery_lab.problems.grid import DOWN, RIGHT, Grid, Position, Tunnel
from delivery_lab.problems.heuristics import HEURISTICS, manhattan_heuristic, traffic_heuristic

from conftest import ones


def cells(g):
    return [Position(x, y) for y in range(g.rows) for x in range(g.cols)]


def test_h1_is_manhattan_without_tunnels():
    g = Grid.uniform(10, 10)
    h = manhattan_heuristic(g, Position(4, 6))
    assert h(Position(1, 2)) == 7
    assert h(Position(9, 0)) == 11


@pytest.mark.parametrize("name", ["h1", "h2"])
def test_zero_exactly_at_goal(name):
    g = generate_grid(seed=11, rows=6, cols=6, n_tunnels=2)
    goal = Position(3, 2)
    h = HEURISTICS[name](g, goal)
    assert h(goal) == 0
    assert all(h(s) > 0 for s in cells(g) if s != goal)


def test_h2_equals_h1_on_unit_traffic():
    g = Grid.uniform(5, 5, tunnels=[((0, 4), (4, 0))])
    h1 = manhattan_heuristic(g, Position(4, 4))
    h2 = traffic_heuristic(g, Position(4, 4))
    assert all(h1(s) == h2(s) for s in cells(g))


def test_h2_weights_each_direction():
    traffic = ones(5, 5)
    traffic[:, :, RIGHT] = 3
    traffic[:, :, DOWN] = 2
    g = Grid(5, 5, traffic)
    h = traffic_heuristic(g, Position(2, 3))
    assert h(Position(0, 0)) == 3 * 2 + 2 * 3
    assert solve((0, 0), (2, 3), g, "UC").cost == 12


def test_h2_uses_cheapest_road_anywhere():
    traffic = ones(5, 5)
    traffic[:, :, RIGHT] = 5
    traffic[4, :, RIGHT] = 1    # a cheap avenue along the bottom row
    g = Grid(5, 5, traffic)
    h = traffic_heuristic(g, Position(3, 0))
    assert h(Position(0, 0)) == 3
    assert solve((0, 0), (3, 0), g, "UC").cost == 11


def test_tunnel_lowers_the_estimate():
    g = Grid.uniform(1, 5, tunnels=[Tunnel(Position(1, 0), Position(3, 0), 1)])
    assert manhattan_heuristic(g, Position(4, 0))(Position(0, 0)) == 3


def test_chained_tunnels():
    g = Grid.uniform(1, 10, tunnels=[((1, 0), (4, 0), 1), ((5, 0), (8, 0), 1)])
    h = manhattan_heuristic(g, Position(9, 0))
    assert h(Position(0, 0)) == 5
    assert solve((0, 0), (9, 0), g, "AS1").cost == 5


@pytest.mark.parametrize("seed", range(10))
def test_admissible_consistent_and_ordered(seed):
    base = generate_grid(seed=seed, rows=5, cols=5, n_tunnels=2)
    # cheap tunnels make the relaxation matter
    g = Grid(base.rows, base.cols, base.traffic,
             tunnels=[Tunnel(t.a, t.b, 1) for t in base.tunnels],
             blocked_roads=[tuple(e) for e in base.blocked_roads])
    rng = np.random.default_rng(seed)
    for _ in range(3):
        goal = Position(int(rng.integers(g.cols)), int(rng.integers(g.rows)))
        h1 = manhattan_heuristic(g, goal)
        h2 = traffic_heuristic(g, goal)
        for s in cells(g):
            assert h1(s) <= h2(s)
            true = uniform_cost_search(DeliveryProblem(s, goal, g)).cost
            assert h2(s) <= true
            for a in g.legal_actions(s):
                s2 = g.apply(s, a)
                c = g.cost(s, s2, a)
                assert h1(s) <= c + h1(s2)
                assert h2(s) <= c + h2(s2)
