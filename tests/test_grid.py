import numpy as np
import pytest

from delivery_lab.core.errors import BlockedEdgeError, GridValidationError
from delivery_lab.problems.grid import DOWN, RIGHT, UP, Grid, Position, Tunnel, manhattan

from conftest import ones


def test_position_is_a_value():
    assert Position(1, 2) == Position(1, 2)
    assert Position(1, 2) == (1, 2)
    assert hash(Position(1, 2)) == hash((1, 2))
    assert len({Position(1, 2), Position(1, 2)}) == 1
    assert str(Position(3, 4)) == "(3,4)"


def test_legal_actions_centre_and_corner(grid3):
    assert set(grid3.legal_actions(Position(1, 1))) == {"up", "down", "left", "right"}
    assert "tunnel" not in grid3.legal_actions(Position(1, 1))
    assert set(grid3.legal_actions(Position(0, 0))) == {"down", "right"}
    assert set(grid3.legal_actions(Position(2, 2))) == {"up", "left"}


def test_apply_action(grid3):
    s = Position(1, 1)
    assert grid3.apply(s, "up") == Position(1, 0)
    assert grid3.apply(s, "down") == Position(1, 2)
    assert grid3.apply(s, "left") == Position(0, 1)
    assert grid3.apply(s, "right") == Position(2, 1)
    with pytest.raises(ValueError):
        grid3.apply(s, "jump")


def test_cost_is_directional_traffic_at_source():
    traffic = ones(2, 2)
    traffic[0, 0, DOWN] = 5
    traffic[1, 0, UP] = 2
    g = Grid(2, 2, traffic)
    assert g.cost(Position(0, 0), Position(0, 1), "down") == 5
    assert g.cost(Position(0, 1), Position(0, 0), "up") == 2


def test_tunnel_both_ways_with_default_cost():
    g = Grid.uniform(3, 3, tunnels=[Tunnel(Position(0, 0), Position(2, 2))])
    assert "tunnel" in g.legal_actions(Position(0, 0))
    assert "tunnel" in g.legal_actions(Position(2, 2))
    assert g.apply(Position(0, 0), "tunnel") == Position(2, 2)
    assert g.apply(Position(2, 2), "tunnel") == Position(0, 0)
    assert g.cost(Position(0, 0), Position(2, 2), "tunnel") == manhattan(Position(0, 0), Position(2, 2)) == 4


def test_tunnel_explicit_cost():
    g = Grid.uniform(3, 3, tunnels=[((0, 0), (2, 2), 1)])
    assert g.cost(Position(2, 2), Position(0, 0), "tunnel") == 1


def test_blocked_road_is_undirected():
    g = Grid.uniform(3, 3, blocked_roads=[((1, 1), (1, 0))])
    assert "up" not in g.legal_actions(Position(1, 1))
    assert "down" not in g.legal_actions(Position(1, 0))
    assert "down" in g.legal_actions(Position(1, 1))
    assert g.is_blocked(Position(1, 0), Position(1, 1))


def test_blocked_road_overrides_traffic_cost():
    g = Grid.uniform(3, 3, cost=3, blocked_roads=[((1, 1), (2, 1))])
    assert g.traffic_cost(Position(1, 1), "right") == 3
    with pytest.raises(BlockedEdgeError):
        g.cost(Position(1, 1), Position(2, 1), "right")
    with pytest.raises(BlockedEdgeError):
        g.cost(Position(2, 1), Position(1, 1), "left")


def test_zero_traffic_means_no_road_in_that_direction_only():
    traffic = ones(3, 3)
    traffic[1, 1, RIGHT] = 0
    g = Grid(3, 3, traffic)
    assert "right" not in g.legal_actions(Position(1, 1))
    assert "left" in g.legal_actions(Position(2, 1))
    with pytest.raises(BlockedEdgeError):
        g.cost(Position(1, 1), Position(2, 1), "right")


def test_dead_end_has_no_actions():
    g = Grid.uniform(3, 3, blocked_roads=[
        ((1, 1), (1, 0)), ((1, 1), (1, 2)), ((1, 1), (0, 1)), ((1, 1), (2, 1)),
    ])
    assert g.legal_actions(Position(1, 1)) == ()


def test_cost_rejects_wrong_successor(grid3):
    with pytest.raises(BlockedEdgeError):
        grid3.cost(Position(0, 0), Position(2, 2), "right")
    with pytest.raises(BlockedEdgeError):
        grid3.cost(Position(0, 0), Position(1, 0), "tunnel")


def test_min_cost_ignores_edges_leaving_the_grid():
    traffic = np.full((2, 3, 4), 4, dtype=np.int64)
    traffic[:, 2, RIGHT] = 1     # right from the last column goes nowhere
    traffic[0, 0, RIGHT] = 2
    traffic[0, 1, RIGHT] = 0
    g = Grid(2, 3, traffic)
    assert g.min_cost("right") == 2
    assert g.min_cost("up") == 4


def test_min_cost_none_when_no_road():
    traffic = ones(2, 2)
    traffic[:, :, UP] = 0
    assert Grid(2, 2, traffic).min_cost("up") is None


def test_grid_is_read_only(grid3):
    with pytest.raises(ValueError):
        grid3.traffic[0, 0, 0] = 9


@pytest.mark.parametrize("kwargs, invariant", [
    (dict(rows=0, cols=3), "positive bounds"),
    (dict(rows=3, cols=3, traffic=np.ones((2, 3, 4))), "traffic shape"),
    (dict(rows=1, cols=2, traffic=[[[0, 0, 0, 0.5], [0, 0, 1, 0]]]), "integer traffic table"),
    (dict(rows=1, cols=2, traffic=[[[0, 0, 0, 1], [0, 0, float("nan"), 0]]]), "integer traffic table"),
    (dict(rows=1, cols=2, traffic=[[["1", "1", "1", "1"], ["1", "1", "1", "1"]]]), "integer traffic table"),
    (dict(rows=3, cols=3, stores=[(3, 0)]), "positions in bounds"),
    (dict(rows=3, cols=3, destinations=[(0, -1)]), "positions in bounds"),
    (dict(rows=3, cols=3, tunnels=[((0, 0), (0, 0))]), "tunnel ends distinct"),
    (dict(rows=3, cols=3, tunnels=[((0, 0), (2, 2), 0)]), "positive tunnel cost"),
    (dict(rows=3, cols=3, tunnels=[((0, 0), (2, 2)), ((0, 0), (1, 2))]), "tunnels are pairwise"),
    (dict(rows=3, cols=3, tunnels=[((0, 0), (5, 5))]), "positions in bounds"),
    (dict(rows=3, cols=3, blocked_roads=[((0, 0), (1, 1))]), "blocked road joins adjacent cells"),
    (dict(rows=3, cols=3, blocked_roads=[((2, 2), (3, 2))]), "positions in bounds"),
])
def test_malformed_grid_fails_at_construction(kwargs, invariant):
    with pytest.raises(GridValidationError) as exc:
        Grid(**kwargs)
    assert exc.value.invariant == invariant


def test_negative_traffic_is_rejected():
    traffic = ones(2, 2)
    traffic[1, 0, DOWN] = -1
    with pytest.raises(GridValidationError, match="non-negative traffic"):
        Grid(2, 2, traffic)


def test_whole_number_floats_are_accepted_as_traffic():
    g = Grid(1, 2, [[[0, 0, 0, 2.0], [0, 0, 1.0, 0]]])
    assert g.traffic.dtype == np.int64
    assert g.traffic_cost(Position(0, 0), "right") == 2
