import os
import sys

os.environ.setdefault("MPLBACKEND", "Agg")

import numpy as np
import pytest
from loguru import logger

from delivery_lab.problems.grid import Grid, Position, edge

ALL_STRATEGIES = ["BF", "DF", "ID", "UC", "G1", "G2", "AS1", "AS2"]
# Iterative deepening enumerates simple paths; keep it to small grids.
FAST_STRATEGIES = [s for s in ALL_STRATEGIES if s != "ID"]


def ones(rows, cols):
    return np.ones((rows, cols, 4), dtype=np.int64)


def assert_valid_path(grid, result, start, goal):
    """Path starts at start, ends at goal, and every step is a legal action with the reported cost."""
    assert result.path[0] == start
    assert result.path[-1] == goal
    assert len(result.path) == len(result.plan) + 1
    total = 0
    for s, a, s2 in zip(result.path, result.plan, result.path[1:]):
        assert a in grid.legal_actions(s)
        assert grid.apply(s, a) == s2
        total += grid.cost(s, s2, a)
    assert total == result.cost


def path_edges(result):
    return {edge(a, b) for a, b in zip(result.path, result.path[1:])}


@pytest.fixture
def grid3():
    """3x3, traffic 1 everywhere, nothing blocked."""
    return Grid.uniform(3, 3)


@pytest.fixture
def isolated_corner():
    """3x3 where (2,2) cannot be reached: both of its roads are blocked."""
    return Grid.uniform(3, 3, blocked_roads=[((2, 2), (1, 2)), ((2, 2), (2, 1))])


@pytest.fixture(autouse=True)
def quiet_logs():
    """Route loguru through whatever sys.stderr is current, warnings and up."""
    logger.remove()
    logger.add(lambda msg: sys.stderr.write(msg), level="WARNING")
    yield
