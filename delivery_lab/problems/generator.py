# delivery_lab/problems/generator.py
# Random delivery grids for demos, benchmarks and property tests.
# Same seed -> same grid.
from __future__ import annotations
from typing import Optional, Set

import numpy as np

from .grid import Grid, Position, Tunnel


def generate_grid(
    seed: Optional[int] = None,
    rows: Optional[int] = None,
    cols: Optional[int] = None,
    n_stores: Optional[int] = None,
    n_destinations: Optional[int] = None,
    n_tunnels: Optional[int] = None,
    max_traffic: int = 4,
    block_ratio: float = 0.1,
) -> Grid:
    """
    Defaults follow the demo generator: 7-10 rows and columns, 1-3 stores,
    3-7 destinations, 0-2 tunnels, traffic 1..max_traffic and about block_ratio * cells
    blocked roads. Stores and destinations never share a cell.
    """
    rng = np.random.default_rng(seed)
    rows = rows or int(rng.integers(7, 11))
    cols = cols or int(rng.integers(7, 11))
    n_stores = int(rng.integers(1, 4)) if n_stores is None else n_stores
    n_destinations = int(rng.integers(3, 8)) if n_destinations is None else n_destinations
    n_tunnels = int(rng.integers(0, 3)) if n_tunnels is None else n_tunnels
    if n_stores + n_destinations > rows * cols:
        raise ValueError(f"{n_stores} stores and {n_destinations} destinations do not fit in {cols}x{rows}")

    def random_cell() -> Position:
        return Position(int(rng.integers(cols)), int(rng.integers(rows)))

    used: Set[Position] = set()
    def fresh_cell() -> Position:
        while True:
            p = random_cell()
            if p not in used:
                used.add(p)
                return p

    stores = [fresh_cell() for _ in range(n_stores)]
    destinations = [fresh_cell() for _ in range(n_destinations)]

    tunnels, ends = [], set()
    for _ in range(n_tunnels):
        a, b = random_cell(), random_cell()
        if a != b and a not in ends and b not in ends:
            tunnels.append(Tunnel(a, b))
            ends.update((a, b))

    traffic = rng.integers(1, max_traffic + 1, size=(rows, cols, 4))

    moves = [(0, -1), (0, 1), (-1, 0), (1, 0)]
    blocked = []
    for _ in range(int(rows * cols * block_ratio)):
        a = random_cell()
        dx, dy = moves[int(rng.integers(4))]
        b = Position(a.x + dx, a.y + dy)
        if 0 <= b.x < cols and 0 <= b.y < rows:
            blocked.append((a, b))

    return Grid(rows, cols, traffic, stores=stores, destinations=destinations,
                tunnels=tunnels, blocked_roads=blocked)
