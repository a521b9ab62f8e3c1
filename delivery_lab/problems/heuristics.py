# delivery_lab/problems/heuristics.py
"""
Heuristics for the delivery grid (h1 / h2).

Both are built from the same lower bound on the cost of walking from p to q:

    w(p, q) = w_x * |dx| + w_y * |dy|

where w_x is the weight of the horizontal direction the walk needs (left or right) and
w_y the weight of the vertical one (up or down). Any walk from p to q makes at least
|dx| steps in the needed horizontal direction and |dy| in the needed vertical one, so
w never overestimates as long as each weight is at most the cheapest road in its
direction.

- h1 (Manhattan): every weight is 1. Roads cost at least 1, so this is |dx| + |dy|.
- h2 (direction-weighted): each weight is the cheapest positive traffic cost in that
  direction over the whole grid (Grid.min_cost). Using the global minimum, and not the
  cost at the current cell or along the straight line, is what keeps it admissible:
  the real path may turn and take its horizontal steps on a cheaper row.

Tunnels can beat walking, so neither bound is used raw. For each goal a small table
D(e) holds the cheapest relaxed cost from every tunnel end e to the goal (walks priced
by w, hops priced at the tunnel cost), found with Dijkstra over the 2T ends. Then

    h(s) = min( w(s, goal), min_e w(s, e) + D(e) )

which is the exact shortest path in a relaxation of the grid: admissible, consistent,
O(tunnels) per call, and 0 exactly at the goal. h1 <= h2 everywhere.
"""
from __future__ import annotations
from typing import Callable, Dict, List

from .grid import Grid, Position

Heuristic = Callable[[Position], int]


class _Weights:
    def __init__(self, up: int = 1, down: int = 1, left: int = 1, right: int = 1):
        self.up, self.down, self.left, self.right = up, down, left, right

    def walk(self, p: Position, q: Position) -> int:
        dx, dy = q[0] - p[0], q[1] - p[1]
        horizontal = self.right * dx if dx > 0 else self.left * -dx
        vertical = self.down * dy if dy > 0 else self.up * -dy
        return horizontal + vertical


def _traffic_weights(grid: Grid) -> _Weights:
    # a direction with no road at all keeps weight 1: crossing it needs a tunnel anyway
    return _Weights(**{d: grid.min_cost(d) or 1 for d in ("up", "down", "left", "right")})


def _tunnel_table(grid: Grid, goal: Position, w: _Weights) -> Dict[Position, int]:
    """D(e): relaxed cost from every tunnel end to the goal (Dijkstra towards the goal)."""
    ends: List[Position] = [end for t in grid.tunnels for end in (t.a, t.b)]
    dist = {e: w.walk(e, goal) for e in ends}
    done = set()
    while len(done) < len(ends):
        v = min((e for e in ends if e not in done), key=lambda e: dist[e])
        done.add(v)
        t = grid.tunnel_at(v)
        partner = t.other_end(v)
        if partner not in done:
            dist[partner] = min(dist[partner], t.traversal_cost + dist[v])
        for u in ends:
            if u not in done:
                dist[u] = min(dist[u], w.walk(u, v) + dist[v])
    return dist


def _relaxed(grid: Grid, goal: Position, w: _Weights) -> Heuristic:
    goal = Position(*goal)
    table = list(_tunnel_table(grid, goal, w).items())

    def h(s: Position) -> int:
        best = w.walk(s, goal)
        for end, d in table:
            via = w.walk(s, end) + d
            if via < best:
                best = via
        return best
    return h


def manhattan_heuristic(grid: Grid, goal: Position) -> Heuristic:
    """h1: Manhattan distance to the goal, lowered where a tunnel makes it an overestimate."""
    return _relaxed(grid, goal, _Weights())


def traffic_heuristic(grid: Grid, goal: Position) -> Heuristic:
    """h2: direction-weighted Manhattan distance using the cheapest road per direction."""
    return _relaxed(grid, goal, _traffic_weights(grid))


HEURISTICS: Dict[str, Callable[[Grid, Position], Heuristic]] = {
    "h1": manhattan_heuristic,
    "h2": traffic_heuristic,
}
