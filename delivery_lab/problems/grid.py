# delivery_lab/problems/grid.py
from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, NamedTuple, Optional, Tuple

import numpy as np

from ..core.errors import BlockedEdgeError, GridValidationError


class Position(NamedTuple):
    """A grid cell: x is the column, y the row (y grows downwards)."""
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x},{self.y})"


def manhattan(a: Position, b: Position) -> int:
    return abs(a.x - b.x) + abs(a.y - b.y)


# Index of each direction on the last axis of the traffic table.
UP, DOWN, LEFT, RIGHT = 0, 1, 2, 3
DIRECTIONS: Dict[str, int] = {"up": UP, "down": DOWN, "left": LEFT, "right": RIGHT}
TUNNEL = "tunnel"

_MOVES: Dict[str, Tuple[int, int]] = {
    "up": (0, -1),
    "left": (-1, 0),
    "down": (0, 1),
    "right": (1, 0),
}
# Actions are listed counter-clockwise from "up", tunnel last.
ACTIONS: Tuple[str, ...] = tuple(_MOVES) + (TUNNEL,)

Edge = FrozenSet[Position]


def edge(a: Position, b: Position) -> Edge:
    """Undirected edge between two cells; edge(a, b) == edge(b, a)."""
    return frozenset((Position(*a), Position(*b)))


@dataclass(frozen=True)
class Tunnel:
    """Bidirectional shortcut between two cells. cost=None means Manhattan distance of the ends."""
    a: Position
    b: Position
    cost: Optional[int] = None

    @property
    def traversal_cost(self) -> int:
        return manhattan(self.a, self.b) if self.cost is None else self.cost

    def other_end(self, p: Position) -> Position:
        if p == self.a:
            return self.b
        if p == self.b:
            return self.a
        raise ValueError(f"{p} is not an end of tunnel {self.a}<->{self.b}")


class Grid:
    """
    Topology and cost surface of the delivery map.

    - traffic[y, x, d]: cost of one step from (x, y) in direction d (up, down, left, right);
      0 means there is no road in that direction
    - blocked_roads: undirected edges that are impassable whatever their traffic cost says
    - tunnels: exactly pairwise; a cell is the end of at most one tunnel
    - stores / destinations: ordered, may overlap

    The grid is read-only once built; every invariant is checked here so that
    searches never meet a malformed grid.
    """
    def __init__(
        self,
        rows: int,
        cols: int,
        traffic=None,
        stores: Iterable = (),
        destinations: Iterable = (),
        tunnels: Iterable[Tunnel] = (),
        blocked_roads: Iterable = (),
    ):
        if not isinstance(rows, (int, np.integer)) or not isinstance(cols, (int, np.integer)) \
                or rows <= 0 or cols <= 0:
            raise GridValidationError("positive bounds", f"rows={rows!r}, cols={cols!r}")
        self.rows = int(rows)
        self.cols = int(cols)
        self.traffic = self._check_traffic(traffic)
        self.stores: Tuple[Position, ...] = tuple(self._check_position(p, "store") for p in stores)
        self.destinations: Tuple[Position, ...] = tuple(
            self._check_position(p, "destination") for p in destinations)
        self.tunnels: Tuple[Tunnel, ...] = tuple(self._check_tunnel(t) for t in tunnels)
        self.blocked_roads: FrozenSet[Edge] = frozenset(self._check_block(pair) for pair in blocked_roads)

        self._tunnel_at: Dict[Position, Tunnel] = {}
        for t in self.tunnels:
            for end in (t.a, t.b):
                if end in self._tunnel_at:
                    raise GridValidationError("tunnels are pairwise", f"{end} is the end of more than one tunnel")
                self._tunnel_at[end] = t

        # Minimum positive step cost per direction over every in-bounds edge.
        views = {
            UP: self.traffic[1:, :, UP],
            DOWN: self.traffic[:-1, :, DOWN],
            LEFT: self.traffic[:, 1:, LEFT],
            RIGHT: self.traffic[:, :-1, RIGHT],
        }
        self._min_cost: Dict[int, Optional[int]] = {}
        for d, view in views.items():
            positive = view[view > 0]
            self._min_cost[d] = int(positive.min()) if positive.size else None

    @classmethod
    def uniform(cls, rows: int, cols: int, cost: int = 1, **kwargs) -> "Grid":
        return cls(rows, cols, np.full((rows, cols, 4), cost, dtype=np.int64), **kwargs)

    # ---------------------------------------
    # VALIDATION
    # ---------------------------------------
    def _check_traffic(self, traffic) -> np.ndarray:
        if traffic is None:
            arr = np.ones((self.rows, self.cols, 4), dtype=np.int64)
        else:
            try:
                arr = np.array(traffic)
            except (TypeError, ValueError) as e:
                raise GridValidationError("integer traffic table", str(e)) from e
            if arr.dtype.kind == "f" and np.isfinite(arr).all() and np.array_equal(arr, np.floor(arr)):
                arr = arr.astype(np.int64)
            elif arr.dtype.kind in "iu":
                arr = arr.astype(np.int64)
            else:
                raise GridValidationError(
                    "integer traffic table", f"traffic values must be whole numbers, got dtype {arr.dtype}")
        if arr.shape != (self.rows, self.cols, 4):
            raise GridValidationError(
                "traffic shape", f"expected {(self.rows, self.cols, 4)}, got {arr.shape}")
        if (arr < 0).any():
            y, x, d = (int(v) for v in np.argwhere(arr < 0)[0])
            raise GridValidationError("non-negative traffic", f"traffic[{y}][{x}][{d}] = {arr[y, x, d]}")
        arr.setflags(write=False)
        return arr

    def _check_position(self, p, what: str) -> Position:
        try:
            pos = Position(int(p[0]), int(p[1]))
        except (TypeError, ValueError, IndexError) as e:
            raise GridValidationError("position is an (x, y) pair", f"{what} {p!r}") from e
        if not self.in_bounds(pos):
            raise GridValidationError(
                "positions in bounds", f"{what} {pos} outside {self.cols}x{self.rows} grid")
        return pos

    def _check_tunnel(self, t) -> Tunnel:
        if not isinstance(t, Tunnel):
            t = Tunnel(*t)
        a = self._check_position(t.a, "tunnel end")
        b = self._check_position(t.b, "tunnel end")
        if a == b:
            raise GridValidationError("tunnel ends distinct", f"tunnel {a}<->{b}")
        if t.cost is not None and (not isinstance(t.cost, (int, np.integer)) or t.cost <= 0):
            raise GridValidationError("positive tunnel cost", f"tunnel {a}<->{b} cost={t.cost!r}")
        return Tunnel(a, b, None if t.cost is None else int(t.cost))

    def _check_block(self, pair) -> Edge:
        try:
            a, b = pair
        except (TypeError, ValueError) as e:
            raise GridValidationError("blocked road is a pair of cells", repr(pair)) from e
        a = self._check_position(a, "blocked road end")
        b = self._check_position(b, "blocked road end")
        if manhattan(a, b) != 1:
            raise GridValidationError("blocked road joins adjacent cells", f"{a}-{b}")
        return edge(a, b)

    # ---------------------------------------
    # QUERIES
    # ---------------------------------------
    def in_bounds(self, p: Position) -> bool:
        return 0 <= p[0] < self.cols and 0 <= p[1] < self.rows

    def is_blocked(self, a: Position, b: Position) -> bool:
        return edge(a, b) in self.blocked_roads

    def tunnel_at(self, p: Position) -> Optional[Tunnel]:
        return self._tunnel_at.get(p)

    def traffic_cost(self, p: Position, direction: str) -> int:
        return int(self.traffic[p[1], p[0], DIRECTIONS[direction]])

    def min_cost(self, direction: str) -> Optional[int]:
        """Cheapest positive step cost in `direction` anywhere on the grid (None if no such road)."""
        return self._min_cost[DIRECTIONS[direction]]

    def _neighbour(self, p: Position, action: str) -> Position:
        dx, dy = _MOVES[action]
        return Position(p[0] + dx, p[1] + dy)

    def _open(self, p: Position, action: str) -> bool:
        nxt = self._neighbour(p, action)
        return (self.in_bounds(nxt)
                and self.traffic_cost(p, action) > 0
                and not self.is_blocked(p, nxt))

    # ---------------------------------------
    # ACTIONS / TRANSITIONS / COSTS
    # ---------------------------------------
    def legal_actions(self, state: Position) -> Tuple[str, ...]:
        actions = [a for a in _MOVES if self._open(state, a)]
        if state in self._tunnel_at:
            actions.append(TUNNEL)
        return tuple(actions)

    def apply(self, state: Position, action: str) -> Position:
        if action == TUNNEL:
            t = self._tunnel_at.get(state)
            if t is None:
                raise ValueError(f"no tunnel at {state}")
            return t.other_end(state)
        if action not in _MOVES:
            raise ValueError(f"unknown action {action!r}")
        return self._neighbour(state, action)

    def cost(self, state: Position, next_state: Position, action: str) -> int:
        """Step cost of a legal move. Asking for the cost of a missing edge is an error."""
        if action == TUNNEL:
            t = self._tunnel_at.get(state)
            if t is None or t.other_end(state) != next_state:
                raise BlockedEdgeError(f"no tunnel from {state} to {next_state}")
            return t.traversal_cost
        if action not in _MOVES or self._neighbour(state, action) != next_state:
            raise BlockedEdgeError(f"{action!r} does not lead from {state} to {next_state}")
        if not self._open(state, action):
            raise BlockedEdgeError(f"no road {action} from {state}")
        return self.traffic_cost(state, action)

    def __repr__(self) -> str:
        return (f"Grid(rows={self.rows}, cols={self.cols}, stores={len(self.stores)}, "
                f"destinations={len(self.destinations)}, tunnels={len(self.tunnels)}, "
                f"blocked={len(self.blocked_roads)})")
