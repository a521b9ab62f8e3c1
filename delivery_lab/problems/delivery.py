# delivery_lab/problems/delivery.py
from __future__ import annotations
from typing import Iterable, Optional

from ..core.errors import GridValidationError
from .grid import Grid, Position
from .heuristics import Heuristic


class DeliveryProblem:
    """
    Route a truck from `start` to `goal` on a Grid.

    - State: Position (x, y)
    - ACTIONS(s): Grid.legal_actions(s), a subset of {'up','left','down','right','tunnel'}
    - RESULT(s,a): Grid.apply(s, a)
    - IS-GOAL(s): s == goal
    - c(s,a,s'): Grid.cost(s, s', a), the traffic cost or the tunnel cost
    - heuristic(s): the heuristic given at construction, else 0

    Satisfies core.problem.Problem structurally.
    """
    def __init__(self, start, goal, grid: Grid, heuristic: Optional[Heuristic] = None):
        self.start = Position(*start)
        self.goal = Position(*goal)
        for name, p in (("start", self.start), ("goal", self.goal)):
            if not grid.in_bounds(p):
                raise GridValidationError("positions in bounds", f"{name} {p} outside {grid.cols}x{grid.rows} grid")
        self.grid = grid
        self._h = heuristic

    def initial_state(self) -> Position:
        return self.start

    def is_goal(self, state: Position) -> bool:
        return state == self.goal

    def actions(self, state: Position) -> Iterable[str]:
        return self.grid.legal_actions(state)

    def result(self, state: Position, action: str) -> Position:
        return self.grid.apply(state, action)

    def step_cost(self, state: Position, action: str, next_state: Position) -> int:
        return self.grid.cost(state, next_state, action)

    def heuristic(self, state: Position) -> int:
        return 0 if self._h is None else self._h(state)
