# Defines the state-space contract every search strategy programs against.
# delivery_lab/core/problem.py
from __future__ import annotations
from typing import Hashable, Iterable, Protocol, runtime_checkable

Action = Hashable
State = Hashable


@runtime_checkable
class Problem(Protocol):
    """Canonical search problem interface (atomic state-space view).

    Implementations are matched structurally; they do not inherit from this class.
    Search algorithms only ever talk to a problem through these five calls
    (plus the optional ``heuristic`` used by informed strategies).
    """
    def initial_state(self) -> State: ...
    def is_goal(self, s: State) -> bool: ...
    def actions(self, s: State) -> Iterable[Action]: ...
    def result(self, s: State, a: Action) -> State: ...
    def step_cost(self, s: State, a: Action, s2: State) -> float: ...
