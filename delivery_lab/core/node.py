# delivery_lab/core/node.py
# Search-tree nodes kept in an arena: a node's parent is an index into the same arena,
# so plan reconstruction is a backward walk over integers.
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

from .problem import Action, Problem, State


@dataclass(frozen=True)
class Node:
    state: State
    parent: Optional[int] = None
    action: Optional[Action] = None
    path_cost: float = 0
    depth: int = 0


class SearchTree:
    """Arena of Nodes for a single search call. Never shared between searches."""

    ROOT = 0

    def __init__(self, root_state: State):
        self.nodes: List[Node] = [Node(root_state)]

    def __len__(self) -> int:
        return len(self.nodes)

    def __getitem__(self, index: int) -> Node:
        return self.nodes[index]

    @property
    def root(self) -> int:
        return self.ROOT

    def add(self, parent: int, action: Action, state: State, path_cost: float) -> int:
        depth = self.nodes[parent].depth + 1
        self.nodes.append(Node(state, parent, action, path_cost, depth))
        return len(self.nodes) - 1

    def expand(self, index: int, problem: Problem) -> Iterator[Tuple[Action, State, float]]:
        """Yield (action, next_state, path_cost) for every successor of node `index`.

        Nothing is added to the arena here; the caller decides which candidates
        its duplicate policy admits and calls `add` for those.
        """
        node = self.nodes[index]
        s = node.state
        for a in problem.actions(s):
            s2 = problem.result(s, a)
            cost = problem.step_cost(s, a, s2)
            if cost is None or cost < 0:
                raise ValueError(
                    f"step_cost returned {cost!r} for (s={s!r}, a={a!r}, s'={s2!r}); "
                    "step costs must be non-negative numbers."
                )
            yield a, s2, node.path_cost + cost

    def on_path(self, index: Optional[int], state: State) -> bool:
        """True if `state` occurs on the root-to-node path ending at `index`."""
        cur = index
        while cur is not None:
            node = self.nodes[cur]
            if node.state == state:
                return True
            cur = node.parent
        return False
