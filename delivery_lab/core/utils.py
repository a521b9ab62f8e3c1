# delivery_lab/core/utils.py
# Helpers shared by all strategies: walking the arena back to the root and
# packaging the outcome of a search into a SearchResult.
from __future__ import annotations
from typing import Callable, List, Sequence, Tuple

from loguru import logger

from .metrics import MeasuredRun, SearchResult, UNREACHABLE
from .node import SearchTree
from .problem import Action, Problem, State


def reconstruct_path(tree: SearchTree, index: int) -> Tuple[List[Action], List[State], float]:
    actions, states = [], []
    cost = tree[index].path_cost
    cur = index
    while cur is not None:
        node = tree[cur]
        states.append(node.state)
        if node.parent is not None:
            actions.append(node.action)
        cur = node.parent
    actions.reverse()
    states.reverse()
    return actions, states, cost


def solution(name: str, tree: SearchTree, index: int, expanded: Sequence[State],
             meter: MeasuredRun) -> SearchResult:
    actions, states, cost = reconstruct_path(tree, index)
    logger.debug("{}: {} -> {} cost={} expanded={}", name, states[0], states[-1], cost, len(expanded))
    return SearchResult(name, tuple(actions), cost, len(expanded), tuple(expanded), tuple(states), meter.elapsed)


def failure(name: str, expanded: Sequence[State], meter: MeasuredRun) -> SearchResult:
    logger.debug("{}: frontier exhausted after {} expansions, no path", name, len(expanded))
    return SearchResult(name, (), UNREACHABLE, len(expanded), tuple(expanded), (), meter.elapsed)


def heuristic_from_problem(problem: Problem) -> Callable[[State], float]:
    """The problem's own heuristic(state), or h = 0 when it has none."""
    h = getattr(problem, "heuristic", None)
    if h is None:
        return lambda s: 0
    def wrapped(s: State) -> float:
        val = h(s)
        return 0 if val is None else val
    return wrapped
