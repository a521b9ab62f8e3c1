from __future__ import annotations
from typing import Callable
from ..core.frontiers import PriorityQueue
from ..core.node import Node, SearchTree
from ..core.metrics import SearchResult, MeasuredRun, UNREACHABLE
from ..core.utils import solution, failure
from ..core.problem import Problem

def best_first_search(
    problem: Problem,
    f: Callable[[Node], float],
    name: str = "BestFirst",
) -> SearchResult:
    """Generic best-first search ordered by f(node).

    Keeps the best known path cost per state; a state is pushed again whenever a
    cheaper path to it is found and outdated heap entries are dropped when popped.
    """
    tree = SearchTree(problem.initial_state())
    frontier = PriorityQueue()
    frontier.push(tree.root, f(tree[tree.root]))
    best_g = {tree[tree.root].state: 0}
    expanded = []

    with MeasuredRun() as meter:
        while frontier:
            index = frontier.pop()
            node = tree[index]
            if node.path_cost > best_g.get(node.state, UNREACHABLE):
                continue  # stale entry
            expanded.append(node.state)
            if problem.is_goal(node.state):
                return solution(name, tree, index, expanded, meter)

            for action, s2, cost in tree.expand(index, problem):
                if cost < best_g.get(s2, UNREACHABLE):
                    best_g[s2] = cost
                    child = tree.add(index, action, s2, cost)
                    frontier.push(child, f(tree[child]))

        return failure(name, expanded, meter)
