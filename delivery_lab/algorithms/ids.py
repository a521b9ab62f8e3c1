from __future__ import annotations
from typing import Optional
from ..core.frontiers import LIFOStack
from ..core.node import SearchTree
from ..core.problem import Problem
from ..core.utils import solution, failure
from ..core.metrics import SearchResult, MeasuredRun

def iterative_deepening_search(problem: Problem, max_depth: Optional[int] = None) -> SearchResult:
    """
    Iterative Deepening Search (tree-like). Repeats a depth-limited DFS with limits 0, 1, 2, ...
    A child is skipped only if its state already lies on its own root-to-node path; there is
    no global closed set, so every round rebuilds the tree from scratch.

    Stops when a round finishes without hitting the depth limit (the whole cycle-free tree was
    seen), or after `max_depth` when the caller imposes a bound. Expansions accumulate across rounds.
    """
    name = "IDS"
    expanded = []
    start = problem.initial_state()

    with MeasuredRun() as meter:
        limit = 0
        while max_depth is None or limit <= max_depth:
            tree = SearchTree(start)
            frontier = LIFOStack()
            frontier.push(tree.root)
            cutoff = False

            while frontier:
                index = frontier.pop()
                node = tree[index]
                expanded.append(node.state)
                if problem.is_goal(node.state):
                    return solution(name, tree, index, expanded, meter)
                if node.depth == limit:
                    cutoff = True
                    continue
                for action, s2, cost in tree.expand(index, problem):
                    if not tree.on_path(index, s2):
                        frontier.push(tree.add(index, action, s2, cost))

            if not cutoff:
                break  # fully explored; deeper limits cannot find anything new
            limit += 1

        return failure(name, expanded, meter)
