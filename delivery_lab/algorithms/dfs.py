# delivery_lab/algorithms/dfs.py
# Depth-First Search with a LIFO stack. Duplicates are only discarded when popped
# after their state has already been closed, so it stays complete on finite spaces.
# Children are pushed in the order the problem lists its actions; the last one
# listed is therefore explored first.
from __future__ import annotations
from ..core.frontiers import LIFOStack
from ..core.node import SearchTree
from ..core.metrics import SearchResult, MeasuredRun
from ..core.problem import Problem
from ..core.utils import solution, failure

def depth_first_search(problem: Problem) -> SearchResult:
    name = "DFS"
    tree = SearchTree(problem.initial_state())
    frontier = LIFOStack()
    frontier.push(tree.root)
    closed = set()
    expanded = []

    with MeasuredRun() as meter:
        while frontier:
            index = frontier.pop()
            state = tree[index].state
            if state in closed:
                continue
            closed.add(state)
            expanded.append(state)
            if problem.is_goal(state):
                return solution(name, tree, index, expanded, meter)

            for action, s2, cost in tree.expand(index, problem):
                if s2 not in closed:
                    frontier.push(tree.add(index, action, s2, cost))

        return failure(name, expanded, meter)
