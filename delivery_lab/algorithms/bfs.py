# delivery_lab/algorithms/bfs.py
# Breadth-First Search: FIFO frontier, a state is admitted at most once (reached set).
from __future__ import annotations
from ..core.frontiers import FIFOQueue
from ..core.node import SearchTree
from ..core.metrics import SearchResult, MeasuredRun
from ..core.problem import Problem
from ..core.utils import solution, failure

def breadth_first_search(problem: Problem) -> SearchResult:
    name = "BFS"
    tree = SearchTree(problem.initial_state())
    frontier = FIFOQueue()
    frontier.push(tree.root)
    reached = {tree[tree.root].state}
    expanded = []

    with MeasuredRun() as meter:
        while frontier:
            index = frontier.pop()
            state = tree[index].state
            expanded.append(state)
            if problem.is_goal(state):
                return solution(name, tree, index, expanded, meter)

            for action, s2, cost in tree.expand(index, problem):
                if s2 not in reached:
                    reached.add(s2)
                    frontier.push(tree.add(index, action, s2, cost))

        return failure(name, expanded, meter)
