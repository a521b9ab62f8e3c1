# delivery_lab/algorithms/greedy.py
# Greedy best-first: the frontier is ordered by h alone and a state is expanded once.
from __future__ import annotations
from typing import Callable, Optional
from ..core.frontiers import PriorityQueue
from ..core.node import SearchTree
from ..core.metrics import SearchResult, MeasuredRun
from ..core.problem import Problem, State
from ..core.utils import solution, failure, heuristic_from_problem

def greedy_best_first_search(problem: Problem, heuristic: Optional[Callable[[State], float]] = None,
                             name: str = "Greedy") -> SearchResult:
    h = heuristic or heuristic_from_problem(problem)
    tree = SearchTree(problem.initial_state())
    frontier = PriorityQueue()
    frontier.push(tree.root, h(tree[tree.root].state))
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
                    frontier.push(tree.add(index, action, s2, cost), h(s2))

        return failure(name, expanded, meter)
