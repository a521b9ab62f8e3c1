# delivery_lab/problems/checks.py
from __future__ import annotations
from ..core.frontiers import FIFOQueue
from ..core.problem import Problem

def sanity_check_problem(problem: Problem, max_states: int = 10_000) -> int:
    """Breadth-first walk over the reachable states that prices every listed action.

    Fails on a step cost that is None or negative; a successor the problem refuses
    to price raises whatever the problem raises. Returns the number of states seen.
    """
    start = problem.initial_state()
    seen = {start}
    frontier = FIFOQueue()
    frontier.push(start)
    while frontier and len(seen) < max_states:
        s = frontier.pop()
        for a in problem.actions(s):
            s2 = problem.result(s, a)
            cost = problem.step_cost(s, a, s2)
            if cost is None or cost < 0:
                raise AssertionError(f"step_cost is {cost!r} for (s={s}, a={a}, s'={s2})")
            if s2 not in seen:
                seen.add(s2)
                frontier.push(s2)
    return len(seen)
