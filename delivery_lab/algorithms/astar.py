# delivery_lab/algorithms/astar.py
from __future__ import annotations
from typing import Callable, Optional
from .best_first import best_first_search
from ..core.problem import State
from ..core.utils import heuristic_from_problem

def a_star_search(problem, heuristic: Optional[Callable[[State], float]] = None, name: str = "A*"):
    h = heuristic or heuristic_from_problem(problem)
    return best_first_search(problem, f=lambda n: n.path_cost + h(n.state), name=name)
