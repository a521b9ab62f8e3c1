# Uniform Cost Search: best-first ordered by path cost g alone.
# delivery_lab/algorithms/ucs.py
from __future__ import annotations
from .best_first import best_first_search

def uniform_cost_search(problem):
    return best_first_search(problem, f=lambda n: n.path_cost, name="UCS")
