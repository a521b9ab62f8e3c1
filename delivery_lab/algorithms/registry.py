# delivery_lab/algorithms/registry.py
# One table mapping strategy identifiers to search functions. Every caller resolves
# identifiers here; unknown identifiers are rejected rather than replaced by a default.
from __future__ import annotations
from dataclasses import dataclass
from functools import partial
from typing import Callable, Dict, Optional, Tuple

from ..core.errors import UnknownStrategyError
from ..core.metrics import SearchResult
from .astar import a_star_search
from .bfs import breadth_first_search
from .dfs import depth_first_search
from .greedy import greedy_best_first_search
from .ids import iterative_deepening_search
from .ucs import uniform_cost_search


@dataclass(frozen=True)
class Strategy:
    code: str
    label: str
    search: Callable[..., SearchResult]
    heuristic: Optional[str] = None   # key into the problem-side heuristic table
    depth_bounded: bool = False       # accepts a max_depth keyword

    @property
    def informed(self) -> bool:
        return self.heuristic is not None


STRATEGIES: Dict[str, Strategy] = {s.code: s for s in (
    Strategy("BF", "Breadth-first", breadth_first_search),
    Strategy("DF", "Depth-first", depth_first_search),
    Strategy("ID", "Iterative deepening", iterative_deepening_search, depth_bounded=True),
    Strategy("UC", "Uniform cost", uniform_cost_search),
    Strategy("G1", "Greedy (h1)", partial(greedy_best_first_search, name="Greedy-h1"), heuristic="h1"),
    Strategy("G2", "Greedy (h2)", partial(greedy_best_first_search, name="Greedy-h2"), heuristic="h2"),
    Strategy("AS1", "A* (h1)", partial(a_star_search, name="A*-h1"), heuristic="h1"),
    Strategy("AS2", "A* (h2)", partial(a_star_search, name="A*-h2"), heuristic="h2"),
)}

_ALIASES: Dict[str, str] = {
    "BFS": "BF", "BREADTH-FIRST": "BF",
    "DFS": "DF", "DEPTH-FIRST": "DF",
    "IDS": "ID", "ITERATIVE-DEEPENING": "ID",
    "UCS": "UC", "UNIFORM-COST": "UC",
    "GREEDY": "G1", "GREEDY1": "G1", "GREEDY-H1": "G1",
    "GREEDY2": "G2", "GREEDY-H2": "G2",
    "ASTAR": "AS1", "A*": "AS1", "A-STAR": "AS1", "ASTAR1": "AS1", "ASTAR-H1": "AS1", "A*1": "AS1",
    "ASTAR2": "AS2", "ASTAR-H2": "AS2", "A*2": "AS2",
}


def strategy_codes() -> Tuple[str, ...]:
    return tuple(STRATEGIES)


def resolve_strategy(identifier) -> Strategy:
    """Case-insensitive lookup of a strategy by code or alias."""
    if isinstance(identifier, Strategy):
        return identifier
    if not isinstance(identifier, str) or not identifier.strip():
        raise UnknownStrategyError(identifier, STRATEGIES)
    key = identifier.strip().upper()
    key = _ALIASES.get(key, key)
    try:
        return STRATEGIES[key]
    except KeyError:
        raise UnknownStrategyError(identifier, STRATEGIES) from None
