# delivery_lab/planner.py
"""
Two-phase delivery planning on top of the search engine.

Phase 1 (assignment): every destination goes to the store with the cheapest path to it
under the chosen strategy; ties go to the store listed first. Destinations no store
can reach are reported and left out of phase 2.

Phase 2 (tours): each store's truck repeatedly delivers to the pending destination
with the cheapest path from the store and drives back before the next one.
This is a nearest-first heuristic, not a travelling-salesman tour.

Nothing is kept between planning runs. Within one run, a (start, goal) pair is
searched once and the result reused, which is safe because searches are deterministic.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from loguru import logger

from .algorithms.registry import Strategy, resolve_strategy
from .core.metrics import SearchResult
from .problems.delivery import DeliveryProblem
from .problems.grid import Grid, Position
from .problems.heuristics import HEURISTICS


def solve(start, goal, grid: Grid, strategy, max_depth: Optional[int] = None) -> SearchResult:
    """Run one search from `start` to `goal` with the strategy named by `strategy`."""
    strat = resolve_strategy(strategy)
    goal = Position(*goal)
    h = HEURISTICS[strat.heuristic](grid, goal) if strat.informed else None
    problem = DeliveryProblem(start, goal, grid, heuristic=h)
    if strat.depth_bounded and max_depth is not None:
        return strat.search(problem, max_depth=max_depth)
    return strat.search(problem)


class _Solver:
    """Per-run memo of solve() results keyed by (start, goal)."""
    def __init__(self, grid: Grid, strategy: Strategy, max_depth: Optional[int]):
        self.grid = grid
        self.strategy = strategy
        self.max_depth = max_depth
        self._results: Dict[Tuple[Position, Position], SearchResult] = {}

    def __call__(self, start: Position, goal: Position) -> SearchResult:
        key = (start, goal)
        if key not in self._results:
            self._results[key] = solve(start, goal, self.grid, self.strategy, self.max_depth)
        return self._results[key]


@dataclass(frozen=True)
class Delivery:
    destination: Position
    result: SearchResult

    @property
    def plan(self) -> Tuple[str, ...]:
        return self.result.plan

    @property
    def cost(self) -> float:
        return self.result.cost

    @property
    def nodes_expanded(self) -> int:
        return self.result.nodes_expanded

    @property
    def path(self) -> Tuple[Position, ...]:
        return self.result.path


@dataclass
class Tour:
    store: Position
    deliveries: List[Delivery] = field(default_factory=list)
    unreachable: List[Position] = field(default_factory=list)

    @property
    def total_cost(self) -> float:
        return sum(d.cost for d in self.deliveries)


@dataclass
class Assignment:
    stores: Dict[Position, Position] = field(default_factory=dict)   # destination -> store
    unreachable: List[Position] = field(default_factory=list)

    def destinations_of(self, store: Position, order) -> List[Position]:
        return [d for d in order if self.stores.get(d) == store]


@dataclass
class PlanReport:
    strategy: str
    assignment: Assignment
    tours: List[Tour]

    @property
    def unreachable(self) -> List[Position]:
        return self.assignment.unreachable

    def to_dict(self) -> dict:
        return {
            "strategy": self.strategy,
            "assignment": [
                {"destination": list(d), "store": list(s)} for d, s in self.assignment.stores.items()
            ],
            "unreachable": [list(d) for d in self.assignment.unreachable],
            "tours": [
                {
                    "store": list(t.store),
                    "deliveries": [
                        {
                            "destination": list(d.destination),
                            "plan": list(d.plan),
                            "cost": d.cost,
                            "nodes_expanded": d.nodes_expanded,
                            "expanded": [list(s) for s in d.result.expanded],
                            "path": [list(p) for p in d.path],
                        }
                        for d in t.deliveries
                    ],
                    "unreachable": [list(d) for d in t.unreachable],
                }
                for t in self.tours
            ],
        }


def assign_destinations(grid: Grid, strategy, max_depth: Optional[int] = None,
                        _solver: Optional[_Solver] = None) -> Assignment:
    solver = _solver or _Solver(grid, resolve_strategy(strategy), max_depth)
    assignment = Assignment()
    for dest in grid.destinations:
        best_store, best_cost = None, None
        for store in grid.stores:
            r = solver(store, dest)
            if r.success and (best_cost is None or r.cost < best_cost):
                best_store, best_cost = store, r.cost
        if best_store is None:
            logger.warning("Destination {} is not reachable from any store", dest)
            assignment.unreachable.append(dest)
        else:
            logger.debug("Destination {} -> store {} (cost {})", dest, best_store, best_cost)
            assignment.stores[dest] = best_store
    return assignment


def build_tour(store, destinations, grid: Grid, strategy, max_depth: Optional[int] = None,
               _solver: Optional[_Solver] = None) -> Tour:
    solver = _solver or _Solver(grid, resolve_strategy(strategy), max_depth)
    store = Position(*store)
    tour = Tour(store)
    pending = [Position(*d) for d in destinations]
    truck = store

    while pending:
        best_dest, best = None, None
        for d in pending:
            r = solver(truck, d)
            if r.success and (best is None or r.cost < best.cost):
                best_dest, best = d, r
        if best_dest is None:
            logger.warning("Destinations {} are not reachable from store {}",
                           ", ".join(map(str, pending)), store)
            tour.unreachable.extend(pending)
            break
        tour.deliveries.append(Delivery(best_dest, best))
        pending.remove(best_dest)
        truck = store  # back to the store after every delivery
    return tour


def plan_deliveries(grid: Grid, strategy, max_depth: Optional[int] = None) -> PlanReport:
    strat = resolve_strategy(strategy)
    solver = _Solver(grid, strat, max_depth)
    logger.info("Planning {} destinations from {} stores with {}",
                len(grid.destinations), len(grid.stores), strat.label)

    assignment = assign_destinations(grid, strat, _solver=solver)
    tours = [
        build_tour(store, assignment.destinations_of(store, grid.destinations), grid, strat, _solver=solver)
        for store in grid.stores
    ]
    logger.info("Planned {} deliveries, {} unreachable",
                sum(len(t.deliveries) for t in tours), len(assignment.unreachable))
    return PlanReport(strat.code, assignment, tours)


def format_report(report: PlanReport) -> str:
    """Printable report, one block per truck."""
    lines = [f"Destination {d} is NOT reachable from any store." for d in report.unreachable]
    lines.append("")
    for tour in report.tours:
        lines.append(f"=== TRUCK AT STORE {tour.store} ===")
        if not tour.deliveries and not tour.unreachable:
            lines.append("No destinations assigned to this store.")
        for d in tour.deliveries:
            lines.append(f"Deliver to {d.destination} | plan={','.join(d.plan)} "
                         f"| cost={d.cost} | expanded={d.nodes_expanded}")
        if tour.unreachable:
            lines.append(f"Some assigned destinations are NOT reachable from store {tour.store}.")
        lines.append("")
    return "\n".join(lines)
