# delivery_lab/benchmarks/run_all.py
# Runs every strategy over all (store, destination) pairs of one grid and tabulates
# success, total cost, expansions, time and peak memory per strategy.
# Iterative deepening is left out unless asked for: its rounds grow exponentially
# with path length on open grids.
from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Iterable, List, Optional

from loguru import logger

from ..algorithms.registry import STRATEGIES, resolve_strategy
from ..config import Settings
from ..core.metrics import MeasuredRun
from ..planner import solve
from ..problems.generator import generate_grid
from ..problems.grid import Grid


def benchmark(grid: Grid, strategies: Optional[Iterable[str]] = None,
              max_depth: Optional[int] = None) -> List[dict]:
    rows = []
    pairs = [(s, d) for s in grid.stores for d in grid.destinations]
    if strategies is None:
        strategies = [code for code, s in STRATEGIES.items() if not s.depth_bounded]
    for code in strategies:
        strat = resolve_strategy(code)
        logger.info("Running {} on {} pairs", strat.label, len(pairs))
        solved, cost, expanded = 0, 0, 0
        with MeasuredRun(trace_memory=True) as meter:
            for start, goal in pairs:
                r = solve(start, goal, grid, strat, max_depth=max_depth)
                expanded += r.nodes_expanded
                if r.success:
                    solved += 1
                    cost += r.cost
        rows.append({
            "algo": strat.code,
            "label": strat.label,
            "pairs": len(pairs),
            "solved": solved,
            "cost": cost,
            "nodes_expanded": expanded,
            "time_s": meter.elapsed,
            "peak_kb": meter.peak_kb,
        })
    return rows


def format_table(rows: List[dict]) -> str:
    lines = [
        "| Algorithm | Solved | Total cost | Nodes Expanded | Time (s) | Peak KB |",
        "|---|---:|---:|---:|---:|---:|",
    ]
    for r in rows:
        lines.append(
            f"| {r['label']} | {r['solved']}/{r['pairs']} | {r['cost']} | {r['nodes_expanded']} | "
            f"{r['time_s']:.6f} | {r['peak_kb']} |"
        )
    return "\n".join(lines)


def write_results(rows: List[dict], path) -> Path:
    path = Path(path)
    path.write_text(json.dumps({"results": rows, "ts": time.time()}, indent=2), encoding="utf-8")
    return path


def main():
    settings = Settings.from_env()
    grid = generate_grid(seed=settings.bench_seed)
    rows = benchmark(grid, max_depth=settings.ids_max_depth)
    print(format_table(rows))
    print(f"Wrote {write_results(rows, Path(__file__).with_name('results.json'))}")


if __name__ == "__main__":
    main()
