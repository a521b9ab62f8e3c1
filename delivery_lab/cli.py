# delivery_lab/cli.py
"""
Command-line entry point.

    python -m delivery_lab.cli plan --grid city.json --strategy AS2
    python -m delivery_lab.cli plan --seed 3 --json
    python -m delivery_lab.cli solve --grid city.json --start 0,0 --goal 4,2 --strategy UCS
    python -m delivery_lab.cli generate --seed 3 --out city.json
    python -m delivery_lab.cli bench --seed 3 --plot bench.png
    python -m delivery_lab.cli check --grid city.json

Grids come from a JSON config (--grid), the compact text format (--initial/--traffic)
or the random generator (--seed). Defaults come from DELIVERY_* environment variables.
"""
from __future__ import annotations

import argparse
import json
import sys
from typing import List, Optional

from loguru import logger

from .algorithms.registry import strategy_codes
from .benchmarks.run_all import benchmark, format_table, write_results
from .config import Settings, configure_logging
from .core.errors import ConfigError, DeliveryLabError
from .planner import format_report, plan_deliveries, solve
from .problems.checks import sanity_check_problem
from .problems.codec import grid_to_config, load_grid, parse_grid, save_grid
from .problems.delivery import DeliveryProblem
from .problems.generator import generate_grid
from .problems.grid import Position


def _position(text: str) -> Position:
    try:
        x, y = (int(v) for v in text.split(","))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected 'x,y', got {text!r}") from None
    return Position(x, y)


def _add_grid_source(p: argparse.ArgumentParser) -> None:
    src = p.add_mutually_exclusive_group()
    src.add_argument("--grid", help="JSON grid config file")
    src.add_argument("--initial", help="compact initial-state string (cols;rows;P;S;...)")
    src.add_argument("--seed", type=int, help="generate a random grid from this seed")
    p.add_argument("--traffic", default="", help="traffic string to go with --initial")


def _load(args, settings: Settings):
    if args.grid:
        return load_grid(args.grid)
    if args.initial:
        return parse_grid(args.initial, args.traffic)
    seed = args.seed if args.seed is not None else settings.bench_seed
    logger.info("Generating grid from seed {}", seed)
    return generate_grid(seed=seed)


def build_parser(settings: Settings) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="delivery-lab", description="Delivery route planning on a weighted grid")
    parser.add_argument("--log-level", default=settings.log_level, help="loguru level (default: %(default)s)")
    sub = parser.add_subparsers(dest="command", required=True)

    strategy_help = f"one of {', '.join(strategy_codes())} or an alias (default: %(default)s)"

    p_plan = sub.add_parser("plan", help="assign destinations to stores and build every tour")
    _add_grid_source(p_plan)
    p_plan.add_argument("--strategy", default=settings.strategy, help=strategy_help)
    p_plan.add_argument("--max-depth", type=int, default=settings.ids_max_depth,
                        help="depth bound for iterative deepening")
    p_plan.add_argument("--json", action="store_true", help="print the plan as JSON")

    p_solve = sub.add_parser("solve", help="search a single start/goal pair")
    _add_grid_source(p_solve)
    p_solve.add_argument("--start", type=_position, required=True)
    p_solve.add_argument("--goal", type=_position, required=True)
    p_solve.add_argument("--strategy", default=settings.strategy, help=strategy_help)
    p_solve.add_argument("--max-depth", type=int, default=settings.ids_max_depth)

    p_gen = sub.add_parser("generate", help="write a random grid as JSON")
    p_gen.add_argument("--seed", type=int, default=None)
    p_gen.add_argument("--out", help="output file (default: stdout)")

    p_check = sub.add_parser("check", help="walk the cells reachable from each store and price every move")
    _add_grid_source(p_check)

    p_bench = sub.add_parser("bench", help="compare strategies on one grid")
    _add_grid_source(p_bench)
    p_bench.add_argument("--strategies", nargs="+", default=None,
                         help="strategies to run (default: all but iterative deepening)")
    p_bench.add_argument("--max-depth", type=int, default=settings.ids_max_depth)
    p_bench.add_argument("--json-out", help="write results JSON here")
    p_bench.add_argument("--plot", help="write a comparison chart (PNG) here")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    try:
        settings = Settings.from_env()
    except ConfigError as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    args = build_parser(settings).parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.command == "plan":
            report = plan_deliveries(_load(args, settings), args.strategy, max_depth=args.max_depth)
            if args.json:
                print(json.dumps(report.to_dict(), indent=2))
            else:
                print(format_report(report))

        elif args.command == "solve":
            r = solve(args.start, args.goal, _load(args, settings), args.strategy, max_depth=args.max_depth)
            print(json.dumps(r.to_dict(), indent=2))
            if not r.success:
                return 1

        elif args.command == "generate":
            grid = generate_grid(seed=args.seed)
            if args.out:
                print(f"Wrote {save_grid(grid, args.out)}")
            else:
                print(json.dumps(grid_to_config(grid), indent=2))

        elif args.command == "check":
            grid = _load(args, settings)
            for store in grid.stores:
                seen = sanity_check_problem(DeliveryProblem(store, store, grid))
                print(f"Store {store}: {seen} reachable cells")

        elif args.command == "bench":
            rows = benchmark(_load(args, settings), args.strategies, max_depth=args.max_depth)
            print(format_table(rows))
            if args.json_out:
                print(f"Wrote {write_results(rows, args.json_out)}")
            if args.plot:
                from .plots.plotting import save_comparison
                print(f"Wrote {save_comparison(rows, args.plot)}")

    except (DeliveryLabError, OSError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    sys.exit(main())
