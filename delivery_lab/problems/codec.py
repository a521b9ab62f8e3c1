# delivery_lab/problems/codec.py
"""
Reading and writing grids.

Two external shapes are supported:

1. The compact text pair of the command-line planner::

       initial = "cols;rows;P;S;dx,dy,...;sx,sy,...;ax,ay,bx,by,...;"
       traffic = "x,y,nx,ny,cost;..."      (one segment per directed adjacent edge)

   Destinations come before stores. Tunnels carry no cost (Manhattan distance).
   An edge missing from a non-empty traffic string costs 0, i.e. has no road; an
   empty traffic string means cost 1 everywhere. Blocked roads are not part of the
   format and are written as cost 0.

2. A JSON config with the REST shape::

       {"rows": 3, "cols": 3, "traffic": [[[1,1,1,1], ...]],
        "stores": [{"x": 0, "y": 0}], "destinations": [...],
        "tunnels": [{"start": {...}, "end": {...}, "cost": 2}],
        "roadblocks": [{"from": {...}, "direction": "up"} | {"from": {...}, "to": {...}}]}
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Tuple

import numpy as np
from loguru import logger

from ..core.errors import GridFormatError, GridValidationError
from .grid import DIRECTIONS, Grid, Position, Tunnel

_OFFSETS = {(0, -1): "up", (0, 1): "down", (-1, 0): "left", (1, 0): "right"}


def _ints(field: str, what: str) -> List[int]:
    try:
        return [int(v) for v in field.split(",") if v.strip() != ""]
    except ValueError as e:
        raise GridFormatError(f"bad number in {what}: {field!r}") from e


def _pairs(values: List[int], count: int, what: str) -> List[Position]:
    if len(values) < 2 * count:
        raise GridFormatError(f"expected {count} {what} coordinates, got {len(values) // 2}")
    return [Position(values[2 * i], values[2 * i + 1]) for i in range(count)]


# --- Text format --------------------------------------------------------------

def parse_grid(initial: str, traffic: str = "") -> Grid:
    parts = initial.strip().split(";")
    if len(parts) < 4:
        raise GridFormatError(f"initial state needs at least 'cols;rows;P;S', got {initial!r}")
    try:
        cols, rows, n_dest, n_stores = (int(v) for v in parts[:4])
    except ValueError as e:
        raise GridFormatError(f"bad header {';'.join(parts[:4])!r}") from e

    field = lambda i: parts[i] if len(parts) > i else ""
    destinations = _pairs(_ints(field(4), "destinations"), n_dest, "destination")
    stores = _pairs(_ints(field(5), "stores"), n_stores, "store")
    t = _ints(field(6), "tunnels")
    tunnels = [Tunnel(Position(t[i], t[i + 1]), Position(t[i + 2], t[i + 3])) for i in range(0, len(t) - 3, 4)]

    if traffic is None or traffic.strip() == "":
        table = None
    else:
        if rows <= 0 or cols <= 0:
            raise GridFormatError(f"bad dimensions cols={cols} rows={rows}")
        table = np.zeros((rows, cols, 4), dtype=np.int64)
        for seg in traffic.strip().split(";"):
            if not seg.strip():
                continue
            vals = _ints(seg, "traffic")
            if len(vals) != 5:
                raise GridFormatError(f"traffic segment needs 5 numbers: {seg!r}")
            sx, sy, dx, dy, cost = vals
            direction = _OFFSETS.get((dx - sx, dy - sy))
            if direction is None:
                raise GridFormatError(f"traffic segment joins non-adjacent cells: {seg!r}")
            if not (0 <= sx < cols and 0 <= sy < rows):
                raise GridFormatError(f"traffic segment starts outside the grid: {seg!r}")
            table[sy, sx, DIRECTIONS[direction]] = cost

    return Grid(rows, cols, table, stores=stores, destinations=destinations, tunnels=tunnels)


def encode_grid(grid: Grid) -> Tuple[str, str]:
    """Inverse of parse_grid; explicit tunnel costs and blocked roads are not representable."""
    coords = lambda ps: "".join(f"{p.x},{p.y}," for p in ps)
    initial = (
        f"{grid.cols};{grid.rows};{len(grid.destinations)};{len(grid.stores)};"
        f"{coords(grid.destinations)};{coords(grid.stores)};"
        + "".join(f"{t.a.x},{t.a.y},{t.b.x},{t.b.y}," for t in grid.tunnels) + ";"
    )
    segments = []
    for y in range(grid.rows):
        for x in range(grid.cols):
            here = Position(x, y)
            for (ox, oy), direction in _OFFSETS.items():
                there = Position(x + ox, y + oy)
                if not grid.in_bounds(there):
                    continue
                cost = 0 if grid.is_blocked(here, there) else grid.traffic_cost(here, direction)
                segments.append(f"{x},{y},{there.x},{there.y},{cost};")
    return initial, "".join(segments)


# --- JSON config --------------------------------------------------------------

def _pos(obj, what: str) -> Position:
    try:
        if isinstance(obj, dict):
            return Position(int(obj["x"]), int(obj["y"]))
        return Position(int(obj[0]), int(obj[1]))
    except (KeyError, IndexError, TypeError, ValueError) as e:
        raise GridFormatError(f"bad {what} position: {obj!r}") from e


def grid_from_config(config: dict) -> Grid:
    try:
        rows, cols = int(config["rows"]), int(config["cols"])
    except (KeyError, TypeError, ValueError) as e:
        raise GridFormatError(f"config needs integer 'rows' and 'cols': {e}") from e

    stores = [_pos(p, "store") for p in config.get("stores") or []]
    destinations = [_pos(p, "destination") for p in config.get("destinations") or []]

    tunnels = []
    for tc in config.get("tunnels") or []:
        try:
            start, end = tc["start"], tc["end"]
        except (KeyError, TypeError) as e:
            raise GridFormatError(f"tunnel needs 'start' and 'end': {tc!r}") from e
        cost = tc.get("cost") or None  # 0 / missing -> Manhattan distance
        tunnels.append(Tunnel(_pos(start, "tunnel"), _pos(end, "tunnel"), cost))

    blocked = []
    for rb in config.get("roadblocks") or []:
        try:
            frm = _pos(rb["from"], "roadblock")
        except (KeyError, TypeError) as e:
            raise GridFormatError(f"roadblock needs 'from': {rb!r}") from e
        if "to" in rb:
            blocked.append((frm, _pos(rb["to"], "roadblock")))
            continue
        direction = str(rb.get("direction", "")).lower()
        offset = next((o for o, name in _OFFSETS.items() if name == direction), None)
        if offset is None:
            raise GridFormatError(f"roadblock direction must be up/down/left/right: {rb!r}")
        blocked.append((frm, Position(frm.x + offset[0], frm.y + offset[1])))

    return Grid(rows, cols, config.get("traffic"), stores=stores, destinations=destinations,
                tunnels=tunnels, blocked_roads=blocked)


def grid_to_config(grid: Grid) -> dict:
    as_pos = lambda p: {"x": p.x, "y": p.y}
    blocks = []
    for e in sorted(grid.blocked_roads, key=sorted):
        a, b = sorted(e)
        blocks.append({"from": as_pos(a), "to": as_pos(b)})
    return {
        "rows": grid.rows,
        "cols": grid.cols,
        "traffic": grid.traffic.tolist(),
        "stores": [as_pos(p) for p in grid.stores],
        "destinations": [as_pos(p) for p in grid.destinations],
        "tunnels": [
            {"start": as_pos(t.a), "end": as_pos(t.b), "cost": t.traversal_cost} for t in grid.tunnels
        ],
        "roadblocks": blocks,
    }


def load_grid(path) -> Grid:
    path = Path(path)
    try:
        config = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        logger.error("Grid file {} is not valid JSON: {}", path, e)
        raise GridFormatError(f"{path}: invalid JSON ({e})") from e
    try:
        return grid_from_config(config)
    except (GridFormatError, GridValidationError) as e:
        logger.error("Grid file {} rejected: {}", path, e)
        raise


def save_grid(grid: Grid, path) -> Path:
    path = Path(path)
    path.write_text(json.dumps(grid_to_config(grid), indent=2), encoding="utf-8")
    return path
