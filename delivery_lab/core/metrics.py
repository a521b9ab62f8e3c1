# delivery_lab/core/metrics.py
from __future__ import annotations
from dataclasses import dataclass
import math
import time
import tracemalloc
from typing import Optional, Tuple

# Cost reported by every strategy when the goal cannot be reached.
UNREACHABLE = math.inf


@dataclass(frozen=True)
class SearchResult:
    algo: str
    plan: Tuple = ()
    cost: float = UNREACHABLE
    nodes_expanded: int = 0
    expanded: Tuple = ()      # states in expansion order
    path: Tuple = ()          # states from start to goal inclusive
    time_s: float = 0.0

    @property
    def success(self) -> bool:
        return self.cost != UNREACHABLE

    def to_dict(self) -> dict:
        return {
            "algo": self.algo,
            "success": self.success,
            "plan": list(self.plan),
            "cost": self.cost if self.success else None,
            "nodes_expanded": self.nodes_expanded,
            "path": [list(s) for s in self.path],
            "expanded": [list(s) for s in self.expanded],
        }


class MeasuredRun:
    """
    Context manager for timing and, when asked, (approximate) peak memory.
    Safe to query .elapsed and .peak_kb *inside* the with-block.
    """
    def __init__(self, trace_memory: bool = False) -> None:
        self.trace_memory = trace_memory
        self.t0: Optional[float] = None
        self.t1: Optional[float] = None
        self._peak_kb: int = 0
        self._tracing: bool = False

    def __enter__(self) -> "MeasuredRun":
        if self.trace_memory:
            self._tracing = True
            tracemalloc.start()
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.t1 = time.perf_counter()
        if self._tracing:
            _, peak = tracemalloc.get_traced_memory()
            tracemalloc.stop()
            self._tracing = False
            self._peak_kb = max(self._peak_kb, peak // 1024)
        return False

    @property
    def elapsed(self) -> float:
        if self.t0 is None:
            return 0.0
        if self.t1 is None:
            return time.perf_counter() - self.t0
        return self.t1 - self.t0

    @property
    def peak_kb(self) -> int:
        if self._tracing:
            _, peak = tracemalloc.get_traced_memory()
            return max(self._peak_kb, peak // 1024)
        return self._peak_kb
