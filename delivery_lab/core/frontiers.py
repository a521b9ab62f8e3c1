# delivery_lab/core/frontiers.py
from __future__ import annotations
import heapq
import itertools
from collections import deque


class FIFOQueue:
    def __init__(self):
        self._items = deque()
    def push(self, x): self._items.append(x)
    def pop(self): return self._items.popleft()
    def __len__(self): return len(self._items)


class LIFOStack:
    def __init__(self):
        self._items = []
    def push(self, x): self._items.append(x)
    def pop(self): return self._items.pop()
    def __len__(self): return len(self._items)


class PriorityQueue:
    """Min-heap keyed by an explicit priority; equal priorities pop in insertion order."""
    def __init__(self):
        self._heap = []
        self._counter = itertools.count()

    def push(self, x, priority):
        heapq.heappush(self._heap, (priority, next(self._counter), x))

    def pop(self):
        return heapq.heappop(self._heap)[2]

    def __len__(self): return len(self._heap)
