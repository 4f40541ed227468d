"""Walks over the import graph built by an :class:`ImportTracker`.

Every edge lookup goes through the tracker, so repeated walks over the same
files only pay for extraction once.
"""

from __future__ import annotations

from collections import deque
from typing import Dict, Iterable, List, Optional, Set

from .tracker import ImportTracker


def reachable(tracker: ImportTracker, entry: str, hops: Optional[int] = None) -> Set[str]:
    """Files reachable from *entry* within *hops* edges (unbounded if None).

    *entry* itself is not included unless a cycle leads back to it.
    """
    seen: Set[str] = set()
    queue = deque([(entry, 0)])

    while queue:
        current, depth = queue.popleft()
        if hops is not None and depth >= hops:
            continue
        for nxt in tracker.get_imports(current):
            if nxt not in seen:
                seen.add(nxt)
                queue.append((nxt, depth + 1))
    return seen


def dependents(tracker: ImportTracker, files: Iterable[str], target: str) -> Set[str]:
    """Files among *files* that import *target* directly."""
    return {f for f in files if target in tracker.get_imports(f)}


def find_cycles(tracker: ImportTracker, entries: Iterable[str]) -> List[List[str]]:
    """Import cycles closed by a back edge during a depth-first walk from *entries*.

    Each cycle is reported once, rotated to start at its smallest path.
    This is not an enumeration of every elementary cycle: a cycle that only
    passes through files already finished by the walk is not reported, but
    every cyclic import graph yields at least one cycle.
    """
    cycles: List[List[str]] = []
    seen_cycles: Set[tuple] = set()
    state: Dict[str, int] = {}  # 1 = on the current path, 2 = finished

    for entry in entries:
        if entry in state:
            continue
        path: List[str] = []
        stack = [(entry, iter(tracker.get_imports(entry)))]
        state[entry] = 1
        path.append(entry)

        while stack:
            node, children = stack[-1]
            child = next(children, None)
            if child is None:
                stack.pop()
                path.pop()
                state[node] = 2
                continue

            if state.get(child) == 1:
                cycle = path[path.index(child):]
                start = cycle.index(min(cycle))
                cycle = cycle[start:] + cycle[:start]
                if tuple(cycle) not in seen_cycles:
                    seen_cycles.add(tuple(cycle))
                    cycles.append(cycle)
            elif child not in state:
                state[child] = 1
                path.append(child)
                stack.append((child, iter(tracker.get_imports(child))))

    return cycles
