"""logic/navigation/paths.py — Precomputed node-to-node routes.

Every ordered pair of connected nodes gets a cached route, computed once
at level load so per-frame agent queries are dictionary lookups.

Search order
------------
Routes come from a breadth-first search from each start node.  BFS
expands in *hop* order, not distance order, so the route recorded for a
pair is the fewest-hops route (ties broken by adjacency order) — not
necessarily the shortest by summed edge length.  On hand-placed graphs
with edges of similar length the two agree; on graphs mixing very short
and very long edges they can differ:

    0 ──10── 3          BFS from 0 reaches 3 directly (1 hop, 10.0)
    │        │          even though 0-1-2-3 is 1+1+1 = 3.0
    1 ─1─ 2 ─1

When an entry already exists for a pair (merging into an existing table)
the shorter of the two is kept.

    table = compute_all_pairs(nodes, edges, distances)
    table.path(0, 5)      # → (0, 2, 5)
    table.length(0, 5)    # → 9.7
    table.path(0, 9)      # → ()   unreachable
"""

from __future__ import annotations
import math
from collections import deque
from typing import Iterator, Sequence

Point = tuple[float, float]
Edges = dict[int, list[int]]
Distances = dict[tuple[int, int], float]


class PathTable:
    """``(start, goal) → (length, route)``; a missing key means unreachable."""

    def __init__(self) -> None:
        self._entries: dict[tuple[int, int], tuple[float, tuple[int, ...]]] = {}

    def path(self, start: int, goal: int) -> tuple[int, ...]:
        """Route from *start* to *goal* inclusive, or ``()``."""
        entry = self._entries.get((start, goal))
        return entry[1] if entry is not None else ()

    def length(self, start: int, goal: int) -> float | None:
        entry = self._entries.get((start, goal))
        return entry[0] if entry is not None else None

    def relax(self, start: int, goal: int, length: float,
              route: Sequence[int]) -> bool:
        """Record the route if the pair is new or *length* is shorter."""
        prev = self._entries.get((start, goal))
        if prev is not None and length >= prev[0]:
            return False
        self._entries[(start, goal)] = (length, tuple(route))
        return True

    def items(self) -> Iterator[tuple[tuple[int, int], tuple[float, tuple[int, ...]]]]:
        return iter(self._entries.items())

    def clear(self) -> None:
        self._entries.clear()

    def __contains__(self, pair: object) -> bool:
        return pair in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, PathTable):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"PathTable(pairs={len(self._entries)})"


def compute_all_pairs(
    nodes: Sequence[Point],
    edges: Edges,
    distances: Distances,
    table: PathTable | None = None,
) -> PathTable:
    """Fill a PathTable with a BFS route for every reachable ordered pair.

    *table* is merged into (keep-the-shorter) when given; otherwise a
    fresh one is returned.  Pairs ``(n, n)`` are never stored.
    """
    if table is None:
        table = PathTable()

    for start in range(len(nodes)):
        parents: dict[int, int] = {}
        explored = {start}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            if node != start:
                length, route = _backtrack(node, parents, nodes, distances)
                table.relax(start, node, length, route)
            for adjacent in edges.get(node, ()):
                if adjacent in explored:
                    continue
                explored.add(adjacent)
                parents[adjacent] = node
                queue.append(adjacent)

    return table


def _backtrack(goal: int, parents: dict[int, int], nodes: Sequence[Point],
               distances: Distances) -> tuple[float, list[int]]:
    route = [goal]
    length = 0.0
    current = goal
    while current in parents:
        parent = parents[current]
        d = distances.get((current, parent))
        if d is None:
            d = math.dist(nodes[current], nodes[parent])
        length += d
        route.append(parent)
        current = parent
    route.reverse()
    return length, route
