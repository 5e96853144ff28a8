"""logic/navigation/visibility.py — Visibility graph over navigation nodes.

Two nodes are connected iff a ray between them hits no wall.  Nodes are
hand-placed and few (tens), so the O(n²) raycasts are a one-time
load-screen cost rather than a per-frame one.

    edges, distances = build_visibility(nodes, collisions)
    edges[0]            # → [1, 4]   neighbours in discovery order
    distances[(0, 1)]   # → 5.0      same value stored for (1, 0)
"""

from __future__ import annotations
import math
from typing import Sequence

from core.collision import CollisionGroups, RayOracle, WALL_ONLY
from core.tuning import get as _tun

Point = tuple[float, float]
Edges = dict[int, list[int]]
Distances = dict[tuple[int, int], float]


def build_visibility(
    nodes: Sequence[Point],
    oracle: RayOracle,
    groups: CollisionGroups = WALL_ONLY,
    max_toi: float | None = None,
) -> tuple[Edges, Distances]:
    """Cast between every ordered pair of nodes and connect the clear ones.

    Parameters
    ----------
    nodes : sequence of (x, y)
        Node positions; a node's id is its index.
    oracle : RayOracle
        Anything with ``cast_ray(origin, direction, max_toi, solid, groups)``.
    groups : CollisionGroups
        Which colliders can block sight.  Walls only by default.
    max_toi : float | None
        Ray length as a multiple of ``b - a``.  ``1.0`` (the default,
        from ``[pathfinding] ray_max_toi``) spans the whole segment.

    Returns
    -------
    (edges, distances)
        ``edges[a]`` lists the neighbours of *a* (no duplicates, no
        self-loops); isolated nodes have no key.  ``distances`` holds the
        Euclidean length for both orientations of every edge.
    """
    if max_toi is None:
        max_toi = float(_tun("pathfinding", "ray_max_toi", 1.0))

    edges: Edges = {}
    distances: Distances = {}
    n = len(nodes)

    for a in range(n):
        ax, ay = nodes[a]
        for b in range(n):
            if a == b:
                continue
            # Either direction being clear is enough.
            if (a, b) in distances:
                continue
            bx, by = nodes[b]
            hit = oracle.cast_ray((ax, ay), (bx - ax, by - ay), max_toi, True, groups)
            if hit is not None:
                continue
            d = math.hypot(bx - ax, by - ay)
            _link(edges, a, b)
            _link(edges, b, a)
            distances[(a, b)] = d
            distances[(b, a)] = d

    return edges, distances


def _link(edges: Edges, a: int, b: int) -> None:
    neighbours = edges.setdefault(a, [])
    if b not in neighbours:
        neighbours.append(b)


def edge_count(edges: Edges) -> int:
    """Number of undirected edges."""
    return sum(len(v) for v in edges.values()) // 2


def undirected_edges(edges: Edges) -> list[tuple[int, int]]:
    """Each edge once as ``(a, b)`` with ``a < b``, sorted."""
    return sorted({(min(a, b), max(a, b)) for a, bs in edges.items() for b in bs})
