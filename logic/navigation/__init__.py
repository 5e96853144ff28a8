"""logic.navigation — Visibility-graph pathfinding over hand-placed nodes.

Submodules
----------
visibility   build_visibility — node-to-node line-of-sight graph
regions      RegionIndex — named zones and node membership
paths        compute_all_pairs / PathTable — precomputed routes
pathfinder   Pathfinder — graph state + per-frame query service
systems      ECS glue: marker ingestion, precompute, player tracking
"""

from logic.navigation.visibility import build_visibility, edge_count, undirected_edges
from logic.navigation.regions import RegionIndex
from logic.navigation.paths import PathTable, compute_all_pairs
from logic.navigation.pathfinder import NavState, Pathfinder, build_pathfinder

__all__ = [
    "build_visibility", "edge_count", "undirected_edges",
    "RegionIndex",
    "PathTable", "compute_all_pairs",
    "NavState", "Pathfinder", "build_pathfinder",
]
