"""logic/navigation/pathfinder.py — Navigation graph state and query service.

One ``Pathfinder`` per play session, stored as a world resource and
handed explicitly to the systems that need it.

Lifecycle
---------
::

    UNBUILT ──precompute(oracle)──▶ BUILT
       ▲                              │
       └──── add_nodes / add_regions ─┘   (graph is stale, rebuild all)

Nodes and regions are ingested additively while the level spawns.  The
first ``precompute()`` after ingestion builds the visibility graph, the
region maps and the path table, in that order.  Calling it again with
nothing new is a no-op.

Every query is total: an unknown location, an unbuilt graph or an
unreachable node all come back as ``None`` / empty, never an exception.
Callers decide what "no navigation help" means for them (usually: chase
in a straight line, or stand still).
"""

from __future__ import annotations
import enum
import math
from typing import Iterable, Sequence

from components.navigation import Region
from core.collision import CollisionGroups, RayOracle, WALL_ONLY
from logic.navigation.paths import PathTable, compute_all_pairs
from logic.navigation.regions import RegionIndex
from logic.navigation.visibility import Distances, Edges, build_visibility, edge_count

Point = tuple[float, float]


class NavState(enum.Enum):
    UNBUILT = "unbuilt"
    BUILT = "built"


class Pathfinder:
    """Visibility graph + regions + all-pairs routes over hand-placed nodes."""

    def __init__(self, groups: CollisionGroups = WALL_ONLY) -> None:
        self.groups = groups
        self.state = NavState.UNBUILT
        self._nodes: list[Point] = []
        self._pending_regions: list[Region] = []
        self.edges: Edges = {}
        self.distances: Distances = {}
        self.region_index = RegionIndex()
        self.paths = PathTable()
        self.player_region: int | None = None
        self.previous_region: int | None = None

    # ── Ingestion ────────────────────────────────────────────────────

    @property
    def nodes(self) -> tuple[Point, ...]:
        return tuple(self._nodes)

    @property
    def regions(self) -> tuple[Region, ...]:
        return tuple(self._pending_regions)

    def add_nodes(self, points: Iterable[Point]) -> int:
        """Append nodes (ids continue from the current count).  Returns how many."""
        added = [(float(x), float(y)) for x, y in points]
        if added:
            self._nodes.extend(added)
            self._mark_stale()
        return len(added)

    def add_regions(self, regions: Iterable[Region]) -> int:
        added = list(regions)
        if added:
            self._pending_regions.extend(added)
            self._mark_stale()
        return len(added)

    def _mark_stale(self) -> None:
        if self.state is NavState.BUILT:
            print("[PATHFINDING] navigation data changed — graph marked stale")
        self.state = NavState.UNBUILT

    # ── Precompute ───────────────────────────────────────────────────

    def is_built(self) -> bool:
        return self.state is NavState.BUILT

    def precompute(self, oracle: RayOracle) -> bool:
        """Build everything from scratch unless already built.

        Node positions must be final before this runs: the visibility
        casts read them once and never again.  Returns True if a build
        happened.
        """
        if self.state is NavState.BUILT:
            return False
        self.edges, self.distances = build_visibility(self._nodes, oracle, self.groups)
        self.region_index.rebuild(self._nodes, self._pending_regions)
        self.paths = compute_all_pairs(self._nodes, self.edges, self.distances)
        self.state = NavState.BUILT
        print(f"[PATHFINDING] built {len(self._nodes)} nodes, "
              f"{edge_count(self.edges)} edges, {len(self.region_index)} regions, "
              f"{len(self.paths)} paths")
        return True

    def reset(self) -> None:
        """Teardown at session end: forget all nodes, regions and tracking."""
        self._nodes.clear()
        self._pending_regions.clear()
        self.edges = {}
        self.distances = {}
        self.region_index.clear()
        self.paths = PathTable()
        self.player_region = None
        self.previous_region = None
        self.state = NavState.UNBUILT

    # ── Queries ──────────────────────────────────────────────────────

    def region_index_of(self, point: Point) -> int | None:
        """Index of the region containing *point*, or None."""
        if not self.is_built():
            return None
        return self.region_index.region_of(point)

    def region_of(self, point: Point) -> Region | None:
        """The Region containing *point*, or None ("off the known map")."""
        return self.region_index.get(self.region_index_of(point))

    def nodes_in_region(self, index: int | None) -> list[int]:
        return self.region_index.nodes_in_region(index)

    def closest_node(self, point: Point) -> int | None:
        """Nearest node in the same region as *point*.

        None if *point* is outside every region or its region holds no
        nodes.  Ties go to the lower node id.
        """
        best: int | None = None
        best_d = math.inf
        px, py = point
        for n in self.nodes_in_region(self.region_index_of(point)):
            nx, ny = self._nodes[n]
            d = (nx - px) * (nx - px) + (ny - py) * (ny - py)
            if d < best_d:
                best_d = d
                best = n
        return best

    def path(self, start: int | None, goal: int | None) -> tuple[int, ...]:
        """Precomputed route start→goal inclusive; ``()`` if none."""
        if start is None or goal is None:
            return ()
        return self.paths.path(start, goal)

    def node(self, index: int) -> Point:
        return self._nodes[index]

    # ── Player tracking ──────────────────────────────────────────────

    def track_player_region(self, position: Point) -> bool:
        """Update the tracked region from the player's position.

        Outside every region the last known region is kept.  Returns
        True when the region changed this call.
        """
        current = self.region_index_of(position)
        if current is None or current == self.player_region:
            return False
        self.previous_region = self.player_region
        self.player_region = current
        return True

    def nodes_in_player_region(self) -> list[int]:
        """Node ids in the player's region; empty while it is unknown."""
        return self.nodes_in_region(self.player_region)

    def player_region_name(self) -> str:
        region = self.region_index.get(self.player_region)
        return region.name if region else ""

    def __repr__(self) -> str:
        return (f"Pathfinder(state={self.state.value}, nodes={len(self._nodes)}, "
                f"regions={len(self._pending_regions)}, paths={len(self.paths)})")


def build_pathfinder(nodes: Sequence[Point], regions: Sequence[Region],
                     oracle: RayOracle,
                     groups: CollisionGroups = WALL_ONLY) -> Pathfinder:
    """Convenience: ingest and precompute in one call (tools, tests)."""
    pf = Pathfinder(groups)
    pf.add_nodes(nodes)
    pf.add_regions(regions)
    pf.precompute(oracle)
    return pf
