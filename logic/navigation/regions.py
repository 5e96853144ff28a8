"""logic/navigation/regions.py — Named map zones and node membership.

Region counts are small (a dozen map zones), so containment is a linear
scan in registration order; the first containing region wins when
rectangles overlap.
"""

from __future__ import annotations
from typing import Sequence

from components.navigation import Region

Point = tuple[float, float]


class RegionIndex:
    """Regions plus the derived region → nodes / node → region maps."""

    def __init__(self) -> None:
        self._regions: list[Region] = []
        self.region_to_nodes: dict[int, list[int]] = {}
        self.node_to_region: dict[int, int] = {}

    @property
    def regions(self) -> tuple[Region, ...]:
        return tuple(self._regions)

    def __len__(self) -> int:
        return len(self._regions)

    def rebuild(self, nodes: Sequence[Point], regions: Sequence[Region]) -> None:
        """Recompute both membership maps from scratch.

        A node belongs to exactly one region: the first one containing
        it, the same answer ``region_of`` gives for its position.
        """
        self._regions = list(regions)
        self.region_to_nodes.clear()
        self.node_to_region.clear()
        for n, point in enumerate(nodes):
            r = self.region_of(point)
            if r is None:
                continue
            self.node_to_region[n] = r
            self.region_to_nodes.setdefault(r, []).append(n)

    def clear(self) -> None:
        self._regions.clear()
        self.region_to_nodes.clear()
        self.node_to_region.clear()

    # ── Queries ──────────────────────────────────────────────────────

    def region_of(self, point: Point) -> int | None:
        """Index of the first region containing *point*, or None."""
        x, y = point
        for i, region in enumerate(self._regions):
            if region.contains(x, y):
                return i
        return None

    def nodes_in_region(self, index: int | None) -> list[int]:
        if index is None:
            return []
        return list(self.region_to_nodes.get(index, ()))

    def region_of_node(self, node: int) -> int | None:
        return self.node_to_region.get(node)

    def get(self, index: int | None) -> Region | None:
        if index is None or not 0 <= index < len(self._regions):
            return None
        return self._regions[index]
