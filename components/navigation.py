"""components.navigation — Markers the level loader spawns for the pathfinder.

A ``PathNode`` entity contributes its ``Position`` as a navigation node;
a ``Region`` entity contributes a named rectangle.  The pathfinder
ingests both once, in spawn order, and owns the data from then on.
"""

from __future__ import annotations
from dataclasses import dataclass

from core.collision import Rect


@dataclass
class PathNode:
    """Marks an entity whose Position is a hand-placed navigation node."""


@dataclass(frozen=True)
class Region:
    """Named axis-aligned map zone (world units)."""
    name: str
    area: Rect

    def contains(self, x: float, y: float) -> bool:
        return self.area.contains(x, y)


@dataclass
class RouteState:
    """Per-agent routing memory carried between ticks.

    ``mode`` is one of ``"direct"``, ``"routed"``, ``"idle"``.
    ``direction`` is the last non-zero steering direction (sprite facing).
    """
    mode: str = "idle"
    target: tuple[float, float] | None = None
    direction: tuple[float, float] = (0.0, 0.0)
