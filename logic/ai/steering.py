"""logic/ai/steering.py — AI movement helpers.

Direction-producing functions used by the routing system to steer
characters toward targets and keep their sprites facing the right way.
"""

from __future__ import annotations
import math
from typing import TYPE_CHECKING

from components import Facing

if TYPE_CHECKING:
    from core.ecs import World

Point = tuple[float, float]

# Closer than this counts as "already there".
ARRIVE_EPS = 0.05


def direction_to(origin: Point, target: Point) -> Point:
    """Unit vector from *origin* toward *target*, or (0, 0) when on top of it."""
    dx = target[0] - origin[0]
    dy = target[1] - origin[1]
    d = math.hypot(dx, dy)
    if d < ARRIVE_EPS:
        return (0.0, 0.0)
    return (dx / d, dy / d)


def normalize(dx: float, dy: float) -> Point:
    d = math.hypot(dx, dy)
    if d < 1e-9:
        return (0.0, 0.0)
    return (dx / d, dy / d)


def facing_for(dx: float, dy: float, default: str = "down") -> str:
    """Cardinal facing for a direction (y grows downward)."""
    if abs(dx) < 1e-9 and abs(dy) < 1e-9:
        return default
    if abs(dx) >= abs(dy):
        return "right" if dx > 0 else "left"
    return "down" if dy > 0 else "up"


def face_along(world: "World", eid: int, direction: Point) -> None:
    """Update entity's Facing component from a non-zero *direction*."""
    facing = world.get(eid, Facing)
    if facing is None:
        return
    facing.direction = facing_for(direction[0], direction[1], facing.direction)
