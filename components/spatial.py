"""components.spatial — Position, movement, and collision shapes.

All coordinates and dimensions are in world units (1 u = 32 map px).
Positions are the *centre* of the entity.
"""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Position:
    x: float = 0.0        # u
    y: float = 0.0        # u


@dataclass
class Velocity:
    x: float = 0.0        # u/s
    y: float = 0.0        # u/s


@dataclass
class Collider:
    """Box centred on Position, used for wall collision."""
    width: float = 0.5    # u
    height: float = 0.5   # u


@dataclass
class Facing:
    """Which direction an entity faces.  Updated from steering each frame.

    Values: 'right', 'left', 'up', 'down'
    Used by sprite rendering.
    """
    direction: str = "down"


@dataclass
class Wall:
    """Static wall.  The rect lives in the CollisionWorld; this is the
    entity-side record the renderer draws."""
    x: float = 0.0        # top-left, u
    y: float = 0.0
    w: float = 0.0
    h: float = 0.0
