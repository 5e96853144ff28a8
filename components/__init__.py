"""components — ECS component dataclasses, organised by domain.

Submodules
----------
spatial        Position, Velocity, Collider, Facing, Wall
navigation     PathNode, Region, RouteState
actors         Character, Player, Enemy, Spawner
resources      GameClock, Camera, DebugOverlay
dev_log        DevLog

All public names are re-exported here so systems can do
``from components import Position``.
"""

# ── Spatial ──────────────────────────────────────────────────────────
from components.spatial import Position, Velocity, Collider, Facing, Wall

# ── Navigation ───────────────────────────────────────────────────────
from components.navigation import PathNode, Region, RouteState

# ── Actors ───────────────────────────────────────────────────────────
from components.actors import Character, Player, Enemy, Spawner

# ── World resources / singletons ─────────────────────────────────────
from components.resources import GameClock, Camera, DebugOverlay
from components.dev_log import DevLog

__all__ = [
    # spatial
    "Position", "Velocity", "Collider", "Facing", "Wall",
    # navigation
    "PathNode", "Region", "RouteState",
    # actors
    "Character", "Player", "Enemy", "Spawner",
    # resources
    "GameClock", "Camera", "DebugOverlay", "DevLog",
]
