"""logic/tick.py — System tick orchestration.

The per-frame pipeline.  Order matters: navigation markers are ingested
and every position is final before the one-shot precompute casts its
rays, and the graph is built before any agent queries it.

Usage::

    from logic.tick import tick_systems
    tick_systems(world, dt, pathfinder, collisions, move=(1, 0))
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import GameClock
from core.events import EventBus
from logic.ai.routing import enemy_routing_system
from logic.containment import containment_system
from logic.movement import character_system, input_system, movement_system
from logic.navigation.systems import ingest_markers, precompute_system, track_player_system

if TYPE_CHECKING:
    from core.collision import CollisionWorld
    from core.ecs import World
    from logic.navigation.pathfinder import Pathfinder


def tick_systems(world: "World", dt: float, pathfinder: "Pathfinder",
                 collisions: "CollisionWorld",
                 move: tuple[float, float] | None = None,
                 *, skip_ai: bool = False) -> None:
    """Run all gameplay systems for one frame.

    Parameters
    ----------
    world : World
        The ECS world.
    dt : float
        Delta-time in seconds.
    pathfinder : Pathfinder
        The session's navigation state.
    collisions : CollisionWorld
        Static walls; also the line-of-sight oracle.
    move : (dx, dy) | None
        Player WASD input, or None to leave the player's motor alone.
    skip_ai : bool
        Skip enemy routing (useful in tests that script enemies).
    """
    clock = world.res(GameClock)
    if clock:
        clock.time += dt

    ingest_markers(world, pathfinder)

    input_system(world, move)
    character_system(world, dt)
    movement_system(world, dt, collisions)

    precompute_system(world, pathfinder, collisions)
    track_player_system(world, pathfinder)

    if not skip_ai:
        enemy_routing_system(world, pathfinder, collisions, pathfinder.groups)

    containment_system(world, pathfinder)

    bus = world.res(EventBus)
    if bus:
        bus.drain()

    world.purge()
