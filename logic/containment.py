"""logic/containment.py — Send agents that left the known map back to a spawner.

Physics can squeeze an enemy through a seam or a spawn can land it
outside every region; either way the navigation system no longer knows
where it is.  Such enemies are reported with ``EntityLeftMap`` and the
handler teleports them to the nearest ``Spawner``.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Enemy, Position, Spawner, Velocity
from core.events import EntityLeftMap, EventBus

if TYPE_CHECKING:
    from core.ecs import World
    from logic.navigation.pathfinder import Pathfinder


def containment_system(world: "World", pathfinder: "Pathfinder") -> int:
    """Emit EntityLeftMap for every enemy outside all regions.

    Does nothing until the graph is built or when the map has no
    regions at all (nothing is "known" then).  Returns the count emitted.
    """
    if not pathfinder.is_built() or not pathfinder.regions:
        return 0
    bus = world.res(EventBus)
    if bus is None:
        return 0
    emitted = 0
    for eid, _enemy, pos in world.query(Enemy, Position):
        if pathfinder.region_of((pos.x, pos.y)) is None:
            bus.emit(EntityLeftMap(eid=eid, x=pos.x, y=pos.y))
            emitted += 1
    return emitted


def nearest_spawner(world: "World", x: float, y: float) -> Position | None:
    best: Position | None = None
    best_d = float("inf")
    for _eid, _sp, spos in world.query(Spawner, Position):
        d = (spos.x - x) ** 2 + (spos.y - y) ** 2
        if d < best_d:
            best_d = d
            best = spos
    return best


def return_to_spawner(world: "World", event: EntityLeftMap) -> None:
    """EntityLeftMap handler: teleport the stray to the nearest spawner."""
    if not world.alive(event.eid):
        return
    pos = world.get(event.eid, Position)
    spawn = nearest_spawner(world, event.x, event.y)
    if pos is None or spawn is None:
        return
    pos.x, pos.y = spawn.x, spawn.y
    vel = world.get(event.eid, Velocity)
    if vel is not None:
        vel.x = vel.y = 0.0
    print(f"[CONTAIN] entity {event.eid} left the map at "
          f"({event.x:.1f}, {event.y:.1f}) — returned to spawner")


def install(world: "World", bus: EventBus) -> None:
    """Subscribe the containment handler on *bus*."""
    bus.subscribe("EntityLeftMap", lambda ev: return_to_spawner(world, ev))
