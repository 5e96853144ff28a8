"""logic/navigation/systems.py — Per-frame glue between the ECS and the Pathfinder.

Run order inside one tick (see ``logic.tick``)::

    ingest_markers       new PathNode / Region entities → Pathfinder
    ... movement ...     positions are final after this
    precompute_system    one-shot build once ingestion settled
    track_player_system  player region bookkeeping
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import DevLog, GameClock, PathNode, Player, Position, Region
from core.collision import RayOracle
from core.events import EventBus, NavigationBuilt, PlayerRegionChanged
from logic.navigation.pathfinder import Pathfinder
from logic.navigation.visibility import edge_count

if TYPE_CHECKING:
    from core.ecs import World


def ingest_markers(world: "World", pathfinder: Pathfinder) -> int:
    """Hand newly spawned node / region markers to the pathfinder.

    Additive: markers already ingested are never re-read or removed.
    Returns the number of markers ingested this call.
    """
    points = []
    for eid in world.take_added(PathNode):
        pos = world.get(eid, Position)
        if pos is not None:
            points.append((pos.x, pos.y))
    regions = []
    for eid in world.take_added(Region):
        if world.has(eid, PathNode):
            continue
        regions.append(world.get(eid, Region))
    return pathfinder.add_nodes(points) + pathfinder.add_regions(regions)


def precompute_system(world: "World", pathfinder: Pathfinder,
                      oracle: RayOracle) -> bool:
    """Build the navigation graph the first time it is needed."""
    if not pathfinder.precompute(oracle):
        return False
    bus = world.res(EventBus)
    if bus:
        bus.emit(NavigationBuilt(
            nodes=len(pathfinder.nodes),
            edges=edge_count(pathfinder.edges),
            regions=len(pathfinder.regions),
            paths=len(pathfinder.paths),
        ))
    return True


def track_player_system(world: "World", pathfinder: Pathfinder) -> None:
    """Follow the player across regions; emit PlayerRegionChanged on change."""
    if not pathfinder.is_built():
        return
    res = world.query_one(Player, Position)
    if res is None:
        return
    eid, _, pos = res
    if not pathfinder.track_player_region((pos.x, pos.y)):
        return

    name = pathfinder.player_region_name()
    bus = world.res(EventBus)
    if bus:
        bus.emit(PlayerRegionChanged(previous=pathfinder.previous_region,
                                     current=pathfinder.player_region,
                                     name=name))
    log = world.res(DevLog)
    if log is not None:
        clock = world.res(GameClock)
        log.record(eid, "region", f"player entered {name or pathfinder.player_region}",
                   t=clock.time if clock else 0.0,
                   details={"previous": pathfinder.previous_region,
                            "current": pathfinder.player_region})
