"""logic/ai/routing.py — How enemies get to the player around walls.

Policy, evaluated fresh every tick for an agent at P chasing target T:

1. **Direct** — if nothing blocks P→T, steer straight at T; the graph
   is not consulted.
2. **Routed** — otherwise pick a goal node among the nodes of the
   player's region (``agent_id % count``, so different agents spread
   over different nodes without sharing state), find the start node
   closest to P, fetch the precomputed route and walk it *from the end
   backward*: the first node P can already see becomes the steering
   target.  Agents cut corners whenever later nodes are in view.
3. **Idle** — no player region, P outside every region, or no route:
   stand still this tick.

Nothing is carried between ticks except ``RouteState`` (last mode and
steering direction, used for sprite facing and the dev log).
"""

from __future__ import annotations
import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from components import (
    Character, DevLog, Enemy, GameClock, Player, Position, RouteState,
)
from core.collision import CollisionGroups, RayOracle, WALL_ONLY
from core.tuning import get as _tun
from logic.ai.steering import direction_to, face_along

if TYPE_CHECKING:
    from core.ecs import World
    from logic.navigation.pathfinder import Pathfinder

Point = tuple[float, float]


class RouteMode(enum.Enum):
    DIRECT = "direct"
    ROUTED = "routed"
    IDLE = "idle"


@dataclass(frozen=True)
class Route:
    mode: RouteMode
    target: Point | None = None
    node: int | None = None                 # steering node when ROUTED
    path: tuple[int, ...] = field(default=())


IDLE = Route(RouteMode.IDLE)


def goal_node_index(agent_id: int, count: int) -> int | None:
    """Deterministic goal slot for an agent among *count* candidates."""
    if count <= 0:
        return None
    return agent_id % count


def _visible(oracle: RayOracle, a: Point, b: Point, groups: CollisionGroups) -> bool:
    max_toi = float(_tun("pathfinding", "ray_max_toi", 1.0))
    return oracle.cast_ray(a, (b[0] - a[0], b[1] - a[1]), max_toi, True, groups) is None


def route_agent(pathfinder: "Pathfinder", oracle: RayOracle, agent_id: int,
                position: Point, target: Point,
                groups: CollisionGroups = WALL_ONLY) -> Route:
    """Decide where an agent at *position* should steer to reach *target*."""
    if _visible(oracle, position, target, groups):
        return Route(RouteMode.DIRECT, target)

    candidates = pathfinder.nodes_in_player_region()
    slot = goal_node_index(agent_id, len(candidates))
    if slot is None:
        return IDLE
    goal = candidates[slot]

    start = pathfinder.closest_node(position)
    if start is None:
        return IDLE

    path = (goal,) if start == goal else pathfinder.path(start, goal)
    if not path:
        return IDLE

    for node in reversed(path):
        node_pos = pathfinder.node(node)
        if _visible(oracle, position, node_pos, groups):
            return Route(RouteMode.ROUTED, node_pos, node, path)
    # Nothing in view (agent wedged behind a corner): head for the anchor.
    return Route(RouteMode.ROUTED, pathfinder.node(start), start, path)


def enemy_routing_system(world: "World", pathfinder: "Pathfinder",
                         oracle: RayOracle,
                         groups: CollisionGroups = WALL_ONLY) -> None:
    """Set every enemy's desired direction from ``route_agent``."""
    res = world.query_one(Player, Position)
    player_pos = (res[2].x, res[2].y) if res else None

    log = world.res(DevLog)
    clock = world.res(GameClock)
    now = clock.time if clock else 0.0

    for eid, _enemy, pos, ch in world.query(Enemy, Position, Character):
        if player_pos is None:
            route = IDLE
        else:
            route = route_agent(pathfinder, oracle, eid, (pos.x, pos.y),
                                player_pos, groups)

        direction = (0.0, 0.0)
        if route.target is not None:
            direction = direction_to((pos.x, pos.y), route.target)
        ch.desired_direction = direction

        state = world.get(eid, RouteState)
        if state is None:
            state = RouteState()
            world.add(eid, state)
        if state.mode != route.mode.value and log is not None:
            log.record(eid, "nav", f"{state.mode} → {route.mode.value}", t=now,
                       details={"node": route.node, "path": list(route.path)})
        state.mode = route.mode.value
        state.target = route.target
        if direction != (0.0, 0.0):
            state.direction = direction
            face_along(world, eid, direction)
