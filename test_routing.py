"""test_routing.py — How enemies pick a steering target.

Layout used by most tests (world units, y down)::

        0         4    6        10
      0 ┌─────────████─────────┐
        │  E      ████      P  │     E = agent (2, 2), P = player (8, 2)
        │         ████         │     wall (4,0)-(6,6)
      6 │         ████         │
      8 │  n0 ─────────── n2   │     n0 (2, 8), n1 (5, 9), n2 (8, 8)
        │        n1            │
     10 └──────────────────────┘
           west  │  east           regions split at x = 5

Run:  python test_routing.py
"""
from __future__ import annotations
import sys, traceback

from core import tuning
from core.collision import CollisionGroups, CollisionWorld, Rect
from core.constants import ALL_GROUPS, WALL_GROUP
from core.ecs import World
from components import (
    Character, DevLog, Enemy, Facing, GameClock, Player, Position, Region, RouteState,
)
from logic.ai.routing import (
    IDLE, RouteMode, enemy_routing_system, goal_node_index, route_agent,
)
from logic.navigation import Pathfinder, build_pathfinder

tuning.clear()


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


WEST = Region("west", Rect(0, 0, 5, 10))
EAST = Region("east", Rect(5, 0, 10, 10))
NODES = [(2.0, 8.0), (5.0, 9.0), (8.0, 8.0)]
PLAYER = (8.0, 2.0)


def _arena():
    cw = CollisionWorld()
    cw.add_collider(Rect(4, 0, 6, 6), CollisionGroups(WALL_GROUP, ALL_GROUPS))
    pf = build_pathfinder(NODES, [WEST, EAST], cw)
    pf.track_player_region(PLAYER)
    return pf, cw


# ════════════════════════════════════════════════════════════════════
#  Goal selection
# ════════════════════════════════════════════════════════════════════

def test_goal_node_index():
    assert goal_node_index(7, 3) == 1
    assert goal_node_index(3, 3) == 0
    assert goal_node_index(0, 1) == 0
    assert goal_node_index(5, 0) is None
    ok("agent_id % count, None when there are no candidates")


# ════════════════════════════════════════════════════════════════════
#  route_agent
# ════════════════════════════════════════════════════════════════════

def test_direct_when_target_visible():
    pf, cw = _arena()
    route = route_agent(pf, cw, 4, (8.0, 9.0), PLAYER)
    assert route.mode is RouteMode.DIRECT
    assert route.target == PLAYER
    assert route.path == ()
    ok("Clear line → DIRECT, graph not consulted")


def test_direct_even_before_build():
    pf = Pathfinder()
    route = route_agent(pf, CollisionWorld(), 1, (0.0, 0.0), (3.0, 3.0))
    assert route.mode is RouteMode.DIRECT
    ok("Visible target is chased before the graph exists")


def test_routed_steers_to_first_visible_node_from_the_end():
    pf, cw = _arena()
    # Player region (east) holds only n2, so every agent's goal is n2.
    assert pf.nodes_in_player_region() == [2]
    route = route_agent(pf, cw, 11, (2.0, 2.0), PLAYER)
    assert route.mode is RouteMode.ROUTED
    assert route.path == (0, 2)
    assert route.node == 0, "n2 is hidden behind the wall from (2, 2)"
    assert route.target == NODES[0]
    ok("Behind the wall → steer to the start node")


def test_routed_cuts_corner_when_later_node_visible():
    pf, cw = _arena()
    route = route_agent(pf, cw, 11, (2.0, 6.5), PLAYER)
    assert route.mode is RouteMode.ROUTED
    assert route.node == 2
    assert route.target == NODES[2]
    ok("Later node in view → skip the start node")


def test_start_equals_goal():
    pf, cw = _arena()
    # East of the wall but hidden from the player by a second wall.
    cw.add_collider(Rect(7, 4, 9, 5), CollisionGroups(WALL_GROUP, ALL_GROUPS))
    route = route_agent(pf, cw, 0, (8.0, 7.0), PLAYER)
    assert route.mode is RouteMode.ROUTED
    assert route.path == (2,)
    assert route.node == 2
    ok("Agent already at the goal's anchor → single-node route")


def test_border_node_is_not_a_goal_for_the_other_region():
    pf, cw = _arena()
    # n1 (5, 9) sits on the west/east edge; west is registered first.
    assert pf.region_of(NODES[1]).name == "west"
    assert pf.nodes_in_region(0) == [0, 1]
    assert pf.nodes_in_player_region() == [2]
    for agent_id in range(4):
        route = route_agent(pf, cw, agent_id, (2.0, 2.0), PLAYER)
        assert route.path[-1] == 2, agent_id
    ok("Goal candidates come only from the region the player is in")


def test_sight_checks_follow_ray_max_toi():
    pf, cw = _arena()
    # From (2, 2) the wall starts a third of the way to the player.
    tuning.override("pathfinding", "ray_max_toi", 0.25)
    try:
        route = route_agent(pf, cw, 0, (2.0, 2.0), PLAYER)
        assert route.mode is RouteMode.DIRECT
    finally:
        tuning.clear()
    route = route_agent(pf, cw, 0, (2.0, 2.0), PLAYER)
    assert route.mode is RouteMode.ROUTED
    ok("Agent sight uses the same ray_max_toi as the graph builder")


def test_idle_without_player_region():
    cw = CollisionWorld()
    cw.add_collider(Rect(4, 0, 6, 6), CollisionGroups(WALL_GROUP, ALL_GROUPS))
    pf = build_pathfinder(NODES, [WEST, EAST], cw)
    assert route_agent(pf, cw, 0, (2.0, 2.0), PLAYER) == IDLE
    ok("Unknown player region → IDLE")


def test_idle_when_agent_off_map():
    pf, cw = _arena()
    cw.add_collider(Rect(-8, 0, -6, 6), CollisionGroups(WALL_GROUP, ALL_GROUPS))
    route = route_agent(pf, cw, 0, (-10.0, 2.0), PLAYER)
    assert route == IDLE
    ok("Agent outside every region → IDLE")


def test_idle_when_player_region_has_no_nodes():
    cw = CollisionWorld()
    cw.add_collider(Rect(4, 0, 6, 6), CollisionGroups(WALL_GROUP, ALL_GROUPS))
    pf = build_pathfinder([(2.0, 8.0)], [WEST, EAST], cw)
    pf.track_player_region(PLAYER)
    assert route_agent(pf, cw, 0, (2.0, 2.0), PLAYER) == IDLE
    ok("Empty goal region → IDLE")


def test_idle_when_no_path():
    cw = CollisionWorld()
    cw.add_collider(Rect(4, 0, 6, 10), CollisionGroups(WALL_GROUP, ALL_GROUPS))
    pf = build_pathfinder(NODES, [WEST, EAST], cw)
    pf.track_player_region(PLAYER)
    assert route_agent(pf, cw, 0, (2.0, 2.0), PLAYER) == IDLE
    ok("Wall splits the map → no route → IDLE")


# ════════════════════════════════════════════════════════════════════
#  enemy_routing_system
# ════════════════════════════════════════════════════════════════════

def _world(enemy_at):
    pf, cw = _arena()
    world = World()
    world.set_res(DevLog())
    world.set_res(GameClock(time=3.0))
    p = world.spawn()
    world.add(p, Position(*PLAYER))
    world.add(p, Player())
    e = world.spawn()
    world.add(e, Position(*enemy_at))
    world.add(e, Character())
    world.add(e, Facing())
    world.add(e, Enemy())
    return world, pf, cw, e


def test_system_sets_direction_and_state():
    world, pf, cw, e = _world((8.0, 9.0))
    enemy_routing_system(world, pf, cw)
    ch = world.get(e, Character)
    assert ch.desired_direction == (0.0, -1.0)
    state = world.get(e, RouteState)
    assert state.mode == "direct"
    assert state.target == PLAYER
    assert world.get(e, Facing).direction == "up"
    ok("Enemy below the player steers straight up")


def test_system_logs_mode_changes_once():
    world, pf, cw, e = _world((8.0, 9.0))
    enemy_routing_system(world, pf, cw)
    enemy_routing_system(world, pf, cw)
    nav = world.res(DevLog).for_cat("nav")
    assert len(nav) == 1
    assert nav[0].eid == e and nav[0].t == 3.0
    assert "direct" in nav[0].msg
    ok("DevLog gets one 'nav' entry per mode change")


def test_system_idles_without_player():
    world, pf, cw, e = _world((2.0, 2.0))
    for eid, _ in list(world.all_of(Player)):
        world.kill(eid)
    world.purge()
    world.get(e, Character).desired_direction = (1.0, 0.0)
    enemy_routing_system(world, pf, cw)
    assert world.get(e, Character).desired_direction == (0.0, 0.0)
    assert world.get(e, RouteState).mode == "idle"
    ok("No player → enemies stand still")


# ════════════════════════════════════════════════════════════════════

if __name__ == "__main__":
    tests = [(name, fn) for name, fn in sorted(globals().items())
             if name.startswith("test_") and callable(fn)]
    for name, fn in tests:
        try:
            fn()
        except Exception:
            _failed += 1
            print(f"  [FAIL] {name}")
            traceback.print_exc()

    print(f"\n{'=' * 60}")
    print(f"  Routing Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
