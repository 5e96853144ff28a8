"""test_tick.py — Whole-pipeline runs: spawn a level, tick, watch.

Arena (world units)::

      0         4    6        10
    0 ┌─────────████─────────┐
      │  S/E    ████      P  │   S = spawner (2, 2), P = player (8, 2)
      │         ████         │
    6 │         ████         │
    8 │  n0 ─────────── n1   │
   10 └──────────────────────┘

Run:  python test_tick.py
"""
from __future__ import annotations
import math, sys, traceback

from core import tuning
from core.collision import CollisionWorld, Rect
from core.ecs import World
from core.events import EventBus
from core.level import LevelData, spawn_enemy, spawn_level
from components import (
    Character, DevLog, Enemy, GameClock, Position, Region, RouteState, Velocity,
)
from logic import containment
from logic.navigation import Pathfinder
from logic.tick import tick_systems

tuning.clear()

DT = 1.0 / 30.0


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


def _level(player=(8.0, 2.0)) -> LevelData:
    return LevelData(
        size=10.0,
        walls=[Rect(4.0, 0.0, 6.0, 6.0)],
        nodes=[(2.0, 8.0), (8.0, 8.0)],
        regions=[Region("west", Rect(0.0, 0.0, 5.0, 10.0)),
                 Region("east", Rect(5.0, 0.0, 10.0, 10.0))],
        spawners=[("west", (2.0, 2.0))],
        player=player,
    )


def _session(level: LevelData, enemies: int = 1):
    world = World()
    world.set_res(GameClock())
    world.set_res(DevLog())
    bus = EventBus()
    world.set_res(bus)
    containment.install(world, bus)
    pf = Pathfinder()
    cw = CollisionWorld()
    player = spawn_level(world, cw, level, enemies=enemies)
    return world, pf, cw, player


def _dist(a: Position, b: Position) -> float:
    return math.hypot(a.x - b.x, a.y - b.y)


# ════════════════════════════════════════════════════════════════════

def test_first_tick_builds_graph_once():
    world, pf, cw, _player = _session(_level(), enemies=0)
    built = []
    world.res(EventBus).subscribe("NavigationBuilt", built.append)

    tick_systems(world, DT, pf, cw)
    assert pf.is_built()
    assert len(pf.nodes) == 2 and len(pf.regions) == 2
    assert pf.path(0, 1) == (0, 1)

    for _ in range(5):
        tick_systems(world, DT, pf, cw)
    assert len(built) == 1
    assert built[0].nodes == 2 and built[0].edges == 1 and built[0].paths == 2
    assert abs(world.res(GameClock).time - DT * 6) < 1e-9
    ok("Graph built on the first tick and never again")


def test_player_region_change_is_reported():
    world, pf, cw, player = _session(_level(player=(3.0, 8.0)), enemies=0)
    changes = []
    world.res(EventBus).subscribe("PlayerRegionChanged", changes.append)

    tick_systems(world, DT, pf, cw)
    assert pf.player_region_name() == "west"

    for _ in range(90):
        tick_systems(world, DT, pf, cw, move=(1, 0))
        if pf.player_region_name() == "east":
            break
    assert pf.player_region_name() == "east"
    assert [(c.previous, c.current, c.name) for c in changes] == [
        (None, 0, "west"), (0, 1, "east")]
    region_log = world.res(DevLog).for_cat("region")
    assert len(region_log) == 2 and region_log[-1].eid == player
    ok("west → east emits PlayerRegionChanged and logs it")


def test_player_slides_to_a_stop_at_wall():
    world, pf, cw, player = _session(_level(player=(3.0, 2.0)), enemies=0)
    for _ in range(60):
        tick_systems(world, DT, pf, cw, move=(1, 0))
    pos = world.get(player, Position)
    assert 3.5 < pos.x <= 3.75
    assert pos.y == 2.0
    assert world.get(player, Velocity).x < 1.0
    ok("Player box stops flush against the wall")


def test_diagonal_input_is_not_faster():
    world, pf, cw, player = _session(_level(player=(7.0, 8.0)), enemies=0)
    for _ in range(30):
        tick_systems(world, DT, pf, cw, move=(1, -1))
    vel = world.get(player, Velocity)
    speed = math.hypot(vel.x, vel.y)
    assert speed <= world.get(player, Character).max_speed + 1e-9
    ok("Diagonal input is normalised")


def test_enemy_reaches_player_around_wall():
    world, pf, cw, player = _session(_level(), enemies=1)
    (enemy, _, epos), = list(world.query(Enemy, Position))
    ppos = world.get(player, Position)
    modes = []

    for _ in range(900):
        tick_systems(world, DT, pf, cw)
        state = world.get(enemy, RouteState)
        if state and (not modes or modes[-1] != state.mode):
            modes.append(state.mode)
        if _dist(epos, ppos) < 0.5:
            break

    assert _dist(epos, ppos) < 0.5, f"enemy stuck at ({epos.x:.2f}, {epos.y:.2f})"
    assert modes[0] == "routed"
    assert modes[-1] == "direct"
    ok(f"Enemy went around the wall ({' → '.join(modes)})")


def test_stray_enemy_returns_to_spawner():
    world, pf, cw, _player = _session(_level(), enemies=0)
    stray = spawn_enemy(world, 20.0, 20.0)
    world.get(stray, Velocity).x = 3.0

    tick_systems(world, DT, pf, cw)
    pos = world.get(stray, Position)
    assert (pos.x, pos.y) == (2.0, 2.0)
    vel = world.get(stray, Velocity)
    assert vel.x == 0.0 and vel.y == 0.0
    ok("Enemy outside every region teleported to the nearest spawner")


def test_skip_ai_leaves_enemies_alone():
    world, pf, cw, _player = _session(_level(), enemies=1)
    tick_systems(world, DT, pf, cw, skip_ai=True)
    for eid, _enemy, ch in world.query(Enemy, Character):
        assert ch.desired_direction == (0.0, 0.0)
        assert world.get(eid, RouteState).mode == "idle"
    ok("skip_ai=True keeps enemy motors idle")


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
    print(f"  Tick Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
