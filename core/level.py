"""
core/level.py — TOML map → ECS loader

Reads ``data/map.toml`` and spawns walls, navigation markers, spawners,
the player and the first enemies.  Map data is authored in *pixels*
against the map art (top-left origin, y down) and converted to world
units here, once.

    level = load_level("data/map.toml")
    player = spawn_level(world, collisions, level)

File layout::

    [map]
    size = 512
    pixels_per_unit = 32

    [[wall]]
    top_left = [168, 46]
    size = [60, 96]

    [[node]]
    at = [100, 60]

    [[region]]
    name = "north_west"
    top_left = [26, 18]
    size = [196, 166]

    [[spawner]]
    name = "north_east"
    at = [440, 156]

    [player]
    at = [320, 440]
"""

from __future__ import annotations
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from components import (
    Character, Collider, Enemy, Facing, PathNode, Player, Position, Region,
    RouteState, Spawner, Velocity, Wall,
)
from core.collision import CollisionGroups, CollisionWorld, Rect
from core.constants import ALL_GROUPS, MAP_SIZE_PX, PIXELS_PER_UNIT, WALL_GROUP
from core.ecs import World
from core.tuning import get as _tun

Point = tuple[float, float]

DEFAULT_MAP = Path(__file__).resolve().parent.parent / "data" / "map.toml"


class LevelError(ValueError):
    """The map file is missing or one of its entries is malformed."""


@dataclass
class LevelData:
    """A parsed map, already in world units."""
    size: float = MAP_SIZE_PX / PIXELS_PER_UNIT
    walls: list[Rect] = field(default_factory=list)
    nodes: list[Point] = field(default_factory=list)
    regions: list[Region] = field(default_factory=list)
    spawners: list[tuple[str, Point]] = field(default_factory=list)
    player: Point = (8.0, 8.0)


# ── Parsing ──────────────────────────────────────────────────────────

def _table(entry, where: str) -> dict:
    if not isinstance(entry, dict):
        raise LevelError(f"{where}: expected a table, got {entry!r}")
    return entry


def _entries(data: dict, key: str) -> list[tuple[str, dict]]:
    raw = data.get(key, [])
    if not isinstance(raw, list):
        raise LevelError(f"[[{key}]]: expected an array of tables, got {raw!r}")
    return [(f"{key}[{i}]", _table(entry, f"{key}[{i}]")) for i, entry in enumerate(raw)]


def _number(table: dict, key: str, default: float, where: str) -> float:
    raw = table.get(key, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise LevelError(f"{where}: '{key}' must be numeric, got {raw!r}") from exc


def _pair(entry: dict, key: str, where: str) -> tuple[float, float]:
    raw = entry.get(key)
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        raise LevelError(f"{where}: '{key}' must be a [x, y] pair, got {raw!r}")
    try:
        return float(raw[0]), float(raw[1])
    except (TypeError, ValueError) as exc:
        raise LevelError(f"{where}: '{key}' must be numeric, got {raw!r}") from exc


def _rect(entry: dict, where: str, ppu: float) -> Rect:
    x, y = _pair(entry, "top_left", where)
    w, h = _pair(entry, "size", where)
    if w <= 0 or h <= 0:
        raise LevelError(f"{where}: size must be positive, got {w}x{h}")
    return Rect.from_top_left(x / ppu, y / ppu, w / ppu, h / ppu)


def parse_level(data: dict) -> LevelData:
    """Convert a decoded map.toml dict into a LevelData."""
    meta = _table(data.get("map", {}), "[map]")
    ppu = _number(meta, "pixels_per_unit", PIXELS_PER_UNIT, "[map]")
    if ppu <= 0:
        raise LevelError(f"[map]: pixels_per_unit must be positive, got {ppu}")
    level = LevelData(size=_number(meta, "size", MAP_SIZE_PX, "[map]") / ppu)

    for where, entry in _entries(data, "wall"):
        level.walls.append(_rect(entry, where, ppu))

    for where, entry in _entries(data, "node"):
        x, y = _pair(entry, "at", where)
        level.nodes.append((x / ppu, y / ppu))

    for where, entry in _entries(data, "region"):
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise LevelError(f"{where}: missing 'name'")
        level.regions.append(Region(name, _rect(entry, f"{where} {name}", ppu)))

    for i, (where, entry) in enumerate(_entries(data, "spawner")):
        x, y = _pair(entry, "at", where)
        level.spawners.append((str(entry.get("name", f"spawner_{i}")), (x / ppu, y / ppu)))

    if "player" in data:
        x, y = _pair(_table(data["player"], "[player]"), "at", "[player]")
        level.player = (x / ppu, y / ppu)

    return level


def load_level(path: str | Path | None = None) -> LevelData:
    """Load and parse a map file (``data/map.toml`` by default)."""
    path = Path(path) if path is not None else DEFAULT_MAP
    if not path.exists():
        raise LevelError(f"map file not found: {path}")
    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise LevelError(f"{path}: {exc}") from exc
    level = parse_level(data)
    print(f"[LEVEL] loaded {len(level.walls)} walls, {len(level.nodes)} nodes, "
          f"{len(level.regions)} regions, {len(level.spawners)} spawners from {path}")
    return level


# ── Spawning ─────────────────────────────────────────────────────────

WALL_GROUPS = CollisionGroups(WALL_GROUP, ALL_GROUPS)


def spawn_player(world: World, x: float, y: float) -> int:
    return world.spawn_with(
        Position(x, y), Velocity(), Collider(0.5, 0.5), Facing(),
        Character(max_speed=float(_tun("player", "max_speed", 5.0)),
                  acceleration=float(_tun("player", "acceleration", 12.0))),
        Player(),
    )


def spawn_enemy(world: World, x: float, y: float, big: bool = False) -> int:
    size = 0.9 if big else 0.5
    return world.spawn_with(
        Position(x, y), Velocity(), Collider(size, size), Facing(),
        Character(max_speed=float(_tun("enemy", "max_speed", 2.5)),
                  acceleration=float(_tun("enemy", "acceleration", 8.0))),
        Enemy(big=big), RouteState(),
    )


def spawn_level(world: World, collisions: CollisionWorld, level: LevelData,
                enemies: int | None = None) -> int:
    """Spawn everything in *level*.  Returns the player's eid.

    Navigation markers are spawned in file order, which fixes node ids.
    """
    for rect in level.walls:
        eid = world.spawn_with(Wall(rect.min_x, rect.min_y, rect.width, rect.height))
        collisions.add_collider(rect, WALL_GROUPS, eid)

    for x, y in level.nodes:
        world.spawn_with(Position(x, y), PathNode())

    for region in level.regions:
        world.spawn_with(region)

    for name, (x, y) in level.spawners:
        world.spawn_with(Position(x, y), Spawner(name))

    player = spawn_player(world, *level.player)

    if enemies is None:
        enemies = int(_tun("enemy", "count", 6))
    if level.spawners:
        for i in range(enemies):
            _, (x, y) = level.spawners[i % len(level.spawners)]
            spawn_enemy(world, x, y)

    return player
