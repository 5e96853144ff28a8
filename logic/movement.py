"""logic/movement.py — Character motor and wall-sliding movement.

``character_system`` turns each Character's desired direction into a
velocity; ``movement_system`` integrates positions and keeps collider
boxes out of walls.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from components import Character, Collider, Facing, Player, Position, Velocity
from core.collision import CollisionWorld, Rect, WALL_ONLY
from logic.ai.steering import facing_for, normalize

if TYPE_CHECKING:
    from core.ecs import World


def input_system(world: "World", move: tuple[float, float] | None = None) -> None:
    """Set the player's desired direction from WASD input.

    *move* is the raw ``(dx, dy)`` key sum; it is normalised here so
    diagonals are not faster.
    """
    if move is None:
        return
    direction = normalize(*move)
    for eid, _player, ch in world.query(Player, Character):
        ch.desired_direction = direction
        if direction != (0.0, 0.0):
            facing = world.get(eid, Facing)
            if facing is not None:
                facing.direction = facing_for(*direction, facing.direction)


def character_system(world: "World", dt: float) -> None:
    """Ease velocity toward ``desired_direction * max_speed``."""
    for _eid, ch, vel in world.query(Character, Velocity):
        want_x = ch.desired_direction[0] * ch.max_speed
        want_y = ch.desired_direction[1] * ch.max_speed
        k = min(1.0, ch.acceleration * dt)  # never overshoot in one step
        vel.x += (want_x - vel.x) * k
        vel.y += (want_y - vel.y) * k


def _box(x: float, y: float, col: Collider) -> Rect:
    hw = col.width * 0.5
    hh = col.height * 0.5
    return Rect(x - hw, y - hh, x + hw, y + hh)


def movement_system(world: "World", dt: float, collisions: CollisionWorld | None) -> None:
    """Move entities, preventing their collider from entering walls.

    Axis-separated resolution so an entity pushing diagonally into a
    wall slides along it instead of stopping dead.  Entities without a
    ``Collider`` move freely.
    """
    for eid, pos, vel in world.query(Position, Velocity):
        nx = pos.x + vel.x * dt
        ny = pos.y + vel.y * dt

        col = world.get(eid, Collider)
        if col is not None and collisions is not None:
            if collisions.rect_hits(_box(nx, pos.y, col), WALL_ONLY):
                nx = pos.x
                vel.x = 0.0
            if collisions.rect_hits(_box(nx, ny, col), WALL_ONLY):
                ny = pos.y
                vel.y = 0.0

        pos.x = nx
        pos.y = ny
