"""components.actors — Player, enemies, and the shared character motor."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class Character:
    """Velocity motor shared by player and enemies.

    Each tick, velocity eases toward ``desired_direction * max_speed`` at
    rate ``acceleration`` (1/s).  ``desired_direction`` is a unit vector
    or zero.
    """
    max_speed: float = 2.5        # u/s
    acceleration: float = 8.0     # 1/s
    desired_direction: tuple[float, float] = (0.0, 0.0)


@dataclass
class Player:
    """Marks the player entity."""


@dataclass
class Enemy:
    """Marks a hostile agent that chases the player."""
    big: bool = False


@dataclass
class Spawner:
    """Where enemies appear, and where strays are sent back to."""
    name: str = ""
