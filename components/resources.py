"""components.resources — World-level singletons (not per-entity)."""

from __future__ import annotations
from dataclasses import dataclass


@dataclass
class GameClock:
    """Monotonic game time — accumulated ``dt`` since session start.

    Updated once per frame by the tick pipeline.
    """
    time: float = 0.0


@dataclass
class Camera:
    x: float = 8.0
    y: float = 8.0
    zoom: float = 1.0


@dataclass
class DebugOverlay:
    """Draw visibility edges, node ids and agent routes.  Toggled with ``\\``."""
    enabled: bool = False
