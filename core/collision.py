"""core/collision.py — Static collision world and line-of-sight oracle.

These live in ``core/`` (not ``logic/``) because the level loader, the
movement system and the navigation graph builder all need them.  Keeping
them here prevents a circular dependency.

Ray semantics
-------------
``cast_ray(origin, direction, max_toi, solid, groups)`` walks the ray
``origin + t * direction`` for ``t`` in ``[0, max_toi]``.  The time of
impact is measured in multiples of *direction*, so casting with
``direction = b - a`` and ``max_toi = 1.0`` covers exactly the segment
from ``a`` to ``b``::

    world = CollisionWorld()
    world.add_collider(Rect(4, -1, 6, 1), CollisionGroups(WALL_GROUP, ALL_GROUPS))
    world.cast_ray((0, 0), (10, 0), 1.0, True, WALL_ONLY)   # → RayHit(toi=0.4)

``None`` means the segment is unobstructed.
"""

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Protocol

from core.constants import WALL_GROUP, ALL_GROUPS

Point = tuple[float, float]


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in world space.  Edges are inclusive."""

    min_x: float
    min_y: float
    max_x: float
    max_y: float

    @classmethod
    def from_corners(cls, a: Point, b: Point) -> "Rect":
        return cls(min(a[0], b[0]), min(a[1], b[1]),
                   max(a[0], b[0]), max(a[1], b[1]))

    @classmethod
    def from_top_left(cls, x: float, y: float, w: float, h: float) -> "Rect":
        return cls(x, y, x + w, y + h)

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point:
        return ((self.min_x + self.max_x) * 0.5,
                (self.min_y + self.max_y) * 0.5)

    def contains(self, x: float, y: float) -> bool:
        return self.min_x <= x <= self.max_x and self.min_y <= y <= self.max_y

    def overlaps(self, other: "Rect") -> bool:
        """Strict overlap — rectangles that only touch do not overlap."""
        return (self.min_x < other.max_x and other.min_x < self.max_x
                and self.min_y < other.max_y and other.min_y < self.max_y)


@dataclass(frozen=True)
class CollisionGroups:
    """Membership / filter bit masks (see ``core.constants``)."""

    memberships: int = ALL_GROUPS
    filter: int = ALL_GROUPS

    def interacts(self, other: "CollisionGroups") -> bool:
        return bool(self.memberships & other.filter) and bool(other.memberships & self.filter)


# Query groups used for line-of-sight: walls only.
WALL_ONLY = CollisionGroups(WALL_GROUP, WALL_GROUP)


@dataclass(frozen=True)
class RayHit:
    eid: int
    toi: float
    point: Point


class RayOracle(Protocol):
    """Anything that can answer line-of-sight raycasts."""

    def cast_ray(self, origin: Point, direction: Point, max_toi: float,
                 solid: bool, groups: CollisionGroups) -> RayHit | None: ...


def ray_aabb_toi(origin: Point, direction: Point, rect: Rect,
                 max_toi: float, solid: bool = True) -> float | None:
    """Slab test.  Return the time of impact against *rect*, or None.

    If the origin is inside *rect*, a *solid* rect reports ``0.0``; a
    hollow one reports the exit time.
    """
    ox, oy = origin
    dx, dy = direction
    t_enter = -math.inf
    t_exit = math.inf
    for o, d, lo, hi in ((ox, dx, rect.min_x, rect.max_x),
                         (oy, dy, rect.min_y, rect.max_y)):
        if abs(d) < 1e-12:
            if o < lo or o > hi:
                return None
            continue
        t1 = (lo - o) / d
        t2 = (hi - o) / d
        if t1 > t2:
            t1, t2 = t2, t1
        t_enter = max(t_enter, t1)
        t_exit = min(t_exit, t2)
        if t_exit < t_enter:
            return None
    if t_exit < 0.0:
        return None  # behind the origin
    if t_enter <= 0.0:
        toi = 0.0 if solid else t_exit
    else:
        toi = t_enter
    if toi > max_toi:
        return None
    return toi


@dataclass
class _Collider:
    eid: int
    rect: Rect
    groups: CollisionGroups


class CollisionWorld:
    """Static colliders (walls) and the queries gameplay needs.

    Stored as a world resource.  Colliders are added by the level loader
    and never move.
    """

    def __init__(self) -> None:
        self._colliders: list[_Collider] = []

    def add_collider(self, rect: Rect, groups: CollisionGroups | None = None,
                     eid: int = -1) -> None:
        self._colliders.append(_Collider(eid, rect, groups or CollisionGroups(WALL_GROUP, ALL_GROUPS)))

    def clear(self) -> None:
        self._colliders.clear()

    def __len__(self) -> int:
        return len(self._colliders)

    def rects(self, groups: CollisionGroups = WALL_ONLY) -> list[Rect]:
        return [c.rect for c in self._colliders if groups.interacts(c.groups)]

    # ── Queries ──────────────────────────────────────────────────────

    def cast_ray(self, origin: Point, direction: Point, max_toi: float,
                 solid: bool, groups: CollisionGroups) -> RayHit | None:
        """Return the closest hit along the ray, or None if unobstructed."""
        best: _Collider | None = None
        best_toi = math.inf
        for col in self._colliders:
            if not groups.interacts(col.groups):
                continue
            toi = ray_aabb_toi(origin, direction, col.rect, max_toi, solid)
            if toi is not None and toi < best_toi:
                best_toi = toi
                best = col
        if best is None:
            return None
        point = (origin[0] + direction[0] * best_toi,
                 origin[1] + direction[1] * best_toi)
        return RayHit(best.eid, best_toi, point)

    def has_line_of_sight(self, a: Point, b: Point,
                          groups: CollisionGroups = WALL_ONLY) -> bool:
        """True if nothing in *groups* blocks the segment a→b."""
        direction = (b[0] - a[0], b[1] - a[1])
        return self.cast_ray(a, direction, 1.0, True, groups) is None

    def rect_hits(self, rect: Rect, groups: CollisionGroups = WALL_ONLY) -> bool:
        """True if *rect* overlaps any collider in *groups*."""
        for col in self._colliders:
            if groups.interacts(col.groups) and rect.overlaps(col.rect):
                return True
        return False
