"""test_collision.py — Line-of-sight oracle and wall collision.

Run:  python test_collision.py
"""
from __future__ import annotations
import sys, traceback

from core.collision import (
    CollisionGroups, CollisionWorld, Rect, WALL_ONLY, ray_aabb_toi,
)
from core.constants import ALL_GROUPS, ENEMY_GROUP, PLAYER_GROUP, WALL_GROUP


# ── Test harness ─────────────────────────────────────────────────────

_passed = 0
_failed = 0

def ok(label: str):
    global _passed
    _passed += 1
    print(f"  [PASS] {label}")


def _walls(*rects: Rect) -> CollisionWorld:
    cw = CollisionWorld()
    for i, r in enumerate(rects):
        cw.add_collider(r, CollisionGroups(WALL_GROUP, ALL_GROUPS), eid=100 + i)
    return cw


# ════════════════════════════════════════════════════════════════════
#  Rect
# ════════════════════════════════════════════════════════════════════

def test_rect_contains_is_inclusive():
    r = Rect(0.0, 0.0, 10.0, 10.0)
    assert r.contains(0.0, 0.0)
    assert r.contains(10.0, 10.0)
    assert r.contains(5.0, 10.0)
    assert not r.contains(10.01, 5.0)
    assert not r.contains(-0.01, 5.0)
    ok("Rect.contains includes the boundary")


def test_rect_from_top_left_and_corners():
    r = Rect.from_top_left(1.0, 2.0, 3.0, 4.0)
    assert (r.min_x, r.min_y, r.max_x, r.max_y) == (1.0, 2.0, 4.0, 6.0)
    assert r.width == 3.0 and r.height == 4.0
    assert r.center == (2.5, 4.0)
    assert Rect.from_corners((4.0, 6.0), (1.0, 2.0)) == r
    ok("from_top_left / from_corners agree")


def test_rect_overlap_is_strict():
    a = Rect(0.0, 0.0, 1.0, 1.0)
    assert a.overlaps(Rect(0.5, 0.5, 2.0, 2.0))
    assert not a.overlaps(Rect(1.0, 0.0, 2.0, 1.0)), "touching edges don't overlap"
    ok("overlaps ignores shared edges")


# ════════════════════════════════════════════════════════════════════
#  Slab test
# ════════════════════════════════════════════════════════════════════

def test_ray_hits_box_in_front():
    box = Rect(4.0, -1.0, 6.0, 1.0)
    toi = ray_aabb_toi((0.0, 0.0), (10.0, 0.0), box, 1.0)
    assert toi is not None and abs(toi - 0.4) < 1e-9
    ok("Ray (0,0)→(10,0) enters wall at t=0.4")


def test_ray_stops_at_max_toi():
    box = Rect(4.0, -1.0, 6.0, 1.0)
    assert ray_aabb_toi((0.0, 0.0), (3.0, 0.0), box, 1.0) is None
    assert ray_aabb_toi((0.0, 0.0), (10.0, 0.0), box, 0.3) is None
    ok("Hits beyond max_toi are ignored")


def test_ray_misses_box_beside_or_behind():
    box = Rect(4.0, -1.0, 6.0, 1.0)
    assert ray_aabb_toi((0.0, 2.0), (10.0, 0.0), box, 1.0) is None
    assert ray_aabb_toi((10.0, 0.0), (5.0, 0.0), box, 1.0) is None
    ok("Parallel-offset and backward rays miss")


def test_ray_origin_inside_solid_and_hollow():
    box = Rect(0.0, 0.0, 4.0, 4.0)
    assert ray_aabb_toi((1.0, 2.0), (4.0, 0.0), box, 1.0, solid=True) == 0.0
    toi = ray_aabb_toi((1.0, 2.0), (4.0, 0.0), box, 1.0, solid=False)
    assert toi is not None and abs(toi - 0.75) < 1e-9
    ok("Inside a solid box → t=0; hollow → exit time")


# ════════════════════════════════════════════════════════════════════
#  CollisionWorld
# ════════════════════════════════════════════════════════════════════

def test_cast_ray_reports_closest_wall():
    cw = _walls(Rect(6.0, -1.0, 7.0, 1.0), Rect(2.0, -1.0, 3.0, 1.0))
    hit = cw.cast_ray((0.0, 0.0), (10.0, 0.0), 1.0, True, WALL_ONLY)
    assert hit is not None
    assert hit.eid == 101
    assert abs(hit.toi - 0.2) < 1e-9
    assert abs(hit.point[0] - 2.0) < 1e-9
    ok("Closest of two walls is reported")


def test_group_filter_skips_non_matching_colliders():
    cw = CollisionWorld()
    cw.add_collider(Rect(4.0, -1.0, 6.0, 1.0), CollisionGroups(ENEMY_GROUP, ALL_GROUPS))
    assert cw.cast_ray((0.0, 0.0), (10.0, 0.0), 1.0, True, WALL_ONLY) is None
    hit = cw.cast_ray((0.0, 0.0), (10.0, 0.0), 1.0, True,
                      CollisionGroups(PLAYER_GROUP, ENEMY_GROUP))
    assert hit is not None
    ok("Walls-only rays pass through enemy colliders")


def test_line_of_sight_spans_exact_segment():
    cw = _walls(Rect(4.0, -1.0, 6.0, 1.0))
    assert not cw.has_line_of_sight((0.0, 0.0), (10.0, 0.0))
    assert cw.has_line_of_sight((0.0, 0.0), (3.9, 0.0))
    assert cw.has_line_of_sight((0.0, 0.0), (5.0, 5.0))
    ok("has_line_of_sight checks a→b and nothing past b")


def test_rect_hits_and_rect_listing():
    cw = _walls(Rect(4.0, -1.0, 6.0, 1.0))
    assert cw.rect_hits(Rect(3.8, -0.2, 4.2, 0.2))
    assert not cw.rect_hits(Rect(3.0, -0.2, 3.5, 0.2))
    assert cw.rects() == [Rect(4.0, -1.0, 6.0, 1.0)]
    assert len(cw) == 1
    cw.clear()
    assert len(cw) == 0
    ok("rect_hits / rects / clear")


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
    print(f"  Collision Tests: {_passed} passed, {_failed} failed")
    print(f"{'=' * 60}")
    sys.exit(1 if _failed else 0)
