"""core/constants.py — Shared constants used across the codebase.

Centralises magic numbers so there's exactly one place to change them.

Unit System
-----------
All gameplay distances are measured in **world units**, where:

    1 unit = 32 map pixels   (the canonical spatial unit)

The map art and ``data/map.toml`` are authored in pixels with a top-left
origin and y pointing down.  The level loader divides by
``PIXELS_PER_UNIT`` once; no gameplay code should reference pixels —
only the loader and the renderer.

    Distance / position     u       (world units)
    Speed                   u/s
    Time                    s       (real seconds)
"""

# ── Unit scale ──────────────────────────────────────────────────────
PIXELS_PER_UNIT = 32.0
MAP_SIZE_PX = 512.0

# Render
TILE_SIZE = 32          # screen pixels per world unit at zoom 1.0

# ── Collision groups ────────────────────────────────────────────────
# Bit flags.  A collider belongs to ``memberships`` and only interacts
# with colliders whose memberships intersect its ``filter``.
PLAYER_GROUP     = 1 << 0
ENEMY_GROUP      = 1 << 1
PROJECTILE_GROUP = 1 << 2
WALL_GROUP       = 1 << 3
SPAWNER_GROUP    = 1 << 4
BIG_ENEMY_GROUP  = 1 << 5
ALL_GROUPS       = 0xFFFFFFFF

# ── Palette ─────────────────────────────────────────────────────────
BG_COLOR       = (22, 22, 30)
FLOOR_COLOR    = (48, 52, 44)
WALL_COLOR     = (90, 90, 96)
REGION_COLOR   = (70, 90, 140)
PLAYER_REGION_COLOR = (120, 160, 255)
EDGE_COLOR     = (255, 165, 0)      # debug visibility edges (orange)
NODE_COLOR     = (255, 220, 120)
PATH_COLOR     = (0, 220, 220)
PLAYER_COLOR   = (255, 255, 100)
ENEMY_COLOR    = (220, 60, 60)
SPAWNER_COLOR  = (180, 20, 180)

# Debug overlay colour per route mode
ROUTE_MODE_COLORS = {
    "direct": (80, 220, 80),
    "routed": (0, 220, 220),
    "idle":   (140, 140, 140),
}
