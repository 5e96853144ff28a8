"""scenes/game_draw.py — Rendering helpers for the game scene.

All pure-draw functions live here so that GameScene.draw() stays thin.
Everything is drawn in world units scaled by ``TILE_SIZE`` and shifted by
the camera offset ``(ox, oy)``.
"""

from __future__ import annotations
import pygame
from core.app import App
from core.constants import (
    ENEMY_COLOR, EDGE_COLOR, NODE_COLOR, PATH_COLOR, PLAYER_COLOR,
    PLAYER_REGION_COLOR, REGION_COLOR, ROUTE_MODE_COLORS, SPAWNER_COLOR,
    TILE_SIZE, WALL_COLOR, FLOOR_COLOR,
)
from components import (
    Collider, Enemy, Facing, Player, Position, RouteState, Spawner, Wall,
)
from logic.navigation.pathfinder import Pathfinder
from logic.navigation.visibility import edge_count


def to_screen(x: float, y: float, ox: int, oy: int) -> tuple[int, int]:
    return ox + int(x * TILE_SIZE), oy + int(y * TILE_SIZE)


# ── Map ─────────────────────────────────────────────────────────────

def draw_floor(surface: pygame.Surface, size: float, ox: int, oy: int):
    px = int(size * TILE_SIZE)
    pygame.draw.rect(surface, FLOOR_COLOR, pygame.Rect(ox, oy, px, px))


def draw_walls(surface: pygame.Surface, app: App, ox: int, oy: int):
    for _eid, wall in app.world.all_of(Wall):
        sx, sy = to_screen(wall.x, wall.y, ox, oy)
        rect = pygame.Rect(sx, sy, int(wall.w * TILE_SIZE), int(wall.h * TILE_SIZE))
        pygame.draw.rect(surface, WALL_COLOR, rect)


def draw_regions(surface: pygame.Surface, pathfinder: Pathfinder,
                 ox: int, oy: int):
    """Outline every region; tint the one the player is in."""
    overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
    for i, region in enumerate(pathfinder.regions):
        area = region.area
        sx, sy = to_screen(area.min_x, area.min_y, ox, oy)
        rect = pygame.Rect(sx, sy, int(area.width * TILE_SIZE),
                           int(area.height * TILE_SIZE))
        if i == pathfinder.player_region:
            pygame.draw.rect(overlay, (*PLAYER_REGION_COLOR, 40), rect)
            pygame.draw.rect(overlay, (*PLAYER_REGION_COLOR, 200), rect, 2)
        else:
            pygame.draw.rect(overlay, (*REGION_COLOR, 110), rect, 1)
    surface.blit(overlay, (0, 0))


# ── Entities ────────────────────────────────────────────────────────

_FACING_VEC = {"right": (1, 0), "left": (-1, 0), "up": (0, -1), "down": (0, 1)}


def _draw_actor(surface: pygame.Surface, pos: Position, radius: int,
                color, facing: Facing | None, ox: int, oy: int):
    cx, cy = to_screen(pos.x, pos.y, ox, oy)
    pygame.draw.circle(surface, color, (cx, cy), radius)
    if facing is not None:
        fx, fy = _FACING_VEC.get(facing.direction, (0, 1))
        pygame.draw.line(surface, (0, 0, 0), (cx, cy),
                         (cx + fx * radius, cy + fy * radius), 2)


def draw_entities(surface: pygame.Surface, app: App, ox: int, oy: int):
    world = app.world
    for _eid, _sp, pos in world.query(Spawner, Position):
        cx, cy = to_screen(pos.x, pos.y, ox, oy)
        pygame.draw.rect(surface, SPAWNER_COLOR, pygame.Rect(cx - 6, cy - 6, 12, 12), 2)

    for eid, _enemy, pos in world.query(Enemy, Position):
        col = world.get(eid, Collider)
        radius = int((col.width if col else 0.5) * TILE_SIZE * 0.5)
        _draw_actor(surface, pos, radius, ENEMY_COLOR, world.get(eid, Facing), ox, oy)

    for eid, _player, pos in world.query(Player, Position):
        col = world.get(eid, Collider)
        radius = int((col.width if col else 0.5) * TILE_SIZE * 0.5)
        _draw_actor(surface, pos, radius, PLAYER_COLOR, world.get(eid, Facing), ox, oy)


# ── Debug overlay ───────────────────────────────────────────────────

def draw_nav_graph(surface: pygame.Surface, app: App, pathfinder: Pathfinder,
                   ox: int, oy: int):
    """Visibility edges and numbered nodes.

    Edges are stored both ways; only the direction whose source lies to
    the right (or level) is drawn, so each line appears once.
    """
    nodes = pathfinder.nodes
    for a, neighbours in pathfinder.edges.items():
        for b in neighbours:
            if nodes[a][0] >= nodes[b][0]:
                pygame.draw.line(surface, EDGE_COLOR, to_screen(*nodes[a], ox, oy),
                                 to_screen(*nodes[b], ox, oy), 1)
    for i, (x, y) in enumerate(nodes):
        cx, cy = to_screen(x, y, ox, oy)
        pygame.draw.circle(surface, NODE_COLOR, (cx, cy), 3)
        app.draw_text(surface, str(i), cx + 4, cy - 12, NODE_COLOR, font=app.font_sm)


def draw_routes(surface: pygame.Surface, app: App, ox: int, oy: int):
    """Each enemy's steering target, coloured by route mode."""
    for _eid, _enemy, pos, state in app.world.query(Enemy, Position, RouteState):
        if state.target is None:
            continue
        color = ROUTE_MODE_COLORS.get(state.mode, PATH_COLOR)
        pygame.draw.line(surface, color, to_screen(pos.x, pos.y, ox, oy),
                         to_screen(*state.target, ox, oy), 1)
        tx, ty = to_screen(*state.target, ox, oy)
        pygame.draw.circle(surface, color, (tx, ty), 5, 1)


def draw_hud(surface: pygame.Surface, app: App, pathfinder: Pathfinder,
             show_debug: bool):
    name = pathfinder.player_region_name() or "-"
    app.draw_text_bg(surface, f"region: {name}", 6, 6, font=app.font_sm)
    if show_debug:
        lines = [
            f"nav: {pathfinder.state.value}  nodes {len(pathfinder.nodes)}  "
            f"edges {edge_count(pathfinder.edges)}  paths {len(pathfinder.paths)}",
            "\\ debug   R restart   F4 reload tuning",
        ]
        for i, line in enumerate(lines):
            app.draw_text_bg(surface, line, 6, 22 + i * 14, font=app.font_sm)
