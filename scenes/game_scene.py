"""
scenes/game_scene.py — The yard at night

Top-down view of the whole map.  WASD / arrows move the player; enemies
chase using the navigation graph.

Keys
----
\\     toggle the navigation debug overlay
R      restart the level (fresh world, fresh graph)
F4     hot-reload data/tuning.toml
Esc    quit
"""

from __future__ import annotations
from pathlib import Path
import pygame
from core.scene import Scene
from core.app import App
from core.collision import CollisionWorld
from core.constants import BG_COLOR, TILE_SIZE
from core.ecs import World
from core.events import EventBus
from core.level import LevelData, load_level, spawn_level
from core import tuning as tuning_mod
from components import Camera, DebugOverlay, DevLog, GameClock
from logic import containment
from logic.navigation.pathfinder import Pathfinder
from logic.tick import tick_systems
from scenes.game_draw import (
    draw_entities, draw_floor, draw_hud, draw_nav_graph, draw_regions,
    draw_routes, draw_walls,
)

_MOVE_KEYS = {
    pygame.K_w: (0, -1), pygame.K_UP: (0, -1),
    pygame.K_s: (0, 1), pygame.K_DOWN: (0, 1),
    pygame.K_a: (-1, 0), pygame.K_LEFT: (-1, 0),
    pygame.K_d: (1, 0), pygame.K_RIGHT: (1, 0),
}


class GameScene(Scene):
    def __init__(self, level_path: str | Path | None = None):
        self.level_path = level_path
        self.level: LevelData | None = None
        self.pathfinder: Pathfinder | None = None
        self.collisions: CollisionWorld | None = None
        self.player: int | None = None

    def on_enter(self, app: App):
        tuning_mod.load()

        # Every session starts from an empty world.
        app.world = World()
        world = app.world
        world.set_res(Camera())
        world.set_res(GameClock())
        world.set_res(DevLog())
        world.set_res(DebugOverlay(bool(tuning_mod.get("debug", "overlay", False))))

        bus = EventBus()
        world.set_res(bus)
        containment.install(world, bus)

        self.pathfinder = Pathfinder()
        self.collisions = CollisionWorld()
        world.set_res(self.pathfinder)
        world.set_res(self.collisions)

        self.level = load_level(self.level_path)
        self.player = spawn_level(world, self.collisions, self.level)

        cam = world.res(Camera)
        cam.x = cam.y = self.level.size / 2.0

    def on_exit(self, app: App):
        if self.pathfinder is not None:
            self.pathfinder.reset()
        if self.collisions is not None:
            self.collisions.clear()

    # ── events ───────────────────────────────────────────────────────

    def handle_event(self, event: pygame.event.Event, app: App):
        if event.type != pygame.KEYDOWN:
            return
        if event.key == pygame.K_BACKSLASH:
            overlay = app.world.res(DebugOverlay)
            if overlay:
                overlay.enabled = not overlay.enabled
        elif event.key == pygame.K_r:
            print("[GAME] restarting level")
            app.replace_scene(GameScene(self.level_path))
        elif event.key == pygame.K_F4:
            tuning_mod.reload()
        elif event.key == pygame.K_ESCAPE:
            app.running = False

    # ── update ───────────────────────────────────────────────────────

    def update(self, dt: float, app: App):
        keys = pygame.key.get_pressed()
        mx = my = 0
        for key, (dx, dy) in _MOVE_KEYS.items():
            if keys[key]:
                mx += dx
                my += dy
        tick_systems(app.world, dt, self.pathfinder, self.collisions, move=(mx, my))

    # ── draw ─────────────────────────────────────────────────────────

    def draw(self, surface: pygame.Surface, app: App):
        surface.fill(BG_COLOR)
        cam = app.world.res(Camera) or Camera()
        sw, sh = surface.get_size()
        ox = sw // 2 - int(cam.x * TILE_SIZE)
        oy = sh // 2 - int(cam.y * TILE_SIZE)

        draw_floor(surface, self.level.size if self.level else 16.0, ox, oy)
        draw_regions(surface, self.pathfinder, ox, oy)
        draw_walls(surface, app, ox, oy)

        overlay = app.world.res(DebugOverlay)
        show_debug = bool(overlay and overlay.enabled)
        if show_debug:
            draw_nav_graph(surface, app, self.pathfinder, ox, oy)
            draw_routes(surface, app, ox, oy)

        draw_entities(surface, app, ox, oy)
        draw_hud(surface, app, self.pathfinder, show_debug)
