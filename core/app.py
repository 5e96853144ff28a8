"""
core/app.py — Pygame application shell

Owns the window, the frame loop and the scene stack.  Gameplay lives in
Scenes; the app pumps events to the top scene, advances it, and scales
its fixed-size render surface onto whatever size the window is.

    app = App(title="Night Shift", width=512, height=512)
    app.push_scene(GameScene())
    app.run()

Window keys handled here (never reach scenes): F11 fullscreen, window close.
"""

from __future__ import annotations
import pygame
from core.scene import Scene
from core.ecs import World

# Longest frame the simulation will take in one step (s).  A window drag
# or breakpoint would otherwise teleport actors through walls.
MAX_FRAME_DT = 0.1


class App:
    def __init__(self, title: str = "Night Shift", width: int = 512,
                 height: int = 512, fps: int = 60):
        pygame.init()
        pygame.display.set_caption(title)
        self.size = (width, height)
        self._windowed_size = (width, height)
        self._canvas = pygame.Surface(self.size)
        self.screen = pygame.display.set_mode(self.size, pygame.RESIZABLE)
        self.clock = pygame.time.Clock()
        self.fps = fps
        self.dt = 0.0
        self.running = True
        self.fullscreen = False

        self.world = World()
        self._scenes: list[Scene] = []

        self.font = pygame.font.SysFont("monospace", 14)
        self.font_sm = pygame.font.SysFont("monospace", 11)

    # -- Scene stack --

    @property
    def scene(self) -> Scene | None:
        return self._scenes[-1] if self._scenes else None

    def push_scene(self, scene: Scene):
        if self.scene:
            self.scene.on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    def pop_scene(self):
        if self.scene:
            self._scenes.pop().on_exit(self)
        if self.scene:
            self.scene.on_enter(self)

    def replace_scene(self, scene: Scene):
        """Swap the top scene without revealing the one below (restart)."""
        if self.scene:
            self._scenes.pop().on_exit(self)
        self._scenes.append(scene)
        scene.on_enter(self)

    # -- Frame loop --

    def run(self):
        while self.running:
            self.dt = min(self.clock.tick(self.fps) / 1000.0, MAX_FRAME_DT)
            self._pump_events()
            if self.scene:
                self.scene.update(self.dt, self)
                self.scene.draw(self._canvas, self)
            self._present()
        self.shutdown()

    def _pump_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
            elif event.type == pygame.KEYDOWN and event.key == pygame.K_F11:
                self.toggle_fullscreen()
            elif event.type == pygame.VIDEORESIZE and not self.fullscreen:
                self._windowed_size = (event.w, event.h)
                self.screen = pygame.display.set_mode(self._windowed_size,
                                                      pygame.RESIZABLE)
            elif self.scene:
                self.scene.handle_event(event, self)

    def _present(self):
        pygame.transform.scale(self._canvas, self.screen.get_size(), self.screen)
        pygame.display.flip()

    def shutdown(self):
        """Exit every scene (top first) and close the window."""
        while self._scenes:
            self._scenes.pop().on_exit(self)
        pygame.quit()

    def toggle_fullscreen(self):
        self.fullscreen = not self.fullscreen
        if self.fullscreen:
            self.screen = pygame.display.set_mode((0, 0), pygame.FULLSCREEN)
        else:
            self.screen = pygame.display.set_mode(self._windowed_size,
                                                  pygame.RESIZABLE)

    # -- Text helpers --

    def draw_text(self, surface: pygame.Surface, text: str, x: int, y: int,
                  color=(255, 255, 255), font=None) -> pygame.Rect:
        img = (font or self.font).render(text, True, color)
        return surface.blit(img, (x, y))

    def draw_text_bg(self, surface: pygame.Surface, text: str, x: int, y: int,
                     color=(255, 255, 255), bg=(0, 0, 0, 160), font=None,
                     pad: int = 2) -> pygame.Rect:
        """Text on a translucent box, for HUD lines over the map."""
        img = (font or self.font).render(text, True, color)
        w, h = img.get_size()
        box = pygame.Surface((w + pad * 2, h + pad * 2), pygame.SRCALPHA)
        box.fill(bg)
        surface.blit(box, (x - pad, y - pad))
        return surface.blit(img, (x, y))
