"""
core/scene.py — Scene interface

A Scene is one screen of the game.  The app keeps a stack of them and
only the top one receives events, updates and draws.

    class GameScene(Scene):
        def on_enter(self, app):
            # build resources, spawn the level
            ...

        def on_exit(self, app):
            # tear down session state
            ...
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import pygame
    from core.app import App


class Scene:
    def on_enter(self, app: App):
        """Called when this scene becomes active (pushed or revealed)."""
        pass

    def on_exit(self, app: App):
        """Called when this scene is removed or covered."""
        pass

    def handle_event(self, event: pygame.event.Event, app: App):
        pass

    def update(self, dt: float, app: App):
        """Advance simulation. dt is seconds."""
        pass

    def draw(self, surface: pygame.Surface, app: App):
        pass
