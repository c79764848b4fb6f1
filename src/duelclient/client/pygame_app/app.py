from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol

import pygame  # type: ignore[import-not-found]

from duelclient.config import ClientConfig
from duelclient.paths import Paths
from duelclient.services.session import GameSession

from .asset_manager import AssetManager


@dataclass
class SceneTransition:
    next_scene: "Scene"


class Scene(Protocol):
    def handle_event(self, event: pygame.event.Event) -> None: ...
    def update(self, dt: float) -> SceneTransition | None: ...
    def render(self, screen: pygame.Surface) -> None: ...


@dataclass
class GameContext:
    screen: pygame.Surface
    clock: pygame.time.Clock
    paths: Paths
    config: ClientConfig
    assets: AssetManager
    session: GameSession


class App:
    def __init__(self, ctx: GameContext, initial_scene: Scene) -> None:
        self.ctx = ctx
        self.scene: Scene = initial_scene
        self.running = True

    def run(self) -> int:
        try:
            while self.running:
                dt = self.ctx.clock.tick(self.ctx.config.fps) / 1000.0
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                        break
                    self.scene.handle_event(event)

                # Network results are applied here, on the UI thread, between frames.
                self.ctx.session.tick(dt)

                tr = self.scene.update(dt)
                if tr is not None:
                    self.scene = tr.next_scene

                self.scene.render(self.ctx.screen)
                pygame.display.flip()
        finally:
            self.ctx.session.close()

        return 0
