from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from ..app import GameContext, SceneTransition
from ..ui import Button, draw_lines, draw_text
from .match import MatchScene


class BootScene:
    """Fetches the first snapshot. Nothing is clickable until one arrives."""

    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self._started = False
        self.btn_retry = Button(rect=pygame.Rect(20, 700, 140, 44), text="Retry", on_click=self._on_retry)
        self.btn_quit = Button(
            rect=pygame.Rect(180, 700, 140, 44),
            text="Quit",
            on_click=lambda: pygame.event.post(pygame.event.Event(pygame.QUIT)),
        )

    def _failed(self) -> bool:
        session = self.ctx.session
        return not session.fetch_in_flight and session.last_error is not None

    def _on_retry(self) -> None:
        self.ctx.session.fetch()

    def handle_event(self, event: pygame.event.Event) -> None:
        if not self._failed():
            return
        self.btn_retry.handle_event(event)
        self.btn_quit.handle_event(event)

    def update(self, dt: float) -> SceneTransition | None:
        session = self.ctx.session
        if not self._started:
            self._started = True
            session.fetch()
            return None
        if session.store.has_snapshot:
            return SceneTransition(MatchScene(self.ctx))
        return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((10, 10, 10))
        fonts = self.ctx.assets.fonts
        session = self.ctx.session
        draw_text(screen, fonts.big, "duelclient", (20, 20))

        if not self._failed():
            draw_text(screen, fonts.ui, f"Connecting to {self.ctx.config.server_url} ...", (20, 80))
            return

        draw_text(screen, fonts.ui, "Could not load the game.", (20, 80), color=(240, 80, 80))
        draw_text(
            screen,
            fonts.small,
            f"Attempt {session.fetch_attempts}: {session.last_error}",
            (20, 112),
            color=(230, 230, 230),
        )
        draw_lines(screen, fonts.small, session.log.tail(20), (20, 150))
        self.btn_retry.draw(screen, fonts.ui)
        self.btn_quit.draw(screen, fonts.ui)
