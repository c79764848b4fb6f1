from __future__ import annotations

import pygame  # type: ignore[import-not-found]

from duelclient.core.types import Card, Minion, PlayerView

from ..app import GameContext, SceneTransition
from ..layout import FIELD_X0, LOG_BOX, MAX_FIELD_SLOTS, SLOT_GAP, SLOT_H, SLOT_W, hand_card_box, hand_index_at
from ..ui import Button, draw_lines, draw_panel, draw_text

HIGHLIGHT = (240, 240, 120)
CAN_ATTACK = (90, 200, 110)


class MatchScene:
    """Draws the current snapshot and forwards clicks to the interaction controller.

    Nothing here decides what a click means; visual markers are derived from the
    controller's selection every frame.
    """

    def __init__(self, ctx: GameContext) -> None:
        self.ctx = ctx
        self.session = ctx.session
        self.controller = ctx.session.controller

        self.btn_end = Button(rect=pygame.Rect(860, 660, 140, 50), text="End Turn", on_click=self.controller.end_turn)
        self.btn_refresh = Button(rect=pygame.Rect(860, 20, 140, 40), text="Refresh", on_click=self._on_refresh)

    def _on_refresh(self) -> None:
        self.session.fetch()

    # -- input -----------------------------------------------------------

    def handle_event(self, event: pygame.event.Event) -> None:
        if self.btn_end.handle_event(event) or self.btn_refresh.handle_event(event):
            return

        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)

        if event.type == pygame.KEYDOWN:
            if event.key == pygame.K_ESCAPE:
                self.controller.cancel_selection()
            elif event.key == pygame.K_F5:
                self.session.fetch()

    def _handle_click(self, pos: tuple[int, int]) -> None:
        snap = self.session.store.current()
        if snap is None:
            return

        hand_index = self._hit_test_hand(snap.acting_player, pos)
        if hand_index is not None:
            self.controller.click_hand_card(hand_index)
            return

        own_index = self._hit_test_own_field(snap.acting_player, pos)
        if own_index is not None:
            self.controller.click_own_minion(own_index)
            return

        enemy_index = self._hit_test_minion(snap.opposing_player, pos, own=False)
        if enemy_index is not None:
            self.controller.click_opposing_minion(enemy_index)

    # -- layout ----------------------------------------------------------

    def _card_rect(self, index: int, hand_len: int) -> pygame.Rect:
        return pygame.Rect(hand_card_box(index, hand_len, lifted=self.controller.is_card_selected(index)))

    def _lifted_index(self, hand_len: int) -> int | None:
        return next((i for i in range(hand_len) if self.controller.is_card_selected(i)), None)

    def _slot_rect(self, own: bool, slot: int) -> pygame.Rect:
        y = 330 if own else 180
        return pygame.Rect(FIELD_X0 + slot * (SLOT_W + SLOT_GAP), y, SLOT_W, SLOT_H)

    def _field_rect(self, own: bool) -> pygame.Rect:
        first = self._slot_rect(own, 0)
        width = MAX_FIELD_SLOTS * (SLOT_W + SLOT_GAP) - SLOT_GAP
        return pygame.Rect(first.x, first.y, width, SLOT_H)

    def _hero_rect(self, own: bool) -> pygame.Rect:
        if own:
            return pygame.Rect(40, 640, 200, 70)
        return pygame.Rect(40, 20, 200, 70)

    def _hit_test_hand(self, player: PlayerView, pos: tuple[int, int]) -> int | None:
        return hand_index_at(pos, len(player.hand), self._lifted_index(len(player.hand)))

    def _hit_test_minion(self, player: PlayerView, pos: tuple[int, int], own: bool) -> int | None:
        for i in range(min(len(player.field), MAX_FIELD_SLOTS)):
            if self._slot_rect(own, i).collidepoint(pos):
                return i
        return None

    def _hit_test_own_field(self, player: PlayerView, pos: tuple[int, int]) -> int | None:
        index = self._hit_test_minion(player, pos, own=True)
        if index is not None:
            return index
        # Open board space stands for "after the last minion".
        if self._field_rect(own=True).collidepoint(pos):
            return len(player.field)
        return None

    # -- frame -----------------------------------------------------------

    def update(self, dt: float) -> SceneTransition | None:
        return None

    def render(self, screen: pygame.Surface) -> None:
        screen.fill((8, 10, 14))
        fonts = self.ctx.assets.fonts
        snap = self.session.store.current()
        if snap is None:
            return

        self.btn_refresh.draw(screen, fonts.ui)
        self.btn_end.enabled = self.controller.interactive
        self.btn_end.draw(screen, fonts.ui)

        draw_text(screen, fonts.ui, f"Turn: {snap.current_turn}", (300, 24))
        draw_text(screen, fonts.ui, f"Phase: {snap.phase}", (300, 50))
        draw_text(screen, fonts.small, f"Player {snap.current_player_index + 1} to act", (300, 76))

        self._draw_hero(screen, snap.opposing_player, own=False)
        self._draw_hero(screen, snap.acting_player, own=True)
        self._draw_opponent_hand(screen, len(snap.opposing_player.hand))

        self._draw_field(screen, snap.opposing_player, own=False)
        self._draw_field(screen, snap.acting_player, own=True)
        self._draw_hand(screen, snap.acting_player)

        self._draw_status(screen)
        self._draw_log(screen)

    def _draw_hero(self, screen: pygame.Surface, player: PlayerView, own: bool) -> None:
        fonts = self.ctx.assets.fonts
        rect = self._hero_rect(own)
        draw_panel(screen, rect)
        draw_text(screen, fonts.ui, player.hero.name, (rect.x + 10, rect.y + 8))
        draw_text(screen, fonts.small, f"{player.hero.health} HP", (rect.x + 10, rect.y + 32))
        draw_text(screen, fonts.small, f"Mana: {player.mana}/{player.total_mana}", (rect.x + 10, rect.y + 50))
        if player.weapon is not None:
            w = player.weapon
            draw_text(
                screen,
                fonts.small,
                f"{w.name} {w.attack}/{w.durability}",
                (rect.right + 10, rect.y + 32),
                color=(200, 180, 140),
            )

    def _draw_opponent_hand(self, screen: pygame.Surface, count: int) -> None:
        fonts = self.ctx.assets.fonts
        for i in range(count):
            rect = pygame.Rect(300 + i * 44, 100, 40, 56)
            draw_panel(screen, rect, fill=(40, 30, 60))
            draw_text(screen, fonts.icon, "?", (rect.x + 14, rect.y + 18), color=(160, 140, 200))

    def _draw_field(self, screen: pygame.Surface, player: PlayerView, own: bool) -> None:
        fonts = self.ctx.assets.fonts
        field_rect = self._field_rect(own)
        pygame.draw.rect(screen, (14, 14, 20), field_rect, border_radius=8)
        if not player.field:
            hint = "(empty board)" if not own else "(empty board - click to place a minion)"
            draw_text(screen, fonts.small, hint, (field_rect.x + 10, field_rect.y + 36), color=(120, 120, 140))
        for i, minion in enumerate(player.field[:MAX_FIELD_SLOTS]):
            self._draw_minion(screen, self._slot_rect(own, i), minion, own, i)

    def _draw_minion(self, screen: pygame.Surface, rect: pygame.Rect, minion: Minion, own: bool, index: int) -> None:
        fonts = self.ctx.assets.fonts
        border = (0, 0, 0)
        width = 2
        if own and self.controller.is_minion_attacking(index):
            border, width = HIGHLIGHT, 3
        elif own and minion.can_attack:
            border = CAN_ATTACK
        draw_panel(screen, rect, fill=(18, 18, 24), border=border, border_width=width)
        draw_text(screen, fonts.small, minion.name[:14], (rect.x + 6, rect.y + 6))
        draw_text(screen, fonts.ui, f"{minion.attack}/{minion.health}", (rect.x + 6, rect.y + 30))
        tags = ", ".join(sorted(minion.tags))
        if tags:
            draw_text(screen, fonts.small, tags[:16], (rect.x + 6, rect.y + 62), color=(180, 180, 220))

    def _draw_hand(self, screen: pygame.Surface, player: PlayerView) -> None:
        n = len(player.hand)
        for i, card in enumerate(player.hand):
            self._draw_card(screen, self._card_rect(i, n), card, selected=self.controller.is_card_selected(i))

    def _draw_card(self, screen: pygame.Surface, rect: pygame.Rect, card: Card, selected: bool) -> None:
        fonts = self.ctx.assets.fonts
        border, width = (HIGHLIGHT, 3) if selected else ((0, 0, 0), 2)
        draw_panel(screen, rect, fill=(28, 28, 40), border=border, border_width=width)
        draw_text(screen, fonts.ui, str(card.cost), (rect.x + 6, rect.y + 6), color=(120, 170, 250))
        draw_text(screen, fonts.icon, self.ctx.assets.card_icon(card.type), (rect.right - 22, rect.y + 4))
        draw_text(screen, fonts.small, card.name[:14], (rect.x + 6, rect.y + 32))
        if card.description:
            draw_lines(
                screen,
                fonts.small,
                [card.description[i : i + 14] for i in range(0, min(len(card.description), 42), 14)],
                (rect.x + 6, rect.y + 50),
                line_height=14,
                color=(190, 190, 190),
            )
        if card.attack is not None and card.health is not None:
            draw_text(screen, fonts.ui, f"{card.attack}/{card.health}", (rect.x + 6, rect.bottom - 24))

    def _draw_status(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        if self.controller.action_pending:
            text, color = "Waiting for server...", (240, 200, 120)
        elif self.session.fetch_in_flight:
            text, color = "Refreshing...", (160, 160, 160)
        else:
            return
        draw_text(screen, fonts.ui, text, (300, 440), color=color)

    def _draw_log(self, screen: pygame.Surface) -> None:
        fonts = self.ctx.assets.fonts
        rect = pygame.Rect(LOG_BOX)
        draw_panel(screen, rect, fill=(16, 16, 22))
        draw_text(screen, fonts.small, "Game log", (rect.x + 8, rect.y + 6), color=(160, 160, 180))
        lines: list[str] = []
        for entry in self.session.log.tail(12):
            lines.extend(entry[i : i + 28] for i in range(0, len(entry), 28))
        draw_lines(screen, fonts.small, lines[-28:], (rect.x + 8, rect.y + 28))
