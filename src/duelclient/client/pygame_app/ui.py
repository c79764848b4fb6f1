from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Callable

import pygame  # type: ignore[import-not-found]


Color = tuple[int, int, int]


def draw_text(
    screen: pygame.Surface,
    font: pygame.font.Font,
    text: str,
    pos: tuple[int, int],
    color: Color = (240, 240, 240),
) -> None:
    img = font.render(text, True, color)
    screen.blit(img, pos)


def draw_panel(
    screen: pygame.Surface,
    rect: pygame.Rect,
    fill: Color = (24, 24, 32),
    border: Color = (0, 0, 0),
    border_width: int = 2,
) -> None:
    pygame.draw.rect(screen, fill, rect, border_radius=8)
    pygame.draw.rect(screen, border, rect, width=border_width, border_radius=8)


def draw_lines(
    screen: pygame.Surface,
    font: pygame.font.Font,
    lines: Sequence[str],
    pos: tuple[int, int],
    line_height: int = 18,
    color: Color = (220, 220, 220),
    max_chars: int = 120,
) -> None:
    x, y = pos
    for line in lines:
        draw_text(screen, font, line[:max_chars], (x, y), color=color)
        y += line_height


@dataclass
class Button:
    rect: pygame.Rect
    text: str
    on_click: Callable[[], None]
    enabled: bool = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        if not self.enabled:
            return False
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.on_click()
                return True
        return False

    def draw(self, screen: pygame.Surface, font: pygame.font.Font) -> None:
        bg = (60, 60, 60) if self.enabled else (30, 30, 30)
        pygame.draw.rect(screen, bg, self.rect, border_radius=8)
        pygame.draw.rect(screen, (0, 0, 0), self.rect, width=2, border_radius=8)
        fg = (240, 240, 240) if self.enabled else (120, 120, 120)
        img = font.render(self.text, True, fg)
        r = img.get_rect(center=self.rect.center)
        screen.blit(img, r.topleft)
