from __future__ import annotations

from dataclasses import dataclass

import pygame  # type: ignore[import-not-found]


@dataclass
class Fonts:
    ui: pygame.font.Font
    small: pygame.font.Font
    big: pygame.font.Font
    icon: pygame.font.Font


# Glyph drawn in the corner of a hand card, by card type.
CARD_ICONS: dict[str, str] = {
    "Minion": "M",
    "Spell": "S",
    "Weapon": "W",
    "Hero": "H",
    "HeroPower": "P",
}


class AssetManager:
    def __init__(self) -> None:
        pygame.font.init()
        self.fonts = Fonts(
            ui=pygame.font.SysFont(None, 24),
            small=pygame.font.SysFont(None, 18),
            big=pygame.font.SysFont(None, 34),
            icon=pygame.font.SysFont(None, 28, bold=True),
        )

    def card_icon(self, card_type: str) -> str:
        return CARD_ICONS.get(card_type, CARD_ICONS["Minion"])
