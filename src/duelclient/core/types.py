from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

CardType = Literal["Minion", "Spell", "Weapon", "Hero", "HeroPower", "Unknown"]

CARD_TYPES: tuple[CardType, ...] = ("Minion", "Spell", "Weapon", "Hero", "HeroPower", "Unknown")

# Card types that carry attack/health on the card face.
STAT_CARD_TYPES: tuple[CardType, ...] = ("Minion", "Weapon")


@dataclass(frozen=True)
class Hero:
    name: str
    health: int


@dataclass(frozen=True)
class Weapon:
    name: str
    attack: int
    durability: int


@dataclass(frozen=True)
class Card:
    name: str
    cost: int
    type: CardType
    description: str | None = None
    attack: int | None = None
    health: int | None = None

    @property
    def is_minion(self) -> bool:
        return self.type == "Minion"


@dataclass(frozen=True)
class Minion:
    name: str
    attack: int
    health: int
    tags: frozenset[str] = frozenset()
    can_attack: bool = False
    description: str | None = None


@dataclass(frozen=True)
class PlayerView:
    hero: Hero
    mana: int
    total_mana: int
    hand: tuple[Card, ...]
    field: tuple[Minion, ...]
    weapon: Weapon | None = None

    def card_at(self, index: int) -> Card | None:
        if 0 <= index < len(self.hand):
            return self.hand[index]
        return None

    def minion_at(self, index: int) -> Minion | None:
        if 0 <= index < len(self.field):
            return self.field[index]
        return None


@dataclass(frozen=True)
class GameSnapshot:
    """Immutable server-owned game state.

    Hand and field indices are only meaningful for the snapshot they were read
    from; a replacement snapshot invalidates all of them.
    """

    current_turn: int
    phase: str
    current_player_index: int
    players: tuple[PlayerView, PlayerView]
    available_actions: tuple[str, ...] = ()

    @property
    def acting_player(self) -> PlayerView:
        return self.players[self.current_player_index]

    @property
    def opposing_player(self) -> PlayerView:
        return self.players[1 - self.current_player_index]
