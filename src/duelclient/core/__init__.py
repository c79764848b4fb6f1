"""Headless interaction core for duelclient.

IMPORTANT: This package must never import pygame or requests.
"""

from .actions import NO_POSITION, Action, AttackAction, EndTurnAction, PlayCardAction
from .interaction import InteractionController, insert_position
from .log import GameLog
from .selection import Attacking, CardSelected, Empty, SelectionState
from .store import SnapshotStore
from .types import Card, CardType, GameSnapshot, Hero, Minion, PlayerView, Weapon

__all__ = [
    "Action",
    "AttackAction",
    "Attacking",
    "Card",
    "CardSelected",
    "CardType",
    "Empty",
    "EndTurnAction",
    "GameLog",
    "GameSnapshot",
    "Hero",
    "InteractionController",
    "Minion",
    "NO_POSITION",
    "PlayCardAction",
    "PlayerView",
    "SelectionState",
    "SnapshotStore",
    "Weapon",
    "insert_position",
]
