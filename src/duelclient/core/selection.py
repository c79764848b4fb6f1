from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Empty:
    pass


@dataclass(frozen=True)
class CardSelected:
    hand_index: int


@dataclass(frozen=True)
class Attacking:
    minion_index: int


# A single value, so a card selection and an armed attacker cannot coexist.
SelectionState = Empty | CardSelected | Attacking

EMPTY = Empty()
