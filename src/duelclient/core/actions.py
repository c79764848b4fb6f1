from __future__ import annotations

from dataclasses import dataclass

# Wire value for "no explicit position"; the server picks placement or target.
NO_POSITION = -1


@dataclass(frozen=True)
class PlayCardAction:
    card_index: int
    position: int | None = None


@dataclass(frozen=True)
class AttackAction:
    attacker_index: int
    target_index: int


@dataclass(frozen=True)
class EndTurnAction:
    pass


Action = PlayCardAction | AttackAction | EndTurnAction


def describe_action(a: Action) -> str:
    if isinstance(a, PlayCardAction):
        if a.position is None:
            return f"play card {a.card_index}"
        return f"play card {a.card_index} at position {a.position}"
    if isinstance(a, AttackAction):
        return f"attack with minion {a.attacker_index} into minion {a.target_index}"
    return "end turn"
