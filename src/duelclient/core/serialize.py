from __future__ import annotations

import logging
from typing import Mapping

from .actions import NO_POSITION, Action, AttackAction, EndTurnAction, PlayCardAction
from .types import CARD_TYPES, STAT_CARD_TYPES, Card, CardType, GameSnapshot, Hero, Minion, PlayerView, Weapon

logger = logging.getLogger(__name__)


class SnapshotError(RuntimeError):
    pass


# Server spelling -> CardType
_WIRE_CARD_TYPES: dict[str, CardType] = {t: t for t in CARD_TYPES}
_WIRE_CARD_TYPES["Hero Power"] = "HeroPower"


def action_to_dict(a: Action) -> dict[str, object]:
    """Body for ``POST /api/action``."""
    if isinstance(a, PlayCardAction):
        return {
            "type": "playCard",
            "cardIndex": a.card_index,
            "position": NO_POSITION if a.position is None else a.position,
        }
    if isinstance(a, AttackAction):
        return {
            "type": "attack",
            "cardIndex": a.attacker_index,
            "target": a.target_index,
        }
    if isinstance(a, EndTurnAction):
        return {"type": "endTurn"}
    raise TypeError(f"Unknown action: {a!r}")


def _require_str(obj: Mapping[str, object], key: str) -> str:
    v = obj.get(key)
    if not isinstance(v, str):
        raise SnapshotError(f"Expected string for {key}")
    return v


def _require_int(obj: Mapping[str, object], key: str) -> int:
    v = obj.get(key)
    # bool is an int subclass; reject it explicitly
    if not isinstance(v, int) or isinstance(v, bool):
        raise SnapshotError(f"Expected int for {key}")
    return v


def _optional_int(obj: Mapping[str, object], key: str, default: int = 0) -> int:
    if obj.get(key) is None:
        return default
    return _require_int(obj, key)


def _require_list(obj: Mapping[str, object], key: str) -> list[object]:
    v = obj.get(key)
    if not isinstance(v, list):
        raise SnapshotError(f"Expected list for {key}")
    return v


def _require_dict(obj: Mapping[str, object], key: str) -> Mapping[str, object]:
    v = obj.get(key)
    if not isinstance(v, dict):
        raise SnapshotError(f"Expected object for {key}")
    return v


def _optional_str(obj: Mapping[str, object], key: str) -> str | None:
    v = obj.get(key)
    if v is None or v == "":
        return None
    if not isinstance(v, str):
        raise SnapshotError(f"Expected string for {key}")
    return v


def _parse_tags(raw: object) -> frozenset[str]:
    if raw is None:
        return frozenset()
    if not isinstance(raw, list):
        raise SnapshotError("tags must be a list")
    return frozenset(t for t in raw if isinstance(t, str) and t)


def _parse_card(raw: object) -> Card:
    if not isinstance(raw, dict):
        raise SnapshotError("hand entries must be objects")
    wire_type = _require_str(raw, "type")
    card_type = _WIRE_CARD_TYPES.get(wire_type)
    if card_type is None:
        logger.debug(f"unrecognised card type {wire_type!r}, treating as Unknown")
        card_type = "Unknown"
    has_stats = card_type in STAT_CARD_TYPES
    return Card(
        name=_require_str(raw, "name"),
        cost=_optional_int(raw, "cost"),
        type=card_type,
        description=_optional_str(raw, "description"),
        attack=_optional_int(raw, "attack") if has_stats else None,
        health=_optional_int(raw, "health") if has_stats else None,
    )


def _parse_minion(raw: object) -> Minion:
    if not isinstance(raw, dict):
        raise SnapshotError("field entries must be objects")
    return Minion(
        name=_require_str(raw, "name"),
        attack=_optional_int(raw, "attack"),
        health=_require_int(raw, "health"),
        tags=_parse_tags(raw.get("tags")),
        can_attack=bool(raw.get("canAttack", False)),
        description=_optional_str(raw, "description"),
    )


def _parse_weapon(raw: object) -> Weapon | None:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise SnapshotError("weapon must be an object")
    return Weapon(
        name=_require_str(raw, "name"),
        attack=_optional_int(raw, "attack"),
        durability=_optional_int(raw, "health"),
    )


def _parse_player(raw: object) -> PlayerView:
    if not isinstance(raw, dict):
        raise SnapshotError("players entries must be objects")
    hero_raw = _require_dict(raw, "hero")
    return PlayerView(
        hero=Hero(name=_require_str(hero_raw, "name"), health=_require_int(hero_raw, "health")),
        mana=_require_int(raw, "mana"),
        total_mana=_require_int(raw, "totalMana"),
        hand=tuple(_parse_card(c) for c in _require_list(raw, "hand")),
        field=tuple(_parse_minion(m) for m in _require_list(raw, "field")),
        weapon=_parse_weapon(raw.get("weapon")),
    )


def snapshot_from_dict(raw: object) -> GameSnapshot:
    """Build a snapshot from the decoded ``GET /api/game`` body."""
    if not isinstance(raw, dict):
        raise SnapshotError("snapshot must be an object")
    players_raw = _require_list(raw, "players")
    if len(players_raw) != 2:
        raise SnapshotError(f"Expected exactly 2 players, got {len(players_raw)}")
    current = _require_int(raw, "currentPlayerIndex")
    if current not in (0, 1):
        raise SnapshotError(f"currentPlayerIndex out of range: {current}")
    actions_raw = raw.get("availableActions") or []
    if not isinstance(actions_raw, list):
        raise SnapshotError("availableActions must be a list")
    return GameSnapshot(
        current_turn=_require_int(raw, "currentTurn"),
        phase=_require_str(raw, "phase"),
        current_player_index=current,
        players=(_parse_player(players_raw[0]), _parse_player(players_raw[1])),
        available_actions=tuple(str(a) for a in actions_raw),
    )
