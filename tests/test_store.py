from __future__ import annotations

from duelclient.core.log import GameLog
from duelclient.core.store import SnapshotStore
from duelclient.core.types import GameSnapshot, Hero, PlayerView


def _make_snapshot(turn: int) -> GameSnapshot:
    p = PlayerView(hero=Hero("Uther", 30), mana=0, total_mana=0, hand=(), field=())
    return GameSnapshot(current_turn=turn, phase="Main Begin", current_player_index=0, players=(p, p))


def test_store_starts_empty() -> None:
    store = SnapshotStore()

    assert store.current() is None
    assert not store.has_snapshot
    assert store.revision == 0


def test_replace_swaps_whole_snapshot_and_notifies() -> None:
    store = SnapshotStore()
    seen: list[int] = []
    store.subscribe(lambda s: seen.append(s.current_turn))

    first, second = _make_snapshot(1), _make_snapshot(2)
    store.replace(first)
    store.replace(second)

    assert store.current() is second
    assert store.revision == 2
    assert seen == [1, 2]


def test_game_log_is_append_only() -> None:
    log = GameLog()
    heard: list[str] = []
    log.subscribe(heard.append)

    log.add("one")
    log.add("two")
    log.add("three")

    assert log.entries == ("one", "two", "three")
    assert log.tail(2) == ("two", "three")
    assert log.tail(0) == ()
    assert heard == ["one", "two", "three"]
    assert len(log) == 3
