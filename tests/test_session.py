from __future__ import annotations

from concurrent.futures import Executor, Future
from pathlib import Path
from typing import Callable

from duelclient.core.actions import Action, EndTurnAction, PlayCardAction
from duelclient.core.selection import CardSelected, Empty
from duelclient.core.types import Card, GameSnapshot, Hero, Minion, PlayerView
from duelclient.services.api import ActionRejected, ConnectivityError
from duelclient.services.session import CONNECT_ERROR, GameSession
from duelclient.services.telemetry import TelemetryService


class _InlineExecutor(Executor):
    """Runs work at submit time; results still wait in the session queue for pump()."""

    def submit(self, fn: Callable[..., object], /, *args: object, **kwargs: object) -> Future:
        fut: Future = Future()
        try:
            fut.set_result(fn(*args, **kwargs))
        except BaseException as e:
            fut.set_exception(e)
        return fut


class _StubApi:
    def __init__(self) -> None:
        self.fetch_results: list[GameSnapshot | Exception] = []
        self.action_results: list[GameSnapshot | Exception] = []
        self.sent: list[Action] = []

    @staticmethod
    def _next(results: list[GameSnapshot | Exception]) -> GameSnapshot:
        result = results.pop(0)
        if isinstance(result, Exception):
            raise result
        return result

    def fetch_snapshot(self) -> GameSnapshot:
        return self._next(self.fetch_results)

    def submit_action(self, action: Action) -> GameSnapshot:
        self.sent.append(action)
        return self._next(self.action_results)


def _make_snapshot(turn: int = 1, hand: tuple[Card, ...] = (), field: tuple[Minion, ...] = ()) -> GameSnapshot:
    me = PlayerView(hero=Hero("Jaina", 30), mana=2, total_mana=2, hand=hand, field=field)
    them = PlayerView(hero=Hero("Rexxar", 30), mana=2, total_mana=2, hand=(), field=())
    return GameSnapshot(current_turn=turn, phase="Main Action", current_player_index=0, players=(me, them))


def _make_session(tmp_path: Path | None = None, poll: float = 0.0) -> tuple[GameSession, _StubApi]:
    api = _StubApi()
    telemetry = TelemetryService(tmp_path / "telemetry.jsonl") if tmp_path is not None else None
    session = GameSession(api, telemetry, poll_interval=poll, executor=_InlineExecutor())  # type: ignore[arg-type]
    return session, api


MINION_CARD = Card(name="River Crocolisk", cost=2, type="Minion", attack=2, health=3)


def test_initial_fetch_fills_store_on_pump() -> None:
    session, api = _make_session()
    api.fetch_results.append(_make_snapshot(turn=1))

    session.fetch()
    assert not session.store.has_snapshot  # nothing applied before pump

    assert session.pump() == 1
    snap = session.store.current()
    assert snap is not None and snap.current_turn == 1
    assert not session.fetch_in_flight


def test_initial_fetch_failure_leaves_store_empty() -> None:
    session, api = _make_session()
    api.fetch_results.append(ConnectivityError("refused"))

    session.fetch()
    session.pump()

    assert session.store.current() is None
    assert session.last_error == "refused"
    assert session.log.entries == (CONNECT_ERROR,)
    assert not session.controller.interactive


def test_minion_into_empty_field_round_trip() -> None:
    session, api = _make_session()
    api.fetch_results.append(_make_snapshot(turn=1, hand=(MINION_CARD,)))
    session.fetch()
    session.pump()

    session.controller.click_hand_card(0)
    assert session.controller.selection == CardSelected(0)

    api.action_results.append(_make_snapshot(turn=1))
    session.controller.click_own_minion(0)

    assert api.sent == [PlayCardAction(card_index=0, position=0)]
    assert session.controller.selection == Empty()
    assert session.controller.action_pending

    session.pump()
    assert not session.controller.action_pending
    assert session.store.revision == 2
    assert session.log.entries[-1] == "Action performed successfully."


def test_rejected_action_keeps_store() -> None:
    session, api = _make_session()
    first = _make_snapshot(turn=3, hand=(MINION_CARD,))
    api.fetch_results.append(first)
    session.fetch()
    session.pump()

    api.action_results.append(ActionRejected(400, "Not enough mana"))
    session.controller.click_hand_card(0)
    session.controller.click_own_minion(0)
    session.pump()

    assert session.log.entries[-1].endswith("Not enough mana")
    assert session.log.entries[-1] == "Action failed: Not enough mana"
    assert session.controller.selection == Empty()
    assert not session.controller.action_pending
    assert session.store.current() is first
    assert session.store.revision == 1


def test_rejection_without_reason_uses_generic_message() -> None:
    session, api = _make_session()
    api.fetch_results.append(_make_snapshot())
    session.fetch()
    session.pump()

    api.action_results.append(ActionRejected(500, ""))
    session.controller.end_turn()
    session.pump()

    assert session.log.entries[-1] == "Action failed."


def test_server_prefixed_reason_is_not_doubled() -> None:
    session, api = _make_session()
    api.fetch_results.append(_make_snapshot())
    session.fetch()
    session.pump()

    api.action_results.append(ActionRejected(400, "Action failed: invalid attacker or target"))
    session.controller.end_turn()
    session.pump()

    assert session.log.entries[-1] == "Action failed: invalid attacker or target"


def test_connectivity_failure_on_action_settles_gesture() -> None:
    session, api = _make_session()
    api.fetch_results.append(_make_snapshot())
    session.fetch()
    session.pump()

    api.action_results.append(ConnectivityError("connection reset"))
    session.controller.end_turn()
    session.pump()

    assert session.log.entries[-1] == "Action failed: connection reset"
    assert session.controller.interactive


def test_fetch_overtaken_by_action_is_discarded() -> None:
    session, api = _make_session()
    api.fetch_results.append(_make_snapshot(turn=1))
    session.fetch()
    session.pump()

    api.fetch_results.append(_make_snapshot(turn=1))
    api.action_results.append(_make_snapshot(turn=2))
    session.fetch()
    session.controller.end_turn()

    assert session.pump() == 2
    snap = session.store.current()
    assert snap is not None and snap.current_turn == 2
    assert session.store.revision == 2


def test_polling_refetches_when_idle() -> None:
    session, api = _make_session(poll=1.0)
    api.fetch_results.append(_make_snapshot(turn=1))
    session.fetch()
    session.pump()

    api.fetch_results.append(_make_snapshot(turn=2))
    session.tick(0.5)
    assert api.fetch_results  # not yet due
    session.tick(0.6)
    session.tick(0.0)

    snap = session.store.current()
    assert snap is not None and snap.current_turn == 2
    assert session.fetch_attempts == 2


def test_polling_disabled_by_default() -> None:
    session, api = _make_session()
    api.fetch_results.append(_make_snapshot(turn=1))
    session.fetch()
    session.tick(100.0)
    session.tick(100.0)

    assert session.fetch_attempts == 1


def test_telemetry_records_outcomes(tmp_path: Path) -> None:
    session, api = _make_session(tmp_path)
    api.fetch_results.append(_make_snapshot())
    api.action_results.append(ActionRejected(400, "Not your turn"))
    session.fetch()
    session.pump()
    session.controller.end_turn()
    session.pump()

    records = session.telemetry.read_all()  # type: ignore[union-attr]
    assert [r["type"] for r in records] == ["snapshot_fetch", "action"]
    assert records[1]["payload"] == {"ok": False, "error": "Not your turn", "type": "endTurn"}
    assert all(r["session"] == session.telemetry.session_id for r in records)  # type: ignore[union-attr]


def test_end_turn_sent_once_per_round_trip() -> None:
    session, api = _make_session()
    api.fetch_results.append(_make_snapshot())
    session.fetch()
    session.pump()

    api.action_results.append(_make_snapshot(turn=2))
    session.controller.end_turn()
    session.controller.end_turn()
    session.pump()
    api.action_results.append(_make_snapshot(turn=3))
    session.controller.end_turn()
    session.pump()

    assert api.sent == [EndTurnAction(), EndTurnAction()]
