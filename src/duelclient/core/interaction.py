from __future__ import annotations

import logging
from typing import Callable

from .actions import Action, AttackAction, EndTurnAction, PlayCardAction, describe_action
from .log import GameLog
from .selection import EMPTY, Attacking, CardSelected, Empty, SelectionState
from .store import SnapshotStore
from .types import GameSnapshot, PlayerView

logger = logging.getLogger(__name__)

Dispatch = Callable[[Action], None]


def insert_position(clicked_index: int, field_length: int) -> int:
    """Field index a selected minion card is played into when a field slot is clicked."""
    return min(clicked_index + 1, field_length)


class InteractionController:
    """Turns clicks into at most one outbound action each.

    Selection is local and tentative; it is reset whenever the store receives a
    new snapshot. Clicks that match no transition are ignored silently. After an
    action is dispatched every gesture is ignored until the response settles.
    """

    def __init__(self, store: SnapshotStore, log: GameLog, dispatch: Dispatch) -> None:
        self.store = store
        self.log = log
        self._dispatch = dispatch
        self._selection: SelectionState = EMPTY
        self._action_pending = False
        self._emitted = 0
        store.subscribe(self._on_snapshot)

    # -- state -----------------------------------------------------------

    @property
    def selection(self) -> SelectionState:
        return self._selection

    @property
    def action_pending(self) -> bool:
        return self._action_pending

    @property
    def emitted(self) -> int:
        return self._emitted

    @property
    def interactive(self) -> bool:
        return self.store.has_snapshot and not self._action_pending

    def is_card_selected(self, hand_index: int) -> bool:
        return isinstance(self._selection, CardSelected) and self._selection.hand_index == hand_index

    def is_minion_attacking(self, minion_index: int) -> bool:
        return isinstance(self._selection, Attacking) and self._selection.minion_index == minion_index

    def reset(self) -> None:
        self._selection = EMPTY
        self._action_pending = False

    def action_settled(self) -> None:
        """The in-flight action finished without a replacement snapshot."""
        self._selection = EMPTY
        self._action_pending = False

    def cancel_selection(self) -> None:
        if not isinstance(self._selection, Empty):
            logger.debug(f"selection {self._selection!r} cancelled")
        self._selection = EMPTY

    def _on_snapshot(self, snapshot: GameSnapshot) -> None:
        self.reset()

    # -- gestures --------------------------------------------------------

    def _acting_player(self) -> PlayerView | None:
        snap = self.store.current()
        if snap is None:
            return None
        if self._action_pending:
            logger.debug("gesture ignored: action in flight")
            return None
        return snap.acting_player

    def click_hand_card(self, index: int) -> None:
        player = self._acting_player()
        if player is None:
            return
        if isinstance(self._selection, Attacking):
            return
        if player.card_at(index) is None:
            return

        if isinstance(self._selection, CardSelected):
            if self._selection.hand_index == index:
                self._selection = EMPTY
                return
            self._selection = EMPTY

        self._select_card(player, index)

    def _select_card(self, player: PlayerView, index: int) -> None:
        card = player.hand[index]
        if card.is_minion:
            self._selection = CardSelected(index)
            self.log.add("Select a position on the board to play this minion.")
            return
        self._emit(PlayCardAction(card_index=index, position=None))

    def click_own_minion(self, index: int) -> None:
        """Click on the acting player's field.

        ``index == len(field)`` is the open area after the last minion, which is
        where a minion card is dropped into an empty field.
        """
        player = self._acting_player()
        if player is None:
            return
        field_length = len(player.field)
        if index < 0 or index > field_length:
            return

        if isinstance(self._selection, CardSelected):
            position = insert_position(index, field_length)
            self._emit(PlayCardAction(card_index=self._selection.hand_index, position=position))
            return

        minion = player.minion_at(index)
        if minion is None:
            return

        if isinstance(self._selection, Attacking) and self._selection.minion_index == index:
            self._selection = EMPTY
            self.log.add("Attack cancelled.")
            return

        if not minion.can_attack:
            return

        self._selection = Attacking(index)
        self.log.add("Select a target to attack.")

    def click_opposing_minion(self, index: int) -> None:
        snap = self.store.current()
        player = self._acting_player()
        if snap is None or player is None:
            return
        if not isinstance(self._selection, Attacking):
            return
        if snap.opposing_player.minion_at(index) is None:
            return
        self._emit(AttackAction(attacker_index=self._selection.minion_index, target_index=index))

    def end_turn(self) -> None:
        if self._acting_player() is None:
            return
        self._emit(EndTurnAction())

    # -- emission --------------------------------------------------------

    def _emit(self, action: Action) -> None:
        self._selection = EMPTY
        self._action_pending = True
        self._emitted += 1
        logger.debug(f"dispatching {describe_action(action)}")
        try:
            self._dispatch(action)
        except Exception:
            self.action_settled()
            raise
