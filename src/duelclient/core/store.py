from __future__ import annotations

import logging
from typing import Callable

from .types import GameSnapshot

logger = logging.getLogger(__name__)

SnapshotListener = Callable[[GameSnapshot], None]


class SnapshotStore:
    """Holds the one authoritative snapshot most recently received from the server.

    The snapshot is swapped as a unit; there is no partial-update path. Listeners
    run after every swap, in subscription order.
    """

    def __init__(self) -> None:
        self._snapshot: GameSnapshot | None = None
        self._revision = 0
        self._listeners: list[SnapshotListener] = []

    def current(self) -> GameSnapshot | None:
        return self._snapshot

    @property
    def has_snapshot(self) -> bool:
        return self._snapshot is not None

    @property
    def revision(self) -> int:
        return self._revision

    def subscribe(self, listener: SnapshotListener) -> None:
        self._listeners.append(listener)

    def replace(self, snapshot: GameSnapshot) -> None:
        self._snapshot = snapshot
        self._revision += 1
        logger.debug(
            f"snapshot r{self._revision}: turn {snapshot.current_turn}, "
            f"phase {snapshot.phase}, player {snapshot.current_player_index}"
        )
        for listener in self._listeners:
            listener(snapshot)
