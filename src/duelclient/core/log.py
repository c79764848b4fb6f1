from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Callable

logger = logging.getLogger("duelclient.game")

LogListener = Callable[[str], None]


class GameLog:
    """Append-only narration of the match shown to the player."""

    def __init__(self) -> None:
        self._entries: list[str] = []
        self._listeners: list[LogListener] = []

    def add(self, message: str) -> None:
        self._entries.append(message)
        logger.info(message)
        for listener in self._listeners:
            listener(message)

    def subscribe(self, listener: LogListener) -> None:
        self._listeners.append(listener)

    @property
    def entries(self) -> Sequence[str]:
        return tuple(self._entries)

    def tail(self, n: int) -> Sequence[str]:
        if n <= 0:
            return ()
        return tuple(self._entries[-n:])

    def __len__(self) -> int:
        return len(self._entries)
