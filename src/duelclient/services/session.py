from __future__ import annotations

import logging
import queue
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from functools import partial
from typing import Callable

from duelclient.core.actions import Action, describe_action
from duelclient.core.interaction import InteractionController
from duelclient.core.log import GameLog
from duelclient.core.serialize import action_to_dict
from duelclient.core.store import SnapshotStore
from duelclient.core.types import GameSnapshot

from .api import ActionRejected, ApiError, GameApiClient
from .telemetry import TelemetryService

logger = logging.getLogger(__name__)

CONNECT_ERROR = "Error: Could not connect to the game server."

Completion = Callable[[], None]


class GameSession:
    """Wires the store and the interaction controller to the game server.

    Requests run on a single worker thread. Their results are queued and only
    applied by :meth:`pump`, which the UI loop calls once per frame, so the store,
    the controller and the log are only ever touched from the UI thread.
    """

    def __init__(
        self,
        api: GameApiClient,
        telemetry: TelemetryService | None = None,
        *,
        poll_interval: float = 0.0,
        executor: Executor | None = None,
    ) -> None:
        self.api = api
        self.telemetry = telemetry
        self.poll_interval = poll_interval
        self.store = SnapshotStore()
        self.log = GameLog()
        self.controller = InteractionController(self.store, self.log, dispatch=self._send_action)

        self._executor = executor if executor is not None else ThreadPoolExecutor(max_workers=1)
        self._completions: queue.Queue[Completion] = queue.Queue()
        self._fetch_future: Future[None] | None = None
        self._since_poll = 0.0

        self.last_error: str | None = None
        self.fetch_attempts = 0

    # -- fetch -----------------------------------------------------------

    @property
    def fetch_in_flight(self) -> bool:
        return self._fetch_future is not None

    def fetch(self) -> Future[None]:
        if self._fetch_future is not None:
            return self._fetch_future
        self.fetch_attempts += 1
        fut = self._executor.submit(self._run_fetch)
        self._fetch_future = fut
        return fut

    def _run_fetch(self) -> None:
        try:
            snapshot = self.api.fetch_snapshot()
        except ApiError as e:
            self._completions.put(partial(self._fetch_failed, str(e)))
            return
        except Exception as e:
            logger.exception("Unexpected error while fetching the game state")
            self._completions.put(partial(self._fetch_failed, str(e)))
            return
        self._completions.put(partial(self._apply_fetch, snapshot))

    def _apply_fetch(self, snapshot: GameSnapshot) -> None:
        self._fetch_future = None
        self.last_error = None
        if self.controller.action_pending:
            # An action response is on its way and supersedes this state.
            logger.debug("discarding fetched snapshot overtaken by an in-flight action")
            return
        self.store.replace(snapshot)
        self._record("snapshot_fetch", {"ok": True, "turn": snapshot.current_turn})

    def _fetch_failed(self, detail: str) -> None:
        self._fetch_future = None
        self.last_error = detail
        logger.warning(f"Error fetching game state: {detail}")
        self.log.add(CONNECT_ERROR)
        self._record("snapshot_fetch", {"ok": False, "error": detail})

    # -- actions ---------------------------------------------------------

    def _send_action(self, action: Action) -> None:
        self._executor.submit(self._run_action, action)

    def _run_action(self, action: Action) -> None:
        try:
            snapshot = self.api.submit_action(action)
        except ActionRejected as e:
            self._completions.put(partial(self._action_failed, action, e.reason))
            return
        except ApiError as e:
            self._completions.put(partial(self._action_failed, action, str(e)))
            return
        except Exception as e:
            logger.exception(f"Unexpected error while sending {describe_action(action)}")
            self._completions.put(partial(self._action_failed, action, str(e)))
            return
        self._completions.put(partial(self._apply_action, action, snapshot))

    def _apply_action(self, action: Action, snapshot: GameSnapshot) -> None:
        self.last_error = None
        self.store.replace(snapshot)
        self.log.add("Action performed successfully.")
        self._record("action", {"ok": True, **action_to_dict(action)})

    def _action_failed(self, action: Action, reason: str) -> None:
        # The gesture is spent either way; the store keeps the last good snapshot.
        self.controller.action_settled()
        self.last_error = reason or None
        if not reason:
            message = "Action failed."
        elif reason.lower().startswith("action failed"):
            message = reason
        else:
            message = f"Action failed: {reason}"
        self.log.add(message)
        self._record("action", {"ok": False, "error": reason, **action_to_dict(action)})

    # -- UI thread -------------------------------------------------------

    def pump(self) -> int:
        """Apply every finished request. Returns the number applied."""
        applied = 0
        while True:
            try:
                completion = self._completions.get_nowait()
            except queue.Empty:
                return applied
            completion()
            applied += 1

    def tick(self, dt: float) -> None:
        self.pump()
        if self.poll_interval <= 0 or not self.store.has_snapshot:
            return
        self._since_poll += dt
        if self._since_poll < self.poll_interval:
            return
        self._since_poll = 0.0
        if self.fetch_in_flight or self.controller.action_pending:
            return
        self.fetch()

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    def _record(self, event_type: str, payload: dict[str, object]) -> None:
        if self.telemetry is not None:
            self.telemetry.log(event_type, payload)
