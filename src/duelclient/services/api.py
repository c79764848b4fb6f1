from __future__ import annotations

import json
import logging
from typing import Any

import requests

from duelclient.core.actions import Action
from duelclient.core.serialize import SnapshotError, action_to_dict
from duelclient.core.types import GameSnapshot

from .schema import SnapshotSchema

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    pass


class ConnectivityError(ApiError):
    """The server could not be reached or answered with something unusable."""


class ActionRejected(ApiError):
    """The server refused an action (non-2xx on ``POST /api/action``)."""

    def __init__(self, status: int, reason: str) -> None:
        super().__init__(reason or f"HTTP {status}")
        self.status = status
        self.reason = reason


def _error_reason(response: requests.Response) -> str:
    text = (response.text or "").strip()
    if not text:
        return ""
    try:
        body = json.loads(text)
    except ValueError:
        return text
    if isinstance(body, dict):
        for key in ("error", "message"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
    return text


class GameApiClient:
    def __init__(
        self,
        base_url: str,
        schema: SnapshotSchema,
        timeout: float = 10.0,
        session: Any | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.schema = schema
        self.timeout = timeout
        self._http = session if session is not None else requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}{path}"

    def _decode_snapshot(self, response: requests.Response, *, context: str) -> GameSnapshot:
        try:
            raw = response.json()
        except ValueError as e:
            raise ConnectivityError(f"Invalid JSON from {context}: {e}") from e
        try:
            return self.schema.parse(raw, context=context)
        except SnapshotError as e:
            raise ConnectivityError(str(e)) from e

    def fetch_snapshot(self) -> GameSnapshot:
        url = self._url("/api/game")
        try:
            response = self._http.get(url, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"GET {url} failed: {e}")
            raise ConnectivityError(str(e)) from e
        if not response.ok:
            logger.warning(f"GET {url} returned HTTP {response.status_code}")
            raise ConnectivityError(f"HTTP {response.status_code}")
        return self._decode_snapshot(response, context="GET /api/game")

    def submit_action(self, action: Action) -> GameSnapshot:
        url = self._url("/api/action")
        payload = action_to_dict(action)
        logger.debug(f"POST {url} {payload}")
        try:
            response = self._http.post(url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logger.warning(f"POST {url} failed: {e}")
            raise ConnectivityError(str(e)) from e
        if not response.ok:
            reason = _error_reason(response)
            logger.info(f"Action {payload['type']} rejected (HTTP {response.status_code}): {reason}")
            raise ActionRejected(response.status_code, reason)
        return self._decode_snapshot(response, context="POST /api/action")
