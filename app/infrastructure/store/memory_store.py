from __future__ import annotations

import secrets
import threading
import time
from typing import Callable

from app.application.ports.stage_continuity import StageContinuityPort
from app.application.utils.stage_token import STAGE_TWO_PREFIX
from app.domain.entities.invoice import StageOneRecord


class MemoryStageContinuity(StageContinuityPort):
    """
    Keeps stage one in process memory under a random key.
    Only usable when every request of a conversation reaches the same process.
    """

    def __init__(self, ttl_seconds: float = 900.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._entries: dict[str, tuple[float, StageOneRecord]] = {}
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._lock = threading.Lock()

    def issue(self, stage_one: StageOneRecord) -> str:
        key = secrets.token_urlsafe(16)
        now = self._clock()
        with self._lock:
            self._purge(now)
            self._entries[key] = (now + self._ttl_seconds, stage_one)
        return f"{STAGE_TWO_PREFIX}{key}"

    def resolve(self, token: str) -> StageOneRecord | None:
        if not isinstance(token, str) or not token.startswith(STAGE_TWO_PREFIX):
            return None
        key = token[len(STAGE_TWO_PREFIX) :]
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                return None
            expires_at, stage_one = entry
            if expires_at <= self._clock():
                del self._entries[key]
                return None
            return stage_one

    def release(self, token: str) -> None:
        with self._lock:
            self._entries.pop(token.removeprefix(STAGE_TWO_PREFIX), None)

    def _purge(self, now: float) -> None:
        expired = [key for key, (expires_at, _) in self._entries.items() if expires_at <= now]
        for key in expired:
            del self._entries[key]

    def pending_count(self) -> int:
        with self._lock:
            return len(self._entries)
