# helpdesk/core/sessions.py
"""Server-side session storage.

Sessions live in process memory, keyed by an opaque id that the client
carries in a cookie. Entries expire after ``ttl_seconds`` without a save.
"""
import logging
import secrets
import threading
import time
from dataclasses import dataclass, field
from typing import Literal

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class User(BaseModel):
    name: str
    email: str


class Flash(BaseModel):
    type: Literal["success", "error"]
    message: str


@dataclass
class SessionData:
    user: User | None = None
    flash: Flash | None = None
    touched_at: float = field(default_factory=time.monotonic)


class SessionStore:
    def __init__(self, ttl_seconds: int = 86400, clock=time.monotonic):
        self.ttl_seconds = ttl_seconds
        self._clock = clock
        self._sessions: dict[str, SessionData] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._sessions)

    def _expired(self, data: SessionData) -> bool:
        return self._clock() - data.touched_at > self.ttl_seconds

    def get(self, session_id: str | None) -> SessionData | None:
        if not session_id:
            return None
        with self._lock:
            data = self._sessions.get(session_id)
            if data is None:
                return None
            if self._expired(data):
                del self._sessions[session_id]
                logger.debug("Session %s… expired", session_id[:8])
                return None
            return data

    def create(self) -> tuple[str, SessionData]:
        self.purge_expired()
        session_id = secrets.token_urlsafe(32)
        data = SessionData(touched_at=self._clock())
        with self._lock:
            self._sessions[session_id] = data
        logger.info("Started session %s…", session_id[:8])
        return session_id, data

    def save(self, session_id: str, data: SessionData) -> None:
        data.touched_at = self._clock()
        with self._lock:
            self._sessions[session_id] = data

    def destroy(self, session_id: str | None) -> None:
        if not session_id:
            return
        with self._lock:
            removed = self._sessions.pop(session_id, None)
        if removed is not None:
            logger.info("Destroyed session %s…", session_id[:8])

    def purge_expired(self) -> int:
        with self._lock:
            stale = [sid for sid, data in self._sessions.items() if self._expired(data)]
            for sid in stale:
                del self._sessions[sid]
        return len(stale)
