from __future__ import annotations

from threading import Lock
from typing import Iterable
from uuid import UUID

from cachetools import TTLCache

from masar.services.session import PlannerSession


class SessionRepository:
    """In-memory session store; sessions expire after ``ttl_seconds`` idle."""

    def __init__(
        self, *, max_sessions: int = 1024, ttl_seconds: float = 6 * 3600
    ) -> None:
        self._sessions: TTLCache = TTLCache(maxsize=max_sessions, ttl=ttl_seconds)
        self._lock = Lock()

    def add(self, session: PlannerSession) -> None:
        with self._lock:
            self._sessions[session.session_id] = session

    def get(self, session_id: UUID) -> PlannerSession | None:
        with self._lock:
            session = self._sessions.get(session_id)
            if session is not None:
                # Re-insert to refresh the expiry timer
                self._sessions[session_id] = session
            return session

    def delete(self, session_id: UUID) -> bool:
        with self._lock:
            return self._sessions.pop(session_id, None) is not None

    def list(self) -> Iterable[PlannerSession]:
        with self._lock:
            return list(self._sessions.values())
