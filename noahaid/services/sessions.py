import logging
import os
import threading
from collections import OrderedDict
from typing import Optional
from uuid import uuid4

from noahaid.core.scheduler import Scheduler, get_scheduler
from noahaid.services.responder import RESPONSE_DELAY_MS, ChatSession

logger = logging.getLogger("uvicorn.error")

MAX_SESSIONS = int(os.getenv("NOAHAID_MAX_SESSIONS", "1000"))


class SessionNotFoundError(KeyError):
    pass


class SessionStore:
    """In-memory chat sessions, oldest evicted first once the cap is reached."""

    def __init__(
        self,
        scheduler: Optional[Scheduler] = None,
        max_sessions: int = MAX_SESSIONS,
        delay_ms: int = RESPONSE_DELAY_MS,
    ) -> None:
        self.scheduler = scheduler or get_scheduler()
        self.max_sessions = max(1, max_sessions)
        self.delay_ms = delay_ms
        self._sessions: "OrderedDict[str, ChatSession]" = OrderedDict()
        self._lock = threading.Lock()

    def create(self) -> ChatSession:
        session = ChatSession(session_id=uuid4().hex, scheduler=self.scheduler, delay_ms=self.delay_ms)
        with self._lock:
            while len(self._sessions) >= self.max_sessions:
                evicted_id, _ = self._sessions.popitem(last=False)
                logger.info("chat_session_evicted session_id=%s", evicted_id)
            self._sessions[session.session_id] = session
        logger.info("chat_session_created session_id=%s", session.session_id)
        return session

    def get(self, session_id: str) -> ChatSession:
        with self._lock:
            session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def delete(self, session_id: str) -> None:
        with self._lock:
            session = self._sessions.pop(session_id, None)
        if session is None:
            raise SessionNotFoundError(session_id)
        logger.info("chat_session_deleted session_id=%s", session_id)

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)


_store: Optional[SessionStore] = None
_store_lock = threading.Lock()


def get_session_store() -> SessionStore:
    global _store
    with _store_lock:
        if _store is None:
            _store = SessionStore()
        return _store
