from typing import Callable

import pytest
from fastapi.testclient import TestClient

from noahaid.services.responder import ChatSession
from noahaid.services.sessions import SessionStore, get_session_store


class FakeScheduler:
    """Manual clock: callbacks only fire when a test advances time."""

    def __init__(self) -> None:
        self.now_ms = 0
        self._seq = 0
        self._pending: list[tuple[int, int, Callable[[], None]]] = []

    def call_later(self, delay_ms: int, callback: Callable[[], None]) -> None:
        self._seq += 1
        self._pending.append((self.now_ms + delay_ms, self._seq, callback))

    @property
    def pending(self) -> int:
        return len(self._pending)

    def advance(self, ms: int) -> None:
        target = self.now_ms + ms
        while True:
            due = sorted(item for item in self._pending if item[0] <= target)
            if not due:
                break
            item = due[0]
            self._pending.remove(item)
            self.now_ms = item[0]
            item[2]()
        self.now_ms = target


@pytest.fixture
def scheduler() -> FakeScheduler:
    return FakeScheduler()


@pytest.fixture
def chat_session(scheduler: FakeScheduler) -> ChatSession:
    return ChatSession(session_id="test-session", scheduler=scheduler, delay_ms=800)


@pytest.fixture
def session_store(scheduler: FakeScheduler) -> SessionStore:
    return SessionStore(scheduler=scheduler, max_sessions=50, delay_ms=800)


@pytest.fixture(scope="session")
def app():
    from noahaid.main import app as fastapi_app

    return fastapi_app


@pytest.fixture
def client(app, session_store: SessionStore):
    app.dependency_overrides = {get_session_store: lambda: session_store}
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides = {}
