from __future__ import annotations

import threading
from dataclasses import dataclass
from enum import Enum
from typing import Optional


class MessageType(str, Enum):
    user = "user"
    assistant = "assistant"


@dataclass(frozen=True)
class Message:
    type: MessageType
    text: str
    topic_id: Optional[str] = None


@dataclass(frozen=True)
class ConversationSnapshot:
    messages: tuple[Message, ...]
    composing: bool


class ConversationState:
    """Append-only message log plus the assistant ``composing`` flag.

    Every write goes through one lock so replies completed on a timer thread
    land in order with messages appended by request handlers.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self._composing = False
        self._lock = threading.Lock()

    @property
    def messages(self) -> tuple[Message, ...]:
        with self._lock:
            return tuple(self._messages)

    @property
    def composing(self) -> bool:
        with self._lock:
            return self._composing

    def append(self, *messages: Message) -> None:
        with self._lock:
            self._messages.extend(messages)

    def set_composing(self, composing: bool) -> None:
        with self._lock:
            self._composing = composing

    def complete(self, messages: list[Message]) -> None:
        # Replies and the flag reset are applied as one step.
        with self._lock:
            self._messages.extend(messages)
            self._composing = False

    def snapshot(self) -> ConversationSnapshot:
        with self._lock:
            return ConversationSnapshot(messages=tuple(self._messages), composing=self._composing)

    def __len__(self) -> int:
        with self._lock:
            return len(self._messages)
