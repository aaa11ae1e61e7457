import logging
import os
from typing import Optional, Sequence

from noahaid.core.conversation import ConversationSnapshot, ConversationState, Message, MessageType
from noahaid.core.highlighter import highlight_keywords
from noahaid.core.knowledge import FIRST_AID_TOPICS, Topic
from noahaid.core.matcher import match_topic
from noahaid.core.scheduler import Scheduler, TimerScheduler

logger = logging.getLogger("uvicorn.error")

RESPONSE_DELAY_MS = int(os.getenv("NOAHAID_RESPONSE_DELAY_MS", "800"))
FALLBACK_TEXT = "Sorry, I couldn't find a first-aid guide for that. Try another keyword."


def build_reply(topic: Optional[Topic]) -> list[Message]:
    if topic is None:
        return [Message(type=MessageType.assistant, text=FALLBACK_TEXT)]
    return [
        Message(
            type=MessageType.assistant,
            text=highlight_keywords(step, topic.keywords),
            topic_id=topic.id,
        )
        for step in topic.steps
    ]


class ChatSession:
    def __init__(
        self,
        session_id: str,
        scheduler: Optional[Scheduler] = None,
        topics: Sequence[Topic] = FIRST_AID_TOPICS,
        delay_ms: int = RESPONSE_DELAY_MS,
    ) -> None:
        self.session_id = session_id
        self.state = ConversationState()
        self.scheduler = scheduler or TimerScheduler()
        self.topics = topics
        self.delay_ms = delay_ms

    def snapshot(self) -> ConversationSnapshot:
        return self.state.snapshot()

    def submit(self, text: str) -> bool:
        """Record a user message and schedule the scripted reply.

        Returns False, leaving the conversation untouched, for blank input.
        Matching runs now; only delivery of the reply waits for the delay.
        """
        if not text or not text.strip():
            logger.info("chat_submit_ignored session_id=%s", self.session_id)
            return False

        self.state.append(Message(type=MessageType.user, text=text))
        self.state.set_composing(True)
        topic = match_topic(text, self.topics)
        logger.info(
            "chat_submit session_id=%s topic_id=%s",
            self.session_id,
            topic.id if topic else None,
        )

        self.scheduler.call_later(self.delay_ms, lambda: self._deliver(topic))
        logger.info("chat_reply_scheduled session_id=%s delay_ms=%s", self.session_id, self.delay_ms)
        return True

    def _deliver(self, topic: Optional[Topic]) -> None:
        try:
            reply = build_reply(topic)
            self.state.complete(reply)
        except Exception as exc:
            logger.exception("chat_reply_error session_id=%s detail=%s", self.session_id, str(exc))
            raise
        logger.info("chat_reply_delivered session_id=%s messages=%s", self.session_id, len(reply))
