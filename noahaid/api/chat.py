from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Response, status
from pydantic import BaseModel, Field

from noahaid.core.conversation import ConversationSnapshot, Message, MessageType
from noahaid.core.highlighter import markup_to_spans
from noahaid.services.responder import ChatSession
from noahaid.services.sessions import SessionNotFoundError, SessionStore, get_session_store

router = APIRouter(prefix="/chat", tags=["chat"])


class MessageCreateRequest(BaseModel):
    text: str = Field(max_length=4000)


class SpanItem(BaseModel):
    text: str
    emphasized: bool


class MessageItem(BaseModel):
    type: MessageType
    text: str
    topic_id: Optional[str] = None
    spans: list[SpanItem]


class SessionSnapshotResponse(BaseModel):
    session_id: str
    messages: list[MessageItem]
    composing: bool


class MessageCreateResponse(BaseModel):
    accepted: bool
    snapshot: SessionSnapshotResponse


def _message_item(message: Message) -> MessageItem:
    if message.type == MessageType.assistant:
        spans = [SpanItem(text=span.text, emphasized=span.emphasized) for span in markup_to_spans(message.text)]
    else:
        spans = [SpanItem(text=message.text, emphasized=False)]
    return MessageItem(type=message.type, text=message.text, topic_id=message.topic_id, spans=spans)


def _snapshot_response(session_id: str, snapshot: ConversationSnapshot) -> SessionSnapshotResponse:
    return SessionSnapshotResponse(
        session_id=session_id,
        messages=[_message_item(message) for message in snapshot.messages],
        composing=snapshot.composing,
    )


def _get_session(store: SessionStore, session_id: str) -> ChatSession:
    try:
        return store.get(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Chat session not found")


@router.post("/sessions", response_model=SessionSnapshotResponse, status_code=status.HTTP_201_CREATED)
def create_session(store: SessionStore = Depends(get_session_store)) -> SessionSnapshotResponse:
    session = store.create()
    return _snapshot_response(session.session_id, session.snapshot())


@router.get("/sessions/{session_id}", response_model=SessionSnapshotResponse)
def get_session_snapshot(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> SessionSnapshotResponse:
    session = _get_session(store, session_id)
    return _snapshot_response(session.session_id, session.snapshot())


@router.post("/sessions/{session_id}/messages", response_model=MessageCreateResponse)
def submit_message(
    session_id: str,
    payload: MessageCreateRequest,
    response: Response,
    store: SessionStore = Depends(get_session_store),
) -> MessageCreateResponse:
    session = _get_session(store, session_id)
    accepted = session.submit(payload.text)
    # Blank input is a no-op rather than an error.
    response.status_code = status.HTTP_202_ACCEPTED if accepted else status.HTTP_200_OK
    return MessageCreateResponse(
        accepted=accepted,
        snapshot=_snapshot_response(session.session_id, session.snapshot()),
    )


@router.delete("/sessions/{session_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_session(
    session_id: str,
    store: SessionStore = Depends(get_session_store),
) -> Response:
    try:
        store.delete(session_id)
    except SessionNotFoundError:
        raise HTTPException(status_code=404, detail="Chat session not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
