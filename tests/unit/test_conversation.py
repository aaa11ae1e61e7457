from noahaid.core.conversation import ConversationState, Message, MessageType


def test_state_starts_empty_and_idle() -> None:
    state = ConversationState()
    snapshot = state.snapshot()
    assert snapshot.messages == ()
    assert snapshot.composing is False


def test_append_keeps_insertion_order() -> None:
    state = ConversationState()
    state.append(Message(type=MessageType.user, text="burn"))
    state.append(
        Message(type=MessageType.assistant, text="one", topic_id="burn"),
        Message(type=MessageType.assistant, text="two", topic_id="burn"),
    )
    assert [m.text for m in state.messages] == ["burn", "one", "two"]
    assert len(state) == 3


def test_complete_appends_and_clears_composing() -> None:
    state = ConversationState()
    state.set_composing(True)
    state.complete([Message(type=MessageType.assistant, text="done")])
    assert state.composing is False
    assert state.messages[-1].text == "done"


def test_snapshot_is_detached_from_later_appends() -> None:
    state = ConversationState()
    snapshot = state.snapshot()
    state.append(Message(type=MessageType.user, text="hello"))
    assert snapshot.messages == ()
