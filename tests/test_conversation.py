import pytest

from webmcp_agent.llm_core import (
    AssistantTurn,
    ConversationState,
    ToolCallRequest,
    ToolResultTurn,
    UserTurn,
)
from webmcp_agent.llm_core.exceptions import ConversationError
from webmcp_agent.llm_core.messages import last_user_turn


def _call(call_id: str = "call_1", name: str = "getAccountList") -> AssistantTurn:
    return AssistantTurn(tool_calls=[ToolCallRequest(call_id=call_id, name=name)])


def test_turn_authors() -> None:
    assert UserTurn(content="hi").author == "user"
    assert AssistantTurn(content="hello").author == "assistant"
    assert ToolResultTurn(call_id="c", name="t", payload={"success": True}).author == "tool"


def test_turns_are_immutable() -> None:
    turn = UserTurn(content="hi")
    with pytest.raises(Exception):
        turn.content = "changed"  # type: ignore[misc]


def test_append_and_snapshot_keep_order() -> None:
    state = ConversationState()
    state.append(UserTurn(content="What's my balance?"))
    state.append(_call())
    state.append(ToolResultTurn(call_id="call_1", name="getAccountList", payload={"success": True}))
    state.append(AssistantTurn(content="Here you go."))

    snapshot = state.snapshot()
    assert [turn.author for turn in snapshot] == ["user", "assistant", "tool", "assistant"]
    assert len(state) == 4


def test_snapshot_is_detached_from_later_appends() -> None:
    state = ConversationState()
    state.append(UserTurn(content="first"))
    snapshot = state.snapshot()

    state.append(UserTurn(content="second"))

    assert isinstance(snapshot, tuple)
    assert len(snapshot) == 1
    assert state.snapshot()[:1] == snapshot


def test_snapshot_round_trips_through_a_new_state() -> None:
    state = ConversationState()
    state.extend(
        [
            UserTurn(content="hi"),
            _call("call_9"),
            ToolResultTurn(call_id="call_9", name="getAccountList", payload={"success": True, "accounts": []}),
        ]
    )

    copy = ConversationState()
    copy.extend(state.snapshot())

    assert copy.snapshot() == state.snapshot()


def test_tool_result_without_call_rejected() -> None:
    state = ConversationState()
    state.append(UserTurn(content="hi"))

    with pytest.raises(ConversationError, match="no preceding assistant call"):
        state.append(ToolResultTurn(call_id="ghost", name="x", payload={"success": True}))

    assert len(state) == 1


def test_tool_result_answers_a_call_once() -> None:
    state = ConversationState()
    state.extend([_call("c1"), ToolResultTurn(call_id="c1", name="getAccountList", payload={"success": True})])

    with pytest.raises(ConversationError):
        state.append(ToolResultTurn(call_id="c1", name="getAccountList", payload={"success": True}))


def test_extend_is_all_or_nothing() -> None:
    state = ConversationState()
    state.append(UserTurn(content="hi"))

    with pytest.raises(ConversationError):
        state.extend([_call("c1"), ToolResultTurn(call_id="other", name="x", payload={"success": False})])

    assert len(state) == 1
    # the rejected batch must not leave c1 open
    with pytest.raises(ConversationError):
        state.append(ToolResultTurn(call_id="c1", name="x", payload={"success": True}))


def test_reset_and_last_user_turn() -> None:
    state = ConversationState()
    assert state.last_user_turn() is None
    state.extend([UserTurn(content="one"), AssistantTurn(content="reply"), UserTurn(content="two")])

    assert state.last_user_turn() == UserTurn(content="two")

    state.reset()
    assert len(state) == 0
    assert state.snapshot() == ()


def test_last_user_turn_skips_tool_round() -> None:
    turns = [
        UserTurn(content="List my accounts"),
        _call(),
        ToolResultTurn(call_id="call_1", name="getAccountList", payload={"success": True}),
    ]

    assert last_user_turn(turns) == UserTurn(content="List my accounts")
    assert last_user_turn([AssistantTurn(content="hello")]) is None
