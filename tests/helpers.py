"""Test doubles shared by the test modules."""

from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

from openai.types.chat import ChatCompletion

from webmcp_agent.llm_core import Decision, ModelGateway, Tool, Turn


class ScriptedGateway(ModelGateway):
    """Gateway that replays a fixed script of decisions (or raises scripted exceptions)."""

    def __init__(self, script: Sequence[Union[Decision, BaseException]]) -> None:
        self.script = list(script)
        self.histories: List[Sequence[Turn]] = []
        self.tool_names: List[List[str]] = []

    async def _decide_impl(self, history: Sequence[Turn], tools: Sequence[Tool]) -> Decision:
        self.histories.append(history)
        self.tool_names.append([tool.name for tool in tools])
        if not self.script:
            raise AssertionError("ScriptedGateway ran out of decisions.")
        step = self.script.pop(0)
        if isinstance(step, BaseException):
            raise step
        return step

    @property
    def calls(self) -> int:
        return len(self.histories)


class RecordingSurface:
    def __init__(self) -> None:
        self.calls: List[Tuple[str, Any]] = []

    def highlight_account(self, account_id: str) -> None:
        self.calls.append(("highlight_account", account_id))

    def show_transfer_form(self, transfer: Any) -> None:
        self.calls.append(("show_transfer_form", transfer.proposal_id))

    def update_performance_chart(self, period: str, series: Any) -> None:
        self.calls.append(("update_performance_chart", period))

    def show_notice(self, text: str) -> None:
        self.calls.append(("show_notice", text))


def make_completion(
    content: Optional[str] = None,
    tool_calls: Optional[List[Dict[str, Any]]] = None,
    finish_reason: str = "stop",
) -> ChatCompletion:
    """Build a real ChatCompletion object as the SDK would return it."""
    message: Dict[str, Any] = {"role": "assistant", "content": content}
    if tool_calls:
        message["tool_calls"] = [
            {
                "id": call["id"],
                "type": "function",
                "function": {"name": call["name"], "arguments": call.get("arguments", "{}")},
            }
            for call in tool_calls
        ]
        finish_reason = "tool_calls"
    return ChatCompletion.model_validate(
        {
            "id": "chatcmpl-test",
            "object": "chat.completion",
            "created": 1700000000,
            "model": "gpt-4-turbo-preview",
            "choices": [{"index": 0, "finish_reason": finish_reason, "message": message}],
        }
    )
