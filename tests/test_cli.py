import pytest
from typing import Any
from unittest.mock import patch

from helpers import RecordingSurface, ScriptedGateway
from webmcp_agent import build_agent
from webmcp_agent.agent import Agent
from webmcp_agent.cli import HELP_TEXT, main, run_command
from webmcp_agent.llm_core import AgentSettings, TextDecision


@pytest.fixture
def agent() -> Agent:
    return build_agent(AgentSettings(), surface=RecordingSurface(), gateway=ScriptedGateway([TextDecision(message="ok")]))


def _stage(agent: Agent, amount: float = 100) -> str:
    proposal = agent.desk.stage(agent.book.get("acc_roth_456"), agent.book.get("acc_cash_101"), amount)  # type: ignore[arg-type]
    return proposal.proposal_id


def test_help(agent: Agent) -> None:
    assert run_command(agent, "/help") == HELP_TEXT


def test_accounts_listing(agent: Agent) -> None:
    output = run_command(agent, "/accounts")
    assert "Roth IRA" in output
    assert "89,500.75" in output


def test_confirm_latest_pending(agent: Agent) -> None:
    _stage(agent, 100)

    output = run_command(agent, "/confirm")

    assert output == "Transfer submitted successfully!"
    assert agent.book.get("acc_cash_101").balance == 5300.00  # type: ignore[union-attr]
    assert ("show_notice", "Transfer submitted successfully!") in agent.surface.calls  # type: ignore[attr-defined]


def test_cancel_by_id(agent: Agent) -> None:
    first = _stage(agent)
    second = _stage(agent)

    assert run_command(agent, f"/cancel {first}") == "Transfer canceled."
    assert [p.proposal_id for p in agent.desk.pending()] == [second]


def test_confirm_errors_are_reported(agent: Agent) -> None:
    assert run_command(agent, "/confirm") == "No transfers awaiting confirmation."
    assert run_command(agent, "/confirm nope").startswith("Could not confirm transfer")


def test_pending_and_events(agent: Agent) -> None:
    assert run_command(agent, "/pending") == "No transfers awaiting confirmation."
    assert run_command(agent, "/events") == "No tool calls yet."
    proposal_id = _stage(agent, 42)
    assert proposal_id in run_command(agent, "/pending")


@pytest.mark.asyncio
async def test_reset_clears_conversation(agent: Agent) -> None:
    await agent.orchestrator.submit("hello")
    assert run_command(agent, "/reset") == "Conversation cleared."
    assert len(agent.orchestrator.conversation) == 0


def test_unknown_command(agent: Agent) -> None:
    assert "Unknown command '/fly'" in run_command(agent, "/fly")


def test_main_runs_mock_chat(capsys: Any) -> None:
    inputs = iter(["What's my balance?", "/accounts", "quit"])
    with patch("builtins.input", lambda prompt="": next(inputs)), patch(
        "webmcp_agent.llm_core.config.load_dotenv"
    ), patch.dict("os.environ", {}, clear=True):
        exit_code = main(["--mock"])

    out = capsys.readouterr().out
    assert exit_code == 0
    assert 'Assistant: Mock LLM response to: "What\'s my balance?"' in out
    assert "Cash Management" in out
    assert "Goodbye!" in out
