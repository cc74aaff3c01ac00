"""Interactive terminal chat with the demo financial assistant.

Lines starting with ``/`` are user actions handled outside the model loop;
this is the only place staged transfers get confirmed.
"""

import argparse
import asyncio
import logging
import sys
from typing import Any, Dict, List, Optional

from .agent import Agent, build_agent
from .fidelity import PerformanceSeries, StagedTransfer
from .llm_core import AgentError, AgentSettings, TransferError
from .llm_core.logger import setup_logging

HELP_TEXT = """Commands:
  /accounts          list account balances
  /pending           list transfers awaiting confirmation
  /confirm [id]      submit a staged transfer (latest if no id)
  /cancel [id]       discard a staged transfer (latest if no id)
  /events            show the tool calls made so far
  /reset             start a new conversation
  /help              show this help
  exit | quit        leave the chat"""


class TerminalSurface:
    """Prints the demo UI hooks to stdout."""

    def highlight_account(self, account_id: str) -> None:
        print(f"  [ui] highlighting account {account_id}")

    def show_transfer_form(self, transfer: StagedTransfer) -> None:
        print(
            f"  [ui] transfer form {transfer.proposal_id}: ${transfer.amount:,.2f} "
            f"from {transfer.from_account_name} to {transfer.to_account_name}. "
            f"Type /confirm {transfer.proposal_id} to submit it."
        )

    def update_performance_chart(self, period: str, series: PerformanceSeries) -> None:
        points = ", ".join(f"{label}: {value}%" for label, value in zip(series.labels, series.values))
        print(f"  [ui] performance chart ({period}) {points} | total {series.total_return}")

    def show_notice(self, text: str) -> None:
        print(f"  [ui] {text}")


class TerminalReplySink:
    def show_reply(self, text: str) -> None:
        print(f"Assistant: {text}")


def _pick_proposal(agent: Agent, args: List[str]) -> Optional[str]:
    if args:
        return args[0]
    pending = agent.desk.pending()
    return pending[-1].proposal_id if pending else None


def run_command(agent: Agent, line: str) -> str:
    """Execute one slash command and return the text to print."""
    command, *args = line.strip().split()
    command = command.lower()

    if command == "/help":
        return HELP_TEXT

    if command == "/accounts":
        return "\n".join(f"  {a.name:<20} ${a.balance:>12,.2f}  ({a.id})" for a in agent.book.list())

    if command == "/pending":
        pending = agent.desk.pending()
        if not pending:
            return "No transfers awaiting confirmation."
        return "\n".join(
            f"  {p.proposal_id}: ${p.amount:,.2f} {p.from_account_name} -> {p.to_account_name}" for p in pending
        )

    if command in ("/confirm", "/cancel"):
        proposal_id = _pick_proposal(agent, args)
        if proposal_id is None:
            return "No transfers awaiting confirmation."
        try:
            if command == "/confirm":
                agent.desk.confirm(proposal_id)
                notice = "Transfer submitted successfully!"
            else:
                agent.desk.cancel(proposal_id)
                notice = "Transfer canceled."
        except TransferError as e:
            return f"Could not {command[1:]} transfer: {e}"
        agent.surface.show_notice(notice)
        return notice

    if command == "/events":
        events = agent.event_log.query()
        if not events:
            return "No tool calls yet."
        return "\n".join(
            f"  {e.timestamp:%H:%M:%S} {e.name} [{e.outcome}] {e.duration_ms:.0f}ms {e.arguments}" for e in events
        )

    if command == "/reset":
        agent.orchestrator.reset()
        return "Conversation cleared."

    return f"Unknown command '{command}'. Type /help for the list."


async def chat(agent: Agent) -> None:
    """Read user lines until exit, sending everything else to the orchestrator."""
    print("Welcome to the WebMCP financial assistant!")
    if agent.settings.development_mock_mode:
        print("Development mock mode is on: replies are canned.")
    print("Type /help for commands, 'exit' or 'quit' to stop.")

    while True:
        try:
            user_input = (await asyncio.to_thread(input, "\nYou: ")).strip()
        except EOFError:
            break
        if user_input.lower() in ["exit", "quit"]:
            break
        if not user_input:
            continue

        if user_input.startswith("/"):
            print(run_command(agent, user_input))
            continue

        try:
            await agent.orchestrator.submit(user_input)
        except AgentError as e:
            print(f"An error occurred: {e}")
    print("Goodbye!")


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Chat with the WebMCP financial assistant in the terminal.")
    parser.add_argument("--mock", action="store_true", help="use development mock mode (no API key needed)")
    parser.add_argument("--model", help="override the configured model")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="log level for diagnostics on stderr",
    )
    args = parser.parse_args(argv)

    setup_logging(level=getattr(logging, args.log_level))

    try:
        settings = AgentSettings.from_env()
        overrides: Dict[str, Any] = {}
        if args.mock:
            overrides["development_mock_mode"] = True
        if args.model:
            overrides["model"] = args.model
        if overrides:
            settings = AgentSettings.create(**{**settings.model_dump(), **overrides})
        agent = build_agent(settings, surface=TerminalSurface(), reply_sink=TerminalReplySink())
    except AgentError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    try:
        asyncio.run(chat(agent))
    except KeyboardInterrupt:
        print("\nGoodbye!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
