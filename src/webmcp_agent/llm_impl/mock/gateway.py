"""Offline gateway used in development mock mode."""

from typing import Sequence

from webmcp_agent.llm_core.gateway import Decision, ModelGateway, TextDecision
from webmcp_agent.llm_core.logger import get_logger
from webmcp_agent.llm_core.messages import Turn, last_user_turn
from webmcp_agent.llm_core.tools import Tool

logger = get_logger(__name__)


class MockGateway(ModelGateway):
    """
    Answers every consultation with a canned text reply.

    No network access and no credential are needed. The reply echoes the most
    recent user turn so a developer can see the wiring works end to end.
    """

    def __init__(self, provider: str = "openai") -> None:
        self.provider = provider
        self.calls = 0

    async def _decide_impl(self, history: Sequence[Turn], tools: Sequence[Tool]) -> Decision:
        self.calls += 1
        latest = last_user_turn(history)
        last_user = latest.content if latest is not None else ""
        logger.info("Mock mode enabled - answering without contacting '%s'.", self.provider)
        return TextDecision(
            message=(
                f'Mock LLM response to: "{last_user}". '
                "Disable development mock mode and configure an API key for real answers."
            )
        )
