"""Composition root: wires settings, gateway, tools and orchestrator together."""

from dataclasses import dataclass
from typing import Optional

from .fidelity import AccountBook, AppSurface, NullSurface, TransferDesk, build_fidelity_tools
from .llm_core import AgentSettings, ModelGateway, Orchestrator, ReplySink, ToolEventLog, ToolRegistry
from .llm_core.logger import get_logger
from .llm_impl import create_gateway

logger = get_logger(__name__)


@dataclass
class Agent:
    """Everything one chat session needs, already connected."""

    settings: AgentSettings
    orchestrator: Orchestrator
    registry: ToolRegistry
    event_log: ToolEventLog
    book: AccountBook
    desk: TransferDesk
    surface: AppSurface

    def reconfigure(self, settings: AgentSettings) -> None:
        """Apply new settings (e.g. a fresh API key) and unblock the session."""
        self.settings = settings
        self.orchestrator.reconfigure(create_gateway(settings))


def build_agent(
    settings: Optional[AgentSettings] = None,
    *,
    surface: Optional[AppSurface] = None,
    reply_sink: Optional[ReplySink] = None,
    gateway: Optional[ModelGateway] = None,
    book: Optional[AccountBook] = None,
) -> Agent:
    """
    Build a ready-to-use agent with the demo tool set registered.

    Args:
        settings: Agent settings. Read from the environment if omitted.
        surface: UI hooks for the demo tools.
        reply_sink: Receives every reply the orchestrator surfaces.
        gateway: Gateway override. Built from ``settings`` if omitted.
        book: Account book override. The sample accounts are used if omitted.

    Returns:
        The wired agent.

    Raises:
        ConfigurationError: If the settings are invalid or the provider is unknown.
    """
    settings = settings if settings is not None else AgentSettings.from_env()
    surface = surface if surface is not None else NullSurface()
    book = book if book is not None else AccountBook()
    desk = TransferDesk(book)

    registry = ToolRegistry()
    registry.register(build_fidelity_tools(book, desk, surface))
    event_log = ToolEventLog()

    orchestrator = Orchestrator(
        gateway=gateway if gateway is not None else create_gateway(settings),
        registry=registry,
        event_log=event_log,
        reply_sink=reply_sink,
        max_tool_rounds=settings.max_tool_rounds,
        tool_timeout=settings.tool_timeout,
    )
    logger.info(f"Agent ready with {len(registry)} tool(s): {', '.join(registry.names())}")
    return Agent(
        settings=settings,
        orchestrator=orchestrator,
        registry=registry,
        event_log=event_log,
        book=book,
        desk=desk,
        surface=surface,
    )
