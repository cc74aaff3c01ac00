"""Select the gateway implementation for the configured provider."""

from typing import Callable, Dict

from webmcp_agent.llm_core.config import AgentSettings
from webmcp_agent.llm_core.exceptions import ConfigurationError
from webmcp_agent.llm_core.gateway import ModelGateway
from webmcp_agent.llm_core.logger import get_logger
from .mock import MockGateway
from .openai_api import OpenAIGateway

logger = get_logger(__name__)

GATEWAY_FACTORIES: Dict[str, Callable[[AgentSettings], ModelGateway]] = {
    "openai": OpenAIGateway.from_settings,
}


def create_gateway(settings: AgentSettings) -> ModelGateway:
    """
    Build the gateway for ``settings.provider``.

    Development mock mode short-circuits every provider.

    Args:
        settings: The agent settings.

    Returns:
        A ready-to-use gateway.

    Raises:
        ConfigurationError: If the provider has no wire-format adapter.
    """
    if settings.development_mock_mode:
        logger.warning("Development mock mode is enabled; no requests will reach '%s'.", settings.provider)
        return MockGateway(provider=settings.provider)

    factory = GATEWAY_FACTORIES.get(settings.provider)
    if factory is None:
        msg = f"Unsupported provider '{settings.provider}'. Supported: {', '.join(sorted(GATEWAY_FACTORIES))}."
        logger.error(msg)
        raise ConfigurationError(msg)

    if not settings.has_credentials:
        logger.warning("No API key configured for '%s'; requests will fail until one is set.", settings.provider)
    return factory(settings)
