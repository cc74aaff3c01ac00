"""Collect concrete model gateway implementations and the provider factory."""

from .factory import create_gateway, GATEWAY_FACTORIES
from .mock import MockGateway
from .openai_api import OpenAIGateway

__all__ = [
    "create_gateway",
    "GATEWAY_FACTORIES",
    "MockGateway",
    "OpenAIGateway",
]
