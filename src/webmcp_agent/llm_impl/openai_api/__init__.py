"""Expose the OpenAI chat-completions gateway."""

from .gateway import OpenAIGateway

__all__ = ["OpenAIGateway"]
