"""Expose the offline mock gateway."""

from .gateway import MockGateway

__all__ = ["MockGateway"]
