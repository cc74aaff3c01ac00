"""Re-export the gateway interface and the normalized decision models."""

from .base import (
    ModelGateway,
    GENERIC_FAILURE_MESSAGE,
    AUTH_GUIDANCE_MESSAGE,
    USER_MESSAGES,
    error_decision,
    classify_gateway_error,
)
from .decisions import Decision, TextDecision, ToolCallDecision, ErrorDecision, ErrorKind

__all__ = [
    "ModelGateway",
    "GENERIC_FAILURE_MESSAGE",
    "AUTH_GUIDANCE_MESSAGE",
    "USER_MESSAGES",
    "error_decision",
    "classify_gateway_error",
    "Decision",
    "TextDecision",
    "ToolCallDecision",
    "ErrorDecision",
    "ErrorKind",
]
