"""Core abstraction for model provider gateways."""

from abc import ABC, abstractmethod
from typing import Dict, Sequence

from ..exceptions import AuthError, GatewayError, MalformedReplyError, TransportError
from ..logger import get_logger
from ..messages import Turn
from ..tools import Tool
from .decisions import Decision, ErrorDecision, ErrorKind

logger = get_logger(__name__)

GENERIC_FAILURE_MESSAGE = "Sorry, I encountered an error processing your request. Please try again."
AUTH_GUIDANCE_MESSAGE = (
    "The assistant is not configured: set an API key (WEBMCP_API_KEY or OPENAI_API_KEY) "
    "or enable development mock mode, then try again."
)

USER_MESSAGES: Dict[ErrorKind, str] = {
    ErrorKind.TRANSPORT: GENERIC_FAILURE_MESSAGE,
    ErrorKind.AUTH: AUTH_GUIDANCE_MESSAGE,
    ErrorKind.MALFORMED_REPLY: GENERIC_FAILURE_MESSAGE,
    ErrorKind.LOOP_LIMIT: GENERIC_FAILURE_MESSAGE,
    ErrorKind.INTERNAL: GENERIC_FAILURE_MESSAGE,
}


def error_decision(kind: ErrorKind) -> ErrorDecision:
    """Build an ErrorDecision carrying the fixed user-safe message for ``kind``."""
    return ErrorDecision(error_kind=kind, message=USER_MESSAGES[kind])


def classify_gateway_error(error: GatewayError) -> ErrorKind:
    if isinstance(error, AuthError):
        return ErrorKind.AUTH
    if isinstance(error, MalformedReplyError):
        return ErrorKind.MALFORMED_REPLY
    if isinstance(error, TransportError):
        return ErrorKind.TRANSPORT
    return ErrorKind.INTERNAL


class ModelGateway(ABC):
    """Abstract base class for model gateways.

    A gateway turns the conversation history and the active tools into exactly
    one Decision. Implementations put the provider round-trip in ``_decide_impl``
    and raise GatewayError subclasses; ``decide`` collapses those into an
    ErrorDecision so raw provider errors never reach the caller. There is no
    automatic retry.
    """

    async def decide(self, history: Sequence[Turn], tools: Sequence[Tool]) -> Decision:
        """
        Consult the model once.

        Args:
            history: The full conversation so far, oldest first.
            tools: The tools the model may request, in registration order.

        Returns:
            A TextDecision, a ToolCallDecision, or an ErrorDecision.
        """
        try:
            return await self._decide_impl(history, tools)
        except GatewayError as e:
            kind = classify_gateway_error(e)
            logger.error(f"Model gateway failed ({kind.value}): {e}")
            return error_decision(kind)
        except Exception as e:
            logger.error(f"Unexpected gateway failure: {type(e).__name__}: {e}", exc_info=True)
            return error_decision(ErrorKind.INTERNAL)

    @abstractmethod
    async def _decide_impl(self, history: Sequence[Turn], tools: Sequence[Tool]) -> Decision:
        pass
