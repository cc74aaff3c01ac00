"""The request/execute/respond state machine."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from ..exceptions import ExchangeInProgressError, GatewayError
from ..gateway import (
    Decision,
    ErrorDecision,
    ErrorKind,
    ModelGateway,
    TextDecision,
    ToolCallDecision,
    USER_MESSAGES,
    classify_gateway_error,
)
from ..logger import get_logger
from ..messages import AssistantTurn, ConversationState, ToolResultTurn, UserTurn
from ..tools import ToolCallRequest, ToolEvent, ToolEventLog, ToolInvoker, ToolRegistry
from .states import ExchangeOutcome, ExchangeResult, OrchestratorState, ReplySink, Transition

logger = get_logger(__name__)


class Orchestrator:
    """
    Drives one conversation through the model/tool round-trip.

    ``IDLE -> AWAITING_MODEL -> (EXECUTING_TOOL -> AWAITING_MODEL)* -> IDLE``, with
    ``ERRORED`` reachable from any step and always followed by ``IDLE``.

    Every executed tool call is followed by exactly one more model consultation.
    The turns of a tool round (the assistant call and its result) are appended
    together only once the executor has returned, so an abandoned exchange never
    leaves half a round behind. The orchestrator never confirms staged actions:
    committing them is up to the user, outside this loop.
    """

    def __init__(
        self,
        *,
        gateway: ModelGateway,
        registry: ToolRegistry,
        conversation: Optional[ConversationState] = None,
        event_log: Optional[ToolEventLog] = None,
        reply_sink: Optional[ReplySink] = None,
        max_tool_rounds: int = 5,
        tool_timeout: float = 30.0,
    ) -> None:
        """
        Initializes the orchestrator.

        Args:
            gateway: Model gateway consulted for every decision.
            registry: Registry holding the tools offered to the model.
            conversation: Conversation state to drive. A fresh one is created if omitted.
            event_log: Audit log for tool calls. A fresh one is created if omitted.
            reply_sink: Optional UI collaborator that receives every surfaced reply.
            max_tool_rounds: Maximum consecutive tool round-trips per exchange.
            tool_timeout: Seconds a tool executor may run.
        """
        if max_tool_rounds < 1:
            raise ValueError("max_tool_rounds must be at least 1.")

        self.gateway = gateway
        self.registry = registry
        self.conversation = conversation if conversation is not None else ConversationState()
        self.event_log = event_log if event_log is not None else ToolEventLog()
        self.reply_sink = reply_sink
        self.max_tool_rounds = max_tool_rounds
        self._invoker = ToolInvoker(registry=registry, event_log=self.event_log, tool_timeout=tool_timeout)

        self._state = OrchestratorState.IDLE
        self.trace: List[Transition] = []
        self._active: Optional[asyncio.Future] = None
        self._cancel_requested = False
        self._auth_blocked = False
        self._exchange_events: List[ToolEvent] = []

    @property
    def state(self) -> OrchestratorState:
        return self._state

    @property
    def busy(self) -> bool:
        """Whether an exchange is in flight."""
        return self._active is not None

    async def submit(self, user_text: str) -> ExchangeResult:
        """
        Run one exchange for a user message.

        Args:
            user_text: The user's input.

        Returns:
            The surfaced reply and how the exchange ended.

        Raises:
            ValueError: If the message is blank.
            ExchangeInProgressError: If another exchange is still running.
            asyncio.CancelledError: If the calling task itself is cancelled.
        """
        if not user_text or not user_text.strip():
            raise ValueError("Cannot submit an empty message.")
        if self.busy:
            msg = "An exchange is already in progress; wait for it to finish or cancel it."
            logger.warning(msg)
            raise ExchangeInProgressError(msg)

        if self._auth_blocked:
            logger.warning("Submission refused: the gateway credential was rejected earlier.")
            return self._surface(
                ExchangeResult(
                    reply=USER_MESSAGES[ErrorKind.AUTH],
                    outcome=ExchangeOutcome.ERRORED,
                    error_kind=ErrorKind.AUTH,
                )
            )

        self._cancel_requested = False
        self._exchange_events = []
        self.conversation.append(UserTurn(content=user_text))
        self._transition(OrchestratorState.AWAITING_MODEL, "submit")

        task = asyncio.ensure_future(self._drive())
        self._active = task
        try:
            result = await task
        except asyncio.CancelledError:
            self._transition(OrchestratorState.IDLE, "cancelled")
            if not self._cancel_requested:
                raise
            logger.info("Exchange cancelled; the unfinished round was discarded.")
            return ExchangeResult(reply="", outcome=ExchangeOutcome.CANCELLED)
        except Exception as e:
            logger.error(f"Exchange aborted by {type(e).__name__}: {e}", exc_info=True)
            result = self._fail(ErrorKind.INTERNAL, 0)
        finally:
            self._active = None
            self._cancel_requested = False

        return self._surface(result)

    def cancel(self) -> bool:
        """
        Abandon the in-flight exchange.

        Returns:
            True if an exchange was running and has been asked to stop.
        """
        if self._active is None or self._active.done():
            return False
        self._cancel_requested = True
        self._active.cancel()
        return True

    def reset(self) -> None:
        """Start a new session by clearing the conversation.

        Raises:
            ExchangeInProgressError: If an exchange is still running.
        """
        if self.busy:
            raise ExchangeInProgressError("Cannot reset while an exchange is in progress.")
        self.conversation.reset()
        logger.info("Conversation reset.")

    def reconfigure(self, gateway: ModelGateway) -> None:
        """Swap the gateway, e.g. after the user supplied a new credential."""
        if self.busy:
            raise ExchangeInProgressError("Cannot reconfigure while an exchange is in progress.")
        self.gateway = gateway
        self._auth_blocked = False
        logger.info(f"Gateway reconfigured: {type(gateway).__name__}")

    async def _drive(self) -> ExchangeResult:
        rounds = 0
        while True:
            decision = await self._consult()

            if isinstance(decision, TextDecision):
                self._transition(OrchestratorState.IDLE, "text")
                return ExchangeResult(
                    reply=decision.message,
                    outcome=ExchangeOutcome.ANSWERED,
                    tool_rounds=rounds,
                    tool_events=list(self._exchange_events),
                )

            if isinstance(decision, ErrorDecision):
                return self._fail(decision.error_kind, rounds)

            if rounds >= self.max_tool_rounds:
                logger.warning(
                    f"Max tool rounds ({self.max_tool_rounds}) reached; refusing call to '{decision.name}'."
                )
                return self._fail(ErrorKind.LOOP_LIMIT, rounds)

            await self._run_tool_round(decision)
            rounds += 1
            self._transition(OrchestratorState.AWAITING_MODEL, "tool_result")

    async def _consult(self) -> Decision:
        """Ask the gateway for the next decision, turning stray exceptions into ErrorDecisions."""
        history = self.conversation.snapshot()
        tools = self.registry.list()
        logger.debug(f"Consulting model with {len(history)} turn(s) and {len(tools)} tool(s).")
        try:
            return await self.gateway.decide(history, tools)
        except GatewayError as e:
            kind = classify_gateway_error(e)
            logger.error(f"Gateway raised {type(e).__name__}: {e}")
        except Exception as e:
            kind = ErrorKind.INTERNAL
            logger.error(f"Gateway raised unexpectedly: {type(e).__name__}: {e}", exc_info=True)
        return ErrorDecision(error_kind=kind, message=USER_MESSAGES[kind])

    async def _run_tool_round(self, decision: ToolCallDecision) -> None:
        self._transition(OrchestratorState.EXECUTING_TOOL, f"tool_call:{decision.name}")
        if decision.dropped_calls:
            logger.warning(f"Acting on '{decision.name}' only; {decision.dropped_calls} further call(s) dropped.")

        call = await self._invoker.invoke(decision.call_id, decision.name, decision.arguments)
        # The log may be bounded, so keep this exchange's events aside
        event = self.event_log.last()
        if event is not None and event.call_id == decision.call_id:
            self._exchange_events.append(event)

        self.conversation.extend(
            [
                AssistantTurn(
                    content=decision.content,
                    tool_calls=[
                        ToolCallRequest(
                            call_id=decision.call_id,
                            name=decision.name,
                            raw_arguments=decision.raw_arguments,
                        )
                    ],
                ),
                ToolResultTurn(call_id=decision.call_id, name=decision.name, payload=call.result.payload()),
            ]
        )

    def _fail(self, kind: ErrorKind, rounds: int) -> ExchangeResult:
        self._transition(OrchestratorState.ERRORED, kind.value)
        if kind is ErrorKind.AUTH:
            self._auth_blocked = True
        self._transition(OrchestratorState.IDLE, "recover")
        return ExchangeResult(
            reply=USER_MESSAGES[kind],
            outcome=ExchangeOutcome.ERRORED,
            error_kind=kind,
            tool_rounds=rounds,
            tool_events=list(self._exchange_events),
        )

    def _surface(self, result: ExchangeResult) -> ExchangeResult:
        if self.reply_sink is not None and result.reply:
            self.reply_sink.show_reply(result.reply)
        return result

    def _transition(self, target: OrchestratorState, trigger: str) -> None:
        transition = Transition(source=self._state, target=target, trigger=trigger)
        self.trace.append(transition)
        logger.debug(f"{transition.source.value} -> {transition.target.value} ({trigger})")
        self._state = target
