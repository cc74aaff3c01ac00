"""Append-only conversation state replayed on every model request."""

from typing import Iterable, List, Optional, Set, Tuple

from ..exceptions import ConversationError
from ..logger import get_logger
from .models import AssistantTurn, ToolResultTurn, Turn, UserTurn, last_user_turn

logger = get_logger(__name__)


class ConversationState:
    """
    Ordered log of turns for a single session.

    Turns are only ever appended or cleared in bulk. A ToolResult turn is
    accepted only after an Assistant turn that requested its ``call_id``,
    and each call id is answered at most once.
    """

    def __init__(self) -> None:
        self._turns: List[Turn] = []
        self._open_calls: Set[str] = set()

    def append(self, turn: Turn) -> None:
        """Append a single turn.

        Raises:
            ConversationError: If the turn would break the call/result pairing.
        """
        self.extend([turn])

    def extend(self, turns: Iterable[Turn]) -> None:
        """Append several turns as one step.

        The whole batch is checked before anything is appended, so either all
        turns land or none do.

        Raises:
            ConversationError: If any turn would break the call/result pairing.
        """
        batch = list(turns)
        open_calls = set(self._open_calls)
        for turn in batch:
            if isinstance(turn, AssistantTurn):
                open_calls.update(turn.call_ids)
            elif isinstance(turn, ToolResultTurn):
                if turn.call_id not in open_calls:
                    msg = f"Tool result for '{turn.name}' has no preceding assistant call with id '{turn.call_id}'."
                    logger.error(msg)
                    raise ConversationError(msg)
                open_calls.discard(turn.call_id)
            elif not isinstance(turn, UserTurn):
                msg = f"Unsupported turn type: {type(turn).__name__}"
                logger.error(msg)
                raise ConversationError(msg)

        self._turns.extend(batch)
        self._open_calls = open_calls

    def snapshot(self) -> Tuple[Turn, ...]:
        """Return a read-only ordered view of all turns."""
        return tuple(self._turns)

    def reset(self) -> None:
        """Clear all turns."""
        logger.debug("Conversation reset (%d turn(s) discarded).", len(self._turns))
        self._turns = []
        self._open_calls = set()

    def last_user_turn(self) -> Optional[UserTurn]:
        return last_user_turn(self._turns)

    def __len__(self) -> int:
        return len(self._turns)
