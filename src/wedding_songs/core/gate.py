"""Confirmation gate for finalizing actions.

Download, share and submit all pass through one ConfirmationGate. When the
selection is incomplete the user must explicitly agree before the action
runs; declining has no side effects.
"""

import inspect
from dataclasses import dataclass
from enum import Enum
from typing import Any, Awaitable, Callable, Union

from wedding_songs.app.logging_config import get_logger
from wedding_songs.core.completion import Completion

logger = get_logger(__name__)

Confirmer = Callable[[str], Union[bool, Awaitable[bool]]]


class GateDecision(Enum):
    """How the gate resolved an action."""

    PROCEEDED = "proceeded"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class GateResult:
    """Outcome of a gated action.

    Attributes:
        decision: Whether the action ran and why
        value: Return value of the action (None when cancelled)
    """

    decision: GateDecision
    value: Any = None

    @property
    def cancelled(self) -> bool:
        """Check if the user declined the action."""
        return self.decision == GateDecision.CANCELLED


async def _resolve(value: Any) -> Any:
    """Await value if it is awaitable, otherwise return it as is."""
    if inspect.isawaitable(value):
        return await value
    return value


async def ask(confirm: Confirmer, message: str) -> bool:
    """Ask a yes/no question through a sync or async confirmer.

    Args:
        confirm: Callable returning True on an affirmative answer
        message: Question shown to the user

    Returns:
        True only on an explicit affirmative answer
    """
    answer = await _resolve(confirm(message))
    return answer is True


def incomplete_message(completion: Completion) -> str:
    """Build the confirmation prompt for an incomplete selection.

    Args:
        completion: Current completion

    Returns:
        Prompt text naming how many moments remain
    """
    noun = "moment" if completion.remaining == 1 else "moments"
    return (
        f"You have selected songs for {completion.selected} of {completion.total} "
        f"ceremony moments. {completion.remaining} {noun} still without a song. "
        "Do you want to continue anyway?"
    )


class ConfirmationGate:
    """Interception step in front of finalizing actions.

    Attributes:
        confirm: Yes/no confirmer used when the selection is incomplete
    """

    def __init__(self, confirm: Confirmer):
        """Initialize the gate.

        Args:
            confirm: Callable taking a prompt and returning (or resolving to) a bool
        """
        self.confirm = confirm

    async def guard(
        self,
        action: Callable[[], Any],
        completion: Completion,
        gated: bool = True,
    ) -> GateResult:
        """Run action, asking for confirmation first if the selection is incomplete.

        Args:
            action: Sync or async callable to run
            completion: Completion of the current selection
            gated: Whether the caller requested gating

        Returns:
            GateResult with the action's value, or CANCELLED on decline
        """
        if completion.is_complete or not gated:
            return GateResult(GateDecision.PROCEEDED, await _resolve(action()))

        if not await ask(self.confirm, incomplete_message(completion)):
            logger.info(f"Action cancelled by user ({completion.remaining} moments unselected)")
            return GateResult(GateDecision.CANCELLED)

        logger.info(f"Incomplete selection confirmed ({completion.summary})")
        return GateResult(GateDecision.CONFIRMED, await _resolve(action()))
