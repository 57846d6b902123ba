"""Two-step confirmation for destructive actions.

A view builds a ConfirmationRequest, hands it to a Confirmer and proceeds
only when the answer is Decision.ACCEPT. A Confirmer is any callable
taking the request and returning a Decision, directly or as an awaitable,
so a UI dialog, a CLI prompt and a test script all plug in the same way.
"""

import enum
import inspect
import uuid
from collections.abc import Awaitable, Callable
from dataclasses import dataclass


class Decision(str, enum.Enum):
    ACCEPT = "accept"
    DECLINE = "decline"


@dataclass(frozen=True)
class ConfirmationRequest:
    action: str
    target_id: uuid.UUID | str
    message: str


Confirmer = Callable[[ConfirmationRequest], "Decision | Awaitable[Decision]"]


def accept_all(request: ConfirmationRequest) -> Decision:
    return Decision.ACCEPT


def decline_all(request: ConfirmationRequest) -> Decision:
    return Decision.DECLINE


async def ask(confirmer: Confirmer, request: ConfirmationRequest) -> bool:
    """Resolve a request through the confirmer; True only on ACCEPT."""
    decision = confirmer(request)
    if inspect.isawaitable(decision):
        decision = await decision
    return decision == Decision.ACCEPT
