"""Core domain models.

These dataclasses are shared across the core and adapters to avoid tight
coupling to any integration-specific types. All of them are request-scoped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

ChatId = Union[int, str]

# Member statuses that grant broadcast rights.
ADMIN_STATUSES = frozenset({"creator", "administrator"})


@dataclass(frozen=True)
class Command:
    """Parsed view of an incoming command message."""

    name: str
    argument: Optional[str]


@dataclass(frozen=True)
class AdminVerdict:
    """Outcome of an admin check for one (chat, user) pair."""

    is_admin: bool
    status: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_status(cls, status: str) -> "AdminVerdict":
        return cls(is_admin=status in ADMIN_STATUSES, status=status)

    @classmethod
    def failure(cls, error: str) -> "AdminVerdict":
        # Fail closed: a failed check is never an implicit grant.
        return cls(is_admin=False, status=None, error=error)


@dataclass(frozen=True)
class Reply:
    """Text that goes back to the chat."""

    text: str

    @property
    def is_empty(self) -> bool:
        return not self.text


@dataclass(frozen=True)
class DeliveryOutcome:
    """Result of a single delivery attempt."""

    success: bool
    message_id: Optional[int] = None
    error: Optional[str] = None


@dataclass(frozen=True)
class IncomingMessage:
    """Minimal request context used by the dispatcher."""

    chat_id: ChatId
    user_id: int
    text: str
    thread_id: str


@dataclass(frozen=True)
class DispatchResult:
    """Everything the dispatcher produced for one request."""

    verdict: AdminVerdict
    reply: Reply
    outcome: DeliveryOutcome
