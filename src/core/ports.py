"""Ports (interfaces) used by the core dispatcher.

Ports define the minimal contracts for the admin check, delivery and the
exchange log so that the core can be reused with different backends.
"""

from __future__ import annotations

from typing import Protocol

from core.models import AdminVerdict, ChatId, DeliveryOutcome, Reply


class AdminOraclePort(Protocol):
    """Answers whether a user holds admin rights in a chat.

    Implementations never raise; failures come back as a negative verdict.
    """

    async def check_admin(self, chat_id: ChatId, user_id: int) -> AdminVerdict:
        ...


class DeliveryPort(Protocol):
    """Pushes a finished reply into a chat.

    Implementations never raise; failures come back as an unsuccessful outcome.
    """

    async def send(self, chat_id: ChatId, reply: Reply) -> DeliveryOutcome:
        ...


class ExchangeLogPort(Protocol):
    """Thread-scoped record of requests and replies."""

    def record(self, thread_id: str, chat_id: ChatId, user_id: int, text: str, reply: str) -> None:
        ...
