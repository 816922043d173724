"""Core dispatch sequence.

This module is integration-agnostic. It only relies on ports for the admin
check, delivery and the optional exchange log.

The order is fixed:
1) Ask the admin oracle for a verdict
2) Run the policy on (message, verdict)
3) Hand the reply to delivery
4) Record the exchange, when a log is configured
"""

from __future__ import annotations

import logging
from typing import Optional

from core.config import DEFAULT_POLICY, PolicyConfig
from core.models import DispatchResult, IncomingMessage
from core.policy import decide
from core.ports import AdminOraclePort, DeliveryPort, ExchangeLogPort

LOGGER = logging.getLogger(__name__)


class CommandDispatcher:
    """Sequences oracle, policy and delivery for one message at a time."""

    def __init__(
        self,
        oracle: AdminOraclePort,
        delivery: DeliveryPort,
        policy_config: PolicyConfig = DEFAULT_POLICY,
        exchange_log: Optional[ExchangeLogPort] = None,
    ) -> None:
        self._oracle = oracle
        self._delivery = delivery
        self._policy_config = policy_config
        self._exchange_log = exchange_log

    @property
    def policy_config(self) -> PolicyConfig:
        return self._policy_config

    async def handle(self, message: IncomingMessage) -> DispatchResult:
        """Process one incoming message through the dispatch sequence."""

        LOGGER.info(
            "Dispatching message from user %s in chat %s (%s chars)",
            message.user_id,
            message.chat_id,
            len(message.text),
        )

        # The policy needs the verdict, so the oracle call must finish first.
        verdict = await self._oracle.check_admin(message.chat_id, message.user_id)
        reply = decide(message.text, verdict, self._policy_config)
        outcome = await self._delivery.send(message.chat_id, reply)

        if outcome.success:
            LOGGER.info("Reply delivered to chat %s (message %s)", message.chat_id, outcome.message_id)
        else:
            LOGGER.warning("Reply not delivered to chat %s: %s", message.chat_id, outcome.error)

        if self._exchange_log is not None:
            self._record(message, reply.text)

        return DispatchResult(verdict=verdict, reply=reply, outcome=outcome)

    def _record(self, message: IncomingMessage, reply_text: str) -> None:
        try:
            self._exchange_log.record(
                message.thread_id,
                message.chat_id,
                message.user_id,
                message.text,
                reply_text,
            )
        except Exception:
            # The exchange log is outside the decision path.
            LOGGER.exception("Failed to record exchange for thread %s", message.thread_id)
