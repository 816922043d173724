"""Telegram Bot API delivery adapter.

Uses sendMessage to push replies into the originating chat. One attempt per
reply; failures come back as an unsuccessful DeliveryOutcome.
"""

from __future__ import annotations

import asyncio
import logging

from adapters.bot_api import BotApiClient, BotApiError
from core.models import ChatId, DeliveryOutcome, Reply

LOGGER = logging.getLogger(__name__)


class TelegramBotDelivery:
    """Delivery adapter that sends plain-text replies via the Bot API."""

    def __init__(self, api: BotApiClient) -> None:
        self._api = api

    async def send(self, chat_id: ChatId, reply: Reply) -> DeliveryOutcome:
        """Send ``reply`` to ``chat_id`` as plain text."""

        if not self._api.configured:
            LOGGER.error("Delivery skipped: TELEGRAM_BOT_TOKEN is not set")
            return DeliveryOutcome(success=False, error="Bot token not configured")

        # Telegram rejects empty texts; the ignored reply ends here.
        if reply.is_empty:
            LOGGER.debug("Nothing to send to chat %s", chat_id)
            return DeliveryOutcome(success=False, error="Empty reply not sent")

        # No parse_mode: broadcasts are relayed exactly as the admin typed them.
        payload = {"chat_id": chat_id, "text": reply.text}
        LOGGER.info("Sending %s chars to chat %s", len(reply.text), chat_id)
        try:
            data = await asyncio.to_thread(self._api.call, "sendMessage", payload)
        except (BotApiError, ValueError, KeyError) as e:
            LOGGER.error("sendMessage to chat %s failed: %s", chat_id, e)
            return DeliveryOutcome(success=False, error=str(e))

        if not data.get("ok"):
            description = data.get("description") or "Failed to send message"
            LOGGER.error("Telegram rejected message to chat %s: %s", chat_id, description)
            return DeliveryOutcome(success=False, error=description)

        result = data.get("result")
        message_id = result.get("message_id") if isinstance(result, dict) else None
        if not isinstance(message_id, int):
            LOGGER.error("sendMessage to chat %s returned no message id", chat_id)
            return DeliveryOutcome(success=False, error="Malformed sendMessage response")

        LOGGER.info("Message sent to chat %s (message %s)", chat_id, message_id)
        return DeliveryOutcome(success=True, message_id=message_id)
