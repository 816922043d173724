"""Telegram admin check adapter.

Answers the AdminOraclePort contract with the Bot API getChatMember method.
Every failure is reported as a negative verdict; nothing is raised.
"""

from __future__ import annotations

import asyncio
import logging

from adapters.bot_api import BotApiClient, BotApiError
from core.models import AdminVerdict, ChatId

LOGGER = logging.getLogger(__name__)

NOT_CONFIGURED = "Bot token not configured"


class TelegramAdminOracle:
    """Admin oracle backed by the Telegram Bot API."""

    def __init__(self, api: BotApiClient) -> None:
        self._api = api

    async def check_admin(self, chat_id: ChatId, user_id: int) -> AdminVerdict:
        """Return the member status of ``user_id`` in ``chat_id`` as a verdict."""

        if not self._api.configured:
            LOGGER.error("Admin check skipped: TELEGRAM_BOT_TOKEN is not set")
            return AdminVerdict.failure(NOT_CONFIGURED)

        LOGGER.info("Checking admin status for user %s in chat %s", user_id, chat_id)
        try:
            data = await asyncio.to_thread(
                self._api.call,
                "getChatMember",
                {"chat_id": chat_id, "user_id": user_id},
            )
        except (BotApiError, ValueError, KeyError) as e:
            LOGGER.error("Admin check failed for user %s in chat %s: %s", user_id, chat_id, e)
            return AdminVerdict.failure(str(e))

        if not data.get("ok"):
            description = data.get("description") or "Failed to check admin status"
            LOGGER.error("Telegram rejected admin check for user %s: %s", user_id, description)
            return AdminVerdict.failure(description)

        result = data.get("result")
        status = result.get("status") if isinstance(result, dict) else None
        if not isinstance(status, str):
            LOGGER.error("getChatMember returned no status for user %s", user_id)
            return AdminVerdict.failure("Malformed getChatMember response")

        verdict = AdminVerdict.from_status(status)
        LOGGER.info("Admin check completed for user %s: status=%s admin=%s", user_id, status, verdict.is_admin)
        return verdict
