"""Telegram-to-core message mapping adapter.

This keeps Telethon-specific details out of the core dispatcher.
"""

from __future__ import annotations

from typing import Optional

from telethon.tl.custom import Message

from core.models import IncomingMessage
from core.thread_keys import build_thread_id


def _topic_id_from_message(message: Message) -> Optional[int]:
    reply_to = getattr(message, "reply_to", None)
    if not reply_to or not getattr(reply_to, "forum_topic", False):
        return None
    top_id = getattr(reply_to, "reply_to_top_id", None)
    if top_id:
        return top_id
    return getattr(reply_to, "reply_to_msg_id", None)


def build_incoming(message: Message) -> Optional[IncomingMessage]:
    """Build a core IncomingMessage from a Telethon Message.

    Returns None when the message has no identifiable sender, e.g. channel
    posts, since there is nobody to run the admin check for.
    """

    user_id = getattr(message, "sender_id", None)
    if user_id is None:
        return None

    topic_id = _topic_id_from_message(message)
    return IncomingMessage(
        chat_id=message.chat_id,
        user_id=user_id,
        text=message.raw_text or "",
        thread_id=build_thread_id(message.chat_id, topic_id),
    )
