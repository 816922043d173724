"""Helpers for working with exchange-log thread ids."""

from __future__ import annotations

from typing import Optional, Tuple

from core.models import ChatId

CHAT_PREFIX = "chat_id:"
TOPIC_SUFFIX = "#topic:"


def build_thread_id(chat_id: ChatId, topic_id: Optional[int] = None) -> str:
    """Return the thread id for a chat, adding a topic suffix when needed."""

    base = f"{CHAT_PREFIX}{chat_id}"
    if topic_id is None:
        return base
    return f"{base}{TOPIC_SUFFIX}{topic_id}"


def split_thread_id(thread_id: str) -> Tuple[str, Optional[int]]:
    """Split a thread id into (base_id, topic_id)."""

    if TOPIC_SUFFIX not in thread_id:
        return thread_id, None
    base_id, _, topic_part = thread_id.partition(TOPIC_SUFFIX)
    if not base_id:
        return thread_id, None
    try:
        return base_id, int(topic_part)
    except ValueError:
        return thread_id, None