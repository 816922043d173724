"""Core configuration dataclasses.

We keep config parsing outside the core, but these dataclasses define the
shape the core expects so adapters and app layers can build safely.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

DEFAULT_COMMAND = "/text"
DEFAULT_DENIAL_TEXT = "⛔ Only admins can use this command."
DEFAULT_USAGE_TEXT = "⚠️ Usage: /text <your message>"


@dataclass(frozen=True)
class PolicyConfig:
    """Command token and the fixed reply texts used by the policy."""

    command: str = DEFAULT_COMMAND
    denial_text: str = DEFAULT_DENIAL_TEXT
    usage_text: str = DEFAULT_USAGE_TEXT
    # Set once the bot knows its own username, so "/text@otherbot" is ignored.
    bot_username: Optional[str] = None


@dataclass(frozen=True)
class MemoryConfig:
    """Exchange log settings consumed by the dispatcher wiring."""

    enabled: bool
    db_path: str
    last_messages: int
    ttl_days: int


DEFAULT_POLICY = PolicyConfig()
