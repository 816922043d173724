"""Command recognition (core domain)."""

from __future__ import annotations

import re
from typing import Optional

from core.config import DEFAULT_POLICY, PolicyConfig
from core.models import Command

# Telegram appends "@<botusername>" to commands picked from the menu in groups.
_MENTION = re.compile(r"@(\w+)")


def _mention_matches(mention: str, bot_username: Optional[str]) -> bool:
    if not bot_username:
        return True
    return mention.lower() == bot_username.lstrip("@").lower()


def parse_command(raw: Optional[str], config: PolicyConfig = DEFAULT_POLICY) -> Optional[Command]:
    """Return the parsed command, or None when the message is not one.

    Matching logic:
    - The token must sit at position 0 and is case-sensitive.
    - It must be followed by end of text, whitespace, or a bot mention.
    - A mention addressed to a different bot is not our command.
    - The argument is the trimmed remainder; empty means absent.
    """

    if not raw or not raw.startswith(config.command):
        return None

    rest = raw[len(config.command):]
    mention = _MENTION.match(rest)
    if mention:
        if not _mention_matches(mention.group(1), config.bot_username):
            return None
        rest = rest[mention.end():]

    # "/textual" is a different word, not "/text" with an argument.
    if rest and not rest[0].isspace():
        return None

    argument = rest.strip() or None
    return Command(name=config.command.lstrip("/"), argument=argument)
