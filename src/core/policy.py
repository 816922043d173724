"""Broadcast decision policy (core domain).

The policy is a pure function of the raw message and the admin verdict. The
admin check always comes first, so a non-admin never learns whether their
command was well-formed.
"""

from __future__ import annotations

from core.commands import parse_command
from core.config import DEFAULT_POLICY, PolicyConfig
from core.models import AdminVerdict, Reply

# Reply for anything that is not our command. It is never delivered.
IGNORED = Reply(text="")


def decide(raw_message: str, verdict: AdminVerdict, config: PolicyConfig = DEFAULT_POLICY) -> Reply:
    """Return the reply for one message.

    Decision table:
    - not an admin -> denial text, whatever the message says
    - admin, not a command -> ignored (empty) reply
    - admin, command without argument -> usage text
    - admin, command with argument -> the argument verbatim
    """

    if not verdict.is_admin:
        return Reply(text=config.denial_text)

    command = parse_command(raw_message, config)
    if command is None:
        return IGNORED

    if command.argument is None:
        return Reply(text=config.usage_text)

    return Reply(text=command.argument)
