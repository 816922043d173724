from __future__ import annotations

import pytest

from core.config import DEFAULT_DENIAL_TEXT, DEFAULT_USAGE_TEXT, PolicyConfig
from core.models import AdminVerdict
from core.policy import IGNORED, decide

ADMIN = AdminVerdict(is_admin=True, status="creator")
MEMBER = AdminVerdict(is_admin=False, status="member")
FAILED = AdminVerdict.failure("Bad Request: chat not found")


@pytest.mark.parametrize(
    "message",
    ["/text spam", "/text", "/text   ", "hello there", "", "/textual", "/text@otherbot x"],
)
def test_non_admin_always_gets_denial(message: str) -> None:
    assert decide(message, MEMBER).text == DEFAULT_DENIAL_TEXT
    assert decide(message, FAILED).text == DEFAULT_DENIAL_TEXT


def test_admin_without_argument_gets_usage() -> None:
    assert decide("/text", ADMIN).text == DEFAULT_USAGE_TEXT
    assert decide("/text   ", ADMIN).text == DEFAULT_USAGE_TEXT


def test_admin_argument_is_relayed_verbatim() -> None:
    assert decide("/text Hello everyone!", ADMIN).text == "Hello everyone!"


def test_admin_argument_keeps_markup_characters() -> None:
    text = "*Meeting* at <b>5pm</b> _sharp_ [link](http://x)"
    assert decide(f"/text {text}", ADMIN).text == text


def test_admin_unrecognized_message_is_ignored() -> None:
    reply = decide("let's use /text later", ADMIN)
    assert reply == IGNORED
    assert reply.is_empty


def test_configured_texts_are_used() -> None:
    config = PolicyConfig(denial_text="no", usage_text="usage")
    assert decide("/text hi", MEMBER, config).text == "no"
    assert decide("/text", ADMIN, config).text == "usage"


def test_verdict_from_status() -> None:
    assert AdminVerdict.from_status("creator").is_admin
    assert AdminVerdict.from_status("administrator").is_admin
    assert not AdminVerdict.from_status("member").is_admin
    assert not AdminVerdict.from_status("restricted").is_admin
    assert not AdminVerdict.from_status("left").is_admin
    assert not FAILED.is_admin
    assert FAILED.status is None
