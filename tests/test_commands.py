from __future__ import annotations

from core.commands import parse_command
from core.config import PolicyConfig


def test_bare_command_has_no_argument() -> None:
    command = parse_command("/text")
    assert command is not None
    assert command.name == "text"
    assert command.argument is None


def test_whitespace_only_argument_is_absent() -> None:
    command = parse_command("/text   \n ")
    assert command is not None
    assert command.argument is None


def test_argument_is_trimmed_but_inner_text_kept() -> None:
    command = parse_command("/text   Line one\n  line two  ")
    assert command is not None
    assert command.argument == "Line one\n  line two"


def test_token_must_start_the_message() -> None:
    assert parse_command("please /text hello") is None
    assert parse_command(" /text hello") is None


def test_token_is_case_sensitive_and_whole_word() -> None:
    assert parse_command("/TEXT hello") is None
    assert parse_command("/textual hello") is None
    assert parse_command("/texthello") is None


def test_empty_input_is_not_a_command() -> None:
    assert parse_command("") is None
    assert parse_command(None) is None


def test_mention_for_this_bot_is_accepted() -> None:
    config = PolicyConfig(bot_username="CastBot")
    command = parse_command("/text@castbot Hello", config)
    assert command is not None
    assert command.argument == "Hello"


def test_mention_for_another_bot_is_ignored() -> None:
    config = PolicyConfig(bot_username="castbot")
    assert parse_command("/text@otherbot Hello", config) is None


def test_mention_accepted_when_bot_username_unknown() -> None:
    command = parse_command("/text@anybot")
    assert command is not None
    assert command.argument is None


def test_custom_command_token() -> None:
    config = PolicyConfig(command="/say")
    command = parse_command("/say hi", config)
    assert command is not None
    assert command.name == "say"
    assert command.argument == "hi"
    assert parse_command("/text hi", config) is None
