"""Application entry point for the textcast bot."""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import logging
import os
import re
from logging.handlers import RotatingFileHandler
from typing import Optional

from art import tprint
from dotenv import load_dotenv
from telethon import events

import settings
from adapters.bot_api import BotApiClient
from adapters.sqlite_exchange_log import SQLiteExchangeLog
from adapters.telegram_admin_oracle import TelegramAdminOracle
from adapters.telegram_bot_delivery import TelegramBotDelivery
from adapters.telegram_mapper import build_incoming
from client import build_client
from core.commands import parse_command
from core.config import PolicyConfig
from core.dispatcher import CommandDispatcher
from core.models import ChatId, IncomingMessage
from core.thread_keys import CHAT_PREFIX, TOPIC_SUFFIX, build_thread_id, split_thread_id

NAME = "TEXTCAST"
FONT = "tarty-1"

TOKEN_ENV = "TELEGRAM_BOT_TOKEN"


def _print_banner() -> None:
    tprint(NAME, FONT, space=1)


class _RedactingFormatter(logging.Formatter):
    def __init__(self, secrets: list[str], fmt: str, datefmt: Optional[str] = None) -> None:
        super().__init__(fmt=fmt, datefmt=datefmt)
        self._secrets = [secret for secret in secrets if secret]

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        for secret in self._secrets:
            message = message.replace(secret, "***")
        return message


def _collect_redaction_values(config: dict) -> list[str]:
    # The bot token is embedded in every Bot API URL, so it is always masked.
    names = {TOKEN_ENV}
    redact_cfg = config.get("redact", {}) if config else {}
    if redact_cfg.get("enabled", False):
        names.update(redact_cfg.get("patterns", []))
    values = []
    for name in names:
        value = os.getenv(name)
        if value:
            values.append(value)
    return sorted(set(values), key=len, reverse=True)


def _configure_logging() -> None:
    config = settings.LOGGING or {}
    if not config.get("enabled", False):
        return

    load_dotenv()
    level_name = str(config.get("level", "INFO")).upper()
    level = getattr(logging, level_name, logging.INFO)

    fmt = "%(asctime)s %(levelname)s %(name)s: %(message)s"
    datefmt = "%Y-%m-%d %H:%M:%S"
    secrets = _collect_redaction_values(config)
    formatter = _RedactingFormatter(secrets, fmt=fmt, datefmt=datefmt)

    handlers: list[logging.Handler] = []

    if config.get("console", True):
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        handlers.append(console_handler)

    file_cfg = config.get("file", {})
    if file_cfg.get("enabled", False):
        path = file_cfg.get("path", "logs/textcast.log")
        if not os.path.isabs(path):
            path = os.path.join(settings.PROJECT_ROOT, path)
        directory = os.path.dirname(path)
        if directory:
            os.makedirs(directory, exist_ok=True)

        max_bytes = int(file_cfg.get("max_bytes", 5 * 1024 * 1024))
        backup_count = int(file_cfg.get("backup_count", 5))
        file_handler = RotatingFileHandler(
            path,
            maxBytes=max_bytes,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    if not handlers:
        return

    logging.basicConfig(level=level, handlers=handlers)


def _build_exchange_log() -> Optional[SQLiteExchangeLog]:
    if not settings.MEMORY.enabled:
        return None
    exchange_log = SQLiteExchangeLog(settings.MEMORY.db_path)
    exchange_log.init_db()
    removed = exchange_log.cleanup(settings.MEMORY.ttl_days)
    logging.getLogger(__name__).info("Exchange log cleanup removed %s rows", removed)
    return exchange_log


def _build_dispatcher(bot_token: Optional[str], policy_config: PolicyConfig) -> CommandDispatcher:
    # One transport serves both adapters; a missing token turns every call into
    # a reported failure instead of an exception.
    api = BotApiClient(bot_token, timeout=settings.BOT_API_TIMEOUT)
    return CommandDispatcher(
        oracle=TelegramAdminOracle(api),
        delivery=TelegramBotDelivery(api),
        policy_config=policy_config,
        exchange_log=_build_exchange_log(),
    )


def _command_pattern(command: str, bot_username: Optional[str] = None) -> re.Pattern:
    # Cheap pre-filter for Telethon; the policy does the exact parsing.
    if bot_username:
        mention = rf"(?:@(?i:{re.escape(bot_username.lstrip('@'))}))?"
    else:
        mention = r"(?:@\w+)?"
    return re.compile(rf"^{re.escape(command)}{mention}(?:\s|$)")


async def _on_command(dispatcher: CommandDispatcher, event) -> None:
    """Dispatch one Telethon event; errors are logged so the listener keeps running."""

    logger = logging.getLogger(__name__)
    try:
        incoming = build_incoming(event.message)
        if incoming is None:
            logger.info("Ignoring command without a sender in chat %s", event.chat_id)
            return
        # Commands addressed to another bot are none of our business, not even
        # for a denial.
        if parse_command(incoming.text, dispatcher.policy_config) is None:
            logger.debug("Ignoring message that is not our command in chat %s", incoming.chat_id)
            return
        await dispatcher.handle(incoming)
    except Exception:
        logger.exception("Error while dispatching message")


def _parse_chat_id(raw: str) -> ChatId:
    try:
        return int(raw)
    except ValueError:
        return raw


def _thread_id_arg(value: str) -> str:
    base_id, _ = split_thread_id(value)
    # A malformed topic suffix leaves it inside base_id.
    if not base_id.startswith(CHAT_PREFIX) or base_id == CHAT_PREFIX or TOPIC_SUFFIX in base_id:
        raise argparse.ArgumentTypeError(
            f"invalid thread id {value!r}; expected chat_id:<id> or chat_id:<id>#topic:<n>"
        )
    return value


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"{value!r} is not an integer") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("must be greater than zero")
    return number


def _run() -> None:
    _print_banner()
    _configure_logging()
    logger = logging.getLogger(__name__)

    logger.info("Starting textcast")

    load_dotenv()
    bot_token = os.getenv(TOKEN_ENV)
    # The listener cannot log in without a token, unlike a one-off dispatch.
    if not bot_token:
        raise RuntimeError(f"{TOKEN_ENV} is required to run the bot")

    client = build_client()
    client.start(bot_token=bot_token)
    me = client.loop.run_until_complete(client.get_me())
    bot_username = getattr(me, "username", None)
    logger.info("Logged in as @%s", bot_username)

    policy_config = dataclasses.replace(settings.POLICY_CONFIG, bot_username=bot_username)
    dispatcher = _build_dispatcher(bot_token, policy_config)

    # Only messages that look like our command reach the dispatcher, so regular
    # chat traffic never triggers an admin check.
    pattern = _command_pattern(policy_config.command, bot_username)

    @client.on(events.NewMessage(incoming=True, pattern=pattern))
    async def handler(event) -> None:
        await _on_command(dispatcher, event)

    logger.info("Listening for %s commands...", policy_config.command)
    client.run_until_disconnected()


def _dispatch(args: argparse.Namespace) -> bool:
    _configure_logging()
    load_dotenv()

    chat_id = _parse_chat_id(args.chat_id)
    incoming = IncomingMessage(
        chat_id=chat_id,
        user_id=args.user_id,
        text=args.text,
        thread_id=args.thread_id or build_thread_id(chat_id),
    )
    dispatcher = _build_dispatcher(os.getenv(TOKEN_ENV), settings.POLICY_CONFIG)
    result = asyncio.run(dispatcher.handle(incoming))

    print(f"admin:    {result.verdict.is_admin} (status={result.verdict.status}, error={result.verdict.error})")
    print(f"reply:    {result.reply.text!r}")
    if result.outcome.success:
        print(f"delivery: sent (message_id={result.outcome.message_id})")
    else:
        print(f"delivery: failed ({result.outcome.error})")
    return result.outcome.success


def _history(args: argparse.Namespace) -> None:
    exchange_log = SQLiteExchangeLog(settings.MEMORY.db_path)
    exchange_log.init_db()
    limit = args.limit if args.limit is not None else settings.MEMORY.last_messages
    exchanges = exchange_log.recent(args.thread_id, limit=limit)
    if not exchanges:
        print(f"No exchanges recorded for {args.thread_id}.")
        return
    for exchange in exchanges:
        print(f"[{exchange.created_at}] user {exchange.user_id}: {exchange.text}")
        print(f"    -> {exchange.reply!r}")


def main(argv: Optional[list[str]] = None) -> None:
    parser = argparse.ArgumentParser(prog="textcast")
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("run", help="Start the bot")

    dispatch_parser = subparsers.add_parser(
        "dispatch",
        help="Run one message through admin check, policy and delivery.",
    )
    dispatch_parser.add_argument("--chat-id", required=True, help="Chat id or @channelusername")
    dispatch_parser.add_argument("--user-id", required=True, type=int, help="Telegram user id of the sender")
    dispatch_parser.add_argument("--thread-id", type=_thread_id_arg, help="Exchange log thread (defaults to the chat)")
    dispatch_parser.add_argument("text", help='Raw message, e.g. "/text Hello everyone!"')

    history_parser = subparsers.add_parser("history", help="Show recorded exchanges for a thread.")
    history_parser.add_argument("thread_id", type=_thread_id_arg, help="Thread id, e.g. chat_id:-100123")
    history_parser.add_argument("--limit", type=_positive_int, help="Number of exchanges to show")

    args = parser.parse_args(argv)
    if args.command == "dispatch":
        if not _dispatch(args):
            raise SystemExit(1)
        return
    if args.command == "history":
        _history(args)
        return
    _run()


if __name__ == "__main__":
    main()
