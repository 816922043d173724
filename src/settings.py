"""Static configuration for textcast.

All user-editable settings (reply texts, Bot API timeout, exchange log and
logging) live in a single JSON file for quick edits without touching Python.
Secrets stay in the environment.
"""

import json
import os

from core.config import (
    DEFAULT_COMMAND,
    DEFAULT_DENIAL_TEXT,
    DEFAULT_USAGE_TEXT,
    MemoryConfig,
    PolicyConfig,
)

PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))

CONFIG_PATH = os.path.join(PROJECT_ROOT, "config.json")


def _load_json_config() -> dict:
    """Load config.json with a flat, user-friendly schema."""

    if not os.path.exists(CONFIG_PATH):
        raise FileNotFoundError(f"Config file not found: {CONFIG_PATH}")

    with open(CONFIG_PATH, "r", encoding="utf-8") as handle:
        return json.load(handle)


def _resolve_path(path: str) -> str:
    if os.path.isabs(path):
        return path
    return os.path.join(PROJECT_ROOT, path)


_CONFIG = _load_json_config()

# Expose the raw config for modules that need structured access.
CONFIG = _CONFIG

# Command token and reply texts. The bot username is filled in at startup.
_policy = _CONFIG.get("policy", {})
POLICY_CONFIG = PolicyConfig(
    command=_policy.get("command", DEFAULT_COMMAND),
    denial_text=_policy.get("denial_text", DEFAULT_DENIAL_TEXT),
    usage_text=_policy.get("usage_text", DEFAULT_USAGE_TEXT),
)

# Upper bound for each Bot API round trip (admin check, sendMessage).
_bot_api = _CONFIG.get("bot_api", {})
BOT_API_TIMEOUT = float(_bot_api.get("timeout_seconds", 10))

# Optional thread-scoped exchange log.
# - MEMORY.last_messages: how many exchanges `history` shows by default
# - MEMORY.ttl_days: cleanup horizon applied at startup
_memory = _CONFIG.get("memory", {})
MEMORY = MemoryConfig(
    enabled=bool(_memory.get("enabled", False)),
    db_path=_resolve_path(_memory.get("db_path", "textcast.db")),
    last_messages=int(_memory.get("last_messages", 10)),
    ttl_days=int(_memory.get("ttl_days", 30)),
)

# Logging configuration (optional).
LOGGING = _CONFIG.get("logging", {})
