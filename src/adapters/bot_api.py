"""Minimal Telegram Bot API transport.

Posts JSON to the Bot API with a blocking HTTP call and returns the decoded
response body. Callers run it off the event loop and turn failures into
result values.
"""

from __future__ import annotations

import http.client
import json
import urllib.error
import urllib.request
from typing import Any, Optional

DEFAULT_TIMEOUT_SECONDS = 10.0


class BotApiError(RuntimeError):
    """Raised when the Bot API could not be reached or answered garbage."""


class BotApiClient:
    """Thin JSON-over-HTTP client for a single bot token."""

    def __init__(self, bot_token: Optional[str], timeout: float = DEFAULT_TIMEOUT_SECONDS) -> None:
        self._bot_token = bot_token or None
        self._timeout = timeout

    @property
    def configured(self) -> bool:
        return self._bot_token is not None

    def _endpoint(self, method: str) -> str:
        # The Bot API endpoint is deterministic and derived from the token.
        return f"https://api.telegram.org/bot{self._bot_token}/{method}"

    def _describe(self, error: object) -> str:
        # InvalidURL echoes the request path, which embeds the token.
        text = str(error) or type(error).__name__
        if self._bot_token:
            text = text.replace(self._bot_token, "***")
        return text

    def call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        """Invoke a Bot API method and return the decoded JSON response.

        Error statuses (400, 403, ...) still carry a JSON body with ``ok`` set
        to false and a ``description``; that body is returned as-is so callers
        can report the remote reason. Every other failure is raised as
        BotApiError.
        """

        if not self.configured:
            raise BotApiError("Bot token not configured")

        try:
            data = json.dumps(payload).encode("utf-8")
            request = urllib.request.Request(self._endpoint(method), data=data, method="POST")
            request.add_header("Content-Type", "application/json")
            with urllib.request.urlopen(request, timeout=self._timeout) as response:
                body = response.read()
        except urllib.error.HTTPError as e:
            try:
                body = e.read()
            except (http.client.HTTPException, OSError) as read_error:
                raise BotApiError(f"Bot API error {e.code}: {self._describe(read_error)}") from read_error
            try:
                return _decode(body)
            except BotApiError:
                text = body.decode("utf-8", errors="replace")
                raise BotApiError(f"Bot API error {e.code}: {text}") from e
        except urllib.error.URLError as e:
            raise BotApiError(f"Bot API request failed: {self._describe(e.reason)}") from e
        except (http.client.HTTPException, OSError, ValueError, TypeError) as e:
            # IncompleteRead, InvalidURL from a malformed token, timeouts,
            # payloads json cannot serialize.
            raise BotApiError(f"Bot API request failed: {self._describe(e)}") from e

        return _decode(body)


def _decode(body: bytes) -> dict[str, Any]:
    try:
        parsed = json.loads(body.decode("utf-8"))
    except ValueError as e:
        raise BotApiError("Bot API returned a non-JSON response") from e
    if not isinstance(parsed, dict):
        raise BotApiError("Bot API returned an unexpected payload")
    return parsed
