from __future__ import annotations

import asyncio
import http.client
from typing import Any, Optional

from adapters.bot_api import BotApiClient, BotApiError
from adapters.telegram_admin_oracle import TelegramAdminOracle


class FakeApi:
    def __init__(
        self,
        response: Optional[dict[str, Any]] = None,
        error: Optional[BotApiError] = None,
    ) -> None:
        self.response = response
        self.error = error
        self.configured = True
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def call(self, method: str, payload: dict[str, Any]) -> dict[str, Any]:
        self.calls.append((method, payload))
        if self.error is not None:
            raise self.error
        return self.response or {}


def _check(api, chat_id=-100123, user_id=42):
    return asyncio.run(TelegramAdminOracle(api).check_admin(chat_id, user_id))


def test_creator_and_administrator_are_admins() -> None:
    for status in ("creator", "administrator"):
        api = FakeApi({"ok": True, "result": {"status": status}})
        verdict = _check(api)
        assert verdict.is_admin
        assert verdict.status == status
        assert verdict.error is None


def test_member_is_not_admin() -> None:
    verdict = _check(FakeApi({"ok": True, "result": {"status": "member"}}))
    assert not verdict.is_admin
    assert verdict.status == "member"


def test_request_payload() -> None:
    api = FakeApi({"ok": True, "result": {"status": "member"}})
    _check(api, chat_id="@news", user_id=7)
    assert api.calls == [("getChatMember", {"chat_id": "@news", "user_id": 7})]


def test_remote_rejection_is_negative_verdict() -> None:
    verdict = _check(FakeApi({"ok": False, "description": "Bad Request: user not found"}))
    assert not verdict.is_admin
    assert verdict.status is None
    assert verdict.error == "Bad Request: user not found"


def test_remote_rejection_without_description() -> None:
    verdict = _check(FakeApi({"ok": False}))
    assert not verdict.is_admin
    assert verdict.error == "Failed to check admin status"


def test_transport_error_is_negative_verdict() -> None:
    verdict = _check(FakeApi(error=BotApiError("Bot API request failed: timed out")))
    assert not verdict.is_admin
    assert verdict.error == "Bot API request failed: timed out"


def test_malformed_result_is_negative_verdict() -> None:
    verdict = _check(FakeApi({"ok": True, "result": None}))
    assert not verdict.is_admin
    assert verdict.error


def test_missing_token_skips_network(monkeypatch) -> None:
    def _fail(*args, **kwargs):
        raise AssertionError("network must not be used without a token")

    monkeypatch.setattr("urllib.request.urlopen", _fail)
    verdict = _check(BotApiClient(None))
    assert not verdict.is_admin
    assert verdict.error == "Bot token not configured"


class IncompleteResponse:
    def read(self) -> bytes:
        raise http.client.IncompleteRead(b"123456789")

    def __enter__(self) -> "IncompleteResponse":
        return self

    def __exit__(self, *exc) -> None:
        return None


def test_incomplete_read_is_negative_verdict(monkeypatch) -> None:
    monkeypatch.setattr("urllib.request.urlopen", lambda request, timeout: IncompleteResponse())
    verdict = _check(BotApiClient("123:abc"))
    assert not verdict.is_admin
    assert verdict.error


def test_token_with_space_is_negative_verdict(monkeypatch) -> None:
    def fake_urlopen(request, timeout):
        raise http.client.InvalidURL(f"URL can't contain control characters. {request.selector!r}")

    monkeypatch.setattr("urllib.request.urlopen", fake_urlopen)
    verdict = _check(BotApiClient("123 abc"))
    assert not verdict.is_admin
    assert "123 abc" not in verdict.error


def test_unexpected_value_error_is_negative_verdict() -> None:
    verdict = _check(FakeApi(error=ValueError("bad value")))
    assert not verdict.is_admin
    assert verdict.error == "bad value"
