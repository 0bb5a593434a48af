"""A small client for the Telegram Bot HTTP API."""

from __future__ import annotations

from typing import Any

import httpx

API_URL = "https://api.telegram.org"


class TelegramError(Exception):
    """A Bot API call failed."""

    def __init__(self, message: str, error_code: int | None = None) -> None:
        super().__init__(message)
        self.error_code = error_code


class TelegramApi:
    """Calls Bot API methods with one bot token."""

    def __init__(self, token: str, client: httpx.Client | None = None) -> None:
        if not token:
            raise TelegramError("bot token is empty")
        self._token = token
        self._client = client if client is not None else httpx.Client(timeout=60.0)

    def call(self, method: str, params: dict[str, Any] | None = None) -> Any:
        """Invoke ``method`` with JSON ``params`` and return its result."""
        url = f"{API_URL}/bot{self._token}/{method}"
        try:
            response = self._client.post(url, json=params or {})
        except httpx.HTTPError as exc:
            raise TelegramError(f"{method} request failed: {exc}") from exc
        try:
            payload = response.json()
        except ValueError as exc:
            raise TelegramError(
                f"{method}: invalid response (status {response.status_code})",
                response.status_code,
            ) from exc
        if not isinstance(payload, dict) or not payload.get("ok"):
            description = payload.get("description", "unknown error") if isinstance(payload, dict) else "unknown error"
            code = payload.get("error_code", response.status_code) if isinstance(payload, dict) else response.status_code
            raise TelegramError(f"{method}: {description}", code)
        return payload.get("result")

    def send_message(
        self, chat_id: int, text: str, reply_markup: dict[str, Any] | None = None
    ) -> Any:
        """Send an HTML-formatted message."""
        params: dict[str, Any] = {"chat_id": chat_id, "text": text, "parse_mode": "HTML"}
        if reply_markup is not None:
            params["reply_markup"] = reply_markup
        return self.call("sendMessage", params)

    def set_my_commands(self, commands: list[dict[str, str]], language_code: str = "") -> Any:
        """Publish the bot's command list for the default scope."""
        params: dict[str, Any] = {"commands": commands, "scope": {"type": "default"}}
        if language_code:
            params["language_code"] = language_code
        return self.call("setMyCommands", params)

    def get_updates(self, offset: int | None = None, timeout: int = 30) -> list[dict[str, Any]]:
        """Long-poll for updates starting at ``offset``."""
        params: dict[str, Any] = {"timeout": timeout}
        if offset is not None:
            params["offset"] = offset
        return self.call("getUpdates", params) or []

    def answer_callback_query(self, callback_query_id: str) -> Any:
        return self.call("answerCallbackQuery", {"callback_query_id": callback_query_id})