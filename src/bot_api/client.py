from __future__ import annotations

from typing import Any

import requests


class TelegramAPIError(RuntimeError):
    def __init__(self, *, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class TelegramClient:
    def __init__(self, bot_token: str, timeout_seconds: float = 30.0) -> None:
        self._base_url = f"https://api.telegram.org/bot{bot_token}"
        self._timeout_seconds = timeout_seconds

    def _call(self, method: str, payload: dict[str, Any], timeout: float | None = None) -> Any:
        response = requests.post(
            f"{self._base_url}/{method}",
            json=payload,
            timeout=timeout or self._timeout_seconds,
        )
        try:
            data = response.json()
        except ValueError:
            data = {}

        try:
            response.raise_for_status()
        except requests.HTTPError as exc:
            message = data.get("description") or response.text.strip() or f"Telegram API error ({response.status_code})"
            raise TelegramAPIError(status_code=response.status_code, message=message) from exc

        if not data.get("ok"):
            message = data.get("description") or f"Telegram API call {method} was not ok"
            raise TelegramAPIError(status_code=response.status_code, message=message)
        return data.get("result")

    def get_updates(self, offset: int | None = None, timeout: int = 20) -> list[dict[str, Any]]:
        payload: dict[str, Any] = {"timeout": timeout}
        if offset is not None:
            payload["offset"] = offset
        return self._call("getUpdates", payload, timeout=self._timeout_seconds + timeout) or []

    def send_message(self, chat_id: int, text: str) -> None:
        self._call("sendMessage", {"chat_id": chat_id, "text": text})

    def send_game(self, chat_id: int, game_short_name: str) -> None:
        self._call("sendGame", {"chat_id": chat_id, "game_short_name": game_short_name})

    def answer_inline_query(self, inline_query_id: str, results: list[dict[str, Any]]) -> None:
        self._call("answerInlineQuery", {"inline_query_id": inline_query_id, "results": results})

    def answer_callback_query(
        self,
        callback_query_id: str,
        url: str | None = None,
        text: str | None = None,
    ) -> None:
        payload: dict[str, Any] = {"callback_query_id": callback_query_id}
        if url is not None:
            payload["url"] = url
        if text is not None:
            payload["text"] = text
        self._call("answerCallbackQuery", payload)

    def set_game_score(self, *, user_id: int | str, score: int, inline_message_id: str) -> None:
        self._call(
            "setGameScore",
            {"user_id": user_id, "score": score, "inline_message_id": inline_message_id},
        )
