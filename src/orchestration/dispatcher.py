from __future__ import annotations

from dataclasses import dataclass, field
import json
import logging
from typing import Any, Mapping, Protocol

import requests

from bot_api.client import TelegramAPIError
from bot_api.models import GameCallbackQuery, InlineQuery, TextMessage, parse_update

WELCOME_TEXT = (
    "Welcome to the Snake 4D Game Bot! "
    "Use @snake4dbot followed by some text in any chat to start playing."
)

_LOGGER = logging.getLogger("snake4d.dispatcher")


class BotClient(Protocol):
    def send_message(self, chat_id: int, text: str) -> None:
        ...

    def send_game(self, chat_id: int, game_short_name: str) -> None:
        ...

    def answer_inline_query(self, inline_query_id: str, results: list[dict[str, Any]]) -> None:
        ...

    def answer_callback_query(self, callback_query_id: str, url: str | None = None, text: str | None = None) -> None:
        ...


@dataclass(frozen=True)
class Response:
    status_code: int
    body: str
    headers: dict[str, str] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {"statusCode": self.status_code, "body": self.body}
        if self.headers:
            result["headers"] = dict(self.headers)
        return result


def build_game_url(game_url: str, user_id: Any, inline_message_id: Any) -> str:
    return f"{game_url}/#userId={user_id}&messageId={inline_message_id}"


class UpdateDispatcher:
    def __init__(self, client: BotClient, *, game_short_name: str, game_url: str) -> None:
        self._client = client
        self._game_short_name = game_short_name
        self._game_url = game_url.rstrip("/")

    def handle(self, event: Mapping[str, Any]) -> Response:
        body = event.get("body")
        if not body:
            return Response(400, "Invalid request body")

        try:
            update = json.loads(body)
        except ValueError:
            _LOGGER.warning("Could not decode update body", extra={"body_length": len(body)})
            return Response(400, "Invalid update format")
        if not isinstance(update, dict):
            _LOGGER.warning("Update body is not a JSON object")
            return Response(400, "Invalid update format")

        try:
            self.dispatch_update(update)
        except (TelegramAPIError, requests.RequestException):
            _LOGGER.exception("Outbound Telegram call failed", extra={"update_id": update.get("update_id")})
            return Response(500, "Failed to handle update")

        return Response(200, "OK")

    def dispatch_update(self, update: dict[str, Any]) -> str | None:
        """Run the single outbound action for ``update``.

        Returns the name of the action taken, or ``None`` when the update is
        ignored. Errors from the Bot API client propagate to the caller.
        """
        parsed = parse_update(update)

        if isinstance(parsed, TextMessage) and parsed.chat_id is not None:
            if parsed.text == "/start":
                self._client.send_message(parsed.chat_id, WELCOME_TEXT)
                return "send_welcome"
            if parsed.text == "/game":
                self._client.send_game(parsed.chat_id, self._game_short_name)
                return "send_game"
            return None

        if isinstance(parsed, InlineQuery):
            results = [
                {
                    "type": "game",
                    "id": self._game_short_name,
                    "game_short_name": self._game_short_name,
                }
            ]
            self._client.answer_inline_query(parsed.query_id, results)
            return "answer_inline_query"

        if (
            isinstance(parsed, GameCallbackQuery)
            and parsed.game_short_name == self._game_short_name
            and parsed.user_id is not None
        ):
            url = build_game_url(self._game_url, parsed.user_id, parsed.inline_message_id)
            self._client.answer_callback_query(parsed.callback_id, url=url)
            return "answer_callback_query"

        _LOGGER.debug("Ignoring update", extra={"update_id": update.get("update_id")})
        return None
