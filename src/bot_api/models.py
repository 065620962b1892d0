from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class TextMessage:
    chat_id: int
    text: str


@dataclass(frozen=True)
class InlineQuery:
    query_id: str


@dataclass(frozen=True)
class GameCallbackQuery:
    callback_id: str
    game_short_name: str | None
    user_id: int | None
    inline_message_id: str | None


InboundUpdate = Union[TextMessage, InlineQuery, GameCallbackQuery]


def parse_update(update: dict[str, Any]) -> InboundUpdate | None:
    """Classify a raw Bot API update, checking message, inline query and callback query in that order."""
    message = update.get("message")
    if isinstance(message, dict) and message.get("text"):
        chat = message.get("chat")
        if not isinstance(chat, dict):
            chat = {}
        return TextMessage(chat_id=chat.get("id"), text=message["text"])

    inline_query = update.get("inline_query")
    if isinstance(inline_query, dict):
        return InlineQuery(query_id=inline_query.get("id"))

    callback = update.get("callback_query")
    if isinstance(callback, dict):
        from_user = callback.get("from")
        if not isinstance(from_user, dict):
            from_user = {}
        return GameCallbackQuery(
            callback_id=callback.get("id"),
            game_short_name=callback.get("game_short_name"),
            user_id=from_user.get("id"),
            inline_message_id=callback.get("inline_message_id"),
        )

    return None
