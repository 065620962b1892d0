from __future__ import annotations

from dataclasses import dataclass
import logging
import sys
import time
from typing import Any

import requests

from bot_api.client import TelegramAPIError, TelegramClient
from config import ConfigError, Settings, load_settings
from logging_config import configure_logging
from orchestration.dispatcher import Response, UpdateDispatcher
from orchestration.scores import CORS_HEADERS, ScoreUpdater, request_method

_LOGGER = logging.getLogger("snake4d.app")


@dataclass(frozen=True)
class Application:
    settings: Settings
    telegram: TelegramClient
    dispatcher: UpdateDispatcher
    scores: ScoreUpdater


_APPLICATION: Application | None = None


def init_app(settings: Settings | None = None) -> Application:
    """Load settings and wire the Telegram client into the handlers.

    Raises ``ConfigError`` when required configuration is missing.
    """
    if settings is None:
        try:
            settings = load_settings()
        except ConfigError:
            configure_logging()
            _LOGGER.error("Bot configuration is invalid", exc_info=True)
            raise
    configure_logging(settings.log_level)

    telegram = TelegramClient(settings.telegram_bot_token)
    app = Application(
        settings=settings,
        telegram=telegram,
        dispatcher=UpdateDispatcher(
            telegram,
            game_short_name=settings.game_short_name,
            game_url=settings.game_url,
        ),
        scores=ScoreUpdater(telegram),
    )
    _LOGGER.info("Bot is ready to process events", extra={"game_short_name": settings.game_short_name})
    return app


def get_app() -> Application:
    global _APPLICATION
    if _APPLICATION is None:
        _APPLICATION = init_app()
    return _APPLICATION


def reset_app() -> None:
    global _APPLICATION
    _APPLICATION = None


def webhook_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    try:
        app = get_app()
    except ConfigError:
        return Response(500, "Server configuration error").to_dict()
    return app.dispatcher.handle(event).to_dict()


def score_handler(event: dict[str, Any], context: Any = None) -> dict[str, Any]:
    if request_method(event) == "OPTIONS":
        return Response(200, "", dict(CORS_HEADERS)).to_dict()
    try:
        app = get_app()
    except ConfigError:
        return Response(
            500,
            '{"success": false, "error": "Server configuration error"}',
            dict(CORS_HEADERS),
        ).to_dict()
    return app.scores.handle(event).to_dict()


def main() -> None:
    try:
        app = init_app()
    except ConfigError:
        sys.exit(1)

    offset: int | None = None
    _LOGGER.info("Bot started with Telegram polling")

    while True:
        try:
            updates = app.telegram.get_updates(offset=offset)
            for update in updates:
                offset = update["update_id"] + 1
                try:
                    action = app.dispatcher.dispatch_update(update)
                except TelegramAPIError as exc:
                    _LOGGER.exception("Telegram rejected the reply", extra={"status_code": exc.status_code})
                    continue
                except Exception:
                    _LOGGER.exception("Update handling failed", extra={"update_id": update["update_id"]})
                    continue
                if action:
                    _LOGGER.info("Handled update", extra={"update_id": update["update_id"], "action": action})

        except (TelegramAPIError, requests.RequestException):
            _LOGGER.exception("Polling loop error")
            time.sleep(app.settings.poll_interval_seconds)


if __name__ == "__main__":
    main()
