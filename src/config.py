from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

GAME_SHORT_NAME = "snake4d"
GAME_URL = "https://snake4d.netlify.app"


@dataclass(frozen=True)
class Settings:
    telegram_bot_token: str
    game_short_name: str
    game_url: str
    log_level: str
    poll_interval_seconds: float


class ConfigError(ValueError):
    pass


def _require_env(name: str) -> str:
    value = os.getenv(name, "").strip()
    if not value:
        raise ConfigError(f"Missing required environment variable: {name}")
    return value


def _parse_poll_interval(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ConfigError(f"Invalid POLL_INTERVAL_SECONDS: {raw}") from exc
    if value < 0:
        raise ConfigError("POLL_INTERVAL_SECONDS must not be negative")
    return value


def _parse_log_level(raw: str) -> str:
    level = raw.strip().upper() or "INFO"
    if not isinstance(logging.getLevelName(level), int):
        raise ConfigError(f"Invalid LOG_LEVEL: {raw}")
    return level


def load_settings() -> Settings:
    load_dotenv()

    game_url = os.getenv("GAME_URL", "").strip() or GAME_URL

    return Settings(
        telegram_bot_token=_require_env("TELEGRAM_BOT_TOKEN"),
        game_short_name=os.getenv("GAME_SHORT_NAME", "").strip() or GAME_SHORT_NAME,
        game_url=game_url.rstrip("/"),
        log_level=_parse_log_level(os.getenv("LOG_LEVEL", "INFO")),
        poll_interval_seconds=_parse_poll_interval(os.getenv("POLL_INTERVAL_SECONDS", "2").strip() or "2"),
    )
