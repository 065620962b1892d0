from __future__ import annotations

from dataclasses import dataclass
import json
import logging
from typing import Any, Mapping, Protocol

import requests

from bot_api.client import TelegramAPIError
from orchestration.dispatcher import Response

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "Content-Type",
    "Access-Control-Allow-Methods": "OPTIONS,POST",
    "Content-Type": "application/json",
}

_LOGGER = logging.getLogger("snake4d.scores")


class ScoreClient(Protocol):
    def set_game_score(self, *, user_id: int | str, score: int, inline_message_id: str) -> None:
        ...


@dataclass(frozen=True)
class ScoreSubmission:
    user_id: str
    score: int
    message_id: str


def request_method(event: Mapping[str, Any]) -> str:
    http = (event.get("requestContext") or {}).get("http") or {}
    return str(http.get("method") or event.get("httpMethod") or "POST").upper()


def parse_score_submission(body: str | None) -> ScoreSubmission | None:
    """Decode a score submission, returning ``None`` when the body is not a JSON object.

    Fields with the wrong type are treated as empty so that validation
    reports them as missing.
    """
    try:
        data = json.loads(body or "")
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    score = data.get("score")
    if isinstance(score, bool) or not isinstance(score, int):
        score = 0
    user_id = data.get("userId")
    message_id = data.get("messageId")
    return ScoreSubmission(
        user_id=user_id if isinstance(user_id, str) else "",
        score=score,
        message_id=message_id if isinstance(message_id, str) else "",
    )


class ScoreUpdater:
    def __init__(self, client: ScoreClient) -> None:
        self._client = client

    def _json_response(self, status_code: int, payload: dict[str, Any]) -> Response:
        return Response(status_code, json.dumps(payload), dict(CORS_HEADERS))

    def _error(self, status_code: int, message: str) -> Response:
        return self._json_response(status_code, {"success": False, "error": message})

    def handle(self, event: Mapping[str, Any]) -> Response:
        method = request_method(event)
        body = event.get("body")
        _LOGGER.info("Received score request", extra={"method": method, "body_length": len(body or "")})

        if method == "OPTIONS":
            return Response(200, "", dict(CORS_HEADERS))

        submission = parse_score_submission(body)
        if submission is None:
            _LOGGER.warning("Could not decode score request body")
            return self._error(400, "Invalid request body")

        if not submission.user_id or not submission.score or not submission.message_id:
            _LOGGER.warning(
                "Score request is missing fields",
                extra={"user_id": submission.user_id, "score": submission.score, "message_id": submission.message_id},
            )
            return self._error(400, "Missing required fields")

        try:
            self._client.set_game_score(
                user_id=submission.user_id,
                score=submission.score,
                inline_message_id=submission.message_id,
            )
        except TelegramAPIError as exc:
            _LOGGER.exception("setGameScore failed", extra={"user_id": submission.user_id})
            return self._error(500, f"Failed to update score: {exc.message}")
        except requests.RequestException as exc:
            _LOGGER.exception("setGameScore request failed", extra={"user_id": submission.user_id})
            return self._error(500, f"Failed to update score: {exc}")

        _LOGGER.info("Updated score", extra={"user_id": submission.user_id, "score": submission.score})
        return self._json_response(200, {"success": True})
