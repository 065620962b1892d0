import json

import requests

from bot_api.client import TelegramAPIError
from orchestration.scores import CORS_HEADERS, ScoreUpdater, parse_score_submission


class FakeScoreClient:
    def __init__(self, error: Exception | None = None) -> None:
        self.calls: list[dict] = []
        self._error = error

    def set_game_score(self, *, user_id, score, inline_message_id) -> None:
        self.calls.append({"user_id": user_id, "score": score, "inline_message_id": inline_message_id})
        if self._error is not None:
            raise self._error


def post_event(payload) -> dict:
    body = payload if isinstance(payload, str) else json.dumps(payload)
    return {"requestContext": {"http": {"method": "POST"}}, "body": body}


def test_preflight_returns_cors_headers() -> None:
    client = FakeScoreClient()
    response = ScoreUpdater(client).handle({"requestContext": {"http": {"method": "OPTIONS"}}})
    assert response.status_code == 200
    assert response.body == ""
    assert response.headers == CORS_HEADERS
    assert client.calls == []


def test_score_is_forwarded() -> None:
    client = FakeScoreClient()
    response = ScoreUpdater(client).handle(post_event({"userId": "7", "score": 120, "messageId": "m1"}))
    assert response.status_code == 200
    assert json.loads(response.body) == {"success": True}
    assert response.headers["Access-Control-Allow-Origin"] == "*"
    assert client.calls == [{"user_id": "7", "score": 120, "inline_message_id": "m1"}]


def test_invalid_json_is_rejected() -> None:
    client = FakeScoreClient()
    response = ScoreUpdater(client).handle(post_event("{oops"))
    assert response.status_code == 400
    assert json.loads(response.body) == {"success": False, "error": "Invalid request body"}
    assert client.calls == []


def test_missing_fields_are_rejected() -> None:
    client = FakeScoreClient()
    response = ScoreUpdater(client).handle(post_event({"userId": "7", "score": 0, "messageId": "m1"}))
    assert response.status_code == 400
    assert json.loads(response.body)["error"] == "Missing required fields"
    assert client.calls == []


def test_rest_api_event_method_is_recognized() -> None:
    response = ScoreUpdater(FakeScoreClient()).handle({"httpMethod": "options"})
    assert response.status_code == 200
    assert response.body == ""


def test_telegram_failure_is_reported() -> None:
    client = FakeScoreClient(error=TelegramAPIError(status_code=400, message="Bad Request: BOT_SCORE_NOT_MODIFIED"))
    response = ScoreUpdater(client).handle(post_event({"userId": "7", "score": 5, "messageId": "m1"}))
    assert response.status_code == 500
    assert json.loads(response.body) == {
        "success": False,
        "error": "Failed to update score: Bad Request: BOT_SCORE_NOT_MODIFIED",
    }


def test_network_failure_is_reported() -> None:
    client = FakeScoreClient(error=requests.Timeout("timed out"))
    response = ScoreUpdater(client).handle(post_event({"userId": "7", "score": 5, "messageId": "m1"}))
    assert response.status_code == 500
    assert json.loads(response.body)["error"].startswith("Failed to update score:")


def test_parse_score_submission_blanks_wrong_types() -> None:
    submission = parse_score_submission(json.dumps({"userId": 7, "score": "12", "messageId": "m1"}))
    assert submission is not None
    assert submission.user_id == ""
    assert submission.score == 0
    assert submission.message_id == "m1"


def test_parse_score_submission_requires_object() -> None:
    assert parse_score_submission("[1]") is None
    assert parse_score_submission(None) is None
