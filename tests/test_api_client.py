import pytest
import requests

from tovably import config
from tovably.api_client import (
    DATABASE_ERROR_MESSAGE,
    NETWORK_ERROR_MESSAGE,
    TIMEOUT_MESSAGE,
    ApiClient,
    extract_error_message,
)
from tovably.errors import ApiError


def make_client(session, retries=0, sleeps=None):
    return ApiClient(
        base_url="http://api.test/",
        timeout=5,
        retries=retries,
        session=session,
        sleep=(sleeps.append if sleeps is not None else lambda _: None),
    )


def test_config_defaults():
    assert config.get_api_base_url() == "http://localhost:5000"
    assert config.get_request_timeout() == 15
    assert config.get_request_retries() == 0
    assert config.get_session_cookie() is None


def test_config_from_environment(monkeypatch):
    monkeypatch.setenv("TOVABLY_API_URL", "https://app.tovably.com/")
    monkeypatch.setenv("TOVABLY_REQUEST_TIMEOUT", "30")
    monkeypatch.setenv("TOVABLY_REQUEST_RETRIES", "-2")
    assert config.get_api_base_url() == "https://app.tovably.com"
    assert config.get_request_timeout() == 30
    assert config.get_request_retries() == 0


def test_invalid_int_setting_falls_back(monkeypatch, capsys):
    monkeypatch.setenv("TOVABLY_REQUEST_TIMEOUT", "soon")
    assert config.get_request_timeout() == 15
    assert "TOVABLY_REQUEST_TIMEOUT" in capsys.readouterr().out


def test_session_cookie_is_forwarded(monkeypatch):
    monkeypatch.setenv("TOVABLY_SESSION_COOKIE", "s%3Aabc")
    client = ApiClient(base_url="http://api.test")
    assert client.session.cookies.get("connect.sid") == "s%3Aabc"


def test_error_message_prefers_json_message(fake_response):
    response = fake_response(400, {"message": "Name is required", "error": "bad"})
    assert extract_error_message(response) == "Name is required"


def test_error_message_uses_json_error(fake_response):
    assert extract_error_message(fake_response(500, {"error": "Boom"})) == "Boom"
    assert extract_error_message(fake_response(500, {"error": {"code": 1}})) == "Server error occurred"


def test_error_message_database_outage(fake_response):
    response = fake_response(500, text="Error: connect ECONNREFUSED 127.0.0.1:5432")
    assert extract_error_message(response) == DATABASE_ERROR_MESSAGE


def test_error_message_text_then_reason_then_status(fake_response):
    assert extract_error_message(fake_response(502, text="Bad gateway upstream")) == "Bad gateway upstream"
    assert extract_error_message(fake_response(503, text="", reason="Service Unavailable")) == "Service Unavailable"
    assert extract_error_message(fake_response(504, text="")) == "Error 504"


def test_get_returns_decoded_json(fake_response, fake_session):
    session = fake_session(fake_response(200, [{"id": 1}]))
    client = make_client(session)
    assert client.get("/api/campaigns") == [{"id": 1}]
    assert session.calls[0]["url"] == "http://api.test/api/campaigns"
    assert session.calls[0]["timeout"] == 5


def test_empty_body_is_none(fake_response, fake_session):
    client = make_client(fake_session(fake_response(204, text="")))
    assert client.delete("/api/campaign-factory/1") is None


def test_post_sends_json(fake_response, fake_session):
    session = fake_session(fake_response(201, {"id": 7}))
    make_client(session).post("/api/tone-analysis", {"sampleText": "hi"})
    assert session.calls[0]["method"] == "POST"
    assert session.calls[0]["json"] == {"sampleText": "hi"}


def test_http_error_raises_api_error(fake_response, fake_session):
    client = make_client(fake_session(fake_response(404, {"message": "Campaign not found"})))
    with pytest.raises(ApiError) as excinfo:
        client.get("/api/campaign-factory/9")
    assert excinfo.value.message == "Campaign not found"
    assert excinfo.value.status_code == 404


def test_unauthorized_can_return_none(fake_response, fake_session):
    client = make_client(fake_session(fake_response(401, {"message": "Unauthorized"})))
    assert client.get("/api/user", allow_unauthorized=True) is None


def test_unauthorized_raises_by_default(fake_response, fake_session):
    client = make_client(fake_session(fake_response(401, {"message": "Unauthorized"})))
    with pytest.raises(ApiError):
        client.get("/api/user")


def test_timeout_is_not_retried(fake_session):
    session = fake_session(requests.exceptions.Timeout(), requests.exceptions.Timeout())
    sleeps = []
    client = make_client(session, retries=3, sleeps=sleeps)
    with pytest.raises(ApiError) as excinfo:
        client.get("/api/campaigns")
    assert excinfo.value.message == TIMEOUT_MESSAGE
    assert len(session.calls) == 1
    assert sleeps == []


def test_connection_errors_retry_with_backoff(fake_response, fake_session):
    session = fake_session(
        requests.exceptions.ConnectionError("refused"),
        requests.exceptions.ConnectionError("refused"),
        fake_response(200, {"ok": True}),
    )
    sleeps = []
    client = make_client(session, retries=2, sleeps=sleeps)
    assert client.get("/api/campaigns") == {"ok": True}
    assert sleeps == [1, 2]


def test_retries_exhausted(fake_session):
    session = fake_session(*[requests.exceptions.ConnectionError("refused")] * 3)
    client = make_client(session, retries=2)
    with pytest.raises(ApiError) as excinfo:
        client.get("/api/campaigns")
    assert excinfo.value.message == NETWORK_ERROR_MESSAGE
    assert len(session.calls) == 3


def test_database_errors_are_retried(fake_response, fake_session):
    session = fake_session(
        fake_response(500, text="database connection lost"),
        fake_response(200, []),
    )
    sleeps = []
    assert make_client(session, retries=1, sleeps=sleeps).get("/api/content") == []
    assert sleeps == [1]


def test_other_http_errors_are_not_retried(fake_response, fake_session):
    session = fake_session(fake_response(400, {"message": "Bad input"}), fake_response(200, {}))
    with pytest.raises(ApiError):
        make_client(session, retries=3).post("/api/tone-analysis", {})
    assert len(session.calls) == 1
