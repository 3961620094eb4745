import json

import pytest


class FakeResponse:
    def __init__(self, status_code=200, body=None, text=None, reason="", content_type=None):
        self.status_code = status_code
        self.reason = reason
        if text is None:
            text = json.dumps(body) if body is not None else ""
            content_type = content_type or "application/json"
        self.text = text
        self.content = text.encode("utf-8")
        self.headers = {"content-type": content_type or "text/plain"}

    @property
    def ok(self):
        return self.status_code < 400

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Replays queued responses (or raises queued exceptions) and records calls."""

    def __init__(self, *outcomes):
        self.outcomes = list(outcomes)
        self.calls = []

    def request(self, method, url, json=None, timeout=None):
        self.calls.append({"method": method, "url": url, "json": json, "timeout": timeout})
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeClient:
    """Stands in for ApiClient: routes (method, path) to canned payloads."""

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.calls = []

    def _respond(self, method, path, data=None):
        self.calls.append((method, path, data))
        result = self.routes[(method, path)]
        if isinstance(result, Exception):
            raise result
        if callable(result):
            return result(data)
        return result

    def get(self, path, allow_unauthorized=False):
        return self._respond("GET", path)

    def post(self, path, data=None):
        return self._respond("POST", path, data)

    def patch(self, path, data=None):
        return self._respond("PATCH", path, data)

    def delete(self, path):
        return self._respond("DELETE", path)


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession


@pytest.fixture
def fake_client():
    return FakeClient


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("TOVABLY_API_URL", "TOVABLY_REQUEST_TIMEOUT", "TOVABLY_REQUEST_RETRIES", "TOVABLY_SESSION_COOKIE"):
        monkeypatch.delenv(name, raising=False)
