"""
Tovably API Client
Thin requests wrapper around the Tovably REST API with timeouts, retry with
exponential backoff for connection failures, and user-friendly error messages.
"""

import time

import requests

from tovably import config
from tovably.errors import ApiError

TIMEOUT_MESSAGE = "Request timed out. Please try again."
NETWORK_ERROR_MESSAGE = "Network connection error. Please check your internet connection."
DATABASE_ERROR_MESSAGE = "Database connection error. Please try again in a moment."

# Markers in a plain-text error body that mean the backend lost its database
DATABASE_ERROR_MARKERS = ("ECONNREFUSED", "database connection", "Cannot use a pool")

# Errors worth retrying
RETRYABLE_MARKERS = ("database connection", "network connection", "connection refused", "econnrefused")


def extract_error_message(response):
    """
    Pull a readable message out of a failed response.

    Order: JSON `message`, JSON `error`, text body (database outages get a
    friendlier message), reason phrase, then the bare status code.
    """
    content_type = response.headers.get("content-type", "")
    if "application/json" in content_type:
        try:
            data = response.json()
        except ValueError:
            data = None
        if isinstance(data, dict):
            if data.get("message"):
                return str(data["message"])
            if data.get("error"):
                return data["error"] if isinstance(data["error"], str) else "Server error occurred"

    text = response.text or ""
    if any(marker in text for marker in DATABASE_ERROR_MARKERS):
        return DATABASE_ERROR_MESSAGE

    return text or response.reason or f"Error {response.status_code}"


def is_retryable(error):
    message = (error.message or "").lower()
    return any(marker in message for marker in RETRYABLE_MARKERS)


def _decode_body(response):
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class ApiClient:
    """
    Client for the Tovably API.

    Unspecified settings come from tovably.config, i.e. the environment.
    `sleep` is injectable so retry backoff can be skipped in tests.
    """

    def __init__(self, base_url=None, timeout=None, retries=None, session=None, sleep=time.sleep):
        self.base_url = (base_url or config.get_api_base_url()).rstrip("/")
        self.timeout = timeout if timeout is not None else config.get_request_timeout()
        self.retries = retries if retries is not None else config.get_request_retries()
        self.session = session or requests.Session()
        self.sleep = sleep

        cookie = config.get_session_cookie()
        if cookie and session is None:
            self.session.cookies.set("connect.sid", cookie)

    def url_for(self, path):
        if path.startswith(("http://", "https://")):
            return path
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(self, method, path, data=None, allow_unauthorized=False):
        """
        Send a request and return the decoded JSON body (None when empty).

        Raises:
            ApiError: on HTTP errors, timeouts and connection failures
        """
        url = self.url_for(path)
        attempt = 0

        while True:
            try:
                response = self.session.request(
                    method,
                    url,
                    json=data,
                    timeout=self.timeout,
                )
            except requests.exceptions.Timeout:
                # Timed-out requests are never retried
                raise ApiError(TIMEOUT_MESSAGE)
            except requests.exceptions.ConnectionError as e:
                print(f"Connection error on {method} {url}: {e}")
                error = ApiError(NETWORK_ERROR_MESSAGE)
            else:
                if allow_unauthorized and response.status_code == 401:
                    return None
                if response.ok:
                    return _decode_body(response)
                error = ApiError(extract_error_message(response), status_code=response.status_code)

            if attempt >= self.retries or not is_retryable(error):
                raise error

            delay = 2 ** attempt
            print(f"{method} {url} failed ({error.message}). Retrying in {delay}s...")
            self.sleep(delay)
            attempt += 1

    def get(self, path, allow_unauthorized=False):
        return self.request("GET", path, allow_unauthorized=allow_unauthorized)

    def post(self, path, data=None):
        return self.request("POST", path, data=data)

    def patch(self, path, data=None):
        return self.request("PATCH", path, data=data)

    def delete(self, path):
        return self.request("DELETE", path)
