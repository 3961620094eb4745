"""
Configuration
Settings come from the environment (app.py loads .env via python-dotenv first).
Values are read at call time.
"""

import os

DEFAULT_API_URL = "http://localhost:5000"
DEFAULT_TIMEOUT = 15
DEFAULT_RETRIES = 0


def _int_setting(name, default):
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        print(f"Invalid value for {name}: {value!r}. Using default {default}.")
        return default


def get_api_base_url():
    """Base URL of the Tovably API, without a trailing slash."""
    url = os.getenv("TOVABLY_API_URL") or DEFAULT_API_URL
    return url.strip().rstrip("/")


def get_request_timeout():
    return _int_setting("TOVABLY_REQUEST_TIMEOUT", DEFAULT_TIMEOUT)


def get_request_retries():
    return max(0, _int_setting("TOVABLY_REQUEST_RETRIES", DEFAULT_RETRIES))


def get_session_cookie():
    """Existing session cookie (connect.sid) to forward, if any."""
    return os.getenv("TOVABLY_SESSION_COOKIE") or None
