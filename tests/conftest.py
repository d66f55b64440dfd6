import time
from urllib.parse import urlencode

import pytest

from config import Settings
from slack import compute_signature

SECRET = "8f742231b10e8888abcd99yyyzzz85a5"


@pytest.fixture
def settings():
    return Settings(
        signing_secret=SECRET,
        demo_bearer_token="demo-secret",
        staging_bearer_token="staging-secret",
        demo_url="https://demo.example/new-key-claim",
        staging_url="https://staging.example/new-key-claim",
        timeout=5.0,
    )


def form_body(text, **extra):
    fields = {"command": "/otk", "text": text, "user_id": "U123", "user_name": "alice"}
    fields.update(extra)
    return urlencode(fields).encode("utf-8")


def signed_headers(body, secret=SECRET, timestamp=None):
    ts = str(int(time.time()) if timestamp is None else timestamp)
    return {
        "X-Slack-Request-Timestamp": ts,
        "X-Slack-Signature": compute_signature(secret, ts, body),
        "Content-Type": "application/x-www-form-urlencoded",
    }
