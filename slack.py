"""
Slack utilities: request signature verification and slash command parsing.

See: https://api.slack.com/authentication/verifying-requests-from-slack
"""

import hashlib
import hmac
import time
from dataclasses import dataclass, fields
from typing import Optional
from urllib.parse import parse_qs

from errors import PayloadMalformed, SignatureInvalid

SIGNATURE_VERSION = "v0"
# Slack rejects requests older than five minutes; so do we.
MAX_TIMESTAMP_SKEW = 60 * 5
FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass
class SlashCommand:
    """Form fields Slack posts for a slash command invocation."""

    command: str
    text: str = ""
    user_id: str = ""
    user_name: str = ""
    channel_id: str = ""
    channel_name: str = ""
    team_id: str = ""
    team_domain: str = ""
    response_url: str = ""
    trigger_id: str = ""
    token: str = ""


def compute_signature(signing_secret: str, timestamp: str, body: bytes) -> str:
    """Return the `v0=<hex>` signature Slack would send for this body."""
    basestring = f"{SIGNATURE_VERSION}:{timestamp}:".encode("utf-8") + body
    digest = hmac.new(signing_secret.encode("utf-8"), basestring, hashlib.sha256).hexdigest()
    return f"{SIGNATURE_VERSION}={digest}"


def verify_slack_request(
    body: bytes,
    timestamp: str,
    signature: str,
    signing_secret: str,
    now: Optional[float] = None,
) -> None:
    """
    Verify that a request came from Slack using the signing secret.
    Raises SignatureInvalid on any problem; the body is only read, never consumed.
    """
    if not signing_secret:
        raise SignatureInvalid("signing secret is not configured")
    if not timestamp or not signature:
        raise SignatureInvalid("missing timestamp or signature header")
    try:
        ts = int(timestamp)
    except ValueError:
        raise SignatureInvalid(f"malformed timestamp {timestamp!r}")

    now = time.time() if now is None else now
    if abs(now - ts) > MAX_TIMESTAMP_SKEW:
        raise SignatureInvalid("timestamp outside the allowed window")

    computed = compute_signature(signing_secret, timestamp, body)
    if not hmac.compare_digest(computed.encode("utf-8"), signature.encode("utf-8")):
        raise SignatureInvalid("signature mismatch")


def parse_slash_command(body: bytes, content_type: str = FORM_CONTENT_TYPE) -> SlashCommand:
    """Decode a form-urlencoded slash command body. Raises PayloadMalformed."""
    mimetype = content_type.split(";", 1)[0].strip().lower()
    if mimetype != FORM_CONTENT_TYPE:
        raise PayloadMalformed(f"unexpected content type {content_type!r}")

    try:
        params = parse_qs(
            body.decode("utf-8"),
            keep_blank_values=True,
            errors="strict",
        )
    except ValueError as e:
        raise PayloadMalformed(f"invalid form encoding: {e}")

    if not params.get("command", [""])[0]:
        raise PayloadMalformed("missing command field")

    known = {f.name for f in fields(SlashCommand)}
    return SlashCommand(**{k: v[0] for k, v in params.items() if k in known})
