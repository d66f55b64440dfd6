"""
HTTP handler for the Slack slash command /otk.

Verify -> parse -> fetch -> format, returning early on the first failure.
Takes raw headers and body bytes so any hosting adapter can call it.
"""

import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from werkzeug.datastructures import Headers

from config import Settings
from errors import PayloadMalformed, SignatureInvalid, UpstreamUnavailable
from slack import parse_slash_command, verify_slack_request
from tokens import fetch_token

logger = logging.getLogger(__name__)

USAGE_TEXT = "Please enter either *demo* or *staging*"


@dataclass(frozen=True)
class Environment:
    name: str
    display_name: str
    url: str
    bearer_token: str


@dataclass
class HandlerResponse:
    status: int
    body: str = ""
    content_type: str = "text/plain; charset=utf-8"


def environments(settings: Settings) -> list[Environment]:
    """Environments in match order; demo is checked first."""
    return [
        Environment("demo", "Demo", settings.demo_url, settings.demo_bearer_token),
        Environment("staging", "Staging", settings.staging_url, settings.staging_bearer_token),
    ]


def resolve_environment(text: str, settings: Settings) -> Optional[Environment]:
    """Case-insensitive substring match; first hit wins ("demolition staging" is demo)."""
    lowered = (text or "").lower()
    for env in environments(settings):
        if env.name in lowered:
            return env
    return None


def handle_request(headers: Mapping[str, str], body: bytes, settings: Settings) -> HandlerResponse:
    """
    Handle one slash command request.
    Returns 401 on bad signature, 500 on parse/upstream failure, 200 otherwise.
    Header names are matched case-insensitively.
    """
    headers = Headers(headers)
    try:
        verify_slack_request(
            body,
            headers.get("X-Slack-Request-Timestamp", ""),
            headers.get("X-Slack-Signature", ""),
            settings.signing_secret,
        )
    except SignatureInvalid as e:
        logger.warning("Rejected request: %s", e)
        return HandlerResponse(status=401)

    try:
        command = parse_slash_command(body, headers.get("Content-Type", ""))
    except PayloadMalformed as e:
        logger.warning("Could not parse slash command: %s", e)
        return HandlerResponse(status=500)

    env = resolve_environment(command.text, settings)
    if env is None:
        return HandlerResponse(status=200, body=USAGE_TEXT)

    try:
        token = fetch_token(env.bearer_token, env.url, settings.timeout)
    except UpstreamUnavailable:
        return HandlerResponse(status=500)

    logger.info("Issued %s token for user %s", env.display_name, command.user_id or command.user_name)
    return HandlerResponse(status=200, body=f"{env.display_name} token: {token}")
