"""
Token claim client for the COVID Alert submission servers.

One POST per slash command; no retries.
"""

import logging

import requests

from errors import UpstreamUnavailable

logger = logging.getLogger(__name__)


def trim_newline(text: str) -> str:
    """Drop exactly one trailing newline, if present."""
    return text[:-1] if text.endswith("\n") else text


def fetch_token(bearer_token: str, url: str, timeout: float) -> str:
    """POST to the claim endpoint with an empty body and return the token text."""
    try:
        r = requests.post(url, headers={"Authorization": f"Bearer {bearer_token}"}, timeout=timeout)
        r.raise_for_status()
        body = r.text
    except requests.Timeout as e:
        logger.warning("Token claim to %s timed out after %ss", url, timeout)
        raise UpstreamUnavailable(f"timed out: {e}")
    except requests.RequestException as e:
        logger.warning("Token claim to %s failed: %s", url, e)
        raise UpstreamUnavailable(str(e))
    return trim_newline(body)
