"""
Errors raised by the slash command pipeline.

Each request-scoped error maps to one HTTP status in handler.handle_request.
"""


class OtkError(Exception):
    """Base class for otk-please errors."""


class SignatureInvalid(OtkError):
    """Request did not come from Slack (bad, stale or missing signature)."""


class PayloadMalformed(OtkError):
    """Slash command body could not be decoded."""


class UpstreamUnavailable(OtkError):
    """Token claim endpoint failed, timed out, or returned a non-2xx status."""


class ConfigError(OtkError):
    """Required configuration is missing or invalid."""
