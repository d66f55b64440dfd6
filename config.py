"""
Settings for the otk-please service, read once at process start.
"""

import logging
import os
from dataclasses import dataclass

from errors import ConfigError

DEMO_CLAIM_URL = "https://submission.covid-alert-demo.cdssandbox.xyz/new-key-claim"
STAGING_CLAIM_URL = "https://submission.wild-samphire.cdssandbox.xyz/new-key-claim"
DEFAULT_TIMEOUT = 10.0

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


@dataclass(frozen=True)
class Settings:
    """Secrets and endpoints. Immutable; passed into the handler explicitly."""

    signing_secret: str = ""
    demo_bearer_token: str = ""
    staging_bearer_token: str = ""
    demo_url: str = DEMO_CLAIM_URL
    staging_url: str = STAGING_CLAIM_URL
    timeout: float = DEFAULT_TIMEOUT
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        """Build settings from environment variables (DEMO/STAGING accepted as legacy names)."""
        env = os.environ if environ is None else environ
        raw_timeout = env.get("TOKEN_REQUEST_TIMEOUT", "")
        try:
            timeout = float(raw_timeout) if raw_timeout else DEFAULT_TIMEOUT
        except ValueError:
            raise ConfigError(f"TOKEN_REQUEST_TIMEOUT must be a number, got {raw_timeout!r}")
        if timeout <= 0:
            raise ConfigError("TOKEN_REQUEST_TIMEOUT must be positive")

        return cls(
            signing_secret=env.get("SLACK_SIGNING_SECRET", ""),
            demo_bearer_token=env.get("DEMO_BEARER_TOKEN") or env.get("DEMO", ""),
            staging_bearer_token=env.get("STAGING_BEARER_TOKEN") or env.get("STAGING", ""),
            demo_url=env.get("DEMO_CLAIM_URL") or DEMO_CLAIM_URL,
            staging_url=env.get("STAGING_CLAIM_URL") or STAGING_CLAIM_URL,
            timeout=timeout,
            log_level=env.get("LOG_LEVEL", "INFO").upper(),
        )

    def missing(self) -> list[str]:
        required = {
            "SLACK_SIGNING_SECRET": self.signing_secret,
            "DEMO_BEARER_TOKEN": self.demo_bearer_token,
            "STAGING_BEARER_TOKEN": self.staging_bearer_token,
        }
        return [key for key, value in required.items() if not value]

    def validate(self) -> None:
        """Raise ConfigError if any required secret is empty."""
        missing = self.missing()
        if missing:
            raise ConfigError(f"Missing required environment variables: {', '.join(missing)}")


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
