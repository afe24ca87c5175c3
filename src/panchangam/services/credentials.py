"""
API key resolution for the remote almanac.

Development tolerates a missing key by sending the bundled development
key; staging and production refuse to send requests without one.
"""

import logging
import os

from typing import Protocol

from ..core.environment import AppEnvironment
from .errors import MissingCredentialError

logger = logging.getLogger(__name__)

DEV_API_KEY = "dev-key-for-local-testing"


class CredentialProvider(Protocol):
    def api_key(self) -> str | None: ...


class EnvCredentialProvider:
    """Reads the key from PANCHANGAM_API_KEY."""

    def __init__(self, variable: str = "PANCHANGAM_API_KEY"):
        self.variable = variable

    def api_key(self) -> str | None:
        return os.getenv(self.variable) or None


class StaticCredentialProvider:
    def __init__(self, key: str | None):
        self._key = key

    def api_key(self) -> str | None:
        return self._key


def resolve_api_key(provider: CredentialProvider, environment: AppEnvironment) -> str:
    """Return the key to send, or raise MissingCredentialError."""
    key = provider.api_key()
    if key:
        return key
    if environment.allows_dev_credentials:
        logger.warning(
            "No API key configured; using the development key. "
            "Set PANCHANGAM_API_KEY before deploying."
        )
        return DEV_API_KEY
    raise MissingCredentialError(f"API key required in {environment.key} environment")
