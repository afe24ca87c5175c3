"""
Environment selection for the remote almanac.

A single PANCHANGAM_ENV toggle picks the backend, its request timeout and
whether development conveniences (bundled API key, debug logging) apply.
"""

import os

from enum import Enum


class AppEnvironment(Enum):
    """Deployment environments of the almanac backend"""

    DEVELOPMENT = ("development", "http://localhost:8080", 30.0, True)
    STAGING = ("staging", "https://staging.api.magizh.me", 15.0, False)
    PRODUCTION = ("production", "https://api.magizh.me", 15.0, False)

    def __init__(self, key: str, base_url: str, timeout: float, debug: bool):
        self.key = key
        self.base_url = base_url
        self.timeout = timeout
        self.debug = debug

    @property
    def allows_dev_credentials(self) -> bool:
        return self is AppEnvironment.DEVELOPMENT

    @classmethod
    def parse(cls, value: str | None) -> "AppEnvironment":
        """Parse an environment name; unknown values default to development."""
        if value:
            value = value.strip().lower()
            aliases = {"dev": "development", "local": "development", "prod": "production"}
            value = aliases.get(value, value)
            for env in cls:
                if env.key == value:
                    return env
        return cls.DEVELOPMENT


def get_environment() -> AppEnvironment:
    """Get current environment from PANCHANGAM_ENV variable."""
    return AppEnvironment.parse(os.getenv("PANCHANGAM_ENV", "development"))
