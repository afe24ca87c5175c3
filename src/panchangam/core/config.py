"""
Application configuration

Values are read from the process environment once per call to the
``*.from_env()`` constructors; tests build the dataclasses directly.
"""

import os

from dataclasses import dataclass

from .environment import AppEnvironment, get_environment

# API paths
DAILY_PATH = "/api/panchangam/daily"
WEEKLY_PATH = "/api/panchangam/weekly"
HEALTH_PATH = "/api/panchangam/health"

CLIENT_TYPE = "python"

# Orchestrator timing defaults (milliseconds)
DEFAULT_DATE_DEBOUNCE_MS = 300
DEFAULT_FALLBACK_DELAY_MS = 200

# Subscriber queue depth for state snapshots
DEFAULT_QUEUE_SIZE = 64


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class APIConfig:
    """Remote almanac endpoint configuration."""

    environment: AppEnvironment
    base_url: str
    timeout_seconds: float
    connect_timeout_seconds: float = 5.0
    client_type: str = CLIENT_TYPE

    def __post_init__(self) -> None:
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be positive")

    @classmethod
    def for_environment(cls, environment: AppEnvironment) -> "APIConfig":
        return cls(
            environment=environment,
            base_url=environment.base_url,
            timeout_seconds=environment.timeout,
        )

    @classmethod
    def from_env(cls) -> "APIConfig":
        env = get_environment()
        return cls(
            environment=env,
            base_url=os.getenv("PANCHANGAM_API_BASE_URL", env.base_url).rstrip("/"),
            timeout_seconds=_env_float("PANCHANGAM_API_TIMEOUT", env.timeout),
        )


@dataclass(frozen=True)
class ServiceConfig:
    """Fetch orchestrator timing and fallback policy."""

    date_debounce_seconds: float = DEFAULT_DATE_DEBOUNCE_MS / 1000
    fallback_delay_seconds: float = DEFAULT_FALLBACK_DELAY_MS / 1000
    fallback_enabled: bool = True
    total_timeout_seconds: float | None = None
    queue_size: int = DEFAULT_QUEUE_SIZE

    @classmethod
    def from_env(cls) -> "ServiceConfig":
        return cls(
            date_debounce_seconds=_env_float(
                "PANCHANGAM_DATE_DEBOUNCE_MS", DEFAULT_DATE_DEBOUNCE_MS
            )
            / 1000,
            fallback_delay_seconds=_env_float(
                "PANCHANGAM_FALLBACK_DELAY_MS", DEFAULT_FALLBACK_DELAY_MS
            )
            / 1000,
            fallback_enabled=_env_bool("PANCHANGAM_FALLBACK_ENABLED", True),
            total_timeout_seconds=_env_float("PANCHANGAM_TOTAL_TIMEOUT", None),
        )
