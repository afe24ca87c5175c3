"""
Async HTTP client for the remote almanac.

Wraps httpx.AsyncClient and translates every transport, status and
decode failure into the PanchangamAPIError taxonomy.
"""

from __future__ import annotations

import asyncio

from datetime import date
from typing import Any

import httpx

from pydantic import ValidationError

from ..core.config import DAILY_PATH, HEALTH_PATH, WEEKLY_PATH, APIConfig
from ..core.logging import get_service_logger
from ..models.day import PanchangamDay
from ..models.location import Location
from .credentials import CredentialProvider, EnvCredentialProvider, resolve_api_key
from .errors import (
    DecodeError,
    HTTPStatusError,
    MalformedRequestError,
    MappingError,
    NetworkUnreachableError,
    RateLimitedError,
    ServerUnavailableError,
    TimedOutError,
    UnauthorizedError,
)
from .mapper import map_response
from .metrics import track_latency
from .schemas import PanchangamQuery, PanchangamResponse

logger = get_service_logger("client")


def _retry_after(response: httpx.Response) -> float | None:
    value = response.headers.get("Retry-After")
    if value is None:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def raise_for_status(response: httpx.Response) -> None:
    """Raise the taxonomy error matching a non-2xx response."""
    status = response.status_code
    if 200 <= status < 300:
        return
    if status in (401, 403):
        raise UnauthorizedError(f"HTTP {status} from {response.request.url.path}")
    if status == 429:
        raise RateLimitedError(retry_after=_retry_after(response))
    if status in (502, 503, 504):
        raise ServerUnavailableError(f"HTTP {status} from {response.request.url.path}")
    raise HTTPStatusError(status)


class PanchangamAPIClient:
    """Client for the daily, weekly and health endpoints.

    Pass ``transport`` (e.g. ``httpx.MockTransport``) to run without a
    network. Use as an async context manager or call ``aclose()``.
    """

    def __init__(
        self,
        config: APIConfig | None = None,
        *,
        credentials: CredentialProvider | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.config = config or APIConfig.from_env()
        self.credentials = credentials or EnvCredentialProvider()
        self._owns_client = http_client is None
        self._http = http_client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=httpx.Timeout(
                self.config.timeout_seconds, connect=self.config.connect_timeout_seconds
            ),
            transport=transport,
        )

    async def __aenter__(self) -> PanchangamAPIClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    # -------------------- Public API --------------------------

    async def fetch_daily(self, day: date, location: Location) -> PanchangamResponse:
        query = self._query(day, location)
        body = await self._get_json(DAILY_PATH, query.to_params())
        try:
            return PanchangamResponse.model_validate(body)
        except ValidationError as e:
            raise DecodeError(f"Daily response does not match schema: {e.error_count()} errors") from e

    async def fetch_daily_model(self, day: date, location: Location) -> PanchangamDay:
        return map_response(await self.fetch_daily(day, location), location)

    async def fetch_weekly(self, start: date, location: Location) -> list[PanchangamResponse]:
        """Fetch seven days from ``start``; days failing validation are skipped."""
        query = self._query(start, location)
        body = await self._get_json(WEEKLY_PATH, query.to_params(weekly=True))
        if not isinstance(body, list):
            raise DecodeError("Weekly response is not a list")
        days = []
        for index, item in enumerate(body):
            try:
                days.append(PanchangamResponse.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Skipping weekly entry {index}: {e.error_count()} schema errors")
        return days

    async def fetch_weekly_models(self, start: date, location: Location) -> list[PanchangamDay]:
        models = []
        for response in await self.fetch_weekly(start, location):
            try:
                models.append(map_response(response, location))
            except MappingError as e:
                logger.warning(f"Skipping weekly day {response.date}: {e}")
        return models

    async def check_health(self) -> bool:
        """True when the health endpoint answers 200; never raises."""
        try:
            response = await asyncio.wait_for(
                self._http.get(HEALTH_PATH, headers={"X-Client-Type": self.config.client_type}),
                timeout=self.config.timeout_seconds,
            )
        except (httpx.HTTPError, httpx.InvalidURL, TimeoutError) as e:
            logger.warning(f"Health check failed: {type(e).__name__}: {e}")
            return False
        return response.status_code == 200

    # -------------------- Internals ---------------------------

    def _query(self, day: date, location: Location) -> PanchangamQuery:
        try:
            return PanchangamQuery.for_location(day, location)
        except ValidationError as e:
            raise MalformedRequestError(str(e)) from e

    def _headers(self) -> dict[str, str]:
        return {
            "X-API-Key": resolve_api_key(self.credentials, self.config.environment),
            "X-Client-Type": self.config.client_type,
            "Accept": "application/json",
        }

    async def _get_json(self, path: str, params: dict[str, str]) -> Any:
        headers = self._headers()
        with track_latency(path):
            try:
                response = await asyncio.wait_for(
                    self._http.get(path, params=params, headers=headers),
                    timeout=self.config.timeout_seconds,
                )
            except (httpx.TimeoutException, TimeoutError) as e:
                raise TimedOutError(f"GET {path} timed out") from e
            except (httpx.UnsupportedProtocol, httpx.InvalidURL) as e:
                raise MalformedRequestError(f"GET {path}: {e}") from e
            except httpx.HTTPError as e:
                raise NetworkUnreachableError(f"GET {path}: {type(e).__name__}: {e}") from e

        raise_for_status(response)
        try:
            return response.json()
        except ValueError as e:
            raise DecodeError(f"GET {path} returned invalid JSON") from e
