import asyncio

from datetime import date

import httpx
import pytest

from conftest import make_payload

from panchangam.core.config import DAILY_PATH, HEALTH_PATH, WEEKLY_PATH, APIConfig
from panchangam.core.environment import AppEnvironment
from panchangam.models.location import CHENNAI
from panchangam.services.client import PanchangamAPIClient
from panchangam.services.credentials import DEV_API_KEY, StaticCredentialProvider
from panchangam.services.errors import (
    DecodeError,
    HTTPStatusError,
    MissingCredentialError,
    NetworkUnreachableError,
    RateLimitedError,
    ServerUnavailableError,
    TimedOutError,
    UnauthorizedError,
)

SUNDAY = date(2024, 1, 21)


def make_client(handler, *, key="test-key", environment=AppEnvironment.DEVELOPMENT, timeout=5.0):
    config = APIConfig(environment=environment, base_url="http://almanac.test", timeout_seconds=timeout)
    return PanchangamAPIClient(
        config,
        credentials=StaticCredentialProvider(key),
        transport=httpx.MockTransport(handler),
    )


@pytest.mark.asyncio
async def test_fetch_daily_sends_query_and_headers():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=make_payload())

    async with make_client(handler) as client:
        day = await client.fetch_daily_model(SUNDAY, CHENNAI)

    assert day.date == SUNDAY
    request = seen[0]
    assert request.url.path == DAILY_PATH
    assert request.url.params["date"] == "2024-01-21"
    assert request.url.params["lat"] == str(CHENNAI.latitude)
    assert request.url.params["lng"] == str(CHENNAI.longitude)
    assert request.url.params["timezone"] == "Asia/Kolkata"
    assert request.headers["X-API-Key"] == "test-key"
    assert request.headers["X-Client-Type"] == "python"


@pytest.mark.asyncio
async def test_development_uses_bundled_key_when_missing():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=make_payload())

    async with make_client(handler, key=None) as client:
        await client.fetch_daily(SUNDAY, CHENNAI)
    assert seen[0].headers["X-API-Key"] == DEV_API_KEY


@pytest.mark.asyncio
async def test_production_without_key_never_sends():
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=make_payload())

    async with make_client(handler, key=None, environment=AppEnvironment.PRODUCTION) as client:
        with pytest.raises(MissingCredentialError):
            await client.fetch_daily(SUNDAY, CHENNAI)
    assert seen == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status,error",
    [
        (401, UnauthorizedError),
        (403, UnauthorizedError),
        (429, RateLimitedError),
        (502, ServerUnavailableError),
        (503, ServerUnavailableError),
        (504, ServerUnavailableError),
        (500, HTTPStatusError),
        (404, HTTPStatusError),
    ],
)
async def test_status_codes_map_to_errors(status, error):
    async with make_client(lambda request: httpx.Response(status, text="nope")) as client:
        with pytest.raises(error):
            await client.fetch_daily(SUNDAY, CHENNAI)


@pytest.mark.asyncio
async def test_rate_limit_carries_retry_after_and_status_error_its_code():
    async with make_client(lambda r: httpx.Response(429, headers={"Retry-After": "30"})) as client:
        with pytest.raises(RateLimitedError) as exc_info:
            await client.fetch_daily(SUNDAY, CHENNAI)
    assert exc_info.value.retry_after == 30.0

    async with make_client(lambda r: httpx.Response(500)) as client:
        with pytest.raises(HTTPStatusError) as exc_info:
            await client.fetch_daily(SUNDAY, CHENNAI)
    assert exc_info.value.status_code == 500
    assert exc_info.value.user_message == "Server error (500)"


@pytest.mark.asyncio
async def test_transport_timeout_is_timed_out():
    def handler(request):
        raise httpx.ReadTimeout("read timed out", request=request)

    async with make_client(handler) as client:
        with pytest.raises(TimedOutError) as exc_info:
            await client.fetch_daily(SUNDAY, CHENNAI)
    assert exc_info.value.code == "timed_out"


@pytest.mark.asyncio
async def test_slow_response_exceeding_budget_is_timed_out():
    async def handler(request):
        await asyncio.sleep(1.0)
        return httpx.Response(200, json=make_payload())

    async with make_client(handler, timeout=0.05) as client:
        with pytest.raises(TimedOutError):
            await client.fetch_daily(SUNDAY, CHENNAI)


@pytest.mark.asyncio
async def test_connect_error_is_network_unreachable():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async with make_client(handler) as client:
        with pytest.raises(NetworkUnreachableError):
            await client.fetch_daily(SUNDAY, CHENNAI)


@pytest.mark.asyncio
async def test_invalid_json_and_schema_are_decode_errors():
    async with make_client(lambda r: httpx.Response(200, text="<html>")) as client:
        with pytest.raises(DecodeError):
            await client.fetch_daily(SUNDAY, CHENNAI)

    async with make_client(lambda r: httpx.Response(200, json={"date": "2024-01-21"})) as client:
        with pytest.raises(DecodeError):
            await client.fetch_daily(SUNDAY, CHENNAI)


@pytest.mark.asyncio
async def test_weekly_skips_invalid_days():
    days = [make_payload(f"2024-01-{d}") for d in range(21, 28)]
    days[2] = {"date": "2024-01-23"}
    days[4]["timings"]["rahukaalam"]["startTime"] = "garbage"
    seen = []

    def handler(request):
        seen.append(request)
        return httpx.Response(200, json=days)

    async with make_client(handler) as client:
        responses = await client.fetch_weekly(SUNDAY, CHENNAI)
        models = await client.fetch_weekly_models(SUNDAY, CHENNAI)

    assert seen[0].url.path == WEEKLY_PATH
    assert seen[0].url.params["startDate"] == "2024-01-21"
    assert len(responses) == 6
    assert [m.date.day for m in models] == [21, 22, 24, 26, 27]


@pytest.mark.asyncio
async def test_weekly_requires_a_list():
    async with make_client(lambda r: httpx.Response(200, json=make_payload())) as client:
        with pytest.raises(DecodeError):
            await client.fetch_weekly(SUNDAY, CHENNAI)


@pytest.mark.asyncio
async def test_health_check():
    seen = []

    def healthy(request):
        seen.append(request)
        return httpx.Response(200, json={"status": "ok"})

    async with make_client(healthy) as client:
        assert await client.check_health() is True
    assert seen[0].url.path == HEALTH_PATH
    assert seen[0].headers["X-Client-Type"] == "python"
    assert "X-API-Key" not in seen[0].headers

    async with make_client(lambda r: httpx.Response(503)) as client:
        assert await client.check_health() is False

    def down(request):
        raise httpx.ConnectError("refused", request=request)

    async with make_client(down) as client:
        assert await client.check_health() is False
