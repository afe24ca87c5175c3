import asyncio
import os

from datetime import date

import pytest


# Keep tests on the development environment and off the network
os.environ.setdefault("PANCHANGAM_ENV", "development")
os.environ.setdefault("PANCHANGAM_API_BASE_URL", "http://almanac.test")


def make_payload(day: str = "2024-01-21", offset: str = "+05:30") -> dict:
    """A well-formed daily response as the backend sends it."""

    def at(hhmm: str) -> str:
        return f"{day}T{hhmm}:00{offset}"

    return {
        "date": day,
        "tamilDate": {"month": "Thai", "day": 7, "year": "Shobhakrut", "weekday": "Nyayiru"},
        "nakshatram": {"name": "Revathi", "endTime": at("14:45"), "lord": "Mercury"},
        "thithi": {"name": "Ekadasi", "paksha": "SHUKLA", "endTime": at("19:26")},
        "yogam": {
            "name": "Brahma",
            "type": "AUSPICIOUS",
            "startTime": at("08:30"),
            "endTime": at("14:15"),
        },
        "karanam": {"name": "Vanija", "endTime": at("07:12")},
        "timings": {
            "sunrise": at("06:38"),
            "sunset": at("18:12"),
            "nallaNeram": [
                {"startTime": at("07:30"), "endTime": at("08:30"), "type": "NALLA_NERAM"},
                {"startTime": at("15:30"), "endTime": at("16:30"), "type": "NALLA_NERAM"},
            ],
            "rahukaalam": {"startTime": at("16:30"), "endTime": at("18:00"), "type": "RAHUKAALAM"},
            "yamagandam": {"startTime": at("12:00"), "endTime": at("13:30"), "type": "YAMAGANDAM"},
            "kuligai": {"startTime": at("15:00"), "endTime": at("16:30"), "type": "KULIGAI"},
            "gowriNallaNeram": [
                {"startTime": at("06:38"), "endTime": at("08:05"), "type": "GOWRI"},
                {"startTime": at("10:58"), "endTime": at("12:25"), "type": "GOWRI"},
            ],
        },
        "foodStatus": {
            "type": "FASTING",
            "message": "Ekadasi - fasting recommended",
            "nextAuspicious": {"name": "Pradosham", "date": "2024-01-23", "daysAway": 2},
        },
    }


@pytest.fixture
def payload() -> dict:
    return make_payload()


@pytest.fixture
def chennai():
    from panchangam.models.location import CHENNAI

    return CHENNAI


@pytest.fixture
def sunday() -> date:
    return date(2024, 1, 21)


class FakeFetcher:
    """Stands in for PanchangamAPIClient in orchestrator tests.

    Serves synthesized days as "remote" data, optionally failing or
    delaying per location id.
    """

    def __init__(self, error: Exception | None = None, delays: dict | None = None, delay: float = 0.0):
        self.error = error
        self.delays = delays or {}
        self.delay = delay
        self.calls = []

    async def fetch_daily_model(self, day, location):
        from panchangam.modules.panchanga.fallback import synthesize_day

        self.calls.append((day, location))
        delay = self.delays.get(location.id, self.delay)
        if delay:
            await asyncio.sleep(delay)
        if self.error is not None:
            raise self.error
        return synthesize_day(day, location)


@pytest.fixture
def fetcher_factory():
    return FakeFetcher
