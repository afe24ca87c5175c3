"""
Base validators and enum helpers shared by the Panchangam models.
"""

import re

from datetime import date, datetime
from enum import Enum
from typing import Annotated
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic.functional_validators import AfterValidator

_NON_ALNUM = re.compile(r"[^0-9a-z]+")

# --- Validators ---


def validate_latitude(v: float) -> float:
    """Validate latitude is within valid range"""
    if not -90 <= v <= 90:
        raise ValueError(f"Latitude must be between -90 and 90, got {v}")
    return v


def validate_longitude(v: float) -> float:
    """Validate longitude is within valid range"""
    if not -180 <= v <= 180:
        raise ValueError(f"Longitude must be between -180 and 180, got {v}")
    return v


def validate_timezone(v: str) -> str:
    """Validate an IANA timezone identifier resolves"""
    try:
        ZoneInfo(v)
    except (ZoneInfoNotFoundError, ValueError):
        raise ValueError(f"Unknown timezone: {v!r}") from None
    return v


# --- Type Aliases ---

Latitude = Annotated[float, AfterValidator(validate_latitude)]
Longitude = Annotated[float, AfterValidator(validate_longitude)]
TimezoneName = Annotated[str, AfterValidator(validate_timezone)]


# --- Parsing helpers ---


def normalize_name(value: str) -> str:
    """Lowercase and drop everything but letters and digits ("Avoid_Non-Veg" -> "avoidnonveg")."""
    return _NON_ALNUM.sub("", value.lower())


def parse_instant(value: str) -> datetime:
    """Parse an ISO-8601 instant that carries an explicit UTC offset."""
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        raise ValueError(f"Instant has no UTC offset: {value!r}")
    return parsed


def parse_day(value: str) -> date:
    """Parse a yyyy-MM-dd calendar date."""
    text = value.strip()
    if len(text) != 10:
        raise ValueError(f"Expected yyyy-MM-dd, got {value!r}")
    return date.fromisoformat(text)


def weekday_index(d: date) -> int:
    """Weekday with Sunday=0."""
    return (d.weekday() + 1) % 7


class NamedEnum(Enum):
    """Enum whose members carry a display name as the first value element.

    ``lookup`` matches member names and display names case-insensitively,
    ignoring punctuation; unknown names give ``None``.
    """

    @classmethod
    def lookup(cls, name: str | None):
        if not name:
            return None
        key = normalize_name(name)
        for member in cls:
            if key in (normalize_name(member.name), normalize_name(member.display_name)):
                return member
        return None

    def __str__(self) -> str:
        return self.display_name
