"""
Location model and the catalog of popular cities.
"""

import uuid

from dataclasses import dataclass, field
from datetime import datetime
from zoneinfo import ZoneInfo

from .base import validate_latitude, validate_longitude, validate_timezone

# Namespace for deterministic catalog ids
LOCATION_NAMESPACE = uuid.UUID("6f1c2b9e-4a57-5d0e-9c3a-7e5b1d2f8a40")


def _new_id() -> str:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Location:
    """A named place with coordinates and an IANA timezone.

    Construction validates the coordinate ranges and that the timezone
    resolves; ``name`` defaults to the city.
    """

    city: str
    country: str
    latitude: float
    longitude: float
    timezone: str
    state: str | None = None
    name: str = ""
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        validate_latitude(self.latitude)
        validate_longitude(self.longitude)
        validate_timezone(self.timezone)
        if not self.name:
            object.__setattr__(self, "name", self.city)

    @property
    def zone(self) -> ZoneInfo:
        return ZoneInfo(self.timezone)

    @property
    def full_display_name(self) -> str:
        """Full display name (e.g., "Chennai, Tamil Nadu, India")"""
        if self.state:
            return f"{self.city}, {self.state}, {self.country}"
        return f"{self.city}, {self.country}"

    @property
    def short_display_name(self) -> str:
        """Short display name (e.g., "Chennai, TA")"""
        if self.state:
            return f"{self.city}, {self.state[:2].upper()}"
        return self.city

    def utc_offset(self, at: datetime | None = None) -> str:
        """UTC offset at ``at`` (default: now) as "+05:30"."""
        moment = at.astimezone(self.zone) if at else datetime.now(self.zone)
        offset = moment.utcoffset()
        total_minutes = int(offset.total_seconds() // 60) if offset else 0
        sign = "-" if total_minutes < 0 else "+"
        hours, minutes = divmod(abs(total_minutes), 60)
        return f"{sign}{hours:02d}:{minutes:02d}"

    def to_dict(self) -> dict:
        """Convert to dictionary format."""
        return {
            "id": self.id,
            "name": self.name,
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "timezone": self.timezone,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Location":
        return cls(
            id=str(data["id"]),
            name=data.get("name") or "",
            city=data["city"],
            state=data.get("state"),
            country=data["country"],
            latitude=float(data["latitude"]),
            longitude=float(data["longitude"]),
            timezone=data["timezone"],
        )


def _catalog(
    city: str,
    country: str,
    latitude: float,
    longitude: float,
    timezone: str,
    state: str | None = None,
    name: str = "",
) -> Location:
    key = f"{name or city}|{country}"
    return Location(
        id=str(uuid.uuid5(LOCATION_NAMESPACE, key)),
        name=name,
        city=city,
        state=state,
        country=country,
        latitude=latitude,
        longitude=longitude,
        timezone=timezone,
    )


CHENNAI = _catalog("Chennai", "India", 13.0827, 80.2707, "Asia/Kolkata", "Tamil Nadu")
COIMBATORE = _catalog("Coimbatore", "India", 11.0168, 76.9558, "Asia/Kolkata", "Tamil Nadu")
MADURAI = _catalog("Madurai", "India", 9.9252, 78.1198, "Asia/Kolkata", "Tamil Nadu")
TRICHY = _catalog(
    "Tiruchirappalli", "India", 10.7905, 78.7047, "Asia/Kolkata", "Tamil Nadu", name="Trichy"
)
BANGALORE = _catalog("Bangalore", "India", 12.9716, 77.5946, "Asia/Kolkata", "Karnataka")
MUMBAI = _catalog("Mumbai", "India", 19.0760, 72.8777, "Asia/Kolkata", "Maharashtra")
NEW_DELHI = _catalog("New Delhi", "India", 28.6139, 77.2090, "Asia/Kolkata", "Delhi")
NEW_YORK = _catalog("New York", "USA", 40.7128, -74.0060, "America/New_York", "NY")
LONDON = _catalog("London", "United Kingdom", 51.5074, -0.1278, "Europe/London")
SINGAPORE = _catalog("Singapore", "Singapore", 1.3521, 103.8198, "Asia/Singapore")
DUBAI = _catalog("Dubai", "UAE", 25.2048, 55.2708, "Asia/Dubai")
TORONTO = _catalog("Toronto", "Canada", 43.6532, -79.3832, "America/Toronto", "Ontario")
SYDNEY = _catalog(
    "Sydney", "Australia", -33.8688, 151.2093, "Australia/Sydney", "New South Wales"
)

POPULAR_LOCATIONS: tuple[Location, ...] = (
    CHENNAI,
    COIMBATORE,
    MADURAI,
    TRICHY,
    BANGALORE,
    MUMBAI,
    NEW_DELHI,
    NEW_YORK,
    LONDON,
    SINGAPORE,
    DUBAI,
    TORONTO,
    SYDNEY,
)

DEFAULT_LOCATION = CHENNAI


def find_popular_location(location_id: str) -> Location | None:
    for location in POPULAR_LOCATIONS:
        if location.id == location_id:
            return location
    return None
