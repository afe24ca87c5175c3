"""
Wire models for the remote almanac API - Pydantic V2.

Fields stay loosely typed (strings) where the backend sends free-form
values; the mapper owns interpretation and defaults. Optional window
lists are kept raw so one malformed entry cannot reject the whole day.
"""

from datetime import date
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models.base import Latitude, Longitude, TimezoneName
from ..models.location import Location


class WireModel(BaseModel):
    """Base wire model: camelCase on the wire, unknown keys ignored"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        str_strip_whitespace=True,
    )


# --- Request ---


class PanchangamQuery(WireModel):
    """Query parameters for the daily and weekly endpoints"""

    day: date = Field(..., description="Gregorian date (yyyy-MM-dd)")
    latitude: Latitude = Field(..., description="Latitude in degrees")
    longitude: Longitude = Field(..., description="Longitude in degrees")
    timezone: TimezoneName = Field(..., description="IANA timezone identifier")

    @classmethod
    def for_location(cls, day: date, location: Location) -> "PanchangamQuery":
        return cls(
            day=day,
            latitude=location.latitude,
            longitude=location.longitude,
            timezone=location.timezone,
        )

    def to_params(self, *, weekly: bool = False) -> dict[str, str]:
        return {
            "startDate" if weekly else "date": self.day.isoformat(),
            "lat": str(self.latitude),
            "lng": str(self.longitude),
            "timezone": self.timezone,
        }


# --- Response ---


class TamilDateWire(WireModel):
    month: str
    day: int
    year: str
    weekday: str


class NakshatramWire(WireModel):
    name: str
    end_time: str
    lord: str | None = None


class ThithiWire(WireModel):
    name: str
    paksha: str = Field(..., description="SHUKLA or KRISHNA")
    end_time: str


class YogamWire(WireModel):
    name: str
    type: str = Field("", description="AUSPICIOUS, INAUSPICIOUS or NEUTRAL")
    start_time: str
    end_time: str


class KaranamWire(WireModel):
    name: str
    end_time: str


class TimeRangeWire(WireModel):
    start_time: str
    end_time: str
    type: str | None = None


class TimingsWire(WireModel):
    sunrise: str
    sunset: str
    nalla_neram: list[Any] = Field(default_factory=list)
    rahukaalam: TimeRangeWire
    yamagandam: TimeRangeWire
    kuligai: Any | None = None
    gowri_nalla_neram: list[Any] | None = None


class NextAuspiciousWire(WireModel):
    name: str
    date: str | None = None
    days_away: int = Field(0, ge=0, le=3660, description="Days from the response date")


class FoodStatusWire(WireModel):
    type: str = Field(..., description="REGULAR, FASTING, AVOID_NON_VEG or SPECIAL")
    message: str = ""
    next_auspicious: NextAuspiciousWire | None = None


class PanchangamResponse(WireModel):
    """One day of the remote almanac"""

    date: str
    tamil_date: TamilDateWire
    nakshatram: NakshatramWire
    thithi: ThithiWire
    yogam: YogamWire
    karanam: KaranamWire
    timings: TimingsWire
    food_status: FoodStatusWire
