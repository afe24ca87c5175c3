"""
PanchangamDay: the complete almanac record for one date and location.
"""

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from .calendar import TamilDate, Vaaram
from .dietary import DietaryStatus, UpcomingObservance
from .elements import Karanam, Nakshatram, Thithi, Yogam, YogamType
from .location import Location
from .timings import TimeWindow, format_duration


@dataclass(frozen=True)
class PanchangamDay:
    """Aggregate root of the almanac.

    Built only by the remote mapper or the fallback synthesizer, and
    validated here so a partially populated day can never exist.
    """

    date: date
    tamil_date: TamilDate
    location: Location
    nakshatram: Nakshatram
    thithi: Thithi
    yogam: Yogam
    karanam: Karanam
    sunrise: datetime
    sunset: datetime
    nalla_neram: tuple[TimeWindow, ...]
    rahukaalam: TimeWindow
    yamagandam: TimeWindow
    dietary_status: DietaryStatus
    kuligai: TimeWindow | None = None
    supplementary_windows: tuple[TimeWindow, ...] = field(default_factory=tuple)
    upcoming_observance: UpcomingObservance | None = None

    def __post_init__(self) -> None:
        if not self.sunrise < self.sunset:
            raise ValueError(
                f"sunrise {self.sunrise.isoformat()} must precede sunset {self.sunset.isoformat()}"
            )
        # Accept lists from callers, store tuples
        object.__setattr__(self, "nalla_neram", tuple(self.nalla_neram))
        object.__setattr__(self, "supplementary_windows", tuple(self.supplementary_windows))

    @property
    def vaaram(self) -> Vaaram:
        return self.tamil_date.weekday

    @property
    def is_auspicious_day(self) -> bool:
        return self.yogam.type is YogamType.AUSPICIOUS

    @property
    def day_length(self) -> timedelta:
        return self.sunset - self.sunrise

    @property
    def day_length_formatted(self) -> str:
        return format_duration(self.day_length)

    @property
    def all_windows(self) -> tuple[TimeWindow, ...]:
        windows = [self.rahukaalam, self.yamagandam]
        if self.kuligai:
            windows.append(self.kuligai)
        return tuple(windows) + self.nalla_neram + self.supplementary_windows

    def to_dict(self) -> dict:
        """Convert to dictionary format."""
        return {
            "date": self.date.isoformat(),
            "tamil_date": self.tamil_date.to_dict(),
            "location": self.location.to_dict(),
            "nakshatram": self.nakshatram.to_dict(),
            "thithi": self.thithi.to_dict(),
            "yogam": self.yogam.to_dict(),
            "karanam": self.karanam.to_dict(),
            "sunrise": self.sunrise.isoformat(),
            "sunset": self.sunset.isoformat(),
            "nalla_neram": [w.to_dict() for w in self.nalla_neram],
            "rahukaalam": self.rahukaalam.to_dict(),
            "yamagandam": self.yamagandam.to_dict(),
            "kuligai": self.kuligai.to_dict() if self.kuligai else None,
            "supplementary_windows": [w.to_dict() for w in self.supplementary_windows],
            "dietary_status": self.dietary_status.to_dict(),
            "upcoming_observance": (
                self.upcoming_observance.to_dict() if self.upcoming_observance else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "PanchangamDay":
        kuligai = data.get("kuligai")
        upcoming = data.get("upcoming_observance")
        return cls(
            date=date.fromisoformat(data["date"]),
            tamil_date=TamilDate.from_dict(data["tamil_date"]),
            location=Location.from_dict(data["location"]),
            nakshatram=Nakshatram.from_dict(data["nakshatram"]),
            thithi=Thithi.from_dict(data["thithi"]),
            yogam=Yogam.from_dict(data["yogam"]),
            karanam=Karanam.from_dict(data["karanam"]),
            sunrise=datetime.fromisoformat(data["sunrise"]),
            sunset=datetime.fromisoformat(data["sunset"]),
            nalla_neram=tuple(TimeWindow.from_dict(w) for w in data["nalla_neram"]),
            rahukaalam=TimeWindow.from_dict(data["rahukaalam"]),
            yamagandam=TimeWindow.from_dict(data["yamagandam"]),
            kuligai=TimeWindow.from_dict(kuligai) if kuligai else None,
            supplementary_windows=tuple(
                TimeWindow.from_dict(w) for w in data.get("supplementary_windows", [])
            ),
            dietary_status=DietaryStatus.from_dict(data["dietary_status"]),
            upcoming_observance=UpcomingObservance.from_dict(upcoming) if upcoming else None,
        )
