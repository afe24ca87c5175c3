"""
Daily time windows (Nalla Neram, Rahukaalam, Yamagandam, Kuligai, ...).
"""

import uuid

from dataclasses import dataclass, field
from datetime import datetime, timedelta

from .base import NamedEnum


class TimeWindowKind(NamedEnum):
    """Category of a daily window"""

    NALLA_NERAM = (
        "Nalla Neram",
        "nallaNeram",
        "Nalla Neram",
        True,
        "Auspicious time for important activities",
        "star.fill",
    )
    RAHUKAALAM = (
        "Rahukaalam",
        "rahukaalam",
        "Raagu Kaalam",
        False,
        "Inauspicious period ruled by Rahu - avoid new beginnings",
        "moon.fill",
    )
    YAMAGANDAM = (
        "Yamagandam",
        "yamagandam",
        "Ema Gandam",
        False,
        "Inauspicious period ruled by Yama - avoid travel",
        "exclamationmark.triangle.fill",
    )
    KULIGAI = (
        "Kuligai",
        "kuligai",
        "Kuligai",
        False,
        "Inauspicious period - avoid important work",
        "xmark.circle.fill",
    )
    GOWRI_NALLA_NERAM = (
        "Gowri Nalla Neram",
        "gowriNallaNeram",
        "Gowri Nalla Neram",
        True,
        "Auspicious time per Gowri Panchangam calculation",
        "star.circle.fill",
    )
    ABHIJIT_MUHURTAM = (
        "Abhijit Muhurtam",
        "abhijitMuhurtam",
        "Abhijit Muhurtam",
        True,
        "Most auspicious time of the day (midday)",
        "sun.max.fill",
    )
    BRAHMA_MUHURTAM = (
        "Brahma Muhurtam",
        "brahmaMuhurtam",
        "Brahma Muhurtam",
        True,
        "Divine time before sunrise for spiritual practice",
        "sunrise.fill",
    )

    def __init__(
        self,
        display_name: str,
        wire_tag: str,
        tamil_name: str,
        is_auspicious: bool,
        description: str,
        icon: str,
    ):
        self.display_name = display_name
        self.wire_tag = wire_tag
        self.tamil_name = tamil_name
        self.is_auspicious = is_auspicious
        self.description = description
        self.icon = icon


def _new_id() -> str:
    return str(uuid.uuid4())


def format_duration(delta: timedelta) -> str:
    """ "1h 30m" when an hour or longer, else "45m"."""
    total_minutes = int(delta.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"


@dataclass(frozen=True)
class TimeWindow:
    """A closed interval [start, end] with an optional category.

    Containment is inclusive at both ends.
    """

    start: datetime
    end: datetime
    kind: TimeWindowKind | None = None
    id: str = field(default_factory=_new_id)

    def __post_init__(self) -> None:
        if self.end < self.start:
            raise ValueError(
                f"TimeWindow end {self.end.isoformat()} precedes start {self.start.isoformat()}"
            )

    def contains(self, at: datetime) -> bool:
        return self.start <= at <= self.end

    def remaining(self, at: datetime) -> timedelta | None:
        if not self.contains(at):
            return None
        return self.end - at

    @property
    def duration(self) -> timedelta:
        return self.end - self.start

    @property
    def duration_minutes(self) -> int:
        return int(self.duration.total_seconds() // 60)

    @property
    def duration_formatted(self) -> str:
        return format_duration(self.duration)

    @property
    def is_auspicious(self) -> bool | None:
        return self.kind.is_auspicious if self.kind else None

    def to_dict(self) -> dict:
        """Convert to dictionary format."""
        return {
            "id": self.id,
            "start": self.start.isoformat(),
            "end": self.end.isoformat(),
            "kind": self.kind.name if self.kind else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimeWindow":
        kind = data.get("kind")
        return cls(
            id=str(data["id"]),
            start=datetime.fromisoformat(data["start"]),
            end=datetime.fromisoformat(data["end"]),
            kind=TimeWindowKind[kind] if kind else None,
        )
