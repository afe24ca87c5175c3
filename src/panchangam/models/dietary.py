"""
Dietary guidance: status categories, observance types and the upcoming
observance pointer.
"""

from dataclasses import dataclass
from datetime import date

from .base import NamedEnum, normalize_name


class DietaryCategory(NamedEnum):
    """Food status of a day"""

    REGULAR = (
        "Regular",
        "REGULAR",
        "Regular Day",
        "No special observances",
        "green",
        "checkmark.circle.fill",
    )
    AVOID_NON_VEG = (
        "Avoid Non-Veg",
        "AVOID_NON_VEG",
        "Avoid Non-Veg",
        "Auspicious day observance",
        "orange",
        "leaf.fill",
    )
    STRICT_FAST = (
        "Strict Fast",
        "FASTING",
        "Fasting Day",
        "Ekadasi or major fasting day",
        "red",
        "moon.stars.fill",
    )
    MULTIPLE_OBSERVANCES = (
        "Multiple Observances",
        "SPECIAL",
        "Special Day",
        "Multiple auspicious observances",
        "purple",
        "star.circle.fill",
    )

    def __init__(
        self,
        display_name: str,
        wire_tag: str,
        short_message: str,
        default_reason: str,
        color: str,
        icon: str,
    ):
        self.display_name = display_name
        self.wire_tag = wire_tag
        self.short_message = short_message
        self.default_reason = default_reason
        self.color = color
        self.icon = icon

    @classmethod
    def lookup(cls, name: str | None):
        found = super().lookup(name)
        if found is None and name:
            key = normalize_name(name)
            for member in cls:
                if key == normalize_name(member.wire_tag):
                    return member
            aliases = {"fast": cls.STRICT_FAST, "multiple": cls.MULTIPLE_OBSERVANCES}
            found = aliases.get(key)
        return found


class ObservanceType(NamedEnum):
    """Recurring religious observances and their food restriction"""

    EKADASI = ("Ekadasi", DietaryCategory.STRICT_FAST, "11th lunar day - dedicated to Lord Vishnu")
    PRADOSHAM = ("Pradosham", DietaryCategory.AVOID_NON_VEG, "13th lunar day - sacred to Lord Shiva")
    AMAVASAI = ("Amavasai", DietaryCategory.AVOID_NON_VEG, "New moon day - ancestral rites")
    POURNAMI = ("Pournami", DietaryCategory.AVOID_NON_VEG, "Full moon day - highly auspicious")
    KARTHIGAI = (
        "Karthigai",
        DietaryCategory.AVOID_NON_VEG,
        "Karthigai star day - sacred to Lord Murugan",
    )
    SHIVARATRI = ("Shivaratri", DietaryCategory.AVOID_NON_VEG, "Night of Shiva - major fasting day")
    NAVARATRI = ("Navaratri", DietaryCategory.STRICT_FAST, "Nine nights of Goddess worship")
    SOMAVARAM = ("Somavaram", DietaryCategory.AVOID_NON_VEG, "Monday - sacred to Lord Shiva")
    SASHTI = ("Sashti", DietaryCategory.AVOID_NON_VEG, "6th lunar day - sacred to Lord Murugan")
    ASHTAMI = ("Ashtami", DietaryCategory.AVOID_NON_VEG, "8th lunar day - sacred to Goddess Durga")
    CHATURTHI = ("Chaturthi", DietaryCategory.AVOID_NON_VEG, "4th lunar day - sacred to Lord Ganesha")
    FESTIVAL = ("Festival", DietaryCategory.REGULAR, "Festival day")

    def __init__(self, display_name: str, restriction: DietaryCategory, description: str):
        self.display_name = display_name
        self.restriction = restriction
        self.description = description


@dataclass(frozen=True)
class UpcomingObservance:
    """The next special-observance day after the current one."""

    name: str
    type: ObservanceType
    date: date
    description: str | None = None

    def days_until(self, today: date) -> int:
        """Whole days from ``today``; never negative."""
        return max(0, (self.date - today).days)

    def days_until_formatted(self, today: date) -> str:
        days = self.days_until(today)
        if days == 0:
            return "Today"
        if days == 1:
            return "Tomorrow"
        return f"In {days} days"

    @property
    def date_formatted(self) -> str:
        """e.g. "Jan 5" """
        return f"{self.date.strftime('%b')} {self.date.day}"

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "type": self.type.name,
            "date": self.date.isoformat(),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UpcomingObservance":
        return cls(
            name=data["name"],
            type=ObservanceType[data["type"]],
            date=date.fromisoformat(data["date"]),
            description=data.get("description"),
        )


@dataclass(frozen=True)
class DietaryStatus:
    """Food status of a day; ``reason`` defaults per category."""

    category: DietaryCategory
    reason: str = ""
    next_observance: UpcomingObservance | None = None

    def __post_init__(self) -> None:
        if not self.reason:
            object.__setattr__(self, "reason", self.category.default_reason)

    @property
    def short_message(self) -> str:
        return self.category.short_message

    def notification_message(self) -> str:
        category = self.category
        if category is DietaryCategory.REGULAR:
            if self.next_observance:
                nxt = self.next_observance
                return f"Regular day. Next observance: {nxt.name} on {nxt.date_formatted}"
            return "Regular day - no restrictions"
        if category is DietaryCategory.AVOID_NON_VEG:
            return f"Tomorrow is {self.reason} - avoid cooking/storing non-veg tonight"
        if category is DietaryCategory.STRICT_FAST:
            return f"Today is {self.reason} - fasting recommended"
        return f"Multiple observances today - {self.reason}"

    def to_dict(self) -> dict:
        return {
            "category": self.category.name,
            "reason": self.reason,
            "next_observance": (
                self.next_observance.to_dict() if self.next_observance else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DietaryStatus":
        nxt = data.get("next_observance")
        return cls(
            category=DietaryCategory[data["category"]],
            reason=data.get("reason") or "",
            next_observance=UpcomingObservance.from_dict(nxt) if nxt else None,
        )
