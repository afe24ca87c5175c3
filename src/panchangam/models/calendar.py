"""
Tamil calendar values: month, weekday (Vaaram), 60-year cycle year, date.
"""

from dataclasses import dataclass
from datetime import date

from ..constants.tables import TAMIL_CYCLE_EPOCH_YEAR, TAMIL_NEW_YEAR, TAMIL_YEAR_NAMES
from .base import NamedEnum, weekday_index


class TamilMonth(NamedEnum):
    """The 12 solar months, Chithirai (mid-April) first"""

    CHITHIRAI = ("Chithirai", 1, "Apr-May")
    VAIKASI = ("Vaikasi", 2, "May-Jun")
    AANI = ("Aani", 3, "Jun-Jul")
    AADI = ("Aadi", 4, "Jul-Aug")
    AAVANI = ("Aavani", 5, "Aug-Sep")
    PURATTASI = ("Purattasi", 6, "Sep-Oct")
    AIPPASI = ("Aippasi", 7, "Oct-Nov")
    KARTHIGAI = ("Karthigai", 8, "Nov-Dec")
    MARGAZHI = ("Margazhi", 9, "Dec-Jan")
    THAI = ("Thai", 10, "Jan-Feb")
    MAASI = ("Maasi", 11, "Feb-Mar")
    PANGUNI = ("Panguni", 12, "Mar-Apr")

    def __init__(self, display_name: str, number: int, gregorian_equivalent: str):
        self.display_name = display_name
        self.number = number
        self.gregorian_equivalent = gregorian_equivalent

    @classmethod
    def from_number(cls, number: int) -> "TamilMonth":
        return list(cls)[(number - 1) % 12]

    def next(self) -> "TamilMonth":
        return TamilMonth.from_number(self.number + 1)

    def previous(self) -> "TamilMonth":
        return TamilMonth.from_number(self.number - 1)


class Vaaram(NamedEnum):
    """Days of the week, Sunday first"""

    NYAYIRU = ("Nyayiru", "Sunday", "Surya (Sun)")
    THINGAL = ("Thingal", "Monday", "Chandra (Moon)")
    CHEVVAI = ("Chevvai", "Tuesday", "Mangal (Mars)")
    BUDHAN = ("Budhan", "Wednesday", "Budha (Mercury)")
    VIYAZHAN = ("Viyazhan", "Thursday", "Guru (Jupiter)")
    VELLI = ("Velli", "Friday", "Shukra (Venus)")
    SANI = ("Sani", "Saturday", "Shani (Saturn)")

    def __init__(self, display_name: str, english_name: str, deity: str):
        self.display_name = display_name
        self.english_name = english_name
        self.deity = deity

    @property
    def short_english(self) -> str:
        return self.english_name[:3]

    @property
    def index(self) -> int:
        """Sunday=0 ... Saturday=6"""
        return list(Vaaram).index(self)

    @classmethod
    def lookup(cls, name: str | None):
        found = super().lookup(name)
        if found is None and name:
            # English weekday names and the alternate "Sevvai" spelling
            key = name.strip().lower()
            for member in cls:
                if key in (member.english_name.lower(), member.short_english.lower()):
                    return member
            if key == "sevvai":
                return cls.CHEVVAI
        return found

    @classmethod
    def for_date(cls, d: date) -> "Vaaram":
        return list(cls)[weekday_index(d)]


@dataclass(frozen=True)
class TamilYear:
    """A year of the 60-year cycle."""

    name: str
    cycle_number: int  # 1-60

    def __post_init__(self) -> None:
        if not 1 <= self.cycle_number <= 60:
            raise ValueError(f"cycle_number must be 1-60, got {self.cycle_number}")

    @classmethod
    def from_cycle_number(cls, cycle_number: int) -> "TamilYear":
        index = (cycle_number - 1) % 60
        return cls(name=TAMIL_YEAR_NAMES[index], cycle_number=index + 1)

    @classmethod
    def lookup(cls, name: str | None) -> "TamilYear | None":
        if not name:
            return None
        key = name.strip().lower()
        for i, candidate in enumerate(TAMIL_YEAR_NAMES):
            if candidate.lower() == key:
                return cls(name=candidate, cycle_number=i + 1)
        return None

    @classmethod
    def for_gregorian(cls, d: date) -> "TamilYear":
        """Approximate cycle year; the year turns at Chithirai 1 (~14 April)."""
        year = d.year
        if (d.month, d.day) < TAMIL_NEW_YEAR:
            year -= 1
        return cls.from_cycle_number((year - TAMIL_CYCLE_EPOCH_YEAR) % 60 + 1)

    def to_dict(self) -> dict:
        return {"name": self.name, "cycle_number": self.cycle_number}

    @classmethod
    def from_dict(cls, data: dict) -> "TamilYear":
        return cls(name=data["name"], cycle_number=int(data["cycle_number"]))


@dataclass(frozen=True)
class TamilDate:
    """A date in the Tamil solar calendar."""

    day: int
    month: TamilMonth
    year: TamilYear
    weekday: Vaaram

    def __post_init__(self) -> None:
        if not 1 <= self.day <= 30:
            raise ValueError(f"Tamil day must be 1-30, got {self.day}")

    @property
    def formatted(self) -> str:
        """e.g. "Thai 16, Vishvavasu" """
        return f"{self.month.display_name} {self.day}, {self.year.name}"

    @property
    def short_formatted(self) -> str:
        return f"{self.month.display_name} {self.day}"

    def to_dict(self) -> dict:
        return {
            "day": self.day,
            "month": self.month.display_name,
            "year": self.year.to_dict(),
            "weekday": self.weekday.display_name,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TamilDate":
        return cls(
            day=int(data["day"]),
            month=TamilMonth[data["month"].upper()],
            year=TamilYear.from_dict(data["year"]),
            weekday=Vaaram[data["weekday"].upper()],
        )
