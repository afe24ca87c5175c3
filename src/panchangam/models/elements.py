"""
Panchangam elements: Nakshatram, Thithi, Yogam, Karanam.

Name enums carry their fixed metadata; the frozen dataclasses pair a name
with the instants the element is in force.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta

from .base import NamedEnum
from .dietary import ObservanceType


def _iso(value: datetime) -> str:
    return value.isoformat()


def _from_iso(value: str) -> datetime:
    return datetime.fromisoformat(value)


# --- Nakshatram ---


class NakshatramNature(NamedEnum):
    """Nature classification of a Nakshatram"""

    LIGHT = ("Light/Swift", "Travel, learning, sports, healing")
    FIERCE = ("Fierce/Severe", "Competitive activities, surgery, demolition")
    MIXED = ("Mixed/Dual", "Routine work, daily activities")
    FIXED = ("Fixed/Permanent", "Foundation laying, long-term commitments")
    MOVABLE = ("Movable/Temporary", "Travel, vehicle purchase, new ventures")
    SHARP = ("Sharp/Dreadful", "Confrontation, filing complaints, separation")
    SOFT = ("Soft/Tender", "Arts, music, romance, friendships")

    def __init__(self, display_name: str, suitable_activities: str):
        self.display_name = display_name
        self.suitable_activities = suitable_activities


# Vimshottari lords repeat every 9 mansions starting from Ashwini
NAKSHATRAM_LORDS = ["Ketu", "Venus", "Sun", "Moon", "Mars", "Rahu", "Jupiter", "Saturn", "Mercury"]


class NakshatramName(NamedEnum):
    """The 27 lunar mansions"""

    ASHWINI = ("Ashwini", 1, NakshatramNature.LIGHT)
    BHARANI = ("Bharani", 2, NakshatramNature.FIERCE)
    KRITHIGAI = ("Krithigai", 3, NakshatramNature.MIXED)
    ROHINI = ("Rohini", 4, NakshatramNature.FIXED)
    MRIGASHIRISHAM = ("Mrigashirisham", 5, NakshatramNature.MOVABLE)
    THIRUVATHIRAI = ("Thiruvathirai", 6, NakshatramNature.SHARP)
    PUNARPOOSAM = ("Punarpoosam", 7, NakshatramNature.LIGHT)
    POOSAM = ("Poosam", 8, NakshatramNature.SOFT)
    AYILYAM = ("Ayilyam", 9, NakshatramNature.SHARP)
    MAGAM = ("Magam", 10, NakshatramNature.FIERCE)
    POORAM = ("Pooram", 11, NakshatramNature.FIERCE)
    UTHIRAM = ("Uthiram", 12, NakshatramNature.FIXED)
    HASTHAM = ("Hastham", 13, NakshatramNature.LIGHT)
    CHITHIRAI = ("Chithirai", 14, NakshatramNature.MOVABLE)
    SWATHI = ("Swathi", 15, NakshatramNature.SHARP)
    VISAGAM = ("Visagam", 16, NakshatramNature.MIXED)
    ANUSHAM = ("Anusham", 17, NakshatramNature.LIGHT)
    KETTAI = ("Kettai", 18, NakshatramNature.SHARP)
    MOOLAM = ("Moolam", 19, NakshatramNature.LIGHT)
    POORADAM = ("Pooradam", 20, NakshatramNature.FIERCE)
    UTHIRADAM = ("Uthiradam", 21, NakshatramNature.FIXED)
    THIRUVONAM = ("Thiruvonam", 22, NakshatramNature.MOVABLE)
    AVITTAM = ("Avittam", 23, NakshatramNature.MOVABLE)
    SATHAYAM = ("Sathayam", 24, NakshatramNature.MOVABLE)
    POORATTATHI = ("Poorattathi", 25, NakshatramNature.FIERCE)
    UTHIRATTATHI = ("Uthirattathi", 26, NakshatramNature.FIXED)
    REVATHI = ("Revathi", 27, NakshatramNature.LIGHT)

    def __init__(self, display_name: str, position: int, nature: NakshatramNature):
        self.display_name = display_name
        self.position = position
        self.nature = nature

    @property
    def lord(self) -> str:
        return NAKSHATRAM_LORDS[(self.position - 1) % 9]

    @classmethod
    def from_position(cls, position: int) -> "NakshatramName":
        return list(cls)[(position - 1) % 27]


@dataclass(frozen=True)
class Nakshatram:
    name: NakshatramName
    end_time: datetime
    lord: str = ""

    def __post_init__(self) -> None:
        if not self.lord:
            object.__setattr__(self, "lord", self.name.lord)

    def to_dict(self) -> dict:
        return {"name": self.name.name, "end_time": _iso(self.end_time), "lord": self.lord}

    @classmethod
    def from_dict(cls, data: dict) -> "Nakshatram":
        return cls(
            name=NakshatramName[data["name"]],
            end_time=_from_iso(data["end_time"]),
            lord=data.get("lord") or "",
        )


# --- Thithi ---


class Paksha(NamedEnum):
    """Lunar fortnight"""

    SHUKLA = ("Shukla", "Valar Pirai", "Waxing Moon (Bright fortnight)")
    KRISHNA = ("Krishna", "Thei Pirai", "Waning Moon (Dark fortnight)")

    def __init__(self, display_name: str, tamil_name: str, description: str):
        self.display_name = display_name
        self.tamil_name = tamil_name
        self.description = description

    @classmethod
    def lookup(cls, name: str | None):
        found = super().lookup(name)
        if found is None and name:
            key = name.strip().lower()
            if key in ("waxing", "valar pirai", "bright"):
                return cls.SHUKLA
            if key in ("waning", "thei pirai", "dark"):
                return cls.KRISHNA
        return found


class ThithiName(NamedEnum):
    """The 16 lunar-day names; Pournami and Amavasai both count as 15"""

    PRATHAMA = ("Prathama", 1, "Agni", False)
    DVITIYA = ("Dvitiya", 2, "Brahma", True)
    TRITIYA = ("Tritiya", 3, "Gauri", True)
    CHATURTHI = ("Chaturthi", 4, "Ganesha", False)
    PANCHAMI = ("Panchami", 5, "Nagas", True)
    SASHTI = ("Sashti", 6, "Skanda", False)
    SAPTAMI = ("Saptami", 7, "Surya", True)
    ASHTAMI = ("Ashtami", 8, "Shiva", False)
    NAVAMI = ("Navami", 9, "Durga", False)
    DASAMI = ("Dasami", 10, "Yama", True)
    EKADASI = ("Ekadasi", 11, "Vishnu", True)
    DVADASI = ("Dvadasi", 12, "Vishnu", False)
    TRAYODASI = ("Trayodasi", 13, "Kamadeva", True)
    CHATURDASI = ("Chaturdasi", 14, "Shiva", False)
    POURNAMI = ("Pournami", 15, "Chandra", True)
    AMAVASAI = ("Amavasai", 15, "Pitru", False)

    def __init__(self, display_name: str, number: int, deity: str, generally_auspicious: bool):
        self.display_name = display_name
        self.number = number
        self.deity = deity
        self.generally_auspicious = generally_auspicious

    def special_observance(self, paksha: Paksha) -> ObservanceType | None:
        """Observance a (name, paksha) pair falls on, if any."""
        if self is ThithiName.TRAYODASI:
            return ObservanceType.PRADOSHAM if paksha is Paksha.KRISHNA else None
        return _THITHI_OBSERVANCES.get(self)


_THITHI_OBSERVANCES = {
    ThithiName.EKADASI: ObservanceType.EKADASI,
    ThithiName.AMAVASAI: ObservanceType.AMAVASAI,
    ThithiName.POURNAMI: ObservanceType.POURNAMI,
    ThithiName.CHATURTHI: ObservanceType.CHATURTHI,
    ThithiName.ASHTAMI: ObservanceType.ASHTAMI,
    ThithiName.SASHTI: ObservanceType.SASHTI,
}


@dataclass(frozen=True)
class Thithi:
    name: ThithiName
    paksha: Paksha
    end_time: datetime

    @property
    def special_observance(self) -> ObservanceType | None:
        return self.name.special_observance(self.paksha)

    @property
    def display_name(self) -> str:
        """e.g. "Shukla Panchami" """
        return f"{self.paksha.display_name} {self.name.display_name}"

    def to_dict(self) -> dict:
        return {
            "name": self.name.name,
            "paksha": self.paksha.name,
            "end_time": _iso(self.end_time),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Thithi":
        return cls(
            name=ThithiName[data["name"]],
            paksha=Paksha[data["paksha"]],
            end_time=_from_iso(data["end_time"]),
        )


# --- Yogam ---


class YogamType(NamedEnum):
    """Yogam classification and its presentation"""

    AUSPICIOUS = (
        "Auspicious",
        "AUSPICIOUS",
        "green",
        "checkmark.seal.fill",
        "Excellent for new ventures, important decisions, and auspicious activities",
    )
    INAUSPICIOUS = (
        "Inauspicious",
        "AVOID",
        "red",
        "xmark.seal.fill",
        "Avoid starting important work or making major decisions",
    )
    NEUTRAL = (
        "Neutral",
        "NEUTRAL",
        "orange",
        "minus.circle.fill",
        "Suitable for routine activities, moderate for new ventures",
    )

    def __init__(self, display_name: str, label: str, color: str, icon: str, recommendation: str):
        self.display_name = display_name
        self.label = label
        self.color = color
        self.icon = icon
        self.recommendation = recommendation

    @classmethod
    def lookup(cls, name: str | None):
        found = super().lookup(name)
        if found is None and name:
            key = name.strip().upper()
            if key in ("AVOID", "BAD"):
                return cls.INAUSPICIOUS
            if key == "GOOD":
                return cls.AUSPICIOUS
        return found


_GOOD = YogamType.AUSPICIOUS
_BAD = YogamType.INAUSPICIOUS


class YogamName(NamedEnum):
    """The 27 Yogams with their default classification"""

    VISHKUMBHAM = ("Vishkumbham", _BAD, "Obstacle-creating Yogam, avoid new beginnings")
    PRITI = ("Priti", _GOOD, "Love and affection Yogam, excellent for relationships")
    AYUSHMAN = ("Ayushman", _GOOD, "Long life Yogam, good for health matters")
    SAUBHAGYA = ("Saubhagya", _GOOD, "Good fortune Yogam, highly auspicious")
    SOBHANAM = ("Sobhanam", _GOOD, "Brightness Yogam, good for all activities")
    ATIGANDA = ("Atiganda", _BAD, "Danger Yogam, exercise caution")
    SUKARMA = ("Sukarma", _GOOD, "Good deeds Yogam, excellent for virtuous activities")
    DHRITI = ("Dhriti", _GOOD, "Steadfastness Yogam, good for commitments")
    SOOLA = ("Soola", _BAD, "Thorn/Pain Yogam, avoid medical procedures")
    GANDA = ("Ganda", _BAD, "Danger Yogam, proceed with caution")
    VRIDDHI = ("Vriddhi", _GOOD, "Growth Yogam, excellent for expansion")
    DHRUVA = ("Dhruva", _GOOD, "Stable Yogam, good for permanent works")
    VYAGATHA = ("Vyagatha", _BAD, "Killing Yogam, avoid important activities")
    HARSHANA = ("Harshana", _GOOD, "Joy Yogam, excellent for celebrations")
    VAJRA = ("Vajra", _BAD, "Diamond/Hard Yogam, mixed results")
    SIDDHI = ("Siddhi", _GOOD, "Accomplishment Yogam, excellent for success")
    VYATIPATA = ("Vyatipata", _BAD, "Calamity Yogam, avoid all important work")
    VARIYAN = ("Variyan", _GOOD, "Comfort Yogam, good for relaxation")
    PARIGHA = ("Parigha", _BAD, "Obstruction Yogam, face obstacles")
    SIVA = ("Siva", _GOOD, "Auspicious Yogam, excellent for all activities")
    SIDDHA = ("Siddha", _GOOD, "Perfection Yogam, accomplishment assured")
    SADHYA = ("Sadhya", _GOOD, "Achievable Yogam, goals can be reached")
    SUBHA = ("Subha", _GOOD, "Auspicious Yogam, good for ceremonies")
    SUKLA = ("Sukla", _GOOD, "Bright Yogam, clarity and success")
    BRAHMA = ("Brahma", _GOOD, "Creator Yogam, excellent for new ventures")
    INDRA = ("Indra", _GOOD, "King Yogam, authority and success")
    VAIDHRITI = ("Vaidhriti", _BAD, "Great Calamity Yogam, avoid all important activities")

    def __init__(self, display_name: str, default_type: YogamType, default_description: str):
        self.display_name = display_name
        self.default_type = default_type
        self.default_description = default_description

    @property
    def index(self) -> int:
        """0-based position in the 27-Yogam cycle."""
        return list(YogamName).index(self)

    @classmethod
    def from_index(cls, index: int) -> "YogamName":
        return list(cls)[index % 27]


@dataclass(frozen=True)
class Yogam:
    """A Yogam in force between ``start_time`` and ``end_time``."""

    name: YogamName
    start_time: datetime
    end_time: datetime
    type: YogamType | None = None
    description: str = ""

    def __post_init__(self) -> None:
        if self.end_time < self.start_time:
            raise ValueError("Yogam end_time precedes start_time")
        if self.type is None:
            object.__setattr__(self, "type", self.name.default_type)
        if not self.description:
            object.__setattr__(self, "description", self.name.default_description)

    def is_active(self, at: datetime) -> bool:
        return self.start_time <= at <= self.end_time

    @property
    def duration(self) -> timedelta:
        return self.end_time - self.start_time

    def to_dict(self) -> dict:
        return {
            "name": self.name.name,
            "type": self.type.name,
            "start_time": _iso(self.start_time),
            "end_time": _iso(self.end_time),
            "description": self.description,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Yogam":
        return cls(
            name=YogamName[data["name"]],
            type=YogamType[data["type"]] if data.get("type") else None,
            start_time=_from_iso(data["start_time"]),
            end_time=_from_iso(data["end_time"]),
            description=data.get("description") or "",
        )


# --- Karanam ---


class KaranamName(NamedEnum):
    """7 movable and 4 fixed Karanams"""

    BAVA = ("Bava", True, "Indra", "Starting new projects, business ventures")
    BALAVA = ("Balava", True, "Brahma", "Worship, spiritual activities, celebrations")
    KAULAVA = ("Kaulava", True, "Mitra", "Friendships, social gatherings, relationships")
    TAITILA = ("Taitila", True, "Aryama", "Government work, authority matters")
    GARA = ("Gara", True, "Prithvi", "Agriculture, planting, construction")
    VANIJA = ("Vanija", True, "Lakshmi", "Business, trade, financial matters")
    VISHTI = ("Vishti", True, "Yama", "Avoid important activities (Bhadra Karanam)")
    SAKUNI = ("Sakuni", False, "Garuda", "Medicine, healing, curing diseases")
    CHATUSHPADA = ("Chatushpada", False, "Rishabha", "Animal husbandry, vehicle matters")
    NAGA = ("Naga", False, "Serpent", "Permanent works, long-term commitments")
    KIMSTUGHNA = ("Kimstughna", False, "Marut", "Destroying enemies, competitive activities")

    def __init__(self, display_name: str, movable: bool, deity: str, suitable_for: str):
        self.display_name = display_name
        self.movable = movable
        self.deity = deity
        self.suitable_for = suitable_for

    @property
    def is_auspicious(self) -> bool:
        # Vishti (Bhadra) is always inauspicious
        return self is not KaranamName.VISHTI


@dataclass(frozen=True)
class Karanam:
    name: KaranamName
    end_time: datetime

    @property
    def is_auspicious(self) -> bool:
        return self.name.is_auspicious

    def to_dict(self) -> dict:
        return {"name": self.name.name, "end_time": _iso(self.end_time)}

    @classmethod
    def from_dict(cls, data: dict) -> "Karanam":
        return cls(name=KaranamName[data["name"]], end_time=_from_iso(data["end_time"]))
