"""
User display and dietary preferences.
"""

from dataclasses import dataclass

from .base import NamedEnum


class TimeFormat(NamedEnum):
    TWELVE_HOUR = ("12 Hour", "3:30 PM")
    TWENTY_FOUR_HOUR = ("24 Hour", "15:30")

    def __init__(self, display_name: str, example: str):
        self.display_name = display_name
        self.example = example


class TimezoneDisplayMode(NamedEnum):
    """Which clock times are shown in"""

    ORIGINAL = ("Original", "Show times in the selected location's timezone")
    DEVICE = ("Device", "Convert times to the device's local timezone")

    def __init__(self, display_name: str, description: str):
        self.display_name = display_name
        self.description = description


class DietaryPreference(NamedEnum):
    VEGETARIAN = ("Vegetarian",)
    NON_VEGETARIAN = ("Non-Vegetarian",)

    def __init__(self, display_name: str):
        self.display_name = display_name


@dataclass(frozen=True)
class UserPreferences:
    time_format: TimeFormat = TimeFormat.TWELVE_HOUR
    timezone_mode: TimezoneDisplayMode = TimezoneDisplayMode.ORIGINAL
    dietary_preference: DietaryPreference = DietaryPreference.NON_VEGETARIAN
    notifications_enabled: bool = True

    @property
    def is_vegetarian(self) -> bool:
        return self.dietary_preference is DietaryPreference.VEGETARIAN

    def to_dict(self) -> dict:
        return {
            "time_format": self.time_format.name,
            "timezone_mode": self.timezone_mode.name,
            "dietary_preference": self.dietary_preference.name,
            "notifications_enabled": self.notifications_enabled,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "UserPreferences":
        defaults = cls()
        return cls(
            time_format=TimeFormat.lookup(data.get("time_format")) or defaults.time_format,
            timezone_mode=(
                TimezoneDisplayMode.lookup(data.get("timezone_mode")) or defaults.timezone_mode
            ),
            dietary_preference=(
                DietaryPreference.lookup(data.get("dietary_preference"))
                or defaults.dietary_preference
            ),
            notifications_enabled=bool(
                data.get("notifications_enabled", defaults.notifications_enabled)
            ),
        )
