"""
Temporal resolution: which window is active now, how long it has left,
and how instants are rendered for display.

All functions are pure; the current instant and timezones are parameters.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from zoneinfo import ZoneInfo

from ...models.day import PanchangamDay
from ...models.elements import Yogam
from ...models.preferences import TimeFormat, TimezoneDisplayMode
from ...models.timings import TimeWindow


class WindowSlot(Enum):
    """Where in the day record an active window was found"""

    RAHUKAALAM = "rahukaalam"
    YAMAGANDAM = "yamagandam"
    KULIGAI = "kuligai"
    NALLA_NERAM = "nalla_neram"


@dataclass(frozen=True)
class ActiveWindow:
    window: TimeWindow
    slot: WindowSlot
    is_auspicious: bool


def resolve_active_window(day: PanchangamDay, now: datetime) -> ActiveWindow | None:
    """Return the window in force at ``now``, if any.

    Checked in priority order Rahu, Yama, Kuligai, then each Nalla Neram
    window in list order; the first match wins so inauspicious periods
    take precedence over overlapping auspicious ones.
    """
    candidates: list[tuple[TimeWindow | None, WindowSlot, bool]] = [
        (day.rahukaalam, WindowSlot.RAHUKAALAM, False),
        (day.yamagandam, WindowSlot.YAMAGANDAM, False),
        (day.kuligai, WindowSlot.KULIGAI, False),
    ]
    candidates.extend((w, WindowSlot.NALLA_NERAM, True) for w in day.nalla_neram)

    for window, slot, auspicious in candidates:
        if window is not None and window.contains(now):
            return ActiveWindow(window=window, slot=slot, is_auspicious=auspicious)
    return None


def is_element_active(yogam: Yogam, now: datetime) -> bool:
    return yogam.is_active(now)


def remaining(window: TimeWindow, now: datetime) -> timedelta | None:
    return window.remaining(now)


def format_remaining(delta: timedelta) -> str:
    """ "2h 5m remaining" from an hour up, else "45m remaining"."""
    total_minutes = int(delta.total_seconds() // 60)
    hours, minutes = divmod(total_minutes, 60)
    if hours > 0:
        return f"{hours}h {minutes}m remaining"
    return f"{minutes}m remaining"


def display_timezone(
    mode: TimezoneDisplayMode,
    location_timezone: str,
    device_timezone: str | None = None,
) -> ZoneInfo:
    """Concrete timezone for a display mode.

    Device mode without a known device timezone falls back to the
    location's timezone.
    """
    if mode is TimezoneDisplayMode.DEVICE and device_timezone:
        return ZoneInfo(device_timezone)
    return ZoneInfo(location_timezone)


def format_instant(
    instant: datetime,
    mode: TimezoneDisplayMode,
    location_timezone: str,
    time_format: TimeFormat,
    *,
    device_timezone: str | None = None,
) -> str:
    """Render an instant as "3:30 PM" or "15:30" in the display timezone."""
    local = instant.astimezone(display_timezone(mode, location_timezone, device_timezone))
    if time_format is TimeFormat.TWENTY_FOUR_HOUR:
        return f"{local.hour:02d}:{local.minute:02d}"
    hour = local.hour % 12 or 12
    suffix = "AM" if local.hour < 12 else "PM"
    return f"{hour}:{local.minute:02d} {suffix}"


def format_time_range(
    window: TimeWindow,
    mode: TimezoneDisplayMode,
    location_timezone: str,
    time_format: TimeFormat,
    *,
    device_timezone: str | None = None,
) -> str:
    start = format_instant(
        window.start, mode, location_timezone, time_format, device_timezone=device_timezone
    )
    end = format_instant(
        window.end, mode, location_timezone, time_format, device_timezone=device_timezone
    )
    return f"{start} - {end}"


def is_showing_converted_timezone(
    mode: TimezoneDisplayMode,
    location_timezone: str,
    device_timezone: str | None,
) -> bool:
    return (
        mode is TimezoneDisplayMode.DEVICE
        and device_timezone is not None
        and device_timezone != location_timezone
    )


def timezone_display_description(
    mode: TimezoneDisplayMode,
    location_timezone: str,
    at: datetime,
    device_timezone: str | None = None,
) -> str:
    """e.g. "Times in IST" for the resolved zone's abbreviation at ``at``."""
    zone = display_timezone(mode, location_timezone, device_timezone)
    return f"Times in {at.astimezone(zone).tzname()}"
