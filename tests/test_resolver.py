from dataclasses import replace
from datetime import datetime, timedelta
from zoneinfo import ZoneInfo

from panchangam.models.preferences import TimeFormat, TimezoneDisplayMode
from panchangam.models.timings import TimeWindow, TimeWindowKind
from panchangam.modules.panchanga.fallback import synthesize_day
from panchangam.modules.panchanga.resolver import (
    WindowSlot,
    format_instant,
    format_remaining,
    format_time_range,
    is_element_active,
    is_showing_converted_timezone,
    remaining,
    resolve_active_window,
    timezone_display_description,
)

IST = ZoneInfo("Asia/Kolkata")


def _t(hour: int, minute: int = 0) -> datetime:
    return datetime(2024, 1, 21, hour, minute, tzinfo=IST)


def test_rahu_wins_over_overlapping_auspicious_window(chennai, sunday):
    day = synthesize_day(sunday, chennai)
    # Sunday Rahu is 16:30-18:00; add a Nalla Neram that overlaps it
    overlap = TimeWindow(start=_t(16, 0), end=_t(17, 0), kind=TimeWindowKind.NALLA_NERAM)
    day = replace(day, nalla_neram=day.nalla_neram + (overlap,))

    active = resolve_active_window(day, _t(16, 45))
    assert active is not None
    assert active.window == day.rahukaalam
    assert active.slot is WindowSlot.RAHUKAALAM
    assert active.is_auspicious is False


def test_auspicious_window_found_in_list_order(chennai, sunday):
    day = synthesize_day(sunday, chennai)
    active = resolve_active_window(day, _t(9, 15))
    assert active is not None
    assert active.window == day.nalla_neram[0]
    assert active.is_auspicious is True


def test_kuligai_checked_before_nalla_neram(chennai, sunday):
    day = synthesize_day(sunday, chennai)
    # Sunday Kuligai is the 7th eighth of 06:00-18:00: 15:00-16:30, same as the second Nalla Neram
    active = resolve_active_window(day, _t(15, 30))
    assert active.slot is WindowSlot.KULIGAI


def test_shared_boundary_resolves_to_rahu(chennai, sunday):
    day = synthesize_day(sunday, chennai)
    # Sunday Kuligai ends where Rahu starts
    assert day.kuligai.end == day.rahukaalam.start == _t(16, 30)
    active = resolve_active_window(day, _t(16, 30))
    assert active.slot is WindowSlot.RAHUKAALAM
    assert resolve_active_window(day, _t(16, 29)).slot is WindowSlot.KULIGAI


def test_wednesday_noon_resolves_to_rahu(chennai):
    wednesday = datetime(2024, 1, 24, tzinfo=IST).date()
    day = synthesize_day(wednesday, chennai)
    noon = datetime(2024, 1, 24, 12, 0, tzinfo=IST)
    assert day.kuligai.end == day.rahukaalam.start == noon
    assert resolve_active_window(day, noon).slot is WindowSlot.RAHUKAALAM


def test_no_active_window(chennai, sunday):
    day = synthesize_day(sunday, chennai)
    assert resolve_active_window(day, _t(20, 0)) is None
    day = replace(day, kuligai=None)
    assert resolve_active_window(day, _t(20, 0)) is None


def test_element_activity_and_remaining(chennai, sunday):
    day = synthesize_day(sunday, chennai)
    assert is_element_active(day.yogam, _t(8, 30))
    assert not is_element_active(day.yogam, _t(8, 29))
    assert remaining(day.rahukaalam, _t(17, 0)) == timedelta(hours=1)
    assert remaining(day.rahukaalam, _t(12, 0)) is None


def test_format_remaining():
    assert format_remaining(timedelta(hours=2, minutes=5)) == "2h 5m remaining"
    assert format_remaining(timedelta(hours=1)) == "1h 0m remaining"
    assert format_remaining(timedelta(minutes=45)) == "45m remaining"


def test_format_instant_in_location_timezone():
    instant = _t(15, 30)
    assert format_instant(instant, TimezoneDisplayMode.ORIGINAL, "Asia/Kolkata",
                          TimeFormat.TWELVE_HOUR) == "3:30 PM"
    assert format_instant(instant, TimezoneDisplayMode.ORIGINAL, "Asia/Kolkata",
                          TimeFormat.TWENTY_FOUR_HOUR) == "15:30"
    assert format_instant(_t(0, 5), TimezoneDisplayMode.ORIGINAL, "Asia/Kolkata",
                          TimeFormat.TWELVE_HOUR) == "12:05 AM"


def test_format_instant_converts_to_device_timezone():
    instant = _t(15, 30)  # 10:00 UTC, 05:00 in New York (EST)
    text = format_instant(
        instant,
        TimezoneDisplayMode.DEVICE,
        "Asia/Kolkata",
        TimeFormat.TWELVE_HOUR,
        device_timezone="America/New_York",
    )
    assert text == "5:00 AM"
    # Without a device timezone the location's zone is used
    assert format_instant(instant, TimezoneDisplayMode.DEVICE, "Asia/Kolkata",
                          TimeFormat.TWENTY_FOUR_HOUR) == "15:30"


def test_time_range_and_timezone_description(chennai, sunday):
    day = synthesize_day(sunday, chennai)
    assert format_time_range(day.rahukaalam, TimezoneDisplayMode.ORIGINAL, "Asia/Kolkata",
                             TimeFormat.TWENTY_FOUR_HOUR) == "16:30 - 18:00"
    assert is_showing_converted_timezone(TimezoneDisplayMode.DEVICE, "Asia/Kolkata", "Europe/London")
    assert not is_showing_converted_timezone(TimezoneDisplayMode.ORIGINAL, "Asia/Kolkata", "Europe/London")
    assert timezone_display_description(
        TimezoneDisplayMode.DEVICE, "Asia/Kolkata", _t(12), "America/New_York"
    ) == "Times in EST"
