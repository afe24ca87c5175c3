"""
Daily timing windows module.
Calculates Rahukaalam, Yamagandam, Kuligai, Gowri Nalla Neram and the
Abhijit / Brahma Muhurtams from sunrise and sunset.
"""

import uuid

from datetime import date, datetime, timedelta

from ...constants.tables import (
    GOWRI_AUSPICIOUS,
    GOWRI_PATTERNS,
    KULIGAI_PARTS,
    RAHU_KAAL_PARTS,
    YAMAGANDA_PARTS,
)
from ...models.base import weekday_index
from ...models.timings import TimeWindow, TimeWindowKind

# Namespace for deterministic window ids
WINDOW_NAMESPACE = uuid.UUID("2b7d4e61-93c8-5f1a-a0e4-5c9f7b3d1e22")

PARTS_BY_KIND = {
    TimeWindowKind.RAHUKAALAM: RAHU_KAAL_PARTS,
    TimeWindowKind.YAMAGANDAM: YAMAGANDA_PARTS,
    TimeWindowKind.KULIGAI: KULIGAI_PARTS,
}


def window_id(*parts: object) -> str:
    """Stable id for a synthesized window."""
    return str(uuid.uuid5(WINDOW_NAMESPACE, "|".join(str(p) for p in parts)))


def calculate_inauspicious_period(
    sunrise: datetime,
    sunset: datetime,
    weekday: int,
    kind: TimeWindowKind,
    *,
    id_seed: str = "",
) -> TimeWindow:
    """Calculate an inauspicious period based on the day's eighths.

    Args:
        sunrise: Sunrise time
        sunset: Sunset time
        weekday: Day of week (0=Sunday)
        kind: RAHUKAALAM, YAMAGANDAM or KULIGAI
        id_seed: Seed for a deterministic window id (random id when empty)

    Returns:
        The period as a TimeWindow
    """
    part = PARTS_BY_KIND[kind][weekday]
    part_duration = (sunset - sunrise) / 8
    start = sunrise + part_duration * (part - 1)
    end = start + part_duration
    if id_seed:
        return TimeWindow(start=start, end=end, kind=kind, id=window_id(id_seed, kind.name))
    return TimeWindow(start=start, end=end, kind=kind)


def calculate_gowri_nalla_neram(
    sunrise: datetime, sunset: datetime, weekday: int, *, id_seed: str = ""
) -> list[TimeWindow]:
    """Auspicious Gowri segments of the daytime (5 of the 8 eighths)."""
    pattern = GOWRI_PATTERNS[weekday]
    part_duration = (sunset - sunrise) / 8
    windows = []
    for i, state in enumerate(pattern):
        if state not in GOWRI_AUSPICIOUS:
            continue
        start = sunrise + part_duration * i
        kind = TimeWindowKind.GOWRI_NALLA_NERAM
        if id_seed:
            windows.append(
                TimeWindow(
                    start=start,
                    end=start + part_duration,
                    kind=kind,
                    id=window_id(id_seed, kind.name, i),
                )
            )
        else:
            windows.append(TimeWindow(start=start, end=start + part_duration, kind=kind))
    return windows


def calculate_abhijit_muhurtam(
    sunrise: datetime, sunset: datetime, day: date, *, id_seed: str = ""
) -> TimeWindow | None:
    """Calculate Abhijit Muhurtam (24 minutes either side of local noon).

    Returns None on Wednesday, when Abhijit is not observed.
    """
    if weekday_index(day) == 3:
        return None
    midday = sunrise + (sunset - sunrise) / 2
    kind = TimeWindowKind.ABHIJIT_MUHURTAM
    start = midday - timedelta(minutes=24)
    end = midday + timedelta(minutes=24)
    if id_seed:
        return TimeWindow(start=start, end=end, kind=kind, id=window_id(id_seed, kind.name))
    return TimeWindow(start=start, end=end, kind=kind)


def calculate_brahma_muhurtam(sunrise: datetime, *, id_seed: str = "") -> TimeWindow:
    """Brahma Muhurtam: 96 to 48 minutes before sunrise."""
    kind = TimeWindowKind.BRAHMA_MUHURTAM
    start = sunrise - timedelta(minutes=96)
    end = sunrise - timedelta(minutes=48)
    if id_seed:
        return TimeWindow(start=start, end=end, kind=kind, id=window_id(id_seed, kind.name))
    return TimeWindow(start=start, end=end, kind=kind)
