"""
Offline fallback synthesizer.

Builds a complete PanchangamDay for any (date, location) from fixed
rotation tables. Output is a pure function of its inputs: window ids are
derived from the date and location, never random.

Elements other than the Yogam are placeholders, and the Tamil date is an
approximation from a month-threshold table, not a calendrical authority.
"""

import logging

from datetime import date, datetime, time

from ...constants.tables import (
    EKADASI_RESIDUE,
    FALLBACK_RAHU_HOURS,
    OBSERVANCE_CYCLE,
    PRADOSHAM_RESIDUE,
    TAMIL_MONTH_THRESHOLDS,
)
from ...models.base import weekday_index
from ...models.calendar import TamilDate, TamilMonth, TamilYear, Vaaram
from ...models.day import PanchangamDay
from ...models.dietary import DietaryCategory, DietaryStatus, ObservanceType
from ...models.elements import (
    Karanam,
    KaranamName,
    Nakshatram,
    NakshatramName,
    Paksha,
    Thithi,
    ThithiName,
    Yogam,
    YogamName,
)
from ...models.location import Location
from ...models.timings import TimeWindow, TimeWindowKind
from .dietary import next_observance
from .windows import (
    calculate_abhijit_muhurtam,
    calculate_brahma_muhurtam,
    calculate_gowri_nalla_neram,
    calculate_inauspicious_period,
    window_id,
)

logger = logging.getLogger(__name__)

# Wall-clock times in the location's timezone
SUNRISE = time(6, 42)
SUNSET = time(17, 54)
NALLA_NERAM = ((time(9, 15), time(10, 30)), (time(15, 0), time(16, 30)))
YOGAM_SPAN = (time(8, 30), time(14, 15))
NAKSHATRAM_END = time(14, 45)
THITHI_END = time(16, 30)
KARANAM_END = time(10, 15)

# Nominal 12-hour day the Rahu table is laid on; Yama and Kuligai use the same grid
NOMINAL_DAY = (time(6, 0), time(18, 0))


def approximate_tamil_date(day: date) -> TamilDate:
    """Approximate Gregorian -> Tamil date conversion."""
    before, threshold, after = TAMIL_MONTH_THRESHOLDS[day.month]
    month_name = before if day.day < threshold else after
    return TamilDate(
        day=((day.day - 14 + 30) % 30) + 1,
        month=TamilMonth[month_name.upper()],
        year=TamilYear.for_gregorian(day),
        weekday=Vaaram.for_date(day),
    )


def fallback_dietary_status(day: date) -> DietaryStatus:
    residue = day.day % OBSERVANCE_CYCLE
    if residue == EKADASI_RESIDUE:
        return DietaryStatus(category=DietaryCategory.STRICT_FAST)
    if residue == PRADOSHAM_RESIDUE:
        return DietaryStatus(
            category=DietaryCategory.AVOID_NON_VEG,
            reason=ObservanceType.PRADOSHAM.display_name,
        )
    return DietaryStatus(category=DietaryCategory.REGULAR, next_observance=next_observance(day))


def synthesize_day(day: date, location: Location) -> PanchangamDay:
    """Synthesize a deterministic PanchangamDay for ``day`` at ``location``."""
    zone = location.zone
    seed = f"{day.isoformat()}|{location.id}"
    weekday = weekday_index(day)

    def at(t: time) -> datetime:
        return datetime.combine(day, t, tzinfo=zone)

    sunrise, sunset = at(SUNRISE), at(SUNSET)

    nalla_neram = tuple(
        TimeWindow(
            start=at(start),
            end=at(end),
            kind=TimeWindowKind.NALLA_NERAM,
            id=window_id(seed, TimeWindowKind.NALLA_NERAM.name, i),
        )
        for i, (start, end) in enumerate(NALLA_NERAM)
    )

    (rahu_start_h, rahu_start_m), (rahu_end_h, rahu_end_m) = FALLBACK_RAHU_HOURS[weekday]
    rahukaalam = TimeWindow(
        start=at(time(rahu_start_h, rahu_start_m)),
        end=at(time(rahu_end_h, rahu_end_m)),
        kind=TimeWindowKind.RAHUKAALAM,
        id=window_id(seed, TimeWindowKind.RAHUKAALAM.name),
    )
    nominal_start, nominal_end = at(NOMINAL_DAY[0]), at(NOMINAL_DAY[1])
    yamagandam = calculate_inauspicious_period(
        nominal_start, nominal_end, weekday, TimeWindowKind.YAMAGANDAM, id_seed=seed
    )
    kuligai = calculate_inauspicious_period(
        nominal_start, nominal_end, weekday, TimeWindowKind.KULIGAI, id_seed=seed
    )

    supplementary = calculate_gowri_nalla_neram(sunrise, sunset, weekday, id_seed=seed)
    abhijit = calculate_abhijit_muhurtam(sunrise, sunset, day, id_seed=seed)
    if abhijit is not None:
        supplementary.append(abhijit)
    supplementary.append(calculate_brahma_muhurtam(sunrise, id_seed=seed))

    yogam_start, yogam_end = YOGAM_SPAN
    yogam = Yogam(
        name=YogamName.from_index(day.timetuple().tm_yday),
        start_time=at(yogam_start),
        end_time=at(yogam_end),
    )

    dietary_status = fallback_dietary_status(day)

    logger.debug(f"Synthesized fallback day {day.isoformat()} for {location.name}")
    return PanchangamDay(
        date=day,
        tamil_date=approximate_tamil_date(day),
        location=location,
        nakshatram=Nakshatram(name=NakshatramName.ROHINI, end_time=at(NAKSHATRAM_END)),
        thithi=Thithi(name=ThithiName.PANCHAMI, paksha=Paksha.SHUKLA, end_time=at(THITHI_END)),
        yogam=yogam,
        karanam=Karanam(name=KaranamName.BAVA, end_time=at(KARANAM_END)),
        sunrise=sunrise,
        sunset=sunset,
        nalla_neram=nalla_neram,
        rahukaalam=rahukaalam,
        yamagandam=yamagandam,
        kuligai=kuligai,
        supplementary_windows=tuple(supplementary),
        dietary_status=dietary_status,
        upcoming_observance=dietary_status.next_observance,
    )
