"""
Remote response -> PanchangamDay mapping.

Cosmetic enumerants fall back to named defaults when the backend sends an
unknown string. The root date, sunrise/sunset and the Rahu and Yama
windows are mandatory: failure to parse any of them raises MappingError
and no day is produced.
"""

import logging

from datetime import date, datetime, time, timedelta
from typing import Any

from pydantic import ValidationError

from ..models.base import parse_day, parse_instant
from ..models.calendar import TamilDate, TamilMonth, TamilYear, Vaaram
from ..models.day import PanchangamDay
from ..models.dietary import (
    DietaryCategory,
    DietaryStatus,
    ObservanceType,
    UpcomingObservance,
)
from ..models.elements import (
    Karanam,
    KaranamName,
    Nakshatram,
    NakshatramName,
    Paksha,
    Thithi,
    ThithiName,
    Yogam,
    YogamName,
    YogamType,
)
from ..models.location import Location
from ..models.timings import TimeWindow, TimeWindowKind
from ..modules.panchanga.windows import window_id
from .errors import MappingError
from .schemas import NextAuspiciousWire, PanchangamResponse, TimeRangeWire

logger = logging.getLogger(__name__)

# Defaults for unrecognized enumerants
DEFAULT_TAMIL_MONTH = TamilMonth.THAI
DEFAULT_NAKSHATRAM = NakshatramName.ROHINI
DEFAULT_THITHI = ThithiName.PANCHAMI
DEFAULT_PAKSHA = Paksha.SHUKLA
DEFAULT_YOGAM = YogamName.SIDDHI
DEFAULT_YOGAM_TYPE = YogamType.NEUTRAL
DEFAULT_KARANAM = KaranamName.BAVA
DEFAULT_OBSERVANCE = ObservanceType.EKADASI
DEFAULT_DIETARY_CATEGORY = DietaryCategory.REGULAR


def map_tamil_month(name: str | None) -> TamilMonth:
    return TamilMonth.lookup(name) or DEFAULT_TAMIL_MONTH


def map_vaaram(name: str | None, day: date) -> Vaaram:
    """Unknown weekday names resolve to the weekday of ``day``."""
    return Vaaram.lookup(name) or Vaaram.for_date(day)


def map_tamil_year(name: str | None, day: date) -> TamilYear:
    return TamilYear.lookup(name) or TamilYear.for_gregorian(day)


def map_nakshatram_name(name: str | None) -> NakshatramName:
    return NakshatramName.lookup(name) or DEFAULT_NAKSHATRAM


def map_thithi_name(name: str | None) -> ThithiName:
    return ThithiName.lookup(name) or DEFAULT_THITHI


def map_paksha(name: str | None) -> Paksha:
    return Paksha.lookup(name) or DEFAULT_PAKSHA


def map_yogam_name(name: str | None) -> YogamName:
    return YogamName.lookup(name) or DEFAULT_YOGAM


def map_yogam_type(name: str | None) -> YogamType:
    return YogamType.lookup(name) or DEFAULT_YOGAM_TYPE


def map_karanam_name(name: str | None) -> KaranamName:
    return KaranamName.lookup(name) or DEFAULT_KARANAM


def map_observance_type(name: str | None) -> ObservanceType:
    return ObservanceType.lookup(name) or DEFAULT_OBSERVANCE


def map_dietary_category(name: str | None) -> DietaryCategory:
    return DietaryCategory.lookup(name) or DEFAULT_DIETARY_CATEGORY


def _required_instant(value: str, field_name: str) -> datetime:
    try:
        return parse_instant(value)
    except ValueError as e:
        raise MappingError(f"Invalid {field_name}: {value!r}") from e


def _instant_or(value: str | None, default: datetime) -> datetime:
    if not value:
        return default
    try:
        return parse_instant(value)
    except ValueError:
        logger.debug(f"Unparseable instant {value!r}, using {default.isoformat()}")
        return default


def _required_window(wire: TimeRangeWire, kind: TimeWindowKind, seed: str) -> TimeWindow:
    start = _required_instant(wire.start_time, f"{kind.wire_tag}.startTime")
    end = _required_instant(wire.end_time, f"{kind.wire_tag}.endTime")
    try:
        return TimeWindow(start=start, end=end, kind=kind, id=window_id(seed, kind.name))
    except ValueError as e:
        raise MappingError(f"Invalid {kind.wire_tag} window: {e}") from e


def _optional_window(
    raw: Any, kind: TimeWindowKind, seed: str, index: int | None = None
) -> TimeWindow | None:
    """Parse one optional window; malformed entries give None.

    Ids derive from ``seed``, the kind and the list position, so mapping
    the same response twice yields equal days.
    """
    if raw is None:
        return None
    try:
        wire = raw if isinstance(raw, TimeRangeWire) else TimeRangeWire.model_validate(raw)
        return TimeWindow(
            start=parse_instant(wire.start_time),
            end=parse_instant(wire.end_time),
            kind=kind,
            id=window_id(seed, kind.name) if index is None else window_id(seed, kind.name, index),
        )
    except (ValidationError, ValueError, TypeError) as e:
        logger.warning(f"Dropping malformed {kind.wire_tag} window: {e}")
        return None


def _window_list(
    raw: list[Any] | None, kind: TimeWindowKind, seed: str
) -> tuple[TimeWindow, ...]:
    windows = (_optional_window(entry, kind, seed, i) for i, entry in enumerate(raw or []))
    return tuple(w for w in windows if w is not None)


def _observance_date(nxt: NextAuspiciousWire, day: date) -> date | None:
    """Explicit date when it parses, else ``day`` + daysAway; None when neither works."""
    if nxt.date:
        try:
            return parse_day(nxt.date)
        except ValueError:
            logger.debug(f"Unparseable next observance date {nxt.date!r}")
    try:
        return day + timedelta(days=nxt.days_away)
    except OverflowError:
        logger.warning(f"Next observance {nxt.days_away} days away is out of range, dropping it")
        return None


def _map_dietary(response: PanchangamResponse, day: date) -> DietaryStatus:
    food = response.food_status
    upcoming = None
    if food.next_auspicious:
        nxt = food.next_auspicious
        target = _observance_date(nxt, day)
        if target is not None:
            observance = map_observance_type(nxt.name)
            upcoming = UpcomingObservance(
                name=nxt.name,
                type=observance,
                date=target,
                description=observance.description,
            )
    return DietaryStatus(
        category=map_dietary_category(food.type),
        reason=food.message,
        next_observance=upcoming,
    )


def map_response(raw: PanchangamResponse | dict, location: Location) -> PanchangamDay:
    """Map one remote day into a PanchangamDay.

    Args:
        raw: Validated wire model or the decoded JSON object
        location: Location the request was made for

    Returns:
        The mapped day

    Raises:
        MappingError: when a mandatory field is missing or invalid
    """
    if isinstance(raw, PanchangamResponse):
        response = raw
    else:
        try:
            response = PanchangamResponse.model_validate(raw)
        except ValidationError as e:
            raise MappingError(f"Response does not match schema: {e.error_count()} errors") from e

    try:
        day = parse_day(response.date)
    except ValueError as e:
        raise MappingError(f"Invalid date: {response.date!r}") from e

    seed = f"{day.isoformat()}|{location.id}"
    timings = response.timings
    sunrise = _required_instant(timings.sunrise, "sunrise")
    sunset = _required_instant(timings.sunset, "sunset")
    rahukaalam = _required_window(timings.rahukaalam, TimeWindowKind.RAHUKAALAM, seed)
    yamagandam = _required_window(timings.yamagandam, TimeWindowKind.YAMAGANDAM, seed)

    # Element instants that fail to parse fall back to the start of the day
    day_start = datetime.combine(day, time(0, 0), tzinfo=location.zone)

    tamil = response.tamil_date
    try:
        tamil_date = TamilDate(
            day=tamil.day,
            month=map_tamil_month(tamil.month),
            year=map_tamil_year(tamil.year, day),
            weekday=map_vaaram(tamil.weekday, day),
        )
    except ValueError as e:
        raise MappingError(f"Invalid Tamil date: {e}") from e

    nak = response.nakshatram
    nakshatram_name = map_nakshatram_name(nak.name)
    nakshatram = Nakshatram(
        name=nakshatram_name,
        end_time=_instant_or(nak.end_time, day_start),
        lord=nak.lord or nakshatram_name.lord,
    )

    th = response.thithi
    thithi = Thithi(
        name=map_thithi_name(th.name),
        paksha=map_paksha(th.paksha),
        end_time=_instant_or(th.end_time, day_start),
    )

    yg = response.yogam
    yogam_start = _instant_or(yg.start_time, day_start)
    yogam_end = max(_instant_or(yg.end_time, day_start), yogam_start)
    yogam = Yogam(
        name=map_yogam_name(yg.name),
        type=map_yogam_type(yg.type),
        start_time=yogam_start,
        end_time=yogam_end,
    )

    karanam = Karanam(
        name=map_karanam_name(response.karanam.name),
        end_time=_instant_or(response.karanam.end_time, day_start),
    )

    dietary_status = _map_dietary(response, day)

    try:
        return PanchangamDay(
            date=day,
            tamil_date=tamil_date,
            location=location,
            nakshatram=nakshatram,
            thithi=thithi,
            yogam=yogam,
            karanam=karanam,
            sunrise=sunrise,
            sunset=sunset,
            nalla_neram=_window_list(timings.nalla_neram, TimeWindowKind.NALLA_NERAM, seed),
            rahukaalam=rahukaalam,
            yamagandam=yamagandam,
            kuligai=_optional_window(timings.kuligai, TimeWindowKind.KULIGAI, seed),
            supplementary_windows=_window_list(
                timings.gowri_nalla_neram, TimeWindowKind.GOWRI_NALLA_NERAM, seed
            ),
            dietary_status=dietary_status,
            upcoming_observance=dietary_status.next_observance,
        )
    except ValueError as e:
        raise MappingError(str(e)) from e
