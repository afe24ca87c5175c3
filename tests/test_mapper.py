from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from panchangam.models.calendar import TamilMonth, Vaaram
from panchangam.models.dietary import DietaryCategory, ObservanceType
from panchangam.models.elements import (
    KaranamName,
    NakshatramName,
    Paksha,
    ThithiName,
    YogamName,
    YogamType,
)
from panchangam.models.location import LONDON
from panchangam.models.timings import TimeWindowKind
from panchangam.services.errors import DecodeError, MappingError
from panchangam.services.mapper import (
    DEFAULT_KARANAM,
    DEFAULT_NAKSHATRAM,
    DEFAULT_OBSERVANCE,
    DEFAULT_TAMIL_MONTH,
    DEFAULT_THITHI,
    map_response,
    map_tamil_year,
    map_vaaram,
)
from panchangam.services.schemas import NextAuspiciousWire, PanchangamResponse

IST = ZoneInfo("Asia/Kolkata")


def test_maps_well_formed_chennai_day(payload, chennai):
    day = map_response(payload, chennai)

    assert day.date == date(2024, 1, 21)
    assert day.location == chennai
    assert day.tamil_date.month is TamilMonth.THAI
    assert day.tamil_date.day == 7
    assert day.tamil_date.year.name == "Shobhakrut"
    assert day.tamil_date.weekday is Vaaram.NYAYIRU

    assert day.nakshatram.name is NakshatramName.REVATHI
    assert day.thithi.name is ThithiName.EKADASI
    assert day.thithi.paksha is Paksha.SHUKLA
    assert day.yogam.name is YogamName.BRAHMA
    assert day.yogam.type is YogamType.AUSPICIOUS
    assert day.karanam.name is KaranamName.VANIJA

    assert day.sunrise == datetime(2024, 1, 21, 6, 38, tzinfo=IST)
    assert day.rahukaalam.start == datetime(2024, 1, 21, 16, 30, tzinfo=IST)
    assert day.rahukaalam.kind is TimeWindowKind.RAHUKAALAM
    assert len(day.nalla_neram) == 2
    assert day.kuligai is not None
    assert [w.kind for w in day.supplementary_windows] == [TimeWindowKind.GOWRI_NALLA_NERAM] * 2

    assert day.dietary_status.category is DietaryCategory.STRICT_FAST
    nxt = day.dietary_status.next_observance
    assert nxt.type is ObservanceType.PRADOSHAM
    assert nxt.date == date(2024, 1, 23)
    assert day.upcoming_observance == nxt


def test_accepts_validated_wire_model(payload, chennai):
    response = PanchangamResponse.model_validate(payload)
    assert map_response(response, chennai) == map_response(payload, chennai)


def test_unknown_enumerants_use_defaults(payload, chennai):
    payload["tamilDate"]["month"] = "Smarch"
    payload["nakshatram"]["name"] = "Nibiru"
    payload["nakshatram"]["lord"] = None
    payload["thithi"]["name"] = "Decima"
    payload["karanam"]["name"] = "Unknown"
    payload["foodStatus"]["type"] = "MYSTERY"
    payload["foodStatus"]["nextAuspicious"]["name"] = "Somethingam"

    day = map_response(payload, chennai)
    assert day.tamil_date.month is DEFAULT_TAMIL_MONTH
    assert day.nakshatram.name is DEFAULT_NAKSHATRAM
    assert day.nakshatram.lord == DEFAULT_NAKSHATRAM.lord
    assert day.thithi.name is DEFAULT_THITHI
    assert day.karanam.name is DEFAULT_KARANAM
    assert day.dietary_status.category is DietaryCategory.REGULAR
    assert day.dietary_status.next_observance.type is DEFAULT_OBSERVANCE
    assert day.dietary_status.next_observance.name == "Somethingam"


def test_unknown_weekday_and_year_derive_from_date():
    assert map_vaaram("Caturday", date(2024, 1, 24)) is Vaaram.BUDHAN
    assert map_tamil_year("Nonesuch", date(2024, 5, 1)).name == "Krodhi"


def test_invalid_element_instant_falls_back_to_day_start(payload, chennai):
    payload["nakshatram"]["endTime"] = "quarter past two"
    day = map_response(payload, chennai)
    assert day.nakshatram.end_time == datetime(2024, 1, 21, 0, 0, tzinfo=IST)


def test_malformed_optional_windows_are_dropped(payload, chennai):
    payload["timings"]["gowriNallaNeram"][1] = {"startTime": "noon"}
    payload["timings"]["kuligai"] = {"startTime": "bad", "endTime": "worse"}
    day = map_response(payload, chennai)
    assert len(day.supplementary_windows) == 1
    assert day.kuligai is None


@pytest.mark.parametrize(
    "mutate",
    [
        lambda p: p["timings"]["rahukaalam"].update(startTime="not a time"),
        lambda p: p["timings"]["yamagandam"].update(endTime="2024-01-21T10:00:00"),
        lambda p: p["timings"].update(sunrise="06:38"),
        lambda p: p.update(date="21/01/2024"),
        lambda p: p["timings"].pop("rahukaalam"),
    ],
    ids=["rahu-start", "yama-no-offset", "sunrise", "date", "missing-rahu"],
)
def test_mandatory_fields_raise_mapping_error(payload, chennai, mutate):
    mutate(payload)
    with pytest.raises(MappingError):
        map_response(payload, chennai)


def test_sunrise_after_sunset_is_rejected(payload, chennai):
    payload["timings"]["sunrise"], payload["timings"]["sunset"] = (
        payload["timings"]["sunset"],
        payload["timings"]["sunrise"],
    )
    with pytest.raises(MappingError):
        map_response(payload, chennai)


def test_mapping_error_is_a_decode_error():
    assert issubclass(MappingError, DecodeError)
    assert MappingError.code == "mapping_failure"
    assert MappingError.user_message == DecodeError.user_message


def test_next_observance_date_from_days_away(payload, chennai):
    payload["foodStatus"]["nextAuspicious"] = {"name": "Ekadasi", "daysAway": 4}
    day = map_response(payload, chennai)
    assert day.dietary_status.next_observance.date == date(2024, 1, 25)
    assert day.dietary_status.next_observance.type is ObservanceType.EKADASI


def test_mapping_same_payload_twice_is_equal(payload, chennai):
    first = map_response(payload, chennai)
    second = map_response(payload, chennai)
    assert first == second
    assert first.rahukaalam.id == second.rahukaalam.id
    assert [w.id for w in first.nalla_neram] == [w.id for w in second.nalla_neram]
    assert first.rahukaalam.id != first.yamagandam.id
    assert map_response(payload, LONDON).rahukaalam.id != first.rahukaalam.id


def test_explicit_observance_date_wins_over_days_away(payload, chennai):
    payload["foodStatus"]["nextAuspicious"] = {
        "name": "Pradosham", "date": "2024-01-23", "daysAway": 5,
    }
    day = map_response(payload, chennai)
    assert day.upcoming_observance.date == date(2024, 1, 23)


def test_out_of_range_days_away_is_rejected(payload, chennai):
    payload["foodStatus"]["nextAuspicious"] = {"name": "Pradosham", "daysAway": 10**7}
    with pytest.raises(MappingError):
        map_response(payload, chennai)


def test_unrepresentable_observance_date_is_dropped(payload, chennai):
    response = PanchangamResponse.model_validate(payload)
    response.food_status.next_auspicious = NextAuspiciousWire.model_construct(
        name="Pradosham", date=None, days_away=10**7
    )
    day = map_response(response, chennai)
    assert day.upcoming_observance is None
    assert day.dietary_status.next_observance is None
    assert day.rahukaalam.kind is TimeWindowKind.RAHUKAALAM
