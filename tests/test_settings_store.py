import json

from panchangam.models.location import CHENNAI, DEFAULT_LOCATION, LONDON, MADURAI, Location
from panchangam.models.preferences import (
    DietaryPreference,
    TimeFormat,
    TimezoneDisplayMode,
    UserPreferences,
)
from panchangam.services.settings_store import (
    DEFAULT_LOCATION_KEY,
    USER_PREFERENCES_KEY,
    InMemorySettingsStore,
    LocationSettings,
    PreferenceSettings,
)


def test_default_location_round_trip():
    settings = LocationSettings(InMemorySettingsStore())
    assert settings.default_location() == DEFAULT_LOCATION
    settings.set_default_location(LONDON)
    assert settings.default_location() == LONDON


def test_custom_location_survives_storage():
    custom = Location(city="Salem", state="Tamil Nadu", country="India",
                      latitude=11.66, longitude=78.14, timezone="Asia/Kolkata")
    store = InMemorySettingsStore()
    LocationSettings(store).set_default_location(custom)
    # A fresh reader over the same store sees the same id
    assert LocationSettings(store).default_location().id == custom.id


def test_corrupt_default_location_falls_back():
    store = InMemorySettingsStore({DEFAULT_LOCATION_KEY: "{not json"})
    assert LocationSettings(store).default_location() == DEFAULT_LOCATION
    store.set(DEFAULT_LOCATION_KEY, json.dumps({"city": "Nowhere"}))
    assert LocationSettings(store).default_location() == DEFAULT_LOCATION


def test_favorites():
    settings = LocationSettings(InMemorySettingsStore())
    assert settings.favorites() == []
    settings.add_favorite(CHENNAI)
    settings.add_favorite(CHENNAI)
    settings.add_favorite(MADURAI)
    assert settings.favorites() == [CHENNAI, MADURAI]
    assert settings.is_favorite(MADURAI)

    assert settings.toggle_favorite(MADURAI) is False
    assert settings.favorites() == [CHENNAI]
    assert settings.toggle_favorite(LONDON) is True
    assert settings.favorites() == [CHENNAI, LONDON]

    settings.remove_favorite(CHENNAI)
    assert settings.favorites() == [LONDON]


def test_preferences_round_trip():
    settings = PreferenceSettings(InMemorySettingsStore())
    assert settings.load() == UserPreferences()
    prefs = UserPreferences(
        time_format=TimeFormat.TWENTY_FOUR_HOUR,
        timezone_mode=TimezoneDisplayMode.DEVICE,
        dietary_preference=DietaryPreference.VEGETARIAN,
        notifications_enabled=False,
    )
    settings.save(prefs)
    assert settings.load() == prefs
    assert settings.load().is_vegetarian


def test_unknown_preference_values_use_defaults():
    store = InMemorySettingsStore(
        {USER_PREFERENCES_KEY: json.dumps({"time_format": "sundial", "dietary_preference": "VEGETARIAN"})}
    )
    prefs = PreferenceSettings(store).load()
    assert prefs.time_format is TimeFormat.TWELVE_HOUR
    assert prefs.dietary_preference is DietaryPreference.VEGETARIAN
