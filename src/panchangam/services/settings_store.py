"""
Settings persistence boundary.

Values are stored as opaque JSON blobs behind a minimal key/value store.
Locations and preferences are always read and written whole; there is no
partial field update.
"""

import json
import logging

from typing import Protocol

from ..models.location import DEFAULT_LOCATION, Location
from ..models.preferences import UserPreferences

logger = logging.getLogger(__name__)

DEFAULT_LOCATION_KEY = "panchangam.default_location"
FAVORITE_LOCATIONS_KEY = "panchangam.favorite_locations"
USER_PREFERENCES_KEY = "panchangam.user_preferences"


class SettingsStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class InMemorySettingsStore:
    """Dict-backed store for tests and ephemeral sessions."""

    def __init__(self, initial: dict[str, str] | None = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class LocationSettings:
    """Default location and favorites."""

    def __init__(self, store: SettingsStore):
        self.store = store

    def default_location(self) -> Location:
        blob = self.store.get(DEFAULT_LOCATION_KEY)
        if blob is None:
            return DEFAULT_LOCATION
        try:
            return Location.from_dict(json.loads(blob))
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Stored default location unreadable, using {DEFAULT_LOCATION.name}: {e}")
            return DEFAULT_LOCATION

    def set_default_location(self, location: Location) -> None:
        self.store.set(DEFAULT_LOCATION_KEY, json.dumps(location.to_dict()))

    def favorites(self) -> list[Location]:
        blob = self.store.get(FAVORITE_LOCATIONS_KEY)
        if blob is None:
            return []
        try:
            return [Location.from_dict(item) for item in json.loads(blob)]
        except (ValueError, KeyError, TypeError) as e:
            logger.warning(f"Stored favorites unreadable, starting empty: {e}")
            return []

    def set_favorites(self, locations: list[Location]) -> None:
        self.store.set(
            FAVORITE_LOCATIONS_KEY, json.dumps([loc.to_dict() for loc in locations])
        )

    def is_favorite(self, location: Location) -> bool:
        return any(fav.id == location.id for fav in self.favorites())

    def add_favorite(self, location: Location) -> None:
        favorites = self.favorites()
        if not any(fav.id == location.id for fav in favorites):
            self.set_favorites(favorites + [location])

    def remove_favorite(self, location: Location) -> None:
        self.set_favorites([fav for fav in self.favorites() if fav.id != location.id])

    def toggle_favorite(self, location: Location) -> bool:
        """Toggle membership; returns True when now a favorite."""
        if self.is_favorite(location):
            self.remove_favorite(location)
            return False
        self.add_favorite(location)
        return True


class PreferenceSettings:
    def __init__(self, store: SettingsStore):
        self.store = store

    def load(self) -> UserPreferences:
        blob = self.store.get(USER_PREFERENCES_KEY)
        if blob is None:
            return UserPreferences()
        try:
            return UserPreferences.from_dict(json.loads(blob))
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Stored preferences unreadable, using defaults: {e}")
            return UserPreferences()

    def save(self, preferences: UserPreferences) -> None:
        self.store.set(USER_PREFERENCES_KEY, json.dumps(preferences.to_dict()))
