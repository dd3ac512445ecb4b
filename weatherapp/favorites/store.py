"""In-memory favorites list mirrored to the key-value store on every change."""

import logging

from weatherapp.storage.persistence import KeyValueStore, load_favorites, save_favorites

logger = logging.getLogger(__name__)


class FavoritesStore:
    """Ordered list of favorite city names.

    Order is insertion order and is meaningful: favorite weather results are
    matched to cities by position. ``add`` refuses duplicates, ``rename`` does
    not check for them.
    """

    def __init__(self, persistence: KeyValueStore):
        self.persistence = persistence
        self._cities: list[str] = []

    @property
    def cities(self) -> list[str]:
        return list(self._cities)

    def __len__(self) -> int:
        return len(self._cities)

    def load(self) -> list[str]:
        self._cities = load_favorites(self.persistence)
        logger.debug("Loaded %d favorites", len(self._cities))
        return self.cities

    def add(self, city: str) -> list[str]:
        """Append ``city`` unless it is empty or already present (exact match)."""
        if not city or city in self._cities:
            return self.cities
        self._replace([*self._cities, city])
        return self.cities

    def remove(self, index: int) -> list[str]:
        self._check_index(index)
        self._replace(self._cities[:index] + self._cities[index + 1:])
        return self.cities

    def rename(self, index: int, new_name: str) -> list[str]:
        self._check_index(index)
        updated = list(self._cities)
        updated[index] = new_name
        self._replace(updated)
        return self.cities

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self._cities):
            raise IndexError(
                f"Favorite index {index} out of range (have {len(self._cities)})"
            )

    def _replace(self, cities: list[str]) -> None:
        # Saved first: a failed write leaves the in-memory list untouched.
        save_favorites(self.persistence, cities)
        self._cities = cities
