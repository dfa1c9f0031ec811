"""Cascading location selector (city → district → neighborhood → village).

Each ancestor change resets its descendants to the first option of the newly
relevant list, so the tuple never points at an option the catalog does not
offer. The village level uses ``""`` to mean "unselected / not applicable".
"""
from __future__ import annotations

import logging
from urllib.parse import quote

from .config import (
    DEFAULT_CITY,
    DEFAULT_DISTRICT,
    DEFAULT_NEIGHBORHOOD,
    DEFAULT_VILLAGE,
    MAP_SEARCH_URL,
)
from .regions import cities, districts_of, neighborhoods_of, villages_of

logger = logging.getLogger(__name__)


def _first(options: list[str]) -> str:
    return options[0] if options else ""


class LocationSelector:
    """Holds the selected (city, district, neighborhood, village) tuple."""

    def __init__(
        self,
        city: str = DEFAULT_CITY,
        district: str = DEFAULT_DISTRICT,
        neighborhood: str = DEFAULT_NEIGHBORHOOD,
        village: str = DEFAULT_VILLAGE,
    ) -> None:
        self.city = ""
        self.district = ""
        self.neighborhood = ""
        self.village = ""
        # Walk the requested path, falling back to the cascade default at the
        # first level the catalog does not know.
        if not self.set_city(city):
            self.set_city(_first(cities()))
            return
        if not self.set_district(district):
            return
        if not self.set_neighborhood(neighborhood):
            return
        if village:
            self.set_village(village)

    # ── Transitions ───────────────────────────────────────────────────────────

    def set_city(self, city: str) -> bool:
        if city not in cities():
            logger.warning("Rejected unknown city %r", city)
            return False
        self.city = city
        self.district = _first(districts_of(city))
        self.neighborhood = _first(neighborhoods_of(city, self.district))
        self.village = ""
        return True

    def set_district(self, district: str) -> bool:
        if district not in districts_of(self.city):
            logger.warning("Rejected district %r for %s", district, self.city)
            return False
        self.district = district
        self.neighborhood = _first(neighborhoods_of(self.city, district))
        self.village = ""
        return True

    def set_neighborhood(self, neighborhood: str) -> bool:
        if neighborhood not in neighborhoods_of(self.city, self.district):
            logger.warning(
                "Rejected neighborhood %r for %s %s", neighborhood, self.city, self.district
            )
            return False
        self.neighborhood = neighborhood
        self.village = ""
        return True

    def set_village(self, village: str) -> bool:
        """Select a village; a no-op when the neighborhood has no village level.

        ``""`` clears the selection whenever the level is enabled.
        """
        options = villages_of(self.neighborhood)
        if not options:
            return False
        if village and village not in options:
            logger.warning("Rejected village %r for %s", village, self.neighborhood)
            return False
        self.village = village
        return True

    # ── Queries ───────────────────────────────────────────────────────────────

    @property
    def village_enabled(self) -> bool:
        return bool(villages_of(self.neighborhood))

    def as_tuple(self) -> tuple[str, str, str, str]:
        return (self.city, self.district, self.neighborhood, self.village)

    def label(self) -> str:
        return " ".join(part for part in self.as_tuple() if part)

    def map_search_url(self) -> str:
        """Kakao map search link for the selected location."""
        return MAP_SEARCH_URL.format(query=quote(self.label()))

    def __repr__(self) -> str:
        return f"LocationSelector{self.as_tuple()!r}"
