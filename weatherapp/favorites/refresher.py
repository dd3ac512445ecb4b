"""Concurrent weather refresh for every favorite city."""

import asyncio
import logging
from collections.abc import Sequence
from enum import StrEnum

from weatherapp.ingest.weather_gateway import WeatherGateway, WeatherLookupError
from weatherapp.models.common import UnitSystem
from weatherapp.models.weather import WeatherSnapshot

logger = logging.getLogger(__name__)


class AggregationPolicy(StrEnum):
    ALL_OR_NOTHING = "all-or-nothing"


# One failing favorite blanks the weather for every favorite. Results are
# matched to cities by position, so a partial list is never returned.
FAVORITES_AGGREGATION_POLICY = AggregationPolicy.ALL_OR_NOTHING


class FavoritesRefresher:
    def __init__(
        self,
        gateway: WeatherGateway,
        policy: AggregationPolicy = FAVORITES_AGGREGATION_POLICY,
    ):
        self.gateway = gateway
        self.policy = policy

    async def refresh(
        self, cities: Sequence[str], units: UnitSystem
    ) -> list[WeatherSnapshot]:
        """Fetch current weather for all ``cities`` at once.

        Returns snapshots in the same order as ``cities``, or ``[]`` if any
        single lookup fails.
        """
        if not cities:
            return []

        tasks = [self.gateway.fetch_current(city, units) for city in cities]
        results = await asyncio.gather(*tasks, return_exceptions=True)

        failures = [r for r in results if isinstance(r, BaseException)]
        for failure in failures:
            if not isinstance(failure, WeatherLookupError):
                raise failure
        if failures:
            logger.warning(
                "Favorites refresh dropped (%s): %d of %d lookups failed, first was %s (%s)",
                self.policy, len(failures), len(results),
                failures[0].city, failures[0].reason,
            )
            return []

        logger.info("Refreshed weather for %d favorites", len(results))
        return list(results)
