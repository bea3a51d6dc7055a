"""
Lemon Route Allocator
Splits a trip's days across cities, favouring popular destinations
"""

from typing import Mapping, Optional, Sequence

from lemon.errors import InvalidInput
from lemon.models.schemas import PlanStop

DEFAULT_POPULARITY = 50

# Higher score = more popular
POPULARITY_SCORES: dict[str, int] = {
    "paris": 100,
    "new york": 99,
    "tokyo": 98,
    "london": 97,
    "rome": 96,
    "barcelona": 95,
    "dubai": 94,
    "singapore": 93,
    "kyoto": 92,
    "istanbul": 91,
}


class RouteAllocator:
    """
    Assigns whole days to each city of a route:

    1. Every city gets floor(total_days / city_count) days
    2. The leftover days go one each to the most popular cities
    """

    def __init__(self, popularity: Optional[Mapping[str, int]] = None):
        self.popularity = dict(POPULARITY_SCORES if popularity is None else popularity)

    def popularity_score(self, city: str) -> int:
        """Look up a city's score, ignoring case and surrounding whitespace."""
        return self.popularity.get(city.strip().lower(), DEFAULT_POPULARITY)

    def allocate(self, ordered_cities: Sequence[str], total_days: int) -> dict[str, int]:
        """
        Allocate days to cities.

        Args:
            ordered_cities: Cities in visiting order; repeats are merged
            total_days: Trip length, at least 1

        Returns:
            Mapping of city -> days, in visiting order, summing to total_days

        Raises:
            InvalidInput: No cities, or fewer than one day
        """
        cities = list(dict.fromkeys(ordered_cities))
        if not cities:
            raise InvalidInput("At least one city is required to allocate days")
        if isinstance(total_days, bool) or not isinstance(total_days, int) or total_days < 1:
            raise InvalidInput("Trip duration must be at least one day")

        base_days = total_days // len(cities)
        remaining = total_days - base_days * len(cities)

        # sorted() is stable, so equally popular cities keep route order
        by_popularity = sorted(cities, key=self.popularity_score, reverse=True)

        days_per_city = {city: base_days for city in cities}
        for i in range(remaining):
            days_per_city[by_popularity[i % len(by_popularity)]] += 1

        return days_per_city

    def build_stops(
        self,
        allocation: Mapping[str, int],
        hotels: Optional[Mapping[str, str]] = None,
    ) -> list[PlanStop]:
        """Turn an allocation into plan stops, attaching known hotels."""
        hotels = hotels or {}
        return [
            PlanStop(name=city, days=days, hotel=hotels.get(city) or None)
            for city, days in allocation.items()
        ]
