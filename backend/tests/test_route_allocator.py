"""
Tests for RouteAllocator
"""

import pytest

from lemon.errors import InvalidInput
from lemon.services.route_allocator import DEFAULT_POPULARITY, RouteAllocator


@pytest.fixture
def allocator():
    """Allocator with the built-in popularity table."""
    return RouteAllocator()


class TestPopularity:
    """Tests for popularity lookups."""

    def test_known_city_is_case_insensitive(self, allocator):
        assert allocator.popularity_score("Paris") == 100
        assert allocator.popularity_score("  NEW YORK ") == 99

    def test_unknown_city_gets_default(self, allocator):
        assert allocator.popularity_score("Reykjavik") == DEFAULT_POPULARITY

    def test_custom_table(self):
        allocator = RouteAllocator({"lisbon": 80})
        assert allocator.popularity_score("Lisbon") == 80
        assert allocator.popularity_score("Paris") == DEFAULT_POPULARITY


class TestAllocate:
    """Tests for day allocation."""

    def test_remainder_goes_to_most_popular(self, allocator):
        """10 days over 3 cities: the extra day goes to Paris."""
        days = allocator.allocate(["Paris", "Rome", "Tokyo"], 10)
        assert days == {"Paris": 4, "Rome": 3, "Tokyo": 3}

    def test_fewer_days_than_cities(self, allocator):
        """Least popular city gets zero days."""
        days = allocator.allocate(["Rome", "Paris", "Tokyo"], 2)
        assert days == {"Rome": 0, "Paris": 1, "Tokyo": 1}

    def test_even_split(self, allocator):
        days = allocator.allocate(["Paris", "Rome"], 8)
        assert days == {"Paris": 4, "Rome": 4}

    def test_ties_keep_route_order(self, allocator):
        """Unknown cities share the default score; earlier cities win."""
        days = allocator.allocate(["Lyon", "Nice", "Porto"], 5)
        assert days == {"Lyon": 2, "Nice": 2, "Porto": 1}

    def test_output_keeps_route_order(self, allocator):
        days = allocator.allocate(["Tokyo", "Kyoto", "Paris"], 4)
        assert list(days) == ["Tokyo", "Kyoto", "Paris"]

    @pytest.mark.parametrize("total_days", [1, 2, 5, 17, 99])
    @pytest.mark.parametrize(
        "cities",
        [
            ["Paris"],
            ["Rome", "Dubai"],
            ["Lyon", "Paris", "Oslo", "Kyoto"],
            ["A", "B", "C", "D", "E", "F", "G"],
        ],
    )
    def test_days_sum_to_total(self, allocator, cities, total_days):
        days = allocator.allocate(cities, total_days)
        assert sum(days.values()) == total_days
        assert sorted(days) == sorted(cities)
        assert all(d >= 0 for d in days.values())

    def test_repeated_city_counted_once(self, allocator):
        days = allocator.allocate(["Rome", "Paris", "Rome"], 5)
        assert days == {"Rome": 2, "Paris": 3}

    def test_empty_cities_rejected(self, allocator):
        with pytest.raises(InvalidInput):
            allocator.allocate([], 5)

    @pytest.mark.parametrize("total_days", [0, -3])
    def test_non_positive_days_rejected(self, allocator, total_days):
        with pytest.raises(InvalidInput):
            allocator.allocate(["Paris"], total_days)


class TestBuildStops:
    """Tests for converting allocations into stops."""

    def test_hotels_attached_by_city(self, allocator):
        stops = allocator.build_stops(
            {"Paris": 4, "Rome": 3},
            {"Paris": "Hotel Lutetia", "Madrid": "Hotel Urban"},
        )
        assert [(s.name, s.days, s.hotel) for s in stops] == [
            ("Paris", 4, "Hotel Lutetia"),
            ("Rome", 3, None),
        ]

    def test_no_hotels(self, allocator):
        stops = allocator.build_stops({"Paris": 2})
        assert stops[0].hotel is None
