"""
Tests for RouteTextParser and route helpers
"""

import pytest

from lemon.models.schemas import PlanStop, TransportCategory
from lemon.services.route_parser import (
    RouteTextParser,
    extract_destination_cities,
    looks_like_route,
    split_route,
)


@pytest.fixture
def parser():
    return RouteTextParser()


class TestTransportClassification:
    """Tests for transport category detection."""

    @pytest.mark.parametrize(
        "segment,expected",
        [
            ("Fly 8h", TransportCategory.FLIGHT),
            ("by plane ~2h", TransportCategory.FLIGHT),
            ("Flight & ~9 hours", TransportCategory.FLIGHT),
            ("Train 3h", TransportCategory.TRAIN),
            ("High-speed TRAIN & ~1.5h", TransportCategory.TRAIN),
            ("Bus ~4h", TransportCategory.BUS),
            ("Drive ~5h", TransportCategory.CAR),
            ("Ferry 2h", TransportCategory.CAR),
        ],
    )
    def test_classify(self, parser, segment, expected):
        assert parser.classify_transport(segment) == expected

    def test_flight_wins_over_train(self, parser):
        assert parser.classify_transport("Train or flight 3h") == TransportCategory.FLIGHT


class TestDurationLabel:
    """Tests for duration extraction."""

    @pytest.mark.parametrize(
        "segment,expected",
        [
            ("Fly 8h", "8h"),
            ("Train & ~3h", "3h"),
            ("By plane ~2 h", "2 h"),
            ("Drive ~5h", "5h"),
            ("Car", ""),
        ],
    )
    def test_duration(self, parser, segment, expected):
        assert parser.duration_label(segment) == expected


class TestParse:
    """Tests for full route parsing."""

    def test_round_trip(self, parser):
        route = parser.parse("Paris -> Fly 8h -> Rome -> Train 3h -> Paris")

        assert [
            (leg.from_city, leg.transport_category, leg.duration_label) for leg in route.legs
        ] == [
            ("Paris", TransportCategory.FLIGHT, "8h"),
            ("Rome", TransportCategory.TRAIN, "3h"),
        ]
        assert route.final_city == "Paris"
        assert route.cities == ["Paris", "Rome", "Paris"]

    def test_trailing_period_removed(self, parser, sample_route):
        route = parser.parse(sample_route)

        assert route.final_city == "Chicago"
        assert [leg.from_city for leg in route.legs] == ["Chicago", "Paris", "Rome"]
        assert route.legs[1].duration_label == "11h"

    def test_empty_text(self, parser):
        route = parser.parse("")
        assert route.legs == []
        assert route.cities == []
        assert route.final_city == ""

    def test_single_city(self, parser):
        route = parser.parse("Paris")
        assert route.legs == []
        assert route.final_city == "Paris"

    def test_dangling_transport_dropped(self, parser):
        """A trailing transport segment without a destination yields no leg."""
        route = parser.parse("Paris -> Fly 8h -> Rome -> Train 3h")
        assert len(route.legs) == 1
        assert route.final_city == "Train 3h"

    def test_empty_tokens_skipped(self, parser):
        route = parser.parse("Paris ->  -> Fly 8h -> Rome")
        assert len(route.legs) == 1
        assert route.legs[0].from_city == "Paris"

    def test_known_stops_enrich_legs(self, parser):
        stops = {
            "Paris": PlanStop(name="Paris", days=4, hotel="Le Meurice"),
            "rome": PlanStop(name="rome", days=3, hotel=None),
        }
        route = parser.parse("Paris -> Fly 2h -> Rome -> Fly 2h -> Oslo", stops)

        assert (route.legs[0].days, route.legs[0].hotel) == (4, "Le Meurice")
        assert (route.legs[1].days, route.legs[1].hotel) == (3, None)

    def test_unknown_stop_left_empty(self, parser):
        route = parser.parse("Oslo -> Bus 1h -> Bergen", {"Paris": PlanStop(name="Paris", days=1)})
        assert route.legs[0].days is None
        assert route.legs[0].hotel is None


class TestRouteHelpers:
    """Tests for splitting, detection, and city extraction."""

    def test_split_route(self):
        assert split_route(" A -> b ->  -> C. ") == ["A", "b", "C"]

    def test_looks_like_route(self, sample_route):
        assert looks_like_route(sample_route)

    def test_short_text_is_not_route(self):
        assert not looks_like_route("Paris -> Rome")

    def test_arrows_without_spaces_not_route(self):
        assert not looks_like_route("a->b->c->d->e")

    def test_extract_destination_cities(self, sample_route):
        assert extract_destination_cities(sample_route, "chicago") == ["Paris", "Rome"]

    def test_extract_deduplicates(self):
        route = "Paris -> Fly -> Rome -> Train -> Milan -> Train -> Rome -> Fly -> Paris"
        assert extract_destination_cities(route, "Paris") == ["Rome", "Milan"]

    def test_extract_from_garbage(self):
        assert extract_destination_cities("I cannot help with that.", "Paris") == [
            "I cannot help with that"
        ]
