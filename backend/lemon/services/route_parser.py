"""
Lemon Route Text Parser
Turns "City -> Transport & ~duration -> City -> ... -> City" lines into legs
"""

import re
from typing import Mapping, Optional

from lemon.models.schemas import ParsedRoute, PlanStop, RouteLeg, TransportCategory

ROUTE_DELIMITER = "->"
MIN_ROUTE_TOKENS = 5

TRAILING_PUNCTUATION = ".,;:!"

# Priority order matters: "flight by train" is still a flight
TRANSPORT_KEYWORDS: list[tuple[TransportCategory, tuple[str, ...]]] = [
    (TransportCategory.FLIGHT, ("fly", "plane", "flight")),
    (TransportCategory.TRAIN, ("train",)),
    (TransportCategory.BUS, ("bus",)),
]

# Longest alternatives first so "by plane" goes before "plane"
_TRANSPORT_WORDS = re.compile(
    r"by plane|by train|by bus|flight|fly|plane|train|driving|drive|car|bus",
    re.IGNORECASE,
)


def split_route(route_text: str) -> list[str]:
    """Split a route line into trimmed, non-empty tokens."""
    tokens = []
    for raw in (route_text or "").split(ROUTE_DELIMITER):
        token = raw.strip().rstrip(TRAILING_PUNCTUATION).strip()
        if token:
            tokens.append(token)
    return tokens


def looks_like_route(text: str) -> bool:
    """Heuristic check for an arrow-delimited route line."""
    return " -> " in text and len(text.split(ROUTE_DELIMITER)) >= MIN_ROUTE_TOKENS


def extract_destination_cities(route_text: str, departure_city: str) -> list[str]:
    """
    Ordered, unique cities of a route, leaving out the departure city.

    Only even-position tokens are cities; the rest are transport segments.
    """
    departure = departure_city.strip().lower()
    cities: list[str] = []
    for city in split_route(route_text)[::2]:
        if city.lower() == departure or city in cities:
            continue
        cities.append(city)
    return cities


class RouteTextParser:
    """
    Tolerant tokenizer for LLM route lines.

    Malformed input never raises; it just yields fewer legs.
    """

    def classify_transport(self, segment: str) -> TransportCategory:
        lower = segment.lower()
        for category, keywords in TRANSPORT_KEYWORDS:
            if any(keyword in lower for keyword in keywords):
                return category
        return TransportCategory.CAR

    def duration_label(self, segment: str) -> str:
        label = _TRANSPORT_WORDS.sub("", segment)
        label = label.replace("&", "").replace("~", "")
        return label.strip()

    def parse(
        self,
        route_text: str,
        known_stops: Optional[Mapping[str, PlanStop]] = None,
    ) -> ParsedRoute:
        """
        Parse a route line into legs.

        Args:
            route_text: Line like "Paris -> Fly 8h -> Rome -> Train 3h -> Paris"
            known_stops: Optional city -> stop details used to fill days/hotel

        Returns:
            ParsedRoute with one leg per (city, transport, city) triple
        """
        tokens = split_route(route_text)

        legs: list[RouteLeg] = []
        i = 0
        while i + 2 < len(tokens):
            city, segment = tokens[i], tokens[i + 1]
            stop = self._find_stop(city, known_stops)
            legs.append(
                RouteLeg(
                    from_city=city,
                    transport_category=self.classify_transport(segment),
                    duration_label=self.duration_label(segment),
                    days=stop.days if stop else None,
                    hotel=stop.hotel if stop else None,
                )
            )
            i += 2

        return ParsedRoute(
            legs=legs,
            cities=tokens[::2],
            final_city=tokens[-1] if tokens else "",
        )

    def _find_stop(
        self,
        city: str,
        known_stops: Optional[Mapping[str, PlanStop]],
    ) -> Optional[PlanStop]:
        if not known_stops:
            return None
        if city in known_stops:
            return known_stops[city]
        lower = city.lower()
        for name, stop in known_stops.items():
            if name.lower() == lower:
                return stop
        return None
