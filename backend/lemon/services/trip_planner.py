"""
Lemon Trip Planner Service
Builds multi-city plans from LLM route and hotel suggestions
"""

import json
import logging
import re
from datetime import datetime
from typing import Optional

from lemon.models.schemas import (
    ItineraryRequest,
    ItineraryResponse,
    PlanRequest,
    PlanResponse,
)
from lemon.services.llm import LLMClient, get_llm_client
from lemon.services.route_allocator import RouteAllocator
from lemon.services.route_parser import extract_destination_cities

logger = logging.getLogger(__name__)

PLANNER_SYSTEM_PROMPT = "You are Lemon, a helpful AI travel planner."

ITINERARY_SYSTEM_PROMPT = (
    "You are a professional travel planner who creates personalized, detailed "
    "itineraries. Be specific with recommendations and include practical tips."
)

ROUTE_PROMPT = """A traveler is leaving from {departure} and wants to visit the following cities: {destinations}.

Choose the most time-efficient order to visit all cities and return to {departure}. For every leg, recommend the main mode(s) of transportation followed by an approximate travel time.

Respond with EXACTLY one line formatted like this (replace items in angle brackets):
<City A> -> <Transport & ~duration> -> <City B> -> <Transport & ~duration> -> ... -> <City A>.

Do not add any additional text, explanation, or formatting."""

HOTEL_PROMPT = """Recommend one highly-rated hotel under ${budget:.15g} USD per night for each of the following cities: {cities}.

Respond ONLY with valid JSON where each key is the city and the value is the hotel name. Do not include any additional text or formatting."""

ITINERARY_PROMPT = """Create a detailed travel itinerary for a trip to {destination}.
{details}
Please provide:
1. Day-by-day itinerary with activities
2. Recommended hotels/accommodations
3. Must-try restaurants and local cuisine
4. Transportation tips
5. Budget breakdown
6. Best time to visit and weather considerations

Format the response in a clear, structured way that's easy to read."""

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$")


class TripPlannerService:
    """
    Plans a round trip in three steps:

    1. ROUTE: Ask the LLM for the most efficient visiting order
    2. DAYS: Split the trip duration across the route's cities
    3. HOTELS: Ask the LLM for one hotel per city within budget
    """

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        allocator: Optional[RouteAllocator] = None,
    ):
        self.llm = llm or get_llm_client()
        self.allocator = allocator or RouteAllocator()

    async def plan_route(self, request: PlanRequest) -> PlanResponse:
        """
        Plan a multi-city round trip.

        Args:
            request: Departure city, cities to visit, budget and duration

        Returns:
            PlanResponse with the route line and per-city stops
        """
        route = await self._get_route(request)

        cities = extract_destination_cities(route, request.departure_city)
        if not cities:
            logger.warning(
                f"No cities found in route {route!r}, falling back to requested order"
            )
            cities = [
                city for city in request.destination_cities
                if city.lower() != request.departure_city.lower()
            ] or list(request.destination_cities)

        allocation = self.allocator.allocate(cities, request.duration)
        hotels = await self._suggest_hotels(list(allocation), request.daily_budget)

        return PlanResponse(
            route=route,
            total_days=request.duration,
            daily_budget=request.daily_budget,
            stops=self.allocator.build_stops(allocation, hotels),
        )

    async def plan_itinerary(self, request: ItineraryRequest) -> ItineraryResponse:
        """Generate a free-text itinerary for a single destination."""
        details = []
        if request.duration:
            details.append(f"Duration: {request.duration}")
        if request.preferences:
            details.append(f"Preferences: {request.preferences}")
        if request.budget:
            details.append(f"Budget: {request.budget}")

        prompt = ITINERARY_PROMPT.format(
            destination=request.destination,
            details="\n".join(details) + "\n" if details else "",
        )
        itinerary = await self.llm.complete_text(
            [
                {"role": "system", "content": ITINERARY_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            model=self.llm.settings.itinerary_model,
            temperature=0.8,
            max_tokens=2000,
        )

        return ItineraryResponse(
            success=True,
            destination=request.destination,
            itinerary=itinerary,
            generated_at=datetime.utcnow(),
        )

    async def _get_route(self, request: PlanRequest) -> str:
        """Ask the LLM for a single-line round-trip route."""
        prompt = ROUTE_PROMPT.format(
            departure=request.departure_city,
            destinations=", ".join(request.destination_cities),
        )
        route = await self.llm.complete_text(
            [
                {"role": "system", "content": PLANNER_SYSTEM_PROMPT},
                {"role": "user", "content": prompt},
            ],
            temperature=0.3,
        )
        logger.info(f"Route for {request.departure_city}: {route}")
        return route

    async def _suggest_hotels(self, cities: list[str], daily_budget: float) -> dict[str, str]:
        """
        Ask the LLM for one hotel per city.

        Hotels are optional: any failure is logged and yields no hotels.
        """
        prompt = HOTEL_PROMPT.format(budget=daily_budget, cities=", ".join(cities))
        try:
            raw = await self.llm.complete_text(
                [
                    {"role": "system", "content": PLANNER_SYSTEM_PROMPT},
                    {"role": "user", "content": prompt},
                ],
                temperature=0.4,
            )
            hotels = json.loads(_CODE_FENCE.sub("", raw))
        except Exception as e:
            logger.error(f"Failed to fetch hotel recommendations: {type(e).__name__}: {e}")
            return {}

        if not isinstance(hotels, dict):
            logger.error(f"Hotel recommendations were not a JSON object: {raw!r}")
            return {}

        return {
            str(city): hotel.strip()
            for city, hotel in hotels.items()
            if isinstance(hotel, str) and hotel.strip()
        }


def get_trip_planner_service(llm: Optional[LLMClient] = None) -> TripPlannerService:
    """Create a trip planner for one request"""
    return TripPlannerService(llm)
