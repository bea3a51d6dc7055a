"""
Lemon Plan Router
Structured multi-city plans and free-text itineraries
"""

from fastapi import APIRouter, Depends

from lemon.models.schemas import (
    ItineraryRequest,
    ItineraryResponse,
    PlanRequest,
    PlanResponse,
)
from lemon.services.llm import LLMClient, get_llm_client
from lemon.services.trip_planner import get_trip_planner_service

router = APIRouter()


@router.post("/plan", response_model=PlanResponse)
async def plan_route(
    request: PlanRequest,
    llm: LLMClient = Depends(get_llm_client),
):
    """
    Plan a round trip through several cities.

    Returns the LLM's route line plus days and a suggested hotel per city.
    Missing or invalid budget/duration fall back to 1000 USD and 17 days.
    """
    service = get_trip_planner_service(llm)
    return await service.plan_route(request)


@router.post("/plan-trip", response_model=ItineraryResponse)
async def plan_itinerary(
    request: ItineraryRequest,
    llm: LLMClient = Depends(get_llm_client),
):
    """Generate a day-by-day itinerary for a single destination."""
    service = get_trip_planner_service(llm)
    return await service.plan_itinerary(request)
