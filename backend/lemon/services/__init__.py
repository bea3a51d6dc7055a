"""Lemon Services"""

from lemon.services.llm import LLMClient
from lemon.services.route_allocator import RouteAllocator
from lemon.services.route_parser import RouteTextParser
from lemon.services.trip_planner import TripPlannerService
from lemon.services.conversation import ConversationService

__all__ = [
    "LLMClient",
    "RouteAllocator",
    "RouteTextParser",
    "TripPlannerService",
    "ConversationService",
]
