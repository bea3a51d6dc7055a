"""Lemon Models Package"""

from lemon.models.schemas import (
    TransportCategory,
    ReplyKind,
    ChatMessage,
    ChatRequest,
    ChatResponse,
    PlanRequest,
    PlanStop,
    PlanResponse,
    ItineraryRequest,
    ItineraryResponse,
    RouteLeg,
    ParsedRoute,
    AssistantReply,
    HealthCheck,
)

__all__ = [
    "TransportCategory",
    "ReplyKind",
    "ChatMessage",
    "ChatRequest",
    "ChatResponse",
    "PlanRequest",
    "PlanStop",
    "PlanResponse",
    "ItineraryRequest",
    "ItineraryResponse",
    "RouteLeg",
    "ParsedRoute",
    "AssistantReply",
    "HealthCheck",
]
