"""
Lemon - Pydantic Schemas
Data validation and serialization for API requests/responses
"""

from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from lemon.utils.coercion import (
    DEFAULT_DAILY_BUDGET,
    DEFAULT_DURATION_DAYS,
    normalize_daily_budget,
    normalize_duration,
)


# =============================================================================
# Enums
# =============================================================================

class TransportCategory(str, Enum):
    FLIGHT = "flight"
    TRAIN = "train"
    BUS = "bus"
    CAR = "car"


class ReplyKind(str, Enum):
    """Shape of an assistant reply as seen by the client"""
    PLAN = "plan"
    ROUTE = "route"
    CHAT = "chat"


# =============================================================================
# Chat Models
# =============================================================================

class ChatMessage(BaseModel):
    role: str = Field(..., pattern=r"^(system|user|assistant|tool)$")
    content: Optional[str] = None
    tool_calls: Optional[list[dict[str, Any]]] = None
    tool_call_id: Optional[str] = None
    name: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class ChatRequest(BaseModel):
    """Conversation history plus an optional function-calling schema"""
    messages: list[ChatMessage]
    tool_schema: Optional[dict[str, Any]] = Field(None, alias="schema")

    model_config = ConfigDict(populate_by_name=True)


class ChatResponse(BaseModel):
    message: ChatMessage


# =============================================================================
# Route Planning Models
# =============================================================================

class PlanRequest(BaseModel):
    """Structured trip request: departure city plus cities to visit"""
    departure_city: str = Field(..., min_length=1)
    destination_cities: list[str] = Field(..., min_length=1)
    daily_budget: float = DEFAULT_DAILY_BUDGET
    duration: int = DEFAULT_DURATION_DAYS

    @field_validator("departure_city")
    @classmethod
    def validate_departure_city(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("departure_city must not be blank")
        return v

    @field_validator("destination_cities")
    @classmethod
    def validate_destination_cities(cls, v: list[str]) -> list[str]:
        cities = [city.strip() for city in v if city and city.strip()]
        if not cities:
            raise ValueError("destination_cities must contain at least one city")
        return cities

    @field_validator("daily_budget", mode="before")
    @classmethod
    def coerce_daily_budget(cls, v: Any) -> float:
        return normalize_daily_budget(v)

    @field_validator("duration", mode="before")
    @classmethod
    def coerce_duration(cls, v: Any) -> int:
        return normalize_duration(v)


class PlanStop(BaseModel):
    name: str
    days: int = Field(..., ge=0)
    hotel: Optional[str] = None


class PlanResponse(BaseModel):
    route: str
    total_days: int
    daily_budget: float
    stops: list[PlanStop]


class ItineraryRequest(BaseModel):
    """Free-form itinerary request for a single destination"""
    destination: str = Field(..., min_length=1)
    duration: Optional[str] = None
    preferences: Optional[str] = None
    budget: Optional[str] = None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("Destination is required")
        return v

    @field_validator("duration", "preferences", "budget", mode="before")
    @classmethod
    def stringify_optional(cls, v: Any) -> Optional[str]:
        if v is None or v == "":
            return None
        return str(v)


class ItineraryResponse(BaseModel):
    success: bool = True
    destination: str
    itinerary: str
    generated_at: datetime = Field(..., alias="generatedAt")

    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# Parsed Route Models
# =============================================================================

class RouteLeg(BaseModel):
    from_city: str
    transport_category: TransportCategory
    duration_label: str
    days: Optional[int] = None
    hotel: Optional[str] = None


class ParsedRoute(BaseModel):
    legs: list[RouteLeg] = []
    cities: list[str] = []
    final_city: str = ""


class AssistantReply(BaseModel):
    """Client-side interpretation of an assistant message"""
    kind: ReplyKind
    content: str
    plan: Optional[PlanResponse] = None
    route: Optional[ParsedRoute] = None


# =============================================================================
# Health Check
# =============================================================================

class HealthCheck(BaseModel):
    status: str = "healthy"
    service: str
    timestamp: datetime


class ErrorResponse(BaseModel):
    error: str
