"""
Lemon API Client
Async HTTP client and chat session for apps talking to the Lemon backend
"""

import json
import logging
from typing import Any, Optional

import httpx

from lemon.models.schemas import (
    AssistantReply,
    ChatMessage,
    ChatResponse,
    ItineraryResponse,
    PlanResponse,
    ReplyKind,
)
from lemon.services.route_parser import RouteTextParser, looks_like_route

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "Something went wrong. Please try again."


class LemonClientError(Exception):
    """Any failure talking to the backend; message is safe to show users."""

    def __init__(self, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(GENERIC_ERROR_MESSAGE)


class SessionBusy(Exception):
    """A chat request is already in flight for this session."""


def interpret_reply(content: str) -> AssistantReply:
    """
    Work out what an assistant message contains.

    Tries, in order: a JSON-encoded plan, an arrow-delimited route line,
    then falls back to plain chat.
    """
    parser = RouteTextParser()

    try:
        plan = PlanResponse.model_validate(json.loads(content))
    except ValueError:
        plan = None

    if plan is not None:
        known_stops = {stop.name: stop for stop in plan.stops}
        return AssistantReply(
            kind=ReplyKind.PLAN,
            content=content,
            plan=plan,
            route=parser.parse(plan.route, known_stops),
        )

    if looks_like_route(content):
        return AssistantReply(kind=ReplyKind.ROUTE, content=content, route=parser.parse(content))

    return AssistantReply(kind=ReplyKind.CHAT, content=content)


class LemonClient:
    """Thin async wrapper over the Lemon HTTP API. No retries."""

    def __init__(
        self,
        base_url: str,
        timeout: float = 60.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "LemonClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def chat(
        self,
        messages: list[ChatMessage],
        schema: Optional[dict[str, Any]] = None,
    ) -> ChatMessage:
        """Send the whole history and return the assistant's next message."""
        payload: dict[str, Any] = {
            "messages": [{"role": m.role, "content": m.content} for m in messages],
        }
        if schema:
            payload["schema"] = schema
        data = await self._request("POST", "/chat", json=payload)
        return self._decode(ChatResponse, data).message

    async def plan(
        self,
        departure_city: str,
        destination_cities: list[str],
        daily_budget: Optional[float] = None,
        duration: Optional[int] = None,
    ) -> PlanResponse:
        payload: dict[str, Any] = {
            "departure_city": departure_city,
            "destination_cities": destination_cities,
        }
        if daily_budget is not None:
            payload["daily_budget"] = daily_budget
        if duration is not None:
            payload["duration"] = duration
        data = await self._request("POST", "/plan", json=payload)
        return self._decode(PlanResponse, data)

    async def plan_trip(
        self,
        destination: str,
        duration: Optional[str] = None,
        preferences: Optional[str] = None,
        budget: Optional[str] = None,
    ) -> ItineraryResponse:
        payload = {
            "destination": destination,
            "duration": duration,
            "preferences": preferences,
            "budget": budget,
        }
        data = await self._request(
            "POST",
            "/plan-trip",
            json={key: value for key, value in payload.items() if value is not None},
        )
        return self._decode(ItineraryResponse, data)

    async def health(self) -> dict[str, Any]:
        return await self._request("GET", "/health")

    async def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            logger.error(f"Request to {path} failed: {type(e).__name__}: {e}")
            raise LemonClientError() from e

        if response.status_code != 200:
            logger.error(f"Request to {path} returned {response.status_code}: {response.text}")
            raise LemonClientError(response.status_code)

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Response from {path} was not JSON: {e}")
            raise LemonClientError(response.status_code) from e

    def _decode(self, model, data: Any):
        try:
            return model.model_validate(data)
        except ValueError as e:
            logger.error(f"Unexpected {model.__name__} payload: {e}")
            raise LemonClientError() from e


class ChatSession:
    """
    One planning conversation.

    The history is a plain list owned by the caller and may be injected;
    at most one request is in flight at a time.
    """

    def __init__(
        self,
        client: LemonClient,
        messages: Optional[list[ChatMessage]] = None,
        schema: Optional[dict[str, Any]] = None,
    ):
        self.client = client
        self.messages = messages if messages is not None else []
        self.schema = schema
        self.is_sending = False

    async def start(self) -> Optional[AssistantReply]:
        """Clear the history and fetch the opening question."""
        self._ensure_idle()
        self.messages.clear()
        return await self._exchange()

    async def send(self, text: str) -> Optional[AssistantReply]:
        """
        Send a user message.

        Returns None for blank input or an empty assistant reply.
        """
        text = text.strip()
        if not text:
            return None
        self._ensure_idle()
        self.messages.append(ChatMessage(role="user", content=text))
        return await self._exchange()

    def _ensure_idle(self) -> None:
        if self.is_sending:
            raise SessionBusy("A message is already being sent")

    async def _exchange(self) -> Optional[AssistantReply]:
        self.is_sending = True
        try:
            message = await self.client.chat(self.messages, self.schema)
        finally:
            self.is_sending = False

        if not message.content:
            return None
        self.messages.append(ChatMessage(role=message.role, content=message.content))
        return interpret_reply(message.content)
