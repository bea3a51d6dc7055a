"""
Lemon - Conversational Trip Planning Service
Relays chat history to the LLM and runs the trip query tool when it is called
"""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from openai.types.chat import ChatCompletionMessage

from ..config import get_settings
from ..models.schemas import ChatMessage, PlanRequest
from .llm import LLMClient, get_llm_client
from .trip_planner import TripPlannerService

logger = logging.getLogger(__name__)

TRIP_QUERY_FUNCTION = "submit_trip_query"

BUNDLED_SCHEMA_PATH = Path(__file__).resolve().parent.parent / "tools" / f"{TRIP_QUERY_FUNCTION}.json"

# System prompt for the AI assistant
SYSTEM_PROMPT = (
    "You are Lemon, a friendly AI travel agent. You have a function definition with "
    "custom metadata `x_initial_question` for each parameter. When any required field "
    "is missing, ask ONLY the question specified in that parameter's "
    "`x_initial_question`. Once all required fields are collected, call the function "
    "with complete arguments."
)

PLAN_FAILURE_MESSAGE = (
    "Sorry, I encountered an error while generating your itinerary. Please try again."
)


@lru_cache
def load_trip_query_schema(path: Optional[str] = None) -> Optional[dict[str, Any]]:
    """Load the function-calling schema, or None when it cannot be read."""
    schema_path = Path(path) if path else BUNDLED_SCHEMA_PATH
    try:
        with open(schema_path, encoding="utf-8") as f:
            schema = json.load(f)
    except (OSError, ValueError) as e:
        logger.error(f"Failed to load {TRIP_QUERY_FUNCTION} schema from {schema_path}: {e}")
        return None

    if not isinstance(schema, dict):
        logger.error(f"{TRIP_QUERY_FUNCTION} schema at {schema_path} is not an object")
        return None
    return schema


def opening_question(schema: Optional[dict[str, Any]]) -> Optional[str]:
    """
    Question for the schema's first required field.

    Returns None when the schema lists no required fields.
    """
    if not isinstance(schema, dict):
        return None
    parameters = schema.get("parameters")
    if not isinstance(parameters, dict):
        return None
    required = parameters.get("required")
    if not isinstance(required, list) or not required:
        return None

    first_key = required[0]
    properties = parameters.get("properties")
    prop = properties.get(first_key) if isinstance(properties, dict) else None
    question = prop.get("x_initial_question") if isinstance(prop, dict) else None
    return question or f"Please provide {first_key}."


class ConversationService:
    """
    Stateless chat relay.

    The caller owns the history; field collection is left to the model's
    own tool calling.
    """

    def __init__(
        self,
        llm: Optional[LLMClient] = None,
        trip_planner: Optional[TripPlannerService] = None,
        default_schema: Optional[dict[str, Any]] = None,
    ):
        self.settings = get_settings()
        self.llm = llm or get_llm_client()
        self.trip_planner = trip_planner or TripPlannerService(self.llm)
        if default_schema is None:
            default_schema = load_trip_query_schema(self.settings.trip_query_schema_path)
        self.default_schema = default_schema

    async def reply(
        self,
        messages: list[ChatMessage],
        schema: Optional[dict[str, Any]] = None,
    ) -> ChatMessage:
        """
        Produce the assistant's next message.

        Args:
            messages: Full conversation so far, oldest first
            schema: Client-supplied function schema, preferred over the bundled one

        Returns:
            A follow-up question, or the JSON-encoded plan once the model
            calls the trip query function
        """
        active_schema = schema if isinstance(schema, dict) and schema else self.default_schema

        if not messages:
            question = opening_question(active_schema)
            if question:
                return ChatMessage(role="assistant", content=question)

        llm_messages = [{"role": "system", "content": SYSTEM_PROMPT}]
        llm_messages.extend(
            msg.model_dump(exclude_none=True) for msg in messages
        )
        tools = [{"type": "function", "function": active_schema}] if active_schema else None

        assistant = await self.llm.complete(llm_messages, temperature=0.7, tools=tools)

        call = self._find_trip_query_call(assistant)
        if call is None:
            return self._to_chat_message(assistant)

        return ChatMessage(role="assistant", content=await self._run_trip_query(call.function.arguments))

    async def _run_trip_query(self, arguments: Optional[str]) -> str:
        """Run the trip planner for a tool call; failures become an apology."""
        try:
            args = json.loads(arguments or "{}")
            request = PlanRequest.model_validate(args)
            plan = await self.trip_planner.plan_route(request)
        except Exception as e:
            logger.error(f"Failed to run {TRIP_QUERY_FUNCTION}: {type(e).__name__}: {e}")
            return PLAN_FAILURE_MESSAGE

        logger.info(f"Generated plan with {len(plan.stops)} stops")
        return plan.model_dump_json()

    def _find_trip_query_call(self, message: ChatCompletionMessage):
        """Return the first tool call when it targets the trip query function."""
        if not message.tool_calls:
            return None
        call = message.tool_calls[0]
        if call.type == "function" and call.function.name == TRIP_QUERY_FUNCTION:
            return call
        return None

    def _to_chat_message(self, message: ChatCompletionMessage) -> ChatMessage:
        tool_calls = None
        if message.tool_calls:
            tool_calls = [call.model_dump() for call in message.tool_calls]
        return ChatMessage(role="assistant", content=message.content, tool_calls=tool_calls)


def get_conversation_service(llm: Optional[LLMClient] = None) -> ConversationService:
    """Create a conversation service for one request"""
    return ConversationService(llm)
