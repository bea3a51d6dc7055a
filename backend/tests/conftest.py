"""
Lemon Test Configuration
Pytest fixtures and a scripted stand-in for the LLM
"""

import json
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient
from openai.types.chat import ChatCompletionMessage

from lemon.main import app
from lemon.services.llm import LLMClient, get_llm_client


def assistant_message(content=None, tool_calls=None) -> ChatCompletionMessage:
    """Build an assistant message as the OpenAI SDK returns it."""
    payload = {"role": "assistant", "content": content}
    if tool_calls:
        payload["tool_calls"] = tool_calls
    return ChatCompletionMessage.model_validate(payload)


def tool_call_message(name: str, arguments: dict) -> ChatCompletionMessage:
    """Assistant message that calls a single function."""
    return assistant_message(
        tool_calls=[
            {
                "id": "call_1",
                "type": "function",
                "function": {"name": name, "arguments": json.dumps(arguments)},
            }
        ]
    )


class FakeLLM(LLMClient):
    """
    LLM client that replays scripted replies in order.

    A reply may be a string, a ChatCompletionMessage, or an exception to raise.
    """

    def __init__(self, replies=None):
        super().__init__(client=MagicMock())
        self.replies = list(replies or [])
        self.calls = []

    async def complete(self, messages, **kwargs):
        self.calls.append({"messages": messages, **kwargs})
        if not self.replies:
            raise AssertionError("FakeLLM ran out of scripted replies")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, str):
            return assistant_message(reply)
        return reply


@pytest.fixture
def fake_llm():
    """Scripted LLM; append replies to fake_llm.replies in each test."""
    return FakeLLM()


@pytest.fixture(scope="function")
def client(fake_llm):
    """Create a test client with the LLM dependency overridden."""
    app.dependency_overrides[get_llm_client] = lambda: fake_llm
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def sample_route():
    """Round trip in the format the route prompt asks for."""
    return "Chicago -> Fly ~8h -> Paris -> Train & ~11h -> Rome -> Fly ~10h -> Chicago."


@pytest.fixture
def sample_plan_request():
    """Sample /plan request body."""
    return {
        "departure_city": "Chicago",
        "destination_cities": ["Rome", "Paris"],
        "daily_budget": 300,
        "duration": 7,
    }
