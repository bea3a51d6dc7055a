"""
Lemon Chat Router
LLM-powered conversational trip planning
"""

from fastapi import APIRouter, Depends

from lemon.models.schemas import ChatRequest, ChatResponse
from lemon.services.conversation import get_conversation_service
from lemon.services.llm import LLMClient, get_llm_client

router = APIRouter()


@router.post("/chat", response_model=ChatResponse, response_model_exclude_none=True)
async def send_chat_message(
    request: ChatRequest,
    llm: LLMClient = Depends(get_llm_client),
):
    """
    Send the full conversation and get the assistant's next message.

    - Send an empty message list to get the opening question
    - The reply is either a follow-up question or a JSON-encoded plan
    """
    service = get_conversation_service(llm)
    message = await service.reply(request.messages, request.tool_schema)
    return ChatResponse(message=message)
