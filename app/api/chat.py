import logging

from fastapi import APIRouter, Depends

from app.core.errors import ApiError, BadRequestError
from app.dependencies import get_gemini_service
from app.models.chat import ChatRequest, ChatResponse
from app.services.gemini_service import GeminiService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/chat", response_model=ChatResponse)
async def chat_endpoint(
    request: ChatRequest,
    gemini_service: GeminiService = Depends(get_gemini_service),
) -> ChatResponse:
    if not request.messages:
        raise BadRequestError("messages[] required")

    try:
        reply = await gemini_service.chat(
            messages=request.messages,
            model=request.model,
        )
        return ChatResponse(reply=reply)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Chat endpoint failed")
        raise ApiError("Server error", detail=str(e))
