from __future__ import annotations

from fastapi import Depends, Request

from app.services.gemini_service import GeminiService
from app.services.question_service import QuestionService


def get_gemini_service(request: Request) -> GeminiService:
    return request.app.state.gemini_service


def get_question_service(
    gemini_service: GeminiService = Depends(get_gemini_service),
) -> QuestionService:
    return QuestionService(gemini_service=gemini_service)
