import logging

from fastapi import APIRouter, Depends

from app.core.errors import ApiError, BadRequestError
from app.dependencies import get_question_service
from app.models.question import QuestionRequest, QuestionResponse
from app.services.question_service import QuestionService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/question", response_model=QuestionResponse)
async def question_endpoint(
    request: QuestionRequest,
    question_service: QuestionService = Depends(get_question_service),
) -> QuestionResponse:
    """
    Generate a list of questions about a topic.

    Args:
        request: Topic, number of questions and optional model
        question_service: Injected question generator

    Returns:
        QuestionResponse with at most ``count`` questions
    """
    if not request.topic.strip():
        raise BadRequestError("topic required")

    try:
        questions = await question_service.generate_questions(
            topic=request.topic,
            count=request.count,
            model=request.model,
        )
        return QuestionResponse(questions=questions)
    except ApiError:
        raise
    except Exception as e:
        logger.exception("Question endpoint failed")
        raise ApiError("Server error", detail=str(e))
