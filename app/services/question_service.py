from __future__ import annotations

import logging
import re

from langchain_core.prompts import PromptTemplate

from app.models.chat import ChatMessage
from app.services.gemini_service import GeminiService, extract_reply, to_provider_contents

logger = logging.getLogger(__name__)


_QUESTION_PROMPT = PromptTemplate.from_template(
    """Write {count} distinct, concise questions about the following topic.

Rules:
- Put exactly one question on each line.
- Do not number the questions and do not add any other text.

Topic:
{topic}
"""
)

_LIST_MARKER = re.compile(r"^\s*(?:[-*•]|\d+[.)])\s*")


def parse_questions(text: str, count: int) -> list[str]:
    questions: list[str] = []
    for line in text.splitlines():
        question = _LIST_MARKER.sub("", line).strip()
        if question:
            questions.append(question)
    return questions[:count]


class QuestionService:
    def __init__(self, gemini_service: GeminiService) -> None:
        self._gemini = gemini_service

    async def generate_questions(
        self, topic: str, count: int, model: str | None = None
    ) -> list[str]:
        prompt = _QUESTION_PROMPT.format(topic=topic.strip(), count=count)
        contents = to_provider_contents([ChatMessage(role="user", content=prompt)])

        data = await self._gemini.generate_content(
            contents, self._gemini.resolve_model(model)
        )
        questions = parse_questions(extract_reply(data), count)

        if len(questions) < count:
            logger.info("Asked for %s questions, got %s", count, len(questions))
        return questions
