from __future__ import annotations

from pydantic import BaseModel, Field


class QuestionRequest(BaseModel):
    topic: str = ""
    count: int = Field(default=5, ge=1, le=20)
    model: str | None = None


class QuestionResponse(BaseModel):
    questions: list[str] = Field(default_factory=list)
