from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChatMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    role: str = "user"  # "user" or "assistant"
    content: str

    @field_validator("role", mode="before")
    @classmethod
    def _coerce_role(cls, value: Any) -> str:
        # Anything that is not a string is treated as a user turn.
        return value if isinstance(value, str) else "user"


class ChatRequest(BaseModel):
    # Emptiness is checked by the endpoint so it can answer 400.
    messages: list[ChatMessage] = Field(default_factory=list)
    model: str | None = None


class ChatResponse(BaseModel):
    reply: str


class ProviderPart(BaseModel):
    model_config = ConfigDict(frozen=True)

    text: str


class ProviderContent(BaseModel):
    """One conversation turn in the shape generateContent expects."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    parts: list[ProviderPart]


class GenerateContentRequest(BaseModel):
    contents: list[ProviderContent]


class ErrorResponse(BaseModel):
    error: str
    detail: str | None = None
    upstream_status: int | None = None
