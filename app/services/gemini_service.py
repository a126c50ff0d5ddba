from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any
from urllib.parse import quote

import httpx

from app.core.errors import MissingCredentialError, UpstreamError
from app.core.settings import Settings, get_settings
from app.models.chat import (
    ChatMessage,
    GenerateContentRequest,
    ProviderContent,
    ProviderPart,
)

logger = logging.getLogger(__name__)


def resolve_model(requested: str | None, allowed: Iterable[str], default: str) -> str:
    """Return ``requested`` if it is allow-listed, otherwise ``default``."""
    if requested and requested in set(allowed):
        return requested
    if requested:
        logger.info("Unknown model %r requested; using %s", requested, default)
    return default


def to_provider_contents(messages: Sequence[ChatMessage]) -> list[ProviderContent]:
    return [
        ProviderContent(
            role="model" if msg.role == "assistant" else "user",
            parts=[ProviderPart(text=msg.content)],
        )
        for msg in messages
    ]


def extract_reply(payload: Any) -> str:
    """
    Concatenate the text parts of the first candidate.

    Missing candidates, content or parts all yield an empty reply.
    """
    if not isinstance(payload, dict):
        return ""
    candidates = payload.get("candidates")
    if not isinstance(candidates, list) or not candidates:
        return ""
    first = candidates[0]
    content = first.get("content") if isinstance(first, dict) else None
    parts = content.get("parts") if isinstance(content, dict) else None
    if not isinstance(parts, list):
        return ""
    return "".join(
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str)
    )


class GeminiService:
    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._settings = settings or get_settings()
        # Optional transport for routing calls somewhere other than the network.
        self._transport = transport

    def resolve_model(self, requested: str | None) -> str:
        return resolve_model(
            requested,
            allowed=self._settings.gemini_allowed_models,
            default=self._settings.gemini_model,
        )

    def _endpoint(self, model: str) -> str:
        base_url = self._settings.gemini_base_url.rstrip("/")
        return f"{base_url}/v1beta/models/{quote(model, safe='')}:generateContent"

    async def generate_content(
        self, contents: list[ProviderContent], model: str
    ) -> dict[str, Any]:
        """
        Issue a single generateContent call and return the decoded JSON body.

        Args:
            contents: Conversation turns in provider shape
            model: Already resolved model identifier

        Raises:
            MissingCredentialError: no API key is configured; nothing is sent
            UpstreamError: the provider answered with a non-success status
        """
        api_key = self._settings.gemini_api_key
        if not api_key:
            raise MissingCredentialError()

        payload = GenerateContentRequest(contents=contents).model_dump(mode="json")

        async with httpx.AsyncClient(
            transport=self._transport,
            timeout=self._settings.gemini_timeout_seconds,
        ) as client:
            response = await client.post(
                self._endpoint(model),
                params={"key": api_key},
                json=payload,
            )

        if response.is_error:
            logger.warning(
                "Gemini request for model %s failed with status %s",
                model,
                response.status_code,
            )
            raise UpstreamError(upstream_status=response.status_code, body=response.text)

        return response.json()

    async def chat(self, messages: Sequence[ChatMessage], model: str | None = None) -> str:
        resolved = self.resolve_model(model)
        contents = to_provider_contents(messages)
        data = await self.generate_content(contents, resolved)
        return extract_reply(data)
