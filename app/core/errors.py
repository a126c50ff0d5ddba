from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.models.chat import ErrorResponse

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """An error that maps directly onto an HTTP error response."""

    status_code: int = 500
    error: str = "Server error"

    def __init__(
        self,
        error: str | None = None,
        detail: str | None = None,
        status_code: int | None = None,
    ) -> None:
        self.error = error or self.error
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code
        super().__init__(detail or self.error)

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(error=self.error, detail=self.detail)


class BadRequestError(ApiError):
    status_code = 400
    error = "Bad request"


class MissingCredentialError(ApiError):
    status_code = 500
    error = "Missing GOOGLE_API_KEY"


class UpstreamError(ApiError):
    """The provider answered with a non-success status."""

    status_code = 502
    error = "Gemini error"

    def __init__(self, upstream_status: int, body: str) -> None:
        super().__init__(detail=body)
        self.upstream_status = upstream_status

    def to_response(self) -> ErrorResponse:
        return ErrorResponse(
            error=self.error,
            detail=self.detail,
            upstream_status=self.upstream_status,
        )


def error_json(
    status_code: int, body: ErrorResponse, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(exclude_none=True),
        headers=headers,
    )


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return error_json(exc.status_code, exc.to_response())


async def _http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_json(
        exc.status_code, ErrorResponse(error=str(exc.detail)), headers=exc.headers
    )


async def _validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    messages = []
    for err in exc.errors():
        location = ".".join(str(part) for part in err.get("loc", ()) if part != "body")
        messages.append(f"{location or 'body'}: {err.get('msg')}")
    logger.info("Rejected request to %s: %s", request.url.path, "; ".join(messages))
    return error_json(
        400, ErrorResponse(error="Invalid request body", detail="; ".join(messages))
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, _api_error_handler)
    app.add_exception_handler(StarletteHTTPException, _http_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_error_handler)
