from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.api import chat, health, question
from app.api.frontend import mount_frontend
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.core.settings import Settings, get_settings
from app.services.gemini_service import GeminiService


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(title=settings.app_name)
    app.state.settings = settings
    app.state.gemini_service = GeminiService(settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["POST"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(chat.router, prefix="/api")
    app.include_router(question.router, prefix="/api")

    app.include_router(health.router)

    mount_frontend(app, settings.static_dir)

    return app


app = create_app()
