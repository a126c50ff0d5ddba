from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.responses import Response
from starlette.staticfiles import StaticFiles
from starlette.types import Scope

logger = logging.getLogger(__name__)


class FrontendStaticFiles(StaticFiles):
    """Static files where unknown paths fall back to ``index.html``."""

    async def get_response(self, path: str, scope: Scope) -> Response:
        try:
            return await super().get_response(path, scope)
        except StarletteHTTPException as exc:
            if exc.status_code != 404:
                raise
            return await super().get_response("index.html", scope)


def mount_frontend(app: FastAPI, directory: str) -> None:
    """Serve the bundled frontend at ``/``. Must run after the API routers."""
    static_dir = Path(directory)
    if not static_dir.is_dir():
        logger.warning("Static directory %s not found; frontend disabled", static_dir)
        return

    app.mount("/", FrontendStaticFiles(directory=static_dir, html=True), name="frontend")
