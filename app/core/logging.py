from __future__ import annotations

import logging

from app.core.settings import Settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s %(message)s"


def configure_logging(settings: Settings) -> None:
    level_name = (settings.log_level or "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    logging.basicConfig(level=level, format=LOG_FORMAT)

    # uvicorn.access stands in for a per-request access line.
    for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
        logging.getLogger(name).setLevel(level)

    # httpx logs every request URL at INFO, and ours carry the API key.
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))
