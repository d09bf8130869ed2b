"""
Centralized logging configuration.

Application loggers follow LOG_LEVEL; database and server access logs are
kept at WARNING so ledger adjustments stay readable.
"""

import logging

from agrichain.core.config import settings


def configure_logging(level: str | None = None) -> None:
    log_level = (level or settings.log_level).upper()
    resolved = getattr(logging, log_level, logging.INFO)

    logging.basicConfig(
        level=resolved,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )

    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("passlib").setLevel(logging.WARNING)

    logging.getLogger("agrichain").setLevel(resolved)
    logging.getLogger(__name__).info("Logging configured at level: %s", log_level)
