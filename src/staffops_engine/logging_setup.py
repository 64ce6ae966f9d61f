"""Logging configuration."""

from __future__ import annotations

import logging

from staffops_engine.config import Settings, get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(settings: Settings | None = None) -> None:
    """Configure root logging for the engine.

    Library modules only create loggers via ``logging.getLogger(__name__)``;
    the hosting process calls this once at startup.
    """
    settings = settings or get_settings()
    level = logging.DEBUG if settings.debug else settings.log_level
    logging.basicConfig(level=level, format=LOG_FORMAT)
    logging.getLogger("staffops_engine").setLevel(level)
