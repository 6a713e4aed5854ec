"""
Logging configuration helpers.
It sets up process-wide logging once so the dispatcher and error handlers share one format.
Keeping these helpers isolated reduces duplication and keeps response modules focused on envelope logic.
"""

from __future__ import annotations

import logging

from api_response.common.settings import get_settings

_LOGGING_CONFIGURED = False


def configure_logging() -> None:
    """Configure process-wide logging from environment settings."""

    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    settings = get_settings()
    level = getattr(logging, settings.LOG_LEVEL, logging.INFO)

    logging.basicConfig(
        level=level,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
    _LOGGING_CONFIGURED = True
