"""Structured logging configuration (structlog)."""
import logging
import sys
from typing import Optional

import structlog

from catalog_admin.config import get_settings


def configure_logging(level_name: Optional[str] = None) -> None:
    """
    Configure structlog and standard logging for the application.
    level_name overrides LOG_LEVEL (the CLI passes WARNING unless --verbose).
    """
    settings = get_settings()
    level = getattr(logging, (level_name or settings.log_level).upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer() if settings.app_env == "local" else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Return a bound logger for the given module name."""
    return structlog.get_logger(name)
