"""Structured logging configuration."""
import logging
import sys

import structlog

from portal_analytics.config import settings


def setup_logging(level: str | None = None) -> None:
    """
    Configure structured logging with structlog.

    Log records go to stderr so that the status lines the CLI prints on
    stdout are never interleaved with them.

    Args:
        level: Override for settings.log_level
    """
    # Determine log level
    log_level = getattr(logging, (level or settings.log_level).upper(), logging.INFO)

    # Events carry keyword context only, no positional args or stack info
    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
    ]

    # JSON for production and CI log collectors, console for development
    if settings.app_env in ("production", "ci"):
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure standard logging
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=log_level,
        force=True,
    )
