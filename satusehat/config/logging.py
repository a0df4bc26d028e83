"""
Logging setup for applications using the SATUSEHAT client.

Library modules only call get_logger(); nothing is configured on import.
An application that wants structured output calls configure_logging()
once at startup, typically with values from Settings.
"""

import logging
import sys

import structlog

# Third-party loggers that are noisy below WARNING
_QUIET_LOGGERS = ("aiohttp", "asyncio")


def _renderer(json_format: bool) -> list:
    if json_format:
        return [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    return [structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())]


def configure_logging(level: str = "INFO", json_format: bool = False) -> None:
    """
    Route structlog through the standard library logging module.

    Args:
        level: Log level name; unknown names fall back to INFO
        json_format: Emit one JSON object per line instead of console output
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso"),
            *_renderer(json_format),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structlog logger, usually named after the calling module."""
    return structlog.get_logger(name)
