"""
Structured Logging Configuration
structlog over stdlib logging. Everything goes to stderr; stdout is left
to the CLI's JSON output.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger

# Libraries that log every request at INFO
NOISY_LOGGERS = ("httpx", "httpcore")


def _build_handler(json_logs: bool) -> logging.Handler:
    handler = logging.StreamHandler(sys.stderr)
    if json_logs:
        handler.setFormatter(jsonlogger.JsonFormatter("%(name)s %(levelname)s %(message)s"))
    else:
        handler.setFormatter(logging.Formatter("%(message)s"))
    return handler


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Configure structured logging for the client.

    Calling it again replaces the previous handler, so the level and format
    can be changed at runtime (the CLI does this after parsing flags).

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Emit one JSON object per line instead of console output
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.handlers = [_build_handler(json_logs)]
    root.setLevel(log_level)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(colors=False),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance (typically ``get_logger(__name__)``)."""
    return structlog.get_logger(name)


class LogContext:
    """
    Bind key/values to every log line emitted in scope.

    Bindings live in contextvars, so concurrent asyncio tasks keep their own.
    Leaving the scope restores whatever the keys were bound to before.
    """

    def __init__(self, **kwargs: Any):
        self.context = kwargs
        self._tokens: Any = None

    def __enter__(self) -> "LogContext":
        self._tokens = structlog.contextvars.bind_contextvars(**self.context)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.reset_contextvars(**self._tokens)
