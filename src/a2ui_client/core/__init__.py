"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .errors import A2UIError, DecodeError, TransportError, ResolutionError
from .logging_config import configure_logging, get_logger, LogContext
from .json import loads_object, safe_json_dumps, validate_json_depth, JSONParseError
from .tracing import init_tracer, get_tracer, trace_operation_async, inject_trace_context


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Errors
    "A2UIError",
    "DecodeError",
    "TransportError",
    "ResolutionError",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "loads_object",
    "safe_json_dumps",
    "validate_json_depth",
    "JSONParseError",
    # Tracing
    "init_tracer",
    "get_tracer",
    "trace_operation_async",
    "inject_trace_context",
]
