"""
Request Tracing
Lightweight span tracing for surface round trips with HTTP header propagation.
"""

import contextvars
import time
import uuid
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any, AsyncGenerator

import structlog

logger: structlog.BoundLogger | None = None


def _get_logger() -> structlog.BoundLogger:
    """Get or create logger instance."""
    global logger
    if logger is None:
        logger = structlog.get_logger(__name__)
    return logger


# Context variables for trace propagation
_trace_id: contextvars.ContextVar[str] = contextvars.ContextVar("trace_id", default="")
_span_id: contextvars.ContextVar[str] = contextvars.ContextVar("span_id", default="")


@dataclass
class Span:
    """Represents a single traced operation."""

    trace_id: str
    span_id: str
    parent_id: str
    name: str
    service: str
    start_time: float
    end_time: float = 0.0
    duration: float = 0.0
    tags: dict[str, str] = field(default_factory=dict)
    error: Exception | None = None
    status_code: int = 200

    def finish(self) -> None:
        """Mark span as complete."""
        self.end_time = time.time()
        self.duration = self.end_time - self.start_time

    def set_error(self, error: Exception) -> None:
        """Record an error in the span."""
        self.error = error
        if self.status_code < 400:
            self.status_code = 599

    def set_status(self, code: int) -> None:
        """Set the status code."""
        self.status_code = code


class Tracer:
    """Creates spans and logs them on completion."""

    def __init__(self, service: str) -> None:
        self.service = service

    def start_span(self, name: str, **tags: str) -> Span:
        """Create a new span."""
        trace_id = _trace_id.get() or str(uuid.uuid4())
        parent_id = _span_id.get()
        span_id = str(uuid.uuid4())

        span = Span(
            trace_id=trace_id,
            span_id=span_id,
            parent_id=parent_id,
            name=name,
            service=self.service,
            start_time=time.time(),
            tags=tags,
        )

        # Set span in context
        _trace_id.set(trace_id)
        _span_id.set(span_id)

        return span

    def submit(self, span: Span) -> None:
        """Process completed span."""
        log = _get_logger()
        fields = {
            "trace_id": span.trace_id,
            "span_id": span.span_id,
            "operation": span.name,
            "duration_ms": span.duration * 1000,
            "service": span.service,
            "status_code": span.status_code,
            **span.tags,
        }

        if span.parent_id:
            fields["parent_id"] = span.parent_id

        if span.error:
            log.error("span_completed_with_error", error=str(span.error), **fields)
        elif span.duration > 1.0:
            log.warning("span_completed_slow", **fields)
        else:
            log.debug("span_completed", **fields)


# Global tracer instance
_tracer: Tracer | None = None


def init_tracer(service: str) -> Tracer:
    """Initialize global tracer."""
    global _tracer
    _tracer = Tracer(service)
    return _tracer


def get_tracer() -> Tracer:
    """Get global tracer instance."""
    if _tracer is None:
        raise RuntimeError("Tracer not initialized. Call init_tracer() first.")
    return _tracer


@asynccontextmanager
async def trace_operation_async(operation: str, **kwargs: Any) -> AsyncGenerator[Span | None, None]:
    """Async context manager for tracing operations. Yields None when tracing is off."""
    if _tracer is None:
        yield None
        return

    parent_span = _span_id.get()
    span = _tracer.start_span(operation, **{k: str(v) for k, v in kwargs.items()})
    try:
        yield span
    except Exception as e:
        span.set_error(e)
        raise
    finally:
        span.finish()
        _tracer.submit(span)
        _span_id.set(parent_span)


def inject_trace_context(headers: dict[str, str]) -> None:
    """Inject trace context into outgoing HTTP headers."""
    trace_id = _trace_id.get()
    span_id = _span_id.get()

    if trace_id:
        headers["x-trace-id"] = trace_id
    if span_id:
        headers["x-span-id"] = span_id
