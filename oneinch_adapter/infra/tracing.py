"""
Correlation-id log tracing

Every client call runs inside a CorrelationContext so that all log lines it
emits share one id. The id lives in a contextvar, so concurrent asyncio tasks
each see their own.
"""

import contextvars
import logging
import uuid
from typing import Optional

logger = logging.getLogger(__name__)

_correlation_id: contextvars.ContextVar[Optional[str]] = contextvars.ContextVar(
    'correlation_id', default=None
)


def generate_correlation_id() -> str:
    """Generate a short unique id for request tracing."""
    return uuid.uuid4().hex[:12]


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: Optional[str]) -> contextvars.Token:
    """Set the correlation ID in context. Returns token for reset."""
    return _correlation_id.set(correlation_id)


class CorrelationContext:
    """
    Context manager for correlation ID scoping.

    Usage:
        with CorrelationContext("quote") as cid:
            log_with_correlation(logging.DEBUG, "sending", "quote")
    """

    def __init__(self, prefix: Optional[str] = None):
        self.correlation_id = generate_correlation_id()
        if prefix:
            self.correlation_id = f"{prefix}_{self.correlation_id}"
        self._token: Optional[contextvars.Token] = None

    def __enter__(self) -> str:
        self._token = set_correlation_id(self.correlation_id)
        return self.correlation_id

    def __exit__(self, exc_type, exc_val, exc_tb):
        if self._token is not None:
            _correlation_id.reset(self._token)
            self._token = None


def log_with_correlation(
    level: int,
    message: str,
    operation_name: str,
    log: Optional[logging.Logger] = None,
    **extra
):
    """
    Log message prefixed with the correlation ID and operation name.

    Args:
        level: Logging level (logging.INFO, logging.WARNING, etc.)
        message: Log message
        operation_name: Client operation being executed
        log: Logger to emit on (defaults to this module's logger)
        **extra: Additional context fields for structured logging systems
    """
    cid = get_correlation_id()

    parts = []
    if cid:
        parts.append(f"[{cid}]")
    parts.append(f"[{operation_name}]")
    parts.append(message)

    extra_context = {
        "correlation_id": cid,
        "operation": operation_name,
        **extra
    }

    (log or logger).log(level, " ".join(parts), extra=extra_context)
