"""
Infrastructure layer for the 1inch adapter

Provides:
- CorrelationContext: per-call correlation ids for log tracing
"""

from .tracing import (
    CorrelationContext,
    generate_correlation_id,
    get_correlation_id,
    set_correlation_id,
    log_with_correlation,
)

__all__ = [
    "CorrelationContext",
    "generate_correlation_id",
    "get_correlation_id",
    "set_correlation_id",
    "log_with_correlation",
]
