"""
Error definitions for the 1inch adapter
"""

from .exceptions import (
    ErrorCode,
    OneInchError,
    InvalidParameter,
    InvalidAmount,
    ConfigurationError,
    TransportError,
    ApiError,
    OpaqueApiError,
    StructuredApiError,
    DecodeError,
)

__all__ = [
    "ErrorCode",
    "OneInchError",
    "InvalidParameter",
    "InvalidAmount",
    "ConfigurationError",
    "TransportError",
    "ApiError",
    "OpaqueApiError",
    "StructuredApiError",
    "DecodeError",
]
