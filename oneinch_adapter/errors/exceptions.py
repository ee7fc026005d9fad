"""
Exception definitions for the 1inch adapter
"""

from enum import Enum
from typing import Any, List, Optional


class ErrorCode(Enum):
    """
    Unified error codes for 1inch operations

    1xxx - Client-side validation / configuration errors
    2xxx - Transport errors
    3xxx - Upstream API errors (non-2xx)
    4xxx - Response decoding errors
    """
    # Validation errors (never sent over the wire)
    INVALID_PARAMETER = "1001"
    INVALID_AMOUNT = "1002"

    # Configuration errors
    CONFIG_INVALID = "1101"
    CONFIG_MISSING = "1102"

    # Transport errors
    TRANSPORT_FAILED = "2001"
    TRANSPORT_TIMEOUT = "2002"

    # Upstream API errors
    API_OPAQUE = "3001"
    API_STRUCTURED = "3002"

    # Decode errors
    DECODE_FAILED = "4001"


class OneInchError(Exception):
    """
    Base exception for all 1inch adapter errors

    Attributes:
        message: Human-readable error message
        code: Error code for programmatic handling
        original_error: The underlying exception if any
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        original_error: Optional[Exception] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.original_error = original_error
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code.value}, message={self.message!r})"


class InvalidParameter(OneInchError):
    """
    Client-side validation failure

    Raised when:
    - A required request field is missing or empty
    - A numeric option is out of range
    - A chain id is not supported

    The request is never sent.
    """

    def __init__(
        self,
        message: str,
        parameter: Optional[str] = None,
        reason: Optional[str] = None,
        code: ErrorCode = ErrorCode.INVALID_PARAMETER,
    ):
        super().__init__(
            message,
            code,
            details={"parameter": parameter, "reason": reason},
        )
        self.parameter = parameter
        self.reason = reason

    @classmethod
    def missing(cls, parameter: str) -> "InvalidParameter":
        return cls(
            f"Missing required parameter: {parameter}",
            parameter=parameter,
            reason="missing",
        )

    @classmethod
    def out_of_range(cls, parameter: str, value: Any, low: Any, high: Any) -> "InvalidParameter":
        return cls(
            f"Invalid {parameter} value {value!r}: must be between {low} and {high}",
            parameter=parameter,
            reason="out_of_range",
        )

    @classmethod
    def invalid(cls, parameter: str, reason: str) -> "InvalidParameter":
        return cls(
            f"Invalid parameter '{parameter}': {reason}",
            parameter=parameter,
            reason=reason,
        )


class InvalidAmount(InvalidParameter):
    """Token amount is not a canonical non-negative decimal integer"""

    def __init__(self, value: Any, reason: str, parameter: Optional[str] = "amount"):
        super().__init__(
            f"Invalid amount {value!r}: {reason}",
            parameter=parameter,
            reason=reason,
            code=ErrorCode.INVALID_AMOUNT,
        )
        self.value = value
        self.details["value"] = value


class ConfigurationError(OneInchError):
    """
    Configuration-related errors

    Raised when:
    - Required configuration is missing
    - Configuration values are invalid
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.CONFIG_INVALID,
    ):
        super().__init__(message, code)

    @classmethod
    def missing(cls, param: str) -> "ConfigurationError":
        return cls(f"Missing required configuration: {param}", ErrorCode.CONFIG_MISSING)

    @classmethod
    def invalid(cls, param: str, reason: str) -> "ConfigurationError":
        return cls(f"Invalid configuration '{param}': {reason}", ErrorCode.CONFIG_INVALID)


class TransportError(OneInchError):
    """
    Network-level failure: DNS, connection refused, timeout

    Raised when the request never produced an HTTP response.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.TRANSPORT_FAILED,
        original_error: Optional[Exception] = None,
        url: Optional[str] = None,
    ):
        super().__init__(
            message,
            code,
            original_error=original_error,
            details={"url": url} if url else None,
        )
        self.url = url

    @property
    def is_timeout(self) -> bool:
        return self.code == ErrorCode.TRANSPORT_TIMEOUT

    @classmethod
    def connection_failed(cls, url: str, error: Exception) -> "TransportError":
        cause = str(error) or error.__class__.__name__
        return cls(
            f"Request to {url} failed: {cause}",
            ErrorCode.TRANSPORT_FAILED,
            original_error=error,
            url=url,
        )

    @classmethod
    def timeout(cls, url: str, timeout_seconds: float, error: Optional[Exception] = None) -> "TransportError":
        return cls(
            f"Request to {url} timed out after {timeout_seconds}s",
            ErrorCode.TRANSPORT_TIMEOUT,
            original_error=error,
            url=url,
        )


class ApiError(OneInchError):
    """
    Upstream answered with a non-2xx status

    Subclassed by OpaqueApiError and StructuredApiError; catch this one to
    handle both.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode,
        status: int,
        details: Optional[dict] = None,
    ):
        details = dict(details or {})
        details["status"] = status
        super().__init__(message, code, details=details)
        self.status = status


class OpaqueApiError(ApiError):
    """Non-2xx response whose body is not in the known error shape"""

    def __init__(self, status: int, body: str):
        super().__init__(
            f"Upstream responded with HTTP {status}",
            ErrorCode.API_OPAQUE,
            status,
            details={"body": body},
        )
        self.body = body


class StructuredApiError(ApiError):
    """
    Non-2xx response carrying the aggregator's structured error body

    Attributes:
        status: HTTP status of the response
        error_code: Upstream error identifier (the ``error`` field)
        description: Upstream human-readable description
        request_id: Upstream request id, useful when reporting issues
        meta: Additional metadata entries (``{"type": ..., "value": ...}``)
    """

    def __init__(
        self,
        status: int,
        error_code: str,
        description: Optional[str] = None,
        request_id: Optional[str] = None,
        meta: Optional[List[dict]] = None,
    ):
        text = f"{error_code}: {description}" if description else error_code
        super().__init__(
            f"Upstream error (HTTP {status}) {text}",
            ErrorCode.API_STRUCTURED,
            status,
            details={
                "error": error_code,
                "description": description,
                "request_id": request_id,
            },
        )
        self.error_code = error_code
        self.description = description
        self.request_id = request_id
        self.meta = meta or []

    @classmethod
    def from_body(cls, status: int, body: Any) -> Optional["StructuredApiError"]:
        """
        Build from a decoded JSON body, or return None when the body is not
        in the known shape (``error`` string plus integer ``statusCode``).
        """
        if not isinstance(body, dict):
            return None
        error = body.get("error")
        status_code = body.get("statusCode")
        if not isinstance(error, str) or not error:
            return None
        if not isinstance(status_code, int) or isinstance(status_code, bool):
            return None

        description = body.get("description")
        if description is None:
            description = body.get("message")
        if description is not None and not isinstance(description, str):
            description = str(description)

        request_id = body.get("requestId")
        meta = body.get("meta")
        if not isinstance(meta, list):
            meta = []

        return cls(
            status,
            error,
            description=description,
            request_id=request_id if isinstance(request_id, str) else None,
            meta=[m for m in meta if isinstance(m, dict)],
        )


class DecodeError(OneInchError):
    """
    2xx response whose body does not match the expected model

    Attributes:
        operation: Client operation that was decoding (e.g. "quote")
        field: Missing or malformed upstream field name
    """

    def __init__(self, operation: str, field: str, reason: str = "missing"):
        super().__init__(
            f"Failed to decode '{operation}' response: field '{field}' is {reason}",
            ErrorCode.DECODE_FAILED,
            details={"operation": operation, "field": field, "reason": reason},
        )
        self.operation = operation
        self.field = field
        self.reason = reason
