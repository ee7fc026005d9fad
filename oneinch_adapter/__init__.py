"""
oneinch_adapter - Async client for the 1inch aggregation API

Provides typed operations for:
- Swap quotes and swap transaction building
- Token allowance checks and approve transactions
- Spot prices
- Token and liquidity-source metadata
"""

from .client import OneInchClient
from .config import OneInchConfig, LoggingConfig, setup_logging
from .types import (
    Amount,
    ChainId,
    ApiService,
    # Requests
    QuoteRequest,
    SwapRequest,
    AllowanceRequest,
    ApproveRequest,
    SpenderRequest,
    TokenListRequest,
    LiquiditySourcesRequest,
    PriceRequest,
    InfoRequest,
    # Responses
    QuoteResponse,
    SwapResponse,
    SwapTransaction,
    AllowanceResponse,
    ApproveTxResponse,
    SpenderResponse,
    PriceResponse,
    TokenInfo,
    ProtocolInfo,
    SelectedProtocol,
)
from .errors import (
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
    # Client
    "OneInchClient",
    "OneInchConfig",
    "LoggingConfig",
    "setup_logging",
    # Types
    "Amount",
    "ChainId",
    "ApiService",
    "QuoteRequest",
    "SwapRequest",
    "AllowanceRequest",
    "ApproveRequest",
    "SpenderRequest",
    "TokenListRequest",
    "LiquiditySourcesRequest",
    "PriceRequest",
    "InfoRequest",
    "QuoteResponse",
    "SwapResponse",
    "SwapTransaction",
    "AllowanceResponse",
    "ApproveTxResponse",
    "SpenderResponse",
    "PriceResponse",
    "TokenInfo",
    "ProtocolInfo",
    "SelectedProtocol",
    # Errors
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

__version__ = "0.1.0"
