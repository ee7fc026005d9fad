"""
Type definitions for the 1inch adapter
"""

from .amount import Amount
from .chains import ChainId, ApiService, DEFAULT_BASE_URL, service_base_url
from .requests import (
    ApiRequest,
    QuoteRequest,
    SwapRequest,
    AllowanceRequest,
    ApproveRequest,
    SpenderRequest,
    TokenListRequest,
    LiquiditySourcesRequest,
    PriceRequest,
    InfoRequest,
)
from .responses import (
    TokenInfo,
    SelectedProtocol,
    QuoteResponse,
    SwapResponse,
    SwapTransaction,
    AllowanceResponse,
    ApproveTxResponse,
    SpenderResponse,
    ProtocolInfo,
    PriceResponse,
    decode_token_map,
    decode_protocol_list,
)

__all__ = [
    # Amount
    "Amount",
    # Routing
    "ChainId",
    "ApiService",
    "DEFAULT_BASE_URL",
    "service_base_url",
    # Requests
    "ApiRequest",
    "QuoteRequest",
    "SwapRequest",
    "AllowanceRequest",
    "ApproveRequest",
    "SpenderRequest",
    "TokenListRequest",
    "LiquiditySourcesRequest",
    "PriceRequest",
    "InfoRequest",
    # Responses
    "TokenInfo",
    "SelectedProtocol",
    "QuoteResponse",
    "SwapResponse",
    "SwapTransaction",
    "AllowanceResponse",
    "ApproveTxResponse",
    "SpenderResponse",
    "ProtocolInfo",
    "PriceResponse",
    "decode_token_map",
    "decode_protocol_list",
]
