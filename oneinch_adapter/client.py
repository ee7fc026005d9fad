"""
1inch API Client

Async REST client for the 1inch aggregation service: quotes, swap
transactions, approvals, spot prices and token metadata.
"""

import asyncio
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional, Union

import httpx

from .config import OneInchConfig
from .errors import (
    DecodeError,
    InvalidParameter,
    OpaqueApiError,
    StructuredApiError,
    TransportError,
)
from .infra.tracing import CorrelationContext, log_with_correlation
from .types.chains import ApiService, ChainId, service_base_url
from .types.requests import (
    AllowanceRequest,
    ApiRequest,
    ApproveRequest,
    InfoRequest,
    LiquiditySourcesRequest,
    PriceRequest,
    QuoteRequest,
    SpenderRequest,
    SwapRequest,
    TokenListRequest,
)
from .types.responses import (
    AllowanceResponse,
    ApproveTxResponse,
    PriceResponse,
    ProtocolInfo,
    QuoteResponse,
    SpenderResponse,
    SwapResponse,
    TokenInfo,
    decode_protocol_list,
    decode_token_map,
)

logger = logging.getLogger(__name__)


class OneInchClient:
    """
    1inch REST API client

    Provides:
    - Swap quotes and swap transaction building
    - Allowance checks and approve transactions
    - Spot prices, token metadata, liquidity sources

    Every call is independent: no response cache, no retry, no state shared
    between calls beyond the pooled HTTP connection. One client can be used
    by many concurrent tasks.

    Usage:
        async with OneInchClient(api_key="...", default_chain_id=ChainId.ETHEREUM) as client:
            quote = await client.quote(QuoteRequest(src_token=usdc, dst_token=weth, amount="1000000"))
            print(quote.to_amount)

    Errors:
        InvalidParameter: request failed validation, nothing was sent
        TransportError: DNS/connection failure or timeout
        StructuredApiError / OpaqueApiError: non-2xx upstream response
        DecodeError: 2xx response that does not match the expected model
    """

    def __init__(
        self,
        config: Optional[OneInchConfig] = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        default_chain_id: Optional[Union[ChainId, int]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize 1inch API client

        Args:
            config: Full configuration (defaults to one built from environment)
            api_key: Overrides config.api_key
            base_url: Overrides config.base_url
            timeout: Overrides config.timeout (seconds, per request)
            default_chain_id: Overrides config.default_chain_id
            transport: Custom httpx transport (e.g. httpx.MockTransport in tests)
        """
        overrides: Dict[str, Any] = {}
        if api_key is not None:
            overrides["api_key"] = api_key
        if base_url is not None:
            overrides["base_url"] = base_url
        if timeout is not None:
            overrides["timeout"] = timeout
        if default_chain_id is not None:
            overrides["default_chain_id"] = default_chain_id

        if config is None:
            config = OneInchConfig(**overrides)
        elif overrides:
            config = replace(config, **overrides)

        self._config = config
        self._transport = transport
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def config(self) -> OneInchConfig:
        return self._config

    @property
    def default_chain_id(self) -> Optional[ChainId]:
        """Chain used when a request omits one"""
        return self._config.default_chain_id

    def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client with auth headers"""
        if self._client is None:
            headers = {
                "Accept": "application/json",
            }
            if self._config.api_key:
                headers["Authorization"] = f"Bearer {self._config.api_key}"

            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._config.timeout),
                headers=headers,
                transport=self._transport,
            )
        return self._client

    def _resolve_chain(self, request: ApiRequest) -> ChainId:
        chain = request.chain_id if request.chain_id is not None else self._config.default_chain_id
        if chain is None:
            raise InvalidParameter.missing("chain_id")
        return ChainId.parse(chain)

    def build_url(self, request: ApiRequest) -> str:
        """Fully qualified URL of a request, without the query string"""
        chain = self._resolve_chain(request)
        root = service_base_url(
            self._config.base_url,
            request.service,
            chain,
            self._config.api_version(request.service),
        )
        path = request.path
        return f"{root}/{path}" if path else root

    async def _request(self, request: ApiRequest) -> Any:
        """
        Send a GET request and return the decoded JSON body

        Raises:
            InvalidParameter: If no chain can be resolved
            TransportError: On connection failure or timeout
            StructuredApiError / OpaqueApiError: On non-2xx status
            DecodeError: If a 2xx body is not JSON
        """
        operation = request.operation
        url = self.build_url(request)
        params = request.to_params()
        client = self._get_client()

        with CorrelationContext(operation):
            log_with_correlation(logging.DEBUG, f"GET {url} params={params}", operation, log=logger)

            # httpx.Timeout bounds each phase; wait_for bounds the whole call
            try:
                response = await asyncio.wait_for(client.get(url, params=params), self._config.timeout)
            except (httpx.TimeoutException, asyncio.TimeoutError) as e:
                log_with_correlation(logging.WARNING, f"Timed out after {self._config.timeout}s", operation, log=logger)
                raise TransportError.timeout(url, self._config.timeout, e) from e
            except httpx.RequestError as e:
                log_with_correlation(logging.WARNING, f"Request error: {e!r}", operation, log=logger)
                raise TransportError.connection_failed(url, e) from e

            log_with_correlation(
                logging.DEBUG,
                f"HTTP {response.status_code}",
                operation,
                log=logger,
                status=response.status_code,
            )

            if not response.is_success:
                self._raise_api_error(response, operation)

            try:
                return response.json()
            except ValueError:
                raise DecodeError(operation, "<body>", "not valid JSON") from None

    @staticmethod
    def _raise_api_error(response: httpx.Response, operation: str) -> None:
        """Raise StructuredApiError when the body has the known shape, else OpaqueApiError"""
        status = response.status_code
        body = response.text

        try:
            payload = response.json()
        except ValueError:
            payload = None

        error = StructuredApiError.from_body(status, payload)
        if error is None:
            log_with_correlation(
                logging.WARNING, f"1inch API error: HTTP {status} - {body[:500]}", operation, log=logger
            )
            raise OpaqueApiError(status, body)

        log_with_correlation(
            logging.WARNING,
            f"1inch API error: HTTP {status} {error.error_code} - {error.description}",
            operation,
            log=logger,
        )
        raise error

    # =========================================================================
    # Swap API
    # =========================================================================

    async def quote(self, request: QuoteRequest) -> QuoteResponse:
        """Expected destination amount for swapping request.amount of src_token"""
        data = await self._request(request)
        return QuoteResponse.from_json(data, request.operation)

    async def swap(self, request: SwapRequest) -> SwapResponse:
        """
        Unsigned swap transaction (not signed or submitted)

        Raises:
            InvalidParameter: If the configured swap API is v6 or later and
                request.origin is not set
        """
        request.check_api_version(self._config.api_version(ApiService.SWAP))
        data = await self._request(request)
        return SwapResponse.from_json(data, request.operation)

    async def allowance(self, request: AllowanceRequest) -> AllowanceResponse:
        """Current allowance of request.owner_address for the router"""
        data = await self._request(request)
        return AllowanceResponse.from_json(data, request.operation)

    async def approve_transaction(self, request: ApproveRequest) -> ApproveTxResponse:
        """Unsigned approve() transaction for the router"""
        data = await self._request(request)
        return ApproveTxResponse.from_json(data, request.operation)

    async def spender(self, request: Optional[SpenderRequest] = None) -> SpenderResponse:
        """Router address that needs the allowance"""
        request = request or SpenderRequest()
        data = await self._request(request)
        return SpenderResponse.from_json(data, request.operation)

    async def tokens(self, request: Optional[TokenListRequest] = None) -> Dict[str, TokenInfo]:
        """Tokens the aggregator can route, keyed by address"""
        request = request or TokenListRequest()
        data = await self._request(request)
        return decode_token_map(data, request.operation)

    async def liquidity_sources(
        self,
        request: Optional[LiquiditySourcesRequest] = None,
    ) -> List[ProtocolInfo]:
        """Liquidity sources usable in QuoteRequest.protocols"""
        request = request or LiquiditySourcesRequest()
        data = await self._request(request)
        return decode_protocol_list(data, request.operation)

    # =========================================================================
    # Price / Token API
    # =========================================================================

    async def prices(self, request: Optional[PriceRequest] = None) -> PriceResponse:
        """Spot prices for request.tokens (or the whole whitelist)"""
        request = request or PriceRequest()
        data = await self._request(request)
        return PriceResponse.from_json(data, request.operation, currency=request.currency)

    async def token_info(self, request: InfoRequest) -> TokenInfo:
        """Metadata of a single token"""
        data = await self._request(request)
        return TokenInfo.from_json(data, request.operation)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    async def aclose(self):
        """Close HTTP client"""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "OneInchClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.aclose()

    def __repr__(self) -> str:
        return f"OneInchClient(base_url={self._config.base_url!r}, default_chain_id={self.default_chain_id!r})"
