"""
Request parameter objects for the 1inch API

Each request validates its fields on construction and renders a deterministic
query string (keys sorted). Options left as None are omitted from the query;
upstream applies its own defaults.
"""

import math
from collections.abc import Sequence as SequenceABC
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import ClassVar, List, Optional, Sequence, Tuple, Union

import httpx

from ..errors import InvalidParameter
from .amount import Amount
from .chains import ApiService, ChainId

Number = Union[int, float, Decimal]
AmountLike = Union[Amount, int, str]
TokenList = Union[str, Sequence[str]]

PERCENT_MIN = 0
PERCENT_MAX = 100

# Characters that would change the URL when a value lands in the path
_URL_DELIMITERS = ("/", "?", "#")

# First swap API major version that requires ``origin``
SWAP_ORIGIN_MIN_VERSION = 6


# =============================================================================
# Validation helpers
# =============================================================================

def _set(obj, name: str, value) -> None:
    object.__setattr__(obj, name, value)


def _require_address(name: str, value: Optional[str]) -> str:
    if value is None:
        raise InvalidParameter.missing(name)
    if not isinstance(value, str):
        raise InvalidParameter.invalid(name, f"expected a string, got {type(value).__name__}")
    if not value.strip():
        raise InvalidParameter.missing(name)
    _check_path_safe(name, value)
    return value


def _check_path_safe(name: str, value: str) -> None:
    for char in _URL_DELIMITERS:
        if char in value:
            raise InvalidParameter.invalid(name, f"must not contain {char!r}")


def _optional_string(name: str, value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    return _require_address(name, value)


def _optional_chain(value) -> Optional[ChainId]:
    if value is None:
        return None
    return ChainId.parse(value)


def _require_amount(name: str, value: Optional[AmountLike]) -> Amount:
    if value is None or value == "":
        raise InvalidParameter.missing(name)
    return Amount.of(value, parameter=name)


def _optional_amount(name: str, value: Optional[AmountLike]) -> Optional[Amount]:
    if value is None:
        return None
    return Amount.of(value, parameter=name)


def _check_percent(name: str, value: Optional[Number]) -> Optional[Decimal]:
    """Validate a percentage in [0, 100] and normalise it to Decimal"""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, (int, float, Decimal)):
        raise InvalidParameter.invalid(name, f"expected a number, got {type(value).__name__}")
    if isinstance(value, float) and not math.isfinite(value):
        raise InvalidParameter.invalid(name, "must be a finite number")
    try:
        number = Decimal(str(value))
    except InvalidOperation:
        raise InvalidParameter.invalid(name, f"not a number: {value!r}") from None
    if not number.is_finite():
        raise InvalidParameter.invalid(name, "must be a finite number")
    if number < PERCENT_MIN or number > PERCENT_MAX:
        raise InvalidParameter.out_of_range(name, value, PERCENT_MIN, PERCENT_MAX)
    return number


def _check_count(name: str, value: Optional[int]) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidParameter.invalid(name, f"expected an integer, got {type(value).__name__}")
    if value < 0:
        raise InvalidParameter.invalid(name, "must not be negative")
    return value


def _check_flag(name: str, value: Optional[bool]) -> Optional[bool]:
    if value is None:
        return None
    if not isinstance(value, bool):
        raise InvalidParameter.invalid(name, f"expected a bool, got {type(value).__name__}")
    return value


def _token_list(name: str, value: Optional[TokenList]) -> Optional[Tuple[str, ...]]:
    """Accept a comma-separated string or a sequence of names/addresses"""
    if value is None:
        return None
    if isinstance(value, str):
        items = [item.strip() for item in value.split(",")]
    elif isinstance(value, SequenceABC):
        items = list(value)
    else:
        raise InvalidParameter.invalid(
            name, f"expected a comma-separated string or a sequence, got {type(value).__name__}"
        )
    if not items:
        raise InvalidParameter.invalid(name, "must not be empty")
    for item in items:
        if not isinstance(item, str) or not item.strip():
            raise InvalidParameter.invalid(name, "entries must be non-empty strings")
        _check_path_safe(name, item)
    return tuple(items)


def _major_version(version: str) -> int:
    """Major number of an API version ("v6.0" -> 6); unparseable versions count as 0"""
    head = version.strip().lstrip("vV").split(".", 1)[0]
    return int(head) if head.isdigit() else 0


def _format_number(value: Decimal) -> str:
    """Render without exponent or trailing zeros: 1.50 -> "1.5", 100 -> "100" """
    return format(value.normalize(), "f")


def _format_flag(value: bool) -> str:
    return "true" if value else "false"


# =============================================================================
# Base
# =============================================================================

class ApiRequest:
    """
    Common behaviour of request objects

    Subclasses set ``operation`` (used in logs and decode errors) and
    ``service``, and implement ``to_params`` / ``path``.
    """
    operation: ClassVar[str] = ""
    service: ClassVar[ApiService] = ApiService.SWAP

    chain_id: Optional[ChainId]

    @property
    def path(self) -> str:
        """Path relative to the chain-scoped service root"""
        raise NotImplementedError

    def _params(self) -> List[Tuple[str, Optional[str]]]:
        return []

    def to_params(self) -> List[Tuple[str, str]]:
        """Wire-named query parameters, unset options dropped, sorted by key"""
        return sorted((key, value) for key, value in self._params() if value is not None)

    def to_query_string(self) -> str:
        return str(httpx.QueryParams(self.to_params()))


def _route_params(req) -> List[Tuple[str, Optional[str]]]:
    """Options shared by quote and swap"""
    return [
        ("src", req.src_token),
        ("dst", req.dst_token),
        ("amount", str(req.amount)),
        ("fee", _format_number(req.fee) if req.fee is not None else None),
        ("protocols", ",".join(req.protocols) if req.protocols else None),
        ("excludedProtocols", ",".join(req.excluded_protocols) if req.excluded_protocols else None),
        ("gasPrice", str(req.gas_price) if req.gas_price is not None else None),
        ("complexityLevel", str(req.complexity_level) if req.complexity_level is not None else None),
        ("connectorTokens", ",".join(req.connector_tokens) if req.connector_tokens else None),
        ("parts", str(req.parts) if req.parts is not None else None),
        ("mainRouteParts", str(req.main_route_parts) if req.main_route_parts is not None else None),
        ("gasLimit", str(req.gas_limit) if req.gas_limit is not None else None),
        ("includeTokensInfo", _format_flag(req.include_tokens_info) if req.include_tokens_info is not None else None),
        ("includeProtocols", _format_flag(req.include_protocols) if req.include_protocols is not None else None),
        ("includeGas", _format_flag(req.include_gas) if req.include_gas is not None else None),
    ]


def _validate_route(req) -> None:
    _set(req, "chain_id", _optional_chain(req.chain_id))
    _set(req, "src_token", _require_address("src_token", req.src_token))
    _set(req, "dst_token", _require_address("dst_token", req.dst_token))
    _set(req, "amount", _require_amount("amount", req.amount))
    _set(req, "fee", _check_percent("fee", req.fee))
    _set(req, "protocols", _token_list("protocols", req.protocols))
    _set(req, "excluded_protocols", _token_list("excluded_protocols", req.excluded_protocols))
    _set(req, "gas_price", _optional_amount("gas_price", req.gas_price))
    _set(req, "complexity_level", _check_count("complexity_level", req.complexity_level))
    _set(req, "connector_tokens", _token_list("connector_tokens", req.connector_tokens))
    _set(req, "parts", _check_count("parts", req.parts))
    _set(req, "main_route_parts", _check_count("main_route_parts", req.main_route_parts))
    _set(req, "gas_limit", _check_count("gas_limit", req.gas_limit))
    _set(req, "include_tokens_info", _check_flag("include_tokens_info", req.include_tokens_info))
    _set(req, "include_protocols", _check_flag("include_protocols", req.include_protocols))
    _set(req, "include_gas", _check_flag("include_gas", req.include_gas))


# =============================================================================
# Swap API requests
# =============================================================================

@dataclass(frozen=True)
class QuoteRequest(ApiRequest):
    """
    Parameters of a price quote

    Usage:
        req = QuoteRequest(
            src_token="0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48",
            dst_token="0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2",
            amount="1000000",
            chain_id=ChainId.ETHEREUM,
        )
    """
    operation: ClassVar[str] = "quote"

    src_token: str
    dst_token: str
    amount: AmountLike
    chain_id: Optional[ChainId] = None

    fee: Optional[Number] = None
    protocols: Optional[TokenList] = None
    excluded_protocols: Optional[TokenList] = None
    gas_price: Optional[AmountLike] = None
    complexity_level: Optional[int] = None
    connector_tokens: Optional[TokenList] = None
    parts: Optional[int] = None
    main_route_parts: Optional[int] = None
    gas_limit: Optional[int] = None
    include_tokens_info: Optional[bool] = None
    include_protocols: Optional[bool] = None
    include_gas: Optional[bool] = None

    def __post_init__(self):
        _validate_route(self)

    @property
    def path(self) -> str:
        return "quote"

    def _params(self):
        return _route_params(self)


@dataclass(frozen=True)
class SwapRequest(ApiRequest):
    """
    Parameters of a swap transaction build

    ``from_address`` is the wallet that will send the transaction; upstream
    refuses to build a swap without it. From swap API v6 on, ``origin`` (the
    EOA that initiates the transaction) is required as well; ``use_permit2``
    is a v6 option.
    """
    operation: ClassVar[str] = "swap"

    src_token: str
    dst_token: str
    amount: AmountLike
    from_address: str
    chain_id: Optional[ChainId] = None

    slippage: Optional[Number] = None
    fee: Optional[Number] = None
    protocols: Optional[TokenList] = None
    excluded_protocols: Optional[TokenList] = None
    gas_price: Optional[AmountLike] = None
    complexity_level: Optional[int] = None
    connector_tokens: Optional[TokenList] = None
    parts: Optional[int] = None
    main_route_parts: Optional[int] = None
    gas_limit: Optional[int] = None
    include_tokens_info: Optional[bool] = None
    include_protocols: Optional[bool] = None
    include_gas: Optional[bool] = None

    permit: Optional[str] = None
    receiver: Optional[str] = None
    referrer: Optional[str] = None
    disable_estimate: Optional[bool] = None
    allow_partial_fill: Optional[bool] = None

    origin: Optional[str] = None
    use_permit2: Optional[bool] = None

    def __post_init__(self):
        _validate_route(self)
        _set(self, "from_address", _require_address("from_address", self.from_address))
        _set(self, "slippage", _check_percent("slippage", self.slippage))
        _set(self, "permit", _optional_string("permit", self.permit))
        _set(self, "receiver", _optional_string("receiver", self.receiver))
        _set(self, "referrer", _optional_string("referrer", self.referrer))
        _set(self, "disable_estimate", _check_flag("disable_estimate", self.disable_estimate))
        _set(self, "allow_partial_fill", _check_flag("allow_partial_fill", self.allow_partial_fill))
        _set(self, "origin", _optional_string("origin", self.origin))
        _set(self, "use_permit2", _check_flag("use_permit2", self.use_permit2))

    @property
    def path(self) -> str:
        return "swap"

    def check_api_version(self, version: str) -> None:
        """
        Validate version-dependent fields against the swap API version in use

        Raises:
            InvalidParameter: If version is v6 or later and origin is missing
        """
        if _major_version(version) >= SWAP_ORIGIN_MIN_VERSION and self.origin is None:
            raise InvalidParameter.missing("origin")

    def _params(self):
        return _route_params(self) + [
            ("from", self.from_address),
            ("slippage", _format_number(self.slippage) if self.slippage is not None else None),
            ("permit", self.permit),
            ("receiver", self.receiver),
            ("referrer", self.referrer),
            ("disableEstimate", _format_flag(self.disable_estimate) if self.disable_estimate is not None else None),
            ("allowPartialFill", _format_flag(self.allow_partial_fill) if self.allow_partial_fill is not None else None),
            ("origin", self.origin),
            ("usePermit2", _format_flag(self.use_permit2) if self.use_permit2 is not None else None),
        ]


@dataclass(frozen=True)
class AllowanceRequest(ApiRequest):
    """
    Allowance granted by owner_address to spender_address for token_address

    Upstream measures the allowance against its router, so spender_address is
    validated but not sent; pass the address returned by the spender endpoint.
    """
    operation: ClassVar[str] = "allowance"

    token_address: str
    owner_address: str
    spender_address: str
    chain_id: Optional[ChainId] = None

    def __post_init__(self):
        _set(self, "chain_id", _optional_chain(self.chain_id))
        _set(self, "token_address", _require_address("token_address", self.token_address))
        _set(self, "owner_address", _require_address("owner_address", self.owner_address))
        _set(self, "spender_address", _require_address("spender_address", self.spender_address))

    @property
    def path(self) -> str:
        return "approve/allowance"

    def _params(self):
        return [
            ("tokenAddress", self.token_address),
            ("walletAddress", self.owner_address),
        ]


@dataclass(frozen=True)
class ApproveRequest(ApiRequest):
    """Approval transaction for token_address; amount None means unlimited"""
    operation: ClassVar[str] = "approve"

    token_address: str
    chain_id: Optional[ChainId] = None
    amount: Optional[AmountLike] = None

    def __post_init__(self):
        _set(self, "chain_id", _optional_chain(self.chain_id))
        _set(self, "token_address", _require_address("token_address", self.token_address))
        _set(self, "amount", _optional_amount("amount", self.amount))

    @property
    def path(self) -> str:
        return "approve/transaction"

    def _params(self):
        return [
            ("tokenAddress", self.token_address),
            ("amount", str(self.amount) if self.amount is not None else None),
        ]


@dataclass(frozen=True)
class SpenderRequest(ApiRequest):
    """Router address that must be approved before swapping"""
    operation: ClassVar[str] = "spender"

    chain_id: Optional[ChainId] = None

    def __post_init__(self):
        _set(self, "chain_id", _optional_chain(self.chain_id))

    @property
    def path(self) -> str:
        return "approve/spender"


@dataclass(frozen=True)
class TokenListRequest(ApiRequest):
    operation: ClassVar[str] = "tokens"

    chain_id: Optional[ChainId] = None

    def __post_init__(self):
        _set(self, "chain_id", _optional_chain(self.chain_id))

    @property
    def path(self) -> str:
        return "tokens"


@dataclass(frozen=True)
class LiquiditySourcesRequest(ApiRequest):
    operation: ClassVar[str] = "liquidity_sources"

    chain_id: Optional[ChainId] = None

    def __post_init__(self):
        _set(self, "chain_id", _optional_chain(self.chain_id))

    @property
    def path(self) -> str:
        return "liquidity-sources"


# =============================================================================
# Price / Token API requests
# =============================================================================

@dataclass(frozen=True)
class PriceRequest(ApiRequest):
    """
    Spot prices

    Without tokens, upstream returns prices for its whole whitelist. Without
    currency, prices are denominated in the native coin's wei.
    """
    operation: ClassVar[str] = "price"
    service: ClassVar[ApiService] = ApiService.PRICE

    chain_id: Optional[ChainId] = None
    tokens: Optional[TokenList] = None
    currency: Optional[str] = None

    def __post_init__(self):
        _set(self, "chain_id", _optional_chain(self.chain_id))
        _set(self, "tokens", _token_list("tokens", self.tokens))
        currency = _optional_string("currency", self.currency)
        _set(self, "currency", currency.upper() if currency else None)

    @property
    def path(self) -> str:
        return ",".join(self.tokens) if self.tokens else ""

    def _params(self):
        return [("currency", self.currency)]


@dataclass(frozen=True)
class InfoRequest(ApiRequest):
    """Metadata of a single token"""
    operation: ClassVar[str] = "info"
    service: ClassVar[ApiService] = ApiService.TOKEN

    token_address: str
    chain_id: Optional[ChainId] = None

    def __post_init__(self):
        _set(self, "chain_id", _optional_chain(self.chain_id))
        _set(self, "token_address", _require_address("token_address", self.token_address))

    @property
    def path(self) -> str:
        return f"custom/{self.token_address}"
