"""
Response models for the 1inch API

Each model is decoded field by field from the upstream JSON. Unknown fields
are ignored; a missing or malformed required field raises DecodeError naming
the operation and the field.
"""

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, Optional, Tuple, Union

from ..errors import DecodeError, InvalidAmount
from .amount import Amount


# =============================================================================
# Field decoders
# =============================================================================

def _object(data: Any, operation: str, name: str = "<body>") -> dict:
    if not isinstance(data, dict):
        raise DecodeError(operation, name, "not a JSON object")
    return data


def _required(data: dict, key: str, operation: str, prefix: str = "") -> Any:
    if key not in data or data[key] is None:
        raise DecodeError(operation, f"{prefix}{key}")
    return data[key]


def _as_amount(value: Any, operation: str, name: str) -> Amount:
    # Integral JSON numbers are accepted, floats are not
    if isinstance(value, int) and not isinstance(value, bool):
        if value < 0:
            raise DecodeError(operation, name, "negative")
        return Amount(value)
    if not isinstance(value, str):
        raise DecodeError(operation, name, "not a decimal string")
    try:
        return Amount.parse(value, parameter=name)
    except InvalidAmount:
        raise DecodeError(operation, name, "not a valid amount") from None


def _as_str(value: Any, operation: str, name: str) -> str:
    if not isinstance(value, str):
        raise DecodeError(operation, name, "not a string")
    return value


def _as_int(value: Any, operation: str, name: str) -> int:
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str) and value.isascii() and value.isdigit():
        try:
            return int(value)
        except ValueError:
            # Past the interpreter's int-conversion digit limit
            pass
    raise DecodeError(operation, name, "not an integer")


def _optional_str(data: dict, key: str) -> Optional[str]:
    value = data.get(key)
    return value if isinstance(value, str) else None


def _optional_bool(data: dict, key: str) -> Optional[bool]:
    value = data.get(key)
    return value if isinstance(value, bool) else None


# =============================================================================
# Shared models
# =============================================================================

@dataclass(frozen=True)
class TokenInfo:
    """Token metadata as reported by the aggregator"""
    address: str
    symbol: str
    decimals: int
    name: Optional[str] = None
    logo_uri: Optional[str] = None
    tags: Tuple[str, ...] = ()
    eip2612: Optional[bool] = None
    is_fot: Optional[bool] = None

    def __str__(self) -> str:
        return self.symbol

    @classmethod
    def from_json(cls, data: Any, operation: str, prefix: str = "") -> "TokenInfo":
        data = _object(data, operation, prefix.rstrip(".") or "<body>")
        tags = []
        raw_tags = data.get("tags")
        if isinstance(raw_tags, list):
            for tag in raw_tags:
                # Token API v1.2 wraps tags as {"value": ..., "provider": ...}
                if isinstance(tag, dict):
                    tag = tag.get("value")
                if isinstance(tag, str):
                    tags.append(tag)

        return cls(
            address=_as_str(_required(data, "address", operation, prefix), operation, f"{prefix}address"),
            symbol=_as_str(_required(data, "symbol", operation, prefix), operation, f"{prefix}symbol"),
            decimals=_as_int(_required(data, "decimals", operation, prefix), operation, f"{prefix}decimals"),
            name=_optional_str(data, "name"),
            logo_uri=_optional_str(data, "logoURI"),
            tags=tuple(tags),
            eip2612=_optional_bool(data, "eip2612"),
            is_fot=_optional_bool(data, "isFoT"),
        )


@dataclass(frozen=True)
class SelectedProtocol:
    """One hop of a route: which liquidity source handles which share"""
    name: str
    part: float
    from_token_address: str
    to_token_address: str

    @classmethod
    def from_json(cls, data: Any, operation: str) -> "SelectedProtocol":
        data = _object(data, operation, "protocols")
        part = _required(data, "part", operation, "protocols.")
        if isinstance(part, bool) or not isinstance(part, (int, float)):
            raise DecodeError(operation, "protocols.part", "not a number")
        return cls(
            name=_as_str(_required(data, "name", operation, "protocols."), operation, "protocols.name"),
            part=float(part),
            from_token_address=_as_str(
                _required(data, "fromTokenAddress", operation, "protocols."), operation, "protocols.fromTokenAddress"
            ),
            to_token_address=_as_str(
                _required(data, "toTokenAddress", operation, "protocols."), operation, "protocols.toTokenAddress"
            ),
        )


Route = Tuple[Tuple[Tuple[SelectedProtocol, ...], ...], ...]


def _decode_route(value: Any, operation: str) -> Optional[Route]:
    """protocols is a list of paths, each a list of steps, each a list of hops"""
    if value is None:
        return None
    if not isinstance(value, list):
        raise DecodeError(operation, "protocols", "not a list")
    paths = []
    for path in value:
        if not isinstance(path, list):
            raise DecodeError(operation, "protocols", "not a nested list")
        steps = []
        for step in path:
            if not isinstance(step, list):
                raise DecodeError(operation, "protocols", "not a nested list")
            steps.append(tuple(SelectedProtocol.from_json(hop, operation) for hop in step))
        paths.append(tuple(steps))
    return tuple(paths)


def _optional_token(data: dict, key: str, operation: str) -> Optional[TokenInfo]:
    if data.get(key) is None:
        return None
    return TokenInfo.from_json(data[key], operation, prefix=f"{key}.")


def _destination_amount(data: dict, operation: str) -> Amount:
    # v5.x reports toAmount, v6 renamed it to dstAmount
    if data.get("toAmount") is not None:
        return _as_amount(data["toAmount"], operation, "toAmount")
    if data.get("dstAmount") is not None:
        return _as_amount(data["dstAmount"], operation, "dstAmount")
    raise DecodeError(operation, "toAmount")


# =============================================================================
# Swap API responses
# =============================================================================

@dataclass(frozen=True)
class QuoteResponse:
    """
    Quote result

    Attributes:
        to_amount: Expected destination amount (raw units)
        from_token: Source token info (when includeTokensInfo)
        to_token: Destination token info (when includeTokensInfo)
        protocols: Route (when includeProtocols)
        gas: Estimated gas units (when includeGas)
    """
    to_amount: Amount
    from_token: Optional[TokenInfo] = None
    to_token: Optional[TokenInfo] = None
    protocols: Optional[Route] = None
    gas: Optional[int] = None

    @classmethod
    def from_json(cls, data: Any, operation: str = "quote") -> "QuoteResponse":
        data = _object(data, operation)
        gas = data.get("gas")
        if gas is None:
            gas = data.get("estimatedGas")
        return cls(
            to_amount=_destination_amount(data, operation),
            from_token=_optional_token(data, "fromToken", operation),
            to_token=_optional_token(data, "toToken", operation),
            protocols=_decode_route(data.get("protocols"), operation),
            gas=_as_int(gas, operation, "gas") if gas is not None else None,
        )


@dataclass(frozen=True)
class SwapTransaction:
    """Unsigned transaction built by the aggregator"""
    from_address: str
    to: str
    data: str
    value: Amount
    gas_price: Amount
    gas: int

    @classmethod
    def from_json(cls, data: Any, operation: str) -> "SwapTransaction":
        data = _object(data, operation, "tx")
        p = "tx."
        return cls(
            from_address=_as_str(_required(data, "from", operation, p), operation, "tx.from"),
            to=_as_str(_required(data, "to", operation, p), operation, "tx.to"),
            data=_as_str(_required(data, "data", operation, p), operation, "tx.data"),
            value=_as_amount(_required(data, "value", operation, p), operation, "tx.value"),
            gas_price=_as_amount(_required(data, "gasPrice", operation, p), operation, "tx.gasPrice"),
            gas=_as_int(_required(data, "gas", operation, p), operation, "tx.gas"),
        )


@dataclass(frozen=True)
class SwapResponse:
    to_amount: Amount
    transaction: SwapTransaction
    from_token: Optional[TokenInfo] = None
    to_token: Optional[TokenInfo] = None
    protocols: Optional[Route] = None

    @classmethod
    def from_json(cls, data: Any, operation: str = "swap") -> "SwapResponse":
        data = _object(data, operation)
        return cls(
            to_amount=_destination_amount(data, operation),
            transaction=SwapTransaction.from_json(_required(data, "tx", operation), operation),
            from_token=_optional_token(data, "fromToken", operation),
            to_token=_optional_token(data, "toToken", operation),
            protocols=_decode_route(data.get("protocols"), operation),
        )


@dataclass(frozen=True)
class AllowanceResponse:
    allowance: Amount

    @classmethod
    def from_json(cls, data: Any, operation: str = "allowance") -> "AllowanceResponse":
        data = _object(data, operation)
        return cls(allowance=_as_amount(_required(data, "allowance", operation), operation, "allowance"))


@dataclass(frozen=True)
class ApproveTxResponse:
    """Unsigned approve() call for the router"""
    data: str
    to: str
    value: Amount
    gas_price: Optional[Amount] = None

    @classmethod
    def from_json(cls, data: Any, operation: str = "approve") -> "ApproveTxResponse":
        data = _object(data, operation)
        gas_price = data.get("gasPrice")
        return cls(
            data=_as_str(_required(data, "data", operation), operation, "data"),
            to=_as_str(_required(data, "to", operation), operation, "to"),
            value=_as_amount(_required(data, "value", operation), operation, "value"),
            gas_price=_as_amount(gas_price, operation, "gasPrice") if gas_price is not None else None,
        )


@dataclass(frozen=True)
class SpenderResponse:
    address: str

    @classmethod
    def from_json(cls, data: Any, operation: str = "spender") -> "SpenderResponse":
        data = _object(data, operation)
        return cls(address=_as_str(_required(data, "address", operation), operation, "address"))


@dataclass(frozen=True)
class ProtocolInfo:
    """Liquidity source known to the aggregator"""
    id: str
    title: Optional[str] = None
    img: Optional[str] = None
    img_color: Optional[str] = None

    @classmethod
    def from_json(cls, data: Any, operation: str = "liquidity_sources") -> "ProtocolInfo":
        data = _object(data, operation, "protocols")
        return cls(
            id=_as_str(_required(data, "id", operation, "protocols."), operation, "protocols.id"),
            title=_optional_str(data, "title"),
            img=_optional_str(data, "img"),
            img_color=_optional_str(data, "img_color"),
        )


def decode_token_map(data: Any, operation: str = "tokens") -> Dict[str, TokenInfo]:
    """Decode ``{"tokens": {address: TokenInfo}}``"""
    data = _object(data, operation)
    tokens = _object(_required(data, "tokens", operation), operation, "tokens")
    return {
        address: TokenInfo.from_json(info, operation, prefix=f"tokens.{address}.")
        for address, info in tokens.items()
    }


def decode_protocol_list(data: Any, operation: str = "liquidity_sources") -> list:
    """Decode ``{"protocols": [ProtocolInfo, ...]}``"""
    data = _object(data, operation)
    protocols = _required(data, "protocols", operation)
    if not isinstance(protocols, list):
        raise DecodeError(operation, "protocols", "not a list")
    return [ProtocolInfo.from_json(item, operation) for item in protocols]


# =============================================================================
# Price API response
# =============================================================================

Price = Union[Amount, Decimal]


@dataclass(frozen=True)
class PriceResponse:
    """
    Spot prices keyed by token address

    Without a currency prices are wei of the native coin (Amount); with a
    currency they are Decimal values in that currency.
    """
    prices: Dict[str, Price] = field(default_factory=dict)
    currency: Optional[str] = None

    def get(self, address: str) -> Optional[Price]:
        """Case-insensitive lookup by token address"""
        if address in self.prices:
            return self.prices[address]
        lowered = address.lower()
        for key, value in self.prices.items():
            if key.lower() == lowered:
                return value
        return None

    def __len__(self) -> int:
        return len(self.prices)

    @classmethod
    def from_json(cls, data: Any, operation: str = "price", currency: Optional[str] = None) -> "PriceResponse":
        data = _object(data, operation)
        prices: Dict[str, Price] = {}
        for address, raw in data.items():
            if currency is None:
                prices[address] = _as_amount(raw, operation, address)
                continue
            if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
                raise DecodeError(operation, address, "not a price")
            try:
                prices[address] = Decimal(str(raw))
            except InvalidOperation:
                raise DecodeError(operation, address, "not a price") from None
        return cls(prices=prices, currency=currency)
