"""
Chain and API routing for the 1inch aggregation service

Every upstream URL is ``{base_url}/{service prefix}/{version}/{chain_id}/...``.
"""

from enum import Enum, IntEnum
from typing import Optional, Union

from ..errors import InvalidParameter


class ChainId(IntEnum):
    """Networks supported by the aggregator"""
    ETHEREUM = 1
    OPTIMISM = 10
    BSC = 56
    GNOSIS = 100
    POLYGON = 137
    FANTOM = 250
    ZKSYNC = 324
    KLAYTN = 8217
    BASE = 8453
    ARBITRUM = 42161
    AVALANCHE = 43114
    LINEA = 59144
    AURORA = 1313161554

    @classmethod
    def parse(cls, value: Union["ChainId", int, str]) -> "ChainId":
        """
        Resolve a chain id from an enum member, an int or a numeric string

        Raises:
            InvalidParameter: If the id is not a supported network
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str) and value.strip().isdigit():
            value = int(value.strip())
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidParameter.invalid("chain_id", f"expected an integer chain id, got {value!r}")
        try:
            return cls(value)
        except ValueError:
            raise InvalidParameter.invalid("chain_id", f"unsupported chain id {value}") from None


class ApiService(Enum):
    """
    Upstream API families

    Value is the URL path prefix; default_version is used when the client
    configuration does not override it.
    """
    SWAP = "swap"
    PRICE = "price"
    TOKEN = "token"

    @property
    def default_version(self) -> str:
        return _DEFAULT_VERSIONS[self]


_DEFAULT_VERSIONS = {
    ApiService.SWAP: "v5.2",
    ApiService.PRICE: "v1.1",
    ApiService.TOKEN: "v1.2",
}

DEFAULT_BASE_URL = "https://api.1inch.dev"


def service_base_url(
    base_url: str,
    service: ApiService,
    chain_id: Union[ChainId, int],
    version: Optional[str] = None,
) -> str:
    """
    Build the chain-scoped root URL of a service

    Example:
        service_base_url("https://api.1inch.dev", ApiService.SWAP, ChainId.ETHEREUM)
        # "https://api.1inch.dev/swap/v5.2/1"
    """
    chain = ChainId.parse(chain_id)
    return f"{base_url.rstrip('/')}/{service.value}/{version or service.default_version}/{int(chain)}"
