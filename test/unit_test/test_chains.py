"""
Test Chains Module

Tests for chain id parsing and chain-scoped service URLs.
"""

import sys
from pathlib import Path

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))


def test_chain_id_values():
    """Test ChainId numeric values"""
    from oneinch_adapter.types import ChainId

    print("Testing ChainId values...")

    assert ChainId.ETHEREUM == 1
    assert ChainId.BSC == 56
    assert ChainId.ZKSYNC == 324
    assert ChainId.ARBITRUM == 42161
    assert ChainId.AURORA == 1313161554
    assert len(ChainId) == 13

    print("  ChainId values: PASSED")


def test_chain_id_parse():
    """Enum members, ints and numeric strings are accepted"""
    from oneinch_adapter.types import ChainId

    print("Testing ChainId.parse...")

    assert ChainId.parse(ChainId.BASE) is ChainId.BASE
    assert ChainId.parse(1) is ChainId.ETHEREUM
    assert ChainId.parse("137") is ChainId.POLYGON
    assert ChainId.parse(" 56 ") is ChainId.BSC

    print("  ChainId.parse: PASSED")


def test_chain_id_parse_rejects():
    """Unknown ids and non-integers raise InvalidParameter"""
    from oneinch_adapter.types import ChainId
    from oneinch_adapter.errors import InvalidParameter

    print("Testing ChainId.parse rejections...")

    for bad in (999, 0, "eth", "", None, True, 1.0):
        try:
            ChainId.parse(bad)
            assert False, f"Should have raised for {bad!r}"
        except InvalidParameter as e:
            assert e.parameter == "chain_id"

    print("  ChainId.parse rejections: PASSED")


def test_default_versions():
    """Test per-service default API versions"""
    from oneinch_adapter.types import ApiService

    print("Testing ApiService defaults...")

    assert ApiService.SWAP.default_version == "v5.2"
    assert ApiService.PRICE.default_version == "v1.1"
    assert ApiService.TOKEN.default_version == "v1.2"

    print("  ApiService defaults: PASSED")


def test_service_base_url():
    """Test chain-scoped service URLs"""
    from oneinch_adapter.types import ApiService, ChainId, DEFAULT_BASE_URL, service_base_url

    print("Testing service_base_url...")

    assert service_base_url(DEFAULT_BASE_URL, ApiService.SWAP, ChainId.ETHEREUM) == \
        "https://api.1inch.dev/swap/v5.2/1"
    # Trailing slash on the base is dropped
    assert service_base_url("https://proxy/", ApiService.PRICE, 56) == "https://proxy/price/v1.1/56"
    assert service_base_url(DEFAULT_BASE_URL, ApiService.SWAP, "8453", "v6.0") == \
        "https://api.1inch.dev/swap/v6.0/8453"
    assert service_base_url(DEFAULT_BASE_URL, ApiService.TOKEN, ChainId.AURORA) == \
        "https://api.1inch.dev/token/v1.2/1313161554"

    print("  service_base_url: PASSED")


def main():
    """Run all chain tests"""
    print("=" * 60)
    print("1inch Adapter Chain Routing Tests")
    print("=" * 60)

    tests = [
        test_chain_id_values,
        test_chain_id_parse,
        test_chain_id_parse_rejects,
        test_default_versions,
        test_service_base_url,
    ]

    passed = 0
    failed = 0

    for test in tests:
        try:
            test()
            passed += 1
        except Exception as e:
            print(f"  FAILED: {e}")
            failed += 1

    print("=" * 60)
    print(f"Results: {passed} passed, {failed} failed")
    print("=" * 60)

    return failed == 0


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
