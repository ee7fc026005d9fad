"""
Unit tests for response decoding
"""

import unittest
from decimal import Decimal

from oneinch_adapter.types import (
    Amount,
    QuoteResponse,
    SwapResponse,
    AllowanceResponse,
    ApproveTxResponse,
    SpenderResponse,
    PriceResponse,
    TokenInfo,
    decode_token_map,
    decode_protocol_list,
)
from oneinch_adapter.errors import DecodeError


USDC = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
WETH = "0xC02aaA39b223FE8D0A0e5C4F27eAD9083C756Cc2"
ROUTER = "0x1111111254eeb25477b68fb85ed929f73a960582"
WALLET = "0x1234567890123456789012345678901234567890"


def token_json(address=USDC, symbol="USDC", decimals=6, **extra) -> dict:
    data = {"address": address, "symbol": symbol, "decimals": decimals}
    data.update(extra)
    return data


def swap_json(**overrides) -> dict:
    tx = {
        "from": WALLET,
        "to": ROUTER,
        "data": "0x12aa3caf",
        "value": "0",
        "gasPrice": "30000000000",
        "gas": 210000,
    }
    tx.update(overrides.pop("tx", {}))
    data = {"toAmount": "500000000000000", "tx": tx}
    data.update(overrides)
    return data


class TestQuoteResponse(unittest.TestCase):
    """Tests for QuoteResponse.from_json"""

    def test_minimal(self):
        quote = QuoteResponse.from_json({"toAmount": "500000000000000"})
        self.assertEqual(quote.to_amount, Amount.parse("500000000000000"))
        self.assertIsNone(quote.from_token)
        self.assertIsNone(quote.protocols)
        self.assertIsNone(quote.gas)

    def test_dst_amount_fallback(self):
        quote = QuoteResponse.from_json({"dstAmount": "42"})
        self.assertEqual(quote.to_amount, Amount(42))

    def test_missing_destination_amount(self):
        with self.assertRaises(DecodeError) as ctx:
            QuoteResponse.from_json({})
        self.assertEqual(ctx.exception.operation, "quote")
        self.assertEqual(ctx.exception.field, "toAmount")

    def test_invalid_amount(self):
        for bad in ("12a", "-1", "1.5", 1.5, True, [], {}):
            with self.subTest(bad=bad):
                with self.assertRaises(DecodeError) as ctx:
                    QuoteResponse.from_json({"toAmount": bad})
                self.assertEqual(ctx.exception.field, "toAmount")

    def test_unknown_fields_ignored(self):
        quote = QuoteResponse.from_json({"toAmount": "1", "somethingNew": {"nested": True}})
        self.assertEqual(quote.to_amount, Amount(1))

    def test_full_response(self):
        hop = {"name": "UNISWAP_V3", "part": 100, "fromTokenAddress": USDC, "toTokenAddress": WETH}
        quote = QuoteResponse.from_json({
            "toAmount": "500000000000000",
            "fromToken": token_json(name="USD Coin", logoURI="https://tokens/usdc.png", tags=["tokens", "PEG:USD"]),
            "toToken": token_json(WETH, "WETH", 18),
            "protocols": [[[hop]]],
            "gas": 180000,
        })

        self.assertEqual(quote.from_token.symbol, "USDC")
        self.assertEqual(quote.from_token.decimals, 6)
        self.assertEqual(quote.from_token.name, "USD Coin")
        self.assertEqual(quote.from_token.tags, ("tokens", "PEG:USD"))
        self.assertEqual(quote.to_token.address, WETH)
        self.assertEqual(quote.gas, 180000)

        selected = quote.protocols[0][0][0]
        self.assertEqual(selected.name, "UNISWAP_V3")
        self.assertEqual(selected.part, 100.0)
        self.assertEqual(selected.from_token_address, USDC)

    def test_oversized_integer_string(self):
        """Digit strings past the int conversion limit are decode errors"""
        with self.assertRaises(DecodeError) as ctx:
            QuoteResponse.from_json({"toAmount": "1", "gas": "9" * 5000})
        self.assertEqual(ctx.exception.field, "gas")

        with self.assertRaises(DecodeError) as ctx:
            TokenInfo.from_json(token_json(decimals="9" * 5000), "info")
        self.assertEqual(ctx.exception.field, "decimals")

    def test_estimated_gas_alias(self):
        self.assertEqual(QuoteResponse.from_json({"toAmount": "1", "estimatedGas": 150000}).gas, 150000)

    def test_bad_token_info(self):
        with self.assertRaises(DecodeError) as ctx:
            QuoteResponse.from_json({"toAmount": "1", "fromToken": {"address": USDC, "decimals": 6}})
        self.assertEqual(ctx.exception.field, "fromToken.symbol")

    def test_bad_route(self):
        with self.assertRaises(DecodeError) as ctx:
            QuoteResponse.from_json({"toAmount": "1", "protocols": [[[{"name": "X"}]]]})
        self.assertEqual(ctx.exception.field, "protocols.part")

        with self.assertRaises(DecodeError):
            QuoteResponse.from_json({"toAmount": "1", "protocols": "UNISWAP"})

    def test_non_object_body(self):
        for body in (None, [], "ok", 1):
            with self.subTest(body=body):
                with self.assertRaises(DecodeError) as ctx:
                    QuoteResponse.from_json(body)
                self.assertEqual(ctx.exception.field, "<body>")


class TestSwapResponse(unittest.TestCase):
    """Tests for SwapResponse.from_json"""

    def test_decode(self):
        swap = SwapResponse.from_json(swap_json())
        self.assertEqual(swap.to_amount, Amount.parse("500000000000000"))
        self.assertEqual(swap.transaction.from_address, WALLET)
        self.assertEqual(swap.transaction.to, ROUTER)
        self.assertEqual(swap.transaction.data, "0x12aa3caf")
        self.assertEqual(swap.transaction.value, Amount(0))
        self.assertEqual(swap.transaction.gas_price, Amount(30000000000))
        self.assertEqual(swap.transaction.gas, 210000)

    def test_missing_tx(self):
        data = swap_json()
        del data["tx"]
        with self.assertRaises(DecodeError) as ctx:
            SwapResponse.from_json(data)
        self.assertEqual(ctx.exception.operation, "swap")
        self.assertEqual(ctx.exception.field, "tx")

    def test_missing_tx_field(self):
        data = swap_json()
        del data["tx"]["gas"]
        with self.assertRaises(DecodeError) as ctx:
            SwapResponse.from_json(data)
        self.assertEqual(ctx.exception.field, "tx.gas")

    def test_string_gas_accepted(self):
        swap = SwapResponse.from_json(swap_json(tx={"gas": "210000"}))
        self.assertEqual(swap.transaction.gas, 210000)


class TestApprovalResponses(unittest.TestCase):
    """Tests for allowance, approve and spender responses"""

    def test_allowance(self):
        self.assertEqual(AllowanceResponse.from_json({"allowance": "0"}).allowance, Amount(0))
        max_uint = str(2 ** 256 - 1)
        self.assertEqual(AllowanceResponse.from_json({"allowance": max_uint}).allowance.value, 2 ** 256 - 1)

        with self.assertRaises(DecodeError) as ctx:
            AllowanceResponse.from_json({})
        self.assertEqual((ctx.exception.operation, ctx.exception.field), ("allowance", "allowance"))

    def test_approve(self):
        tx = ApproveTxResponse.from_json({"data": "0x095ea7b3", "to": USDC, "value": "0", "gasPrice": "1000"})
        self.assertEqual(tx.to, USDC)
        self.assertEqual(tx.value, Amount(0))
        self.assertEqual(tx.gas_price, Amount(1000))

        self.assertIsNone(ApproveTxResponse.from_json({"data": "0x", "to": USDC, "value": "0"}).gas_price)

    def test_spender(self):
        self.assertEqual(SpenderResponse.from_json({"address": ROUTER}).address, ROUTER)
        with self.assertRaises(DecodeError):
            SpenderResponse.from_json({"address": 1})


class TestMetadataResponses(unittest.TestCase):
    """Tests for token, liquidity source and price decoding"""

    def test_token_info_wrapped_tags(self):
        info = TokenInfo.from_json(
            token_json(tags=[{"value": "tokens", "provider": "1inch"}, "native"], eip2612=True, isFoT=False),
            "info",
        )
        self.assertEqual(info.tags, ("tokens", "native"))
        self.assertTrue(info.eip2612)
        self.assertFalse(info.is_fot)
        self.assertEqual(str(info), "USDC")

    def test_token_map(self):
        tokens = decode_token_map({"tokens": {USDC: token_json(), WETH: token_json(WETH, "WETH", 18)}})
        self.assertEqual(set(tokens), {USDC, WETH})
        self.assertEqual(tokens[WETH].decimals, 18)

        with self.assertRaises(DecodeError) as ctx:
            decode_token_map({"tokens": {USDC: {"address": USDC, "symbol": "USDC"}}})
        self.assertEqual(ctx.exception.field, f"tokens.{USDC}.decimals")

    def test_protocol_list(self):
        protocols = decode_protocol_list({
            "protocols": [
                {"id": "UNISWAP_V3", "title": "Uniswap V3", "img": "https://img/uni.png", "img_color": "#ff007a"},
                {"id": "CURVE"},
            ]
        })
        self.assertEqual([p.id for p in protocols], ["UNISWAP_V3", "CURVE"])
        self.assertEqual(protocols[0].title, "Uniswap V3")
        self.assertIsNone(protocols[1].title)

        with self.assertRaises(DecodeError):
            decode_protocol_list({"protocols": {"id": "CURVE"}})

    def test_prices_in_wei(self):
        prices = PriceResponse.from_json({USDC: "420000000000000", WETH: "1000000000000000000"})
        self.assertEqual(len(prices), 2)
        self.assertIsNone(prices.currency)
        self.assertEqual(prices.get(USDC), Amount(420000000000000))
        self.assertEqual(prices.get(WETH.lower()), Amount(10 ** 18))
        self.assertIsNone(prices.get(ROUTER))

    def test_prices_in_currency(self):
        prices = PriceResponse.from_json({USDC: "0.9998", WETH: 3150.25}, currency="USD")
        self.assertEqual(prices.currency, "USD")
        self.assertEqual(prices.get(USDC), Decimal("0.9998"))
        self.assertEqual(prices.get(WETH), Decimal("3150.25"))

        with self.assertRaises(DecodeError) as ctx:
            PriceResponse.from_json({USDC: "n/a"}, currency="USD")
        self.assertEqual(ctx.exception.field, USDC)


if __name__ == "__main__":
    unittest.main()
