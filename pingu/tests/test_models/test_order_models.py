"""Tests for order intents and decoded market/position/order records."""

import dataclasses

import pytest

from pingu.models.common import ADDRESS_ZERO, add_gas_buffer, calculate_leverage, safe_div
from pingu.models.market import MarketInfo, OpenInterest, feed_id_hex
from pingu.models.order import Order, OrderIntent, OrderType, Position
from pingu.tests.fakes import USDC, RawOrder, raw_market, raw_position


def _intent(**overrides) -> OrderIntent:
    fields = dict(
        market="ETH-USD",
        asset=USDC,
        is_long=True,
        margin=100_000_000,
        size=500_000_000,
    )
    fields.update(overrides)
    return OrderIntent(**fields)


class TestOrderIntent:
    def test_as_tuple_field_order(self):
        t = _intent(price=2000 * 10**18, order_type=OrderType.LIMIT, expiry=99).as_tuple()
        assert len(t) == 14
        assert t[0] == 0
        assert t[1] == ADDRESS_ZERO
        assert t[2] == USDC
        assert t[3] == "ETH-USD"
        assert t[4] == 100_000_000
        assert t[5] == 500_000_000
        assert t[6] == 2000 * 10**18
        assert t[8] is True
        assert t[9] == 1
        assert t[10] is False
        assert t[12] == 99

    def test_exit_order_is_reduce_only_opposite(self):
        main = _intent()
        tp = main.exit_order(2500 * 10**18, OrderType.LIMIT)
        assert tp.is_long is False
        assert tp.is_reduce_only is True
        assert tp.margin == 0
        assert tp.size == main.size
        assert tp.order_type == OrderType.LIMIT
        assert tp.price == 2500 * 10**18

    def test_immutable(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            _intent().size = 1


class TestRecords:
    def test_market_info_from_raw(self):
        info = MarketInfo.from_raw("ETH-USD", raw_market(max_leverage=50, fee=10))
        assert info.max_leverage == 50
        assert info.fee_bps == 10
        assert info.fee == pytest.approx(0.001)
        assert info.liq_threshold == pytest.approx(0.9)
        assert info.pyth_feed == "0x" + "ff" * 32

    def test_position_from_raw(self):
        p = Position.from_raw(raw_position(size=500_000_000, margin=100_000_000), "USDC")
        assert p.asset == "USDC"
        assert p.asset_address == USDC
        assert p.leverage == 5.0

    def test_order_from_raw(self):
        raw = RawOrder(
            orderId=7, user=ADDRESS_ZERO, asset=USDC, market="BTC-USD", margin=10, size=30,
            price=0, fee=0, isLong=False, orderType=2, isReduceOnly=True, timestamp=1,
            expiry=0, cancelOrderId=0,
        )
        o = Order.from_raw(raw, "USDC")
        assert o.order_id == 7
        assert o.order_type is OrderType.STOP
        assert o.leverage == 3.0

    def test_open_interest_total(self):
        assert OpenInterest(long=3, short=4).total == 7

    def test_feed_id_hex(self):
        assert feed_id_hex(b"\x01\x02") == "0x0102"
        assert feed_id_hex("abcd") == "0xabcd"
        assert feed_id_hex("0xabcd") == "0xabcd"


class TestCommonHelpers:
    def test_calculate_leverage(self):
        assert calculate_leverage(2_000, 1_000) == 2.0
        assert calculate_leverage(1_000, 3_000) == 0.333
        assert calculate_leverage(1_000, 0) == 0.0

    def test_safe_div(self):
        assert safe_div(7, 2) == 3
        assert safe_div(7, 0) == 0

    def test_gas_buffer(self):
        assert add_gas_buffer(100_000) == 120_000
        assert add_gas_buffer(7) == 8
