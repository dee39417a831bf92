"""Order intents and the on-chain position/order records read back."""

from dataclasses import dataclass, replace
from enum import IntEnum
from typing import Any

from pingu.models.common import ADDRESS_ZERO, calculate_leverage


class OrderType(IntEnum):
    MARKET = 0
    LIMIT = 1
    STOP = 2


@dataclass(frozen=True)
class OrderIntent:
    """One order to submit. Never mutated; adjustments build a new intent."""

    market: str
    asset: str  # checksummed asset address
    is_long: bool
    margin: int
    size: int
    price: int = 0  # 18-decimal price, 0 for market orders
    order_type: OrderType = OrderType.MARKET
    is_reduce_only: bool = False
    expiry: int = 0
    cancel_order_id: int = 0
    fee: int = 0

    def as_tuple(self) -> tuple:
        """Struct tuple in the Orders contract field order."""
        return (
            0,  # orderId, assigned on-chain
            ADDRESS_ZERO,  # user, set to msg.sender on-chain
            self.asset,
            self.market,
            self.margin,
            self.size,
            self.price,
            self.fee,
            self.is_long,
            int(self.order_type),
            self.is_reduce_only,
            0,  # timestamp
            self.expiry,
            self.cancel_order_id,
        )

    def exit_order(self, price: int, order_type: OrderType) -> "OrderIntent":
        """Reduce-only opposite-side order of the same size (take-profit / stop-loss)."""
        return replace(
            self,
            is_long=not self.is_long,
            margin=0,
            price=price,
            order_type=order_type,
            is_reduce_only=True,
            expiry=0,
            cancel_order_id=0,
        )


@dataclass(frozen=True)
class Position:
    user: str
    asset: str  # configured asset name, or the address if unknown
    asset_address: str
    market: str
    is_long: bool
    size: int
    margin: int
    funding_tracker: int
    price: int
    timestamp: int

    @property
    def leverage(self) -> float:
        return calculate_leverage(self.size, self.margin)

    @classmethod
    def from_raw(cls, raw: Any, asset_name: str) -> "Position":
        return cls(
            user=raw.user,
            asset=asset_name,
            asset_address=raw.asset,
            market=raw.market,
            is_long=bool(raw.isLong),
            size=int(raw.size),
            margin=int(raw.margin),
            funding_tracker=int(raw.fundingTracker),
            price=int(raw.price),
            timestamp=int(raw.timestamp),
        )


@dataclass(frozen=True)
class Order:
    order_id: int
    user: str
    asset: str
    asset_address: str
    market: str
    margin: int
    size: int
    price: int
    fee: int
    is_long: bool
    order_type: OrderType
    is_reduce_only: bool
    timestamp: int
    expiry: int
    cancel_order_id: int

    @property
    def leverage(self) -> float:
        return calculate_leverage(self.size, self.margin)

    @classmethod
    def from_raw(cls, raw: Any, asset_name: str) -> "Order":
        return cls(
            order_id=int(raw.orderId),
            user=raw.user,
            asset=asset_name,
            asset_address=raw.asset,
            market=raw.market,
            margin=int(raw.margin),
            size=int(raw.size),
            price=int(raw.price),
            fee=int(raw.fee),
            is_long=bool(raw.isLong),
            order_type=OrderType(int(raw.orderType)),
            is_reduce_only=bool(raw.isReduceOnly),
            timestamp=int(raw.timestamp),
            expiry=int(raw.expiry),
            cancel_order_id=int(raw.cancelOrderId),
        )
