"""Market data models decoded from MarketStore, PositionStore and PoolStore reads."""

from dataclasses import dataclass
from typing import Any

from pingu.models.common import BPS_DIVIDER


@dataclass(frozen=True)
class MarketInfo:
    market: str
    name: str
    category: str
    chainlink_feed: str
    max_leverage: int
    max_deviation: float
    fee_bps: int
    liq_threshold: float
    funding_factor: float
    min_order_age: int
    pyth_max_age: int
    pyth_feed: str  # 0x-prefixed bytes32
    allow_chainlink_execution: bool
    is_reduce_only: bool

    @property
    def fee(self) -> float:
        return self.fee_bps / BPS_DIVIDER

    @classmethod
    def from_raw(cls, market: str, raw: Any) -> "MarketInfo":
        """Build from a decoded MarketStore struct (attribute access)."""
        return cls(
            market=market,
            name=raw.name,
            category=raw.category,
            chainlink_feed=raw.chainlinkFeed,
            max_leverage=int(raw.maxLeverage),
            max_deviation=int(raw.maxDeviation) / BPS_DIVIDER,
            fee_bps=int(raw.fee),
            liq_threshold=int(raw.liqThreshold) / BPS_DIVIDER,
            funding_factor=int(raw.fundingFactor) / BPS_DIVIDER,
            min_order_age=int(raw.minOrderAge),
            pyth_max_age=int(raw.pythMaxAge),
            pyth_feed=feed_id_hex(raw.pythFeed),
            allow_chainlink_execution=bool(raw.allowChainlinkExecution),
            is_reduce_only=bool(raw.isReduceOnly),
        )


@dataclass(frozen=True)
class OpenInterest:
    long: int
    short: int

    @property
    def total(self) -> int:
        return self.long + self.short


@dataclass(frozen=True)
class PoolBalance:
    withdrawable: float
    locked: float
    total: float


def feed_id_hex(feed: bytes | str) -> str:
    if isinstance(feed, (bytes, bytearray)):
        return "0x" + bytes(feed).hex()
    return feed if feed.startswith("0x") else f"0x{feed}"
