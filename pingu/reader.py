"""Read-only market, funding, risk and pool queries. No signer required."""

import logging
from typing import Any

from pingu.client import PinguClient
from pingu.contracts.names import ContractName
from pingu.models.amounts import to_float
from pingu.models.common import BPS_DIVIDER
from pingu.models.market import MarketInfo, OpenInterest
from pingu.rpc.classifier import wrap_operation

logger = logging.getLogger(__name__)

# The capped EMA rate is an annualized bps value; funding settles every 8 h.
FUNDING_PERIODS_PER_YEAR = 365 * 3


class Reader:
    def __init__(self, client: PinguClient):
        self.client = client

    def _read(self, name: ContractName, fn: str, *args: Any, label: str) -> Any:
        return self.client.with_fallback(
            lambda: getattr(self.client.get_contract(name).functions, fn)(*args).call(),
            label=label,
        )

    # --- Markets ---

    def get_markets(self) -> list[MarketInfo]:
        """All listed markets with their parameters, in registry order."""
        with wrap_operation("get markets"):
            def fetch():
                store = self.client.get_contract(ContractName.MARKET_STORE)
                names = store.functions.getMarketList().call()
                return names, store.functions.getMany(names).call()

            names, raw_infos = self.client.with_fallback(fetch, label="get markets")
        return [MarketInfo.from_raw(m, raw) for m, raw in zip(names, raw_infos)]

    def get_market_list(self) -> list[str]:
        with wrap_operation("get market list"):
            return list(
                self._read(ContractName.MARKET_STORE, "getMarketList", label="get market list")
            )

    def get_market_info(self, market: str) -> MarketInfo:
        with wrap_operation("get market info"):
            raw = self._read(ContractName.MARKET_STORE, "get", market, label=f"get market {market}")
        return MarketInfo.from_raw(market, raw)

    def get_open_interest(self, market: str, asset: str | None = None) -> OpenInterest:
        """Open interest in the asset's scaled units."""
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get open interest"):
            def fetch():
                store = self.client.get_contract(ContractName.POSITION_STORE)
                oi_long = store.functions.getOILong(asset_address, market).call()
                oi_short = store.functions.getOIShort(asset_address, market).call()
                return oi_long, oi_short

            oi_long, oi_short = self.client.with_fallback(fetch, label="get open interest")
        return OpenInterest(long=int(oi_long), short=int(oi_short))

    # --- Funding ---

    def get_funding_rate(self, market: str, asset: str | None = None) -> float:
        """Last capped EMA funding rate as a percentage per 8-hour period."""
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get funding rate"):
            rate = self._read(
                ContractName.FUNDING_STORE,
                "getLastCappedEmaFundingRate",
                asset_address,
                market,
                label=f"get funding rate {market}",
            )
        return to_float(int(rate), 18) / BPS_DIVIDER / FUNDING_PERIODS_PER_YEAR * 100

    def get_real_time_funding_tracker(self, market: str, asset: str | None = None) -> int:
        """Funding tracker interpolated up to now, between on-chain updates."""
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get real-time funding tracker"):
            return int(
                self._read(
                    ContractName.FUNDING,
                    "getRealTimeFundingTracker",
                    asset_address,
                    market,
                    label="get real-time funding tracker",
                )
            )

    def get_accrued_funding(self, market: str, asset: str | None = None, intervals: int = 0) -> int:
        """Accrued funding increment from the EMA-based calculation."""
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get accrued funding"):
            result = self._read(
                ContractName.FUNDING,
                "getAccruedFundingV2",
                asset_address,
                market,
                intervals,
                label="get accrued funding",
            )
        return int(result[0])

    def get_funding_tracker(self, market: str, asset: str | None = None) -> int:
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get funding tracker"):
            return int(
                self._read(
                    ContractName.FUNDING_STORE,
                    "getFundingTracker",
                    asset_address,
                    market,
                    label="get funding tracker",
                )
            )

    def get_last_funding_update(self, market: str, asset: str | None = None) -> int:
        """Unix timestamp of the last on-chain funding update."""
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get last funding update"):
            return int(
                self._read(
                    ContractName.FUNDING_STORE,
                    "getLastUpdated",
                    asset_address,
                    market,
                    label="get last funding update",
                )
            )

    # --- Risk / pool ---

    def get_pool_balance(self, asset: str | None = None) -> float:
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get pool balance"):
            balance = self._read(
                ContractName.POOL_STORE, "getBalance", asset_address, label="get pool balance"
            )
        return to_float(balance, asset_cfg.decimals)

    def get_max_position_size(self, market: str, asset: str | None = None) -> float:
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get max position size"):
            max_size = self._read(
                ContractName.RISK_STORE,
                "getMaxPositionSize",
                market,
                asset_address,
                label="get max position size",
            )
        return to_float(max_size, asset_cfg.decimals)

    def get_max_oi(self, market: str, asset: str | None = None) -> float:
        asset_cfg = self.client.asset(asset)
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get max OI"):
            max_oi = self._read(
                ContractName.RISK_STORE, "getMaxOI", market, asset_address, label="get max OI"
            )
        return to_float(max_oi, asset_cfg.decimals)

    def get_global_upl(self, asset: str | None = None) -> int:
        """Global unrealized P&L of all traders against the pool, scaled."""
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get global UPL"):
            return int(
                self._read(ContractName.POOL, "getGlobalUPL", asset_address, label="get global UPL")
            )

    def get_pnl(
        self,
        market: str,
        is_long: bool,
        current_price: int,
        position_price: int,
        size: int,
        funding_tracker: int,
        asset: str | None = None,
    ) -> dict[str, int]:
        """On-chain P&L of a hypothetical position. Prices are 18-decimal."""
        asset_address = self.client.asset_address(asset)
        with wrap_operation("get PnL"):
            pnl, funding_fee = self._read(
                ContractName.POSITIONS,
                "getPnL",
                asset_address,
                market,
                is_long,
                current_price,
                position_price,
                size,
                funding_tracker,
                label="get PnL",
            )
        return {"pnl": int(pnl), "funding_fee": int(funding_fee)}
